"""Prompting package.

This package contains deterministic prompt-construction helpers used by the goal
decomposer and the report handler. It does not perform model invocation or
response parsing.
"""
