"""NLP utilities for lightweight, rule-based text classification.

Module scope:
- Task-type classification of decomposed subtasks (`task_classifier`).
"""
