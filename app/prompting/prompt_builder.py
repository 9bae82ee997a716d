"""Prompt assembly helpers for goal decomposition and report generation.

This module only builds prompt strings. Model invocation, response parsing and
error handling happen outside this module.

Design constraints:
    - Deterministic construction for identical inputs.
    - No hidden side effects (no I/O, no global state mutation).

Prompt safety model:
    - User text and insights are interpolated as raw strings.
    - Output shape is enforced by the decomposer's schema step, not by the prompt.
"""

import json


# =========================================================
# GOAL DECOMPOSITION
# =========================================================
# The reply is parsed as JSON with a `subtasks` array of strings.

DECOMPOSITION_SYSTEM_PROMPT = (
    "You are an AI that breaks down a user's goal into structured subtasks. "
    "Respond ONLY in JSON format with a `goal` and `subtasks` array."
)


def build_decomposition_prompt(goal: str) -> str:
    """Build the user message asking the model to decompose `goal`."""
    return f"Break down this goal into subtasks: {goal}"


# =========================================================
# SALES REPORT
# =========================================================

REPORT_SYSTEM_PROMPT = (
    "Generate a structured report based on the provided sales insights."
)


def build_report_prompt(insights) -> str:
    """Build the report request with insights serialized as compact JSON.

    Edge cases:
        Non-JSON-serializable values fall back to `str()` so the prompt can
        always be built.
    """
    serialized = json.dumps(insights, separators=(",", ":"), default=str)
    return f"Create a Q3 sales report based on these insights: {serialized}"
