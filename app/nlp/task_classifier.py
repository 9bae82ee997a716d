"""Keyword-based task-type classifier for decomposed subtasks.

Classification logic:
- Scans `TASK_KEYWORDS` in declaration order.
- A subtask matches a type when any keyword occurs as a case-insensitive
  substring of the subtask text.
- First matching type wins; no match falls back to `processData`.

Determinism:
- Fully deterministic, no model inference and no I/O.

Bypass risk:
- Substring matching is lexical only: "Reviewing" matches "Review", and text
  that mentions several verbs is classified by table order, not by intent.
"""

from app.core.task_types import TaskType


# =========================================================
# KEYWORD TABLE (ORDER MATTERS)
# =========================================================

TASK_KEYWORDS: dict[TaskType, tuple[str, ...]] = {
    TaskType.FETCH_DATA: (
        "Identify", "Gather", "Retrieve", "Fetch", "Extract", "Collect",
    ),
    TaskType.PROCESS_DATA: (
        "Sort", "Organize", "Clean", "Structure", "Filter", "Categorize",
    ),
    TaskType.ANALYZE_DATA: (
        "Calculate", "Analyze", "Evaluate", "Compare", "Assess",
    ),
    TaskType.GENERATE_REPORT: (
        "Prepare", "Compile", "Summarize", "Draft", "Review", "Finalize",
        "Submit", "Adjust", "Conclusions", "Recommendations",
    ),
}

DEFAULT_TASK_TYPE = TaskType.PROCESS_DATA


def classify_task(text: str) -> TaskType:
    """Return the task type for one subtask description.

    Edge cases:
    - Empty text -> `DEFAULT_TASK_TYPE`.
    """
    lowered = (text or "").lower()

    for task_type, keywords in TASK_KEYWORDS.items():
        if any(keyword.lower() in lowered for keyword in keywords):
            return task_type

    return DEFAULT_TASK_TYPE
