"""Core orchestration package.

Architectural role:
    Turns a free-text goal into tagged subtasks and runs them against the task
    handlers.

Composition:
    - `task_types`: subtask, task type, result and Ok/Err contracts.
    - `decomposer`: LLM-backed goal decomposition with schema validation.
    - `dispatcher`: concurrent subtask fan-out and the full goal pipeline.
    - `endpoints`: task type -> handler URL mapping builder.

Determinism and side effects:
    Package import itself is side-effect free apart from `.env` loading. Runtime
    side effects are outbound HTTP calls made by `decomposer` and `dispatcher`.
"""
