"""Goal decomposition: free-text goal -> tagged subtasks.

Control-flow model:
    1. Send the goal to the LLM with a fixed JSON-only instruction.
    2. Parse the reply through the `DecompositionReply` schema.
    3. Tag each subtask string with a sequential id and a keyword-derived type.

Error handling strategy:
    The function never raises for expected failures. Malformed replies and LLM
    transport/configuration failures come back as `Err` values with a stable,
    user-facing message; the cause is logged. Single attempt, no retry.

Determinism:
    Parsing and tagging are deterministic for a fixed reply. The reply itself is
    non-deterministic remote inference.
"""

import logging
import re
from typing import Any

from pydantic import BaseModel, StrictStr, ValidationError

from app.core.task_types import Err, Ok, Subtask
from app.llm.client import LLMRequestError
from app.llm.provider_config import DEFAULT_TEMPERATURE
from app.llm.service import generate_answer
from app.nlp.task_classifier import classify_task
from app.prompting.prompt_builder import (
    DECOMPOSITION_SYSTEM_PROMPT,
    build_decomposition_prompt,
)


logger = logging.getLogger(__name__)

MALFORMED_REPLY_ERROR = "OpenAI response is not structured correctly."
LLM_FAILURE_ERROR = "Failed to parse goal."

_CODE_FENCE = re.compile(r"^```[a-zA-Z]*\s*(.*?)\s*```$", re.DOTALL)


class DecompositionReply(BaseModel):
    """Expected shape of the model reply. Extra keys are ignored."""

    goal: Any = None
    subtasks: list[StrictStr]


def _strip_code_fence(raw: str) -> str:
    text = raw.strip()
    match = _CODE_FENCE.match(text)
    if match:
        return match.group(1)
    return text


def parse_decomposition(raw: str) -> Ok[list[str]] | Err:
    """Validate a raw model reply and return its subtask strings.

    Edge cases:
    - A reply wrapped in a Markdown code fence is unwrapped first.
    - Invalid JSON, a missing `subtasks` key, or non-string items -> `Err`.
    - A non-string reply (`None`, numbers, lists) -> `Err`.
    """
    if not isinstance(raw, str):
        logger.error("Decomposition reply is not text: %r", type(raw).__name__)
        return Err(MALFORMED_REPLY_ERROR)

    try:
        reply = DecompositionReply.model_validate_json(_strip_code_fence(raw))
    except ValidationError as exc:
        logger.error("Malformed decomposition reply: %s", exc.errors(include_url=False))
        return Err(MALFORMED_REPLY_ERROR)

    return Ok(reply.subtasks)


def tag_subtasks(names: list[str]) -> list[Subtask]:
    """Assign `task-1..task-N` identifiers and keyword-derived types."""
    return [
        Subtask(
            task_id=f"task-{index}",
            name=name,
            task_type=classify_task(name).value,
        )
        for index, name in enumerate(names, start=1)
    ]


async def decompose_goal(goal: str) -> Ok[list[Subtask]] | Err:
    """Decompose `goal` into tagged subtasks with a single LLM call."""
    try:
        raw = await generate_answer(
            DECOMPOSITION_SYSTEM_PROMPT,
            build_decomposition_prompt(goal),
            temperature=DEFAULT_TEMPERATURE,
        )
    except LLMRequestError as exc:
        logger.error("Goal decomposition request failed: %s", exc)
        return Err(LLM_FAILURE_ERROR)

    logger.debug("Raw decomposition reply: %r", raw)

    parsed = parse_decomposition(raw)
    if isinstance(parsed, Err):
        return parsed

    subtasks = tag_subtasks(parsed.value)
    logger.info("Goal decomposed into %d subtasks", len(subtasks))
    return Ok(subtasks)
