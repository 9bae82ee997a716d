"""Subtask dispatch: tagged subtasks -> per-task execution results.

Architectural role:
    Maps each subtask to a handler URL by task type, issues the handler calls
    concurrently, and returns results positionally aligned with the input.
    `execute_goal` composes the decomposer and this dispatcher into the full
    goal pipeline used by the HTTP adapter.

Concurrency model:
    All subtask coroutines are created up front and awaited once with
    `asyncio.gather`, so completion order never affects result order. An optional
    semaphore bounds in-flight calls; `None` means unbounded fan-out.

Error handling strategy:
    Each subtask is guarded independently. Unknown task types, non-2xx responses
    and transport errors become `Failed` results; one failure never aborts its
    siblings. No retries.
"""

import asyncio
import logging
import os
from typing import Any, Mapping, Sequence

import httpx
from dotenv import load_dotenv

from app.core.decomposer import decompose_goal
from app.core.task_types import Err, ExecutionResult, Ok, Subtask
from app.llm.provider_config import LLM_TIMEOUT_SECONDS

load_dotenv()


logger = logging.getLogger(__name__)

HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "30"))
# Dispatched handlers may wait on the LLM (report generation).
DISPATCH_TIMEOUT_SECONDS = max(HTTP_TIMEOUT_SECONDS, LLM_TIMEOUT_SECONDS)
GOAL_COMPLETED_MESSAGE = "Goal execution completed"
GOAL_PARSE_FAILED_ERROR = "Failed to parse goal into valid subtasks."


def _max_concurrency_from_env() -> int | None:
    """Read `DISPATCH_MAX_CONCURRENCY`; unset, non-integer or non-positive -> `None`."""
    raw = os.getenv("DISPATCH_MAX_CONCURRENCY", "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer DISPATCH_MAX_CONCURRENCY=%r", raw)
        return None
    return value if value > 0 else None


DISPATCH_MAX_CONCURRENCY = _max_concurrency_from_env()


def _decode_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


async def _run_subtask(
    client: httpx.AsyncClient,
    subtask: Subtask,
    endpoints: Mapping[str, str],
    semaphore: asyncio.Semaphore | None,
) -> ExecutionResult:
    endpoint = endpoints.get(subtask.task_type)
    if not endpoint:
        logger.warning("No endpoint for %s (type=%r)", subtask.task_id, subtask.task_type)
        return ExecutionResult.failed(
            f"No endpoint found for task type: {subtask.task_type}"
        )

    try:
        if semaphore is None:
            response = await client.post(endpoint, json={"task": subtask.to_dict()})
        else:
            async with semaphore:
                response = await client.post(endpoint, json={"task": subtask.to_dict()})
        response.raise_for_status()
    except Exception as exc:
        logger.warning("Subtask %s failed: %s", subtask.task_id, exc)
        return ExecutionResult.failed(str(exc) or exc.__class__.__name__)

    return ExecutionResult.success(_decode_body(response))


async def execute_subtasks(
    subtasks: Sequence[Subtask],
    endpoints: Mapping[str, str],
    client: httpx.AsyncClient | None = None,
    max_concurrency: int | None = DISPATCH_MAX_CONCURRENCY,
) -> list[ExecutionResult]:
    """Dispatch every subtask concurrently and collect aligned results.

    Args:
        subtasks: Tagged subtasks in caller order.
        endpoints: Task type value -> handler URL.
        client: Optional shared HTTP client; a short-lived one is created otherwise.
        max_concurrency: Upper bound on in-flight handler calls, or `None`.

    Returns:
        One `ExecutionResult` per subtask, same order as `subtasks`.
    """
    if not subtasks:
        return []

    semaphore = asyncio.Semaphore(max_concurrency) if max_concurrency else None

    async def _gather(active: httpx.AsyncClient) -> list[ExecutionResult]:
        return list(
            await asyncio.gather(
                *(_run_subtask(active, task, endpoints, semaphore) for task in subtasks)
            )
        )

    if client is not None:
        return await _gather(client)

    async with httpx.AsyncClient(timeout=DISPATCH_TIMEOUT_SECONDS) as owned:
        return await _gather(owned)


async def execute_goal(
    goal: str,
    endpoints: Mapping[str, str],
    client: httpx.AsyncClient | None = None,
) -> Ok[dict] | Err:
    """Decompose `goal` and dispatch its subtasks.

    Returns:
        `Ok({"message", "results"})` with serialized results, or the decomposer's
        `Err` when the goal could not be decomposed.
    """
    logger.info("Received goal: %s", goal)

    decomposition = await decompose_goal(goal)
    if isinstance(decomposition, Err):
        logger.error("Goal decomposition failed: %s", decomposition.error)
        return decomposition

    subtasks = decomposition.value
    logger.info("Executing subtasks: %s", [task.to_dict() for task in subtasks])

    results = await execute_subtasks(subtasks, endpoints, client=client)

    return Ok({
        "message": GOAL_COMPLETED_MESSAGE,
        "results": [result.to_dict() for result in results],
    })
