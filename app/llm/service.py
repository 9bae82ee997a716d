"""Prompt-to-payload adapter for LLM invocation.

Architectural role:
    Provides the canonical text-generation entrypoint used by the goal decomposer
    and the report handler. This module bridges prompt construction
    (`app.prompting`) to transport (`app.llm.client`).

Model call flow:
    (system prompt, user prompt) -> payload construction -> `client.send_request(...)`.

Token behavior:
    No explicit token-budget enforcement is implemented here. Token limits are left
    to provider defaults.
"""

import httpx

from app.llm import provider_config
from app.llm.client import send_request


async def generate_answer(
    system_prompt: str,
    prompt: str,
    temperature: float | None = None,
    client: httpx.AsyncClient | None = None,
) -> str:
    """Invoke the configured model with one system and one user message.

    Args:
        system_prompt: Fixed instruction for the task at hand.
        prompt: Fully constructed user prompt.
        temperature: Sampling temperature; omitted from the payload when `None`.
        client: Optional shared HTTP client forwarded to transport.

    Returns:
        Assistant text, unmodified.

    Failure scenarios:
        Transport/provider failures raise `LLMRequestError` from `client`.
    """

    payload = {
        "model": provider_config.MODEL_NAME,
        "messages": [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": prompt}
        ],
    }

    if temperature is not None:
        payload["temperature"] = temperature

    return await send_request(payload, client=client)
