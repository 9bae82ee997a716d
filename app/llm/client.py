"""Async transport client for OpenAI-compatible chat-completion requests.

Architectural role:
    Executes one HTTP request against the configured provider and returns the
    assistant message text.

Model invocation flow:
    `service.generate_answer` -> `send_request(payload)` -> provider URL from
    `PROVIDERS` -> `choices[0].message.content`.

Retry behavior:
    No retry loop is implemented. Each call is attempted once with
    `LLM_TIMEOUT_SECONDS`.

Failure handling model:
    Every failure (missing key, unknown provider, HTTP status, transport error,
    unexpected response shape) is raised as `LLMRequestError` so callers decide
    how to surface it.
"""

import logging

import httpx

from app.llm import provider_config


logger = logging.getLogger(__name__)


class LLMRequestError(RuntimeError):
    """Raised when a chat-completion request cannot produce assistant text."""


def _describe_http_error(provider_name: str, err: httpx.HTTPError) -> str:
    """Build provider-labeled HTTP error text without exposing response bodies."""
    label = str(provider_name or "provider").upper()
    status_code = None
    if isinstance(err, httpx.HTTPStatusError):
        status_code = err.response.status_code
    if status_code:
        return f"{label} HTTP ERROR ({status_code})"
    return f"{label} HTTP ERROR: {err.__class__.__name__}"


async def send_request(payload: dict, client: httpx.AsyncClient | None = None) -> str:
    """Send one chat-completion request and return the assistant text.

    Args:
        payload: OpenAI-compatible request body.
        client: Optional shared client. A short-lived client is created otherwise.

    Raises:
        LLMRequestError: On any configuration, transport or response failure.
    """
    provider = provider_config.PROVIDER
    config = provider_config.PROVIDERS.get(provider)
    if config is None:
        raise LLMRequestError(f"Invalid LLM provider: {provider}")

    headers = {"Content-Type": "application/json"}

    key_file = config["key_file"]
    if key_file:
        api_key = provider_config.load_key(key_file)
        if not api_key:
            raise LLMRequestError(f"Missing {provider.upper()} API key")
        headers["Authorization"] = f"Bearer {api_key}"

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=provider_config.LLM_TIMEOUT_SECONDS) as owned:
                response = await owned.post(config["url"], headers=headers, json=payload)
        else:
            response = await client.post(config["url"], headers=headers, json=payload)

        response.raise_for_status()
        data = response.json()

    except httpx.HTTPError as err:
        raise LLMRequestError(_describe_http_error(provider, err)) from err
    except ValueError as err:
        raise LLMRequestError(f"{provider.upper()} returned a non-JSON body") from err

    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as err:
        raise LLMRequestError(f"{provider.upper()} response has no message content") from err

    if not isinstance(content, str):
        raise LLMRequestError(f"{provider.upper()} message content is not text")
    return content
