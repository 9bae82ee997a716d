"""Shared test fixtures."""

from __future__ import annotations

import json

import pytest

from app.api import http_api
from app.llm import provider_config


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Run every test without real credentials, flow URLs or key files."""
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("POWER_AUTOMATE_URL", raising=False)
    monkeypatch.setattr(provider_config, "PROVIDER", "openai")
    monkeypatch.chdir(tmp_path)
    yield
    http_api.set_dispatch_client(None)


@pytest.fixture()
def llm_reply(monkeypatch):
    """Patch the decomposer's LLM call to return a fixed reply.

    Usage: `llm_reply({"subtasks": [...]})` or `llm_reply("raw text")`.
    Returns the list of (system_prompt, prompt) pairs seen by the fake.
    """
    calls: list[tuple[str, str]] = []

    def _install(reply):
        text = reply if isinstance(reply, str) else json.dumps(reply)

        async def _fake_generate_answer(system_prompt, prompt, temperature=None, client=None):
            calls.append((system_prompt, prompt))
            return text

        monkeypatch.setattr("app.core.decomposer.generate_answer", _fake_generate_answer)
        return calls

    return _install
