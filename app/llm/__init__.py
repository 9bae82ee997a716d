"""LLM access package.

Architectural role:
    Provides provider configuration, request-payload construction, and transport
    adapters used by the decomposer and report handler to invoke text-generation
    backends.

Module split:
    - `provider_config`: environment-driven provider and model configuration.
    - `service`: canonical prompt-to-payload adapter.
    - `client`: OpenAI-compatible async HTTP transport and response parsing.
"""
