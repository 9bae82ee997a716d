"""Goal orchestrator API adapter package.

Architectural role:
- Defines the external interaction boundary: HTTP routes, server entrypoint, and
  a terminal client.
- Performs transport-level validation and response shaping.
- Delegates orchestration to the core layer and task work to `app.handlers`.
"""
