"""Task handlers exposed as HTTP endpoints.

Module split:
    - `salesforce`: CRM data fetch through the automation service.
    - `records`: record processing and aggregate statistics.
    - `report`: LLM-written report from aggregated insights.

Handlers raise on failure; HTTP status mapping lives in `app.api.http_api`.
"""
