"""Salesforce opportunity fetch through a Power Automate flow.

The flow URL comes from `POWER_AUTOMATE_URL`. The flow receives a fixed SOQL
query and is expected to answer with a JSON object carrying `records`.

Failure handling:
    Missing configuration, transport errors and unexpected response shapes are
    raised to the HTTP adapter, which maps them to HTTP 500.
"""

import logging
import os

import httpx
from dotenv import load_dotenv

load_dotenv()


logger = logging.getLogger(__name__)

OPPORTUNITY_QUERY = (
    "SELECT Id, Name, Amount, CloseDate FROM Opportunity "
    "WHERE CloseDate = LAST_QUARTER"
)
HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "30"))


class MissingConfigurationError(RuntimeError):
    """Raised when a required environment setting is absent."""


class InvalidFlowResponseError(RuntimeError):
    """Raised when the automation flow answers without `records`."""


async def fetch_opportunities(client: httpx.AsyncClient | None = None) -> dict:
    """Run the opportunity query through the flow and return its JSON body."""
    flow_url = os.getenv("POWER_AUTOMATE_URL")
    if not flow_url:
        raise MissingConfigurationError("Missing POWER_AUTOMATE_URL in environment")

    body = {"soqlQuery": OPPORTUNITY_QUERY}

    if client is None:
        async with httpx.AsyncClient(timeout=HTTP_TIMEOUT_SECONDS) as owned:
            response = await owned.post(flow_url, json=body)
    else:
        response = await client.post(flow_url, json=body)

    response.raise_for_status()

    try:
        data = response.json()
    except ValueError as exc:
        raise InvalidFlowResponseError("Power Automate returned a non-JSON body") from exc

    if not isinstance(data, dict) or "records" not in data:
        raise InvalidFlowResponseError("Invalid response format from Power Automate")

    logger.info("Fetched %d Salesforce records", len(data["records"] or []))
    return data
