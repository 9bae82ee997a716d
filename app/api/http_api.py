"""
HTTP API adapter for the goal orchestrator.

Architectural role:
- Expose the goal pipeline and the four task handlers over HTTP.
- Enforce adapter-level input validation.
- Delegate orchestration to `app.core.dispatcher` and work to `app.handlers`.
- Normalize every outcome to a JSON body with status 200, 400 or 500.

Endpoint responsibilities:
- `POST /execute-goal`: decompose a goal and dispatch its subtasks.
- `POST /execute-subtasks`: dispatch caller-supplied subtasks.
- `POST /fetch-salesforce-data`: fetch opportunities via Power Automate.
- `POST /process-data`: stamp records as processed.
- `POST /analyze-data`: aggregate sales statistics.
- `POST /generate-report`: LLM-written report from insights.

Input validation behavior:
- Missing `goal` -> HTTP 400.
- Missing or non-array `subtasks` -> HTTP 400.
- Missing or non-array `data`, missing `insights` -> HTTP 400.
- Empty or non-JSON request bodies are read as `{}`.

Error handling strategy:
- Every route catches its own failures and returns `{"error", "detail"}` with
  HTTP 500; nothing reaches FastAPI's default exception handler.
- Per-subtask failures stay inside the `results` array with HTTP 200.

Side effects:
- Outbound HTTP to the LLM provider, the automation service and (for dispatch)
  back to this service's own handler routes.
- Loads environment variables at import time via `load_dotenv()`.
"""

from dotenv import load_dotenv

load_dotenv()

import logging
import os

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.dispatcher import (
    GOAL_PARSE_FAILED_ERROR,
    execute_goal,
    execute_subtasks,
)
from app.core.endpoints import build_task_endpoints
from app.core.task_types import Err, Subtask
from app.handlers.records import analyze_records, process_records
from app.handlers.report import generate_report
from app.handlers.salesforce import fetch_opportunities


logger = logging.getLogger(__name__)

DEFAULT_CORS_ORIGINS = "http://localhost:3000"


def parse_cors_origins(raw: str | None) -> list[str]:
    """Split a comma-separated origin list; blank entries are dropped."""
    return [origin.strip() for origin in (raw or "").split(",") if origin.strip()]


CORS_ORIGINS = parse_cors_origins(os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS))

app = FastAPI(title="Goal Orchestrator")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

TASK_ENDPOINTS = build_task_endpoints()


# ============================================================
# Dispatch client override
# ============================================================

_DISPATCH_CLIENT: httpx.AsyncClient | None = None


def set_dispatch_client(client: httpx.AsyncClient | None) -> None:
    """Override or clear the HTTP client used for subtask dispatch.

    Edge cases:
    - `None` restores per-request short-lived clients.
    """
    global _DISPATCH_CLIENT
    _DISPATCH_CLIENT = client


# ============================================================
# Helpers
# ============================================================

async def read_json_body(request: Request) -> dict:
    """Return the request JSON object, or `{}` for empty/invalid/non-object bodies."""
    raw = await request.body()
    if not raw:
        return {}
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def bad_request(message: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": message})


def server_error(message: str, exc: Exception | str) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": message, "detail": str(exc)})


# ============================================================
# Goal pipeline
# ============================================================

@app.post("/execute-goal")
async def execute_goal_route(request: Request):
    body = await read_json_body(request)
    goal = body.get("goal")

    if not goal:
        return bad_request("Goal is required.")

    try:
        outcome = await execute_goal(str(goal), TASK_ENDPOINTS, client=_DISPATCH_CLIENT)
    except Exception as exc:
        logger.exception("Error executing goal")
        return server_error("Failed to execute goal.", exc)

    if isinstance(outcome, Err):
        return server_error(GOAL_PARSE_FAILED_ERROR, outcome.error)

    return outcome.value


@app.post("/execute-subtasks")
async def execute_subtasks_route(request: Request):
    body = await read_json_body(request)
    raw_subtasks = body.get("subtasks")

    if not isinstance(raw_subtasks, list):
        return bad_request("Invalid subtasks format")

    try:
        subtasks = [
            Subtask.from_dict(item if isinstance(item, dict) else {})
            for item in raw_subtasks
        ]
        results = await execute_subtasks(subtasks, TASK_ENDPOINTS, client=_DISPATCH_CLIENT)
    except Exception as exc:
        logger.exception("Error executing subtasks")
        return server_error("Failed to execute subtasks.", exc)

    return {"success": True, "results": [result.to_dict() for result in results]}


# ============================================================
# Task handlers
# ============================================================

@app.post("/fetch-salesforce-data")
async def fetch_salesforce_data_route():
    logger.info("Fetching Salesforce data")
    try:
        data = await fetch_opportunities()
    except Exception as exc:
        logger.exception("Error fetching Salesforce data")
        return server_error("Failed to fetch Salesforce data.", exc)

    return {"success": True, "data": data}


@app.post("/process-data")
async def process_data_route(request: Request):
    logger.info("Processing data")
    body = await read_json_body(request)
    data = body.get("data")

    if not isinstance(data, list):
        return bad_request("No data provided.")

    try:
        cleaned = process_records(data)
    except Exception as exc:
        logger.exception("Error processing data")
        return server_error("Failed to process data.", exc)

    return {"success": True, "data": cleaned}


@app.post("/analyze-data")
async def analyze_data_route(request: Request):
    logger.info("Analyzing data")
    body = await read_json_body(request)
    data = body.get("data")

    if not isinstance(data, list):
        return bad_request("No data provided.")

    try:
        insights = analyze_records(data)
    except Exception as exc:
        logger.exception("Error analyzing data")
        return server_error("Failed to analyze data.", exc)

    return {"success": True, "insights": insights}


@app.post("/generate-report")
async def generate_report_route(request: Request):
    logger.info("Generating report")
    body = await read_json_body(request)
    insights = body.get("insights")

    if insights is None:
        return bad_request("No insights provided.")

    try:
        report = await generate_report(insights)
    except Exception as exc:
        logger.exception("Error generating report")
        return server_error("Failed to generate report.", exc)

    return {"success": True, "report": report}
