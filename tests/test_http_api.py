"""Tests for the HTTP routes."""

from __future__ import annotations

import httpx
import pytest
from fastapi.testclient import TestClient

from app.api import http_api
from app.handlers import salesforce
from app.llm.client import LLMRequestError


@pytest.fixture()
def client():
    return TestClient(http_api.app)


class TestProcessData:
    def test_empty_array(self, client):
        response = client.post("/process-data", json={"data": []})
        assert response.status_code == 200
        assert response.json() == {"success": True, "data": []}

    def test_missing_data(self, client):
        response = client.post("/process-data", json={})
        assert response.status_code == 400
        assert response.json() == {"error": "No data provided."}

    def test_records_stamped(self, client):
        response = client.post("/process-data", json={"data": [{"Id": "1"}, {"Id": "2"}]})
        assert response.json()["data"] == [
            {"Id": "1", "processed": True},
            {"Id": "2", "processed": True},
        ]

    def test_non_record_items(self, client):
        response = client.post("/process-data", json={"data": [1, 2]})
        assert response.status_code == 500
        assert response.json()["error"] == "Failed to process data."

    def test_empty_body(self, client):
        response = client.post("/process-data", content=b"")
        assert response.status_code == 400

    @pytest.mark.parametrize("data", ["", {}, 0, "records", {"Id": "1"}])
    def test_non_array_data(self, client, data):
        response = client.post("/process-data", json={"data": data})
        assert response.status_code == 400
        assert response.json() == {"error": "No data provided."}


class TestAnalyzeData:
    def test_total_sales(self, client):
        response = client.post("/analyze-data", json={"data": [{"Amount": 100}, {"Amount": 50}]})
        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "insights": {"totalSales": 150, "topRegion": "North America"},
        }

    def test_missing_amount_counts_as_zero(self, client):
        response = client.post("/analyze-data", json={"data": [{"Amount": 10}, {}, {"Amount": None}]})
        assert response.json()["insights"]["totalSales"] == 10

    def test_missing_data(self, client):
        assert client.post("/analyze-data", json={}).status_code == 400

    @pytest.mark.parametrize("data", ["", {}, 0])
    def test_non_array_data(self, client, data):
        response = client.post("/analyze-data", json={"data": data})
        assert response.status_code == 400
        assert response.json() == {"error": "No data provided."}


class TestCors:
    def test_default_origin_preflight(self, client):
        response = client.options(
            "/execute-goal",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"
        allowed_methods = response.headers["access-control-allow-methods"]
        for method in ("GET", "POST", "OPTIONS"):
            assert method in allowed_methods
        assert "content-type" in response.headers["access-control-allow-headers"].lower()

    def test_other_origin_rejected(self, client):
        response = client.options(
            "/execute-goal",
            headers={
                "Origin": "http://evil.example",
                "Access-Control-Request-Method": "POST",
            },
        )
        assert response.status_code == 400
        assert "access-control-allow-origin" not in response.headers

    def test_simple_request_from_default_origin(self, client):
        response = client.post(
            "/process-data",
            json={"data": []},
            headers={"Origin": "http://localhost:3000"},
        )
        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"

    def test_parse_cors_origins(self):
        assert http_api.parse_cors_origins("http://a, http://b ,,") == ["http://a", "http://b"]
        assert http_api.parse_cors_origins("") == []
        assert http_api.parse_cors_origins(None) == []


class TestGenerateReport:
    def test_report_passthrough(self, client, monkeypatch):
        prompts = []

        async def _fake(system_prompt, prompt, temperature=None, client=None):
            prompts.append(prompt)
            return "## Q3 Report\nSales were 150."

        monkeypatch.setattr("app.handlers.report.generate_answer", _fake)

        response = client.post("/generate-report", json={"insights": {"totalSales": 150}})

        assert response.status_code == 200
        assert response.json() == {"success": True, "report": "## Q3 Report\nSales were 150."}
        assert prompts == ['Create a Q3 sales report based on these insights: {"totalSales":150}']

    def test_missing_insights(self, client):
        assert client.post("/generate-report", json={}).status_code == 400

    def test_missing_api_key(self, client):
        response = client.post("/generate-report", json={"insights": {"totalSales": 1}})
        assert response.status_code == 500
        assert response.json()["error"] == "Failed to generate report."
        assert "API key" in response.json()["detail"]


class TestFetchSalesforceData:
    def test_missing_flow_url(self, client):
        response = client.post("/fetch-salesforce-data")
        assert response.status_code == 500
        assert "POWER_AUTOMATE_URL" in response.json()["detail"]

    def test_success(self, client, monkeypatch):
        async def _fake_fetch():
            return {"records": [{"Id": "1", "Amount": 5}]}

        monkeypatch.setattr(http_api, "fetch_opportunities", _fake_fetch)

        response = client.post("/fetch-salesforce-data")
        assert response.json() == {"success": True, "data": {"records": [{"Id": "1", "Amount": 5}]}}


class TestFetchOpportunities:
    @pytest.mark.asyncio
    async def test_posts_query(self, monkeypatch):
        monkeypatch.setenv("POWER_AUTOMATE_URL", "https://flow.test/run")
        seen = []

        def handler(request):
            seen.append(request.read())
            return httpx.Response(200, json={"records": []})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            data = await salesforce.fetch_opportunities(client)

        assert data == {"records": []}
        assert b"LAST_QUARTER" in seen[0]

    @pytest.mark.asyncio
    async def test_missing_records(self, monkeypatch):
        monkeypatch.setenv("POWER_AUTOMATE_URL", "https://flow.test/run")
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"value": []}))

        async with httpx.AsyncClient(transport=transport) as client:
            with pytest.raises(salesforce.InvalidFlowResponseError):
                await salesforce.fetch_opportunities(client)


class TestExecuteSubtasksRoute:
    def test_invalid_format(self, client):
        assert client.post("/execute-subtasks", json={"subtasks": "nope"}).status_code == 400
        assert client.post("/execute-subtasks", json={}).status_code == 400

    def test_unknown_type(self, client):
        response = client.post(
            "/execute-subtasks",
            json={"subtasks": [{"taskId": "task-1", "taskName": "x", "taskType": "mystery"}]},
        )
        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "results": [{"result": "Failed", "error": "No endpoint found for task type: mystery"}],
        }


class TestExecuteGoalRoute:
    def test_missing_goal(self, client):
        response = client.post("/execute-goal", json={"goal": ""})
        assert response.status_code == 400
        assert response.json() == {"error": "Goal is required."}

    def test_malformed_llm_output(self, client, llm_reply):
        llm_reply("Here is a plan: step one...")

        response = client.post("/execute-goal", json={"goal": "Q3 report"})

        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to parse goal into valid subtasks.",
            "detail": "OpenAI response is not structured correctly.",
        }

    def test_llm_unavailable(self, client, monkeypatch):
        async def _failing(*args, **kwargs):
            raise LLMRequestError("Missing OPENAI API key")

        monkeypatch.setattr("app.core.decomposer.generate_answer", _failing)

        response = client.post("/execute-goal", json={"goal": "Q3 report"})
        assert response.status_code == 500

    @pytest.mark.asyncio
    async def test_end_to_end_loopback(self, llm_reply, monkeypatch):
        llm_reply({
            "goal": "Q3 report",
            "subtasks": ["Retrieve Q3 opportunities", "Clean the records", "Summarize results"],
        })

        async def _fake_fetch():
            return {"records": [{"Amount": 100}]}

        monkeypatch.setattr(http_api, "fetch_opportunities", _fake_fetch)

        transport = httpx.ASGITransport(app=http_api.app)
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
            http_api.set_dispatch_client(client)
            response = await client.post("/execute-goal", json={"goal": "Q3 report"})

        body = response.json()
        assert response.status_code == 200
        assert body["message"] == "Goal execution completed"
        results = body["results"]
        assert len(results) == 3
        assert results[0] == {
            "result": "Success",
            "data": {"success": True, "data": {"records": [{"Amount": 100}]}},
        }
        # Handlers receive `{"task": ...}`, so data-driven ones reject it.
        assert results[1]["result"] == "Failed"
        assert "400" in results[1]["error"]
        assert results[2]["result"] == "Failed"
