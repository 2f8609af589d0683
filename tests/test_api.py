from __future__ import annotations

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from config.settings import Settings
from marketplace_agent.agents import CommandAgent
from marketplace_agent.api import create_app
from marketplace_agent.store import InMemoryTaskStore


@pytest.fixture
def store(id_factory) -> InMemoryTaskStore:
    return InMemoryTaskStore(id_factory=id_factory)


@pytest.fixture
def agent(store: InMemoryTaskStore, id_factory, now: datetime) -> CommandAgent:
    return CommandAgent({}, task_store=store, clock=lambda: now, id_factory=id_factory)


@pytest.fixture
def client(agent: CommandAgent) -> TestClient:
    return TestClient(create_app(Settings(), agent=agent))


def test_missing_prompt_returns_400(client: TestClient) -> None:
    for body in ({}, {"prompt": ""}, {"prompt": None}):
        resp = client.post("/api/agent", json=body)
        assert resp.status_code == 400
        assert resp.json() == {"type": "error", "message": "I need a command to get started."}


def test_malformed_json_returns_400(client: TestClient) -> None:
    resp = client.post("/api/agent", content="not json", headers={"content-type": "application/json"})
    assert resp.status_code == 400
    assert resp.json()["type"] == "error"


def test_task_command_round_trip_through_task_endpoints(client: TestClient) -> None:
    resp = client.post("/api/agent", json={"prompt": "Task: list a red kurti on amazon tomorrow"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["type"] == "task"
    assert body["summary"] == "Prepare listing for Red Kurti"
    task = body["payload"]["tasks"][0]
    assert task["marketplace"] == "amazon"
    assert task["priority"] == "medium"
    assert task["dueDate"].startswith("2024-02-01")

    listed = client.get("/api/tasks", params={"marketplace": "amazon"}).json()["tasks"]
    assert [item["id"] for item in listed] == [task["id"]]
    assert client.get("/api/tasks", params={"marketplace": "myntra"}).json()["tasks"] == []

    patched = client.patch(f"/api/tasks/{task['id']}", json={"status": "completed"})
    assert patched.status_code == 200
    assert patched.json()["status"] == "completed"


def test_task_endpoint_errors(client: TestClient) -> None:
    missing = client.patch("/api/tasks/nope", json={"status": "completed"})
    assert missing.status_code == 404
    assert missing.json()["type"] == "error"

    client.post("/api/agent", json={"prompt": "task: add hats"})
    task_id = client.get("/api/tasks").json()["tasks"][0]["id"]
    bad_status = client.patch(f"/api/tasks/{task_id}", json={"status": "archived"})
    assert bad_status.status_code == 400


def test_task_endpoint_validation_messages_name_the_bad_field(client: TestClient) -> None:
    no_status = client.patch("/api/tasks/task-1", json={})
    assert no_status.status_code == 400
    assert no_status.json() == {"type": "error", "message": "Unknown task status."}

    unknown_marketplace = client.get("/api/tasks", params={"marketplace": "ebay"})
    assert unknown_marketplace.status_code == 400
    assert unknown_marketplace.json() == {"type": "error", "message": "Unknown marketplace 'ebay'."}


def test_catalog_and_analytics_payloads(client: TestClient) -> None:
    catalog = client.post("/api/agent", json={"prompt": "show me the catalog template", "context": {"rows": 3}})
    assert catalog.status_code == 200
    assert catalog.json()["payload"] == {"expectation": "catalog_preparation", "incomingContext": {"rows": 3}}

    analytics = client.post("/api/agent", json={"prompt": "give me a performance report"})
    assert analytics.json()["payload"]["metrics"] == ["units_sold", "gmv", "returns", "conversion_rate"]

    general = client.post("/api/agent", json={"prompt": "hello there"})
    assert general.json() == {
        "type": "general",
        "message": "I'm listening. You can ask me to set up marketplace tasks, prepare catalog sheets, or brief you on store performance.",
        "payload": {},
    }


def test_internal_failure_returns_500(agent: CommandAgent, client: TestClient, monkeypatch) -> None:
    def explode(*_args, **_kwargs):
        raise ValueError("bad clause")

    monkeypatch.setattr(agent.task_extractor, "extract_tasks", explode)
    resp = client.post("/api/agent", json={"prompt": "task: add hats"})

    assert resp.status_code == 500
    assert resp.json() == {"type": "error", "message": "bad clause"}
