"""
Integration tests for the recurring task endpoints.

Runs the FastAPI app over an in-memory SQLite database.
"""

from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient

from app.api.deps import get_holiday_calendar, get_task_repository
from app.infrastructure.local.holiday_calendar import StaticHolidayCalendar
from app.infrastructure.local.task_repository import SqliteTaskRepository
from main import create_app

AUTH = {"Authorization": "Bearer test_user"}


@pytest.fixture
def repo(session_factory):
    return SqliteTaskRepository(session_factory=session_factory)


@pytest.fixture
async def client(repo):
    app = create_app()
    app.dependency_overrides[get_task_repository] = lambda: repo
    app.dependency_overrides[get_holiday_calendar] = lambda: StaticHolidayCalendar(["12-25"])
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http:
        yield http


def _body(**recurrence) -> dict:
    return {
        "task": {
            "title": "Restock supplies",
            "description": "Storage room B",
            "priority": "high",
            "due_date": "2024-01-01",
            "assigned_to": "staff-3",
        },
        "recurrence": recurrence,
    }


@pytest.mark.asyncio
async def test_create_recurring_returns_stored_instances(client, repo):
    response = await client.post(
        "/api/tasks/recurring",
        json=_body(frequency="weekly", interval=1, maxOccurrences=3),
        headers=AUTH,
    )

    assert response.status_code == 200, response.text
    data = response.json()
    assert [item["due_date"] for item in data] == ["2024-01-08", "2024-01-15", "2024-01-22"]
    parent_ids = {item["parent_task_id"] for item in data}
    assert len(parent_ids) == 1
    for item in data:
        assert item["status"] == "pending"
        assert item["recurrence"] is None
        assert item["title"] == "Restock supplies"
        assert item["assigned_to"] == "staff-3"
        assert item["user_id"] == "test_user"

    template = await repo.get("test_user", parent_ids.pop())
    assert template is not None
    assert template.recurrence.frequency == "weekly"


@pytest.mark.asyncio
async def test_create_recurring_with_end_date(client):
    response = await client.post(
        "/api/tasks/recurring",
        json=_body(frequency="daily", interval=1, endDate="2024-01-03", maxOccurrences=52),
        headers=AUTH,
    )

    assert response.status_code == 200
    assert [item["due_date"] for item in response.json()] == ["2024-01-02", "2024-01-03"]


@pytest.mark.asyncio
async def test_list_instances(client):
    created = await client.post(
        "/api/tasks/recurring",
        json=_body(frequency="monthly", interval=1, maxOccurrences=2),
        headers=AUTH,
    )
    parent_id = created.json()[0]["parent_task_id"]

    response = await client.get(f"/api/tasks/{parent_id}/instances", headers=AUTH)

    assert response.status_code == 200
    assert [item["due_date"] for item in response.json()] == ["2024-02-01", "2024-03-01"]


@pytest.mark.asyncio
async def test_list_instances_unknown_template(client):
    response = await client.get(f"/api/tasks/{uuid4()}/instances", headers=AUTH)

    assert response.status_code == 404
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_preview_does_not_store(client, repo):
    response = await client.post(
        "/api/tasks/recurring/preview",
        json=_body(frequency="daily", interval=1, maxOccurrences=2),
        headers=AUTH,
    )

    assert response.status_code == 200
    data = response.json()
    assert [item["due_date"] for item in data] == ["2024-01-02", "2024-01-03"]
    assert await repo.list_instances("test_user", data[0]["parent_task_id"]) == []


@pytest.mark.asyncio
async def test_holiday_calendar_is_injected(client):
    body = _body(frequency="daily", interval=1, skipHolidays=True, endDate="2024-12-26")
    body["task"]["due_date"] = "2024-12-23"

    response = await client.post("/api/tasks/recurring/preview", json=body, headers=AUTH)

    assert [item["due_date"] for item in response.json()] == [
        "2024-12-24",
        "2024-12-26",
    ]


@pytest.mark.asyncio
async def test_missing_session_is_forbidden(client):
    response = await client.post(
        "/api/tasks/recurring", json=_body(frequency="daily", interval=1)
    )

    assert response.status_code == 403
    assert response.json() == {"error": "No autorizado"}


@pytest.mark.asyncio
async def test_malformed_authorization_header_is_forbidden(client):
    response = await client.post(
        "/api/tasks/recurring",
        json=_body(frequency="daily", interval=1),
        headers={"Authorization": "Token abc"},
    )

    assert response.status_code == 403
    assert response.json() == {"error": "No autorizado"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("recurrence", "message"),
    [
        ({}, "invalid recurrence pattern"),
        ({"frequency": "daily"}, "invalid recurrence pattern"),
        ({"frequency": "daily", "interval": 0}, "invalid recurrence pattern"),
        ({"frequency": "hourly", "interval": 1}, "unsupported frequency"),
    ],
)
async def test_invalid_rule_returns_error_body(client, repo, recurrence, message):
    response = await client.post("/api/tasks/recurring", json=_body(**recurrence), headers=AUTH)

    assert response.status_code == 500
    assert response.json() == {"error": message}


@pytest.mark.asyncio
async def test_missing_due_date_returns_error_body(client):
    body = _body(frequency="daily", interval=1)
    body["task"]["due_date"] = None

    response = await client.post("/api/tasks/recurring", json=body, headers=AUTH)

    assert response.status_code == 500
    assert response.json() == {"error": "task must have a due date"}


@pytest.mark.asyncio
async def test_missing_title_returns_error_body(client):
    body = _body(frequency="daily", interval=1)
    del body["task"]["title"]

    response = await client.post("/api/tasks/recurring", json=body, headers=AUTH)

    assert response.status_code == 500
    assert response.json() == {"error": "Datos incompletos"}


@pytest.mark.asyncio
async def test_timestamp_due_date_is_accepted(client):
    body = _body(frequency="daily", interval=1, maxOccurrences=2)
    body["task"]["due_date"] = "2024-01-01T09:30:00.000Z"

    response = await client.post("/api/tasks/recurring/preview", json=body, headers=AUTH)

    assert response.status_code == 200, response.text
    assert [item["due_date"] for item in response.json()] == ["2024-01-02", "2024-01-03"]


@pytest.mark.asyncio
async def test_timestamp_end_date_is_accepted(client):
    body = _body(frequency="daily", interval=1, endDate="2024-01-03T23:59:59.000Z")

    response = await client.post("/api/tasks/recurring", json=body, headers=AUTH)

    assert response.status_code == 200, response.text
    assert [item["due_date"] for item in response.json()] == ["2024-01-02", "2024-01-03"]


@pytest.mark.asyncio
async def test_malformed_task_returns_error_body(client, repo):
    body = _body(frequency="daily", interval=1)
    body["task"]["priority"] = "urgent"

    response = await client.post("/api/tasks/recurring", json=body, headers=AUTH)

    assert response.status_code == 422
    assert response.json() == {"error": "invalid request body"}


@pytest.mark.asyncio
async def test_max_occurrences_above_iteration_cap_is_rejected(client):
    response = await client.post(
        "/api/tasks/recurring/preview",
        json=_body(frequency="daily", interval=1, maxOccurrences=1500),
        headers=AUTH,
    )

    assert response.status_code == 500
    assert response.json() == {"error": "invalid recurrence pattern"}


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
