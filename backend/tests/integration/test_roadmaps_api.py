"""
Integration tests for the HTTP API.
"""

from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient

from main import create_app
from roadmap_tracker.api.deps import get_storage_coordinator


@pytest.fixture
async def client(coordinator):
    """API client bound to a coordinator on temporary storage."""
    await coordinator.initialize()
    app = create_app()
    app.dependency_overrides[get_storage_coordinator] = lambda: coordinator
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


async def _create_roadmap(client, name="Launch", time_scale="weekly"):
    response = await client.post("/api/roadmaps", json={"name": name, "timeScale": time_scale})
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_roadmap_lifecycle(client):
    roadmap = await _create_roadmap(client)

    response = await client.post(
        f"/api/roadmaps/{roadmap['id']}/tasks",
        json={"name": "Design", "startDate": "2024-01-01", "endDate": "2024-01-10", "category": "UX"},
    )
    assert response.status_code == 201
    task = response.json()

    groups = (await client.get(f"/api/roadmaps/{roadmap['id']}/groups")).json()
    assert [group["key"] for group in groups] == ["2024-W01", "2024-W02"]
    assert all(group["tasks"][0]["id"] == task["id"] for group in groups)

    response = await client.patch(
        f"/api/roadmaps/{roadmap['id']}/tasks/{task['id']}",
        json={"completed": True},
    )
    assert response.json()["completed"] is True

    stats = (await client.get(f"/api/roadmaps/{roadmap['id']}/stats")).json()
    assert stats["completedPercentage"] == 100

    listing = (await client.get("/api/roadmaps", params={"today": date(2024, 2, 1).isoformat()})).json()
    assert listing[0]["stats"]["totalTasks"] == 1

    response = await client.delete(f"/api/roadmaps/{roadmap['id']}")
    assert response.status_code == 204
    assert (await client.get("/api/roadmaps")).json() == []


@pytest.mark.asyncio
async def test_export_sets_download_name(client):
    roadmap = await _create_roadmap(client, name="Q3 Plan")

    response = await client.get(f"/api/roadmaps/{roadmap['id']}/export")

    assert response.status_code == 200
    assert 'filename="q3_plan-data.json"' in response.headers["content-disposition"]
    assert response.json()["name"] == "Q3 Plan"


@pytest.mark.asyncio
async def test_unknown_roadmap_is_404(client):
    response = await client.get("/api/roadmaps/missing/stats")

    assert response.status_code == 404
    assert "missing" in response.json()["detail"]


@pytest.mark.asyncio
async def test_import_empty_list_is_400(client):
    roadmap = await _create_roadmap(client)

    response = await client.post(f"/api/roadmaps/{roadmap['id']}/tasks/import", json=[])

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_switch_to_directory_with_move(client, data_dir):
    await _create_roadmap(client)

    response = await client.put(
        "/api/settings",
        json={
            "settings": {"storageLocation": "fileSystem"},
            "migrationChoice": "move",
            "directoryPath": str(data_dir),
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["settings"]["directoryName"] == "plans"
    assert body["directoryAttached"] is True
    assert body["location"] == 'directory "plans"'
    assert (data_dir / "roadmap-data.json").exists()


@pytest.mark.asyncio
async def test_switch_without_choice_is_400(client, data_dir):
    response = await client.put(
        "/api/settings",
        json={"settings": {"storageLocation": "fileSystem"}, "directoryPath": str(data_dir)},
    )

    assert response.status_code == 400
    assert (await client.get("/api/settings")).json()["storageLocation"] == "localStorage"


@pytest.mark.asyncio
async def test_pomodoro_endpoints(client):
    roadmap = await _create_roadmap(client)
    task = (
        await client.post(
            f"/api/roadmaps/{roadmap['id']}/tasks",
            json={"name": "Focus", "startDate": "2024-01-01", "endDate": "2024-01-01"},
        )
    ).json()

    response = await client.put(
        "/api/pomodoro/active",
        json={"roadmapId": roadmap["id"], "taskId": task["id"]},
    )
    assert response.json()["taskName"] == "Focus"

    response = await client.post(
        "/api/pomodoro/sessions",
        json={
            "roadmapId": roadmap["id"],
            "taskId": task["id"],
            "startTime": "2024-01-01T09:00:00Z",
            "endTime": "2024-01-01T09:25:00Z",
            "plannedDurationSeconds": 1500,
            "actualDurationSeconds": 1200,
            "sessionType": "work",
        },
    )
    assert response.status_code == 201
    assert len((await client.get("/api/pomodoro/sessions")).json()) == 1

    response = await client.put("/api/pomodoro/active", json={})
    assert response.json() is None
