"""API tests for backup export and import."""

import json

from httpx import AsyncClient


class TestExport:
    async def test_export_download(self, api_client: AsyncClient):
        await api_client.post(
            "/api/reminders", json={"name": "Aspirin", "time": "08:00"}
        )

        response = await api_client.get("/api/data/export")

        assert response.status_code == 200
        assert "medicine_reminder_data.json" in response.headers["content-disposition"]
        data = response.json()
        assert set(data) == {"reminders", "history"}
        assert data["reminders"][0]["name"] == "Aspirin"
        assert "repeatDays" in data["reminders"][0]


class TestImport:
    async def test_import_document(self, api_client: AsyncClient):
        document = {
            "reminders": [
                {"id": "a", "name": "Aspirin", "time": "08:00", "repeatDays": [1, 2]},
                {"id": "b", "name": "Zinc", "time": "21:00"},
            ],
            "history": [],
        }

        response = await api_client.post("/api/data/import", content=json.dumps(document))

        assert response.status_code == 200
        assert response.json() == {
            "reminders_replaced": True,
            "history_replaced": True,
            "reminder_count": 2,
            "history_count": 0,
        }
        listed = (await api_client.get("/api/reminders")).json()
        assert [r["id"] for r in listed["reminders"]] == ["a", "b"]

    async def test_malformed_json(self, api_client: AsyncClient):
        response = await api_client.post("/api/data/import", content=b"{oops")

        assert response.status_code == 422
        assert response.json()["error_code"] == "PARSE_ERROR"

    async def test_invalid_record_rejected(self, api_client: AsyncClient):
        await api_client.post("/api/reminders", json={"name": "Keep", "time": "08:00"})

        response = await api_client.post(
            "/api/data/import", content=json.dumps({"reminders": [{"name": "A", "time": "8"}]})
        )

        assert response.status_code == 422
        listed = (await api_client.get("/api/reminders")).json()
        assert [r["name"] for r in listed["reminders"]] == ["Keep"]

    async def test_import_while_ringing(self, api_client: AsyncClient, runtime):
        await api_client.post("/api/reminders", json={"name": "A", "time": "08:00"})
        await runtime.tick()

        response = await api_client.post("/api/data/import", content=json.dumps({"history": []}))

        assert response.status_code == 409
        assert response.json()["error_code"] == "ALARM_BUSY"
