"""API tests for reminder endpoints."""

from httpx import AsyncClient


class TestCreateReminder:
    async def test_create_one_time(self, api_client: AsyncClient, repositories):
        response = await api_client.post(
            "/api/reminders",
            json={"name": "Aspirin", "time": "08:00", "dosage": 2, "stock": 10},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Aspirin"
        assert data["active"] is True
        assert data["is_recurring"] is False
        assert data["last_triggered_date"] is None
        assert data["id"]
        repositories[0].save.assert_awaited_once()

    async def test_create_recurring_with_camel_case(self, api_client: AsyncClient):
        response = await api_client.post(
            "/api/reminders",
            json={"name": "Vitamin D", "time": "20:30", "repeatDays": [5, 1, 3], "snoozeDuration": 10},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["repeat_days"] == [1, 3, 5]
        assert data["repeat_day_names"] == ["Mon", "Wed", "Fri"]
        assert data["snooze_duration"] == 10

    async def test_bad_time_is_validation_error(self, api_client: AsyncClient, repositories):
        response = await api_client.post("/api/reminders", json={"name": "A", "time": "24:00"})

        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "VALIDATION_ERROR"
        assert "time" in data["message"]
        repositories[0].save.assert_not_awaited()

    async def test_weekday_out_of_range(self, api_client: AsyncClient):
        response = await api_client.post(
            "/api/reminders", json={"name": "A", "time": "08:00", "repeatDays": [7]}
        )
        assert response.status_code == 400

    async def test_negative_stock(self, api_client: AsyncClient):
        response = await api_client.post(
            "/api/reminders", json={"name": "A", "time": "08:00", "stock": -1}
        )
        assert response.status_code == 400

    async def test_blank_name(self, api_client: AsyncClient):
        response = await api_client.post("/api/reminders", json={"name": "  ", "time": "08:00"})
        assert response.status_code == 400

    async def test_wrong_type_is_request_error(self, api_client: AsyncClient):
        response = await api_client.post(
            "/api/reminders", json={"name": "A", "time": "08:00", "stock": "5"}
        )

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_missing_time(self, api_client: AsyncClient):
        response = await api_client.post("/api/reminders", json={"name": "A"})
        assert response.status_code == 422


class TestReadAndDelete:
    async def test_list_in_insertion_order(self, api_client: AsyncClient):
        for name in ("Zinc", "Aspirin"):
            await api_client.post("/api/reminders", json={"name": name, "time": "08:00"})

        response = await api_client.get("/api/reminders")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert [r["name"] for r in data["reminders"]] == ["Zinc", "Aspirin"]

    async def test_get_by_id(self, api_client: AsyncClient):
        created = (
            await api_client.post("/api/reminders", json={"name": "A", "time": "08:00"})
        ).json()

        response = await api_client.get(f"/api/reminders/{created['id']}")

        assert response.status_code == 200
        assert response.json()["id"] == created["id"]

    async def test_get_unknown(self, api_client: AsyncClient):
        response = await api_client.get("/api/reminders/missing")

        assert response.status_code == 404
        data = response.json()
        assert data["error_code"] == "REMINDER_NOT_FOUND"
        assert data["hint"]

    async def test_delete(self, api_client: AsyncClient):
        created = (
            await api_client.post("/api/reminders", json={"name": "A", "time": "08:00"})
        ).json()

        response = await api_client.delete(f"/api/reminders/{created['id']}")

        assert response.status_code == 204
        assert (await api_client.get("/api/reminders")).json()["total"] == 0

    async def test_delete_unknown(self, api_client: AsyncClient):
        response = await api_client.delete("/api/reminders/missing")
        assert response.status_code == 404

    async def test_low_stock(self, api_client: AsyncClient):
        await api_client.post("/api/reminders", json={"name": "Low", "time": "08:00", "stock": 1})
        await api_client.post("/api/reminders", json={"name": "Out", "time": "08:00", "stock": 0})

        data = (await api_client.get("/api/reminders/low-stock")).json()

        assert [r["name"] for r in data["reminders"]] == ["Low"]
        assert data["reminders"][0]["is_low_stock"] is True
        assert data["low_stock_threshold"] == 3
