import pytest


@pytest.mark.asyncio
class TestHealthRouter:
    async def test_health_check(self, test_client):
        response = test_client.get("/health/")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    async def test_database_health_reports_folder_count(self, test_client, make_folder):
        await make_folder("One")
        await make_folder("Two")

        response = test_client.get("/health/db")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["dialect"] == "sqlite"
        assert data["folders"] == 2
