"""
API tests for the /visits endpoints.
"""

import pytest
import uuid
from httpx import AsyncClient

from tests.conftest import assert_error


class TestVisits:

    async def test_requires_authentication(self, client: AsyncClient):
        response = await client.get("/visits")
        assert_error(response, 401)

    async def test_create_with_date(self, client: AsyncClient, user_headers, real_estate):
        response = await client.post(
            "/visits",
            json={"realEstate": str(real_estate.id), "date": "2024-05-05T14:00:00Z"},
            headers=user_headers
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["realEstate"] == str(real_estate.id)
        assert data["date"].startswith("2024-05-05T14:00:00")

    async def test_create_without_date(self, client: AsyncClient, user_headers, real_estate):
        response = await client.post("/visits", json={"realEstate": str(real_estate.id)}, headers=user_headers)

        assert response.status_code == 201
        assert response.json()["data"]["date"]

    async def test_create_for_missing_listing(self, client: AsyncClient, user_headers):
        response = await client.post("/visits", json={"realEstate": str(uuid.uuid4())}, headers=user_headers)

        error = assert_error(response, 400)
        assert error["details"][0]["field"] == "realEstate"

    @pytest.mark.parametrize("payload", [{}, {"realEstate": "bogus"}, {"realEstate": None}])
    async def test_create_invalid_payload(self, client: AsyncClient, user_headers, payload):
        response = await client.post("/visits", json=payload, headers=user_headers)
        assert_error(response, 400, "VALIDATION_ERROR")

    async def test_list_paginated(self, client: AsyncClient, user_headers, visit_repository, real_estate):
        created = []
        for _ in range(3):
            visit = await visit_repository.create({"real_estate_id": real_estate.id})
            created.append(str(visit.id))

        response = await client.get("/visits", params={"limite": 2, "pagina": 2}, headers=user_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert [item["id"] for item in body["data"]] == created[2:]

    async def test_get(self, client: AsyncClient, user_headers, visit_repository, real_estate):
        visit = await visit_repository.create({"real_estate_id": real_estate.id})

        response = await client.get(f"/visits/{visit.id}", headers=user_headers)

        assert response.status_code == 200
        assert response.json()["data"]["id"] == str(visit.id)

    async def test_get_unknown(self, client: AsyncClient, user_headers):
        response = await client.get("/visits/not-an-id", headers=user_headers)
        assert_error(response, 404)

    async def test_update_date(self, client: AsyncClient, user_headers, visit_repository, real_estate):
        visit = await visit_repository.create({"real_estate_id": real_estate.id})

        response = await client.put(
            f"/visits/{visit.id}",
            json={"date": "2025-01-10T09:30:00Z"},
            headers=user_headers
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["date"].startswith("2025-01-10T09:30:00")
        assert data["realEstate"] == str(real_estate.id)

    async def test_update_unknown_with_missing_listing(self, client: AsyncClient, user_headers):
        response = await client.put(
            f"/visits/{uuid.uuid4()}",
            json={"realEstate": str(uuid.uuid4())},
            headers=user_headers
        )
        assert_error(response, 404, "NOT_FOUND")

    async def test_update_to_missing_listing(self, client: AsyncClient, user_headers, visit_repository, real_estate):
        visit = await visit_repository.create({"real_estate_id": real_estate.id})

        response = await client.put(
            f"/visits/{visit.id}",
            json={"realEstate": str(uuid.uuid4())},
            headers=user_headers
        )

        error = assert_error(response, 400, "BAD_REQUEST")
        assert error["details"][0]["field"] == "realEstate"

    async def test_delete(self, client: AsyncClient, user_headers, visit_repository, real_estate):
        visit = await visit_repository.create({"real_estate_id": real_estate.id})

        response = await client.delete(f"/visits/{visit.id}", headers=user_headers)

        assert response.status_code == 200
        assert response.json()["data"]["id"] == str(visit.id)
        assert_error(await client.get(f"/visits/{visit.id}", headers=user_headers), 404)

    async def test_visits_removed_with_listing(
        self, client: AsyncClient, user_headers, admin_headers, visit_repository, real_estate
    ):
        visit = await visit_repository.create({"real_estate_id": real_estate.id})

        await client.delete(f"/realEstate/{real_estate.id}", headers=admin_headers)

        response = await client.get(f"/visits/{visit.id}", headers=user_headers)
        assert_error(response, 404)
