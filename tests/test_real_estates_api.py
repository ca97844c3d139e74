"""
API tests for the /realEstate endpoints.
"""

import pytest
import uuid
from httpx import AsyncClient, ASGITransport

from realestate_api.database import get_db
from realestate_api.main import create_app
from tests.conftest import RealEstateFactory, assert_error, make_settings


class TestListRealEstates:

    async def test_empty_list(self, client: AsyncClient):
        response = await client.get("/realEstate")

        assert response.status_code == 200
        assert response.json() == {"success": True, "data": []}

    async def test_default_page_size(self, client: AsyncClient, real_estate_repository):
        for index in range(12):
            await RealEstateFactory.create_real_estate(real_estate_repository, name=f"Listing {index:02d}")

        response = await client.get("/realEstate")

        names = [item["name"] for item in response.json()["data"]]
        assert names == [f"Listing {index:02d}" for index in range(10)]

    async def test_pagination(self, client: AsyncClient, real_estate_repository):
        for index in range(5):
            await RealEstateFactory.create_real_estate(real_estate_repository, name=f"Listing {index}")

        second = await client.get("/realEstate", params={"limite": 2, "pagina": 2})
        beyond = await client.get("/realEstate", params={"limite": 2, "pagina": 10})

        assert [item["name"] for item in second.json()["data"]] == ["Listing 2", "Listing 3"]
        assert beyond.status_code == 200
        assert beyond.json()["data"] == []

    async def test_page_far_past_the_end(self, client: AsyncClient, real_estate):
        response = await client.get("/realEstate", params={"limite": 10, "pagina": 10 ** 18})

        assert response.status_code == 200
        assert response.json()["data"] == []

    async def test_huge_limit(self, client: AsyncClient, real_estate):
        response = await client.get("/realEstate", params={"limite": 10 ** 19})

        assert response.status_code == 200
        assert [item["id"] for item in response.json()["data"]] == [str(real_estate.id)]

    @pytest.mark.parametrize("params", [{"limite": 0}, {"pagina": 0}, {"limite": "abc"}, {"pagina": "x"}])
    async def test_invalid_pagination(self, client: AsyncClient, params):
        response = await client.get("/realEstate", params=params)
        assert_error(response, 400)

    async def test_response_fields(self, client: AsyncClient, real_estate):
        response = await client.get("/realEstate")
        item = response.json()["data"][0]

        assert item["id"] == str(real_estate.id)
        assert item["address"] == "Rua das Flores, 100"
        assert item["price"] == 150000
        assert item["area"] == 80
        assert item["bedrooms"] == 2
        assert "created_at" in item and "updated_at" in item


class TestGetRealEstate:

    async def test_get(self, client: AsyncClient, real_estate):
        response = await client.get(f"/realEstate/{real_estate.id}")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["name"] == "Apartamento Centro"

    @pytest.mark.parametrize("real_estate_id", [str(uuid.uuid4()), "not-an-id", "12345"])
    async def test_unknown_or_malformed_id(self, client: AsyncClient, real_estate_id):
        response = await client.get(f"/realEstate/{real_estate_id}")
        assert_error(response, 404, "NOT_FOUND")


class TestSearchRealEstates:

    @pytest.fixture
    async def listings(self, real_estate_repository):
        await RealEstateFactory.create_real_estate(
            real_estate_repository, name="Studio", price=90000, area=30, location="Centro", bedrooms=1
        )
        await RealEstateFactory.create_real_estate(
            real_estate_repository, name="Family", price=250000, area=120, location="Jardim", bedrooms=3
        )
        await RealEstateFactory.create_real_estate(
            real_estate_repository, name="Loft", price=180000, area=60, location="Centro Historico", bedrooms=1
        )

    async def search(self, client: AsyncClient, **params):
        response = await client.get("/realEstate/search", params=params)
        assert response.status_code == 200, response.text
        return [item["name"] for item in response.json()["results"]]

    async def test_without_filters(self, client: AsyncClient, listings):
        assert await self.search(client) == ["Studio", "Family", "Loft"]

    async def test_price_min_only(self, client: AsyncClient, listings):
        assert await self.search(client, priceMin=100000) == ["Family", "Loft"]

    async def test_price_max_only(self, client: AsyncClient, listings):
        assert await self.search(client, priceMax=100000) == ["Studio"]

    async def test_area_bounds(self, client: AsyncClient, listings):
        assert await self.search(client, areaMin=50) == ["Family", "Loft"]
        assert await self.search(client, areaMax=60) == ["Studio", "Loft"]

    async def test_location_and_bedrooms(self, client: AsyncClient, listings):
        assert await self.search(client, location="centro", bedrooms=1) == ["Studio", "Loft"]

    async def test_all_filters(self, client: AsyncClient, listings):
        assert await self.search(
            client, priceMin=100000, priceMax=200000, areaMin=50, areaMax=70, location="centro", bedrooms=1
        ) == ["Loft"]

    async def test_location_wildcard_characters_match_literally(
        self, client: AsyncClient, listings, real_estate_repository
    ):
        await RealEstateFactory.create_real_estate(real_estate_repository, name="Lote", location="Quadra 10%_B")

        assert await self.search(client, location="_") == ["Lote"]
        assert await self.search(client, location="%") == ["Lote"]
        assert await self.search(client, location="0%_b") == ["Lote"]

    async def test_bedrooms_out_of_integer_range(self, client: AsyncClient, listings):
        assert await self.search(client, bedrooms=10 ** 19) == []

    async def test_not_paginated(self, client: AsyncClient, real_estate_repository):
        for index in range(15):
            await RealEstateFactory.create_real_estate(real_estate_repository, name=f"Listing {index}")

        assert len(await self.search(client)) == 15

    async def test_invalid_number(self, client: AsyncClient):
        response = await client.get("/realEstate/search", params={"priceMin": "cheap"})
        assert_error(response, 400, "VALIDATION_ERROR")


class TestRealEstateWrites:

    async def test_admin_creates(self, client: AsyncClient, admin_headers):
        payload = RealEstateFactory.create_real_estate_data()

        response = await client.post("/realEstate", json=payload, headers=admin_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["data"]["name"] == payload["name"]

        fetched = await client.get(f"/realEstate/{body['data']['id']}")
        assert fetched.status_code == 200

    async def test_create_with_legacy_address_key(self, client: AsyncClient, admin_headers):
        response = await client.post(
            "/realEstate",
            json={"name": "Propriedade 1", "adress": "Endereço da propriedade 1", "price": 100000},
            headers=admin_headers
        )

        assert response.status_code == 201
        assert response.json()["data"]["address"] == "Endereço da propriedade 1"

    async def test_user_cannot_create(self, client: AsyncClient, user_headers, real_estate_repository):
        response = await client.post(
            "/realEstate", json=RealEstateFactory.create_real_estate_data(), headers=user_headers
        )

        assert_error(response, 403, "FORBIDDEN")
        assert await real_estate_repository.count() == 0

    async def test_anonymous_cannot_create(self, client: AsyncClient):
        response = await client.post("/realEstate", json=RealEstateFactory.create_real_estate_data())
        assert_error(response, 401)

    @pytest.mark.parametrize("missing", ["name", "address", "price"])
    async def test_required_fields(self, client: AsyncClient, admin_headers, missing):
        payload = RealEstateFactory.create_real_estate_data()
        payload.pop(missing)

        response = await client.post("/realEstate", json=payload, headers=admin_headers)
        assert_error(response, 400, "VALIDATION_ERROR")

    async def test_negative_price_rejected(self, client: AsyncClient, admin_headers):
        response = await client.post(
            "/realEstate", json=RealEstateFactory.create_real_estate_data(price=-1), headers=admin_headers
        )
        assert_error(response, 400)

    async def test_admin_updates_partially(self, client: AsyncClient, admin_headers, real_estate):
        response = await client.put(f"/realEstate/{real_estate.id}", json={"price": 120000}, headers=admin_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["price"] == 120000
        assert data["name"] == "Apartamento Centro"

    async def test_update_cannot_clear_required_field(self, client: AsyncClient, admin_headers, real_estate):
        response = await client.put(f"/realEstate/{real_estate.id}", json={"name": None}, headers=admin_headers)
        assert_error(response, 400)

    async def test_user_cannot_update(self, client: AsyncClient, user_headers, real_estate):
        response = await client.put(f"/realEstate/{real_estate.id}", json={"price": 1}, headers=user_headers)
        assert_error(response, 403)

    async def test_update_unknown(self, client: AsyncClient, admin_headers):
        response = await client.put(f"/realEstate/{uuid.uuid4()}", json={"price": 1}, headers=admin_headers)
        assert_error(response, 404)

    async def test_admin_deletes_and_gets_record_back(self, client: AsyncClient, admin_headers, real_estate):
        response = await client.delete(f"/realEstate/{real_estate.id}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["data"]["id"] == str(real_estate.id)

        again = await client.get(f"/realEstate/{real_estate.id}")
        assert_error(again, 404)

    async def test_user_cannot_delete(self, client: AsyncClient, user_headers, real_estate):
        response = await client.delete(f"/realEstate/{real_estate.id}", headers=user_headers)
        assert_error(response, 403)

    async def test_delete_unknown(self, client: AsyncClient, admin_headers):
        response = await client.delete("/realEstate/not-an-id", headers=admin_headers)
        assert_error(response, 404)


class TestPrivateReads:
    """PUBLIC_REAL_ESTATE_READS=false requires a token for every read."""

    @pytest.fixture
    async def private_client(self, session_factory):
        app = create_app(make_settings(public_real_estate_reads=False))

        async def override_get_db():
            async with session_factory() as session:
                yield session

        app.dependency_overrides[get_db] = override_get_db
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            yield client

    async def test_anonymous_list_refused(self, private_client: AsyncClient):
        response = await private_client.get("/realEstate")
        assert_error(response, 401)

    async def test_anonymous_search_refused(self, private_client: AsyncClient):
        response = await private_client.get("/realEstate/search")
        assert_error(response, 401)

    async def test_authenticated_list_allowed(self, private_client: AsyncClient, user_headers, real_estate):
        response = await private_client.get("/realEstate", headers=user_headers)

        assert response.status_code == 200
        assert len(response.json()["data"]) == 1
