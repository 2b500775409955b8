"""Integration tests for the public directory routes.

Tests cover:
- GET /api/companies search by ZIP and category
- GET /api/companies/{id} detail
- POST / PUT / DELETE company CRUD
- optional public API key
"""

import uuid

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import clear_settings_cache
from tests.factories import (
    CompanyFactory,
    CompanyServiceFactory,
    GlobalServiceFactory,
    LegacyServiceFactory,
    create_async,
)


@pytest.mark.integration
class TestSearchCompanies:
    async def test_returns_company_serving_zip(
        self, client: AsyncClient, db_session: AsyncSession
    ):
        company = await create_async(
            CompanyFactory,
            db_session,
            name="Elite Garage Doors",
            zip_codes=["90210", "90211"],
        )
        await create_async(CompanyFactory, db_session, zip_codes=["10001"])
        await db_session.commit()

        response = await client.get("/api/companies", params={"zip": "90210"})

        assert response.status_code == 200
        companies = response.json()["companies"]
        assert [c["id"] for c in companies] == [str(company.id)]
        assert companies[0]["name"] == "Elite Garage Doors"
        assert companies[0]["zip_codes"] == ["90210", "90211"]

    async def test_unserved_zip_returns_empty_list(
        self, client: AsyncClient, db_session: AsyncSession
    ):
        await create_async(CompanyFactory, db_session, zip_codes=["90210"])
        await db_session.commit()

        response = await client.get("/api/companies", params={"zip": "99999"})

        assert response.status_code == 200
        assert response.json() == {"companies": []}

    async def test_missing_zip_returns_400(self, client: AsyncClient):
        response = await client.get("/api/companies")

        assert response.status_code == 400
        assert response.json()["detail"] == "ZIP code is required"

    async def test_blank_zip_returns_400(self, client: AsyncClient):
        response = await client.get("/api/companies", params={"zip": "  "})

        assert response.status_code == 400

    async def test_filters_by_category(
        self, client: AsyncClient, db_session: AsyncSession
    ):
        await create_async(CompanyFactory, db_session, zip_codes=["10001"])
        hvac = await create_async(
            CompanyFactory,
            db_session,
            zip_codes=["10001"],
            service_category="hvac",
        )
        await db_session.commit()

        default = await client.get("/api/companies", params={"zip": "10001"})
        filtered = await client.get(
            "/api/companies", params={"zip": "10001", "category": "hvac"}
        )

        assert len(default.json()["companies"]) == 1
        assert default.json()["companies"][0]["id"] != str(hvac.id)
        assert [c["id"] for c in filtered.json()["companies"]] == [str(hvac.id)]

    async def test_hides_unavailable_and_inactive_services(
        self, client: AsyncClient, db_session: AsyncSession
    ):
        company = await create_async(CompanyFactory, db_session)
        listed = await create_async(GlobalServiceFactory, db_session, name="Repair")
        inactive = await create_async(
            GlobalServiceFactory, db_session, name="Retired", is_active=False
        )
        hidden = await create_async(GlobalServiceFactory, db_session, name="Paused")
        for service, available in ((listed, True), (inactive, True), (hidden, False)):
            await create_async(
                CompanyServiceFactory,
                db_session,
                company_id=company.id,
                service_id=service.id,
                is_available=available,
            )
        await db_session.commit()

        response = await client.get("/api/companies", params={"zip": "90210"})

        assignments = response.json()["companies"][0]["company_services"]
        assert [a["service"]["name"] for a in assignments] == ["Repair"]


@pytest.mark.integration
class TestCompanyDetail:
    async def test_returns_company_with_services(
        self, client: AsyncClient, db_session: AsyncSession
    ):
        company = await create_async(CompanyFactory, db_session)
        service = await create_async(
            GlobalServiceFactory, db_session, name="Garage Door Repair", base_price=150
        )
        await create_async(
            CompanyServiceFactory,
            db_session,
            company_id=company.id,
            service_id=service.id,
            custom_price=0,
        )
        await create_async(
            LegacyServiceFactory, db_session, company_id=company.id, name="Springs"
        )
        await db_session.commit()

        response = await client.get(f"/api/companies/{company.id}")

        assert response.status_code == 200
        body = response.json()["company"]
        assert body["id"] == str(company.id)
        assert body["company_services"][0]["custom_price"] == 0
        assert body["company_services"][0]["service"]["base_price"] == 150
        assert [s["name"] for s in body["services"]] == ["Springs"]

    async def test_unknown_company_returns_404(self, client: AsyncClient):
        response = await client.get(f"/api/companies/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["detail"] == "Company not found"

    async def test_malformed_id_returns_422(self, client: AsyncClient):
        response = await client.get("/api/companies/not-a-uuid")

        assert response.status_code == 422


@pytest.mark.integration
class TestCompanyCrud:
    async def test_create_then_search(self, client: AsyncClient):
        payload = {
            "name": "Precision Door Service",
            "phone": "(310) 555-0142",
            "email": "dispatch@precisiondoor.example",
            "address": "456 Sunset Blvd",
            "city": "Los Angeles",
            "state": "CA",
            "zip_codes": ["90046", "90046", "90210"],
        }

        created = await client.post("/api/companies", json=payload)
        found = await client.get("/api/companies", params={"zip": "90046"})

        assert created.status_code == 201
        company = created.json()["company"]
        assert company["zip_codes"] == ["90046", "90210"]
        assert company["service_category"] == "garage_doors"
        assert [c["id"] for c in found.json()["companies"]] == [company["id"]]

    async def test_create_rejects_missing_required_field(self, client: AsyncClient):
        response = await client.post("/api/companies", json={"name": "No Phone"})

        assert response.status_code == 422

    @pytest.mark.parametrize("method", ["post", "put"])
    async def test_over_long_zip_code_returns_422(
        self, client: AsyncClient, db_session: AsyncSession, method: str
    ):
        company = await create_async(CompanyFactory, db_session)
        await db_session.commit()
        payload = {
            "name": "Long Zip Doors",
            "phone": "1",
            "email": "a@b.example",
            "address": "1 Main St",
            "city": "Austin",
            "state": "TX",
            "zip_codes": ["12345-67890"],
        }
        url = "/api/companies" if method == "post" else f"/api/companies/{company.id}"

        response = await getattr(client, method)(url, json=payload)

        assert response.status_code == 422
        assert response.json()["detail"][0]["loc"] == ["body", "zip_codes", 0]

    async def test_update_writes_only_present_fields(
        self, client: AsyncClient, db_session: AsyncSession
    ):
        company = await create_async(
            CompanyFactory, db_session, city="Austin", description="Old"
        )
        await db_session.commit()

        response = await client.put(
            f"/api/companies/{company.id}",
            json={"description": None, "zip_codes": ["73301"]},
        )

        assert response.status_code == 200
        body = response.json()["company"]
        assert body["description"] is None
        assert body["city"] == "Austin"
        assert body["zip_codes"] == ["73301"]

    async def test_update_rejects_null_for_required_field(
        self, client: AsyncClient, db_session: AsyncSession
    ):
        company = await create_async(CompanyFactory, db_session)
        await db_session.commit()

        response = await client.put(
            f"/api/companies/{company.id}", json={"name": None}
        )

        assert response.status_code == 422

    async def test_update_unknown_company_returns_404(self, client: AsyncClient):
        response = await client.put(
            f"/api/companies/{uuid.uuid4()}", json={"city": "Austin"}
        )

        assert response.status_code == 404

    async def test_delete_removes_company(
        self, client: AsyncClient, db_session: AsyncSession
    ):
        company = await create_async(CompanyFactory, db_session)
        await db_session.commit()

        deleted = await client.delete(f"/api/companies/{company.id}")
        detail = await client.get(f"/api/companies/{company.id}")

        assert deleted.status_code == 200
        assert deleted.json() == {"success": True}
        assert detail.status_code == 404

    async def test_delete_unknown_company_returns_404(self, client: AsyncClient):
        response = await client.delete(f"/api/companies/{uuid.uuid4()}")

        assert response.status_code == 404


@pytest.mark.integration
class TestPublicApiKey:
    async def test_open_when_no_key_configured(self, client: AsyncClient):
        response = await client.get("/api/companies", params={"zip": "90210"})

        assert response.status_code == 200

    async def test_requires_key_when_configured(
        self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.setenv("PUBLIC_API_KEY", "anon-key")
        clear_settings_cache()

        missing = await client.get("/api/companies", params={"zip": "90210"})
        wrong = await client.get(
            "/api/companies", params={"zip": "90210"}, headers={"apikey": "nope"}
        )
        ok = await client.get(
            "/api/companies", params={"zip": "90210"}, headers={"apikey": "anon-key"}
        )

        assert missing.status_code == 401
        assert wrong.status_code == 401
        assert ok.status_code == 200
