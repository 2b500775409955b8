"""Unit tests for rendering.search free-text filtering."""

import uuid
from datetime import UTC, datetime

import pytest
from hypothesis import given
from hypothesis import strategies as st

from models import PriceUnit
from rendering.search import company_matches, filter_companies, filter_global_services
from schemas import AssignmentData, CompanyData, GlobalServiceData

NOW = datetime(2026, 1, 1, tzinfo=UTC)


def _service(**overrides) -> GlobalServiceData:
    data = {
        "id": uuid.uuid4(),
        "name": "Garage Door Repair",
        "description": "Springs and cables",
        "base_price": 150,
        "price_unit": PriceUnit.PER_HOUR,
        "category": "garage_doors",
        "is_active": True,
        "created_at": NOW,
        "updated_at": NOW,
    }
    data.update(overrides)
    return GlobalServiceData(**data)


def _company(assignments=(), **overrides) -> CompanyData:
    company_id = uuid.uuid4()
    data = {
        "id": company_id,
        "name": "Elite Garage Doors",
        "description": None,
        "phone": "(310) 555-0101",
        "email": "info@elite.example",
        "website": None,
        "address": "123 Main St",
        "city": "Beverly Hills",
        "state": "CA",
        "zip_codes": ["90210", "90211"],
        "service_category": "garage_doors",
        "created_at": NOW,
        "updated_at": NOW,
        "company_services": [
            AssignmentData(
                id=uuid.uuid4(),
                company_id=company_id,
                service_id=service.id if service else uuid.uuid4(),
                custom_price=custom_price,
                is_available=True,
                created_at=NOW,
                service=service,
            )
            for service, custom_price in assignments
        ],
    }
    data.update(overrides)
    return CompanyData(**data)


@pytest.mark.unit
class TestCompanyMatches:
    @pytest.mark.parametrize(
        "query",
        ["elite", "BEVERLY", "ca", "info@", "555-0101", "main st", "garage_doors"],
    )
    def test_matches_basic_fields(self, query):
        assert company_matches(_company(), query)

    def test_matches_zip_code(self):
        assert company_matches(_company(), "90211")

    def test_matches_assigned_service_fields(self):
        company = _company([(_service(), 175)])

        assert company_matches(company, "springs")
        assert company_matches(company, "per_hour")
        assert company_matches(company, "150")
        assert company_matches(company, "175")

    def test_assignment_without_service_is_skipped(self):
        company = _company([(None, 999)])

        assert not company_matches(company, "999")

    def test_no_match(self):
        assert not company_matches(_company(), "plumbing")

    def test_surrounding_whitespace_is_part_of_the_query(self):
        company = _company()

        assert company_matches(company, "garage doors")
        assert not company_matches(company, "doors ")
        assert not company_matches(company, " elite")
        assert filter_companies([company], "doors ") == []


@pytest.mark.unit
class TestFilterCompanies:
    def test_blank_query_returns_copy(self):
        companies = [_company(), _company(name="Other")]

        result = filter_companies(companies, "  ")

        assert result == companies
        assert result is not companies

    def test_does_not_mutate_input(self):
        companies = [_company(), _company(name="Cool Breeze HVAC", city="NYC")]
        before = list(companies)

        result = filter_companies(companies, "hvac")

        assert [c.name for c in result] == ["Cool Breeze HVAC"]
        assert companies == before

    @given(query=st.text(max_size=8))
    def test_result_is_an_ordered_subset(self, query):
        companies = [
            _company(name="Elite Garage Doors"),
            _company(name="Precision Door Service", city="Los Angeles"),
            _company(name="Cool Breeze HVAC", city="New York", state="NY"),
        ]

        result = filter_companies(companies, query)

        positions = [companies.index(c) for c in result]
        assert positions == sorted(positions)
        assert all(company_matches(c, query) for c in result)
        assert all(
            company_matches(c, query) is False
            for c in companies
            if c not in result
        )

    @given(query=st.text(alphabet="abcdefghijklmnopqrstuvwxyz ", max_size=6))
    def test_case_insensitive(self, query):
        companies = [_company(name="Elite Garage Doors")]

        assert filter_companies(companies, query.upper()) == filter_companies(
            companies, query.lower()
        )


@pytest.mark.unit
class TestFilterGlobalServices:
    def test_matches_name_description_category_and_unit(self):
        services = [
            _service(name="Floor Coating", price_unit=PriceUnit.PER_SQFT),
            _service(name="HVAC Inspection", category="hvac", description=None),
        ]

        assert [s.name for s in filter_global_services(services, "sqft")] == [
            "Floor Coating"
        ]
        assert [s.name for s in filter_global_services(services, "HVAC")] == [
            "HVAC Inspection"
        ]
        assert [s.name for s in filter_global_services(services, "springs")] == [
            "Floor Coating"
        ]
        assert filter_global_services(services, "") == services
