"""Sample catalog and directory data for local development and demos.

Idempotent: catalog entries and companies are matched by name, so running
the seed twice leaves one copy of everything.
"""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from core.logger import get_logger
from models import GlobalService, LegacyService, PriceUnit
from repositories.company_repository import CompanyRepository
from repositories.company_service_repository import CompanyServiceRepository
from repositories.global_service_repository import GlobalServiceRepository

logger = get_logger(__name__)

SAMPLE_CATALOG: list[dict] = [
    {
        "name": "Garage Door Installation",
        "description": "Supply and install a new sectional or roll-up door",
        "base_price": 1200,
        "price_unit": PriceUnit.PER_SERVICE,
        "category": "garage_doors",
    },
    {
        "name": "Garage Door Repair",
        "description": "Springs, cables, rollers and track alignment",
        "base_price": 150,
        "price_unit": PriceUnit.PER_SERVICE,
        "category": "garage_doors",
    },
    {
        "name": "Opener Maintenance",
        "description": "Tune-up and safety check of the door opener",
        "base_price": 85,
        "price_unit": PriceUnit.PER_HOUR,
        "category": "garage_doors",
    },
    {
        "name": "Floor Coating",
        "description": "Epoxy coating for garage floors",
        "base_price": 4.5,
        "price_unit": PriceUnit.PER_SQFT,
        "category": "garage_doors",
    },
    {
        "name": "HVAC Inspection",
        "description": "Seasonal inspection of heating and cooling systems",
        "base_price": 99,
        "price_unit": PriceUnit.PER_SERVICE,
        "category": "hvac",
    },
]

SAMPLE_COMPANIES: list[dict] = [
    {
        "name": "Elite Garage Doors",
        "description": "Family-owned garage door specialists since 1998",
        "phone": "(310) 555-0101",
        "email": "info@elitegaragedoors.example",
        "website": "https://elitegaragedoors.example",
        "address": "123 Main St",
        "city": "Beverly Hills",
        "state": "CA",
        "zip_codes": ["90210", "90211", "90212"],
        "service_category": "garage_doors",
        "assignments": [
            ("Garage Door Installation", None),
            ("Garage Door Repair", 175),
            ("Opener Maintenance", None),
        ],
        "legacy_services": [
            ("Spring Replacement", "Torsion and extension springs", 200, "per_service"),
        ],
    },
    {
        "name": "Precision Door Service",
        "description": "24/7 emergency repairs",
        "phone": "(310) 555-0142",
        "email": "dispatch@precisiondoor.example",
        "website": None,
        "address": "456 Sunset Blvd",
        "city": "Los Angeles",
        "state": "CA",
        "zip_codes": ["90210", "90046"],
        "service_category": "garage_doors",
        "assignments": [
            ("Garage Door Repair", None),
            ("Floor Coating", 3.75),
        ],
        "legacy_services": [],
    },
    {
        "name": "Cool Breeze HVAC",
        "description": "Heating and air conditioning",
        "phone": "(212) 555-0199",
        "email": "hello@coolbreeze.example",
        "website": "https://coolbreeze.example",
        "address": "789 Broadway",
        "city": "New York",
        "state": "NY",
        "zip_codes": ["10001", "10002"],
        "service_category": "hvac",
        "assignments": [("HVAC Inspection", None)],
        "legacy_services": [],
    },
]


@dataclass(frozen=True)
class SeedResult:
    services_created: int
    companies_created: int
    assignments_created: int


async def seed_sample_data(db: AsyncSession) -> SeedResult:
    """Insert the sample catalog and companies. Caller commits."""
    catalog_repo = GlobalServiceRepository(db)
    company_repo = CompanyRepository(db)
    assignment_repo = CompanyServiceRepository(db)

    services_created = 0
    catalog: dict[str, GlobalService] = {}
    for entry in SAMPLE_CATALOG:
        service = await catalog_repo.get_by_name(entry["name"])
        if service is None:
            service = await catalog_repo.create(**entry)
            services_created += 1
        catalog[entry["name"]] = service

    companies_created = 0
    assignments_created = 0
    for entry in SAMPLE_COMPANIES:
        if await company_repo.get_by_name(entry["name"]) is not None:
            continue

        fields = {
            k: v
            for k, v in entry.items()
            if k not in ("zip_codes", "assignments", "legacy_services")
        }
        company = await company_repo.create(entry["zip_codes"], **fields)
        companies_created += 1

        for service_name, custom_price in entry["assignments"]:
            created = await assignment_repo.create_unique(
                company.id, catalog[service_name].id, custom_price=custom_price
            )
            if created is not None:
                assignments_created += 1

        for name, description, price, unit in entry["legacy_services"]:
            db.add(
                LegacyService(
                    company_id=company.id,
                    name=name,
                    description=description,
                    base_price=price,
                    price_unit=unit,
                )
            )
        await db.flush()

    result = SeedResult(services_created, companies_created, assignments_created)
    logger.info(
        "seed.complete",
        services_created=result.services_created,
        companies_created=result.companies_created,
        assignments_created=result.assignments_created,
    )
    return result
