"""
Catalog repository — read access to the `config_*` lookup tables.

Every function returns plain dicts keyed the way the registration form
expects them (`[{"eps": "Sura"}, ...]`).
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from resume_intake.core.constants import DEFAULT_COUNTRY
from resume_intake.db.models import (
    City,
    Department,
    HealthProvider,
    IdentificationType,
    PensionFund,
)


async def list_identification_types(db: AsyncSession) -> list[dict[str, str]]:
    result = await db.execute(select(IdentificationType.descripcion).order_by(IdentificationType.descripcion))
    return [{"descripcion": value} for value in result.scalars()]


async def list_departments(db: AsyncSession, country: str = DEFAULT_COUNTRY) -> list[dict[str, str]]:
    stmt = (
        select(Department.departamento)
        .where(Department.pais == country)
        .order_by(Department.departamento)
    )
    result = await db.execute(stmt)
    return [{"departamento": value} for value in result.scalars()]


async def list_cities(
    db: AsyncSession,
    department: str,
    country: str = DEFAULT_COUNTRY,
) -> list[dict[str, str]]:
    """Cities of one department, alphabetically."""
    stmt = (
        select(City.ciudad)
        .where(City.departamento == department, City.pais == country)
        .order_by(City.ciudad)
    )
    result = await db.execute(stmt)
    return [{"ciudad": value} for value in result.scalars()]


async def list_health_providers(db: AsyncSession) -> list[dict[str, str]]:
    result = await db.execute(select(HealthProvider.eps).order_by(HealthProvider.eps))
    return [{"eps": value} for value in result.scalars()]


async def list_pension_funds(db: AsyncSession) -> list[dict[str, str]]:
    result = await db.execute(select(PensionFund.fondo).order_by(PensionFund.fondo))
    return [{"pension": value} for value in result.scalars()]


async def seed_catalogs(db: AsyncSession, data: dict[str, list]) -> dict[str, int]:
    """
    Insert catalog rows that are not present yet.

    `data` keys: tipo_identificacion, eps, pension (lists of str),
    departamentos ({departamento: [ciudad, ...]}).
    """
    inserted = {"tipo_identificacion": 0, "departamentos": 0, "ciudades": 0, "eps": 0, "pension": 0}

    existing = set((await db.execute(select(IdentificationType.descripcion))).scalars())
    for value in data.get("tipo_identificacion", []):
        if value not in existing:
            db.add(IdentificationType(descripcion=value))
            inserted["tipo_identificacion"] += 1

    existing = set((await db.execute(select(HealthProvider.eps))).scalars())
    for value in data.get("eps", []):
        if value not in existing:
            db.add(HealthProvider(eps=value))
            inserted["eps"] += 1

    existing = set((await db.execute(select(PensionFund.fondo))).scalars())
    for value in data.get("pension", []):
        if value not in existing:
            db.add(PensionFund(fondo=value))
            inserted["pension"] += 1

    known_departments = set((await db.execute(select(Department.departamento))).scalars())
    city_rows = await db.execute(select(City.departamento, City.ciudad))
    known_cities = {(department, city) for department, city in city_rows}
    for department, cities in (data.get("departamentos") or {}).items():
        if department not in known_departments:
            db.add(Department(departamento=department, pais=DEFAULT_COUNTRY))
            inserted["departamentos"] += 1
        for city in cities:
            if (department, city) not in known_cities:
                db.add(City(ciudad=city, departamento=department, pais=DEFAULT_COUNTRY))
                inserted["ciudades"] += 1

    await db.flush()
    return inserted
