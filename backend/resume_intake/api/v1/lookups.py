"""Lookup endpoints feeding the registration form's dropdowns."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from resume_intake.api.deps import get_db
from resume_intake.repositories import catalogs as catalog_repository

router = APIRouter(prefix="/config", tags=["Config"])


@router.get("/tipo-identificacion")
async def list_identification_types(db: AsyncSession = Depends(get_db)) -> list[dict[str, str]]:
    return await catalog_repository.list_identification_types(db)


@router.get("/departamentos")
async def list_departments(db: AsyncSession = Depends(get_db)) -> list[dict[str, str]]:
    """Colombian departments, alphabetically."""
    return await catalog_repository.list_departments(db)


@router.get("/ciudades")
async def list_cities(
    departamento: str | None = Query(default=None),
    db: AsyncSession = Depends(get_db),
) -> list[dict[str, str]]:
    """Cities of one department."""
    if not departamento:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Falta el parámetro 'departamento'",
        )
    return await catalog_repository.list_cities(db, departamento)


@router.get("/eps")
async def list_health_providers(db: AsyncSession = Depends(get_db)) -> list[dict[str, str]]:
    return await catalog_repository.list_health_providers(db)


@router.get("/pension")
async def list_pension_funds(db: AsyncSession = Depends(get_db)) -> list[dict[str, str]]:
    return await catalog_repository.list_pension_funds(db)
