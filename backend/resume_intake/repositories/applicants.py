"""
Applicant repository containing all data-access operations for
`hv_aspirante` and its child tables.

Repository rules:
- Pure data-access logic only
- Every function receives AsyncSession explicitly
- Functions flush, but never commit
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from resume_intake.core.constants import RegistrationOrigin
from resume_intake.db.models import (
    Applicant,
    Education,
    EmergencyContact,
    FamilyMember,
    PersonalGoals,
    Reference,
    SecurityScreening,
    WorkExperience,
)

# Payload key → column, for the scalar applicant fields
APPLICANT_FIELDS: dict[str, str] = {
    "tipo_documento": "tipo_documento",
    "primer_nombre": "primer_nombre",
    "segundo_nombre": "segundo_nombre",
    "primer_apellido": "primer_apellido",
    "segundo_apellido": "segundo_apellido",
    "fecha_nacimiento": "fecha_nacimiento",
    "edad": "edad",
    "departamento_expedicion": "departamento_expedicion",
    "ciudad_expedicion": "ciudad_expedicion",
    "fecha_expedicion": "fecha_expedicion",
    "estado_civil": "estado_civil",
    "direccion_barrio": "direccion_barrio",
    "departamento_residencia": "departamento",
    "ciudad_residencia": "ciudad",
    "telefono": "telefono",
    "correo_electronico": "correo_electronico",
    "eps": "eps",
    "afp": "afp",
    "rh": "rh",
    "talla_pantalon": "talla_pantalon",
    "camisa_talla": "camisa_talla",
    "zapatos_talla": "zapatos_talla",
    "foto_gcs_path": "foto_gcs_path",
    "foto_public_url": "foto_public_url",
    "medio_reclutamiento": "medio_reclutamiento",
    "recomendador_aspirante": "recomendador_aspirante",
}

EDUCATION_COLUMNS = ("institucion", "programa", "nivel_escolaridad", "modalidad", "ano", "finalizado")
EXPERIENCE_COLUMNS = ("empresa", "cargo", "tiempo_laborado", "salario", "motivo_retiro", "funciones")
FAMILY_COLUMNS = ("nombre_completo", "parentesco", "edad", "ocupacion", "conviven_juntos")
REFERENCE_COLUMNS = (
    "tipo_referencia", "empresa", "jefe_inmediato", "cargo_jefe",
    "nombre_completo", "telefono", "ocupacion",
)
EMERGENCY_COLUMNS = ("nombre_completo", "parentesco", "telefono", "correo_electronico", "direccion")
SECURITY_COLUMNS = (
    "llamados_atencion", "detalle_llamados", "accidente_laboral", "detalle_accidente",
    "enfermedad_importante", "detalle_enfermedad", "consume_alcohol", "frecuencia_alcohol",
    "familiar_en_empresa", "detalle_familiar_empresa", "info_falsa", "acepta_poligrafo",
    "observaciones", "califica_para_cargo", "fortalezas", "aspectos_mejorar",
    "resolucion_problemas",
)

CHILD_MODELS = (
    Education,
    WorkExperience,
    FamilyMember,
    Reference,
    EmergencyContact,
    PersonalGoals,
    SecurityScreening,
)

_WITH_RELATIONS = (
    selectinload(Applicant.educacion),
    selectinload(Applicant.experiencia_laboral),
    selectinload(Applicant.familiares),
    selectinload(Applicant.referencias),
    selectinload(Applicant.contacto_emergencia),
    selectinload(Applicant.metas_personales),
    selectinload(Applicant.seguridad),
)


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _columns(row: Mapping[str, Any], columns: Iterable[str]) -> dict[str, Any]:
    return {col: _blank_to_none(row.get(col)) for col in columns}


# ─── Queries ─────────────────────────────────
async def get_by_identificacion(
    db: AsyncSession,
    identificacion: str,
    *,
    with_relations: bool = True,
) -> Applicant | None:
    """Fetch an applicant by its identification number."""
    stmt = select(Applicant).where(Applicant.identificacion == identificacion.strip())
    if with_relations:
        stmt = stmt.options(*_WITH_RELATIONS).execution_options(populate_existing=True)
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def get_by_id(db: AsyncSession, applicant_id: int) -> Applicant | None:
    """Fetch an applicant by primary key, with all relations."""
    stmt = (
        select(Applicant)
        .where(Applicant.id_aspirante == applicant_id)
        .options(*_WITH_RELATIONS)
        .execution_options(populate_existing=True)
    )
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


# ─── Writes ──────────────────────────────────
async def upsert_applicant(
    db: AsyncSession,
    payload: Mapping[str, Any],
    *,
    pdf_gcs_path: str | None = None,
    pdf_public_url: str | None = None,
) -> tuple[Applicant, dict[str, int]]:
    """
    Insert or update the applicant matched by `identificacion`, then
    replace every child row with the ones in the payload.

    Child rows without their identifying fields are skipped. Returns the
    reloaded applicant and the number of list rows inserted per section.
    """
    identificacion = str(payload["identificacion"]).strip()

    applicant = await get_by_identificacion(db, identificacion, with_relations=False)
    if applicant is None:
        applicant = Applicant(identificacion=identificacion)
        db.add(applicant)

    for key, column in APPLICANT_FIELDS.items():
        setattr(applicant, column, _blank_to_none(payload.get(key)))
    applicant.origen_registro = payload.get("origen_registro") or RegistrationOrigin.WEB.value
    applicant.pdf_gcs_path = pdf_gcs_path
    applicant.pdf_public_url = pdf_public_url
    await db.flush()

    await delete_children(db, applicant.id_aspirante)
    counts = _add_children(db, applicant.id_aspirante, payload)
    await db.flush()

    return await get_by_id(db, applicant.id_aspirante), counts


async def delete_children(db: AsyncSession, applicant_id: int) -> None:
    """Remove every child row of an applicant."""
    for model in CHILD_MODELS:
        await db.execute(delete(model).where(model.id_aspirante == applicant_id))


def _add_children(db: AsyncSession, applicant_id: int, payload: Mapping[str, Any]) -> dict[str, int]:
    counts = {"educacion": 0, "experiencia_laboral": 0, "familiares": 0, "referencias": 0}

    for row in payload.get("educacion") or []:
        if not row.get("institucion") and not row.get("programa"):
            continue
        db.add(Education(id_aspirante=applicant_id, **_columns(row, EDUCATION_COLUMNS)))
        counts["educacion"] += 1

    for row in payload.get("experiencia_laboral") or []:
        if not row.get("empresa") and not row.get("cargo"):
            continue
        db.add(WorkExperience(id_aspirante=applicant_id, **_columns(row, EXPERIENCE_COLUMNS)))
        counts["experiencia_laboral"] += 1

    for row in payload.get("familiares") or []:
        if not row.get("nombre_completo"):
            continue
        db.add(FamilyMember(id_aspirante=applicant_id, **_columns(row, FAMILY_COLUMNS)))
        counts["familiares"] += 1

    for row in payload.get("referencias") or []:
        if not row.get("tipo_referencia"):
            continue
        db.add(Reference(id_aspirante=applicant_id, **_columns(row, REFERENCE_COLUMNS)))
        counts["referencias"] += 1

    contact = payload.get("contacto_emergencia")
    if contact and contact.get("nombre_completo"):
        db.add(EmergencyContact(id_aspirante=applicant_id, **_columns(contact, EMERGENCY_COLUMNS)))

    goals = payload.get("metas_personales")
    if goals and any(goals.get(k) for k in ("corto_plazo", "mediano_plazo", "largo_plazo")):
        db.add(
            PersonalGoals(
                id_aspirante=applicant_id,
                meta_corto_plazo=_blank_to_none(goals.get("corto_plazo")),
                meta_mediano_plazo=_blank_to_none(goals.get("mediano_plazo")),
                meta_largo_plazo=_blank_to_none(goals.get("largo_plazo")),
            )
        )

    security = payload.get("seguridad")
    if security:
        db.add(SecurityScreening(id_aspirante=applicant_id, **_columns(security, SECURITY_COLUMNS)))

    return counts


async def set_photo(
    db: AsyncSession,
    identificacion: str,
    *,
    gcs_path: str,
    public_url: str,
) -> bool:
    """Store the photo reference on an existing applicant. Returns False if unknown."""
    applicant = await get_by_identificacion(db, identificacion, with_relations=False)
    if applicant is None:
        return False
    applicant.foto_gcs_path = gcs_path
    applicant.foto_public_url = public_url
    await db.flush()
    return True


async def set_pdf(
    db: AsyncSession,
    applicant: Applicant,
    *,
    gcs_path: str,
    public_url: str,
) -> Applicant:
    """Store the latest résumé PDF reference."""
    applicant.pdf_gcs_path = gcs_path
    applicant.pdf_public_url = public_url
    await db.flush()
    return applicant
