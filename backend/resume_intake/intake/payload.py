"""
Conversions between stored applicants and the JSON shapes the
registration form speaks.

    applicant_to_payload()   → registration payload (input of build_resume_fields)
    applicant_to_response()  → body of GET /api/aspirante
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from resume_intake.db.models import Applicant
from resume_intake.repositories.applicants import (
    APPLICANT_FIELDS,
    EDUCATION_COLUMNS,
    EMERGENCY_COLUMNS,
    EXPERIENCE_COLUMNS,
    FAMILY_COLUMNS,
    REFERENCE_COLUMNS,
    SECURITY_COLUMNS,
)

APPLICANT_COLUMNS = (
    "id_aspirante", "tipo_documento", "identificacion", "primer_nombre", "segundo_nombre",
    "primer_apellido", "segundo_apellido", "fecha_nacimiento", "edad",
    "departamento_expedicion", "ciudad_expedicion", "fecha_expedicion", "estado_civil",
    "direccion_barrio", "departamento", "ciudad", "telefono", "correo_electronico",
    "eps", "afp", "rh", "talla_pantalon", "camisa_talla", "zapatos_talla",
    "foto_gcs_path", "foto_public_url", "pdf_gcs_path", "pdf_public_url",
    "origen_registro", "medio_reclutamiento", "recomendador_aspirante", "fecha_registro",
)


def _json_value(value: Any) -> Any:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def _row(obj: Any, columns: tuple[str, ...]) -> dict[str, Any]:
    return {col: _json_value(getattr(obj, col)) for col in columns}


def applicant_to_payload(applicant: Applicant) -> dict[str, Any]:
    """Rebuild the registration payload from a stored applicant (relations loaded)."""
    payload: dict[str, Any] = {"identificacion": applicant.identificacion}
    for key, column in APPLICANT_FIELDS.items():
        payload[key] = getattr(applicant, column)
    payload["origen_registro"] = applicant.origen_registro

    payload["educacion"] = [_row(r, EDUCATION_COLUMNS) for r in applicant.educacion]
    payload["experiencia_laboral"] = [_row(r, EXPERIENCE_COLUMNS) for r in applicant.experiencia_laboral]
    payload["familiares"] = [_row(r, FAMILY_COLUMNS) for r in applicant.familiares]
    payload["referencias"] = [_row(r, REFERENCE_COLUMNS) for r in applicant.referencias]

    contact = applicant.contacto_emergencia
    payload["contacto_emergencia"] = _row(contact, EMERGENCY_COLUMNS) if contact else None

    goals = applicant.metas_personales
    payload["metas_personales"] = (
        {
            "corto_plazo": goals.meta_corto_plazo,
            "mediano_plazo": goals.meta_mediano_plazo,
            "largo_plazo": goals.meta_largo_plazo,
        }
        if goals
        else None
    )

    security = applicant.seguridad
    payload["seguridad"] = _row(security, SECURITY_COLUMNS) if security else None
    return payload


def applicant_to_response(applicant: Applicant) -> dict[str, Any]:
    """`{"existe": true, "aspirante": {...}, <relations>}` for the lookup endpoint."""
    goals = applicant.metas_personales
    contact = applicant.contacto_emergencia
    security = applicant.seguridad
    return {
        "existe": True,
        "aspirante": _row(applicant, APPLICANT_COLUMNS),
        "educacion": [_row(r, EDUCATION_COLUMNS) for r in applicant.educacion],
        "experiencia_laboral": [_row(r, EXPERIENCE_COLUMNS) for r in applicant.experiencia_laboral],
        "familiares": [_row(r, FAMILY_COLUMNS) for r in applicant.familiares],
        "referencias": [_row(r, REFERENCE_COLUMNS) for r in applicant.referencias],
        "contacto_emergencia": _row(contact, EMERGENCY_COLUMNS) if contact else None,
        "metas_personales": (
            _row(goals, ("meta_corto_plazo", "meta_mediano_plazo", "meta_largo_plazo"))
            if goals
            else None
        ),
        "seguridad": _row(security, SECURITY_COLUMNS) if security else None,
    }
