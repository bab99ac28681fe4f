"""
Résumé field preparation — registration payload → TemplateContext.

Turns the applicant payload (the same shape the registration endpoint
accepts) into the flat ``{PLACEHOLDER: text}`` mapping the résumé
template expects.  Every user-supplied value is HTML-escaped here,
because the template renderer substitutes text literally.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from datetime import date, datetime
from html import escape
from typing import Any

from resume_intake.core.constants import EMPTY_SECTION_LABEL, UNSPECIFIED_LABEL

YES = "Sí"
NO = "No"

EDUCATION_FIELDS = ("institucion", "programa", "nivel_escolaridad", "modalidad", "ano")
EXPERIENCE_FIELDS = ("empresa", "cargo", "tiempo_laborado", "salario", "motivo_retiro")
FAMILY_FIELDS = ("nombre_completo", "parentesco", "edad", "ocupacion")
REFERENCE_FIELDS = ("nombre_completo", "tipo_referencia", "telefono", "ocupacion")

GOAL_HORIZONS = (
    ("corto_plazo", "Corto plazo"),
    ("mediano_plazo", "Mediano plazo"),
    ("largo_plazo", "Largo plazo"),
)


def _text(value: Any) -> str:
    """Escaped text; None and empty values become ''."""
    if value is None:
        return ""
    return escape(str(value).strip())


def as_flag(value: Any) -> bool | None:
    """Interpret the loose yes/no values the form sends (true, 1, "1", "true")."""
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "si", "sí", "yes"}


def yes_no(value: Any) -> str:
    return YES if as_flag(value) else NO


def format_date(value: Any) -> str:
    """ISO date (or date/datetime) → d/m/yyyy; unparseable text is returned escaped."""
    if not value:
        return ""
    if isinstance(value, datetime):
        value = value.date()
    if not isinstance(value, date):
        try:
            value = date.fromisoformat(str(value)[:10])
        except ValueError:
            return _text(value)
    return f"{value.day}/{value.month}/{value.year}"


def full_name(payload: Mapping[str, Any]) -> str:
    parts = (
        payload.get("primer_nombre"),
        payload.get("segundo_nombre"),
        payload.get("primer_apellido"),
        payload.get("segundo_apellido"),
    )
    return " ".join(_text(p) for p in parts if p)


def residence(payload: Mapping[str, Any]) -> str:
    city = payload.get("ciudad_residencia")
    department = payload.get("departamento_residencia")
    if city:
        return f"{_text(city)}, {_text(department)}" if department else _text(city)
    return _text(department)


def format_list_html(items: Iterable[Mapping[str, Any]] | None, fields: Sequence[str]) -> str:
    """
    Render rows as numbered ``list-item`` blocks.

    The first non-empty field is the title, the rest are joined with
    " • " as the subtitle.
    """
    rows = [item for item in (items or []) if isinstance(item, Mapping)]
    if not rows:
        return f'<div class="list-item">{EMPTY_SECTION_LABEL}</div>'

    blocks = []
    for index, item in enumerate(rows, start=1):
        values = [_text(item.get(f)) for f in fields if item.get(f) not in (None, "")]
        title = values[0] if values else f"Registro {index}"
        subtitle = " • ".join(values[1:])
        block = f'<div class="list-item">\n  <div class="list-item-title">{index}. {title}</div>\n'
        if subtitle:
            block += f'  <div class="list-item-subtitle">{subtitle}</div>\n'
        blocks.append(block + "</div>")
    return "\n".join(blocks)


def goals_html(goals: Mapping[str, Any] | None) -> str:
    goals = goals or {}
    blocks = []
    for index, (key, label) in enumerate(GOAL_HORIZONS, start=1):
        text = _text(goals.get(key)) or UNSPECIFIED_LABEL
        blocks.append(
            f'<div class="list-item">\n'
            f'  <div class="list-item-title">{index}. {label}</div>\n'
            f'  <div class="list-item-subtitle">{text}</div>\n'
            f"</div>"
        )
    return "\n".join(blocks)


def emergency_contact(contact: Mapping[str, Any] | None) -> str:
    if not contact or not contact.get("nombre_completo"):
        return EMPTY_SECTION_LABEL
    return " • ".join(
        _text(contact.get(k)) for k in ("nombre_completo", "telefono", "parentesco")
    )


def build_resume_fields(payload: Mapping[str, Any], *, generated_at: datetime | None = None) -> dict[str, str]:
    """Build the résumé TemplateContext from a registration payload."""
    security = payload.get("seguridad") or {}
    generated_at = generated_at or datetime.now()

    return {
        # ── Identity ──────────────────────────
        "NOMBRE_COMPLETO": full_name(payload),
        "TIPO_ID": _text(payload.get("tipo_documento")) or UNSPECIFIED_LABEL,
        "IDENTIFICACION": _text(payload.get("identificacion")),
        "FECHA_NACIMIENTO": format_date(payload.get("fecha_nacimiento")),
        "EDAD": _text(payload.get("edad")),
        "ESTADO_CIVIL": _text(payload.get("estado_civil")),

        # ── Contact / residence ───────────────
        "CIUDAD_RESIDENCIA": residence(payload),
        "DIRECCION": _text(payload.get("direccion_barrio")),
        "TELEFONO": _text(payload.get("telefono")),
        "CORREO": _text(payload.get("correo_electronico")),

        # ── Health, pension, sizes ────────────
        "EPS": _text(payload.get("eps")),
        "AFP": _text(payload.get("afp")),
        "RH": _text(payload.get("rh")),
        "TALLA_PANTALON": _text(payload.get("talla_pantalon")),
        "CAMISA_TALLA": _text(payload.get("camisa_talla")),
        "ZAPATOS_TALLA": _text(payload.get("zapatos_talla")),

        # ── Photo (LOGO_URL is defaulted by the pipeline) ──
        "PHOTO_URL": _text(payload.get("foto_public_url")),

        # ── Sections rendered as HTML ─────────
        "EDUCACION_LIST": format_list_html(payload.get("educacion"), EDUCATION_FIELDS),
        "EXPERIENCIA_LIST": format_list_html(payload.get("experiencia_laboral"), EXPERIENCE_FIELDS),
        "FAMILIARES_LIST": format_list_html(payload.get("familiares"), FAMILY_FIELDS),
        "REFERENCIAS_LIST": format_list_html(payload.get("referencias"), REFERENCE_FIELDS),
        "CONTACTO_EMERGENCIA": emergency_contact(payload.get("contacto_emergencia")),
        "METAS": goals_html(payload.get("metas_personales")),

        # ── Security screening ────────────────
        "SEG_LLAMADOS": yes_no(security.get("llamados_atencion")),
        "SEG_DETALLE_LLAMADOS": _text(security.get("detalle_llamados")),
        "SEG_ACCIDENTE": yes_no(security.get("accidente_laboral")),
        "SEG_DETALLE_ACCIDENTE": _text(security.get("detalle_accidente")),
        "SEG_ENFERMEDAD": yes_no(security.get("enfermedad_importante")),
        "SEG_DETALLE_ENFERMEDAD": _text(security.get("detalle_enfermedad")),
        "SEG_ALCOHOL": yes_no(security.get("consume_alcohol")),
        "SEG_FRECUENCIA": _text(security.get("frecuencia_alcohol")),
        "SEG_FAMILIAR": yes_no(security.get("familiar_en_empresa")),
        "SEG_DETALLE_FAMILIAR": _text(security.get("detalle_familiar_empresa")),
        "SEG_INFO_FALSA": yes_no(security.get("info_falsa")),
        "SEG_POLIGRAFO": yes_no(security.get("acepta_poligrafo")),
        "SEG_FORTALEZAS": _text(security.get("fortalezas")),
        "SEG_MEJORAR": _text(security.get("aspectos_mejorar")),
        "SEG_RESOLUCION": _text(security.get("resolucion_problemas")),
        "SEG_OBSERVACIONES": _text(security.get("observaciones")),

        "FECHA_GENERACION": generated_at.strftime("%d/%m/%Y %H:%M"),
    }
