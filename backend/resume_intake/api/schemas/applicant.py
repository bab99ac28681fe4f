"""
Registration request/response schemas.

The form posts loose values: numbers for text fields, "" for unset
dates, and yes/no flags as true / 1 / "1" / "true" / "si". Validators
normalise them before they reach the repository.
"""

from __future__ import annotations

from datetime import date
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator

from resume_intake.rendering.resume_fields import as_flag


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


LooseFlag = Annotated[Optional[bool], BeforeValidator(as_flag)]
OptionalInt = Annotated[Optional[int], BeforeValidator(_blank_to_none)]
OptionalDate = Annotated[Optional[date], BeforeValidator(_blank_to_none)]


class FormModel(BaseModel):
    """Base for every form section."""

    model_config = ConfigDict(coerce_numbers_to_str=True, extra="ignore", str_strip_whitespace=True)


class EducationIn(FormModel):
    institucion: Optional[str] = None
    programa: Optional[str] = None
    nivel_escolaridad: Optional[str] = None
    modalidad: Optional[str] = None
    ano: Optional[str] = None
    finalizado: LooseFlag = None



class WorkExperienceIn(FormModel):
    empresa: Optional[str] = None
    cargo: Optional[str] = None
    tiempo_laborado: Optional[str] = None
    salario: Optional[str] = None
    motivo_retiro: Optional[str] = None
    funciones: Optional[str] = None


class FamilyMemberIn(FormModel):
    nombre_completo: Optional[str] = None
    parentesco: Optional[str] = None
    edad: OptionalInt = None
    ocupacion: Optional[str] = None
    conviven_juntos: LooseFlag = None



class ReferenceIn(FormModel):
    tipo_referencia: Optional[str] = None
    empresa: Optional[str] = None
    jefe_inmediato: Optional[str] = None
    cargo_jefe: Optional[str] = None
    nombre_completo: Optional[str] = None
    telefono: Optional[str] = None
    ocupacion: Optional[str] = None


class EmergencyContactIn(FormModel):
    nombre_completo: Optional[str] = None
    parentesco: Optional[str] = None
    telefono: Optional[str] = None
    correo_electronico: Optional[str] = None
    direccion: Optional[str] = None


class PersonalGoalsIn(FormModel):
    corto_plazo: Optional[str] = None
    mediano_plazo: Optional[str] = None
    largo_plazo: Optional[str] = None


class SecurityScreeningIn(FormModel):
    llamados_atencion: LooseFlag = None
    detalle_llamados: Optional[str] = None
    accidente_laboral: LooseFlag = None
    detalle_accidente: Optional[str] = None
    enfermedad_importante: LooseFlag = None
    detalle_enfermedad: Optional[str] = None
    consume_alcohol: LooseFlag = None
    frecuencia_alcohol: Optional[str] = None
    familiar_en_empresa: LooseFlag = None
    detalle_familiar_empresa: Optional[str] = None
    info_falsa: LooseFlag = None
    acepta_poligrafo: LooseFlag = None
    observaciones: Optional[str] = None
    califica_para_cargo: LooseFlag = None
    fortalezas: Optional[str] = None
    aspectos_mejorar: Optional[str] = None
    resolucion_problemas: Optional[str] = None


class RegistrationRequest(FormModel):
    """Body of POST /api/hv/registrar."""

    identificacion: str = Field(..., min_length=1, max_length=30)
    tipo_documento: Optional[str] = None
    primer_nombre: Optional[str] = None
    segundo_nombre: Optional[str] = None
    primer_apellido: Optional[str] = None
    segundo_apellido: Optional[str] = None
    fecha_nacimiento: OptionalDate = None
    edad: OptionalInt = None
    departamento_expedicion: Optional[str] = None
    ciudad_expedicion: Optional[str] = None
    fecha_expedicion: OptionalDate = None
    estado_civil: Optional[str] = None
    direccion_barrio: Optional[str] = None
    departamento_residencia: Optional[str] = None
    ciudad_residencia: Optional[str] = None
    telefono: Optional[str] = None
    correo_electronico: Optional[str] = None
    eps: Optional[str] = None
    afp: Optional[str] = None
    rh: Optional[str] = None
    talla_pantalon: Optional[str] = None
    camisa_talla: Optional[str] = None
    zapatos_talla: Optional[str] = None
    foto_gcs_path: Optional[str] = None
    foto_public_url: Optional[str] = None
    origen_registro: Optional[str] = None
    medio_reclutamiento: Optional[str] = None
    recomendador_aspirante: Optional[str] = None

    educacion: list[EducationIn] = Field(default_factory=list)
    experiencia_laboral: list[WorkExperienceIn] = Field(default_factory=list)
    familiares: list[FamilyMemberIn] = Field(default_factory=list)
    referencias: list[ReferenceIn] = Field(default_factory=list)
    contacto_emergencia: Optional[EmergencyContactIn] = None
    metas_personales: Optional[PersonalGoalsIn] = None
    seguridad: Optional[SecurityScreeningIn] = None

    @field_validator("educacion", "experiencia_laboral", "familiares", "referencias", mode="before")
    @classmethod
    def _null_list(cls, value: Any) -> Any:
        return value or []


class RegistrationResponse(BaseModel):
    """Response of POST /api/hv/registrar."""

    ok: bool
    success: bool
    message: str
    id_aspirante: int
    pdf_url: Optional[str] = None
    pdf_generated: bool
    warning: Optional[str] = None


class PhotoUploadResponse(BaseModel):
    ok: bool
    foto_gcs_path: str
    foto_public_url: str
    message: str


class RegenerationResponse(BaseModel):
    message: str
    task_id: str
    status: str
