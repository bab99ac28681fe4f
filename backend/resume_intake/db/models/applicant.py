"""
Applicant — one row per person who submitted a résumé (hoja de vida).

`identificacion` is the natural key: a second registration with the same
number updates this row and replaces every child row.
"""

from datetime import date, datetime
from typing import Optional

from sqlalchemy import Date, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from resume_intake.db.models.base import Base, utcnow


class Applicant(Base):
    __tablename__ = "hv_aspirante"

    id_aspirante: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # ── Identity ──────────────────────────────
    tipo_documento: Mapped[Optional[str]] = mapped_column(String(60))
    identificacion: Mapped[str] = mapped_column(String(30), unique=True, nullable=False, index=True)
    primer_nombre: Mapped[Optional[str]] = mapped_column(String(80))
    segundo_nombre: Mapped[Optional[str]] = mapped_column(String(80))
    primer_apellido: Mapped[Optional[str]] = mapped_column(String(80))
    segundo_apellido: Mapped[Optional[str]] = mapped_column(String(80))
    fecha_nacimiento: Mapped[Optional[date]] = mapped_column(Date)
    edad: Mapped[Optional[int]] = mapped_column(Integer)
    departamento_expedicion: Mapped[Optional[str]] = mapped_column(String(80))
    ciudad_expedicion: Mapped[Optional[str]] = mapped_column(String(80))
    fecha_expedicion: Mapped[Optional[date]] = mapped_column(Date)
    estado_civil: Mapped[Optional[str]] = mapped_column(String(40))

    # ── Residence / contact ───────────────────
    direccion_barrio: Mapped[Optional[str]] = mapped_column(String(255))
    departamento: Mapped[Optional[str]] = mapped_column(String(80))
    ciudad: Mapped[Optional[str]] = mapped_column(String(80))
    telefono: Mapped[Optional[str]] = mapped_column(String(40))
    correo_electronico: Mapped[Optional[str]] = mapped_column(String(320))

    # ── Health, pension, sizes ────────────────
    eps: Mapped[Optional[str]] = mapped_column(String(120))
    afp: Mapped[Optional[str]] = mapped_column(String(120))
    rh: Mapped[Optional[str]] = mapped_column(String(5))
    talla_pantalon: Mapped[Optional[str]] = mapped_column(String(10))
    camisa_talla: Mapped[Optional[str]] = mapped_column(String(10))
    zapatos_talla: Mapped[Optional[str]] = mapped_column(String(10))

    # ── Stored objects ────────────────────────
    foto_gcs_path: Mapped[Optional[str]] = mapped_column(String(512))
    foto_public_url: Mapped[Optional[str]] = mapped_column(Text)
    pdf_gcs_path: Mapped[Optional[str]] = mapped_column(String(512))
    pdf_public_url: Mapped[Optional[str]] = mapped_column(Text)

    # ── Recruitment ───────────────────────────
    origen_registro: Mapped[str] = mapped_column(String(20), nullable=False, default="WEB")
    medio_reclutamiento: Mapped[Optional[str]] = mapped_column(String(120))
    recomendador_aspirante: Mapped[Optional[str]] = mapped_column(String(255))

    fecha_registro: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    # ── Relationships ─────────────────────────
    educacion = relationship(
        "Education", back_populates="applicant", cascade="all, delete-orphan",
        passive_deletes=True, order_by="Education.id",
    )
    experiencia_laboral = relationship(
        "WorkExperience", back_populates="applicant", cascade="all, delete-orphan",
        passive_deletes=True, order_by="WorkExperience.id",
    )
    familiares = relationship(
        "FamilyMember", back_populates="applicant", cascade="all, delete-orphan",
        passive_deletes=True, order_by="FamilyMember.id",
    )
    referencias = relationship(
        "Reference", back_populates="applicant", cascade="all, delete-orphan",
        passive_deletes=True, order_by="Reference.id",
    )
    contacto_emergencia = relationship(
        "EmergencyContact", back_populates="applicant", cascade="all, delete-orphan",
        passive_deletes=True, uselist=False,
    )
    metas_personales = relationship(
        "PersonalGoals", back_populates="applicant", cascade="all, delete-orphan",
        passive_deletes=True, uselist=False,
    )
    seguridad = relationship(
        "SecurityScreening", back_populates="applicant", cascade="all, delete-orphan",
        passive_deletes=True, uselist=False,
    )

    @property
    def full_name(self) -> str:
        parts = (self.primer_nombre, self.segundo_nombre, self.primer_apellido, self.segundo_apellido)
        return " ".join(p for p in parts if p)

    def __repr__(self) -> str:
        return f"<Applicant id={self.id_aspirante} identificacion={self.identificacion}>"
