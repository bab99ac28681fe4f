"""
SecurityScreening — the yes/no screening questionnaire plus the
recruiter's free-text assessment. At most one row per applicant.
"""

from typing import Optional

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from resume_intake.db.models.base import Base, applicant_fk


class SecurityScreening(Base):
    __tablename__ = "hv_seguridad"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id_aspirante: Mapped[int] = applicant_fk()

    llamados_atencion: Mapped[Optional[bool]] = mapped_column(Boolean)
    detalle_llamados: Mapped[Optional[str]] = mapped_column(Text)
    accidente_laboral: Mapped[Optional[bool]] = mapped_column(Boolean)
    detalle_accidente: Mapped[Optional[str]] = mapped_column(Text)
    enfermedad_importante: Mapped[Optional[bool]] = mapped_column(Boolean)
    detalle_enfermedad: Mapped[Optional[str]] = mapped_column(Text)
    consume_alcohol: Mapped[Optional[bool]] = mapped_column(Boolean)
    frecuencia_alcohol: Mapped[Optional[str]] = mapped_column(String(80))
    familiar_en_empresa: Mapped[Optional[bool]] = mapped_column(Boolean)
    detalle_familiar_empresa: Mapped[Optional[str]] = mapped_column(Text)
    info_falsa: Mapped[Optional[bool]] = mapped_column(Boolean)
    acepta_poligrafo: Mapped[Optional[bool]] = mapped_column(Boolean)

    # ── Recruiter assessment ──────────────────
    observaciones: Mapped[Optional[str]] = mapped_column(Text)
    califica_para_cargo: Mapped[Optional[bool]] = mapped_column(Boolean)
    fortalezas: Mapped[Optional[str]] = mapped_column(Text)
    aspectos_mejorar: Mapped[Optional[str]] = mapped_column(Text)
    resolucion_problemas: Mapped[Optional[str]] = mapped_column(Text)

    applicant = relationship("Applicant", back_populates="seguridad")
