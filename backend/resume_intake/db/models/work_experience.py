"""WorkExperience — previous jobs."""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from resume_intake.db.models.base import Base, applicant_fk, utcnow


class WorkExperience(Base):
    __tablename__ = "hv_experiencia_laboral"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id_aspirante: Mapped[int] = applicant_fk()

    empresa: Mapped[Optional[str]] = mapped_column(String(255))
    cargo: Mapped[Optional[str]] = mapped_column(String(255))
    tiempo_laborado: Mapped[Optional[str]] = mapped_column(String(80))
    salario: Mapped[Optional[str]] = mapped_column(String(40))
    motivo_retiro: Mapped[Optional[str]] = mapped_column(String(255))
    funciones: Mapped[Optional[str]] = mapped_column(Text)

    fecha_registro: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    applicant = relationship("Applicant", back_populates="experiencia_laboral")
