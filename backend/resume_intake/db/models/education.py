"""Education — one row per study the applicant reported."""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from resume_intake.db.models.base import Base, applicant_fk, utcnow


class Education(Base):
    __tablename__ = "hv_educacion"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id_aspirante: Mapped[int] = applicant_fk()

    institucion: Mapped[Optional[str]] = mapped_column(String(255))
    programa: Mapped[Optional[str]] = mapped_column(String(255))
    nivel_escolaridad: Mapped[Optional[str]] = mapped_column(String(80))
    modalidad: Mapped[Optional[str]] = mapped_column(String(80))
    ano: Mapped[Optional[str]] = mapped_column(String(10))
    finalizado: Mapped[Optional[bool]] = mapped_column(Boolean)

    fecha_registro: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    applicant = relationship("Applicant", back_populates="educacion")
