"""FamilyMember — household / close relatives."""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from resume_intake.db.models.base import Base, applicant_fk, utcnow


class FamilyMember(Base):
    __tablename__ = "hv_familiares"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id_aspirante: Mapped[int] = applicant_fk()

    nombre_completo: Mapped[Optional[str]] = mapped_column(String(255))
    parentesco: Mapped[Optional[str]] = mapped_column(String(60))
    edad: Mapped[Optional[int]] = mapped_column(Integer)
    ocupacion: Mapped[Optional[str]] = mapped_column(String(120))
    conviven_juntos: Mapped[Optional[bool]] = mapped_column(Boolean)

    fecha_registro: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    applicant = relationship("Applicant", back_populates="familiares")
