"""Reference — personal or work references."""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from resume_intake.db.models.base import Base, applicant_fk, utcnow


class Reference(Base):
    __tablename__ = "hv_referencias"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id_aspirante: Mapped[int] = applicant_fk()

    tipo_referencia: Mapped[Optional[str]] = mapped_column(String(40))  # Personal | Laboral
    empresa: Mapped[Optional[str]] = mapped_column(String(255))
    jefe_inmediato: Mapped[Optional[str]] = mapped_column(String(255))
    cargo_jefe: Mapped[Optional[str]] = mapped_column(String(120))
    nombre_completo: Mapped[Optional[str]] = mapped_column(String(255))
    telefono: Mapped[Optional[str]] = mapped_column(String(40))
    ocupacion: Mapped[Optional[str]] = mapped_column(String(120))

    fecha_registro: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    applicant = relationship("Applicant", back_populates="referencias")
