"""EmergencyContact — at most one per applicant."""

from typing import Optional

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from resume_intake.db.models.base import Base, applicant_fk


class EmergencyContact(Base):
    __tablename__ = "hv_contacto_emergencia"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id_aspirante: Mapped[int] = applicant_fk()

    nombre_completo: Mapped[str] = mapped_column(String(255), nullable=False)
    parentesco: Mapped[Optional[str]] = mapped_column(String(60))
    telefono: Mapped[Optional[str]] = mapped_column(String(40))
    correo_electronico: Mapped[Optional[str]] = mapped_column(String(320))
    direccion: Mapped[Optional[str]] = mapped_column(String(255))

    applicant = relationship("Applicant", back_populates="contacto_emergencia")
