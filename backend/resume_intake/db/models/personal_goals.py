"""PersonalGoals — short, medium and long term goals (at most one row)."""

from typing import Optional

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from resume_intake.db.models.base import Base, applicant_fk


class PersonalGoals(Base):
    __tablename__ = "hv_metas_personales"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id_aspirante: Mapped[int] = applicant_fk()

    meta_corto_plazo: Mapped[Optional[str]] = mapped_column(Text)
    meta_mediano_plazo: Mapped[Optional[str]] = mapped_column(Text)
    meta_largo_plazo: Mapped[Optional[str]] = mapped_column(Text)

    applicant = relationship("Applicant", back_populates="metas_personales")
