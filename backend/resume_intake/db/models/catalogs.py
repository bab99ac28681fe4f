"""
Lookup catalogs that feed the registration form's dropdowns.

They are read-only for the application; `scripts/init_db.py` seeds them.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from resume_intake.core.constants import DEFAULT_COUNTRY
from resume_intake.db.models.base import Base


class IdentificationType(Base):
    __tablename__ = "config_tipo_identificacion"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    descripcion: Mapped[str] = mapped_column(String(80), unique=True, nullable=False)


class Department(Base):
    __tablename__ = "config_departamentos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    departamento: Mapped[str] = mapped_column(String(80), nullable=False, index=True)
    pais: Mapped[str] = mapped_column(String(60), nullable=False, default=DEFAULT_COUNTRY)


class City(Base):
    __tablename__ = "config_ciudades"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    ciudad: Mapped[str] = mapped_column(String(80), nullable=False)
    departamento: Mapped[str] = mapped_column(String(80), nullable=False, index=True)
    pais: Mapped[str] = mapped_column(String(60), nullable=False, default=DEFAULT_COUNTRY)


class HealthProvider(Base):
    """EPS (Entidad Promotora de Salud)."""

    __tablename__ = "config_eps"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    eps: Mapped[str] = mapped_column(String(120), unique=True, nullable=False)


class PensionFund(Base):
    __tablename__ = "config_pension"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    fondo: Mapped[str] = mapped_column(String(120), unique=True, nullable=False)
