"""
Models package — re-exports Base and all models.

Import models here so `Base.metadata` picks up every table
(`scripts/init_db.py` and the test fixtures call `create_all` on it).

When adding a new model:
    1. Create `resume_intake/db/models/<table_name>.py`
    2. Import it here
"""

from resume_intake.db.models.base import Base
from resume_intake.db.models.applicant import Applicant
from resume_intake.db.models.catalogs import (
    City,
    Department,
    HealthProvider,
    IdentificationType,
    PensionFund,
)
from resume_intake.db.models.education import Education
from resume_intake.db.models.emergency_contact import EmergencyContact
from resume_intake.db.models.family_member import FamilyMember
from resume_intake.db.models.personal_goals import PersonalGoals
from resume_intake.db.models.reference import Reference
from resume_intake.db.models.security_screening import SecurityScreening
from resume_intake.db.models.work_experience import WorkExperience

__all__ = [
    "Base",
    "Applicant",
    "Education",
    "WorkExperience",
    "FamilyMember",
    "Reference",
    "EmergencyContact",
    "PersonalGoals",
    "SecurityScreening",
    "IdentificationType",
    "Department",
    "City",
    "HealthProvider",
    "PensionFund",
]
