"""API schema package."""

from resume_intake.api.schemas.applicant import (
    PhotoUploadResponse,
    RegenerationResponse,
    RegistrationRequest,
    RegistrationResponse,
)

__all__ = [
    "RegistrationRequest",
    "RegistrationResponse",
    "PhotoUploadResponse",
    "RegenerationResponse",
]
