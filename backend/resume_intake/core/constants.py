"""Shared constants and enums used across the application."""

from enum import StrEnum


class PipelineStatus(StrEnum):
    """Overall status of a document pipeline run."""

    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class StepStatus(StrEnum):
    """Status of an individual pipeline step."""

    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    RETRYING = "RETRYING"


class PipelineStage(StrEnum):
    """Stage names used in logs and on raised errors."""

    VALIDATE = "validate"
    RENDER = "render_template"
    RASTERIZE = "rasterize_document"
    PUBLISH = "publish_document"


class RegistrationOrigin(StrEnum):
    """Where an applicant record came from."""

    WEB = "WEB"
    IMPORT = "IMPORT"


PDF_CONTENT_TYPE = "application/pdf"
# Object metadata `source` for the two kinds of upload
PDF_SOURCE_TAG = "hv-pdf"
PHOTO_SOURCE_TAG = "hv-photo"
DEFAULT_COUNTRY = "Colombia"

# Placeholder shown in the résumé when a section has no rows
EMPTY_SECTION_LABEL = "No registrado"
UNSPECIFIED_LABEL = "No especificado"
