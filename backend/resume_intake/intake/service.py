"""
Registration flow — the business logic behind POST /api/hv/registrar and
the background regeneration task.

The résumé PDF is generated *before* the applicant is stored so the row
carries the document reference. A failed generation never blocks the
registration: the applicant is saved without a PDF and the response
carries a warning.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from resume_intake.core.config import settings
from resume_intake.core.logging import get_logger
from resume_intake.db.models import Applicant
from resume_intake.intake.payload import applicant_to_payload
from resume_intake.pipeline.engine import DocumentPipeline
from resume_intake.pipeline.errors import DocumentPipelineError
from resume_intake.rendering.resume_fields import build_resume_fields
from resume_intake.repositories import applicants as applicant_repository
from resume_intake.storage.publisher import PublishedArtifact

logger = get_logger(__name__)

REGISTERED_MESSAGE = "Hoja de vida registrada correctamente"
PDF_WARNING = "El PDF no se pudo generar, pero los datos fueron guardados correctamente"


class ApplicantNotFoundError(LookupError):
    """No applicant is stored under the given identification."""


@dataclass
class RegistrationOutcome:
    applicant: Applicant
    artifact: PublishedArtifact | None
    counts: dict[str, int]
    pdf_error: str | None = None

    @property
    def pdf_generated(self) -> bool:
        return self.artifact is not None

    def to_response(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "ok": True,
            "success": True,
            "message": REGISTERED_MESSAGE,
            "id_aspirante": self.applicant.id_aspirante,
            "pdf_url": self.artifact.access_url if self.artifact else None,
            "pdf_generated": self.pdf_generated,
        }
        if not self.pdf_generated:
            body["warning"] = PDF_WARNING
        return body


async def generate_resume(
    pipeline: DocumentPipeline,
    payload: Mapping[str, Any],
) -> tuple[PublishedArtifact | None, str | None]:
    """
    Run the document pipeline for a registration payload.

    Returns (artifact, None) on success and (None, error message) when any
    stage failed.
    """
    identificacion = str(payload.get("identificacion") or "")
    fields = build_resume_fields(payload)
    try:
        artifact = await pipeline.generate_and_publish(
            identificacion, fields, settings.PDF_KEY_PREFIX
        )
    except DocumentPipelineError as exc:
        logger.warning(
            "Résumé PDF not generated",
            identificacion=identificacion,
            stage=exc.stage,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return None, str(exc)
    return artifact, None


async def register_applicant(
    db: AsyncSession,
    pipeline: DocumentPipeline,
    payload: Mapping[str, Any],
) -> RegistrationOutcome:
    """Generate the résumé PDF, then upsert the applicant with its reference."""
    log = logger.bind(identificacion=payload.get("identificacion"))
    log.info("Registering applicant")

    artifact, pdf_error = await generate_resume(pipeline, payload)

    applicant, counts = await applicant_repository.upsert_applicant(
        db,
        payload,
        pdf_gcs_path=artifact.storage_key if artifact else None,
        pdf_public_url=artifact.access_url if artifact else None,
    )
    log.info(
        "Applicant registered",
        id_aspirante=applicant.id_aspirante,
        pdf_generated=artifact is not None,
        **counts,
    )
    return RegistrationOutcome(applicant=applicant, artifact=artifact, counts=counts, pdf_error=pdf_error)


async def regenerate_resume(
    db: AsyncSession,
    pipeline: DocumentPipeline,
    identificacion: str,
) -> PublishedArtifact:
    """
    Re-render the résumé of a stored applicant and store the new reference.

    Pipeline errors propagate so the caller (a Celery task) can retry.
    """
    applicant = await applicant_repository.get_by_identificacion(db, identificacion)
    if applicant is None:
        raise ApplicantNotFoundError(identificacion)

    payload = applicant_to_payload(applicant)
    artifact = await pipeline.generate_and_publish(
        applicant.identificacion,
        build_resume_fields(payload),
        settings.PDF_KEY_PREFIX,
    )
    await applicant_repository.set_pdf(
        db, applicant, gcs_path=artifact.storage_key, public_url=artifact.access_url
    )
    logger.info(
        "Résumé regenerated",
        identificacion=applicant.identificacion,
        storage_key=artifact.storage_key,
    )
    return artifact
