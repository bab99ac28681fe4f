"""
Applicant endpoints — lookup by identification, photo upload and
résumé registration.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from resume_intake.api.deps import get_db, get_document_pipeline, get_publisher
from resume_intake.api.schemas.applicant import (
    PhotoUploadResponse,
    RegistrationRequest,
    RegistrationResponse,
)
from resume_intake.core.config import settings
from resume_intake.core.logging import get_logger
from resume_intake.intake.payload import applicant_to_response
from resume_intake.intake.service import register_applicant
from resume_intake.pipeline.engine import DocumentPipeline
from resume_intake.pipeline.errors import DocumentPipelineError
from resume_intake.repositories import applicants as applicant_repository
from resume_intake.storage.publisher import ObjectStorePublisher

logger = get_logger(__name__)

router = APIRouter(tags=["Applicants"])


@router.get("/aspirante")
async def get_applicant(
    identificacion: str | None = Query(default=None),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """Return the stored applicant with every section, or `{"existe": false}`."""
    if not identificacion or not identificacion.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Falta la identificación",
        )

    applicant = await applicant_repository.get_by_identificacion(db, identificacion)
    if applicant is None:
        return {"existe": False}
    return applicant_to_response(applicant)


@router.post("/hv/upload-photo", response_model=PhotoUploadResponse)
async def upload_photo(
    identificacion: str = Form(...),
    photo: UploadFile = File(...),
    db: AsyncSession = Depends(get_db),
    publisher: ObjectStorePublisher = Depends(get_publisher),
) -> PhotoUploadResponse | JSONResponse:
    """
    Upload the applicant's photo.

    The reference is stored on the applicant when it already exists;
    new applicants send it back inside the registration payload.
    """
    if not identificacion.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Falta la identificación")

    data = await photo.read(settings.PHOTO_MAX_BYTES + 1)
    if len(data) > settings.PHOTO_MAX_BYTES:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"La foto supera el máximo de {settings.PHOTO_MAX_BYTES} bytes",
        )
    if not data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No se recibió ningún archivo")

    try:
        artifact = await publisher.publish_file(
            data,
            identificacion.strip(),
            photo.filename or "photo",
            content_type=photo.content_type,
        )
    except DocumentPipelineError as exc:
        logger.error("Photo upload failed", identificacion=identificacion, error=str(exc))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"ok": False, "error": "Error subiendo archivo a storage"},
        )

    stored = await applicant_repository.set_photo(
        db,
        identificacion,
        gcs_path=artifact.storage_key,
        public_url=artifact.access_url,
    )
    logger.info(
        "Photo uploaded",
        identificacion=identificacion,
        storage_key=artifact.storage_key,
        signed=artifact.signed,
        linked_to_applicant=stored,
    )

    return PhotoUploadResponse(
        ok=True,
        foto_gcs_path=artifact.storage_key,
        foto_public_url=artifact.access_url,
        message="Signed URL generada" if artifact.signed else "Archivo subido; fallback a URL pública",
    )


@router.post("/hv/registrar", response_model=RegistrationResponse, response_model_exclude_unset=True)
async def register(
    body: RegistrationRequest,
    db: AsyncSession = Depends(get_db),
    pipeline: DocumentPipeline = Depends(get_document_pipeline),
) -> dict[str, Any]:
    """
    Register (or update) an applicant.

    1. Builds the résumé fields from the payload
    2. Renders and publishes the résumé PDF (failures become a warning)
    3. Upserts the applicant and replaces every section
    """
    outcome = await register_applicant(db, pipeline, body.model_dump())
    # Commit happens automatically via get_db dependency
    return outcome.to_response()
