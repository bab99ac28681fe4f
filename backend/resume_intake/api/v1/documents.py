"""Résumé document endpoints — asynchronous regeneration."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from resume_intake.api.deps import get_db
from resume_intake.api.schemas.applicant import RegenerationResponse
from resume_intake.repositories import applicants as applicant_repository

router = APIRouter(prefix="/hv", tags=["Documents"])


@router.post(
    "/{identificacion}/pdf",
    response_model=RegenerationResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def regenerate_pdf(
    identificacion: str,
    db: AsyncSession = Depends(get_db),
) -> RegenerationResponse:
    """
    Queue a rebuild of the applicant's résumé PDF.

    Returns instantly with the Celery task id; the worker stores the new
    reference on the applicant when it finishes.
    """
    from resume_intake.tasks.document_tasks import regenerate_resume_pdf

    applicant = await applicant_repository.get_by_identificacion(db, identificacion, with_relations=False)
    if applicant is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Aspirante no encontrado")

    task = regenerate_resume_pdf.delay(applicant.identificacion)
    return RegenerationResponse(
        message="Regeneración de PDF en cola",
        task_id=str(task.id),
        status="PENDING",
    )
