"""
Celery tasks — résumé PDF regeneration.

Wires the DocumentPipeline into the Celery task system. The worker
builds its own bucket handle, pipeline and database engine per task
so nothing is shared with the API process's event loop.
"""

import asyncio

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from resume_intake.core.config import settings
from resume_intake.core.logging import is_configured, setup_logging
from resume_intake.intake.service import ApplicantNotFoundError, regenerate_resume
from resume_intake.pipeline.engine import DocumentPipeline
from resume_intake.pipeline.errors import DocumentPipelineError
from resume_intake.tasks import celery_app

logger = structlog.get_logger("tasks.documents")


async def _regenerate(
    identificacion: str,
    pipeline: DocumentPipeline,
    session_factory: async_sessionmaker,
) -> dict:
    """Regenerate inside one transaction and return the task result."""
    async with session_factory() as session:
        async with session.begin():
            artifact = await regenerate_resume(session, pipeline, identificacion)
    return {
        "identificacion": identificacion,
        "status": "COMPLETED",
        **artifact.to_dict(),
    }


async def _regenerate_with_fresh_engine(identificacion: str) -> dict:
    """Run the regeneration against a fresh engine (avoids loop conflicts)."""
    from resume_intake.storage.gcs import create_bucket

    engine = create_async_engine(settings.DATABASE_URL, echo=False)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    pipeline = DocumentPipeline.from_settings(settings, create_bucket(settings))
    try:
        return await _regenerate(identificacion, pipeline, factory)
    finally:
        await engine.dispose()


@celery_app.task(
    bind=True,
    name="resume_intake.tasks.document_tasks.regenerate_resume_pdf",
    max_retries=3,
)
def regenerate_resume_pdf(self, identificacion: str):
    """
    Rebuild and publish the résumé PDF of a stored applicant.

    Transient pipeline failures (browser timeouts/crashes) are retried
    with Celery's countdown; anything else fails the task.
    """
    if not is_configured():
        setup_logging(settings.LOG_LEVEL or "INFO")

    task_log = logger.bind(task_id=self.request.id, identificacion=identificacion)
    task_log.info("Regeneration task started")

    try:
        result = asyncio.run(_regenerate_with_fresh_engine(identificacion))
    except ApplicantNotFoundError:
        task_log.warning("Applicant not found, nothing to regenerate")
        return {"identificacion": identificacion, "status": "NOT_FOUND"}
    except DocumentPipelineError as exc:
        task_log.error(
            "Regeneration failed",
            stage=exc.stage,
            error=str(exc),
            transient=exc.transient,
        )
        if exc.transient:
            raise self.retry(exc=exc)
        raise

    task_log.info("Regeneration task finished", storage_key=result["storage_key"])
    return result
