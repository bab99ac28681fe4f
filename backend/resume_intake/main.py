"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from resume_intake.api.v1 import applicants, documents, lookups
from resume_intake.core.config import settings
from resume_intake.core.logging import get_logger, setup_logging
from resume_intake.pipeline.engine import DocumentPipeline
from resume_intake.storage.gcs import create_bucket
from resume_intake.storage.publisher import ObjectStorePublisher


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle hooks."""
    setup_logging(settings.LOG_LEVEL or ("DEBUG" if settings.APP_ENV == "development" else "INFO"))
    logger = get_logger("startup")

    bucket = create_bucket(settings)
    app.state.publisher = ObjectStorePublisher.from_settings(bucket, settings)
    app.state.document_pipeline = DocumentPipeline.from_settings(settings, bucket)
    logger.info(
        "Application starting",
        env=settings.APP_ENV,
        bucket=settings.GCS_BUCKET,
        template=settings.PDF_TEMPLATE_PATH,
    )
    yield
    logger.info("Application shutting down")


app = FastAPI(
    title="Résumé Intake API",
    description="Applicant registration with résumé PDF generation",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

API_PREFIX = "/api"
app.include_router(lookups.router, prefix=API_PREFIX)
app.include_router(applicants.router, prefix=API_PREFIX)
app.include_router(documents.router, prefix=API_PREFIX)


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Public health-check endpoint."""
    return {"status": "ok", "env": settings.APP_ENV}
