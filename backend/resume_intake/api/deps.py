"""Shared dependencies for API routes."""

from __future__ import annotations

from typing import AsyncGenerator

from fastapi import HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from resume_intake.db.session import get_db as _get_db
from resume_intake.pipeline.engine import DocumentPipeline
from resume_intake.storage.publisher import ObjectStorePublisher


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async DB session."""
    async for session in _get_db():
        yield session


def get_document_pipeline(request: Request) -> DocumentPipeline:
    """The pipeline built once in the application lifespan."""
    pipeline = getattr(request.app.state, "document_pipeline", None)
    if pipeline is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Document pipeline is not configured",
        )
    return pipeline


def get_publisher(request: Request) -> ObjectStorePublisher:
    """Object store publisher shared with the pipeline."""
    publisher = getattr(request.app.state, "publisher", None)
    if publisher is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Object storage is not configured",
        )
    return publisher
