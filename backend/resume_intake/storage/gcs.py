"""
Google Cloud Storage client factory.

Credentials come from the environment (GOOGLE_APPLICATION_CREDENTIALS,
workload identity, or gcloud ADC).  The client is created once at
application startup and handed to the publisher; nothing here keeps
module-level state.
"""

from __future__ import annotations

from google.cloud import storage

from resume_intake.core.config import Settings
from resume_intake.core.logging import get_logger

logger = get_logger(__name__)


def create_bucket(settings: Settings) -> storage.Bucket:
    """Return a Bucket handle for settings.GCS_BUCKET (no network call)."""
    client = storage.Client(project=settings.GOOGLE_CLOUD_PROJECT or None)
    logger.info(
        "GCS client created",
        bucket=settings.GCS_BUCKET,
        project=client.project,
    )
    return client.bucket(settings.GCS_BUCKET)
