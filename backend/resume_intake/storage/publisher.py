"""
ObjectStorePublisher — uploads rendered documents and photos to GCS.

Keys are namespaced by the subject (applicant identification):

    <subject_id>/<prefix>_<unix_millis>.pdf     (documents)
    <subject_id>/<unix_millis>_<safe_name>      (photos)

After the write a v4 signed GET URL is requested.  Signing needs
service-account key material that not every deployment has, so any
signing failure falls back to the public URL
``https://<host>/<bucket>/<key>`` with a warning instead of failing.

The bucket is injected: production passes a
``google.cloud.storage.Bucket``, tests pass a fake with the same
``name`` / ``blob(key)`` surface.
"""

from __future__ import annotations

import asyncio
import re
import threading
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from resume_intake.core.config import Settings
from resume_intake.core.constants import PDF_CONTENT_TYPE, PDF_SOURCE_TAG, PHOTO_SOURCE_TAG
from resume_intake.core.logging import get_logger
from resume_intake.pipeline.errors import UploadError, ValidationError

logger = get_logger(__name__)

_UNSAFE_CHARS_RE = re.compile(r"[^a-zA-Z0-9_\-.]")
_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class PublishedArtifact:
    """Result envelope handed back to callers."""

    storage_key: str
    access_url: str
    size_bytes: int
    signed: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "storage_key": self.storage_key,
            "access_url": self.access_url,
            "size_bytes": self.size_bytes,
            "signed": self.signed,
        }


class MonotonicMillisClock:
    """
    Wall-clock milliseconds that never repeat within one instance.

    Two calls landing in the same millisecond get consecutive values,
    so sequential keys for the same subject and prefix cannot collide.
    """

    def __init__(self, source=time.time) -> None:
        self._source = source
        self._last = 0
        self._lock = threading.Lock()

    def now_ms(self) -> int:
        with self._lock:
            current = int(self._source() * 1000)
            if current <= self._last:
                current = self._last + 1
            self._last = current
            return current


def safe_filename(name: str) -> str:
    """Spaces → underscores, then drop anything outside [A-Za-z0-9_.-]."""
    return _UNSAFE_CHARS_RE.sub("", _WHITESPACE_RE.sub("_", name or ""))


class ObjectStorePublisher:
    """Writes bytes to the bucket and produces an access URL."""

    def __init__(
        self,
        bucket,
        *,
        public_host: str = "storage.googleapis.com",
        signed_url_ttl_ms: int = 7 * 24 * 60 * 60 * 1000,
        clock: MonotonicMillisClock | None = None,
    ) -> None:
        self._bucket = bucket
        self._public_host = public_host
        self._signed_url_ttl = timedelta(milliseconds=signed_url_ttl_ms)
        self._clock = clock or MonotonicMillisClock()

    @classmethod
    def from_settings(cls, bucket, settings: Settings) -> ObjectStorePublisher:
        return cls(
            bucket,
            public_host=settings.STORAGE_PUBLIC_HOST,
            signed_url_ttl_ms=settings.SIGNED_URL_EXPIRES_MS,
        )

    @property
    def bucket_name(self) -> str:
        return self._bucket.name

    # ─── Public API ───────────────────────────────────────

    def document_key(self, subject_id: str, key_prefix: str) -> str:
        return f"{subject_id}/{key_prefix}_{self._clock.now_ms()}.pdf"

    def public_url(self, storage_key: str) -> str:
        return f"https://{self._public_host}/{self.bucket_name}/{storage_key}"

    async def publish(self, data: bytes, subject_id: str, key_prefix: str = "document") -> PublishedArtifact:
        """Upload a PDF under a fresh key and return its access URL."""
        _require_subject(subject_id)
        storage_key = self.document_key(subject_id, key_prefix)
        return await self._publish(
            data,
            storage_key,
            content_type=PDF_CONTENT_TYPE,
            subject_id=subject_id,
            source=PDF_SOURCE_TAG,
        )

    async def publish_file(
        self,
        data: bytes,
        subject_id: str,
        filename: str,
        content_type: str | None = None,
    ) -> PublishedArtifact:
        """Upload an arbitrary file (profile photo) under the subject prefix."""
        _require_subject(subject_id)
        storage_key = f"{subject_id}/{self._clock.now_ms()}_{safe_filename(filename)}"
        return await self._publish(
            data,
            storage_key,
            content_type=content_type or "application/octet-stream",
            subject_id=subject_id,
            source=PHOTO_SOURCE_TAG,
        )

    # ─── Internals ────────────────────────────────────────

    async def _publish(
        self,
        data: bytes,
        storage_key: str,
        *,
        content_type: str,
        subject_id: str,
        source: str,
    ) -> PublishedArtifact:
        log = logger.bind(storage_key=storage_key, bucket=self.bucket_name)

        if not data:
            raise UploadError(
                "Refusing to write an empty object",
                subject_id=subject_id,
                details={"storage_key": storage_key},
            )

        blob = self._bucket.blob(storage_key)
        blob.metadata = {
            "created_at": datetime.now(timezone.utc).isoformat(),
            "subject_id": subject_id,
            "source": source,
        }

        log.info("Uploading object", size_bytes=len(data), content_type=content_type)
        try:
            # Single-shot (non-resumable) upload
            await asyncio.to_thread(blob.upload_from_string, data, content_type=content_type)
        except Exception as exc:
            log.error("Object upload failed", error=str(exc))
            raise UploadError(
                f"Upload failed for {storage_key}: {exc}",
                subject_id=subject_id,
                details={"storage_key": storage_key},
            ) from exc

        if getattr(blob, "size", None) == 0:
            raise UploadError(
                f"Store reported a zero-byte object for {storage_key}",
                subject_id=subject_id,
                details={"storage_key": storage_key},
            )

        access_url, signed = await self._access_url(blob, storage_key, log)
        log.info("Object published", signed=signed)

        return PublishedArtifact(
            storage_key=storage_key,
            access_url=access_url,
            size_bytes=len(data),
            signed=signed,
        )

    async def _access_url(self, blob, storage_key: str, log) -> tuple[str, bool]:
        """Signed URL when possible, public URL otherwise. Never raises."""
        try:
            url = await asyncio.to_thread(
                blob.generate_signed_url,
                version="v4",
                expiration=self._signed_url_ttl,
                method="GET",
            )
            if url:
                return url, True
            log.warning("Signed URL came back empty, using public URL")
        except Exception as exc:
            log.warning("Signed URL generation failed, using public URL", error=str(exc))
        return self.public_url(storage_key), False


def _require_subject(subject_id: str) -> None:
    if not subject_id or not str(subject_id).strip():
        raise ValidationError("Subject identifier is required to publish a document")
