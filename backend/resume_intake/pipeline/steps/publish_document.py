"""
PublishDocumentStep — uploads the PDF and resolves its access URL.
"""

from __future__ import annotations

from typing import Any

from resume_intake.core.constants import PipelineStage
from resume_intake.pipeline.context import DocumentContext
from resume_intake.pipeline.errors import UploadError
from resume_intake.pipeline.step import PipelineStep
from resume_intake.storage.publisher import ObjectStorePublisher


class PublishDocumentStep(PipelineStep):
    """Write the PDF to object storage under a fresh key."""

    name = PipelineStage.PUBLISH.value
    description = "Upload PDF to object storage"

    def __init__(self, publisher: ObjectStorePublisher) -> None:
        self._publisher = publisher

    async def execute(self, ctx: DocumentContext) -> dict[str, Any]:
        if not ctx.pdf:
            raise UploadError("No PDF bytes on the context")

        artifact = await self._publisher.publish(ctx.pdf, ctx.subject_id, ctx.key_prefix)
        ctx.artifact = artifact

        if not artifact.signed:
            ctx.add_warning("Signed URL unavailable, returned public URL")

        return {
            "storage_key": artifact.storage_key,
            "size_bytes": artifact.size_bytes,
            "signed": artifact.signed,
        }
