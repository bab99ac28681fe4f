"""
RasterizeDocumentStep — prints the rendered HTML to PDF bytes.

This is the only stage with real latency and a real failure surface
(browser crashes, navigation failures, timeouts), so it is the only
retryable one.
"""

from __future__ import annotations

from typing import Any

from resume_intake.core.constants import PipelineStage
from resume_intake.pipeline.context import DocumentContext
from resume_intake.pipeline.errors import EmptyInputError
from resume_intake.pipeline.step import PipelineStep
from resume_intake.rendering.rasterizer import DocumentRasterizer


class RasterizeDocumentStep(PipelineStep):
    """Headless-browser HTML → PDF."""

    name = PipelineStage.RASTERIZE.value
    description = "Rasterize HTML to PDF"
    retryable = True

    def __init__(self, rasterizer: DocumentRasterizer, max_attempts: int = 1) -> None:
        self._rasterizer = rasterizer
        self.max_attempts = max(1, max_attempts)

    async def execute(self, ctx: DocumentContext) -> dict[str, Any]:
        if ctx.html is None:
            raise EmptyInputError("No rendered HTML on the context")

        ctx.pdf = await self._rasterizer.rasterize(ctx.html)

        return {
            "pdf_bytes": len(ctx.pdf),
            "page_format": self._rasterizer.options.page_format,
        }
