"""
DocumentPipeline — the orchestrator that runs the render/publish stages.

Responsibilities:
    - Validate the subject identifier
    - Default the branding logo when the caller did not supply one
    - Execute render → rasterize → publish strictly in sequence
    - Retry the rasterize step on transient failures (bounded)
    - Log per-step timing and outcome
    - Re-raise the failing stage's own error, enriched with subject/stage

No artifact reference is persisted here; storing the returned URL is the
caller's job.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any

import structlog

from resume_intake.core.config import Settings
from resume_intake.core.constants import PipelineStage, PipelineStatus, StepStatus
from resume_intake.pipeline.context import DocumentContext, StepResult
from resume_intake.pipeline.errors import DocumentPipelineError, ValidationError
from resume_intake.pipeline.step import PipelineStep
from resume_intake.pipeline.steps.publish_document import PublishDocumentStep
from resume_intake.pipeline.steps.rasterize_document import RasterizeDocumentStep
from resume_intake.pipeline.steps.render_template import RenderTemplateStep
from resume_intake.rendering.rasterizer import (
    DocumentRasterizer,
    RasterizerOptions,
    chromium_launcher,
)
from resume_intake.rendering.template import FileTemplate, TemplateRenderer, TemplateSource
from resume_intake.storage.publisher import ObjectStorePublisher, PublishedArtifact

LOGO_FIELD = "LOGO_URL"


class DocumentPipeline:
    """
    Runs the ordered render/rasterize/publish steps for one subject.

    Usage::

        pipeline = DocumentPipeline(
            renderer=TemplateRenderer(),
            template=FileTemplate("templates/cv_template.html"),
            rasterizer=DocumentRasterizer(),
            publisher=ObjectStorePublisher(bucket),
            default_logo_url="https://.../logo.png",
        )
        artifact = await pipeline.generate_and_publish("12345", {"NOMBRE_COMPLETO": "Ana"}, "hoja_vida")
    """

    def __init__(
        self,
        *,
        renderer: TemplateRenderer,
        template: TemplateSource,
        rasterizer: DocumentRasterizer,
        publisher: ObjectStorePublisher,
        default_logo_url: str = "",
        rasterize_attempts: int = 1,
        retry_backoff_seconds: float = 1.0,
    ) -> None:
        self.default_logo_url = default_logo_url
        self.retry_backoff_seconds = retry_backoff_seconds
        self.steps: list[PipelineStep] = [
            RenderTemplateStep(renderer, template),
            RasterizeDocumentStep(rasterizer, max_attempts=rasterize_attempts),
            PublishDocumentStep(publisher),
        ]
        self.logger = structlog.get_logger("pipeline.engine")

    @classmethod
    def from_settings(cls, settings: Settings, bucket) -> DocumentPipeline:
        """Wire the production collaborators from application settings."""
        return cls(
            renderer=TemplateRenderer(),
            template=FileTemplate(settings.PDF_TEMPLATE_PATH),
            rasterizer=DocumentRasterizer(
                launcher=chromium_launcher(no_sandbox=settings.BROWSER_NO_SANDBOX),
                options=RasterizerOptions.from_settings(settings),
            ),
            publisher=ObjectStorePublisher.from_settings(bucket, settings),
            default_logo_url=settings.DEFAULT_LOGO_URL,
            rasterize_attempts=settings.PDF_RENDER_MAX_ATTEMPTS,
            retry_backoff_seconds=settings.PDF_RETRY_BACKOFF_SECONDS,
        )

    async def generate_and_publish(
        self,
        subject_id: str,
        fields: Mapping[str, Any] | None = None,
        key_prefix: str = "document",
    ) -> PublishedArtifact:
        """Render, rasterize and publish; return the published artifact."""
        if not subject_id or not str(subject_id).strip():
            raise ValidationError(
                "Subject identifier is required to generate a document",
                stage=PipelineStage.VALIDATE.value,
            )

        ctx = DocumentContext(
            subject_id=str(subject_id),
            key_prefix=key_prefix,
            fields=dict(fields or {}),
        )
        if not ctx.fields.get(LOGO_FIELD):
            ctx.fields[LOGO_FIELD] = self.default_logo_url

        await self.run_steps(ctx)

        if ctx.artifact is None:
            raise DocumentPipelineError(
                "Pipeline finished without an artifact",
                subject_id=ctx.subject_id,
                stage=PipelineStage.PUBLISH.value,
            )
        return ctx.artifact

    async def run_steps(self, ctx: DocumentContext) -> DocumentContext:
        """
        Execute the steps in order against a context.

        The first failure stops the run and propagates.
        """
        log = self.logger.bind(
            run_id=ctx.run_id,
            subject_id=ctx.subject_id,
            total_steps=len(self.steps),
        )
        log.info("Pipeline started", key_prefix=ctx.key_prefix, field_count=len(ctx.fields))

        for index, step in enumerate(self.steps, start=1):
            step_log = log.bind(step_name=step.name, step_index=index)
            step_log.info(f"Step {index}/{len(self.steps)}: {step.description}")

            try:
                result = await self._execute_with_retry(step, ctx, step_log)
            except DocumentPipelineError as exc:
                exc.enrich(subject_id=ctx.subject_id, stage=step.name)
                step_log.error(
                    "Step failed — pipeline stopping",
                    error=str(exc),
                    error_type=type(exc).__name__,
                )
                log.error("Pipeline finished", status=PipelineStatus.FAILED, summary=ctx.to_summary_dict())
                raise

            ctx.step_results.append(result)
            step_log.info("Step completed", duration_ms=result.duration_ms, metadata=result.metadata)

        log.info("Pipeline finished", status=PipelineStatus.COMPLETED, summary=ctx.to_summary_dict())
        return ctx

    async def _execute_with_retry(
        self,
        step: PipelineStep,
        ctx: DocumentContext,
        log: structlog.typing.FilteringBoundLogger,
    ) -> StepResult:
        """
        Execute a step.  Retryable steps are re-run on transient errors
        up to step.max_attempts; the last error is re-raised unchanged.
        """
        max_attempts = step.max_attempts if step.retryable else 1
        started_at = step._now()

        for attempt in range(1, max_attempts + 1):
            try:
                metadata = await step.execute(ctx)
                return step._success(started_at, metadata=metadata, attempts=attempt)

            except DocumentPipelineError as exc:
                exc.details.setdefault("attempts", attempt)
                if exc.transient and attempt < max_attempts:
                    wait_seconds = self.retry_backoff_seconds * (2 ** (attempt - 1))
                    log.warning(
                        f"Step failed (attempt {attempt}/{max_attempts}), retrying in {wait_seconds}s",
                        error=str(exc),
                        status=StepStatus.RETRYING,
                    )
                    await asyncio.sleep(wait_seconds)
                    continue

                ctx.step_results.append(step._failure(started_at, str(exc), attempts=attempt))
                raise

        # max_attempts is always >= 1, the loop returns or raises
        raise AssertionError("retry loop exited without a result")
