from __future__ import annotations

import pytest
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from structlog.testing import capture_logs

from resume_intake.core.constants import PipelineStage, StepStatus
from resume_intake.pipeline.context import DocumentContext
from resume_intake.pipeline.errors import (
    EmptyDocumentError,
    RenderFailureError,
    RenderTimeoutError,
    TemplateReadError,
    UploadError,
    ValidationError,
)
from resume_intake.rendering.template import FileTemplate, InlineTemplate


@pytest.mark.asyncio
async def test_end_to_end_publishes_rendered_document(make_pipeline, fake_bucket, fake_launcher) -> None:
    pipeline = make_pipeline(launcher=fake_launcher)

    artifact = await pipeline.generate_and_publish(
        "1020304050", {"NOMBRE_COMPLETO": "Ana Gómez", "IDENTIFICACION": "1020304050"}, "hoja_vida"
    )

    assert artifact.storage_key.startswith("1020304050/hoja_vida_")
    assert artifact.storage_key.endswith(".pdf")
    assert artifact.size_bytes == len(fake_bucket.uploads[0].data)
    assert fake_bucket.keys == [artifact.storage_key]

    html = fake_launcher.browsers[0].pages[0].content
    assert "<h1>Ana Gómez</h1>" in html
    assert "onerror" not in html
    assert fake_launcher.close_count == 1


@pytest.mark.asyncio
async def test_default_logo_is_injected_without_touching_caller_fields(make_pipeline, fake_launcher) -> None:
    fields = {"NOMBRE_COMPLETO": "Ana", "LOGO_URL": ""}
    pipeline = make_pipeline(launcher=fake_launcher)

    await pipeline.generate_and_publish("123", fields)

    assert 'src="https://cdn.example/logo.png"' in fake_launcher.browsers[0].pages[0].content
    assert fields == {"NOMBRE_COMPLETO": "Ana", "LOGO_URL": ""}


@pytest.mark.asyncio
async def test_caller_logo_wins_over_default(make_pipeline, fake_launcher) -> None:
    pipeline = make_pipeline(launcher=fake_launcher)

    await pipeline.generate_and_publish("123", {"LOGO_URL": "https://brand.example/x.png"})

    assert 'src="https://brand.example/x.png"' in fake_launcher.browsers[0].pages[0].content


@pytest.mark.asyncio
async def test_default_key_prefix_is_document(make_pipeline) -> None:
    artifact = await make_pipeline().generate_and_publish("123", {})

    assert artifact.storage_key.startswith("123/document_")


@pytest.mark.asyncio
@pytest.mark.parametrize("subject_id", ["", "  "])
async def test_empty_subject_fails_before_any_stage(make_pipeline, fake_launcher, fake_bucket, subject_id) -> None:
    pipeline = make_pipeline(launcher=fake_launcher)

    with pytest.raises(ValidationError) as exc_info:
        await pipeline.generate_and_publish(subject_id, {"NOMBRE_COMPLETO": "Ana"})

    assert exc_info.value.stage == PipelineStage.VALIDATE
    assert fake_launcher.launch_count == 0
    assert fake_bucket.uploads == []


@pytest.mark.asyncio
async def test_template_failure_is_enriched_and_stops_the_run(make_pipeline, fake_launcher, fake_bucket, tmp_path) -> None:
    pipeline = make_pipeline(template=FileTemplate(tmp_path / "missing.html"), launcher=fake_launcher)

    with pytest.raises(TemplateReadError) as exc_info:
        await pipeline.generate_and_publish("123", {})

    assert exc_info.value.subject_id == "123"
    assert exc_info.value.stage == PipelineStage.RENDER
    assert fake_launcher.launch_count == 0
    assert fake_bucket.uploads == []


@pytest.mark.asyncio
async def test_empty_render_is_reported_from_render_stage(make_pipeline) -> None:
    pipeline = make_pipeline(template=InlineTemplate("{{ BODY }}"))

    with pytest.raises(EmptyDocumentError) as exc_info:
        await pipeline.generate_and_publish("123", {"BODY": ""})

    assert exc_info.value.stage == PipelineStage.RENDER


@pytest.mark.asyncio
async def test_transient_rasterize_failure_is_retried(make_pipeline, make_launcher, fake_bucket) -> None:
    def first_launch_times_out(browser, launch_number):
        if launch_number == 1:
            browser.set_content_error = PlaywrightTimeoutError("Timeout exceeded")

    launcher = make_launcher(first_launch_times_out)
    pipeline = make_pipeline(launcher=launcher, rasterize_attempts=2)

    artifact = await pipeline.generate_and_publish("123", {})

    assert launcher.launch_count == 2
    assert launcher.close_count == 2
    assert fake_bucket.keys == [artifact.storage_key]


@pytest.mark.asyncio
async def test_retry_budget_is_bounded(make_pipeline, make_launcher, fake_bucket) -> None:
    def always_times_out(browser, _):
        browser.set_content_error = PlaywrightTimeoutError("Timeout exceeded")

    launcher = make_launcher(always_times_out)
    pipeline = make_pipeline(launcher=launcher, rasterize_attempts=3)

    with pytest.raises(RenderTimeoutError) as exc_info:
        await pipeline.generate_and_publish("123", {})

    assert launcher.launch_count == 3
    assert launcher.close_count == 3
    assert exc_info.value.stage == PipelineStage.RASTERIZE
    assert exc_info.value.subject_id == "123"
    assert exc_info.value.details["attempts"] == 3
    assert fake_bucket.uploads == []


@pytest.mark.asyncio
async def test_publish_failure_is_not_retried(make_pipeline, fake_launcher, fake_bucket) -> None:
    fake_bucket.upload_error = ConnectionError("bucket unreachable")
    pipeline = make_pipeline(launcher=fake_launcher, rasterize_attempts=3)

    with pytest.raises(UploadError) as exc_info:
        await pipeline.generate_and_publish("123", {})

    assert exc_info.value.stage == PipelineStage.PUBLISH
    assert fake_launcher.launch_count == 1


@pytest.mark.asyncio
async def test_step_results_and_warnings_are_recorded(make_pipeline, fake_bucket) -> None:
    fake_bucket.sign_error = RuntimeError("no signing key")
    pipeline = make_pipeline(template=InlineTemplate("<p>{{ NOMBRE }} {{ MISSING }}</p>"))
    ctx = DocumentContext(subject_id="123", fields={"NOMBRE": "Ana"})

    await pipeline.run_steps(ctx)

    assert [r.step_name for r in ctx.step_results] == [
        PipelineStage.RENDER,
        PipelineStage.RASTERIZE,
        PipelineStage.PUBLISH,
    ]
    assert all(r.status == StepStatus.COMPLETED for r in ctx.step_results)
    assert ctx.step_results[0].metadata["unresolved"] == ["MISSING"]
    assert ctx.artifact is not None and ctx.artifact.signed is False
    assert any("MISSING" in w for w in ctx.warnings)
    assert any("public URL" in w for w in ctx.warnings)


@pytest.mark.asyncio
async def test_failed_step_records_failure_result(make_pipeline, make_launcher) -> None:
    def crash(browser, _):
        browser.pdf_error = RuntimeError("renderer crashed")

    pipeline = make_pipeline(launcher=make_launcher(crash), rasterize_attempts=1)
    ctx = DocumentContext(subject_id="123")

    with pytest.raises(RenderFailureError):
        await pipeline.run_steps(ctx)

    assert [r.status for r in ctx.step_results] == [StepStatus.COMPLETED, StepStatus.FAILED]
    assert "renderer crashed" in ctx.step_results[-1].error


@pytest.mark.asyncio
async def test_finished_log_carries_run_summary(make_pipeline, fake_launcher) -> None:
    pipeline = make_pipeline(launcher=fake_launcher)
    ctx = DocumentContext(subject_id="123", key_prefix="hoja_vida", fields={"NOMBRE_COMPLETO": "Ana"})

    with capture_logs() as logs:
        await pipeline.run_steps(ctx)

    finished = [e for e in logs if e["event"] == "Pipeline finished"]
    assert len(finished) == 1
    summary = finished[0]["summary"]
    assert finished[0]["status"] == "COMPLETED"
    assert summary == ctx.to_summary_dict()
    assert summary["storage_key"] == ctx.artifact.storage_key
    assert summary["pdf_bytes"] > 0
    assert [s["status"] for s in summary["steps"]] == ["COMPLETED"] * 3
    assert summary["steps"][1]["step_name"] == "rasterize_document"


@pytest.mark.asyncio
async def test_failed_run_logs_summary_with_failed_step(make_pipeline, fake_bucket) -> None:
    fake_bucket.upload_error = ConnectionError("bucket unreachable")
    ctx = DocumentContext(subject_id="123")

    with capture_logs() as logs, pytest.raises(UploadError):
        await make_pipeline().run_steps(ctx)

    finished = [e for e in logs if e["event"] == "Pipeline finished"]
    assert finished[0]["status"] == "FAILED"
    assert finished[0]["summary"]["storage_key"] is None
    assert finished[0]["summary"]["steps"][-1]["status"] == "FAILED"

def test_error_enrich_keeps_values_set_by_the_raiser() -> None:
    exc = UploadError("boom", subject_id="original", stage=None)

    exc.enrich(subject_id="other", stage="publish_document")

    assert exc.subject_id == "original"
    assert exc.stage == "publish_document"
    assert exc.to_dict()["error"] == "UploadError"
