"""
RenderTemplateStep — fills the HTML template with the context fields.
"""

from __future__ import annotations

from typing import Any

from resume_intake.core.constants import PipelineStage
from resume_intake.pipeline.context import DocumentContext
from resume_intake.pipeline.step import PipelineStep
from resume_intake.rendering.template import TemplateRenderer, TemplateSource


class RenderTemplateStep(PipelineStep):
    """Load the template and substitute ``{{ KEY }}`` placeholders."""

    name = PipelineStage.RENDER.value
    description = "Render HTML from template"

    def __init__(self, renderer: TemplateRenderer, template: TemplateSource) -> None:
        self._renderer = renderer
        self._template = template

    async def execute(self, ctx: DocumentContext) -> dict[str, Any]:
        result = await self._renderer.render_document(self._template, ctx.fields)
        ctx.html = result.html

        if result.unresolved:
            ctx.add_warning(
                f"{len(result.unresolved)} unresolved placeholder(s): {', '.join(result.unresolved)}"
            )

        return {"template": self._template.name, **result.to_metadata()}
