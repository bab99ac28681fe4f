"""
TemplateRenderer — fills a placeholder-based HTML document.

Placeholders have the literal form ``{{ NAME }}`` (whitespace inside the
braces is ignored, names match ``[A-Za-z_]+`` and are case-sensitive).
Substitution is plain text replacement in a single pass: no conditionals,
no loops and no escaping beyond what the caller already applied.

Before substitution every ``onerror=...`` attribute is stripped, since
inline error handlers on ``<img>`` tags can run script or stall the
headless browser that prints the document.

Usage::

    renderer = TemplateRenderer()
    html = await renderer.render(FileTemplate("templates/cv_template.html"), {"NOMBRE_COMPLETO": "Ana"})
"""

from __future__ import annotations

import asyncio
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Protocol

from resume_intake.core.logging import get_logger
from resume_intake.pipeline.errors import EmptyDocumentError, TemplateReadError

logger = get_logger(__name__)

PLACEHOLDER_RE = re.compile(r"\{\{\s*([A-Za-z_]+)\s*\}\}")
_ATTR_VALUE = r"""(?:"[^"]*"|'[^']*'|[^\s>]+)"""
ATTRIBUTE_RE = re.compile(rf"""\s+([^\s"'=/>]+)(?:\s*=\s*{_ATTR_VALUE})?""")
# Quoted attribute values are consumed whole, so text inside them is never an attribute
START_TAG_RE = re.compile(
    rf"""<([A-Za-z][^\s/>]*)((?:\s+[^\s"'=/>]+(?:\s*=\s*{_ATTR_VALUE})?)*)(\s*/?>)"""
)


# ═══════════════════════════════════════════════════════════
#  Template sources
# ═══════════════════════════════════════════════════════════

class TemplateSource(Protocol):
    """Anything that can hand back raw template text."""

    name: str

    async def load(self) -> str: ...


@dataclass(frozen=True)
class FileTemplate:
    """Template stored on the local filesystem (UTF-8)."""

    path: str | Path

    @property
    def name(self) -> str:
        return str(self.path)

    async def load(self) -> str:
        try:
            return await asyncio.to_thread(Path(self.path).read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise TemplateReadError(
                f"Template not readable: {self.path}",
                details={"path": str(self.path), "reason": str(exc)},
            ) from exc


@dataclass(frozen=True)
class InlineTemplate:
    """Template held in memory (tests, previews)."""

    text: str
    name: str = "<inline>"

    async def load(self) -> str:
        return self.text


# ═══════════════════════════════════════════════════════════
#  Result
# ═══════════════════════════════════════════════════════════

@dataclass
class RenderResult:
    """Substituted document plus diagnostics."""

    html: str
    substitutions: int = 0
    unresolved: list[str] = field(default_factory=list)    # placeholders left in the output
    unused_keys: list[str] = field(default_factory=list)   # context keys the template never used
    stripped_handlers: int = 0

    def to_metadata(self) -> dict[str, Any]:
        return {
            "html_length": len(self.html),
            "substitutions": self.substitutions,
            "unresolved_count": len(self.unresolved),
            "unresolved": self.unresolved,
            "unused_keys": self.unused_keys,
            "stripped_handlers": self.stripped_handlers,
        }


# ═══════════════════════════════════════════════════════════
#  Renderer
# ═══════════════════════════════════════════════════════════

def stringify(value: Any) -> str:
    """None becomes empty text, everything else goes through str()."""
    return "" if value is None else str(value)


def strip_error_handlers(raw: str) -> tuple[str, int]:
    """Remove inline onerror attributes from start tags. Returns (text, removed_count)."""
    removed = 0

    def _drop_handler(attr: re.Match) -> str:
        nonlocal removed
        if attr.group(1).lower() == "onerror":
            removed += 1
            return ""
        return attr.group(0)

    def _clean_tag(tag: re.Match) -> str:
        attrs = tag.group(2)
        if "onerror" not in attrs.lower():
            return tag.group(0)
        return f"<{tag.group(1)}{ATTRIBUTE_RE.sub(_drop_handler, attrs)}{tag.group(3)}"

    return START_TAG_RE.sub(_clean_tag, raw), removed


class TemplateRenderer:
    """Loads a template and substitutes ``{{ KEY }}`` placeholders."""

    def substitute(self, raw: str, context: Mapping[str, Any]) -> RenderResult:
        """Pure part of rendering: sanitize, then replace known placeholders."""
        text, stripped = strip_error_handlers(raw)

        seen: set[str] = set()
        unresolved: list[str] = []
        substitutions = 0

        def _replace(match: re.Match) -> str:
            nonlocal substitutions
            key = match.group(1)
            seen.add(key)
            if key in context:
                substitutions += 1
                return stringify(context[key])
            if key not in unresolved:
                unresolved.append(key)
            return match.group(0)

        html = PLACEHOLDER_RE.sub(_replace, text)

        if not html.strip():
            raise EmptyDocumentError("Rendered document is empty")

        return RenderResult(
            html=html,
            substitutions=substitutions,
            unresolved=unresolved,
            unused_keys=sorted(k for k in context if k not in seen),
            stripped_handlers=stripped,
        )

    async def render_document(self, source: TemplateSource, context: Mapping[str, Any]) -> RenderResult:
        """Load `source` and substitute `context` into it, with diagnostics."""
        raw = await source.load()
        try:
            result = self.substitute(raw, context)
        except EmptyDocumentError as exc:
            exc.details.setdefault("template", source.name)
            raise

        if result.unresolved:
            logger.warning(
                "Unresolved placeholders left in document",
                template=source.name,
                unresolved=result.unresolved,
            )
        logger.debug("Template rendered", template=source.name, **result.to_metadata())
        return result

    async def render(self, source: TemplateSource, context: Mapping[str, Any]) -> str:
        """Render and return only the HTML text."""
        result = await self.render_document(source, context)
        return result.html
