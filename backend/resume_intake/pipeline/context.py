"""
DocumentContext — mutable state object carried through every step.

This is the single source of truth for one render-and-publish run.
Each step reads from and writes to the context: the render step fills
in `html`, the rasterize step fills in `pdf`, the publish step fills in
`artifact`.  Nothing here outlives the request that created it.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from resume_intake.storage.publisher import PublishedArtifact


# ═══════════════════════════════════════════════════════════
#  StepResult
# ═══════════════════════════════════════════════════════════

@dataclass
class StepResult:
    """Outcome of a single pipeline step execution."""

    step_name: str
    status: str                     # StepStatus value
    started_at: datetime | None = None
    completed_at: datetime | None = None
    duration_ms: int = 0
    attempts: int = 1
    error: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "step_name": self.step_name,
            "status": self.status,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "duration_ms": self.duration_ms,
            "attempts": self.attempts,
            "error": self.error,
            "metadata": self.metadata,
        }


# ═══════════════════════════════════════════════════════════
#  DocumentContext
# ═══════════════════════════════════════════════════════════

@dataclass
class DocumentContext:
    """
    Carries all state between pipeline steps.

    `fields` is a private copy of the caller's TemplateContext; steps may
    add defaults to it without touching the caller's mapping.
    """

    # ─── Identity (set at init) ────────────────────────
    subject_id: str
    key_prefix: str = "document"
    run_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    # ─── Inputs ────────────────────────────────────────
    fields: dict[str, Any] = field(default_factory=dict)

    # ─── Stage outputs ─────────────────────────────────
    html: str | None = None
    pdf: bytes | None = None
    artifact: PublishedArtifact | None = None

    # ─── Execution tracking ────────────────────────────
    step_results: list[StepResult] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_warning(self, warning: str) -> None:
        """Record a non-fatal diagnostic."""
        self.warnings.append(warning)

    def to_summary_dict(self) -> dict[str, Any]:
        """Compact summary for logging."""
        return {
            "run_id": self.run_id,
            "subject_id": self.subject_id,
            "key_prefix": self.key_prefix,
            "field_count": len(self.fields),
            "html_length": len(self.html) if self.html else 0,
            "pdf_bytes": len(self.pdf) if self.pdf else 0,
            "storage_key": self.artifact.storage_key if self.artifact else None,
            "steps": [sr.to_dict() for sr in self.step_results],
            "warnings": self.warnings,
        }
