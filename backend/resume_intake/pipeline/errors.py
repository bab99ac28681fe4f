"""
Domain-specific exception hierarchy for the document pipeline.

All pipeline exceptions inherit from DocumentPipelineError so callers can
catch broadly or narrowly as needed.  Each exception carries structured
context (subject ID, failing stage, details) for logging/debugging.
"""

from __future__ import annotations


class DocumentPipelineError(Exception):
    """Base exception for all document pipeline errors."""

    # Transient errors may be retried by the pipeline engine
    transient: bool = False

    def __init__(
        self,
        message: str,
        *,
        subject_id: str | None = None,
        stage: str | None = None,
        details: dict | None = None,
    ) -> None:
        self.subject_id = subject_id
        self.stage = stage
        self.details = details or {}
        super().__init__(message)

    def enrich(self, *, subject_id: str | None = None, stage: str | None = None) -> DocumentPipelineError:
        """Attach run context without replacing what the raiser already set."""
        if self.subject_id is None:
            self.subject_id = subject_id
        if self.stage is None:
            self.stage = stage
        return self

    def to_dict(self) -> dict:
        return {
            "error": type(self).__name__,
            "message": str(self),
            "subject_id": self.subject_id,
            "stage": self.stage,
            "details": self.details,
        }


class ValidationError(DocumentPipelineError):
    """Required input is missing (e.g. empty subject identifier)."""
    pass


class TemplateReadError(DocumentPipelineError):
    """The template resource could not be loaded."""
    pass


class EmptyDocumentError(DocumentPipelineError):
    """Template substitution produced an empty document."""
    pass


class EmptyInputError(DocumentPipelineError):
    """The rasterizer was handed empty HTML."""
    pass


class RenderTimeoutError(DocumentPipelineError):
    """Page load or PDF emission exceeded the configured wait."""

    transient = True


class RenderFailureError(DocumentPipelineError):
    """The browser engine crashed, refused to launch or failed to navigate."""

    transient = True


class UploadError(DocumentPipelineError):
    """The object store rejected the write."""
    pass
