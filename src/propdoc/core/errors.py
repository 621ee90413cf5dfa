"""Error taxonomy for the document pipeline.

Fatal failures are exceptions: they abort the run before anything is
rendered and carry the pipeline stage that was being attempted. Non-fatal
events are plain values collected on the GeneratedDocument so the caller
always gets a usable document once the merge stage has been reached.
"""

from dataclasses import dataclass
from enum import Enum


class DocumentPipelineError(Exception):
    """Base class for fatal pipeline errors."""

    stage = "pipeline"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"[{self.stage}] {self.message}"


class TemplateNotFound(DocumentPipelineError):
    stage = "resolve_template"

    def __init__(self, template_id: str):
        super().__init__(f"Unknown template: {template_id!r}")
        self.template_id = template_id


class AssetUnavailable(DocumentPipelineError):
    stage = "fetch_asset"

    def __init__(self, location: str, reason: str, status_code: int | None = None):
        super().__init__(f"Could not load template asset {location}: {reason}")
        self.location = location
        self.status_code = status_code


class UnsupportedAsset(DocumentPipelineError):
    stage = "extract_text"


# ---------------------------------------------------------------------------
# Non-fatal warnings
# ---------------------------------------------------------------------------

class WarningKind(str, Enum):
    GENERATION_DEGRADED = "generation_degraded"
    RENDER_WARNING = "render_warning"
    SUSPICIOUS_OUTPUT = "suspicious_output"


@dataclass(frozen=True)
class PipelineWarning:
    """A recoverable problem observed during a pipeline run."""

    kind: WarningKind
    message: str
    detail: str = ""
