"""Core domain types shared across all propdoc modules."""

from propdoc.core.errors import (
    AssetUnavailable,
    DocumentPipelineError,
    PipelineWarning,
    TemplateNotFound,
    UnsupportedAsset,
    WarningKind,
)
from propdoc.core.types import (
    FontRole,
    GeneratedDocument,
    LayoutLine,
    PageSpec,
    PipelineStage,
    PlaceholderDefinition,
    PlaceholderEntry,
    PlaceholderKey,
    PlaceholderMap,
    ProjectData,
    RenderResult,
    SummaryResult,
    SummarySource,
    Template,
)

__all__ = [
    "AssetUnavailable",
    "DocumentPipelineError",
    "FontRole",
    "GeneratedDocument",
    "LayoutLine",
    "PageSpec",
    "PipelineStage",
    "PipelineWarning",
    "PlaceholderDefinition",
    "PlaceholderEntry",
    "PlaceholderKey",
    "PlaceholderMap",
    "ProjectData",
    "RenderResult",
    "SummaryResult",
    "SummarySource",
    "Template",
    "TemplateNotFound",
    "UnsupportedAsset",
    "WarningKind",
]
