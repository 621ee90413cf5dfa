"""Domain types for the propdoc brochure pipeline.

All shared dataclasses and enums live here to prevent circular imports and
establish a single source of truth for the domain model. Every other module
imports from here.
"""

from dataclasses import dataclass, field
from enum import Enum

from propdoc.core.errors import PipelineWarning


# ---------------------------------------------------------------------------
# Templates and placeholders
# ---------------------------------------------------------------------------

class PlaceholderKey(str, Enum):
    """Symbolic placeholder keys a template may declare."""

    TITLE = "title"
    SUMMARY = "summary"
    WEBSITE = "website"
    EMAIL = "email"
    ADDRESS = "address"
    PHONE = "phone"
    PRICE = "price"
    BROKER_NAME = "broker_name"
    SHORT_DESCRIPTION = "short_description"
    DATE_AVAILABLE = "date_available"
    BROKER_FIRM = "name_brokerfirm"
    BROKER_FIRM_ADDRESS = "address_brokerfirm"
    DESCRIPTION_LARGE = "descriptionlarge"
    DESCRIPTION_EXTRA_LARGE = "descriptionextralarge"


@dataclass(frozen=True)
class PlaceholderDefinition:
    """Binds a symbolic key to the literal token that appears in the asset."""

    key: PlaceholderKey
    selector: str


@dataclass(frozen=True)
class Template:
    """A named binding between an asset location and a placeholder schema.

    Immutable once loaded; shared read-only by concurrent pipeline runs.
    """

    id: str
    asset_location: str
    placeholders: tuple[PlaceholderDefinition, ...]
    name: str = ""
    description: str = ""


@dataclass(frozen=True)
class PlaceholderEntry:
    """One (key, literal selector, resolved value) triple."""

    key: PlaceholderKey
    selector: str
    value: str


@dataclass(frozen=True)
class PlaceholderMap:
    """Ordered, unique-selector substitution list built once per invocation."""

    entries: tuple[PlaceholderEntry, ...] = ()

    def __iter__(self):
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def as_dict(self) -> dict[str, str]:
        return {e.selector: e.value for e in self.entries}


# ---------------------------------------------------------------------------
# Caller-supplied property data
# ---------------------------------------------------------------------------

@dataclass
class ProjectData:
    """Values merged into a template. Empty string means not provided."""

    title: str
    website: str = ""
    email: str = ""
    address: str = ""
    phone: str = ""
    price: str = ""
    broker_name: str = ""
    property_type: str = ""
    offer_type: str = ""
    short_description: str = ""
    date_available: str = ""
    broker_firm: str = ""
    broker_firm_address: str = ""
    description_large: str = ""
    description_extra_large: str = ""


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------

class SummarySource(str, Enum):
    GENERATED = "generated"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class SummaryResult:
    """Summary text plus how it was obtained."""

    text: str
    source: SummarySource
    reason: str = ""

    @property
    def degraded(self) -> bool:
        return self.source is SummarySource.FALLBACK


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------

class FontRole(str, Enum):
    TITLE = "title"
    HEADING = "heading"
    BODY = "body"


@dataclass(frozen=True)
class PageSpec:
    """Fixed page geometry in points. Defaults to A4 with 50pt margins."""

    width: float = 595.0
    height: float = 842.0
    margin: float = 50.0

    @property
    def content_width(self) -> float:
        return self.width - 2 * self.margin


@dataclass(frozen=True)
class LayoutLine:
    """One line of text with resolved font, size and page position."""

    text: str
    role: FontRole
    font_size: float
    x: float
    y: float
    page: int = 0


# ---------------------------------------------------------------------------
# Pipeline output
# ---------------------------------------------------------------------------

class PipelineStage(str, Enum):
    PENDING = "pending"
    TEMPLATE_RESOLVED = "template_resolved"
    ASSET_LOADED = "asset_loaded"
    SUMMARY_READY = "summary_ready"
    MERGED = "merged"
    LAID_OUT = "laid_out"
    RENDERED = "rendered"
    DONE = "done"


@dataclass(frozen=True)
class RenderResult:
    """Serialized PDF plus the per-line problems hit while drawing it."""

    content: bytes
    lines_drawn: int
    page_count: int
    warnings: tuple[PipelineWarning, ...] = ()


@dataclass
class GeneratedDocument:
    """Final output of one pipeline invocation."""

    content: bytes
    summary: SummaryResult
    template_id: str
    line_count: int = 0
    page_count: int = 1
    warnings: list[PipelineWarning] = field(default_factory=list)

    @property
    def byte_length(self) -> int:
        return len(self.content)
