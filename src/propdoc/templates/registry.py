"""Template registry — template id → asset location + placeholder schema.

The table is built once at import time and never mutated afterwards, so it
is shared by concurrent pipeline runs without locking.
"""

import logging
from collections.abc import Iterable
from pathlib import Path
from types import MappingProxyType

from propdoc.config import settings
from propdoc.core.errors import TemplateNotFound
from propdoc.core.types import PlaceholderDefinition, PlaceholderKey, Template

logger = logging.getLogger(__name__)

ASSET_DIR = Path(__file__).parent / "assets"

# Token format used by the bundled assets: {key}
_CORE_KEYS = (
    PlaceholderKey.TITLE,
    PlaceholderKey.SUMMARY,
    PlaceholderKey.WEBSITE,
    PlaceholderKey.EMAIL,
    PlaceholderKey.ADDRESS,
)
_EXTENDED_KEYS = _CORE_KEYS + (
    PlaceholderKey.PHONE,
    PlaceholderKey.PRICE,
    PlaceholderKey.BROKER_NAME,
    PlaceholderKey.SHORT_DESCRIPTION,
)
# Full listing sheet: availability, brokerage and long-form descriptions
_CLASSIC_KEYS = _EXTENDED_KEYS + (
    PlaceholderKey.DATE_AVAILABLE,
    PlaceholderKey.BROKER_FIRM,
    PlaceholderKey.BROKER_FIRM_ADDRESS,
    PlaceholderKey.DESCRIPTION_LARGE,
    PlaceholderKey.DESCRIPTION_EXTRA_LARGE,
)


def braced_schema(keys: Iterable[PlaceholderKey]) -> tuple[PlaceholderDefinition, ...]:
    """Placeholder schema where every key appears in the asset as `{key}`."""
    return tuple(PlaceholderDefinition(key=k, selector=f"{{{k.value}}}") for k in keys)


def _asset_path(filename: str) -> str:
    base = Path(settings.template_asset_dir) if settings.template_asset_dir else ASSET_DIR
    return str(base / filename)


def builtin_templates() -> list[Template]:
    """The templates shipped with the package, in display order."""
    return [
        Template(
            id="basic",
            name="Classic Colorless",
            description="Single-page listing sheet with title, address, summary and contact.",
            asset_location=_asset_path("basic.html"),
            placeholders=braced_schema(_CORE_KEYS),
        ),
        Template(
            id="classic",
            name="Classic",
            description="Full listing sheet: price, availability, long-form descriptions and brokerage details.",
            asset_location=_asset_path("classic.html"),
            placeholders=braced_schema(_CLASSIC_KEYS),
        ),
        Template(
            id="colorful",
            name="Colorful",
            description="Marketing flyer that leads with the summary.",
            asset_location=_asset_path("colorful.html"),
            placeholders=braced_schema(_EXTENDED_KEYS),
        ),
    ]


class TemplateRegistry:
    """Read-only lookup over a preloaded template table."""

    def __init__(self, templates: Iterable[Template]):
        table: dict[str, Template] = {}
        for template in templates:
            if template.id in table:
                raise ValueError(f"Duplicate template id: {template.id!r}")
            selectors = [p.selector for p in template.placeholders]
            if len(selectors) != len(set(selectors)):
                raise ValueError(f"Template {template.id!r} declares a selector twice")
            table[template.id] = template
        self._table = MappingProxyType(table)

    def resolve(self, template_id: str) -> Template:
        """Return the template for `template_id` or raise TemplateNotFound."""
        template = self._table.get(template_id)
        if template is None:
            logger.warning("Template lookup failed: %s", template_id, extra={"template_id": template_id})
            raise TemplateNotFound(template_id)
        return template

    def list(self) -> list[Template]:
        return list(self._table.values())

    def __contains__(self, template_id: str) -> bool:
        return template_id in self._table

    def __len__(self) -> int:
        return len(self._table)


default_registry = TemplateRegistry(builtin_templates())
