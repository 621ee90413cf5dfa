"""Placeholder resolution and merge.

The substitution list is built once per invocation as an ordered tuple of
(key, selector, value) triples following the template's declared schema, so
merge order never depends on dict iteration.
"""

import logging
import re
from collections.abc import Callable

from propdoc.core.types import (
    PlaceholderEntry,
    PlaceholderKey,
    PlaceholderMap,
    ProjectData,
    Template,
)

logger = logging.getLogger(__name__)


def derive_short_description(project: ProjectData) -> str:
    """Explicit short description, else "<type> for <offer> in <address>"."""
    if project.short_description:
        return project.short_description
    if project.property_type and project.offer_type:
        location = project.address or "this location"
        return f"{project.property_type} for {project.offer_type} in {location}"
    return ""


_RESOLVERS: dict[PlaceholderKey, Callable[[ProjectData, str], str]] = {
    PlaceholderKey.TITLE: lambda p, s: p.title,
    PlaceholderKey.SUMMARY: lambda p, s: s,
    PlaceholderKey.WEBSITE: lambda p, s: p.website,
    PlaceholderKey.EMAIL: lambda p, s: p.email,
    PlaceholderKey.ADDRESS: lambda p, s: p.address,
    PlaceholderKey.PHONE: lambda p, s: p.phone,
    PlaceholderKey.PRICE: lambda p, s: p.price,
    PlaceholderKey.BROKER_NAME: lambda p, s: p.broker_name,
    PlaceholderKey.SHORT_DESCRIPTION: lambda p, s: derive_short_description(p),
    PlaceholderKey.DATE_AVAILABLE: lambda p, s: p.date_available,
    PlaceholderKey.BROKER_FIRM: lambda p, s: p.broker_firm,
    PlaceholderKey.BROKER_FIRM_ADDRESS: lambda p, s: p.broker_firm_address,
    PlaceholderKey.DESCRIPTION_LARGE: lambda p, s: p.description_large,
    PlaceholderKey.DESCRIPTION_EXTRA_LARGE: lambda p, s: p.description_extra_large,
}


def build_placeholder_map(template: Template, project: ProjectData, summary: str) -> PlaceholderMap:
    """Resolve every placeholder the template declares, in declaration order.

    Missing values resolve to "" so no selector survives the merge.
    """
    entries = tuple(
        PlaceholderEntry(
            key=definition.key,
            selector=definition.selector,
            value=_RESOLVERS[definition.key](project, summary) or "",
        )
        for definition in template.placeholders
    )
    return PlaceholderMap(entries=entries)


def merge(plain_text: str, placeholders: PlaceholderMap) -> str:
    """Replace every literal occurrence of each selector with its value.

    Selectors are matched literally (regex-escaped) and values are inserted
    verbatim; backslashes or group references in a value are not expanded.
    A selector that never occurs in the text is a no-op.
    """
    merged = plain_text
    for entry in placeholders:
        if not entry.selector:
            continue
        merged, count = re.subn(re.escape(entry.selector), lambda _m, v=entry.value: v, merged)
        if count:
            logger.debug("Replaced %s ×%d", entry.selector, count)
    return merged
