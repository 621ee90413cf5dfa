"""Prompt registry — versioned copywriting prompts.

Keeps prompt strings out of the client code so the active version can be
tagged on each trace and compared across runs.
"""

import logging
from dataclasses import dataclass

from propdoc.observability.tracing import set_tag

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PromptPair:
    """A system instruction plus a user-turn template."""

    version: str
    system: str
    user_template: str

    def render_user(self, **values: str) -> str:
        return self.user_template.format(**values)


# ---------------------------------------------------------------------------
# Prompt versions
# ---------------------------------------------------------------------------

LISTING_SUMMARY_V1 = PromptPair(
    version="v1",
    system=(
        "You are a professional real estate copywriter. "
        "Create a compelling property listing summary."
    ),
    user_template=(
        "Create a brief, engaging 2-3 sentence summary for this property: "
        "{title} located at {address}. Focus on its unique features and appeal."
    ),
)

_PROMPT_REGISTRY: dict[str, PromptPair] = {
    "listing_summary": LISTING_SUMMARY_V1,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def get_active_prompt(name: str) -> PromptPair:
    """Return the active prompt pair for a given prompt name.

    Raises:
        KeyError: If prompt name is not registered.
    """
    if name not in _PROMPT_REGISTRY:
        raise KeyError(f"Unknown prompt: {name!r}. Available: {list(_PROMPT_REGISTRY.keys())}")
    return _PROMPT_REGISTRY[name]


def get_prompt_version(name: str) -> str:
    """Return the version tag for a given prompt name."""
    return get_active_prompt(name).version


def list_prompts() -> list[dict[str, str]]:
    """List all registered prompts with name and version."""
    return [{"name": name, "version": p.version} for name, p in _PROMPT_REGISTRY.items()]


def tag_prompt_version(name: str) -> None:
    """Record which prompt version the current trace used."""
    version = get_prompt_version(name)
    set_tag(f"prompt_{name}_version", version)
    logger.debug("Tagged prompt %s (%s)", name, version)
