"""Listing summary client — one call to an OpenRouter-compatible chat API.

The summary is a nice-to-have: any failure (missing key, timeout, HTTP
error, malformed response) degrades to a deterministic fallback sentence
built from the listing address. There is exactly one attempt per
document; retries are the caller's business.
"""

import logging
import time

import httpx

from propdoc.config import settings
from propdoc.core.types import SummaryResult, SummarySource
from propdoc.observability.prompts import get_active_prompt, tag_prompt_version
from propdoc.observability.tracing import start_span, trace

logger = logging.getLogger(__name__)

PROMPT_NAME = "listing_summary"


def fallback_summary(address: str) -> str:
    """Deterministic stand-in for generated copy. No I/O.

    Must not contain the title: any paragraph containing it is typeset
    as the document title.
    """
    location = address.strip() or "a prime location"
    return (
        "Discover luxury living at this exceptional property. Located at "
        f"{location}, this stunning space offers the perfect blend of comfort "
        "and sophistication."
    )


def build_messages(title: str, address: str) -> list[dict]:
    prompt = get_active_prompt(PROMPT_NAME)
    return [
        {"role": "system", "content": prompt.system},
        {"role": "user", "content": prompt.render_user(title=title, address=address)},
    ]


def _request_headers() -> dict[str, str]:
    headers = {
        "Authorization": f"Bearer {settings.openrouter_api_key}",
        "Content-Type": "application/json",
    }
    if settings.http_referer:
        headers["HTTP-Referer"] = settings.http_referer
    return headers


def _extract_content(data: dict) -> str:
    """Pull choices[0].message.content; raise ValueError if absent or blank."""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise ValueError(f"missing content field ({e!r})") from e
    if not isinstance(content, str) or not content.strip():
        raise ValueError("empty content")
    return content.strip()


def _degrade(address: str, reason: str) -> SummaryResult:
    logger.warning("Summary generation degraded (%s); using fallback text", reason,
                   extra={"step": "summary", "summary_source": SummarySource.FALLBACK.value})
    return SummaryResult(
        text=fallback_summary(address),
        source=SummarySource.FALLBACK,
        reason=reason,
    )


@trace(name="generate_summary", span_type="CHAT_MODEL")
async def generate_summary(title: str, address: str) -> SummaryResult:
    """Request marketing prose for a listing, falling back on any failure."""
    if not settings.openrouter_api_key:
        return _degrade(address, "api key not configured")

    payload = {
        "model": settings.summary_model,
        "messages": build_messages(title, address),
    }
    tag_prompt_version(PROMPT_NAME)

    start = time.monotonic()
    with start_span(name="summary_request", span_type="CHAT_MODEL") as span:
        span.set_inputs({"model": settings.summary_model, "title": title})
        try:
            async with httpx.AsyncClient(timeout=settings.summary_timeout_seconds) as client:
                resp = await client.post(settings.openrouter_url, json=payload, headers=_request_headers())
                resp.raise_for_status()
                text = _extract_content(resp.json())
        except httpx.TimeoutException:
            span.set_outputs({"error": "timeout"})
            return _degrade(address, f"timed out after {settings.summary_timeout_seconds:g}s")
        except httpx.HTTPStatusError as e:
            span.set_outputs({"error": f"http_{e.response.status_code}"})
            return _degrade(address, f"HTTP {e.response.status_code}")
        except httpx.HTTPError as e:
            span.set_outputs({"error": type(e).__name__})
            return _degrade(address, f"request failed: {e}")
        except ValueError as e:
            # Covers both invalid JSON bodies and a missing content field
            span.set_outputs({"error": "parse_error"})
            return _degrade(address, f"malformed response: {e}")

        span.set_outputs({"chars": len(text)})

    logger.info(
        "Summary generated by %s (%d chars)", settings.summary_model, len(text),
        extra={
            "step": "summary",
            "duration_ms": round((time.monotonic() - start) * 1000, 1),
            "summary_source": SummarySource.GENERATED.value,
        },
    )
    return SummaryResult(text=text, source=SummarySource.GENERATED)
