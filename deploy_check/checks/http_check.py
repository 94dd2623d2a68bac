from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

import requests

from deploy_check.checks.results import (
    CheckResult,
    Found,
    LoadedUnknown,
    NotFound,
    TransportError,
)
from deploy_check.models import DEFAULT_MARKERS, CheckTarget

logger = logging.getLogger(__name__)

BODY_PREFIX_CHARS = 500


@dataclass(frozen=True)
class PageResponse:
    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""


@dataclass(frozen=True)
class Probe:
    target: CheckTarget
    result: CheckResult
    page: PageResponse | None = None


def fetch_page(
    target: CheckTarget,
    timeout_s: float | None,
    connect_timeout_s: float | None = None,
) -> PageResponse:
    """GET the target and read the whole body. Raises requests.RequestException."""
    if timeout_s is None:
        timeout = None
    else:
        connect_timeout = timeout_s if connect_timeout_s is None else connect_timeout_s
        timeout = (connect_timeout, timeout_s)

    # Redirects are reported as-is, not followed
    r = requests.get(
        target.url,
        headers=dict(target.headers),
        timeout=timeout,
        allow_redirects=False,
    )
    content_type = r.headers.get("Content-Type", "")
    if "charset" not in content_type.lower():
        # requests falls back to latin-1 for text/*, which mangles Cyrillic markers
        r.encoding = "utf-8"
    return PageResponse(status_code=r.status_code, headers=dict(r.headers), body=r.text)


def classify_page(page: PageResponse, markers: Iterable[str] = DEFAULT_MARKERS) -> CheckResult:
    if any(marker in page.body for marker in markers):
        return Found()
    if page.status_code == 200:
        return LoadedUnknown(body_prefix=page.body[:BODY_PREFIX_CHARS])
    return NotFound(status_code=page.status_code)


def probe_http(
    target: CheckTarget,
    timeout_s: float | None,
    markers: Iterable[str] = DEFAULT_MARKERS,
    connect_timeout_s: float | None = None,
) -> Probe:
    logger.debug("GET %s (timeout=%s)", target.url, timeout_s)
    try:
        page = fetch_page(target, timeout_s=timeout_s, connect_timeout_s=connect_timeout_s)
    except requests.Timeout as e:
        logger.warning("Timed out fetching %s: %s", target.url, e)
        return Probe(target=target, result=TransportError(message=str(e), timed_out=True))
    except requests.RequestException as e:
        logger.warning("Transport failure fetching %s: %s", target.url, e)
        return Probe(target=target, result=TransportError(message=str(e)))

    result = classify_page(page, markers)
    logger.info("%s -> HTTP %s, %s", target.url, page.status_code, result.kind)
    return Probe(target=target, result=result, page=page)


def run_http(
    target: CheckTarget,
    timeout_s: float | None,
    markers: Iterable[str] = DEFAULT_MARKERS,
    connect_timeout_s: float | None = None,
) -> CheckResult:
    return probe_http(
        target, timeout_s=timeout_s, markers=markers, connect_timeout_s=connect_timeout_s
    ).result
