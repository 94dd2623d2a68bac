from __future__ import annotations

from deploy_check.checks.http_check import PageResponse, Probe
from deploy_check.checks.results import (
    CheckResult,
    Found,
    LoadedUnknown,
    NotFound,
    TransportError,
)


def format_response(page: PageResponse) -> list[str]:
    return [
        f"Status Code: {page.status_code}",
        f"Headers: {page.headers}",
    ]


def format_result(result: CheckResult) -> list[str]:
    if isinstance(result, Found):
        return ["✅ Marker found: the expected page is deployed"]
    if isinstance(result, LoadedUnknown):
        return [
            "⚠️ Page loads, but it is probably an old version",
            f"First 500 characters: {result.body_prefix}",
        ]
    if isinstance(result, NotFound):
        return [f"❌ Page not found (HTTP {result.status_code})"]
    if isinstance(result, TransportError):
        return [f"❌ Error: {result.message}"]
    raise TypeError(f"Unknown check result: {result!r}")


def _status_label(probe: Probe) -> str:
    if probe.page is not None:
        return str(probe.page.status_code)
    if isinstance(probe.result, TransportError) and probe.result.timed_out:
        return "TIMEOUT"
    return "ERROR"


def format_sweep_entry(probe: Probe) -> list[str]:
    lines = [
        f"📍 {probe.target.hostname}",
        f"   Status: {_status_label(probe)}",
    ]
    if probe.page is None:
        # Transport failure; there are no headers to show.
        lines.append(f"   Error: {probe.result.message}")
        return lines

    if probe.page.status_code != 200:
        # Only a served page carries meaningful marker and cache details
        return lines

    # Header lookup is case-insensitive
    headers = {k.lower(): v for k, v in probe.page.headers.items()}
    found = isinstance(probe.result, Found)
    lines.extend(
        [
            f"   Markers: {'✅ new version' if found else '❌ old version'}",
            f"   Cache Age: {headers.get('age', 'N/A')}s",
            f"   Modified: {headers.get('last-modified', 'N/A')}",
        ]
    )
    if found:
        lines.append("   🎯 This URL serves the current build!")
    return lines


def format_sweep_summary(probes: list[Probe]) -> list[str]:
    current = [p.target.hostname for p in probes if isinstance(p.result, Found)]
    if not current:
        return ["💡 No URL serves the current build - a Vercel redeploy is needed"]
    return ["💡 Current build is served by: " + ", ".join(current)]
