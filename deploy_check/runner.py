from __future__ import annotations

import logging
import time

from deploy_check.checks.http_check import Probe, probe_http
from deploy_check.checks.results import CheckResult
from deploy_check.config import settings
from deploy_check.formatting import (
    format_response,
    format_result,
    format_sweep_entry,
    format_sweep_summary,
)
from deploy_check.models import DEFAULT_MARKERS, CheckTarget, default_target

logger = logging.getLogger(__name__)


def _print_lines(lines: list[str]) -> None:
    for line in lines:
        print(line)


def check_deploy(
    target: CheckTarget | None = None,
    timeout_s: float | None = settings.DEPLOY_CHECK_TIMEOUT_SECONDS,
) -> CheckResult:
    """
    Verify a single deployment and print the report to stdout.
    Transport failures are reported, never raised.
    """
    target = target or default_target()
    probe = probe_http(target, timeout_s=timeout_s, markers=DEFAULT_MARKERS)

    if probe.page is not None:
        _print_lines(format_response(probe.page))
    _print_lines(format_result(probe.result))
    return probe.result


def target_from_config(td: dict) -> CheckTarget:
    return CheckTarget(hostname=td["hostname"], path=td["path"], headers=td["headers"])


def sweep(
    targets: dict[str, dict],
    delay_s: float = settings.DEPLOY_CHECK_SWEEP_DELAY_SECONDS,
) -> list[Probe]:
    """Probe every normalized target in order, pausing `delay_s` between them."""
    print("🔍 Checking all candidate deployments...")
    print("")

    probes: list[Probe] = []
    for i, td in enumerate(targets.values()):
        if i and delay_s > 0:
            time.sleep(delay_s)

        probe = probe_http(
            target_from_config(td),
            timeout_s=td["timeout_s"],
            markers=td["markers"],
        )
        probes.append(probe)
        _print_lines(format_sweep_entry(probe))
        print("")

    logger.info(
        "Sweep finished: %d targets, %d current",
        len(probes),
        sum(1 for p in probes if p.result.kind == "found"),
    )
    _print_lines(format_sweep_summary(probes))
    return probes
