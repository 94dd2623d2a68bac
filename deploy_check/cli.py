from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import yaml

from deploy_check.config import settings
from deploy_check.registry import apply_defaults, load_registry
from deploy_check.runner import check_deploy, sweep

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="deploy-check",
        description="Check that a deployed page serves the expected build.",
    )
    parser.add_argument(
        "--sweep",
        action="store_true",
        help="check every candidate hostname from the targets file",
    )
    parser.add_argument(
        "--targets",
        default=settings.DEPLOY_CHECK_TARGETS_PATH,
        help="targets YAML used by --sweep (default: %(default)s)",
    )
    timeout = parser.add_mutually_exclusive_group()
    timeout.add_argument(
        "--timeout",
        type=float,
        help="connect/read timeout in seconds",
    )
    timeout.add_argument(
        "--no-timeout",
        action="store_true",
        help="wait for the server indefinitely",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=settings.LOG_LEVEL,
        help="logging level (default: %(default)s)",
    )
    return parser


def _explicit_timeout(args: argparse.Namespace) -> tuple[bool, float | None]:
    if args.no_timeout:
        return True, None
    if args.timeout is not None:
        if args.timeout <= 0:
            raise ValueError("--timeout must be positive; use --no-timeout to disable it")
        return True, args.timeout
    return False, None


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="[%(asctime)s] %(levelname)-8s %(name)s | %(message)s",
    )

    try:
        has_timeout, timeout_s = _explicit_timeout(args)
    except ValueError as e:
        parser.error(str(e))

    if not args.sweep:
        if not has_timeout:
            timeout_s = settings.DEPLOY_CHECK_TIMEOUT_SECONDS
        check_deploy(timeout_s=timeout_s)
        return 0

    try:
        targets = apply_defaults(load_registry(Path(args.targets)))
    except (OSError, ValueError, yaml.YAMLError) as e:
        # pydantic's ValidationError is a ValueError
        logger.error("Could not load targets from %s: %s", args.targets, e)
        return 2

    if has_timeout:
        for td in targets.values():
            td["timeout_s"] = timeout_s

    sweep(targets, delay_s=settings.DEPLOY_CHECK_SWEEP_DELAY_SECONDS)
    return 0


if __name__ == "__main__":
    sys.exit(main())
