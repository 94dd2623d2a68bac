from __future__ import annotations

from pathlib import Path
import yaml

from deploy_check.config import settings
from deploy_check.models import TargetRegistry

REGISTRY_PATH = Path(settings.DEPLOY_CHECK_TARGETS_PATH)


def load_registry(path: Path = REGISTRY_PATH) -> TargetRegistry:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing targets file at {path}")

    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    reg = TargetRegistry.model_validate(data)

    # Ensure unique hostnames
    seen = set()
    for t in reg.targets:
        if t.hostname in seen:
            raise ValueError(f"Duplicate target hostname: {t.hostname}")
        seen.add(t.hostname)

    return reg


def apply_defaults(reg: TargetRegistry) -> dict[str, dict]:
    """
    Produce a normalized dict keyed by hostname with defaults applied.
    Order follows the registry file.
    """
    out: dict[str, dict] = {}
    d = reg.defaults

    for t in reg.targets:
        td = t.model_dump()
        td["path"] = td["path"] or d.path
        td["timeout_s"] = td["timeout_s"] or d.timeout_s
        td["headers"] = td["headers"] if td["headers"] is not None else dict(d.headers)
        td["markers"] = td["markers"] or list(d.markers)
        out[t.hostname] = td

    return out
