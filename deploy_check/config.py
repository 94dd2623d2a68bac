import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DEFAULT_TARGETS_PATH = Path(__file__).resolve().parents[1] / "targets.yml"


def parse_timeout(raw: str | None, default: float | None = None) -> float | None:
    """
    Read a timeout in seconds from an env-style string.
    "none", "off", "0" or an empty string mean no timeout at all.
    """
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in {"", "none", "off"}:
        return None
    seconds = float(value)
    if seconds < 0:
        raise ValueError(f"Timeout must not be negative: {raw}")
    return seconds or None


class Settings:
    DEPLOY_CHECK_HOSTNAME: str = os.getenv(
        "DEPLOY_CHECK_HOSTNAME", "kupiy-proday-jwpo.vercel.app"
    )
    DEPLOY_CHECK_PATH: str = os.getenv("DEPLOY_CHECK_PATH", "/goodbye")
    DEPLOY_CHECK_USER_AGENT: str = os.getenv("DEPLOY_CHECK_USER_AGENT", "Mozilla/5.0")
    DEPLOY_CHECK_TIMEOUT_SECONDS: float | None = parse_timeout(
        os.getenv("DEPLOY_CHECK_TIMEOUT_SECONDS"), default=10.0
    )
    DEPLOY_CHECK_TARGETS_PATH: str = os.getenv(
        "DEPLOY_CHECK_TARGETS_PATH", str(DEFAULT_TARGETS_PATH)
    )
    DEPLOY_CHECK_SWEEP_DELAY_SECONDS: float = float(
        os.getenv("DEPLOY_CHECK_SWEEP_DELAY_SECONDS", "1.0")
    )
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "WARNING")


settings = Settings()
