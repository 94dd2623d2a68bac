from __future__ import annotations

from types import MappingProxyType
from typing import Dict, List, Mapping, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from deploy_check.config import settings

DEFAULT_MARKERS: tuple[str, ...] = ("GoodbyePage", "Нам очень жаль")


def _check_path(v: str | None) -> str | None:
    if v is not None and not v.startswith("/"):
        raise ValueError("path must start with '/'")
    return v


class CheckTarget(BaseModel):
    model_config = ConfigDict(frozen=True)

    hostname: str = Field(..., min_length=1)
    path: str = "/"
    headers: Mapping[str, str] = Field(default_factory=dict)

    @field_validator("path")
    @classmethod
    def _path_is_absolute(cls, v: str) -> str:
        return _check_path(v)

    @field_validator("headers")
    @classmethod
    def _headers_read_only(cls, v: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(v))

    @property
    def url(self) -> str:
        return f"https://{self.hostname}{self.path}"


def default_target() -> CheckTarget:
    return CheckTarget(
        hostname=settings.DEPLOY_CHECK_HOSTNAME,
        path=settings.DEPLOY_CHECK_PATH,
        headers={"User-Agent": settings.DEPLOY_CHECK_USER_AGENT},
    )


class Defaults(BaseModel):
    path: str = "/"
    timeout_s: Optional[float] = Field(default=5, gt=0)
    headers: Dict[str, str] = Field(
        default_factory=lambda: {"User-Agent": "Mozilla/5.0"}
    )
    markers: List[str] = Field(default_factory=lambda: list(DEFAULT_MARKERS))

    @field_validator("path")
    @classmethod
    def _path_is_absolute(cls, v: str) -> str:
        return _check_path(v)


class SweepTarget(BaseModel):
    hostname: str = Field(..., min_length=1)
    path: Optional[str] = None
    timeout_s: Optional[float] = Field(default=None, gt=0)
    headers: Optional[Dict[str, str]] = None
    markers: Optional[List[str]] = None

    @field_validator("path")
    @classmethod
    def _path_is_absolute(cls, v: Optional[str]) -> Optional[str]:
        return _check_path(v)


class TargetRegistry(BaseModel):
    defaults: Defaults = Defaults()
    targets: List[SweepTarget]
