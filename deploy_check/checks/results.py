from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, ClassVar


@dataclass(frozen=True)
class Found:
    kind: ClassVar[str] = "found"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind}


@dataclass(frozen=True)
class LoadedUnknown:
    body_prefix: str
    kind: ClassVar[str] = "loaded_unknown"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, **asdict(self)}


@dataclass(frozen=True)
class NotFound:
    status_code: int
    kind: ClassVar[str] = "not_found"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, **asdict(self)}


@dataclass(frozen=True)
class TransportError:
    message: str
    timed_out: bool = False
    kind: ClassVar[str] = "transport_error"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, **asdict(self)}


CheckResult = Found | LoadedUnknown | NotFound | TransportError
