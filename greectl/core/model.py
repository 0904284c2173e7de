"""Core data models used across the catalog, service, and CLI."""

from __future__ import annotations

import enum
from dataclasses import dataclass

DEFAULT_PORT = 7000
BOOTSTRAP_KEY = "a3K8Bx%2r8Y7#xDh"


class SessionState(enum.Enum):
    UNBOUND = "unbound"
    BOUND = "bound"


@dataclass(frozen=True)
class DeviceConfig:
    host: str
    client_id: str | None = None
    secret_key: str | None = None
    use_bootstrap_key: bool = False
    port: int = DEFAULT_PORT
    timeout_s: float = 1.0
    try_limit: int = 3
    backoff_s: float = 0.0


@dataclass(frozen=True)
class Setting:
    name: str
    kind: str
    values: tuple[str, ...] = ()
    description: str = ""

    @property
    def is_enum(self) -> bool:
        return self.kind == "enum"
