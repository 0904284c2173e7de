"""Transport interfaces."""

from __future__ import annotations

from typing import Protocol


class Transport(Protocol):
    def send(
        self,
        host: str,
        payload: bytes,
        *,
        port: int,
        timeout_s: float = 1.0,
    ) -> bytes:
        """Send one frame to a device and return the first response frame."""
