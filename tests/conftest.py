from __future__ import annotations

import json
from typing import Any

import pytest

from greectl.core import cipher

DEVICE_KEY = "0123456789abcdef"
BOOTSTRAP = "a3K8Bx%2r8Y7#xDh"
MAC = "aabbccddeeff"


def frame(pack: Any, key: str | None = DEVICE_KEY, **outer: Any) -> bytes:
    """Build a device response; `key=None` leaves the pack in cleartext."""
    envelope = {"t": "pack", "i": 0, "uid": 0, "cid": MAC, "tcid": "", **outer}
    if pack is not None:
        envelope["pack"] = cipher.encrypt(pack, key) if key else pack
    return json.dumps(envelope).encode("utf-8")


class FakeTransport:
    def __init__(self, *responses: bytes) -> None:
        self.responses = list(responses)
        self.calls: list[tuple[str, dict[str, Any], int]] = []

    def send(self, host: str, payload: bytes, *, port: int, timeout_s: float = 1.0) -> bytes:
        self.calls.append((host, json.loads(payload), port))
        return self.responses.pop(0)

    def inner(self, index: int = -1, key: str = DEVICE_KEY) -> dict[str, Any]:
        return cipher.decrypt(self.calls[index][1]["pack"], key)


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))
