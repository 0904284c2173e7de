"""Envelope construction and parsing."""

from __future__ import annotations

import json
from typing import Any

from greectl.core import cipher
from greectl.core.errors import CipherError, ProtocolShapeError

SCAN = "scan"
PACK = "pack"


def build_request(
    inner: dict[str, Any],
    client_id: str = "",
    target_client_id: str = "",
    *,
    key: str | bytes | None = None,
    index: int = 0,
) -> dict[str, Any]:
    if inner.get("t") == SCAN:
        return dict(inner)
    if key is None:
        raise CipherError(f"A key is required to wrap a '{inner.get('t')}' request")
    return {
        "t": PACK,
        "i": index,
        "uid": 0,
        "cid": client_id,
        "tcid": target_client_id,
        "pack": cipher.encrypt(inner, key),
    }


def encode_frame(envelope: dict[str, Any]) -> bytes:
    return cipher.dumps(envelope).encode("utf-8")


def parse_response(raw: bytes, key: str | bytes) -> dict[str, Any]:
    try:
        envelope = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ProtocolShapeError(f"Malformed response frame ({exc})", raw) from exc

    if not isinstance(envelope, dict):
        raise ProtocolShapeError("Response frame is not an object", envelope)

    if isinstance(envelope.get("pack"), str):
        envelope["pack"] = cipher.decrypt(envelope["pack"], key)
    return envelope
