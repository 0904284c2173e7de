"""AES-128-ECB codec for the encrypted `pack` field.

The pack is compact JSON, PKCS#7 padded, encrypted block by block without an
IV, then base64 encoded. ECB is what the devices speak, so it stays.
"""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any

from Crypto.Cipher import AES
from Crypto.Util.Padding import pad, unpad

from greectl.core.errors import CipherError

BLOCK_SIZE = 16


def _key_bytes(key: str | bytes) -> bytes:
    raw = key.encode("utf-8") if isinstance(key, str) else bytes(key)
    if len(raw) != BLOCK_SIZE:
        raise CipherError(f"Key must be {BLOCK_SIZE} bytes, got {len(raw)}")
    return raw


def dumps(payload: Any) -> str:
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


def encrypt(payload: Any, key: str | bytes) -> str:
    cipher = AES.new(_key_bytes(key), AES.MODE_ECB)
    encrypted = cipher.encrypt(pad(dumps(payload).encode("utf-8"), BLOCK_SIZE))
    return base64.b64encode(encrypted).decode("ascii")


def decrypt(ciphertext: str, key: str | bytes) -> dict[str, Any]:
    cipher = AES.new(_key_bytes(key), AES.MODE_ECB)
    try:
        encrypted = base64.b64decode(ciphertext, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise CipherError(f"Pack is not valid base64: {exc}") from exc

    try:
        plaintext = unpad(cipher.decrypt(encrypted), BLOCK_SIZE)
    except ValueError as exc:
        raise CipherError(f"Pack could not be decrypted (wrong key?): {exc}") from exc

    try:
        decoded = json.loads(plaintext.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise CipherError(f"Decrypted pack is not JSON (wrong key?): {exc}") from exc

    if not isinstance(decoded, dict):
        raise CipherError(f"Decrypted pack is not an object: {decoded!r}")
    return decoded
