"""Domain-specific errors for greectl."""

from __future__ import annotations

from typing import Any


class GreectlError(Exception):
    """Base error for greectl."""


class InputValidationError(GreectlError, ValueError):
    """Raised when caller-supplied input is malformed. No I/O has happened."""


class SettingValueError(InputValidationError):
    """Raised when a setting name or symbolic value is not in the catalog."""


class SessionStateError(InputValidationError):
    """Raised when an operation needs a client id or a bound session."""


class ConfigError(GreectlError):
    """Raised when the device configuration file cannot be used."""


class CatalogError(GreectlError):
    """Raised when the settings catalog does not conform to schema or semantics."""


class TransportError(GreectlError):
    """Base transport error."""


class TransportConnectError(TransportError):
    """Raised when the UDP socket cannot be created or connected."""


class TransportSendError(TransportError):
    """Raised when writing or reading a datagram fails."""


class TransportTimeoutError(TransportError):
    """Raised when the retry budget runs out without a response."""


class ProtocolError(GreectlError):
    """Base error for unusable device responses."""


class ProtocolShapeError(ProtocolError):
    """Raised when an expected field is missing from a decoded response."""

    def __init__(self, message: str, response: Any = None) -> None:
        if response is not None:
            message = f"{message}: {response!r}"
        super().__init__(message)
        self.response = response


class NoDeviceFoundError(ProtocolShapeError):
    """Raised when a scan response carries no device descriptor."""


class CipherError(ProtocolError):
    """Raised when a pack cannot be decrypted or parsed, usually a key mismatch."""
