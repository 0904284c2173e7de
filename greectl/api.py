"""Stable public API for building tooling on top of greectl.

This module is the supported integration surface for third-party callers.
Avoid importing from private/internal modules unless intentionally depending on
non-stable internals.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from greectl.core.catalog import SettingsCatalog
from greectl.core.errors import (
    CatalogError,
    CipherError,
    ConfigError,
    GreectlError,
    InputValidationError,
    NoDeviceFoundError,
    ProtocolError,
    ProtocolShapeError,
    SessionStateError,
    SettingValueError,
    TransportConnectError,
    TransportError,
    TransportSendError,
    TransportTimeoutError,
)
from greectl.core.model import BOOTSTRAP_KEY, DeviceConfig, SessionState, Setting
from greectl.core.retry import RetryPolicy
from greectl.core.service import GreeService
from greectl.transports.base import Transport
from greectl.transports.udp import UDPTransport

__all__ = [
    "BOOTSTRAP_KEY",
    "CatalogError",
    "CipherError",
    "ConfigError",
    "GreectlError",
    "InputValidationError",
    "NoDeviceFoundError",
    "ProtocolError",
    "ProtocolShapeError",
    "SessionStateError",
    "SettingValueError",
    "TransportError",
    "TransportConnectError",
    "TransportSendError",
    "TransportTimeoutError",
    "DeviceConfig",
    "RetryPolicy",
    "SessionState",
    "Setting",
    "SettingsCatalog",
    "Transport",
    "UDPTransport",
    "Client",
]


class Client:
    """Public client for one air conditioner on the local network.

    A `Client` wraps scan, bind, status and command exchanges behind a
    blocking API. Each call is one request with internal retries. Instances
    serialize their own calls; share one between threads only if that is
    acceptable.

    Typical first contact::

        client = Client(DeviceConfig(host="192.168.1.50", use_bootstrap_key=True))
        client.scan()
        key = client.get_bind_key()
        client.set_mode("cool")
    """

    def __init__(
        self,
        config: DeviceConfig,
        *,
        transport: Transport | None = None,
        catalog: SettingsCatalog | None = None,
    ) -> None:
        self._service = GreeService(config, transport=transport, catalog=catalog)

    @property
    def host(self) -> str:
        return self._service.host

    @property
    def client_id(self) -> str | None:
        return self._service.client_id

    @property
    def secret_key(self) -> str:
        return self._service.secret_key

    @property
    def state(self) -> SessionState:
        return self._service.state

    @property
    def catalog(self) -> SettingsCatalog:
        return self._service.catalog

    def set_host(self, host: str) -> None:
        self._service.set_host(host)

    def set_client_id(self, client_id: str) -> None:
        self._service.set_client_id(client_id)

    def set_secret_key(self, key: str) -> None:
        self._service.set_secret_key(key)

    def scan(self) -> dict[str, Any]:
        """Ask the host for its device descriptor and adopt its mac as client id."""
        return self._service.scan()

    def get_bind_key(self) -> str:
        """Exchange the bootstrap key for the device key and bind the session."""
        return self._service.get_bind_key()

    def get_status(self) -> dict[str, Any]:
        return self._service.get_status()

    def get_setting(self, name: str) -> dict[str, Any]:
        return self._service.get_value(name)

    def set_setting(self, name: str, value: str) -> dict[str, Any]:
        return self._service.set_values({name: value})

    def set_settings(self, values: Mapping[str, str]) -> dict[str, Any]:
        return self._service.set_values(values)

    def get_power(self) -> dict[str, Any]:
        return self._service.get_value("Pow")

    def turn_on(self) -> dict[str, Any]:
        return self._service.set_values({"Pow": "on"})

    def turn_off(self) -> dict[str, Any]:
        return self._service.set_values({"Pow": "off"})

    def get_mode(self) -> dict[str, Any]:
        return self._service.get_value("Mod")

    def set_mode(self, mode: str) -> dict[str, Any]:
        return self._service.set_values({"Mod": mode})

    def get_fan_speed(self) -> dict[str, Any]:
        return self._service.get_value("WdSpd")

    def set_fan_speed(self, speed: str) -> dict[str, Any]:
        return self._service.set_values({"WdSpd": speed})

    def get_temperature(self) -> dict[str, Any]:
        return self._service.get_temperature()

    def set_temperature(self, temperature: int, half_degree: bool = False) -> dict[str, Any]:
        return self._service.set_temperature(temperature, half_degree)

    def get_health(self) -> dict[str, Any]:
        return self._service.get_value("Health")

    def set_health(self, enabled: bool) -> dict[str, Any]:
        return self._service.set_values({"Health": "on" if enabled else "off"})
