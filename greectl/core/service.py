"""Service layer used by the public API and the CLI."""

from __future__ import annotations

import ipaddress
import logging
import re
import threading
from collections.abc import Mapping, Sequence
from typing import Any

from greectl.core import framing
from greectl.core.catalog import SettingsCatalog, default_catalog
from greectl.core.errors import (
    InputValidationError,
    NoDeviceFoundError,
    ProtocolShapeError,
    SessionStateError,
)
from greectl.core.model import BOOTSTRAP_KEY, DeviceConfig, SessionState
from greectl.core.retry import RetryPolicy
from greectl.transports.base import Transport
from greectl.transports.udp import UDPTransport

_CID_RE = re.compile(r"^[0-9a-f]{12}$", re.IGNORECASE)
_KEY_RE = re.compile(r"^[0-9a-zA-Z]{16}$")
LOGGER = logging.getLogger(__name__)

# Which response list a single-column status read takes its value from.
# Devices answer `Pow` in `val` and the other columns in `dat`.
_GETTER_FIELDS = {"Pow": "val"}
_DEFAULT_GETTER_FIELD = "dat"


def _validate_host(host: str) -> str:
    try:
        ipaddress.ip_address(host)
    except ValueError:
        raise InputValidationError(f"Incorrect IP format: '{host}'") from None
    return host


def _validate_client_id(client_id: str) -> str:
    if not isinstance(client_id, str) or not _CID_RE.fullmatch(client_id):
        raise InputValidationError(f"Incorrect client id format: {client_id!r}")
    return client_id


def _validate_secret_key(key: str) -> str:
    if not isinstance(key, str) or not _KEY_RE.fullmatch(key):
        raise InputValidationError("Incorrect key format: expected 16 alphanumeric characters")
    return key


def _pack(response: dict[str, Any]) -> dict[str, Any]:
    pack = response.get("pack")
    if not isinstance(pack, dict):
        raise ProtocolShapeError("Response has no decoded pack", response)
    return pack


def _list_field(response: dict[str, Any], field: str, *, min_len: int = 1) -> list[Any]:
    values = _pack(response).get(field)
    if not isinstance(values, list) or len(values) < min_len:
        raise ProtocolShapeError(f"Cannot obtain value: missing pack.{field}", response)
    return values


class GreeService:
    def __init__(
        self,
        config: DeviceConfig,
        *,
        transport: Transport | None = None,
        catalog: SettingsCatalog | None = None,
    ) -> None:
        self._lock = threading.Lock()
        self.catalog = catalog or default_catalog()
        self.port = config.port
        self.timeout_s = config.timeout_s
        self.transport = transport or UDPTransport(
            RetryPolicy(try_limit=config.try_limit, backoff_s=config.backoff_s)
        )

        self._host = _validate_host(config.host)
        self._client_id = _validate_client_id(config.client_id) if config.client_id else None
        if config.secret_key:
            self._secret_key = _validate_secret_key(config.secret_key)
            self._state = SessionState.BOUND
        elif config.use_bootstrap_key:
            self._secret_key = BOOTSTRAP_KEY
            self._state = SessionState.UNBOUND
        else:
            raise InputValidationError(
                "No secret key configured. Pass a device key or set use_bootstrap_key=True to bind first."
            )

    @property
    def host(self) -> str:
        return self._host

    @property
    def client_id(self) -> str | None:
        return self._client_id

    @property
    def secret_key(self) -> str:
        return self._secret_key

    @property
    def state(self) -> SessionState:
        return self._state

    def set_host(self, host: str) -> None:
        with self._lock:
            self._host = _validate_host(host)

    def set_client_id(self, client_id: str) -> None:
        with self._lock:
            self._client_id = _validate_client_id(client_id)

    def set_secret_key(self, key: str) -> None:
        with self._lock:
            self._secret_key = _validate_secret_key(key)
            self._state = SessionState.BOUND
        LOGGER.info("Device key set for %s, session bound", self._host)

    def scan(self) -> dict[str, Any]:
        with self._lock:
            response = self._exchange({"t": framing.SCAN}, key=BOOTSTRAP_KEY)
            pack = response.get("pack")
            if not isinstance(pack, dict):
                raise NoDeviceFoundError(f"No device found at {self._host}", response)
            if "mac" in pack:
                try:
                    self._client_id = _validate_client_id(pack["mac"])
                except InputValidationError:
                    raise ProtocolShapeError("Device returned a malformed mac", response) from None
                LOGGER.info("Found device %s at %s", self._client_id, self._host)
            return pack

    def get_bind_key(self) -> str:
        with self._lock:
            client_id = self._require_client_id()
            response = self._exchange(
                {"t": "bind", "mac": client_id, "uid": 0},
                key=BOOTSTRAP_KEY,
                client_id="",
                target_client_id=client_id,
                index=1,
            )
            key = _pack(response).get("key")
            if key is None:
                raise ProtocolShapeError("Cannot obtain key", response)
            try:
                self._secret_key = _validate_secret_key(key)
            except InputValidationError:
                raise ProtocolShapeError("Device returned a malformed key", response) from None
            self._state = SessionState.BOUND
            LOGGER.info("Bound to device %s", client_id)
            return key

    def get_status(self, columns: Sequence[str] | None = None) -> dict[str, Any]:
        cols = list(columns) if columns is not None else list(self.catalog.status_columns)
        with self._lock:
            response = self._status(cols)
            names = _pack(response).get("cols", cols)
            values = _list_field(response, "dat", min_len=0)
            if not isinstance(names, list) or len(names) != len(values):
                raise ProtocolShapeError("pack.dat is not aligned with pack.cols", response)
            return {name: self.catalog.translate(name, value) for name, value in zip(names, values)}

    def get_value(self, name: str) -> dict[str, Any]:
        self.catalog.get(name)
        with self._lock:
            response = self._status([name])
            field = _GETTER_FIELDS.get(name, _DEFAULT_GETTER_FIELD)
            return {name: self.catalog.translate(name, _list_field(response, field)[0])}

    def get_temperature(self) -> dict[str, Any]:
        with self._lock:
            response = self._status(["SetTem", "Add0.5"])
            values = _list_field(response, "dat")
            status = {"SetTem": values[0]}
            if len(values) > 1:
                status["Add0.5"] = values[1]
            return status

    def set_values(self, values: Mapping[str, str]) -> dict[str, Any]:
        if not values:
            raise InputValidationError("At least one setting is required")
        opt = list(values)
        codes = [self.catalog.encode(name, symbol) for name, symbol in values.items()]
        with self._lock:
            response = self._command(opt, codes)
            echoed = _list_field(response, "val", min_len=len(opt))
            return {name: self.catalog.decode(name, code) for name, code in zip(opt, echoed)}

    def set_temperature(self, temperature: int, half_degree: bool = False) -> dict[str, Any]:
        if not isinstance(temperature, int) or isinstance(temperature, bool):
            raise InputValidationError(f"Temperature must be an integer, got {temperature!r}")
        with self._lock:
            response = self._command(["SetTem", "Add0.5"], [temperature, 1 if half_degree else 0])
            _pack(response)
            return {"SetTem": _list_field(response, "val")[0]}

    def _status(self, cols: list[str]) -> dict[str, Any]:
        client_id = self._require_bound()
        return self._exchange(
            {"t": "status", "cols": cols, "mac": client_id},
            key=self._secret_key,
            client_id=client_id,
        )

    def _command(self, opt: list[str], codes: list[int]) -> dict[str, Any]:
        client_id = self._require_bound()
        return self._exchange(
            {"t": "cmd", "opt": opt, "p": codes},
            key=self._secret_key,
            client_id=client_id,
        )

    def _require_client_id(self) -> str:
        if not self._client_id:
            raise SessionStateError("Client id is unknown. Run scan() or set_client_id() first.")
        return self._client_id

    def _require_bound(self) -> str:
        client_id = self._require_client_id()
        if self._state is not SessionState.BOUND:
            raise SessionStateError("Session is not bound. Run get_bind_key() or set_secret_key() first.")
        return client_id

    def _exchange(
        self,
        inner: dict[str, Any],
        *,
        key: str,
        client_id: str = "",
        target_client_id: str = "",
        index: int = 0,
    ) -> dict[str, Any]:
        LOGGER.debug("Request to %s:%s: %s", self._host, self.port, inner)
        envelope = framing.build_request(inner, client_id, target_client_id, key=key, index=index)
        raw = self.transport.send(
            self._host,
            framing.encode_frame(envelope),
            port=self.port,
            timeout_s=self.timeout_s,
        )
        response = framing.parse_response(raw, key)
        LOGGER.debug("Response from %s:%s: %s", self._host, self.port, response)
        return response
