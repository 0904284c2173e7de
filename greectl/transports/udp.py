"""UDP transport implementation using Python sockets."""

from __future__ import annotations

import ipaddress
import logging
import socket
import time
from collections.abc import Callable
from typing import Any

from greectl.core.errors import (
    TransportConnectError,
    TransportSendError,
    TransportTimeoutError,
)
from greectl.core.retry import RetryPolicy

MAX_DATAGRAM = 1024
LOGGER = logging.getLogger(__name__)


class UDPTransport:
    def __init__(
        self,
        policy: RetryPolicy | None = None,
        *,
        socket_factory: Callable[..., Any] = socket.socket,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.policy = policy or RetryPolicy()
        self._socket_factory = socket_factory
        self._sleep = sleep

    def send(
        self,
        host: str,
        payload: bytes,
        *,
        port: int,
        timeout_s: float = 1.0,
    ) -> bytes:
        try:
            family = socket.AF_INET6 if ipaddress.ip_address(host).version == 6 else socket.AF_INET
        except ValueError as exc:
            raise TransportConnectError(f"Invalid host address '{host}'") from exc

        try:
            udp_socket = self._socket_factory(family, socket.SOCK_DGRAM)
        except OSError as exc:
            raise TransportConnectError(f"Could not create UDP socket: {exc}") from exc
        udp_socket.settimeout(timeout_s)
        try:
            try:
                udp_socket.connect((host, port))
            except OSError as exc:
                raise TransportConnectError(f"UDP connect failed for {host}:{port}: {exc}") from exc

            for attempt in range(self.policy.attempts):
                delay = self.policy.delay(attempt)
                if delay:
                    self._sleep(delay)

                try:
                    udp_socket.send(payload)
                except OSError as exc:
                    raise TransportSendError(f"UDP send to {host}:{port} failed: {exc}") from exc

                try:
                    data = udp_socket.recv(MAX_DATAGRAM)
                except (socket.timeout, ConnectionRefusedError) as exc:
                    LOGGER.debug(
                        "No response from %s:%s (attempt %d/%d): %s",
                        host, port, attempt + 1, self.policy.attempts, exc,
                    )
                    continue
                except OSError as exc:
                    raise TransportSendError(f"UDP receive from {host}:{port} failed: {exc}") from exc

                if data:
                    return data
                LOGGER.debug("Empty datagram from %s:%s (attempt %d)", host, port, attempt + 1)

            raise TransportTimeoutError(
                f"No response from {host}:{port} after {self.policy.attempts} attempts"
            )
        finally:
            udp_socket.close()
