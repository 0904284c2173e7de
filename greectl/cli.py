"""Typer CLI entrypoint."""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import Any

import typer

from greectl.api import Client
from greectl.core.catalog import default_catalog
from greectl.core.config import load_device_config
from greectl.core.errors import GreectlError
from greectl.core.model import DeviceConfig

app = typer.Typer(help="Local network control for Gree air conditioners")


@dataclasses.dataclass
class _Options:
    host: str | None = None
    mac: str | None = None
    key: str | None = None
    bootstrap: bool = False
    config: Path | None = None
    port: int | None = None


def _echo_mapping(values: dict[str, Any]) -> None:
    for name, value in values.items():
        typer.echo(f"{name}: {value}")


def _build_client(ctx: typer.Context, *, bootstrap: bool = False) -> Client:
    options: _Options = ctx.obj
    config = load_device_config(options.config) or DeviceConfig(host="")
    overrides: dict[str, Any] = {}
    if options.host:
        overrides["host"] = options.host
    if options.mac:
        overrides["client_id"] = options.mac
    if options.key:
        overrides["secret_key"] = options.key
    if options.port:
        overrides["port"] = options.port
    if options.bootstrap or bootstrap:
        overrides["use_bootstrap_key"] = True
    config = dataclasses.replace(config, **overrides)
    if not config.host:
        raise GreectlError("No host given. Use --host or a device config file.")
    return Client(config)


def _fail(exc: GreectlError) -> typer.Exit:
    typer.echo(f"Error: {exc}", err=True)
    return typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    host: str | None = typer.Option(None, "--host", help="Device IP address"),
    mac: str | None = typer.Option(None, "--mac", help="Device client id (12 hex characters)"),
    key: str | None = typer.Option(None, "--key", help="Device key obtained from 'bind'"),
    bootstrap: bool = typer.Option(False, "--bootstrap", help="Use the well-known bootstrap key"),
    config: Path | None = typer.Option(None, "--config", help="Device YAML file"),
    port: int | None = typer.Option(None, "--port", help="Device UDP port"),
    debug: bool = typer.Option(False, "--debug", help="Log requests and responses"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = _Options(host=host, mac=mac, key=key, bootstrap=bootstrap, config=config, port=port)


@app.command("settings")
def list_settings() -> None:
    """List known settings and their values."""
    try:
        catalog = default_catalog()
    except GreectlError as exc:
        raise _fail(exc) from None
    for name, setting in catalog.settings.items():
        values = ", ".join(setting.values) if setting.is_enum else "<number>"
        typer.echo(f"{name}: {values}")


@app.command("scan")
def scan(ctx: typer.Context) -> None:
    """Query the host for its device descriptor."""
    try:
        client = _build_client(ctx, bootstrap=True)
        _echo_mapping(client.scan())
    except GreectlError as exc:
        raise _fail(exc) from None


@app.command("bind")
def bind(ctx: typer.Context) -> None:
    """Obtain the device key. Scans first when no --mac is given."""
    try:
        client = _build_client(ctx, bootstrap=True)
        if client.client_id is None:
            client.scan()
        key = client.get_bind_key()
        typer.echo(f"mac: {client.client_id}")
        typer.echo(f"key: {key}")
    except GreectlError as exc:
        raise _fail(exc) from None


@app.command("status")
def status(ctx: typer.Context) -> None:
    """Print every status column."""
    try:
        _echo_mapping(_build_client(ctx).get_status())
    except GreectlError as exc:
        raise _fail(exc) from None


@app.command("get")
def get_setting(ctx: typer.Context, setting: str) -> None:
    """Read one setting."""
    try:
        client = _build_client(ctx)
        if setting == "SetTem":
            _echo_mapping(client.get_temperature())
        else:
            _echo_mapping(client.get_setting(setting))
    except GreectlError as exc:
        raise _fail(exc) from None


@app.command("set")
def set_setting(
    ctx: typer.Context,
    setting: str,
    value: str | None = typer.Argument(None),
) -> None:
    """Set SETTING to a named value.

    If VALUE is omitted, prints the available values for SETTING.
    """
    try:
        if value is None:
            allowed = default_catalog().enum_setting(setting)
            typer.echo(f"Available values for '{setting}': {', '.join(allowed.values)}")
            return
        _echo_mapping(_build_client(ctx).set_setting(setting, value))
    except GreectlError as exc:
        raise _fail(exc) from None


@app.command("temp")
def set_temperature(
    ctx: typer.Context,
    degrees: int,
    half: bool = typer.Option(False, "--half", help="Add half a degree"),
) -> None:
    """Set the target temperature."""
    try:
        _echo_mapping(_build_client(ctx).set_temperature(degrees, half))
    except GreectlError as exc:
        raise _fail(exc) from None


@app.command("on")
def turn_on(ctx: typer.Context) -> None:
    """Switch the unit on."""
    try:
        _echo_mapping(_build_client(ctx).turn_on())
    except GreectlError as exc:
        raise _fail(exc) from None


@app.command("off")
def turn_off(ctx: typer.Context) -> None:
    """Switch the unit off."""
    try:
        _echo_mapping(_build_client(ctx).turn_off())
    except GreectlError as exc:
        raise _fail(exc) from None


def run() -> None:
    app()


if __name__ == "__main__":
    run()
