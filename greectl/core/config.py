"""Device configuration loading from YAML."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from greectl.core.documents import read_yaml, validate
from greectl.core.errors import ConfigError
from greectl.core.model import DEFAULT_PORT, DeviceConfig


def default_config_path() -> Path:
    xdg_config = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return xdg_config / "greectl/device.yaml"


def _normalize_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


def load_device_config(path: Path | None = None) -> DeviceConfig | None:
    """Read the device file; `None` when no path is given and the default file is absent."""
    source = path or default_config_path()
    if path is None and not source.exists():
        return None

    doc = read_yaml(source, error=ConfigError)
    validate(doc, "device.schema.json", source, error=ConfigError)

    return DeviceConfig(
        host=doc["host"],
        client_id=doc.get("client_id"),
        secret_key=doc.get("secret_key"),
        use_bootstrap_key=_normalize_bool(doc.get("use_bootstrap_key", False)),
        port=int(doc.get("port", DEFAULT_PORT)),
        timeout_s=float(doc.get("timeout_s", 1.0)),
        try_limit=int(doc.get("try_limit", 3)),
        backoff_s=float(doc.get("backoff_s", 0.0)),
    )
