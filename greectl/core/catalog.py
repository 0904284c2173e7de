"""Settings catalog: bidirectional mapping between setting symbols and wire codes."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from types import MappingProxyType
from typing import Any

from greectl.core.documents import read_yaml, validate
from greectl.core.errors import CatalogError, ProtocolShapeError, SettingValueError
from greectl.core.model import Setting


@dataclass(frozen=True)
class SettingsCatalog:
    settings: Mapping[str, Setting]
    status_columns: tuple[str, ...]

    def __contains__(self, name: object) -> bool:
        return name in self.settings

    def get(self, name: str) -> Setting:
        setting = self.settings.get(name)
        if setting is None:
            available = ", ".join(self.settings)
            raise SettingValueError(f"Unknown setting '{name}'. Available: {available}")
        return setting

    def enum_setting(self, name: str) -> Setting:
        setting = self.get(name)
        if not setting.is_enum:
            raise SettingValueError(f"Setting '{name}' is numeric and has no symbolic values")
        return setting

    def encode(self, name: str, symbol: str) -> int:
        setting = self.enum_setting(name)
        try:
            return setting.values.index(symbol)
        except ValueError:
            allowed = ", ".join(setting.values)
            raise SettingValueError(
                f"Setting '{name}' does not support value '{symbol}'. Allowed: {allowed}"
            ) from None

    def decode(self, name: str, code: Any) -> str:
        setting = self.enum_setting(name)
        # bool is an int subclass but never a valid wire code
        if not isinstance(code, int) or isinstance(code, bool):
            raise ProtocolShapeError(f"Non-integer code for '{name}'", code)
        if not 0 <= code < len(setting.values):
            raise ProtocolShapeError(
                f"Code {code} out of range for '{name}' (0..{len(setting.values) - 1})"
            )
        return setting.values[code]

    def translate(self, name: str, raw: Any) -> Any:
        setting = self.settings.get(name)
        if setting is None or not setting.is_enum:
            return raw
        return self.decode(name, raw)


def _build_catalog(doc: dict[str, Any], source: Path | Traversable) -> SettingsCatalog:
    validate(doc, "catalog.schema.json", source, error=CatalogError)

    settings: dict[str, Setting] = {}
    for name, setting_spec in doc["settings"].items():
        settings[name] = Setting(
            name=name,
            kind=setting_spec["type"],
            values=tuple(str(v) for v in setting_spec.get("values", ())),
            description=setting_spec.get("description", ""),
        )

    unknown = [c for c in doc["status_columns"] if c not in settings]
    if unknown:
        raise CatalogError(f"Status columns not defined as settings in {source}: {', '.join(unknown)}")

    return SettingsCatalog(
        settings=MappingProxyType(settings),
        status_columns=tuple(doc["status_columns"]),
    )


def load_catalog(path: Path | None = None) -> SettingsCatalog:
    source: Path | Traversable = path or resources.files("greectl.catalog").joinpath("settings.yaml")
    return _build_catalog(read_yaml(source, error=CatalogError), source)


@lru_cache(maxsize=1)
def default_catalog() -> SettingsCatalog:
    """Process-wide catalog shared by every client."""
    return load_catalog()
