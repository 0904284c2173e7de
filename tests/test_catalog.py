from __future__ import annotations

from pathlib import Path

import pytest

from greectl.core.catalog import default_catalog, load_catalog
from greectl.core.errors import CatalogError, ProtocolShapeError, SettingValueError


def _write(path: Path, content: str) -> Path:
    path.write_text(content, encoding="utf-8")
    return path


def test_packaged_catalog_loads() -> None:
    catalog = default_catalog()
    assert catalog.settings["Pow"].values == ("off", "on")
    assert catalog.settings["Mod"].values == ("auto", "cool", "dry", "fan", "heat")
    assert len(catalog.settings["SwUpDn"].values) == 12
    assert catalog.status_columns[0] == "Pow"
    assert len(catalog.status_columns) == 18
    assert not catalog.settings["SetTem"].is_enum


def test_default_catalog_is_shared() -> None:
    assert default_catalog() is default_catalog()


def test_round_trip_for_every_enum_setting() -> None:
    catalog = default_catalog()
    for name, setting in catalog.settings.items():
        if not setting.is_enum:
            continue
        for code, symbol in enumerate(setting.values):
            assert catalog.encode(name, symbol) == code
            assert catalog.decode(name, code) == symbol
        with pytest.raises(ProtocolShapeError):
            catalog.decode(name, len(setting.values))


def test_negative_and_non_integer_codes_rejected() -> None:
    catalog = default_catalog()
    with pytest.raises(ProtocolShapeError):
        catalog.decode("Pow", -1)
    with pytest.raises(ProtocolShapeError):
        catalog.decode("Pow", "1")
    with pytest.raises(ProtocolShapeError):
        catalog.decode("Pow", True)


def test_unknown_symbol_lists_allowed_values() -> None:
    with pytest.raises(SettingValueError) as exc:
        default_catalog().encode("WdSpd", "turbo")
    assert "Allowed: auto, low" in str(exc.value)


def test_unknown_setting_rejected() -> None:
    with pytest.raises(SettingValueError):
        default_catalog().encode("Nope", "on")


def test_numeric_setting_has_no_symbols() -> None:
    with pytest.raises(SettingValueError):
        default_catalog().encode("SetTem", "24")


def test_translate_passes_numbers_through() -> None:
    catalog = default_catalog()
    assert catalog.translate("SetTem", 24) == 24
    assert catalog.translate("Unlisted", 7) == 7
    assert catalog.translate("TemUn", 1) == "fahrenheit"


def test_settings_are_immutable() -> None:
    with pytest.raises(TypeError):
        default_catalog().settings["Pow"] = None  # type: ignore[index]


def test_enum_without_values_rejected(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "bad.yaml",
        """
settings:
  Pow:
    type: enum
status_columns: [Pow]
""",
    )
    with pytest.raises(CatalogError):
        load_catalog(path)


def test_status_column_must_be_a_setting(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "bad.yaml",
        """
settings:
  Pow:
    type: enum
    values: [off, on]
status_columns: [Pow, Mod]
""",
    )
    with pytest.raises(CatalogError) as exc:
        load_catalog(path)
    assert "Mod" in str(exc.value)


def test_duplicate_yaml_keys_rejected(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "dup.yaml",
        """
settings:
  Pow:
    type: enum
    values: [off, on]
  Pow:
    type: numeric
status_columns: [Pow]
""",
    )
    with pytest.raises(CatalogError):
        load_catalog(path)


def test_on_off_symbols_stay_strings(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "ok.yaml",
        """
settings:
  Lig:
    type: enum
    values: [off, on]
status_columns: [Lig]
""",
    )
    assert load_catalog(path).settings["Lig"].values == ("off", "on")
