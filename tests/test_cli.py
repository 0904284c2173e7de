from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from greectl import cli
from greectl.core.errors import TransportTimeoutError


class FakeClient:
    configs: list = []

    def __init__(self, config) -> None:
        FakeClient.configs.append(config)
        self.client_id = config.client_id

    def scan(self):
        self.client_id = "aabbccddeeff"
        return {"mac": "aabbccddeeff", "name": "living room"}

    def get_bind_key(self):
        return "0123456789abcdef"

    def get_status(self):
        return {"Pow": "on", "SetTem": 24}

    def get_setting(self, name):
        return {name: "cool"}

    def get_temperature(self):
        return {"SetTem": 24, "Add0.5": 0}

    def set_setting(self, name, value):
        return {name: value}

    def set_temperature(self, degrees, half):
        return {"SetTem": degrees}

    def turn_on(self):
        return {"Pow": "on"}

    def turn_off(self):
        return {"Pow": "off"}


runner = CliRunner()
DEVICE = ["--host", "192.168.1.50", "--mac", "aabbccddeeff", "--key", "0123456789abcdef"]


def _invoke(monkeypatch, args, client=FakeClient):
    FakeClient.configs = []
    monkeypatch.setattr(cli, "Client", client)
    return runner.invoke(cli.app, args)


def test_settings_command() -> None:
    result = runner.invoke(cli.app, ["settings"])
    assert result.exit_code == 0
    assert "Mod: auto, cool, dry, fan, heat" in result.stdout
    assert "SetTem: <number>" in result.stdout


def test_scan_uses_bootstrap_key(monkeypatch) -> None:
    result = _invoke(monkeypatch, ["--host", "192.168.1.50", "scan"])
    assert result.exit_code == 0
    assert "mac: aabbccddeeff" in result.stdout
    assert FakeClient.configs[0].use_bootstrap_key is True


def test_bind_scans_when_mac_unknown(monkeypatch) -> None:
    result = _invoke(monkeypatch, ["--host", "192.168.1.50", "bind"])
    assert result.exit_code == 0
    assert "mac: aabbccddeeff" in result.stdout
    assert "key: 0123456789abcdef" in result.stdout


def test_status_command(monkeypatch) -> None:
    result = _invoke(monkeypatch, [*DEVICE, "status"])
    assert result.exit_code == 0
    assert "Pow: on" in result.stdout
    assert "SetTem: 24" in result.stdout
    config = FakeClient.configs[0]
    assert config.host == "192.168.1.50"
    assert config.client_id == "aabbccddeeff"
    assert config.secret_key == "0123456789abcdef"
    assert config.use_bootstrap_key is False


def test_get_and_set_commands(monkeypatch) -> None:
    assert "Mod: cool" in _invoke(monkeypatch, [*DEVICE, "get", "Mod"]).stdout
    assert "Add0.5: 0" in _invoke(monkeypatch, [*DEVICE, "get", "SetTem"]).stdout
    assert "Lig: off" in _invoke(monkeypatch, [*DEVICE, "set", "Lig", "off"]).stdout
    assert "SetTem: 21" in _invoke(monkeypatch, [*DEVICE, "temp", "21", "--half"]).stdout
    assert "Pow: on" in _invoke(monkeypatch, [*DEVICE, "on"]).stdout
    assert "Pow: off" in _invoke(monkeypatch, [*DEVICE, "off"]).stdout


def test_set_without_value_shows_available_values(monkeypatch) -> None:
    result = _invoke(monkeypatch, ["set", "WdSpd"])
    assert result.exit_code == 0
    assert "Available values for 'WdSpd'" in result.stdout
    assert "medium-high" in result.stdout
    assert FakeClient.configs == []


def test_host_from_config_file(monkeypatch, tmp_path: Path) -> None:
    config_file = tmp_path / "device.yaml"
    config_file.write_text('host: 10.0.0.9\nsecret_key: "0123456789abcdef"\nclient_id: "aabbccddeeff"\n', encoding="utf-8")
    result = _invoke(monkeypatch, ["--config", str(config_file), "status"])
    assert result.exit_code == 0
    assert FakeClient.configs[0].host == "10.0.0.9"


def test_missing_host_is_clean_error(monkeypatch) -> None:
    result = _invoke(monkeypatch, ["status"])
    assert result.exit_code == 1
    assert "Error: No host given" in result.stderr


def test_device_error_is_clean(monkeypatch) -> None:
    class SilentClient(FakeClient):
        def get_status(self):
            raise TransportTimeoutError("No response from 192.168.1.50:7000 after 4 attempts")

    result = _invoke(monkeypatch, [*DEVICE, "status"], client=SilentClient)
    assert result.exit_code == 1
    assert "Error: No response from 192.168.1.50:7000" in result.stderr
    assert "Traceback" not in result.stdout
    assert "Traceback" not in result.stderr
