from pathlib import Path

import pytest

from dhcp_leases.config import load_settings
from dhcp_leases.errors import ConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # после теста переменные возвращаются в исходное состояние, в том числе выставленные из .env
    for name in ("DHCP_LEASES_FILE", "OUI_FILE", "OUI_DB"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


def test_defaults_when_settings_file_missing(tmp_path, capsys):
    settings = load_settings(tmp_path / "settings.yaml", use_dotenv=False)

    assert settings.leases_file == Path("/var/lib/dhcp/dhcpd.leases")
    assert settings.oui_file == Path("/usr/local/etc/oui.txt")
    assert settings.oui_db == Path("oui.db")
    assert settings.oui_batch_size == 1000
    assert settings.oui_rebuild is True
    assert "не найден" in capsys.readouterr().out


def test_yaml_values_then_environment_override(tmp_path, monkeypatch):
    path = tmp_path / "settings.yaml"
    path.write_text(
        "leases_file: /srv/dhcpd.leases\noui_db: /srv/oui.db\noui_batch_size: 50\noui_rebuild: false\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("OUI_DB", "/tmp/env-oui.db")

    settings = load_settings(path, use_dotenv=False)

    assert settings.leases_file == Path("/srv/dhcpd.leases")
    assert settings.oui_db == Path("/tmp/env-oui.db")
    assert settings.oui_batch_size == 50
    assert settings.oui_rebuild is False


def test_dotenv_file_in_working_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text("DHCP_LEASES_FILE=/from/dotenv.leases\n", encoding="utf-8")

    settings = load_settings(tmp_path / "settings.yaml")

    assert settings.leases_file == Path("/from/dotenv.leases")


def test_empty_settings_file_uses_defaults(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("", encoding="utf-8")

    assert load_settings(path, use_dotenv=False).oui_batch_size == 1000


@pytest.mark.parametrize("content", ["oui_batch_size: 0\n", "- just\n- a list\n", "key: [unclosed\n"])
def test_invalid_settings_are_fatal(tmp_path, content):
    path = tmp_path / "settings.yaml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_settings(path, use_dotenv=False)
