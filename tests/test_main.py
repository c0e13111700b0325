"""
Tests for the ``python -m user_api`` entry point with a stand-in server.
"""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the user_api package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import user_api.__main__ as entry  # noqa: E402
from user_api.core import config as core_config  # noqa: E402


class FakeServer:
    started: list["FakeServer"] = []

    def __init__(self, config):
        self.config = config

    def run(self):
        FakeServer.started.append(self)


@pytest.fixture()
def servers(tmp_path, monkeypatch):
    for name in ("HOST", "PORT", "LOG_LEVEL", "LOG_FILE", "STRICT_STORAGE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("USERS_FILE", str(tmp_path / "users.json"))
    monkeypatch.setattr(entry, "Server", FakeServer)
    FakeServer.started = []
    core_config.get_settings.cache_clear()
    yield FakeServer.started
    core_config.get_settings.cache_clear()


def test_defaults_come_from_settings(servers):
    entry.main([])
    assert len(servers) == 1
    config = servers[0].config
    assert config.port == 3000
    assert config.host == "127.0.0.1"
    assert config.log_level == "info"


def test_cli_flags_override_settings(servers, tmp_path):
    store = tmp_path / "other.json"
    entry.main(["--port", "4000", "--host", "0.0.0.0", "--users-file", str(store), "--log-level", "DEBUG"])
    config = servers[0].config
    assert config.port == 4000
    assert config.host == "0.0.0.0"
    assert config.log_level == "debug"
    assert config.app.state.settings.users_file == str(store)


@pytest.mark.parametrize("port", ["0", "65536", "-1"])
def test_out_of_range_port_is_rejected(servers, port):
    with pytest.raises(SystemExit) as info:
        entry.main(["--port", port])
    assert info.value.code == 2
    assert servers == []


def test_unknown_log_level_flag_is_rejected(servers):
    with pytest.raises(SystemExit) as info:
        entry.main(["--port", "4000", "--log-level", "verbose"])
    assert info.value.code == 2
    assert servers == []


def test_unknown_log_level_from_environment_is_rejected(servers, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "verbose")
    core_config.get_settings.cache_clear()
    with pytest.raises(SystemExit):
        entry.main([])
    assert servers == []
