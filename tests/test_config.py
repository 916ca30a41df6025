"""
Tests for the matchmaking configuration model and loader
"""

import json

import pytest

from irc_matchmaking.config import MatchmakingConfig, load_config
from irc_matchmaking.config.loader import ENV_OVERRIDES
from irc_matchmaking.constants import IRC_MATCHMAKING_CONF
from irc_matchmaking.errors import ConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate every test from the caller's environment and working dir."""
    for var in ENV_OVERRIDES.values():
        monkeypatch.delenv(var, raising=False)
    monkeypatch.delenv(IRC_MATCHMAKING_CONF, raising=False)
    monkeypatch.chdir(tmp_path)


def write_config(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestModel:
    def test_defaults(self):
        config = MatchmakingConfig()
        assert config.port == 6667
        assert config.lobby_channel.startswith(("#", "&"))
        assert config.max_unsolicited_lines >= 0

    def test_server_is_stripped(self):
        assert MatchmakingConfig(server="  irc.example.org ").server == "irc.example.org"

    @pytest.mark.parametrize("channel", ["lobby", "#", "#bad room", "#a,b"])
    def test_invalid_channel_rejected(self, channel):
        with pytest.raises(ValueError):
            MatchmakingConfig(lobby_channel=channel)

    @pytest.mark.parametrize("port", [0, 65536])
    def test_port_range(self, port):
        with pytest.raises(ValueError):
            MatchmakingConfig(port=port)

    def test_unknown_field_rejected(self):
        with pytest.raises(ValueError):
            MatchmakingConfig(nickname="alice")

    def test_frozen(self):
        config = MatchmakingConfig()
        with pytest.raises(ValueError):
            config.port = 7000


class TestLoader:
    def test_defaults_without_file(self):
        assert load_config() == MatchmakingConfig()

    def test_default_file_in_working_dir(self, tmp_path):
        write_config(tmp_path / "irc_matchmaking.json", {"server": "irc.local"})
        assert load_config().server == "irc.local"

    def test_explicit_path(self, tmp_path):
        path = write_config(
            tmp_path / "custom.json", {"port": 7000, "room_prefix": "#room"}
        )
        config = load_config(path)
        assert config.port == 7000
        assert config.room_prefix == "#room"

    def test_path_from_environment(self, tmp_path, monkeypatch):
        path = write_config(tmp_path / "env.json", {"lobby_channel": "#other"})
        monkeypatch.setenv(IRC_MATCHMAKING_CONF, str(path))
        assert load_config().lobby_channel == "#other"

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        path = write_config(tmp_path / "c.json", {"server": "from-file", "port": 7000})
        monkeypatch.setenv("IRC_SERVER", "from-env")
        config = load_config(path)
        assert config.server == "from-env"
        assert config.port == 7000

    def test_environment_values_are_coerced(self, monkeypatch):
        monkeypatch.setenv("IRC_PORT", "6697")
        monkeypatch.setenv("IRC_READ_TIMEOUT", "2.5")
        config = load_config()
        assert config.port == 6697
        assert config.read_timeout == 2.5

    def test_blank_environment_value_ignored(self, monkeypatch):
        monkeypatch.setenv("IRC_SERVER", "   ")
        assert load_config().server == MatchmakingConfig().server

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "absent.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_config(path)

    def test_non_object_json(self, tmp_path):
        path = write_config(tmp_path / "list.json", ["server"])
        with pytest.raises(ConfigError, match="JSON object"):
            load_config(path)

    def test_invalid_value(self, tmp_path):
        path = write_config(tmp_path / "bad.json", {"port": 0})
        with pytest.raises(ConfigError) as exc_info:
            load_config(path)
        assert exc_info.value.data["errors"]

    def test_invalid_environment_value(self, monkeypatch):
        monkeypatch.setenv("IRC_CONNECT_ATTEMPTS", "0")
        with pytest.raises(ConfigError):
            load_config()
