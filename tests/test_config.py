from pathlib import Path

import tomllib

import config as config_module
from config import Config, config_from_dict, load_config


class TestConfigFromDict:
    """Tests for config_from_dict function."""

    def test_empty_data_uses_defaults(self):
        """Test that missing sections fall back to the defaults."""
        config = config_from_dict({})
        defaults = Config.default()

        assert config == defaults

    def test_sections(self, tmp_path):
        """Test reading every configuration section."""
        data = {
            "base_dir": str(tmp_path),
            "database": {"filename": "money.db"},
            "logging": {"level": "DEBUG"},
            "archive": {"enabled": False, "filename": "restore.zip"},
            "import": {
                "currency": "USD",
                "account_type": "BANK",
                "timezone": "America/New_York",
                "encoding": "latin-1",
            },
        }

        config = config_from_dict(data)

        assert config.db_path == tmp_path / "db" / "money.db"
        assert config.log_level == "DEBUG"
        assert config.log_dir == tmp_path / "logs"
        assert config.archive_enabled is False
        assert config.archive_path == tmp_path / "archives" / "restore.zip"
        assert config.default_currency == "USD"
        assert config.default_account_type == "BANK"
        assert config.timezone == "America/New_York"
        assert config.encoding == "latin-1"


class TestLoadConfig:
    """Tests for load_config function."""

    def test_creates_default_config_file(self, tmp_path, monkeypatch):
        """Test that a missing config file is written with the defaults."""
        config_path = tmp_path / "qifledger.toml"
        monkeypatch.setattr(config_module, "get_config_path", lambda: config_path)

        config = load_config()

        assert config == Config.default()
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
        assert data["import"]["currency"] == "EUR"
        assert data["archive"]["filename"] == "BACKUP.zip"

    def test_reads_existing_config_file(self, tmp_path, monkeypatch):
        """Test that an existing config file is read back."""
        config_path = tmp_path / "qifledger.toml"
        config_path.write_text('[import]\ncurrency = "GBP"\n')
        monkeypatch.setattr(config_module, "get_config_path", lambda: config_path)

        config = load_config()

        assert config.default_currency == "GBP"
        assert config.db_filename == "ledger.db"
        assert isinstance(config.base_dir, Path)
