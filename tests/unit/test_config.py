"""
Unit tests for typed settings.
"""
import pytest
from pathlib import Path
from pydantic import ValidationError

from wagerbook.config import ObservabilitySettings, Settings, StorageSettings


class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("WAGERBOOK_DATA_DIR", raising=False)
        monkeypatch.delenv("WAGERBOOK_HISTORY_FILE", raising=False)

        settings = Settings(_env_file=None)

        assert settings.history_path == Path("data") / "bet_history_v1.json"
        assert settings.storage.create_backup is True

    def test_env_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("WAGERBOOK_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("WAGERBOOK_HISTORY_FILE", "ledger.json")

        settings = Settings(_env_file=None)

        assert settings.history_path == tmp_path / "ledger.json"

    def test_history_file_must_be_plain_name(self):
        with pytest.raises(ValidationError):
            StorageSettings(history_file="../escape.json")

    def test_log_level_validated(self):
        with pytest.raises(ValidationError):
            ObservabilitySettings(log_level="LOUD")

    def test_environment_validated(self):
        with pytest.raises(ValidationError):
            ObservabilitySettings(environment="moon")

    def test_observability_fields_are_all_read(self):
        assert set(ObservabilitySettings.model_fields) == {"environment", "log_level", "log_format"}
        with pytest.raises(ValidationError):
            ObservabilitySettings(enable_metrics=False)
