"""Tests for environment-driven settings."""

from pathlib import Path

import pytest

from spendflix.config import DEFAULT_IMPORT_CONCURRENCY, Settings
from spendflix.domain.errors import ValidationError


def test_defaults():
    settings = Settings.from_env({})

    assert settings.db_path == Path.home() / ".spendflix" / "spendflix.db"
    assert settings.storage_dir == Path.home() / ".spendflix" / "objects"
    assert settings.import_concurrency == DEFAULT_IMPORT_CONCURRENCY
    assert settings.log_level == "WARNING"


def test_values_from_environment(tmp_path):
    settings = Settings.from_env(
        {
            "SPENDFLIX_DB_PATH": str(tmp_path / "x.db"),
            "SPENDFLIX_STORAGE_DIR": str(tmp_path / "objects"),
            "SPENDFLIX_IMPORT_CONCURRENCY": "8",
            "SPENDFLIX_LOG_LEVEL": "debug",
        }
    )

    assert settings.db_path == tmp_path / "x.db"
    assert settings.storage_dir == tmp_path / "objects"
    assert settings.import_concurrency == 8
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("value", ["0", "-2", "many"])
def test_invalid_concurrency(value):
    with pytest.raises(ValidationError):
        Settings.from_env({"SPENDFLIX_IMPORT_CONCURRENCY": value})


def test_invalid_log_level():
    with pytest.raises(ValidationError):
        Settings.from_env({"SPENDFLIX_LOG_LEVEL": "LOUD"})
