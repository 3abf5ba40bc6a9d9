import pytest
from pydantic import ValidationError

from folio.api.config import Settings, apply_yaml_config


def test_defaults():
    settings = Settings()

    assert settings.app_name == "Folio"
    assert settings.folders.max_breadcrumb_depth == 256
    assert settings.audit.enabled is True
    assert settings.audit.entity_history_limit == 100


def test_log_level_is_normalized():
    assert Settings(log_level="debug").log_level == "DEBUG"


def test_invalid_log_level_rejected():
    with pytest.raises(ValidationError):
        Settings(log_level="chatty")


def test_cors_origins_accepts_comma_separated():
    settings = Settings(cors_origins="http://a.test, http://b.test,")
    assert settings.cors_origins == ["http://a.test", "http://b.test"]


def test_yaml_overlay():
    settings = apply_yaml_config(
        Settings(),
        {
            "db": {"pool_size": 3},
            "folders": {"max_breadcrumb_depth": 32},
            "audit": {"enabled": False, "max_page_size": 20},
            "api": {"cors_origins": "http://school.test"},
        },
    )

    assert settings.db.pool_size == 3
    assert settings.folders.max_breadcrumb_depth == 32
    assert settings.audit.enabled is False
    assert settings.audit.max_page_size == 20
    assert settings.cors_origins == ["http://school.test"]


def test_load_yaml_missing_file(tmp_path):
    assert Settings.load_yaml_config(tmp_path / "absent.yaml") == {}


def test_load_yaml_file(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("folders:\n  max_breadcrumb_depth: 8\n")

    assert Settings.load_yaml_config(path) == {"folders": {"max_breadcrumb_depth": 8}}
