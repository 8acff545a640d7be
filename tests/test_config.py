from pathlib import Path

import pytest
import tomllib

from cors_policy import Configurator


def test_default_config(monkeypatch, tmp_path):
    monkeypatch.setenv("CORS_POLICY_SETTINGS", str(tmp_path / "missing.toml"))
    config = Configurator()

    assert config.CORS_ALLOW_METHODS == ["GET", "HEAD", "PUT", "POST", "DELETE", "PATCH"]
    assert config.CORS_KEEP_HEADERS_ON_ERROR is True
    assert config.UNKNOWN_KEY is None

    # Make sure all config keys are defined
    with open(Path(__file__).parent.parent / "cors_policy/config_default.toml", "rb") as f:
        assert config.configuration.keys() == tomllib.load(f).keys()


def test_custom_config_file_override(monkeypatch, tmp_path):
    settings = tmp_path / "config.toml"
    settings.write_text('CORS_ORIGIN = "*"\nCORS_MAX_AGE = 600\n')
    monkeypatch.setenv("CORS_POLICY_SETTINGS", str(settings))
    config = Configurator()

    assert config.CORS_ORIGIN == "*"
    assert config.CORS_MAX_AGE == 600


def test_env_override(monkeypatch, tmp_path):
    monkeypatch.setenv("CORS_POLICY_SETTINGS", str(tmp_path / "missing.toml"))
    monkeypatch.setenv("CORS_ALLOW_METHODS", "GET, POST")
    monkeypatch.setenv("CORS_CREDENTIALS", "yes")
    monkeypatch.setenv("CORS_MAX_AGE", "3600")
    monkeypatch.setenv("SENTRY_SAMPLE_RATE", "0.5")
    config = Configurator()

    assert config.CORS_ALLOW_METHODS == ["GET", "POST"]
    assert config.CORS_CREDENTIALS is True
    assert config.CORS_MAX_AGE == 3600
    assert config.SENTRY_SAMPLE_RATE == 0.5


def test_origin_and_whitelist_are_exclusive(monkeypatch, tmp_path):
    monkeypatch.setenv("CORS_POLICY_SETTINGS", str(tmp_path / "missing.toml"))
    config = Configurator()
    with pytest.raises(ValueError):
        config.override(CORS_ORIGIN="*", CORS_ORIGIN_WHITELIST=["http://koajs.com"])
