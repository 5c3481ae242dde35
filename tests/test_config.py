import dataclasses
import json

import pytest

from smsapi import ConfigurationError, SmsApiConfig

ENV_VARS = ("API_KEY", "API_SECRET", "URL", "SMSAPI_TIMEOUT", "SMSAPI_CONFIG", "XDG_CONFIG_HOME")


@pytest.fixture
def clean_env(monkeypatch):
    # setenv first so monkeypatch restores the original state afterwards
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


def test_base_url_gets_trailing_slash():
    config = SmsApiConfig("K", "S", "https://api.example.com")
    assert config.base_url == "https://api.example.com/"
    assert SmsApiConfig("K", "S", "https://api.example.com/").base_url == "https://api.example.com/"


def test_missing_fields_are_named():
    with pytest.raises(ConfigurationError) as excinfo:
        SmsApiConfig("", "", "https://api.example.com")
    assert "api_key" in str(excinfo.value)
    assert "api_secret" in str(excinfo.value)


@pytest.mark.parametrize("timeout", [0, -1, "abc"])
def test_invalid_timeout(timeout):
    with pytest.raises(ConfigurationError):
        SmsApiConfig("K", "S", "https://api.example.com", timeout=timeout)


def test_config_is_immutable_and_hides_secret():
    config = SmsApiConfig("K", "very-secret", "https://api.example.com")
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.api_key = "other"
    assert "very-secret" not in repr(config)
    assert config.to_dict()["api_secret"] == "***"
    assert config.to_dict(include_secret=True)["api_secret"] == "very-secret"


def test_from_env(clean_env):
    clean_env.setenv("API_KEY", "env-key")
    clean_env.setenv("API_SECRET", "env-secret")
    clean_env.setenv("URL", "https://env.example.com")
    clean_env.setenv("SMSAPI_TIMEOUT", "12")

    config = SmsApiConfig.from_env()
    assert config.api_key == "env-key"
    assert config.base_url == "https://env.example.com/"
    assert config.timeout == 12.0


def test_from_env_file(clean_env, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("API_KEY=file-key\nAPI_SECRET=file-secret\nURL=https://file.example.com\n",
                        encoding="utf-8")

    config = SmsApiConfig.from_env(str(env_file))
    assert config.api_key == "file-key"
    assert config.api_secret == "file-secret"


def test_from_env_missing_credentials(clean_env):
    with pytest.raises(ConfigurationError):
        SmsApiConfig.from_env()


def test_from_env_missing_file(clean_env, tmp_path):
    with pytest.raises(ConfigurationError):
        SmsApiConfig.from_env(str(tmp_path / "missing.env"))


def test_from_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "api_key": "K",
        "api_secret": "S",
        "base_url": "https://api.example.com",
        "timeout": 5,
    }), encoding="utf-8")

    config = SmsApiConfig.from_file(str(path))
    assert config.base_url == "https://api.example.com/"
    assert config.timeout == 5.0


def test_from_file_uses_xdg_location(clean_env, tmp_path):
    config_dir = tmp_path / "smsapi"
    config_dir.mkdir()
    (config_dir / "config.json").write_text(
        json.dumps({"api_key": "K", "api_secret": "S", "base_url": "https://xdg.example.com"}),
        encoding="utf-8",
    )
    clean_env.setenv("XDG_CONFIG_HOME", str(tmp_path))

    assert SmsApiConfig.from_file().base_url == "https://xdg.example.com/"


def test_from_file_errors(tmp_path):
    with pytest.raises(ConfigurationError):
        SmsApiConfig.from_file(str(tmp_path / "missing.json"))

    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        SmsApiConfig.from_file(str(bad))

    partial = tmp_path / "partial.json"
    partial.write_text(json.dumps({"api_key": "K"}), encoding="utf-8")
    with pytest.raises(ConfigurationError) as excinfo:
        SmsApiConfig.from_file(str(partial))
    assert "api_secret" in str(excinfo.value)
