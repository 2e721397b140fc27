"""Tests for settings loading and the project `.env` reader."""

from pathlib import Path

import pytest

pytest.importorskip("pydantic")

from competitorfinder.config import (
    CONTENTS_ACTION_ID,
    DEFAULT_PASSTHROUGH_URL,
    FIND_SIMILAR_ACTION_ID,
    ClientSettings,
    PassthroughSettings,
    load_env_file,
)


def test_passthrough_settings_from_env() -> None:
    settings = PassthroughSettings.from_env(
        {"PICA_SECRET_KEY": "secret", "PICA_EXA_CONNECTION_KEY": "conn", "UNRELATED": "x"}
    )

    assert settings.secret_key == "secret"
    assert settings.connection_key == "conn"
    assert settings.base_url == DEFAULT_PASSTHROUGH_URL
    assert settings.find_similar_action_id == FIND_SIMILAR_ACTION_ID
    assert settings.contents_action_id == CONTENTS_ACTION_ID
    assert settings.is_configured


def test_missing_secrets_become_empty_headers() -> None:
    settings = PassthroughSettings.from_env({})

    assert not settings.is_configured
    assert settings.headers("action") == {
        "Content-Type": "application/json",
        "x-pica-secret": "",
        "x-pica-connection-key": "",
        "x-pica-action-id": "action",
    }


def test_endpoint_joins_base_url() -> None:
    settings = PassthroughSettings(base_url="https://gateway.example.com/v1/passthrough/")

    assert settings.endpoint("findSimilar") == "https://gateway.example.com/v1/passthrough/findSimilar"


def test_passthrough_settings_from_file(tmp_path: Path) -> None:
    config_path = tmp_path / "passthrough.json"
    config_path.write_text('{"secret_key": "s", "connection_key": "c"}', encoding="utf-8")

    loaded = PassthroughSettings.from_file(config_path)

    assert loaded.secret_key == "s"
    assert loaded.connection_key == "c"


def test_from_file_reports_invalid_json(tmp_path: Path) -> None:
    config_path = tmp_path / "client.json"
    config_path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ValueError, match="Invalid JSON"):
        ClientSettings.from_file(config_path)


def test_from_file_reports_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="Configuration file not found"):
        ClientSettings.from_file(tmp_path / "missing.json")


def test_client_settings_pass_through_static_key() -> None:
    settings = ClientSettings.from_env(
        {"COMPETITORFINDER_API_URL": "https://proxy.example.com/api", "COMPETITORFINDER_ANON_KEY": "anon"}
    )

    assert settings.api_url == "https://proxy.example.com/api"
    assert settings.timeout is None
    assert settings.headers() == {
        "Content-Type": "application/json",
        "apikey": "anon",
        "Authorization": "Bearer anon",
    }


def test_client_settings_without_key_send_only_content_type() -> None:
    settings = ClientSettings.from_env({"COMPETITORFINDER_TIMEOUT": "2.5"})

    assert settings.timeout == 2.5
    assert settings.headers() == {"Content-Type": "application/json"}


def test_load_env_file_reads_keys_without_overriding(tmp_path: Path) -> None:
    """Existing variables win; quotes, comments and ``export`` prefixes are handled."""

    env_path = tmp_path / ".env"
    env_path.write_text(
        "# upstream credentials\n"
        "\n"
        "export PICA_SECRET_KEY=\"secret\"\n"
        "PICA_EXA_CONNECTION_KEY='conn'\n"
        "COMPETITORFINDER_API_URL=https://proxy.example.com/api\n"
        "not a pair\n",
        encoding="utf-8",
    )
    environ = {"COMPETITORFINDER_API_URL": "http://localhost:8000/api"}

    loaded = load_env_file(env_path, environ)

    assert loaded == ["PICA_SECRET_KEY", "PICA_EXA_CONNECTION_KEY"]
    assert environ == {
        "COMPETITORFINDER_API_URL": "http://localhost:8000/api",
        "PICA_SECRET_KEY": "secret",
        "PICA_EXA_CONNECTION_KEY": "conn",
    }


def test_load_env_file_feeds_settings(tmp_path: Path) -> None:
    """Values read from a `.env` file reach ``PassthroughSettings.from_env``."""

    env_path = tmp_path / ".env"
    env_path.write_text("PICA_SECRET_KEY=s\nPICA_EXA_CONNECTION_KEY=c\n", encoding="utf-8")
    environ: dict[str, str] = {}

    load_env_file(env_path, environ)

    assert PassthroughSettings.from_env(environ).is_configured


def test_load_env_file_ignores_missing_file(tmp_path: Path) -> None:
    """A project without a `.env` file loads nothing."""

    environ: dict[str, str] = {}

    assert load_env_file(tmp_path / ".env", environ) == []
    assert environ == {}
