"""Configuration models for the passthrough proxies and the proxy client."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import ClassVar, Dict, List, Mapping, MutableMapping, Type, TypeVar

from pydantic import BaseModel, Field, ValidationError

__all__ = [
    "ClientSettings",
    "PassthroughSettings",
    "DEFAULT_API_URL",
    "DEFAULT_PASSTHROUGH_URL",
    "FIND_SIMILAR_ACTION_ID",
    "CONTENTS_ACTION_ID",
    "DEFAULT_ENV_PATH",
    "load_env_file",
]

DEFAULT_PASSTHROUGH_URL = "https://api.picaos.com/v1/passthrough"
DEFAULT_API_URL = "http://127.0.0.1:8000/api"

#: Action identifiers selecting the upstream "find similar" and "contents" operations.
FIND_SIMILAR_ACTION_ID = "conn_mod_def::GCMYlnYFSss::5aCHrI54Tk2x4WKKQKmysg"
CONTENTS_ACTION_ID = "conn_mod_def::GCMYl3sMiIk::SC1A2LyQQIOebf7SfkwL8g"

#: Project-level file holding the PICA_* and COMPETITORFINDER_* variables.
DEFAULT_ENV_PATH = Path(__file__).resolve().parents[2] / ".env"

_SettingsT = TypeVar("_SettingsT", bound=BaseModel)


def load_env_file(
    path: Path | str, environ: MutableMapping[str, str] | None = None
) -> List[str]:
    """Copy ``KEY=value`` lines from ``path`` into ``environ`` and return the keys set.

    Variables that are already set win over the file. ``export`` prefixes and
    surrounding single or double quotes are stripped. A missing file is ignored.
    """

    target = os.environ if environ is None else environ
    env_path = Path(path)
    if not env_path.is_file():
        return []

    loaded: List[str] = []
    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if line.startswith("export "):
            line = line[len("export ") :].lstrip()
        if not line or line.startswith("#") or "=" not in line:
            continue

        key, value = (part.strip() for part in line.split("=", 1))
        if not key or key in target:
            continue

        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        target[key] = value
        loaded.append(key)
    return loaded


def _load_json_settings(cls: Type[_SettingsT], path: Path | str) -> _SettingsT:
    config_path = Path(path)
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise FileNotFoundError(f"Configuration file not found: {config_path}") from exc
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in configuration file: {config_path}") from exc

    try:
        return cls.model_validate(data)
    except ValidationError as exc:
        raise ValueError(f"Configuration file is invalid: {config_path}\n{exc}") from exc


def _from_environ(env: Mapping[str, str] | None, names: Dict[str, str]) -> Dict[str, str]:
    """Collect the fields in ``names`` (field -> variable) that are set in ``env``."""

    source = os.environ if env is None else env
    return {field: source[variable] for field, variable in names.items() if variable in source}


class PassthroughSettings(BaseModel):
    """Credentials and routing for the upstream passthrough gateway."""

    secret_key: str = Field(default="", description="Shared API secret sent as x-pica-secret")
    connection_key: str = Field(
        default="",
        description="Per-integration connection key sent as x-pica-connection-key",
    )
    base_url: str = Field(default=DEFAULT_PASSTHROUGH_URL, description="Passthrough gateway root")
    find_similar_action_id: str = Field(default=FIND_SIMILAR_ACTION_ID)
    contents_action_id: str = Field(default=CONTENTS_ACTION_ID)

    ENV_VARS: ClassVar[Dict[str, str]] = {
        "secret_key": "PICA_SECRET_KEY",
        "connection_key": "PICA_EXA_CONNECTION_KEY",
        "base_url": "PICA_PASSTHROUGH_URL",
        "find_similar_action_id": "PICA_FIND_SIMILAR_ACTION_ID",
        "contents_action_id": "PICA_CONTENTS_ACTION_ID",
    }

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "PassthroughSettings":
        """Build settings from environment variables, leaving unset secrets empty."""

        return cls(**_from_environ(env, cls.ENV_VARS))

    @classmethod
    def from_file(cls, path: Path | str) -> "PassthroughSettings":
        """Load settings from a JSON file."""

        return _load_json_settings(cls, path)

    @property
    def is_configured(self) -> bool:
        """Return ``True`` when both secrets are present."""

        return bool(self.secret_key and self.connection_key)

    def endpoint(self, operation: str) -> str:
        return f"{self.base_url.rstrip('/')}/{operation}"

    def headers(self, action_id: str) -> Dict[str, str]:
        """Return the header set injected into every upstream call."""

        return {
            "Content-Type": "application/json",
            "x-pica-secret": self.secret_key,
            "x-pica-connection-key": self.connection_key,
            "x-pica-action-id": action_id,
        }


class ClientSettings(BaseModel):
    """Settings for talking to the proxy endpoints from a client."""

    api_url: str = Field(default=DEFAULT_API_URL, description="Root URL of the proxy API")
    anon_key: str = Field(default="", description="Static key passed through as apikey/Authorization")
    timeout: float | None = Field(
        default=None,
        description="Request timeout in seconds. ``None`` keeps the transport default.",
    )

    ENV_VARS: ClassVar[Dict[str, str]] = {
        "api_url": "COMPETITORFINDER_API_URL",
        "anon_key": "COMPETITORFINDER_ANON_KEY",
        "timeout": "COMPETITORFINDER_TIMEOUT",
    }

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "ClientSettings":
        values = _from_environ(env, cls.ENV_VARS)
        if not values.get("timeout"):
            values.pop("timeout", None)
        return cls(**values)

    @classmethod
    def from_file(cls, path: Path | str) -> "ClientSettings":
        return _load_json_settings(cls, path)

    def headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.anon_key:
            headers["apikey"] = self.anon_key
            headers["Authorization"] = f"Bearer {self.anon_key}"
        return headers
