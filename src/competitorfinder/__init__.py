"""Competitor Finder package exposing configuration, proxy API, and UI controllers."""

from __future__ import annotations

from .config import DEFAULT_ENV_PATH, ClientSettings, PassthroughSettings, load_env_file

load_env_file(DEFAULT_ENV_PATH)

__all__ = ["ClientSettings", "PassthroughSettings", "load_env_file"]
