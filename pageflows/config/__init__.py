"""Configuration helpers for pageflows browser sessions.

Session settings live in a YAML file that either holds the settings mapping
directly or a ``profiles`` mapping with one entry per target environment::

    profiles:
      default:
        base_url: https://staging.example.com
        headless: true
      local:
        base_url: http://localhost:3000
        headless: false

Environment variables override whatever the file provides so CI jobs can
retarget a run without editing checked-in files.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pageflows.core.errors import ConfigError
from pageflows.core.paths import resolve_config_path


DEFAULT_SETTINGS_PATH = Path("pageflows.yaml")
DEFAULT_PROFILE = "default"

ENV_OVERRIDES = {
    "PAGEFLOWS_BASE_URL": "base_url",
    "PAGEFLOWS_HEADLESS": "headless",
    "PAGEFLOWS_TIMEOUT_MS": "default_timeout_ms",
}


class SessionSettings(BaseModel):
    """Settings for a Playwright backed session."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: str | None = None
    headless: bool = True
    default_timeout_ms: int = Field(default=15_000, gt=0)
    storage_state: Path | None = None
    submit_selector: str = "[type=submit]"
    screenshots_dir: Path | None = None

    def url_for(self, path_or_url: str) -> str:
        """Join ``path_or_url`` onto ``base_url`` unless it is already absolute."""

        if "://" in path_or_url or not self.base_url:
            return path_or_url
        return self.base_url.rstrip("/") + "/" + path_or_url.lstrip("/")


def load_session_settings(
    path: str | Path | None = None,
    *,
    profile: str | None = None,
    env: Mapping[str, str] | None = None,
) -> SessionSettings:
    """Load session settings from YAML and apply environment overrides.

    A missing default file yields defaults; a missing explicit path is an
    error.
    """

    environ = os.environ if env is None else env
    if path is None:
        settings_path = resolve_config_path(DEFAULT_SETTINGS_PATH)
        raw = _load_yaml(settings_path) if settings_path.exists() else {}
    else:
        raw = _load_yaml(resolve_config_path(path))
    data = _select_profile(raw, profile)
    data.update(_env_overrides(environ))
    try:
        return SessionSettings(**data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid session settings: {exc}") from exc


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"Settings file not found: {path}")
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigError("Settings file must contain a mapping")
    return data


def _select_profile(raw: Mapping[str, Any], profile: str | None) -> Dict[str, Any]:
    profiles = raw.get("profiles")
    if profiles is None:
        if profile is not None:
            raise ConfigError(f"Profile {profile!r} requested but settings define no profiles")
        return dict(raw)
    if not isinstance(profiles, Mapping) or not profiles:
        raise ConfigError("profiles node must be a non-empty mapping")
    if profile is None:
        if DEFAULT_PROFILE in profiles:
            profile = DEFAULT_PROFILE
        elif len(profiles) == 1:
            profile = next(iter(profiles))
        else:
            raise ConfigError(f"Several profiles defined, choose one of: {', '.join(sorted(profiles))}")
    selected = profiles.get(profile)
    if selected is None:
        raise ConfigError(f"Unknown profile: {profile}")
    if not isinstance(selected, Mapping):
        raise ConfigError(f"Profile {profile} must be a mapping")
    return dict(selected)


def _env_overrides(environ: Mapping[str, str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for env_key, field in ENV_OVERRIDES.items():
        value = environ.get(env_key)
        if value:
            overrides[field] = value
    return overrides


__all__ = [
    "DEFAULT_PROFILE",
    "SessionSettings",
    "load_session_settings",
]
