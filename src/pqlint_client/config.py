from __future__ import annotations

import json
import os
from pathlib import Path

from pqlint_client.models import (
    DEFAULT_BASE_URL,
    DEFAULT_SUBSCRIPTION_KEY_ENV,
    DEFAULT_USER_AGENT,
    ClientSettings,
)


class ConfigError(ValueError):
    pass


def load_config(path: str | Path | None = None) -> ClientSettings:
    if path is None:
        return ClientSettings()

    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as handle:
        try:
            raw = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Config file is not valid JSON: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError("Config root must be an object")

    base_url = _optional_str(raw, "base_url") or DEFAULT_BASE_URL
    if not base_url.startswith(("http://", "https://")):
        raise ConfigError(f"'base_url' must be an http(s) URL: {base_url}")

    return ClientSettings(
        base_url=base_url.rstrip("/"),
        subscription_key_env=_optional_str(raw, "subscription_key_env")
        or DEFAULT_SUBSCRIPTION_KEY_ENV,
        user_agent=_optional_str(raw, "user_agent") or DEFAULT_USER_AGENT,
    )


def resolve_subscription_key(settings: ClientSettings, explicit: str | None = None) -> str | None:
    if explicit and explicit.strip():
        return explicit.strip()
    token = os.getenv(settings.subscription_key_env)
    if token:
        return token.strip()
    return None


def _optional_str(raw: dict, key: str) -> str | None:
    value = raw.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"'{key}' must be a string")
    text = value.strip()
    return text or None
