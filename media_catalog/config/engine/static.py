"""Static engine config loader. Read-only; no business logic."""

import json
from pathlib import Path
from typing import Any

from media_catalog.config.engine.models import EngineConfig

_config_dir = Path(__file__).resolve().parent
_config_path = _config_dir / "static.json"

_cached: dict[str, EngineConfig] | None = None
_active_profile: str | None = None


def _load_raw_data() -> dict[str, Any]:
    """Load raw JSON; used to read both profiles and active."""
    raw = _config_path.read_text(encoding="utf-8")
    return json.loads(raw)


def _deep_merge(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_engine_profiles() -> dict[str, EngineConfig]:
    """Load engine profiles from static.json. Keys are profile names."""
    global _cached
    if _cached is not None:
        return _cached
    data = _load_raw_data()
    profiles = data.get("profiles", {})
    _cached = {k: EngineConfig.model_validate(v) for k, v in profiles.items()}
    return _cached


def get_engine_config(profile_name: str) -> EngineConfig | None:
    """Return engine config for the given profile, or None if missing."""
    return load_engine_profiles().get(profile_name)


def get_active_profile_name() -> str:
    """Return the profile name marked as active in static.json. Defaults to 'default' if missing."""
    global _active_profile
    if _active_profile is not None:
        return _active_profile
    data = _load_raw_data()
    _active_profile = data.get("active", "default")
    return _active_profile


def resolve_engine_config(
    profile_name: str = "active",
    inline_config: dict[str, Any] | None = None,
) -> EngineConfig:
    """
    Resolve engine config by profile name and optional inline overrides.
    Inline overrides are deep-merged over the profile (nested sections merge key by key).
    If profile_name is 'active', use the profile marked as active in static.json.
    Raises ValueError if the profile is missing.
    """
    name = get_active_profile_name() if profile_name == "active" else profile_name
    base = get_engine_config(name)
    if base is None:
        raise ValueError(f"Unknown engine profile: {name!r}")
    if not inline_config:
        return base
    merged = _deep_merge(base.model_dump(), inline_config)
    return EngineConfig.model_validate(merged)
