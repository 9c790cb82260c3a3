"""
Configuration loading with multi-layer merging.

Implements the configuration precedence chain:
    defaults < user config < project config < env vars
"""

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .env import resolve_env
from .models import LSEQConfig

logger = logging.getLogger(__name__)

# Environment variable -> generator setting
ENV_OVERRIDES = {
    "LSEQ_INITIAL_WIDTH": "initial_width",
    "LSEQ_BOUNDARY": "boundary",
}

_config_cache: LSEQConfig | None = None


def get_xdg_config_home() -> Path:
    """
    Get XDG config home directory.

    Returns:
        Path to config directory (defaults to ~/.config)
    """
    if xdg_home := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_home)
    return Path.home() / ".config"


def get_user_config_path() -> Path:
    """Path to ~/.config/lseq/config.json (or XDG equivalent)."""
    return get_xdg_config_home() / "lseq" / "config.json"


def get_project_config_path(cwd: Path | None = None) -> Path:
    """Path to .lseq.json in ``cwd`` (defaults to current directory)."""
    if cwd is None:
        cwd = Path.cwd()
    return cwd / ".lseq.json"


def get_env_paths(project_dir: Path | None = None) -> list[Path]:
    """User and project .env files, lowest precedence first."""
    if project_dir is None:
        project_dir = Path.cwd()
    return [get_user_config_path().parent / ".env", project_dir / ".env"]


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep merge two dictionaries.

    Values in `override` take precedence over values in `base`. Nested
    dicts are merged, not replaced.

    Example:
        >>> deep_merge({"generator": {"boundary": 10}}, {"generator": {"initial_width": 6}})
        {'generator': {'boundary': 10, 'initial_width': 6}}
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_json_file(path: Path) -> dict[str, Any] | None:
    """
    Load a JSON file, returning None if it doesn't exist or is invalid.

    Args:
        path: Path to JSON file

    Returns:
        Parsed JSON as dict, or None if file doesn't exist or can't be parsed
    """
    if not path.exists():
        return None

    try:
        with path.open() as f:
            data = json.load(f)
            if isinstance(data, dict):
                return data
            logger.warning("Ignoring config at %s: top level is not an object", path)
            return None
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Failed to parse config at %s: %s", path, e)
        return None


def apply_env_overrides(
    config_dict: dict[str, Any], env: Mapping[str, str] | None = None
) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Supported env vars:
        LSEQ_INITIAL_WIDTH - overrides generator.initial_width
        LSEQ_BOUNDARY - overrides generator.boundary

    Values that are not positive integers are ignored with a warning.

    Args:
        config_dict: Merged configuration so far
        env: Variable source (defaults to os.environ)
    """
    if env is None:
        env = os.environ
    result = config_dict.copy()

    for env_var, setting in ENV_OVERRIDES.items():
        raw = env.get(env_var)
        if not raw:
            continue
        try:
            value = int(raw)
        except ValueError:
            logger.warning("Invalid %s value '%s', ignoring", env_var, raw)
            continue
        if value < 1:
            logger.warning("%s must be >= 1, got %d, ignoring", env_var, value)
            continue
        existing = result.get("generator")
        generator = dict(existing) if isinstance(existing, dict) else {}
        generator[setting] = value
        result["generator"] = generator

    return result


def get_default_config() -> dict[str, Any]:
    """Hardcoded default configuration."""
    return {"generator": {"initial_width": 5, "boundary": 10}}


def load_config(project_dir: Path | None = None, use_cache: bool = True) -> LSEQConfig:
    """
    Load configuration with multi-layer merging.

    Configuration precedence (highest to lowest):
        1. Environment variables (LSEQ_*), then project .env, then user .env
        2. Project config (.lseq.json)
        3. User config (~/.config/lseq/config.json)
        4. Hardcoded defaults

    Args:
        project_dir: Project directory to load .lseq.json from (defaults to cwd)
        use_cache: If True, return cached config from previous load. The
            cache is not keyed by project_dir: a cached config is returned
            even when a different directory is passed. Use use_cache=False
            or clear_cache() when switching projects.

    Returns:
        Validated LSEQConfig instance

    Raises:
        ValidationError: If the merged config fails Pydantic validation
    """
    global _config_cache

    if use_cache and _config_cache is not None:
        return _config_cache

    merged = get_default_config()

    if user_config := load_json_file(get_user_config_path()):
        merged = deep_merge(merged, user_config)

    if project_config := load_json_file(get_project_config_path(project_dir)):
        merged = deep_merge(merged, project_config)

    env = resolve_env(ENV_OVERRIDES.keys(), get_env_paths(project_dir))
    merged = apply_env_overrides(merged, env)

    config = LSEQConfig(**merged)
    _config_cache = config

    return config


def clear_cache() -> None:
    """
    Clear the cached configuration.

    Useful for testing or when config files change during execution.
    """
    global _config_cache
    _config_cache = None
