"""
Configuration models and loading.

Pydantic models for lseq configuration with multi-layer merging:
defaults < user < project < env vars.
"""

from .env import resolve_env
from .loader import (
    clear_cache,
    get_env_paths,
    get_project_config_path,
    get_user_config_path,
    get_xdg_config_home,
    load_config,
)
from .models import GeneratorConfig, LSEQConfig

__all__ = [
    # Models
    "GeneratorConfig",
    "LSEQConfig",
    # Loader functions
    "clear_cache",
    "get_project_config_path",
    "get_user_config_path",
    "get_env_paths",
    "get_xdg_config_home",
    "load_config",
    # .env files
    "resolve_env",
]
