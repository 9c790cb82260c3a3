"""
.env files as a source of generator settings.

A user-level ``.env`` (next to the user config) and a project ``.env`` can
carry the same ``LSEQ_*`` variables the process environment accepts. Only
the requested keys are read and nothing is written back to ``os.environ``.

Precedence for each key:
    process environment > project .env > user .env
"""

from __future__ import annotations

import logging
import os
from collections.abc import Collection, Iterable
from pathlib import Path

from dotenv import dotenv_values

logger = logging.getLogger(__name__)


def read_env_file(path: Path, keys: Collection[str]) -> dict[str, str]:
    """
    Read the given keys from a .env file.

    Missing files and keys without a value are skipped.
    """
    if not path.exists():
        return {}

    found = {
        key: value
        for key, value in dotenv_values(path).items()
        if key in keys and value is not None
    }
    if found:
        logger.debug("Read %s from %s", ", ".join(sorted(found)), path)
    return found


def resolve_env(keys: Collection[str], env_paths: Iterable[Path]) -> dict[str, str]:
    """
    Resolve settings from .env files and the process environment.

    Args:
        keys: Variable names to resolve
        env_paths: .env files, lowest precedence first

    Returns:
        Mapping of every key that has a value in some layer

    Example:
        >>> resolve_env({"LSEQ_BOUNDARY"}, [user_env, project_env])
        {'LSEQ_BOUNDARY': '40'}
    """
    resolved: dict[str, str] = {}
    for path in env_paths:
        resolved.update(read_env_file(Path(path), keys))

    for key in keys:
        if key in os.environ:
            resolved[key] = os.environ[key]
    return resolved
