"""
Tests for configuration loading.

Tests cover:
- Defaults when no config files exist
- User and project config merging and precedence
- Environment variable overrides
- Invalid files and values
- Caching
- Layered .env loading
"""

import json
import os

import pytest
from pydantic import ValidationError

from lseq.core.config import (
    GeneratorConfig,
    LSEQConfig,
    clear_cache,
    get_env_paths,
    get_project_config_path,
    get_user_config_path,
    load_config,
    resolve_env,
)
from lseq.core.config.loader import apply_env_overrides, deep_merge


def write_json(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data))


class TestModels:
    """Test the configuration models."""

    def test_defaults(self):
        """GeneratorConfig defaults to width 5, boundary 10."""
        config = LSEQConfig()
        assert config.generator.initial_width == 5
        assert config.generator.boundary == 10

    @pytest.mark.parametrize("field", ["initial_width", "boundary"])
    def test_rejects_non_positive(self, field):
        """Both settings must be at least 1."""
        with pytest.raises(ValidationError):
            GeneratorConfig(**{field: 0})

    def test_ignores_unknown_sections(self):
        """Unknown top-level keys are ignored."""
        config = LSEQConfig(**{"generator": {"boundary": 4}, "other": {}})
        assert config.generator.boundary == 4


class TestDeepMerge:
    """Test dictionary merging."""

    def test_nested_merge(self):
        """Nested dicts merge key by key."""
        merged = deep_merge(
            {"generator": {"initial_width": 5, "boundary": 10}},
            {"generator": {"boundary": 20}},
        )
        assert merged == {"generator": {"initial_width": 5, "boundary": 20}}

    def test_base_not_mutated(self):
        """The base dict is left untouched."""
        base = {"generator": {"boundary": 10}}
        deep_merge(base, {"generator": {"boundary": 20}})
        assert base == {"generator": {"boundary": 10}}


class TestLoadConfig:
    """Test layered configuration loading."""

    def test_defaults_without_files(self):
        """No files and no env gives the defaults."""
        config = load_config(use_cache=False)
        assert config.generator == GeneratorConfig()

    def test_user_config(self):
        """User config overrides defaults."""
        write_json(get_user_config_path(), {"generator": {"boundary": 25}})
        config = load_config(use_cache=False)
        assert config.generator.boundary == 25
        assert config.generator.initial_width == 5

    def test_project_overrides_user(self, tmp_path):
        """Project config beats user config."""
        write_json(get_user_config_path(), {"generator": {"boundary": 25, "initial_width": 6}})
        write_json(get_project_config_path(tmp_path), {"generator": {"boundary": 40}})
        config = load_config(tmp_path, use_cache=False)
        assert config.generator.boundary == 40
        assert config.generator.initial_width == 6

    def test_env_overrides_files(self, tmp_path, monkeypatch):
        """Environment variables beat every file."""
        write_json(get_project_config_path(tmp_path), {"generator": {"boundary": 40}})
        monkeypatch.setenv("LSEQ_BOUNDARY", "7")
        monkeypatch.setenv("LSEQ_INITIAL_WIDTH", "3")
        config = load_config(tmp_path, use_cache=False)
        assert config.generator.boundary == 7
        assert config.generator.initial_width == 3

    def test_invalid_json_is_ignored(self, tmp_path):
        """A broken project file falls back to lower layers."""
        get_project_config_path(tmp_path).write_text("{not json")
        config = load_config(tmp_path, use_cache=False)
        assert config.generator == GeneratorConfig()

    def test_non_object_json_is_ignored(self, tmp_path):
        """A JSON list is not a config."""
        get_project_config_path(tmp_path).write_text("[1, 2]")
        assert load_config(tmp_path, use_cache=False).generator == GeneratorConfig()

    def test_invalid_values_raise(self, tmp_path):
        """Values that fail validation surface as ValidationError."""
        write_json(get_project_config_path(tmp_path), {"generator": {"boundary": 0}})
        with pytest.raises(ValidationError):
            load_config(tmp_path, use_cache=False)

    def test_cache(self, tmp_path):
        """Cached config survives file changes until cleared."""
        first = load_config(tmp_path)
        write_json(get_project_config_path(tmp_path), {"generator": {"boundary": 40}})
        assert load_config(tmp_path) is first

        clear_cache()
        assert load_config(tmp_path).generator.boundary == 40

    def test_cache_ignores_project_dir(self, tmp_path):
        """The cache is global: switching directories needs use_cache=False."""
        first_dir = tmp_path / "first"
        second_dir = tmp_path / "second"
        write_json(get_project_config_path(first_dir), {"generator": {"boundary": 11}})
        write_json(get_project_config_path(second_dir), {"generator": {"boundary": 22}})

        assert load_config(first_dir).generator.boundary == 11
        assert load_config(second_dir).generator.boundary == 11
        assert load_config(second_dir, use_cache=False).generator.boundary == 22


class TestEnvOverrides:
    """Test environment variable parsing."""

    @pytest.mark.parametrize("raw", ["abc", "0", "-4", "1.5"])
    def test_bad_values_ignored(self, raw, monkeypatch):
        """Unparsable or non-positive values are skipped."""
        monkeypatch.setenv("LSEQ_BOUNDARY", raw)
        result = apply_env_overrides({"generator": {"boundary": 10}})
        assert result == {"generator": {"boundary": 10}}

    def test_creates_generator_section(self, monkeypatch):
        """An override works even when the section is missing."""
        monkeypatch.setenv("LSEQ_INITIAL_WIDTH", "9")
        assert apply_env_overrides({}) == {"generator": {"initial_width": 9}}

    def test_explicit_mapping(self, monkeypatch):
        """An explicit mapping is used instead of os.environ."""
        monkeypatch.setenv("LSEQ_BOUNDARY", "99")
        result = apply_env_overrides({}, {"LSEQ_BOUNDARY": "12"})
        assert result == {"generator": {"boundary": 12}}


class TestEnvFiles:
    """Test reading LSEQ_* settings from .env files."""

    def test_project_env_overrides_user_env(self, tmp_path, monkeypatch):
        """Project .env beats user .env but never the process environment."""
        monkeypatch.setenv("LSEQ_BOUNDARY", "7")

        user_env = tmp_path / "user.env"
        user_env.write_text("LSEQ_INITIAL_WIDTH=3\nLSEQ_BOUNDARY=20\n")
        project_env = tmp_path / "project.env"
        project_env.write_text("LSEQ_INITIAL_WIDTH=4\nLSEQ_BOUNDARY=30\n")

        resolved = resolve_env(["LSEQ_INITIAL_WIDTH", "LSEQ_BOUNDARY"], [user_env, project_env])
        assert resolved == {"LSEQ_INITIAL_WIDTH": "4", "LSEQ_BOUNDARY": "7"}

    def test_only_requested_keys(self, tmp_path):
        """Unrelated keys are neither returned nor exported."""
        env_file = tmp_path / "project.env"
        env_file.write_text("LSEQ_BOUNDARY=30\nLSEQ_UNRELATED=1\nOTHER_TOOL_TOKEN=secret\n")

        resolved = resolve_env(["LSEQ_BOUNDARY"], [env_file])
        assert resolved == {"LSEQ_BOUNDARY": "30"}
        assert "OTHER_TOOL_TOKEN" not in os.environ
        assert "LSEQ_UNRELATED" not in os.environ

    def test_missing_files(self, tmp_path):
        """Missing .env files are skipped."""
        resolved = resolve_env(
            ["LSEQ_BOUNDARY"],
            [tmp_path / "nope.env", tmp_path / "missing.env"],
        )
        assert resolved == {}

    def test_load_config_reads_env_files(self, tmp_path):
        """load_config picks up .env files from the user and project layers."""
        user_env = get_env_paths(tmp_path)[0]
        user_env.parent.mkdir(parents=True, exist_ok=True)
        user_env.write_text("LSEQ_INITIAL_WIDTH=6\nLSEQ_BOUNDARY=20\n")
        (tmp_path / ".env").write_text("LSEQ_BOUNDARY=30\n")

        config = load_config(tmp_path, use_cache=False)
        assert config.generator.initial_width == 6
        assert config.generator.boundary == 30

    def test_env_file_beats_json(self, tmp_path):
        """A .env setting overrides the project JSON config."""
        write_json(get_project_config_path(tmp_path), {"generator": {"boundary": 40}})
        (tmp_path / ".env").write_text("LSEQ_BOUNDARY=15\n")
        assert load_config(tmp_path, use_cache=False).generator.boundary == 15

    def test_invalid_env_file_value_ignored(self, tmp_path):
        """Bad values in a .env file fall back like bad process values."""
        (tmp_path / ".env").write_text("LSEQ_BOUNDARY=lots\n")
        assert load_config(tmp_path, use_cache=False).generator.boundary == 10
