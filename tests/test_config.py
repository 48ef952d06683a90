"""Unit tests for ScaffoldConfig and GitConfig (monoforge.config).

Tests cover:
- Defaults (target directory, git settings)
- Timestamp chosen once at construction and overridable
- Validation of timestamp / timeout / commit message
- target_root derivation
- save/load round trip
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from monoforge.config import (
    DEFAULT_TARGET_DIR,
    GitConfig,
    ScaffoldConfig,
)


class TestGitConfig:
    @pytest.mark.unit
    def test_defaults(self):
        git = GitConfig()
        assert git.enabled is True
        assert git.commit_message == "chore: scaffold fixed monorepo (no auto-install)"
        assert git.timeout == 60

    @pytest.mark.unit
    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            GitConfig(timeout=0)

    @pytest.mark.unit
    def test_commit_message_not_empty(self):
        with pytest.raises(ValidationError):
            GitConfig(commit_message="")


class TestScaffoldConfig:
    @pytest.mark.unit
    def test_default_target(self):
        assert ScaffoldConfig().target_dir == Path(DEFAULT_TARGET_DIR)

    @pytest.mark.unit
    def test_target_dir_from_string(self):
        assert ScaffoldConfig(target_dir="my-repo").target_dir == Path("my-repo")

    @pytest.mark.unit
    def test_timestamp_taken_at_construction(self):
        with patch("monoforge.config.time.time", return_value=1234.9):
            config = ScaffoldConfig()
        assert config.timestamp == 1234

    @pytest.mark.unit
    def test_timestamp_is_stable(self):
        config = ScaffoldConfig()
        first = config.timestamp
        assert config.timestamp == first

    @pytest.mark.unit
    def test_explicit_timestamp(self):
        assert ScaffoldConfig(timestamp=42).timestamp == 42

    @pytest.mark.unit
    def test_negative_timestamp_rejected(self):
        with pytest.raises(ValidationError):
            ScaffoldConfig(timestamp=-1)

    @pytest.mark.unit
    def test_target_root_is_absolute(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.chdir(tmp_path)
        config = ScaffoldConfig(target_dir="proj")
        assert config.target_root == tmp_path / "proj"
        assert config.target_root.is_absolute()

    @pytest.mark.unit
    def test_nested_git_config(self):
        config = ScaffoldConfig(git={"enabled": False})
        assert config.git.enabled is False
        assert config.git.timeout == 60

    @pytest.mark.unit
    def test_save_and_load(self, tmp_path: Path):
        config = ScaffoldConfig(target_dir=tmp_path / "proj", timestamp=99, git=GitConfig(commit_message="hi"))
        saved = config.save(tmp_path / "cfg" / "config.json")

        assert saved.exists()
        loaded = ScaffoldConfig.load(saved)
        assert loaded == config
