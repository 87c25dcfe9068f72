"""
Shared pytest fixtures for asmutable tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import pathlib as _pathlib
import typing as _typing

import pytest as _pytest

import asmutable.config as config

# Environment keys that should be cleared for isolated tests
ENV_KEYS_TO_CLEAR = [
    "ASMUTABLE_ANCESTOR_POLICY",
    "ASMUTABLE_MAX_DEPTH",
    "ASMUTABLE_CONFIG_FILE",
    "ASMUTABLE_CONFIG_DIR",
    "ASMUTABLE_ENV_FILE",
]


@_pytest.fixture(autouse=True)
def isolated_settings(
    tmp_path: _pathlib.Path,
    monkeypatch: _pytest.MonkeyPatch,
) -> _typing.Generator[None, None, None]:
    """
    Run every test against default settings.

    Clears ASMUTABLE_* variables, points the config directory at an empty
    temporary directory so a user's ~/.config/asmutable is never read, and
    drops the cached active settings before and after the test.
    """
    for key in ENV_KEYS_TO_CLEAR:
        monkeypatch.delenv(key, raising=False)
    config_dir = tmp_path / "asmutable-config"
    config_dir.mkdir()
    monkeypatch.setenv("ASMUTABLE_CONFIG_DIR", str(config_dir))
    config.reset_settings()
    yield
    config.reset_settings()


@_pytest.fixture
def config_dir(tmp_path: _pathlib.Path) -> _pathlib.Path:
    """The (initially empty) config directory used by isolated_settings."""
    return tmp_path / "asmutable-config"


@_pytest.fixture
def nested_state() -> dict[str, _typing.Any]:
    """A small nested structure with mapping and sequence branches."""
    return {
        "user": {"name": "ada", "roles": ["admin", "dev"]},
        "settings": {"theme": "dark", "layout": {"columns": 2}},
        "items": [{"id": 1}, {"id": 2}, {"id": 3}],
        "version": 1,
    }
