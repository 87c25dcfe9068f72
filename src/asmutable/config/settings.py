"""
Settings configuration using pydantic-settings.

Loads configuration from:
1. Constructor arguments (highest precedence)
2. Environment variables with ASMUTABLE_ prefix
3. .env file (if ASMUTABLE_ENV_FILE points at one)
4. YAML config file (see config.sources)
5. Built-in defaults (lowest)

Examples:
  ASMUTABLE_ANCESTOR_POLICY=snapshot
  ASMUTABLE_MAX_DEPTH=2000

The process-wide active settings are created lazily on first use by
get_settings() and can be replaced with set_settings() or discarded with
reset_settings() (e.g. between tests).
"""

import os as _os
import pathlib as _pathlib

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import asmutable.config.sources as sources
import asmutable.config.types as types
import asmutable.constants as constants


def _get_env_file() -> str | None:
    """Determine which .env file to load.

    Only an explicit ASMUTABLE_ENV_FILE is honoured; a library should not
    pick up whatever .env happens to sit in the working directory.
    """
    if env_file := _os.environ.get(f"{constants.ENV_PREFIX}ENV_FILE"):
        if _pathlib.Path(env_file).exists():
            return env_file
    return None


class Settings(_pydantic_settings.BaseSettings):
    """
    asmutable configuration settings.

    All settings can be overridden via environment variables with the
    ASMUTABLE_ prefix.
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix=constants.ENV_PREFIX,
        env_file=_get_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[_pydantic_settings.BaseSettings],
        init_settings: _pydantic_settings.PydanticBaseSettingsSource,
        env_settings: _pydantic_settings.PydanticBaseSettingsSource,
        dotenv_settings: _pydantic_settings.PydanticBaseSettingsSource,
        file_secret_settings: _pydantic_settings.PydanticBaseSettingsSource,
    ) -> tuple[_pydantic_settings.PydanticBaseSettingsSource, ...]:
        """
        Configure settings sources with precedence:
        1. init_settings (constructor args) (highest)
        2. env_settings (ASMUTABLE_* env vars)
        3. dotenv_settings (.env file)
        4. YAML config file
        5. (defaults via Field definitions) (lowest)
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            sources.YamlFileSettingsSource(settings_cls),
            file_secret_settings,
        )

    @classmethod
    def construct_without_dotenv(cls, **kwargs: object) -> "Settings":
        """Create Settings from environment variables only, without loading .env file.

        Useful for test isolation.
        """
        return cls(_env_file=None, **kwargs)  # type: ignore[arg-type]

    ancestor_policy: types.AncestorPolicy = _pydantic.Field(
        default=types.AncestorPolicy(constants.DEFAULT_ANCESTOR_POLICY),
        description="How drafts resolve their origin's ancestor (live or snapshot)",
    )

    max_depth: int = _pydantic.Field(
        default=constants.DEFAULT_MAX_DEPTH,
        ge=1,
        description="Maximum draft nesting depth during materialization",
    )


_active: Settings | None = None


def get_settings() -> Settings:
    """Return the active settings, loading them on first use."""
    global _active
    if _active is None:
        _active = Settings()
    return _active


def set_settings(settings: Settings) -> None:
    """Replace the active settings."""
    global _active
    _active = settings


def reset_settings() -> None:
    """Discard the active settings; the next get_settings() reloads them."""
    global _active
    _active = None
