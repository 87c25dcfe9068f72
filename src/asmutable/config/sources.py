"""Custom pydantic-settings source for asmutable configuration.

This module provides:

- YamlFileSettingsSource: A pydantic-settings source that loads
  configuration from a single YAML file.

The file is located as follows (first match wins):
1. ASMUTABLE_CONFIG_FILE: explicit path to a YAML file
2. ASMUTABLE_CONFIG_DIR: directory containing config.yaml
3. ~/.config/asmutable/config.yaml

A missing file is normal and contributes nothing.
"""

import collections.abc as _abc
import logging as _logging
import os as _os
import pathlib as _pathlib
import typing as _typing

import pydantic.fields as _pydantic_fields
import pydantic_settings as _pydantic_settings
import yaml as _yaml

import asmutable.constants as constants
import asmutable.errors as errors

_logger = _logging.getLogger(__name__)

# Environment variables for locating the config file
ENV_CONFIG_FILE = f"{constants.ENV_PREFIX}CONFIG_FILE"
ENV_CONFIG_DIR = f"{constants.ENV_PREFIX}CONFIG_DIR"


class YamlFileSettingsSource(_pydantic_settings.PydanticBaseSettingsSource):
    """
    Settings source that loads from a YAML config file.

    Flow:
    1. Load the YAML file into a dict
    2. Return it to pydantic-settings
    3. Pydantic validates everything (fail-fast on errors)

    Unknown top-level keys are logged and ignored.
    """

    def __init__(
        self,
        settings_cls: type[_pydantic_settings.BaseSettings],
        config_path: _pathlib.Path | None = None,
    ) -> None:
        """
        Initialize the settings source.

        Args:
            settings_cls: The Settings class being populated.
            config_path: Override path for the config file (for testing).
                If not provided, uses get_config_path().
        """
        super().__init__(settings_cls)
        self._config_path = config_path if config_path is not None else get_config_path()
        self._data = self._load_yaml_file(self._config_path)

    @property
    def config_path(self) -> _pathlib.Path:
        """Path this source reads (whether or not it exists)."""
        return self._config_path

    def _load_yaml_file(self, path: _pathlib.Path) -> dict[str, _typing.Any]:
        """
        Load a YAML file and return its contents as a dict.

        Returns:
            Parsed YAML contents, or an empty dict if the file is missing
            or empty.

        Raises:
            ConfigFileError: If the file cannot be read, is malformed YAML,
                or contains non-dict content at the top level.
        """
        if not path.exists():
            return {}

        try:
            content = path.read_text(encoding="utf-8")
        except PermissionError as e:
            raise errors.ConfigFileError(path, f"permission denied: {e}") from e
        except OSError as e:
            raise errors.ConfigFileError(path, f"cannot read file: {e}") from e

        try:
            parsed = _yaml.safe_load(content)
        except _yaml.YAMLError as e:
            raise errors.ConfigFileError(path, f"invalid YAML: {e}") from e

        if parsed is None:
            return {}

        if not isinstance(parsed, dict):
            type_name = type(parsed).__name__
            raise errors.ConfigFileError(
                path,
                f"config must be a YAML mapping (dict), got {type_name}",
            )

        unknown = sorted(str(key) for key in parsed if key not in self.settings_cls.model_fields)
        if unknown:
            _logger.warning("Ignoring unknown keys in %s: %s", path, ", ".join(unknown))

        return parsed

    def get_field_value(
        self,
        field: _pydantic_fields.FieldInfo,  # noqa: ARG002 - required by pydantic-settings interface
        field_name: str,
    ) -> tuple[_typing.Any, str, bool]:
        """
        Get value for a field from the loaded file.

        Returns:
            Tuple of (value, field_name, is_complex).
        """
        value = self._data.get(field_name)
        return value, field_name, isinstance(value, (_abc.Mapping, list))

    def __call__(self) -> dict[str, _typing.Any]:
        """Return known fields from the file for Pydantic validation."""
        return {
            key: value
            for key, value in self._data.items()
            if key in self.settings_cls.model_fields
        }


def get_config_dir() -> _pathlib.Path:
    """
    Get the config directory.

    Returns:
        Path from ASMUTABLE_CONFIG_DIR, or ~/.config/asmutable.
    """
    config_dir_env = _os.environ.get(ENV_CONFIG_DIR)
    if config_dir_env:
        return _pathlib.Path(config_dir_env)
    return _pathlib.Path.home() / ".config" / "asmutable"


def get_config_path() -> _pathlib.Path:
    """
    Get the path to the YAML config file.

    Returns:
        Path from ASMUTABLE_CONFIG_FILE, or config.yaml in get_config_dir().
    """
    config_file_env = _os.environ.get(ENV_CONFIG_FILE)
    if config_file_env:
        return _pathlib.Path(config_file_env)
    return get_config_dir() / constants.CONFIG_FILE_NAME
