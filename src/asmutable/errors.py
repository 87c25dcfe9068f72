"""
Exception types for asmutable.

Structural failures (deleting or redefining a non-configurable key) are
reported as ``False`` by the capability methods and never raise. The
exceptions here cover the remaining failure modes.
"""

import pathlib as _pathlib


class AsMutableError(Exception):
    """Base class for all asmutable errors."""

    pass


class CyclicContainerError(AsMutableError):
    """Raised when materialization reaches a facade that contains itself."""

    def __init__(self, path: tuple[object, ...]) -> None:
        self.path = path
        rendered = "".join(f"[{key!r}]" for key in path) or "<root>"
        super().__init__(f"Cyclic draft detected at {rendered}")


class NestingTooDeepError(AsMutableError):
    """Raised when materialization exceeds the configured max_depth."""

    def __init__(self, max_depth: int) -> None:
        self.max_depth = max_depth
        super().__init__(
            f"Draft nesting exceeds max_depth={max_depth}. "
            f"Raise ASMUTABLE_MAX_DEPTH if this structure is intentional."
        )


class ConfigFileError(AsMutableError):
    """Error loading or parsing a configuration file."""

    def __init__(self, path: _pathlib.Path, message: str) -> None:
        self.path = path
        super().__init__(f"Error in config file {path}: {message}")
