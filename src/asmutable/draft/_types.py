"""
The MISSING sentinel returned by capability reads for absent values.
"""

from __future__ import annotations

import typing as _typing


# Helper function to reconstruct the MISSING singleton during unpickle
def _get_missing_singleton() -> _MissingType:
    """Return the MISSING singleton. Called by pickle to reconstruct."""
    return MISSING


class _MissingType:
    """Sentinel type marking an absent value."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<MISSING>"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> tuple[_typing.Callable[[], _MissingType], tuple[()]]:
        """Pickle support: ensure singleton is preserved."""
        return (_get_missing_singleton, ())


MISSING = _MissingType()
