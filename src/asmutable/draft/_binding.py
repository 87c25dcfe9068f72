"""
Ancestor bindings for draft workers.

A binding answers one question: which mapping does this draft consult for
keys its origin does not own? The answer depends on the policy chosen at
wrap time and on whether the caller has rebound the draft since.
"""

from __future__ import annotations

import collections.abc as _abc
import typing as _typing

import asmutable.config.types as config_types
import asmutable.draft._record as _record

Ancestor: _typing.TypeAlias = _typing.Optional[_abc.Mapping[_typing.Any, _typing.Any]]


class AncestorBinding:
    """Base class for ancestor bindings."""

    __slots__ = ()

    #: True once the caller has replaced the origin's ancestor.
    rebound: bool = False

    def resolve(self) -> Ancestor:
        raise NotImplementedError


class LiveBinding(AncestorBinding):
    """Resolves against the origin's current ancestor on every query."""

    __slots__ = ("_origin",)

    def __init__(self, origin: object) -> None:
        self._origin = origin

    def resolve(self) -> Ancestor:
        return _record.ancestor_of(self._origin)


class SnapshotBinding(AncestorBinding):
    """Holds the origin's ancestor as it was when the draft was created."""

    __slots__ = ("_ancestor",)

    def __init__(self, origin: object) -> None:
        self._ancestor = _record.ancestor_of(origin)

    def resolve(self) -> Ancestor:
        return self._ancestor


class FixedBinding(AncestorBinding):
    """An ancestor set explicitly through the draft."""

    __slots__ = ("_ancestor",)

    rebound = True

    def __init__(self, ancestor: Ancestor) -> None:
        if ancestor is not None and not isinstance(ancestor, _abc.Mapping):
            raise TypeError(
                f"ancestor must be a Mapping or None, got {type(ancestor).__name__}"
            )
        self._ancestor = ancestor

    def resolve(self) -> Ancestor:
        return self._ancestor


def make_binding(
    origin: object,
    policy: config_types.AncestorPolicy,
) -> AncestorBinding:
    """Create the binding for a new draft of origin under policy."""
    if policy is config_types.AncestorPolicy.SNAPSHOT:
        return SnapshotBinding(origin)
    return LiveBinding(origin)
