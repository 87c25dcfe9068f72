"""
Operation and descriptor dataclasses for draft workers.

A worker keeps at most one operation per key; recording a new operation
for a key replaces the previous one.

Example:
    >>> draft = wrap({"a": {"b": 1}})
    >>> draft["a"]             # logs Read(descriptor with the wrapped child)
    >>> draft["c"] = 2         # logs Write(Descriptor(value=2))
    >>> del draft["a"]         # replaces the Read with Delete()
"""

from __future__ import annotations

import dataclasses as _dataclasses
import typing as _typing

import asmutable.draft._types as _types


@_dataclasses.dataclass(frozen=True, slots=True)
class Descriptor:
    """
    Per-key property attributes.

    Plain dict and list entries behave as the default descriptor: writable,
    enumerable and configurable. ``value`` is MISSING for descriptors
    that only carry attributes.
    """

    value: _typing.Any = _types.MISSING
    writable: bool = True
    enumerable: bool = True
    configurable: bool = True

    @property
    def has_value(self) -> bool:
        """Whether this descriptor carries a value."""
        return self.value is not _types.MISSING

    def with_value(self, value: _typing.Any) -> Descriptor:
        """Return a copy of this descriptor holding ``value``."""
        return _dataclasses.replace(self, value=value)


PLAIN = Descriptor()
"""Attributes of a freshly assigned key (all True, no value)."""


@_dataclasses.dataclass(frozen=True, slots=True)
class Operation:
    """Base class for buffered operations."""

    pass


@_dataclasses.dataclass(frozen=True, slots=True)
class Read(Operation):
    """Cached read of a container child; value is the wrapped child."""

    descriptor: Descriptor


@_dataclasses.dataclass(frozen=True, slots=True)
class Write(Operation):
    """Assignment of a (wrapped) value."""

    descriptor: Descriptor


@_dataclasses.dataclass(frozen=True, slots=True)
class Delete(Operation):
    """Removal of a key."""

    pass


@_dataclasses.dataclass(frozen=True, slots=True)
class Define(Operation):
    """Installation of a caller-supplied descriptor."""

    descriptor: Descriptor


def descriptor_of(op: Operation) -> Descriptor | None:
    """
    Return the effective descriptor recorded by an operation.

    Returns:
        The descriptor, or None for Delete.

    Raises:
        TypeError: If op is not a known Operation type.
    """
    if isinstance(op, (Read, Write, Define)):
        return op.descriptor
    if isinstance(op, Delete):
        return None
    raise TypeError(f"Unknown Operation type: {type(op).__name__}")
