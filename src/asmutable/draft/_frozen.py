"""
Read-only views of origin containers.

Facade.origin returns one of these so callers can look at what a draft
started from without any way to change it. Views hold the container by
reference and freeze nested containers lazily, as they are reached.

Record views also expose descriptors and the ancestor, both frozen.
"""

from __future__ import annotations

import collections.abc as _abc
import typing as _typing

import asmutable.draft._operations as _operations
import asmutable.draft._record as _record


class _FrozenView:
    """Shared storage and repr for the view types.

    Both subclasses define __eq__, which leaves them unhashable.
    """

    __slots__ = ("_data",)

    def __init__(self, data: _typing.Any) -> None:
        self._data = data

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data!r})"


class FrozenMapping(_FrozenView, _abc.Mapping[_typing.Any, _typing.Any]):
    """
    Read-only view of a dict or Record.

    Example:
        >>> view = FrozenMapping({"a": {"b": [1, 2]}})
        >>> view["a"]["b"][0]
        1
        >>> view["a"]["b"][0] = 99  # TypeError
    """

    __slots__ = ()

    def __getitem__(self, key: _typing.Any) -> _typing.Any:
        return freeze(self._data[key])

    def __iter__(self) -> _typing.Iterator[_typing.Any]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __eq__(self, other: object) -> bool:
        if isinstance(other, _abc.Mapping):
            return dict(self.items()) == dict(other.items())
        return NotImplemented

    # Record extras; plain dicts answer as if every key were PLAIN

    @property
    def ancestor(self) -> FrozenMapping | None:
        ancestor = _record.ancestor_of(self._data)
        return None if ancestor is None else FrozenMapping(ancestor)

    def own_keys(self) -> list[_typing.Any]:
        if isinstance(self._data, _record.Record):
            return self._data.own_keys()
        return list(self._data)

    def own_descriptor(self, key: _typing.Any) -> _operations.Descriptor | None:
        """Descriptor of an own key with its value frozen, or None."""
        if isinstance(self._data, _record.Record):
            descriptor = self._data.own_descriptor(key)
        elif key in self._data:
            descriptor = _operations.PLAIN.with_value(self._data[key])
        else:
            descriptor = None
        if descriptor is None or not descriptor.has_value:
            return descriptor
        return descriptor.with_value(freeze(descriptor.value))


class FrozenSequence(_FrozenView, _abc.Sequence[_typing.Any]):
    """
    Read-only view of a list or tuple.

    Tuples get a view too: the tuple itself cannot change, but the lists
    and dicts inside it can.
    """

    __slots__ = ()

    @_typing.overload
    def __getitem__(self, index: int) -> _typing.Any: ...

    @_typing.overload
    def __getitem__(self, index: slice) -> FrozenSequence: ...

    def __getitem__(self, index: int | slice) -> _typing.Any:
        if isinstance(index, slice):
            return FrozenSequence(self._data[index])
        return freeze(self._data[index])

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (str, bytes)) or not isinstance(other, _abc.Sequence):
            return NotImplemented
        return list(self) == list(other)


def freeze(value: _typing.Any) -> _typing.Any:
    """
    Return a read-only view of value if it is a mutable container.

    dicts and Records become FrozenMapping; lists and tuples become
    FrozenSequence. Views and everything else are returned unchanged.
    """
    if isinstance(value, _FrozenView):
        return value
    if isinstance(value, (dict, _record.Record)):
        return FrozenMapping(value)
    if isinstance(value, list) or type(value) is tuple:
        return FrozenSequence(value)
    return value
