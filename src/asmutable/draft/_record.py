"""
Record: an object-like container with per-key descriptors and an ancestor.

Plain dicts cannot express read-only or hidden keys, nor inheritance from a
parent mapping. Record can, which makes it the container to use when those
rules must survive a draft session.

Example:
    >>> base = Record(kind="shape")
    >>> circle = Record({"r": 2}, ancestor=base)
    >>> circle["kind"]          # inherited
    'shape'
    >>> list(circle)            # own enumerable keys only
    ['r']
    >>> circle.define("id", Descriptor(value=7, configurable=False))
    True
    >>> del circle["id"]        # TypeError: non-configurable
"""

from __future__ import annotations

import collections.abc as _abc
import typing as _typing

import asmutable.draft._operations as _operations
import asmutable.draft._types as _types


class Record(_abc.MutableMapping[_typing.Any, _typing.Any]):
    """
    Mapping whose keys carry descriptors and whose lookups fall back to an
    ancestor mapping.

    - ``record[key]`` and ``key in record`` see own keys first, then the
      ancestor chain.
    - Iteration and ``len()`` cover own enumerable keys only.
    - Assigning a non-writable key, or deleting a non-configurable one,
      raises TypeError.
    """

    __slots__ = ("_entries", "_ancestor")

    def __init__(
        self,
        data: _abc.Mapping[_typing.Any, _typing.Any]
        | _abc.Iterable[tuple[_typing.Any, _typing.Any]] = (),
        /,
        *,
        ancestor: _abc.Mapping[_typing.Any, _typing.Any] | None = None,
        **kwargs: _typing.Any,
    ) -> None:
        """
        Create a record.

        Args:
            data: Initial entries, as a mapping or iterable of pairs.
            ancestor: Mapping consulted for keys the record does not own.
            **kwargs: Additional initial entries.
        """
        self._entries: dict[_typing.Any, _operations.Descriptor] = {}
        self._ancestor: _abc.Mapping[_typing.Any, _typing.Any] | None = None
        self.ancestor = ancestor
        self.update(data, **kwargs)

    @property
    def ancestor(self) -> _abc.Mapping[_typing.Any, _typing.Any] | None:
        """The mapping consulted for keys this record does not own."""
        return self._ancestor

    @ancestor.setter
    def ancestor(self, value: _abc.Mapping[_typing.Any, _typing.Any] | None) -> None:
        if value is not None and not isinstance(value, _abc.Mapping):
            raise TypeError(
                f"ancestor must be a Mapping or None, got {type(value).__name__}"
            )
        current = value
        while isinstance(current, Record):
            if current is self:
                raise ValueError("Cyclic ancestor chain")
            current = current._ancestor
        self._ancestor = value

    # =========================================================================
    # Descriptor access
    # =========================================================================

    def own_keys(self) -> list[_typing.Any]:
        """All own keys in insertion order, enumerable or not."""
        return list(self._entries)

    def own_descriptor(self, key: _typing.Any) -> _operations.Descriptor | None:
        """Descriptor of an own key, or None."""
        return self._entries.get(key)

    def has_own(self, key: object) -> bool:
        """Whether key is an own key (enumerable or not)."""
        return key in self._entries

    def define(self, key: _typing.Any, descriptor: _operations.Descriptor) -> bool:
        """
        Install a descriptor for key.

        Returns:
            False if key already exists as a non-configurable own key,
            True otherwise.
        """
        existing = self._entries.get(key)
        if existing is not None and not existing.configurable:
            return False
        self._entries[key] = descriptor
        return True

    # =========================================================================
    # Mapping protocol
    # =========================================================================

    def __getitem__(self, key: _typing.Any) -> _typing.Any:
        descriptor = self._entries.get(key)
        if descriptor is not None:
            return descriptor.value if descriptor.has_value else None
        if self._ancestor is not None and key in self._ancestor:
            return self._ancestor[key]
        raise KeyError(key)

    def __setitem__(self, key: _typing.Any, value: _typing.Any) -> None:
        descriptor = self._entries.get(key)
        if descriptor is None:
            self._entries[key] = _operations.PLAIN.with_value(value)
        elif not descriptor.writable:
            raise TypeError(f"Cannot assign to read-only key {key!r}")
        else:
            self._entries[key] = descriptor.with_value(value)

    def __delitem__(self, key: _typing.Any) -> None:
        descriptor = self._entries.get(key)
        if descriptor is None:
            raise KeyError(key)
        if not descriptor.configurable:
            raise TypeError(f"Cannot delete non-configurable key {key!r}")
        del self._entries[key]

    def __iter__(self) -> _typing.Iterator[_typing.Any]:
        return (key for key, desc in self._entries.items() if desc.enumerable)

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __contains__(self, key: object) -> bool:
        if key in self._entries:
            return True
        return self._ancestor is not None and key in self._ancestor

    def copy(self) -> Record:
        """Shallow copy: same descriptors, same ancestor."""
        new = Record(ancestor=self._ancestor)
        new._entries = dict(self._entries)
        return new

    __copy__ = copy

    def __repr__(self) -> str:
        content = {key: self[key] for key in self}
        if self._ancestor is None:
            return f"Record({content!r})"
        return f"Record({content!r}, ancestor={self._ancestor!r})"


def ancestor_of(container: object) -> _abc.Mapping[_typing.Any, _typing.Any] | None:
    """Return the ancestor of a container; plain containers have none."""
    if isinstance(container, Record):
        return container.ancestor
    return None


def lookup_inherited(
    ancestor: _abc.Mapping[_typing.Any, _typing.Any] | None,
    key: _typing.Any,
) -> _typing.Any:
    """Look key up along an ancestor chain, returning MISSING if absent."""
    if ancestor is None or key not in ancestor:
        return _types.MISSING
    return ancestor[key]
