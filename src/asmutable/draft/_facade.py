"""
Draft facades: the objects callers mutate in place of the origin.

Every facade exposes the same capability methods (read_property,
write_property, delete_property, define_property, has_property, own_keys,
get_own_descriptor, get_ancestor, set_ancestor). Python's item syntax is
routed through the same worker, so a facade reads and writes like the
dict, Record, list or tuple it was made from, except that the origin is
never touched.

Example:
    >>> state = {"user": {"name": "ada"}, "tags": ["a"]}
    >>> draft = wrap(state)
    >>> draft["user"]["name"] = "grace"
    >>> draft["tags"].append("b")
    >>> state["user"]["name"]       # origin untouched
    'ada'
"""

from __future__ import annotations

import collections.abc as _abc
import logging as _logging
import operator as _operator
import typing as _typing

import asmutable.draft._binding as _binding
import asmutable.draft._frozen as _frozen
import asmutable.draft._operations as _operations
import asmutable.draft._types as _types
import asmutable.draft._worker as _workers

_logger = _logging.getLogger(__name__)


class Facade:
    """
    Base class of all drafts.

    ``isinstance(value, Facade)`` is how wrap() and unwrap() recognise a
    draft; there is no hidden marker attribute.
    """

    __slots__ = ("_worker",)

    _worker: _workers.Worker

    def __init__(self, worker: _workers.Worker) -> None:
        self._worker = worker

    @property
    def origin(self) -> _typing.Any:
        """Read-only view of the container this draft was made from."""
        return _frozen.freeze(self._worker.origin)

    def _key(self, key: _typing.Any) -> _typing.Any:
        return key

    # =========================================================================
    # Capability interface
    # =========================================================================

    def read_property(
        self,
        key: _typing.Any,
        default: _typing.Any = _types.MISSING,
    ) -> _typing.Any:
        """
        Current value of key.

        Nested containers come back as drafts; repeated reads return the
        same draft. Inherited values come back unwrapped.

        Returns:
            The value, or default (MISSING unless given) when absent.
        """
        value = self._worker.get(self._key(key))
        return default if value is _types.MISSING else value

    def write_property(self, key: _typing.Any, value: _typing.Any) -> None:
        """Buffer an assignment. Always succeeds."""
        self._worker.set(self._key(key), value)

    def delete_property(self, key: _typing.Any) -> bool:
        """
        Buffer a deletion.

        Returns:
            False if key is non-configurable (nothing changes), True otherwise,
            including when key is absent.
        """
        return self._worker.delete(self._key(key))

    def define_property(
        self,
        key: _typing.Any,
        descriptor: _operations.Descriptor,
    ) -> bool:
        """
        Buffer a descriptor installation.

        Returns:
            False if key currently exists and is non-configurable.
        """
        return self._worker.define(self._key(key), descriptor)

    def has_property(self, key: _typing.Any) -> bool:
        """Whether key is an own key or provided by the ancestor chain."""
        return self._worker.has(self._key(key))

    def own_keys(self) -> list[_typing.Any]:
        """All own keys, enumerable or not, in origin order then log order."""
        return self._worker.own_keys()

    def get_own_descriptor(self, key: _typing.Any) -> _operations.Descriptor | None:
        """Effective own descriptor of key, or None."""
        return self._worker.descriptor(self._key(key))

    def get_ancestor(self) -> _binding.Ancestor:
        return self._worker.ancestor

    def set_ancestor(self, ancestor: _binding.Ancestor) -> bool:
        """
        Rebind this draft to a new ancestor. Always succeeds.

        Raises:
            TypeError: If ancestor is neither a Mapping nor None.
        """
        self._worker.rebind(ancestor)
        _logger.debug("Rebound %s ancestor to %r", type(self).__name__, ancestor)
        return True

    def prevent_extensions(self) -> bool:
        """Drafts always stay extensible; this never succeeds."""
        return False

    def is_extensible(self) -> bool:
        return True

    def copy(self) -> Facade:
        """A new, independent draft of this draft's current state."""
        import asmutable.draft._core as _core
        import asmutable.draft._materialize as _materialize

        return _core.wrap(_materialize.unwrap(self), policy=self._worker.policy)

    __copy__ = copy

    def __repr__(self) -> str:
        import asmutable.draft._materialize as _materialize

        return f"{type(self).__name__}({_materialize.unwrap(self)!r})"


class MappingFacade(Facade, _abc.MutableMapping[_typing.Any, _typing.Any]):
    """
    Draft of a dict or Record.

    Reads return drafts for nested containers. Iteration and len() cover
    own enumerable keys; ``in`` and item reads also see the ancestor chain,
    as Record does.
    """

    __slots__ = ()

    _worker: _workers.MappingWorker

    def __getitem__(self, key: _typing.Any) -> _typing.Any:
        value = self._worker.get(key)
        if value is _types.MISSING:
            raise KeyError(key)
        return value

    def __setitem__(self, key: _typing.Any, value: _typing.Any) -> None:
        self._worker.set(key, value)

    def __delitem__(self, key: _typing.Any) -> None:
        if self._worker.descriptor(key) is None:
            raise KeyError(key)
        if not self._worker.delete(key):
            raise TypeError(f"Cannot delete non-configurable key {key!r}")

    def __iter__(self) -> _typing.Iterator[_typing.Any]:
        return iter(self._worker.enumerable_keys())

    def __len__(self) -> int:
        return len(self._worker.enumerable_keys())

    def __contains__(self, key: object) -> bool:
        return self._worker.has(key)


class SequenceFacade(Facade, _abc.MutableSequence[_typing.Any]):
    """
    Draft of a list or tuple.

    Item syntax follows list semantics: negative indexes, IndexError out of
    range, shifting insert and delete, slice reads and assignment. The
    capability methods follow index-key semantics instead: writing past the
    end grows the sequence and delete_property() leaves a hole. Holes read
    as None.
    """

    __slots__ = ()

    _worker: _workers.SequenceWorker

    def _key(self, key: _typing.Any) -> _typing.Any:
        if isinstance(key, int) and not isinstance(key, bool) and key < 0:
            normalized = key + self._worker.length
            if normalized >= 0:
                return normalized
        return key

    def _index(self, index: _typing.Any) -> int:
        """Normalize an item-syntax index, raising IndexError out of range."""
        index = _operator.index(index)
        if index < 0:
            index += self._worker.length
        if not 0 <= index < self._worker.length:
            raise IndexError("sequence index out of range")
        return index

    def _value_at(self, index: int) -> _typing.Any:
        value = self._worker.get(index)
        return None if value is _types.MISSING else value

    @_typing.overload
    def __getitem__(self, index: int) -> _typing.Any: ...

    @_typing.overload
    def __getitem__(self, index: slice) -> list[_typing.Any]: ...

    def __getitem__(self, index: int | slice) -> _typing.Any:
        if isinstance(index, slice):
            return [
                self._value_at(position)
                for position in range(*index.indices(self._worker.length))
            ]
        return self._value_at(self._index(index))

    def __setitem__(self, index: _typing.Any, value: _typing.Any) -> None:
        if isinstance(index, slice):
            self._set_slice(index, value)
            return
        self._worker.set(self._index(index), value)

    def _set_slice(self, index: slice, values: _typing.Any) -> None:
        start, stop, step = index.indices(self._worker.length)
        values = list(values)
        if step == 1:
            self._worker.splice(start, max(start, stop), values)
            return
        positions = range(start, stop, step)
        if len(values) != len(positions):
            raise ValueError(
                f"attempt to assign sequence of size {len(values)} "
                f"to extended slice of size {len(positions)}"
            )
        for position, value in zip(positions, values):
            self._worker.set(position, value)

    def __delitem__(self, index: _typing.Any) -> None:
        if isinstance(index, slice):
            start, stop, step = index.indices(self._worker.length)
            if step == 1:
                self._worker.splice(start, max(start, stop), ())
                return
            for position in sorted(range(start, stop, step), reverse=True):
                self._worker.splice(position, position + 1, ())
            return
        position = self._index(index)
        self._worker.splice(position, position + 1, ())

    def __len__(self) -> int:
        return self._worker.length

    def insert(self, index: _typing.Any, value: _typing.Any) -> None:
        """Insert value before index, clamping like list.insert()."""
        length = self._worker.length
        index = _operator.index(index)
        if index < 0:
            index = max(0, index + length)
        index = min(index, length)
        self._worker.splice(index, index, (value,))

    def sort(
        self,
        *,
        key: _typing.Callable[[_typing.Any], _typing.Any] | None = None,
        reverse: bool = False,
    ) -> None:
        """Sort in place, like list.sort()."""
        self[:] = sorted(self, key=key, reverse=reverse)  # type: ignore[type-var,arg-type]

    def __eq__(self, other: object) -> bool:
        """Equal to a list (or tuple, for tuple drafts) with equal items."""
        kind = tuple if isinstance(self._worker.origin, tuple) else list
        if isinstance(other, SequenceFacade):
            other_kind = tuple if isinstance(other._worker.origin, tuple) else list
            return kind is other_kind and list(self) == list(other)
        if isinstance(other, (list, tuple)):
            return isinstance(other, kind) and list(self) == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]
