"""
Workers: the operation log behind every draft.

A worker owns one origin container, an ancestor binding, and a log mapping
each touched key to its single current Operation. Reads consult the log
first and the origin second; writes only ever touch the log.

Reading a nested container wraps it and records a Read, so repeated reads
return the same child draft and the materializer has a baseline to diff
against. Primitive reads are never recorded.
"""

from __future__ import annotations

import collections.abc as _abc
import typing as _typing

import asmutable.config.types as config_types
import asmutable.draft._binding as _binding
import asmutable.draft._operations as _operations
import asmutable.draft._record as _record
import asmutable.draft._types as _types


class Worker:
    """
    Shared log engine for mapping and sequence workers.

    Subclasses describe how to see the origin's own keys and descriptors;
    everything else is defined here.
    """

    __slots__ = ("origin", "binding", "policy", "log")

    def __init__(
        self,
        origin: _typing.Any,
        policy: config_types.AncestorPolicy,
    ) -> None:
        self.origin = origin
        self.policy = policy
        self.binding: _binding.AncestorBinding = _binding.make_binding(origin, policy)
        self.log: dict[_typing.Any, _operations.Operation] = {}

    # =========================================================================
    # Origin access (kind-specific)
    # =========================================================================

    def origin_keys(self) -> list[_typing.Any]:
        raise NotImplementedError

    def origin_descriptor(self, key: _typing.Any) -> _operations.Descriptor | None:
        raise NotImplementedError

    # =========================================================================
    # Ancestor binding
    # =========================================================================

    @property
    def ancestor(self) -> _binding.Ancestor:
        return self.binding.resolve()

    def rebind(self, ancestor: _binding.Ancestor) -> None:
        """Replace the ancestor binding with an explicit ancestor."""
        self.binding = _binding.FixedBinding(ancestor)

    def _ancestor_has(self, key: _typing.Any) -> bool:
        ancestor = self.ancestor
        return ancestor is not None and key in ancestor

    # =========================================================================
    # Log queries
    # =========================================================================

    @property
    def is_pristine(self) -> bool:
        """True if nothing has been logged and the structure is unchanged."""
        return not self.log and not self.binding.rebound

    def descriptor(self, key: _typing.Any) -> _operations.Descriptor | None:
        """Effective own descriptor for key, or None if absent."""
        op = self.log.get(key)
        if op is not None:
            return _operations.descriptor_of(op)
        return self.origin_descriptor(key)

    def has(self, key: _typing.Any) -> bool:
        op = self.log.get(key)
        if op is None:
            return self.origin_descriptor(key) is not None or self._ancestor_has(key)
        if isinstance(op, _operations.Delete):
            return self._ancestor_has(key)
        return True

    def own_keys(self) -> list[_typing.Any]:
        """
        Own keys in origin order, deleted keys removed, log-only keys after.

        A key that exists in the origin and was later rewritten keeps its
        original position.
        """
        origin_keys = self.origin_keys()
        keys = [
            key
            for key in origin_keys
            if not isinstance(self.log.get(key), _operations.Delete)
        ]
        seen = set(origin_keys)
        for key, op in self.log.items():
            if key not in seen and not isinstance(op, _operations.Delete):
                keys.append(key)
        return keys

    def enumerable_keys(self) -> list[_typing.Any]:
        """Own keys whose effective descriptor is enumerable."""
        result = []
        for key in self.own_keys():
            descriptor = self.descriptor(key)
            if descriptor is not None and descriptor.enumerable:
                result.append(key)
        return result

    # =========================================================================
    # Reads and writes
    # =========================================================================

    def _wrap_child(self, value: _typing.Any) -> _typing.Any:
        """Wrap a child value under this worker's policy."""
        import asmutable.draft._core as _core

        return _core.wrap(value, policy=self.policy)

    def get(self, key: _typing.Any) -> _typing.Any:
        """
        Current value for key.

        Returns:
            The logged value, the (wrapped) origin value, an inherited value,
            or MISSING.
        """
        import asmutable.draft._facade as _facade

        op = self.log.get(key)
        if op is not None:
            descriptor = _operations.descriptor_of(op)
            if descriptor is None:
                # Deleted own key: inherited value shows through
                return _record.lookup_inherited(self.ancestor, key)
            return descriptor.value if descriptor.has_value else None

        descriptor = self.origin_descriptor(key)
        if descriptor is None:
            return _record.lookup_inherited(self.ancestor, key)

        value = descriptor.value if descriptor.has_value else None
        wrapped = self._wrap_child(value)
        if isinstance(wrapped, _facade.Facade):
            self.log[key] = _operations.Read(descriptor.with_value(wrapped))
        return wrapped

    def set(self, key: _typing.Any, value: _typing.Any) -> None:
        wrapped = self._wrap_child(value)
        self.log[key] = _operations.Write(_operations.PLAIN.with_value(wrapped))

    def delete(self, key: _typing.Any) -> bool:
        descriptor = self.descriptor(key)
        if descriptor is None:
            return True
        if not descriptor.configurable:
            return False
        self.log[key] = _operations.Delete()
        return True

    def define(self, key: _typing.Any, descriptor: _operations.Descriptor) -> bool:
        existing = self.descriptor(key)
        if existing is not None and not existing.configurable:
            return False
        self.log[key] = _operations.Define(descriptor)
        return True


class MappingWorker(Worker):
    """Worker for dict and Record origins."""

    __slots__ = ()

    def origin_keys(self) -> list[_typing.Any]:
        if isinstance(self.origin, _record.Record):
            return self.origin.own_keys()
        return list(self.origin)

    def origin_descriptor(self, key: _typing.Any) -> _operations.Descriptor | None:
        if isinstance(self.origin, _record.Record):
            return self.origin.own_descriptor(key)
        if key in self.origin:
            return _operations.PLAIN.with_value(self.origin[key])
        return None


class SequenceWorker(Worker):
    """
    Worker for list and tuple origins.

    Keys are non-negative integer indices. The worker tracks the current
    length separately: positions past the origin's end are always logged,
    and positions at or past ``length`` never are.
    """

    __slots__ = ("length",)

    def __init__(
        self,
        origin: _abc.Sequence[_typing.Any],
        policy: config_types.AncestorPolicy,
    ) -> None:
        super().__init__(origin, policy)
        self.length = len(origin)

    @property
    def is_pristine(self) -> bool:
        return super().is_pristine and self.length == len(self.origin)

    def origin_keys(self) -> list[_typing.Any]:
        return list(range(min(len(self.origin), self.length)))

    def origin_descriptor(self, key: _typing.Any) -> _operations.Descriptor | None:
        if not _is_index(key) or key >= min(len(self.origin), self.length):
            return None
        return _operations.PLAIN.with_value(self.origin[key])

    def own_keys(self) -> list[_typing.Any]:
        return [
            index
            for index in range(self.length)
            if not isinstance(self.log.get(index), _operations.Delete)
        ]

    def _grow_to(self, index: int) -> None:
        """Extend length to cover index, filling the gap with holes."""
        for position in range(self.length, index):
            self.log[position] = _operations.Delete()
        self.length = max(self.length, index + 1)

    def set(self, key: _typing.Any, value: _typing.Any) -> None:
        _check_index(key)
        self._grow_to(key)
        super().set(key, value)

    def define(self, key: _typing.Any, descriptor: _operations.Descriptor) -> bool:
        _check_index(key)
        if not super().define(key, descriptor):
            return False
        if key >= self.length:
            # Define already logged; _grow_to only fills the gap before it
            logged = self.log.pop(key)
            self._grow_to(key)
            self.log[key] = logged
        return True

    def splice(
        self,
        start: int,
        stop: int,
        values: _abc.Iterable[_typing.Any],
    ) -> None:
        """
        Replace positions [start, stop) with values, shifting the rest.

        Entries that move keep their logged operation. Untouched origin
        elements that move are logged as writes of their wrapped value, so
        they still materialize to the very same objects.

        Args:
            start: First position to replace (0 <= start <= length).
            stop: End of the replaced range (start <= stop <= length).
            values: New values for the range.
        """
        entries: list[_operations.Operation | int] = [
            self.log.get(position, position) for position in range(self.length)
        ]
        entries[start:stop] = [
            _operations.Write(_operations.PLAIN.with_value(self._wrap_child(value)))
            for value in values
        ]

        log: dict[_typing.Any, _operations.Operation] = {}
        for position, entry in enumerate(entries):
            if isinstance(entry, _operations.Operation):
                log[position] = entry
            elif entry != position:
                moved = self._wrap_child(self.origin[entry])
                log[position] = _operations.Write(_operations.PLAIN.with_value(moved))
        self.log = log
        self.length = len(entries)


def _is_index(key: object) -> bool:
    return isinstance(key, int) and not isinstance(key, bool) and key >= 0


def _check_index(key: object) -> None:
    if not isinstance(key, int) or isinstance(key, bool):
        raise TypeError(f"sequence drafts take int indices, got {key!r}")
    if key < 0:
        raise IndexError("sequence index out of range")
