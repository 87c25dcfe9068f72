"""
Materialization: turning a draft back into a plain container.

Only branches that actually changed are copied. A draft whose log is
empty, or whose logged operations turn out to change nothing, yields its
origin by reference, so ``unwrap(draft) is origin`` holds whenever the
session was a no-op.

Materialization never mutates the draft; calling unwrap() twice gives two
value-equal results (or the origin both times).
"""

from __future__ import annotations

import copy as _copy
import logging as _logging
import typing as _typing

import asmutable.config as config
import asmutable.draft._facade as _facade
import asmutable.draft._operations as _operations
import asmutable.draft._record as _record
import asmutable.draft._types as _types
import asmutable.draft._worker as _worker
import asmutable.errors as errors

_logger = _logging.getLogger(__name__)

# Immutable scalars compared by value; everything else is compared by identity
_VALUE_TYPES: frozenset[type] = frozenset(
    {int, float, complex, bool, str, bytes, type(None)}
)


def unwrap(value: _typing.Any) -> _typing.Any:
    """
    Return the plain container a draft currently represents.

    Non-drafts are returned unchanged.

    Raises:
        CyclicContainerError: If a draft (directly or indirectly) contains
            itself.
        NestingTooDeepError: If drafts nest deeper than settings.max_depth.

    Example:
        >>> origin = {"a": {"v": 1}, "b": {"v": 2}}
        >>> draft = wrap(origin)
        >>> draft["a"]["v"] = 10
        >>> result = unwrap(draft)
        >>> result["b"] is origin["b"]
        True
    """
    if not isinstance(value, _facade.Facade):
        return value

    materializer = Materializer(config.get_settings().max_depth)
    result = materializer.materialize(value, ())
    _logger.debug(
        "Materialized %s: %s",
        type(value).__name__,
        "shared origin" if result is value._worker.origin else "new copy",
    )
    return result


def same_value(old: _typing.Any, new: _typing.Any) -> bool:
    """
    Whether new can stand in for old without counting as a change.

    Containers and other objects must be identical; immutable scalars must
    have the same type and compare equal.
    """
    if old is new:
        return True
    if old is _types.MISSING or new is _types.MISSING:
        return False
    return type(old) is type(new) and type(old) in _VALUE_TYPES and old == new


Path: _typing.TypeAlias = tuple[_typing.Any, ...]

# A draft being rebuilt: yields (child, path) for every nested value it
# needs, receives that child's materialized value, returns its own result.
Steps: _typing.TypeAlias = _typing.Generator[tuple[_typing.Any, Path], _typing.Any, _typing.Any]


class Materializer:
    """
    One materialization pass.

    A draft reached twice (for example, written under two keys) yields one
    shared result. A draft reached again while still being materialized
    is a cycle.

    Nested drafts are walked with an explicit stack of Steps rather than by
    recursion, so max_depth is the only limit on nesting.
    """

    __slots__ = ("_max_depth", "_memo", "_active")

    def __init__(self, max_depth: int) -> None:
        self._max_depth = max_depth
        self._memo: dict[int, _typing.Any] = {}
        self._active: set[int] = set()

    def materialize(self, value: _typing.Any, path: Path) -> _typing.Any:
        frames: list[tuple[int, Steps]] = []
        outcome = self._enter(value, path, frames)

        while frames:
            token, steps = frames[-1]
            try:
                child, child_path = steps.send(outcome)
            except StopIteration as stop:
                frames.pop()
                self._active.discard(token)
                self._memo[token] = outcome = stop.value
                continue
            outcome = self._enter(child, child_path, frames)

        return outcome

    def _enter(
        self,
        value: _typing.Any,
        path: Path,
        frames: list[tuple[int, Steps]],
    ) -> _typing.Any:
        """Resolve value now, or push a frame for it and return None."""
        if not isinstance(value, _facade.Facade):
            return value

        worker = value._worker
        token = id(worker)
        if token in self._memo:
            return self._memo[token]
        if token in self._active:
            raise errors.CyclicContainerError(path)
        if len(path) >= self._max_depth:
            raise errors.NestingTooDeepError(self._max_depth)

        self._active.add(token)
        if isinstance(worker, _worker.SequenceWorker):
            frames.append((token, self._sequence(worker, path)))
        else:
            frames.append((token, self._mapping(worker, path)))
        return None

    def _mapping(self, worker: _worker.Worker, path: Path) -> Steps:
        origin = worker.origin
        if worker.is_pristine:
            return origin

        result = _duplicate_mapping(worker)
        dirty = self._ancestor_changed(worker)

        for key, op in worker.log.items():
            if isinstance(op, _operations.Delete):
                dirty = True
                _remove(result, key)
            elif isinstance(op, _operations.Define):
                dirty = True
                descriptor = yield from self._descriptor(op.descriptor, path + (key,))
                _install(result, key, descriptor)
            elif isinstance(op, (_operations.Read, _operations.Write)):
                new = yield (op.descriptor.value, path + (key,))
                if not same_value(_baseline(worker, key), new):
                    dirty = True
                    result[key] = new
                elif isinstance(op, _operations.Write):
                    # Writing an inherited value still creates an own key
                    result[key] = new
            else:
                raise TypeError(f"Unknown Operation type: {type(op).__name__}")

        return result if dirty else origin

    def _sequence(self, worker: _worker.SequenceWorker, path: Path) -> Steps:
        origin = worker.origin
        if worker.is_pristine:
            return origin

        dirty = worker.length != len(origin) or self._ancestor_changed(worker)
        items: list[_typing.Any] = []

        for index in range(worker.length):
            op = worker.log.get(index)
            if op is None:
                items.append(origin[index])
                continue
            if isinstance(op, _operations.Delete):
                # Hole
                dirty = True
                items.append(None)
                continue
            descriptor = _operations.descriptor_of(op)
            new = None
            if descriptor is not None and descriptor.has_value:
                new = yield (descriptor.value, path + (index,))
            baseline = origin[index] if index < len(origin) else _types.MISSING
            if isinstance(op, _operations.Define) or not same_value(baseline, new):
                dirty = True
            items.append(new)

        if not dirty:
            return origin
        if isinstance(origin, tuple):
            return tuple(items)
        result = _copy.copy(origin)
        result[:] = items
        return result

    def _descriptor(self, descriptor: _operations.Descriptor, path: Path) -> Steps:
        if not descriptor.has_value:
            return descriptor
        value = yield (descriptor.value, path)
        return descriptor.with_value(value)

    def _ancestor_changed(self, worker: _worker.Worker) -> bool:
        """Whether a rebinding must show up in the result."""
        if not worker.binding.rebound:
            return False
        ancestor = worker.ancestor
        if isinstance(worker.origin, _record.Record):
            return ancestor is not worker.origin.ancestor
        if ancestor is not None:
            _logger.warning(
                "Ancestor of a %s draft was rebound, but a plain %s cannot carry "
                "an ancestor; the rebinding is not part of the materialized value",
                type(worker.origin).__name__,
                type(worker.origin).__name__,
            )
        return False


def _duplicate_mapping(worker: _worker.Worker) -> _typing.Any:
    """Shallow copy of a mapping origin, carrying the draft's ancestor."""
    origin = worker.origin
    if isinstance(origin, _record.Record):
        return _record.Record({key: origin[key] for key in origin}, ancestor=worker.ancestor)
    return _copy.copy(origin)


def _baseline(worker: _worker.Worker, key: _typing.Any) -> _typing.Any:
    """What origin[key] reads as, including inherited values."""
    descriptor = worker.origin_descriptor(key)
    if descriptor is not None:
        return descriptor.value if descriptor.has_value else None
    return _record.lookup_inherited(_record.ancestor_of(worker.origin), key)


def _remove(result: _typing.Any, key: _typing.Any) -> None:
    if isinstance(result, _record.Record):
        if result.has_own(key):
            del result[key]
    else:
        result.pop(key, None)


def _install(
    result: _typing.Any,
    key: _typing.Any,
    descriptor: _operations.Descriptor,
) -> None:
    if isinstance(result, _record.Record):
        result.define(key, descriptor)
    else:
        result[key] = descriptor.value if descriptor.has_value else None
