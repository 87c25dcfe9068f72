"""
Flattened view of the operations buffered in a draft.

Useful for debugging and logging: pending_changes() walks a draft and
reports every write, delete and descriptor definition with the full key
path it applies to. Cached reads whose subtree holds no changes are
skipped.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import typing as _typing

import asmutable.config as config
import asmutable.draft._facade as _facade
import asmutable.draft._materialize as _materialize
import asmutable.draft._operations as _operations
import asmutable.draft._types as _types
import asmutable.draft._worker as _worker
import asmutable.errors as errors

ChangeKind: _typing.TypeAlias = _typing.Literal["write", "delete", "define", "length", "ancestor"]

# (worker token, path, remaining log entries) of a draft being walked
_Frame: _typing.TypeAlias = tuple[int, tuple[_typing.Any, ...], _typing.Iterator[tuple[_typing.Any, _typing.Any]]]


@_dataclasses.dataclass(frozen=True, slots=True)
class Change:
    """
    One buffered change.

    Attributes:
        path: Keys from the root draft to the changed key. For "length" and
            "ancestor" changes, the path of the draft itself.
        kind: What happened at path.
        value: The materialized new value ("write"), the Descriptor with a
            materialized value ("define"), the new length ("length"), the new
            ancestor ("ancestor"), or MISSING ("delete").
    """

    path: tuple[_typing.Any, ...]
    kind: ChangeKind
    value: _typing.Any = _types.MISSING


def pending_changes(draft: _typing.Any) -> list[Change]:
    """
    List the changes buffered in draft, depth first in log order.

    Non-drafts have no pending changes.

    Raises:
        CyclicContainerError: If the draft contains itself.
        NestingTooDeepError: If drafts nest deeper than settings.max_depth.

    Example:
        >>> draft = wrap({"a": {"b": 1}, "c": 2})
        >>> draft["a"]["b"] = 5
        >>> del draft["c"]
        >>> pending_changes(draft)
        [Change(path=('a', 'b'), kind='write', value=5),
         Change(path=('c',), kind='delete', value=<MISSING>)]
    """
    if not isinstance(draft, _facade.Facade):
        return []
    max_depth = config.get_settings().max_depth
    changes: list[Change] = []
    active: set[int] = set()
    stack: list[_Frame] = []

    def enter(child: _facade.Facade, path: tuple[_typing.Any, ...]) -> None:
        worker = child._worker
        token = id(worker)
        if token in active:
            raise errors.CyclicContainerError(path)
        if len(path) >= max_depth:
            raise errors.NestingTooDeepError(max_depth)
        active.add(token)

        if worker.binding.rebound:
            changes.append(Change(path, "ancestor", worker.ancestor))
        if isinstance(worker, _worker.SequenceWorker) and worker.length != len(worker.origin):
            changes.append(Change(path, "length", worker.length))
        stack.append((token, path, iter(list(worker.log.items()))))

    enter(draft, ())
    while stack:
        token, path, entries = stack[-1]
        entry = next(entries, None)
        if entry is None:
            stack.pop()
            active.discard(token)
            continue

        key, op = entry
        key_path = path + (key,)
        if isinstance(op, _operations.Read):
            child = op.descriptor.value
            if isinstance(child, _facade.Facade):
                enter(child, key_path)
        elif isinstance(op, _operations.Write):
            changes.append(Change(key_path, "write", _materialize.unwrap(op.descriptor.value)))
        elif isinstance(op, _operations.Delete):
            changes.append(Change(key_path, "delete"))
        elif isinstance(op, _operations.Define):
            descriptor = op.descriptor
            if descriptor.has_value:
                descriptor = descriptor.with_value(_materialize.unwrap(descriptor.value))
            changes.append(Change(key_path, "define", descriptor))

    return changes
