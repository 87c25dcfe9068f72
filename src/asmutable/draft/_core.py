"""
Entry points for creating drafts.

wrap() turns a container into a draft; everything else passes through
unchanged. It is deliberately not memoized: wrapping the same container
twice yields two independent drafts.
"""

from __future__ import annotations

import logging as _logging
import typing as _typing

import asmutable.config as config
import asmutable.config.types as config_types
import asmutable.draft._facade as _facade
import asmutable.draft._materialize as _materialize
import asmutable.draft._record as _record
import asmutable.draft._worker as _worker

_logger = _logging.getLogger(__name__)


def is_facade(value: object) -> bool:
    """Whether value is a draft produced by wrap()."""
    return isinstance(value, _facade.Facade)


def is_mapping_container(value: object) -> bool:
    """dicts (including subclasses) and Records."""
    return isinstance(value, (dict, _record.Record))


def is_sequence_container(value: object) -> bool:
    """lists (including subclasses) and plain tuples.

    Tuple subclasses such as namedtuples are excluded: they cannot be
    rebuilt from a list of items.
    """
    return isinstance(value, list) or type(value) is tuple


def is_duplicable(value: object) -> bool:
    """Whether wrap() would create a draft for value."""
    return is_mapping_container(value) or is_sequence_container(value)


def wrap(
    value: _typing.Any,
    *,
    policy: config_types.AncestorPolicy | str | None = None,
) -> _typing.Any:
    """
    Return a draft of value, or value itself if it cannot be drafted.

    Args:
        value: Any value. Containers (dict, Record, list, tuple) are drafted;
            drafts and all other values are returned unchanged.
        policy: Ancestor-binding policy for the new draft and every draft
            created from it. Defaults to the active settings.

    Returns:
        A MappingFacade, a SequenceFacade, or value unchanged.

    Example:
        >>> origin = {"a": 1}
        >>> draft = wrap(origin)
        >>> wrap(draft) is draft
        True
        >>> wrap(5)
        5
    """
    if is_facade(value) or not is_duplicable(value):
        return value

    if policy is None:
        resolved = config.get_settings().ancestor_policy
    else:
        resolved = config_types.AncestorPolicy(policy)

    facade: _facade.Facade
    if is_mapping_container(value):
        facade = _facade.MappingFacade(_worker.MappingWorker(value, resolved))
    else:
        facade = _facade.SequenceFacade(_worker.SequenceWorker(value, resolved))

    _logger.debug(
        "Created %s for %s (policy=%s)",
        type(facade).__name__,
        type(value).__name__,
        resolved.value,
    )
    return facade


def produce(
    base: _typing.Any,
    recipe: _typing.Callable[[_typing.Any], _typing.Any],
    *,
    policy: config_types.AncestorPolicy | str | None = None,
) -> _typing.Any:
    """
    Apply recipe to a draft of base and return the materialized result.

    If recipe returns something other than None, that value is
    materialized and returned instead of the draft.

    Example:
        >>> state = {"count": 1, "items": []}
        >>> def bump(draft):
        ...     draft["count"] += 1
        >>> new_state = produce(state, bump)
        >>> new_state["items"] is state["items"]
        True
    """
    draft = wrap(base, policy=policy)
    returned = recipe(draft)
    if returned is None:
        return _materialize.unwrap(draft)
    return _materialize.unwrap(returned)
