"""
Drafts: buffered, copy-on-write mutation of nested containers.

A draft stands in for a dict, Record, list or tuple. Reads, writes and
deletes against it are buffered per key; the origin is never modified.
Materializing the draft copies only the branches that actually changed.

Example:
    >>> from asmutable.draft import wrap, unwrap
    >>> state = {"user": {"name": "ada"}, "settings": {"theme": "dark"}}
    >>> draft = wrap(state)
    >>> draft["user"]["name"] = "grace"
    >>> new_state = unwrap(draft)
    >>> new_state["settings"] is state["settings"]
    True
    >>> state["user"]["name"]
    'ada'
"""

from asmutable.draft._changes import Change, pending_changes
from asmutable.draft._core import (
    is_duplicable,
    is_facade,
    produce,
    wrap,
)
from asmutable.draft._facade import Facade, MappingFacade, SequenceFacade
from asmutable.draft._frozen import FrozenMapping, FrozenSequence, freeze
from asmutable.draft._materialize import unwrap
from asmutable.draft._operations import Define, Delete, Descriptor, Operation, Read, Write
from asmutable.draft._record import Record
from asmutable.draft._types import MISSING

__all__ = [
    "MISSING",
    "Change",
    "Define",
    "Delete",
    "Descriptor",
    "Facade",
    "FrozenMapping",
    "FrozenSequence",
    "MappingFacade",
    "Operation",
    "Read",
    "Record",
    "SequenceFacade",
    "Write",
    "freeze",
    "is_duplicable",
    "is_facade",
    "pending_changes",
    "produce",
    "unwrap",
    "wrap",
]
