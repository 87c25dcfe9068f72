"""
asmutable - copy-on-write drafts of nested containers

Wrap a dict, Record, list or tuple, mutate the draft freely, and unwrap
it into a new value that shares every untouched branch with the original.
The original is never modified.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("asmutable")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)

from asmutable.config import AncestorPolicy, Settings, get_settings, reset_settings, set_settings  # noqa: E402
from asmutable.draft import (  # noqa: E402
    MISSING,
    Change,
    Descriptor,
    Facade,
    MappingFacade,
    Record,
    SequenceFacade,
    is_duplicable,
    is_facade,
    pending_changes,
    produce,
    unwrap,
    wrap,
)
from asmutable.errors import (  # noqa: E402
    AsMutableError,
    ConfigFileError,
    CyclicContainerError,
    NestingTooDeepError,
)
from asmutable.ui import print_pending, render_pending  # noqa: E402

as_mutable = wrap
get_value = unwrap

__all__ = [
    "MISSING",
    "AncestorPolicy",
    "AsMutableError",
    "Change",
    "ConfigFileError",
    "CyclicContainerError",
    "Descriptor",
    "Facade",
    "MappingFacade",
    "NestingTooDeepError",
    "Record",
    "SequenceFacade",
    "Settings",
    "__version__",
    "__version_info__",
    "as_mutable",
    "get_settings",
    "get_value",
    "is_duplicable",
    "is_facade",
    "pending_changes",
    "print_pending",
    "produce",
    "render_pending",
    "reset_settings",
    "set_settings",
    "unwrap",
    "wrap",
]
