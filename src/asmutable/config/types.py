"""Configuration type definitions for asmutable settings."""

import enum as _enum


class AncestorPolicy(str, _enum.Enum):
    """
    How a draft resolves its origin's ancestor.

    LIVE resolves against the origin's current ancestor on every query.
    SNAPSHOT captures the ancestor once, when the draft is created.

    Either way, ``set_ancestor()`` on a draft replaces the binding with an
    explicit ancestor for all later lookups and existence checks.
    """

    LIVE = "live"
    SNAPSHOT = "snapshot"
