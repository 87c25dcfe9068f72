"""
Shared constants for asmutable.

This module provides a single source of truth for default values
that are used across multiple modules.
"""

ENV_PREFIX = "ASMUTABLE_"
"""Prefix for all environment variables read by the settings layer."""

DEFAULT_ANCESTOR_POLICY = "live"
"""Default ancestor-binding policy ("live" or "snapshot")."""

DEFAULT_MAX_DEPTH = 200
"""Maximum facade nesting depth the materializer will descend.

Nested drafts are walked without recursion, so this is a guard against
runaway structures rather than a stack limit; it can be raised freely.
"""

CONFIG_FILE_NAME = "config.yaml"
"""File name of the user config inside the config directory."""
