"""
Tests for pending_changes(), the flattened view of a draft's log.
"""

import typing as _typing

import pytest as _pytest

import asmutable.config as config
import asmutable.draft as draft
import asmutable.errors as errors

Change = draft.Change


class TestPendingChanges:
    def test_non_draft_has_no_changes(self) -> None:
        """Plain values report no pending changes."""
        assert draft.pending_changes({"a": 1}) == []

    def test_untouched_and_read_only_drafts_have_no_changes(self) -> None:
        """Reads alone leave nothing pending."""
        facade = draft.wrap({"a": {"b": 1}})

        _ = facade["a"]["b"]

        assert draft.pending_changes(facade) == []

    def test_nested_write_and_delete(self) -> None:
        """Nested writes and deletes are reported with full paths."""
        facade = draft.wrap({"a": {"b": 1}, "c": 2})

        facade["a"]["b"] = 5
        del facade["c"]

        assert draft.pending_changes(facade) == [
            Change(("a", "b"), "write", 5),
            Change(("c",), "delete"),
        ]

    def test_written_draft_is_materialized(self) -> None:
        """Written drafts are reported by their materialized value."""
        facade = draft.wrap({})
        facade["child"] = {"x": 1}
        facade["child"]["x"] = 2

        changes = draft.pending_changes(facade)

        assert changes == [Change(("child",), "write", {"x": 2})]
        assert not draft.is_facade(changes[0].value)

    def test_define(self) -> None:
        """Definitions are reported with a materialized descriptor."""
        facade = draft.wrap(draft.Record())

        facade.define_property("k", draft.Descriptor(value=1, enumerable=False))

        assert draft.pending_changes(facade) == [
            Change(("k",), "define", draft.Descriptor(value=1, enumerable=False)),
        ]

    def test_sequence_length_change(self) -> None:
        """Sequence resizes are reported as length changes."""
        facade = draft.wrap({"items": [1, 2]})

        facade["items"].append(3)

        assert draft.pending_changes(facade) == [
            Change(("items",), "length", 3),
            Change(("items", 2), "write", 3),
        ]

    def test_ancestor_change(self) -> None:
        """Rebinding is reported as an ancestor change."""
        facade = draft.wrap(draft.Record())
        replacement = {"x": 1}

        facade.set_ancestor(replacement)

        assert draft.pending_changes(facade) == [Change((), "ancestor", replacement)]

    def test_cycle_raises(self) -> None:
        """Cyclic drafts raise CyclicContainerError."""
        facade = draft.wrap({"a": {}})
        facade["a"]["loop"] = facade

        with _pytest.raises(errors.CyclicContainerError):
            draft.pending_changes(facade)

    def test_deep_draft_with_raised_max_depth(self) -> None:
        """Walking a draft nested past the recursion limit reports its leaf write."""
        config.set_settings(config.Settings(max_depth=5000))
        origin: dict[str, _typing.Any] = {}
        node = origin
        for _ in range(1500):
            node["c"] = {}
            node = node["c"]
        facade = draft.wrap(origin)
        leaf = facade
        for _ in range(1500):
            leaf = leaf["c"]

        leaf["leaf"] = 1

        assert draft.pending_changes(facade) == [Change(("c",) * 1500 + ("leaf",), "write", 1)]

    def test_depth_limit_raises(self) -> None:
        """Drafts nested past max_depth are rejected."""
        config.set_settings(config.Settings(max_depth=2))
        facade = draft.wrap({"a": {"b": {"c": {}}}})

        facade["a"]["b"]["c"]["d"] = 1

        with _pytest.raises(errors.NestingTooDeepError):
            draft.pending_changes(facade)

    def test_change_is_frozen(self) -> None:
        """Change instances are immutable."""
        change = Change(("a",), "delete")

        with _pytest.raises(AttributeError):
            change.kind = "write"  # type: ignore[misc]
        assert change.value is draft.MISSING
