"""
Tests for SequenceFacade: drafts of lists and tuples.

Item syntax follows list semantics; the capability methods follow
index-key semantics (growth with holes, deletion leaving holes).
"""

import typing as _typing

import pytest as _pytest

import asmutable.draft as draft


class TaggedList(list):  # type: ignore[type-arg]
    """List subclass used to check that subclasses survive materialization."""

    pass


class TestListSemantics:
    """Native syntax behaves like list."""

    def test_indexing(self) -> None:
        """Positive and negative indexes read elements."""
        facade = draft.wrap([1, 2, 3])

        assert facade[0] == 1
        assert facade[-1] == 3
        assert len(facade) == 3
        assert list(facade) == [1, 2, 3]

    def test_out_of_range_raises_indexerror(self) -> None:
        """Out-of-range index raises IndexError."""
        facade = draft.wrap([1, 2])

        with _pytest.raises(IndexError):
            _ = facade[5]
        with _pytest.raises(IndexError):
            _ = facade[-3]
        with _pytest.raises(IndexError):
            facade[2] = 0

    def test_append_extend_iadd(self) -> None:
        """append(), extend() and += grow the draft."""
        origin = [1]
        facade = draft.wrap(origin)

        facade.append(2)
        facade.extend([3, 4])
        facade += [5]

        assert draft.unwrap(facade) == [1, 2, 3, 4, 5]
        assert origin == [1]

    def test_insert_shifts_and_clamps(self) -> None:
        """insert() shifts elements and clamps the position."""
        facade = draft.wrap([1, 2])

        facade.insert(1, "mid")
        facade.insert(100, "end")
        facade.insert(-100, "start")

        assert list(facade) == ["start", 1, "mid", 2, "end"]

    def test_pop_and_remove(self) -> None:
        """pop() and remove() shrink the draft."""
        facade = draft.wrap([1, 2, 3, 2])

        assert facade.pop() == 2
        assert facade.pop(0) == 1
        facade.remove(3)

        assert draft.unwrap(facade) == [2]

    def test_del_shifts_left(self) -> None:
        """del shifts later elements left."""
        facade = draft.wrap(["a", "b", "c"])

        del facade[0]

        assert list(facade) == ["b", "c"]
        assert len(facade) == 2

    def test_reverse_and_sort(self) -> None:
        """reverse() and sort() reorder the draft."""
        facade = draft.wrap([3, 1, 2])

        facade.reverse()
        assert list(facade) == [2, 1, 3]

        facade.sort()
        assert list(facade) == [1, 2, 3]

        facade.sort(key=lambda value: -value)
        assert draft.unwrap(facade) == [3, 2, 1]

    def test_contains_index_count(self) -> None:
        """Membership, index() and count() see buffered values."""
        facade = draft.wrap(["a", "b", "a"])

        assert "b" in facade
        assert facade.index("b") == 1
        assert facade.count("a") == 2

    def test_equality_is_kind_aware(self) -> None:
        """List drafts equal lists and tuple drafts equal tuples."""
        assert draft.wrap([1, 2]) == [1, 2]
        assert draft.wrap([1, 2]) != (1, 2)
        assert draft.wrap((1, 2)) == (1, 2)
        assert draft.wrap((1, 2)) != [1, 2]
        assert draft.wrap([1]) == draft.wrap([1])

    def test_not_hashable(self) -> None:
        """Sequence drafts are not hashable."""
        with _pytest.raises(TypeError):
            hash(draft.wrap((1, 2)))


class TestSlices:
    def test_slice_read_returns_list(self) -> None:
        """Slicing returns a plain list."""
        facade = draft.wrap([1, 2, 3, 4])

        assert facade[1:3] == [2, 3]
        assert facade[::-1] == [4, 3, 2, 1]

    def test_slice_assignment_can_resize(self) -> None:
        """Slice assignment can change the length."""
        facade = draft.wrap([1, 2, 3])

        facade[1:2] = ["a", "b"]

        assert draft.unwrap(facade) == [1, "a", "b", 3]

    def test_slice_assignment_past_end_appends(self) -> None:
        """Slice assignment past the end appends."""
        facade = draft.wrap([1])

        facade[5:] = [2, 3]

        assert draft.unwrap(facade) == [1, 2, 3]

    def test_extended_slice_assignment(self) -> None:
        """Extended slice assignment replaces matching elements."""
        facade = draft.wrap([1, 2, 3, 4])

        facade[::2] = [9, 9]

        assert draft.unwrap(facade) == [9, 2, 9, 4]

    def test_extended_slice_size_mismatch(self) -> None:
        """Extended slice assignment needs a matching length."""
        facade = draft.wrap([1, 2, 3, 4])

        with _pytest.raises(ValueError, match="extended slice"):
            facade[::2] = [9]

    def test_slice_deletion(self) -> None:
        """Slices can be deleted."""
        facade = draft.wrap([1, 2, 3, 4, 5])

        del facade[1:3]
        assert list(facade) == [1, 4, 5]

        del facade[::2]
        assert draft.unwrap(facade) == [4]


class TestIndexKeyCapabilities:
    """Capability methods treat indices as keys."""

    def test_write_past_end_leaves_holes(self) -> None:
        """Writing past the end leaves holes that read as None."""
        facade = draft.wrap([1, 2])

        facade.write_property(4, "x")

        assert len(facade) == 5
        assert facade[3] is None
        assert facade.has_property(3) is False
        assert facade.own_keys() == [0, 1, 4]
        assert draft.unwrap(facade) == [1, 2, None, None, "x"]

    def test_delete_property_leaves_hole(self) -> None:
        """delete_property() leaves a hole without shifting."""
        facade = draft.wrap([1, 2])

        assert facade.delete_property(0) is True

        assert len(facade) == 2
        assert facade.read_property(0) is draft.MISSING
        assert draft.unwrap(facade) == [None, 2]

    def test_negative_keys_count_from_end(self) -> None:
        """Negative capability keys count from the end."""
        facade = draft.wrap([1, 2, 3])

        facade.write_property(-1, 30)

        assert facade.read_property(-1) == 30
        assert facade.read_property(-10) is draft.MISSING
        assert facade.has_property(-10) is False

    def test_write_property_rejects_bad_keys(self) -> None:
        """Non-index keys are rejected."""
        facade = draft.wrap([1])

        with _pytest.raises(TypeError):
            facade.write_property("a", 1)
        with _pytest.raises(IndexError):
            facade.write_property(-5, 1)

    def test_define_property_grows(self) -> None:
        """define_property() past the end grows the draft."""
        facade = draft.wrap([])

        assert facade.define_property(2, draft.Descriptor(value="v")) is True

        assert len(facade) == 3
        assert draft.unwrap(facade) == [None, None, "v"]

    def test_descriptor_of_element(self) -> None:
        """Elements report PLAIN descriptors."""
        facade = draft.wrap(["a"])

        assert facade.get_own_descriptor(0) == draft.Descriptor(value="a")
        assert facade.get_own_descriptor(1) is None


class TestSequenceMaterialization:
    def test_tuple_draft_materializes_to_tuple(self) -> None:
        """Tuple drafts materialize to tuples."""
        origin = (1, 2)
        facade = draft.wrap(origin)

        facade.append(3)

        result = draft.unwrap(facade)
        assert result == (1, 2, 3)
        assert type(result) is tuple

    def test_list_subclass_is_preserved(self) -> None:
        """list subclasses keep their type."""
        origin = TaggedList([1, 2])
        facade = draft.wrap(origin)

        facade[0] = 5

        result = draft.unwrap(facade)
        assert type(result) is TaggedList
        assert result == [5, 2]
        assert origin == [1, 2]

    def test_rewriting_same_scalar_keeps_origin(self) -> None:
        """Writing the same scalar back returns the origin."""
        origin = [1, "a"]
        facade = draft.wrap(origin)

        facade[0] = 1
        facade[1] = "a"

        assert draft.unwrap(facade) is origin

    def test_insert_keeps_shifted_elements_identical(self) -> None:
        """Elements shifted by insert() stay identical."""
        first: dict[str, _typing.Any] = {"id": 1}
        second: dict[str, _typing.Any] = {"id": 2}
        origin = [first, second]
        facade = draft.wrap(origin)

        facade.insert(0, {"id": 0})

        result = draft.unwrap(facade)
        assert result == [{"id": 0}, first, second]
        assert result[1] is first
        assert result[2] is second

    def test_shifted_draft_keeps_its_changes(self) -> None:
        """A shifted child draft keeps its buffered changes."""
        origin = [{"id": 1}, {"id": 2}]
        facade = draft.wrap(origin)

        facade[1]["id"] = 20
        del facade[0]

        result = draft.unwrap(facade)
        assert result == [{"id": 20}]
        assert origin == [{"id": 1}, {"id": 2}]

    def test_remove_then_restore_same_elements_keeps_origin(self) -> None:
        """Removing and restoring the same elements returns the origin."""
        origin = [1, 2, 3]
        facade = draft.wrap(origin)

        value = facade.pop()
        facade.append(value)

        assert draft.unwrap(facade) is origin
