"""
tests/test_world_model.py

Unit tests for the blocks world model.

Tests cover:
- WorldState construction and the placement invariant
- Object lookup (stack_index_of, exists)
- Spatial predicates (ontop, inside, above, under, beside, leftof, rightof)
- The physical validity rule table
"""

import pytest

from component_1_world_model import (
    WorldObject,
    WorldState,
    build_object_table,
    can_drop_onto,
    exists,
    is_above,
    is_beside,
    is_inside,
    is_left_of,
    is_move_valid,
    is_on_top,
    is_right_of,
    is_under,
    relation_holds,
    stack_index_of,
)
from shrdlite_exceptions import InvalidWorldStateError


@pytest.fixture
def two_column_world():
    """Stacks [[a, b], [c]]: a on the floor, b on a, c on the floor of column 1."""
    return WorldState.create(
        stacks=[["a", "b"], ["c"]],
        objects={
            "a": WorldObject("brick", "large", "green"),
            "b": WorldObject("brick", "small", "white"),
            "c": WorldObject("plank", "large", "red"),
        },
    )


@pytest.fixture
def rules_world():
    """Objects for exercising the physical rule table (placement irrelevant)."""
    return WorldState.create(
        stacks=[["large_ball"], ["small_box"], ["table"], ["pyramid"], ["box"]],
        objects={
            "large_ball": WorldObject("ball", "large", "white"),
            "small_ball": WorldObject("ball", "small", "black"),
            "small_box": WorldObject("box", "small", "blue"),
            "large_box": WorldObject("box", "large", "red"),
            "box": WorldObject("box", "small", "yellow"),
            "table": WorldObject("table", "large", "blue"),
            "pyramid": WorldObject("pyramid", "large", "yellow"),
            "brick": WorldObject("brick", "small", "white"),
            "plank": WorldObject("plank", "small", "green"),
        },
    )


# ==================== WorldState ====================


class TestWorldState:
    """Construction, invariant and value semantics."""

    def test_create_converts_lists_to_tuples(self, two_column_world):
        assert two_column_world.stacks == (("a", "b"), ("c",))
        assert two_column_world.arm == 0
        assert two_column_world.holding is None

    def test_duplicate_object_rejected(self):
        with pytest.raises(InvalidWorldStateError):
            WorldState.create(stacks=[["a"], ["a"]])

    def test_held_object_also_stacked_rejected(self):
        with pytest.raises(InvalidWorldStateError):
            WorldState.create(stacks=[["a"], []], holding="a")

    def test_arm_out_of_range_rejected(self):
        with pytest.raises(InvalidWorldStateError):
            WorldState.create(stacks=[[], []], arm=2)

    def test_world_without_columns_rejected(self):
        with pytest.raises(InvalidWorldStateError):
            WorldState.create(stacks=[])

    def test_floor_cannot_be_stacked(self):
        with pytest.raises(InvalidWorldStateError):
            WorldState.create(stacks=[["floor"]])

    def test_equality_ignores_object_table(self):
        one = WorldState.create(stacks=[["a"]], objects={"a": WorldObject("ball", "small", "red")})
        other = WorldState.create(stacks=[["a"]])
        assert one == other
        assert hash(one) == hash(other)

    def test_states_differing_in_arm_are_distinct(self):
        one = WorldState.create(stacks=[["a"], []], arm=0)
        other = WorldState.create(stacks=[["a"], []], arm=1)
        assert one != other
        assert len({one, other}) == 2

    def test_top_of_and_describe(self, two_column_world):
        assert two_column_world.top_of(0) == "b"
        assert two_column_world.describe("c") == "the large red plank"
        assert two_column_world.describe("floor") == "the floor"

    def test_build_object_table(self):
        table = build_object_table({"x": {"form": "box", "size": "large", "color": "red"}})
        assert table["x"] == WorldObject("box", "large", "red")


# ==================== Lookup ====================


class TestObjectLookup:
    def test_stack_index_of(self, two_column_world):
        assert stack_index_of(two_column_world, "b") == 0
        assert stack_index_of(two_column_world, "c") == 1
        assert stack_index_of(two_column_world, "z") is None

    def test_held_object_has_no_stack_index_but_exists(self):
        state = WorldState.create(stacks=[["a"], []], holding="b")
        assert stack_index_of(state, "b") is None
        assert exists(state, "b")
        assert not exists(state, "z")


# ==================== Spatial Predicates ====================


class TestSpatialPredicates:
    def test_documented_examples(self, two_column_world):
        assert is_on_top(two_column_world, "a", "b")
        assert is_on_top(two_column_world, "floor", "a")
        assert is_beside(two_column_world, "b", "c")
        assert is_left_of(two_column_world, "a", "c")
        assert is_right_of(two_column_world, "c", "a")

    def test_on_top_requires_direct_contact(self, two_column_world):
        assert not is_on_top(two_column_world, "floor", "b")
        assert not is_on_top(two_column_world, "b", "a")
        assert not is_on_top(two_column_world, "a", "floor")

    def test_nothing_rests_on_top_of_a_box(self):
        state = WorldState.create(
            stacks=[["box", "ball"]],
            objects={
                "box": WorldObject("box", "large", "red"),
                "ball": WorldObject("ball", "small", "white"),
            },
        )
        assert not is_on_top(state, "box", "ball")
        assert is_inside(state, "box", "ball")

    def test_nothing_is_inside_a_table(self):
        state = WorldState.create(
            stacks=[["table", "brick"]],
            objects={
                "table": WorldObject("table", "large", "blue"),
                "brick": WorldObject("brick", "small", "white"),
            },
        )
        assert not is_inside(state, "table", "brick")
        assert is_on_top(state, "table", "brick")

    def test_above_any_height(self, small_world):
        # column 3 is k, g, c, b
        assert is_above(small_world, "k", "b")
        assert is_above(small_world, "g", "c")
        assert not is_above(small_world, "b", "k")
        assert is_above(small_world, "floor", "b")
        assert not is_above(small_world, "k", "floor")
        assert not is_above(small_world, "a", "b")

    def test_under_excludes_floor(self, small_world):
        assert is_under(small_world, "k", "b")
        assert not is_under(small_world, "b", "k")
        assert not is_under(small_world, "floor", "b")
        assert not is_under(small_world, "b", "floor")

    def test_beside_only_adjacent_columns(self, small_world):
        assert is_beside(small_world, "e", "l")
        assert not is_beside(small_world, "e", "b")
        assert not is_beside(small_world, "a", "l")

    def test_left_and_right_any_distance(self, small_world):
        assert is_left_of(small_world, "e", "f")
        assert is_right_of(small_world, "f", "e")
        assert not is_left_of(small_world, "a", "l")

    def test_held_objects_have_no_horizontal_relations(self):
        state = WorldState.create(stacks=[["a"], []], holding="b")
        assert not is_beside(state, "a", "b")
        assert not is_left_of(state, "a", "b")
        assert not is_right_of(state, "b", "a")

    def test_relation_holds_uses_literal_argument_order(self, small_world):
        assert relation_holds(small_world, "ontop", ("b", "c"))
        assert relation_holds(small_world, "ontop", ("l", "a"))
        assert not relation_holds(small_world, "ontop", ("a", "l"))
        assert relation_holds(small_world, "inside", ("f", "m"))
        assert relation_holds(small_world, "above", ("b", "k"))
        assert relation_holds(small_world, "under", ("k", "b"))
        assert relation_holds(small_world, "ontop", ("e", "floor"))
        assert not relation_holds(small_world, "holding", ("e",))

    def test_relation_holds_unknown_relation(self, small_world):
        with pytest.raises(ValueError):
            relation_holds(small_world, "between", ("a", "b"))


# ==================== Physical Rules ====================


class TestMoveValidity:
    def test_large_ball_not_inside_small_box(self, rules_world):
        assert not is_move_valid(rules_world, "large_ball", "inside", "small_box")

    def test_ball_only_on_floor(self, rules_world):
        assert not is_move_valid(rules_world, "large_ball", "ontop", "table")
        assert is_move_valid(rules_world, "large_ball", "ontop", "floor")

    def test_box_not_on_pyramid_or_brick(self, rules_world):
        assert not is_move_valid(rules_world, "box", "ontop", "pyramid")
        assert not is_move_valid(rules_world, "box", "inside", "brick")

    def test_nothing_relates_to_itself(self, rules_world):
        for relation in ("ontop", "inside", "above", "under", "beside", "leftof"):
            assert not is_move_valid(rules_world, "brick", relation, "brick")

    def test_plank_needs_large_box(self, rules_world):
        assert not is_move_valid(rules_world, "plank", "inside", "small_box")
        assert is_move_valid(rules_world, "plank", "inside", "large_box")

    def test_large_box_never_in_box(self, rules_world):
        assert not is_move_valid(rules_world, "large_box", "inside", "small_box")
        assert not is_move_valid(rules_world, "large_box", "ontop", "small_box")

    def test_small_ball_fits_in_small_box(self, rules_world):
        assert is_move_valid(rules_world, "small_ball", "inside", "small_box")

    def test_spatial_relations_otherwise_valid(self, rules_world):
        assert is_move_valid(rules_world, "large_ball", "beside", "table")
        assert is_move_valid(rules_world, "brick", "ontop", "table")

    def test_can_drop_onto(self, rules_world):
        # column 1 holds the small box
        assert not can_drop_onto(rules_world, "large_ball", 1)
        assert can_drop_onto(rules_world, "small_ball", 1)

    def test_can_drop_onto_empty_column(self):
        state = WorldState.create(
            stacks=[[], []],
            holding="x",
            objects={"x": WorldObject("ball", "large", "white")},
        )
        assert can_drop_onto(state, "x", 0)
