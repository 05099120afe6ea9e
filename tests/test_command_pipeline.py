"""
tests/test_command_pipeline.py

Tests for the interpret/plan driver and plan selection.
"""

import pytest

from common.constants import ALREADY_TRUE_NOTICE
from component_2_command_types import (
    Command,
    LocationDescription,
    ObjectDescription,
    ParseResult,
)
from component_2_goal_formula import DNFFormula, Literal
from component_6_command_pipeline import (
    CommandPipeline,
    InterpretationResult,
    PlannerResult,
    interpret,
    plan,
    select_shortest,
    stringify_interpretation,
    stringify_plan,
)
from component_5_blocks_planner import BlocksWorldPlanner
from shrdlite_exceptions import (
    AmbiguousNoResolutionError,
    NoValidMoveError,
    ObjectNotFoundError,
)

TAKE_WHITE_BALL = ParseResult(
    "take the white ball", Command("take", ObjectDescription("ball", color="white"))
)
TAKE_PURPLE_BALL = ParseResult(
    "take the purple ball", Command("take", ObjectDescription("ball", color="purple"))
)
TAKE_FLOOR = ParseResult("take the floor", Command("take", ObjectDescription("floor")))
PUT_WHITE_BALL_IN_BOX = ParseResult(
    "put the white ball in a box",
    Command(
        "put",
        ObjectDescription("ball", color="white"),
        LocationDescription("inside", ObjectDescription("box")),
    ),
)
TAKE_BLACK_BALL = ParseResult(
    "take the black ball", Command("take", ObjectDescription("ball", color="black"))
)
BLACK_BALL_IN_SMALL_BOX = ParseResult(
    "put the black ball in the small box",
    Command(
        "put",
        ObjectDescription("ball", color="black"),
        LocationDescription("inside", ObjectDescription("box", size="small")),
    ),
)


class TestInterpret:
    def test_failed_parses_are_skipped(self, small_world):
        results = interpret([TAKE_PURPLE_BALL, TAKE_WHITE_BALL], small_world)
        assert len(results) == 1
        assert results[0].input == "take the white ball"
        assert stringify_interpretation(results[0]) == "holding(e)"

    def test_all_parses_fail_surfaces_first_error(self, small_world):
        with pytest.raises(AmbiguousNoResolutionError) as exc_info:
            interpret([TAKE_PURPLE_BALL, TAKE_FLOOR], small_world)
        error = exc_info.value
        assert isinstance(error.first_error, ObjectNotFoundError)
        assert error.message == "No possible objects found"
        assert error.context["attempts"] == 2

    def test_first_error_order_follows_parses(self, small_world):
        with pytest.raises(AmbiguousNoResolutionError) as exc_info:
            interpret([TAKE_FLOOR, TAKE_PURPLE_BALL], small_world)
        assert isinstance(exc_info.value.first_error, NoValidMoveError)

    def test_no_parses(self, small_world):
        with pytest.raises(AmbiguousNoResolutionError):
            interpret([], small_world)


class TestPlan:
    def test_goal_already_true_gives_notice(self, small_world):
        interpretations = interpret([BLACK_BALL_IN_SMALL_BOX], small_world)
        results = plan(interpretations, small_world)
        assert results[0].plan == [ALREADY_TRUE_NOTICE]
        assert results[0].action_count == 0

    def test_all_interpretations_fail(self, small_world):
        impossible = InterpretationResult(
            TAKE_WHITE_BALL,
            DNFFormula.of_literals([Literal("holding", ("zzz",))]),
        )
        planner = BlocksWorldPlanner(max_expansions=5)
        with pytest.raises(AmbiguousNoResolutionError) as exc_info:
            plan([impossible], small_world, planner)
        assert exc_info.value.message == "No plan found within budget"

    def test_narrated_plan(self, small_world):
        interpretations = interpret([TAKE_WHITE_BALL], small_world)
        results = plan(interpretations, small_world, narrate=True)
        assert results[0].plan == ["Picking up the large white ball", "p"]
        assert results[0].action_count == 1

    def test_narration_from_environment(self, monkeypatch, small_world):
        monkeypatch.setenv("SHRDLITE_NARRATE_PLANS", "true")
        results = plan(interpret([TAKE_WHITE_BALL], small_world), small_world)
        assert results[0].plan[0] == "Picking up the large white ball"


class TestCommandPipeline:
    def test_run_plans_every_interpretation(self, small_world):
        results = CommandPipeline().run([TAKE_BLACK_BALL, PUT_WHITE_BALL_IN_BOX], small_world)
        assert [stringify_plan(r) for r in results] == ["r, r, r, r, r, p", "p, r, d"]

    def test_parse_with_unknown_relation_is_skipped(self, small_world):
        put_ball_on_box = ParseResult(
            "put the white ball on a box",
            Command(
                "put",
                ObjectDescription("ball", color="white"),
                LocationDescription("on", ObjectDescription("box")),
            ),
        )
        results = CommandPipeline().run([put_ball_on_box, PUT_WHITE_BALL_IN_BOX], small_world)
        assert len(results) == 1
        assert results[0].plan == ["p", "r", "d"]

    def test_run_best_selects_fewest_actions(self, small_world):
        best = CommandPipeline().run_best(
            [TAKE_PURPLE_BALL, TAKE_BLACK_BALL, PUT_WHITE_BALL_IN_BOX], small_world
        )
        assert best.plan == ["p", "r", "d"]
        assert str(best.interpretation) == "inside(e,k) | inside(e,l)"

    def test_select_shortest_prefers_first_on_ties(self, small_world):
        first = PlannerResult(interpret([TAKE_WHITE_BALL], small_world)[0], ["p"])
        second = PlannerResult(interpret([TAKE_BLACK_BALL], small_world)[0], ["l"])
        assert select_shortest([first, second]) is first

    def test_select_shortest_ignores_narration(self, small_world):
        interpretation = interpret([TAKE_WHITE_BALL], small_world)[0]
        narrated = PlannerResult(interpretation, ["Moving right", "r", "p"])
        plain = PlannerResult(interpretation, ["r", "r", "r"])
        assert select_shortest([plain, narrated]) is narrated

    def test_select_shortest_requires_results(self):
        with pytest.raises(ValueError):
            select_shortest([])
