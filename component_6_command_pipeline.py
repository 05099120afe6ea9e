"""
Component 6: Command Pipeline

Driver loop from parser output to executable plans:
- interpret(): resolve every parse into a goal formula
- plan(): plan every interpretation independently
- CommandPipeline: both stages plus selection of the shortest plan

Failures are per parse / per interpretation: they are recorded and skipped.
Only when every attempt of a stage fails is an error surfaced, and then
only the first one recorded (AmbiguousNoResolutionError wrapping it).

Author: Shrdlite Development Team
Date: 2025-12-04
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from common.constants import ACTION_ALPHABET, ALREADY_TRUE_NOTICE
from component_15_logging_config import (
    get_logger,
    log_component_end,
    log_component_start,
)
from component_1_world_model import WorldState
from component_2_command_types import Command, ParseResult
from component_2_goal_formula import DNFFormula, stringify_formula
from component_3_goal_resolver import GoalResolver
from component_5_blocks_planner import BlocksWorldPlanner
from shrdlite_config import get_config
from shrdlite_exceptions import (
    AmbiguousNoResolutionError,
    ResolutionException,
    ShrdliteException,
)

logger = get_logger(__name__)


@dataclass
class InterpretationResult:
    """A parse together with the goal formula it resolved to."""

    parse_result: ParseResult
    interpretation: DNFFormula

    @property
    def input(self) -> str:
        return self.parse_result.input

    @property
    def parse(self) -> Command:
        return self.parse_result.parse


@dataclass
class PlannerResult:
    """An interpretation together with the plan realising it."""

    interpretation_result: InterpretationResult
    plan: List[str]

    @property
    def interpretation(self) -> DNFFormula:
        return self.interpretation_result.interpretation

    @property
    def action_count(self) -> int:
        """Number of primitive actions (narration strings excluded)."""
        return sum(1 for step in self.plan if step in ACTION_ALPHABET)


def _raise_first(errors: List[ShrdliteException], attempts: int, stage: str):
    if not errors:
        errors = [ResolutionException(f"Nothing to {stage}")]
    for later in errors[1:]:
        logger.debug("Discarded later error", extra={"stage": stage, "error": str(later)})
    raise AmbiguousNoResolutionError(errors[0], attempts=attempts)


def interpret(
    parses: Sequence[ParseResult],
    state: WorldState,
    resolver: Optional[GoalResolver] = None,
) -> List[InterpretationResult]:
    """
    Resolve every parse against ``state``.

    Raises:
        AmbiguousNoResolutionError: If no parse could be resolved
    """
    resolver = resolver or GoalResolver()
    errors: List[ShrdliteException] = []
    interpretations: List[InterpretationResult] = []

    for parse_result in parses:
        try:
            formula = resolver.resolve(parse_result.parse, state)
        except ShrdliteException as e:
            logger.info("Parse could not be resolved", extra={"error": e.message})
            errors.append(e)
            continue
        interpretations.append(InterpretationResult(parse_result, formula))

    if not interpretations:
        _raise_first(errors, len(parses), "interpret")

    return interpretations


def plan(
    interpretations: Sequence[InterpretationResult],
    state: WorldState,
    planner: Optional[BlocksWorldPlanner] = None,
    narrate: Optional[bool] = None,
) -> List[PlannerResult]:
    """
    Plan every interpretation from ``state``.

    An empty plan (goal already true) is replaced by ALREADY_TRUE_NOTICE.

    Raises:
        AmbiguousNoResolutionError: If no interpretation could be planned
    """
    planner = planner or BlocksWorldPlanner()
    narrate = get_config().narrate_plans if narrate is None else narrate
    errors: List[ShrdliteException] = []
    plans: List[PlannerResult] = []

    for interpretation in interpretations:
        try:
            actions = planner.plan_interpretation(interpretation.interpretation, state)
        except ShrdliteException as e:
            logger.info("Interpretation could not be planned", extra={"error": e.message})
            errors.append(e)
            continue

        if not actions:
            steps = [ALREADY_TRUE_NOTICE]
        elif narrate:
            steps = planner.narrate_plan(state, actions)
        else:
            steps = actions
        plans.append(PlannerResult(interpretation, steps))

    if not plans:
        _raise_first(errors, len(interpretations), "plan")

    return plans


def select_shortest(results: Sequence[PlannerResult]) -> PlannerResult:
    """Result with the fewest primitive actions (first one on ties)."""
    if not results:
        raise ValueError("No planner results to choose from")
    return min(results, key=lambda result: result.action_count)


def stringify_interpretation(result: InterpretationResult) -> str:
    return stringify_formula(result.interpretation)


def stringify_plan(result: PlannerResult) -> str:
    return ", ".join(result.plan)


class CommandPipeline:
    """
    Runs interpretation and planning for all parses of one utterance.

    Usage:
        pipeline = CommandPipeline()
        results = pipeline.run(parses, world)
        best = select_shortest(results)
    """

    def __init__(
        self,
        resolver: Optional[GoalResolver] = None,
        planner: Optional[BlocksWorldPlanner] = None,
        narrate: Optional[bool] = None,
    ):
        self.resolver = resolver or GoalResolver()
        self.planner = planner or BlocksWorldPlanner()
        self.narrate = narrate

    def run(self, parses: Sequence[ParseResult], state: WorldState) -> List[PlannerResult]:
        """
        Interpret and plan every parse.

        Raises:
            AmbiguousNoResolutionError: If a stage fails for every candidate
        """
        log_component_start(logger, "CommandPipeline", parses=len(parses))

        interpretations = interpret(parses, state, self.resolver)
        for result in interpretations:
            logger.debug(
                "Interpretation",
                extra={"input": result.input, "goal": stringify_interpretation(result)},
            )

        results = plan(interpretations, state, self.planner, self.narrate)

        log_component_end(logger, "CommandPipeline", plans=len(results))
        return results

    def run_best(self, parses: Sequence[ParseResult], state: WorldState) -> PlannerResult:
        """Run and keep the plan with the fewest actions."""
        return select_shortest(self.run(parses, state))
