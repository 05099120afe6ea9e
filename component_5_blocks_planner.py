"""
Component 5: Blocks World Planner

Binds the generic A* search to the blocks world:
- BlocksWorldGraph: arm-left, arm-right, pick and drop transitions
- Goal test against a DNF formula (any conjunction fully satisfied)
- Plan reconstruction into action tokens l, r, p, d
- Plan simulation, validation and failure diagnosis
- Optional narration interleaved with the action tokens

Each transition derives a fresh WorldState; states are never mutated.

Author: Shrdlite Development Team
Date: 2025-12-04
"""

from dataclasses import replace
from typing import Any, Dict, List, Optional, Tuple

from common.constants import (
    ACTION_COST,
    ACTION_DROP,
    ACTION_LEFT,
    ACTION_PICK,
    ACTION_RIGHT,
    FORM_BOX,
)
from component_15_logging_config import PerformanceLogger, get_logger
from component_1_world_model import WorldState, can_drop_onto, get_form, relation_holds
from component_2_goal_formula import Conjunction, DNFFormula, Literal
from component_4_search_engine import AStarSearch, Edge, Graph
from component_5_planner_heuristics import BlocksWorldHeuristic, Heuristic
from infrastructure.interfaces import BaseReasoningEngine, ReasoningResult
from shrdlite_config import get_config
from shrdlite_exceptions import PlanExecutionError, PlanNotFoundError

logger = get_logger(__name__)


# ============================================================================
# Goal Test
# ============================================================================


def literal_holds(state: WorldState, literal: Literal) -> bool:
    """True if the literal's relation holds exactly when its polarity says so."""
    return relation_holds(state, literal.relation, literal.args) == literal.polarity


def conjunction_holds(state: WorldState, conjunction: Conjunction) -> bool:
    """All literals of the conjunction hold."""
    return all(literal_holds(state, lit) for lit in conjunction)


def goal_test(state: WorldState, formula: DNFFormula) -> bool:
    """Some conjunction of the formula holds in ``state``."""
    return any(conjunction_holds(state, conj) for conj in formula)


# ============================================================================
# Transition Graph
# ============================================================================


class BlocksWorldGraph(Graph[WorldState]):
    """Implicit state graph of the single-arm blocks world; every edge costs 1."""

    def outgoing_edges(self, node: WorldState) -> List[Edge[WorldState]]:
        edges = []

        if node.arm > 0:
            edges.append(
                Edge(node, replace(node, arm=node.arm - 1), ACTION_COST, ACTION_LEFT)
            )

        if node.arm < len(node.stacks) - 1:
            edges.append(
                Edge(node, replace(node, arm=node.arm + 1), ACTION_COST, ACTION_RIGHT)
            )

        if node.holding is None and node.stacks[node.arm]:
            edges.append(Edge(node, self._pick(node), ACTION_COST, ACTION_PICK))

        if node.holding is not None and can_drop_onto(node, node.holding, node.arm):
            edges.append(Edge(node, self._drop(node), ACTION_COST, ACTION_DROP))

        return edges

    @staticmethod
    def _pick(node: WorldState) -> WorldState:
        column = node.stacks[node.arm]
        stacks = list(node.stacks)
        stacks[node.arm] = column[:-1]
        return replace(node, stacks=tuple(stacks), holding=column[-1])

    @staticmethod
    def _drop(node: WorldState) -> WorldState:
        stacks = list(node.stacks)
        stacks[node.arm] = node.stacks[node.arm] + (node.holding,)
        return replace(node, stacks=tuple(stacks), holding=None)


# ============================================================================
# Planner
# ============================================================================


class BlocksWorldPlanner(BaseReasoningEngine):
    """
    A* planner for DNF goals over the blocks world.

    Features:
    - Bounded best-first search (expansion ceiling from configuration)
    - Disjunctive goals: the heuristic follows the cheapest-looking disjunct
    - Plan validation, simulation and root-cause diagnosis
    - BaseReasoningEngine interface for orchestration
    """

    def __init__(
        self,
        heuristic: Optional[Heuristic] = None,
        max_expansions: Optional[int] = None,
    ):
        """
        Initialize planner.

        Args:
            heuristic: Heuristic for A* (default: BlocksWorldHeuristic)
            max_expansions: Expansion ceiling (default: config.max_expansions)
        """
        config = get_config()
        self.heuristic = heuristic or BlocksWorldHeuristic()
        self.max_expansions = (
            config.max_expansions if max_expansions is None else max_expansions
        )
        self.graph = BlocksWorldGraph()
        self.stats: Dict[str, Any] = {"expansions": 0, "generated": 0, "plan_length": 0}

    def plan_interpretation(self, formula: DNFFormula, state: WorldState) -> List[str]:
        """
        Find an action sequence leading from ``state`` to a goal state.

        Args:
            formula: Goal formula
            state: Start state (not modified)

        Returns:
            Action tokens; empty if the goal already holds

        Raises:
            PlanNotFoundError: Budget exceeded or state space exhausted
        """
        logger.info(
            "Starting planning",
            extra={"goal": str(formula), "start": state.to_string()},
        )

        search: AStarSearch[WorldState] = AStarSearch(self.max_expansions)

        with PerformanceLogger(logger.logger, "Planning", goal=str(formula)):
            result = search.search(
                self.graph,
                state,
                is_goal=lambda node: goal_test(node, formula),
                heuristic=lambda node: self.heuristic.estimate(node, formula),
            )

        self.stats = {
            "expansions": search.stats["expansions"],
            "generated": search.stats["generated"],
            "plan_length": 0,
        }

        if result is None:
            logger.warning(
                "No plan found",
                extra={
                    "expansions": search.stats["expansions"],
                    "reason": search.stats["reason"],
                },
            )
            raise PlanNotFoundError(
                expansions=search.stats["expansions"],
                max_expansions=self.max_expansions,
                reason=search.stats["reason"],
            )

        plan = self.path_to_commands(result.path)
        self.stats["plan_length"] = len(plan)

        logger.info(
            "Plan found",
            extra={"plan_length": len(plan), "expansions": result.expansions},
        )
        return plan

    def path_to_commands(self, path: List[WorldState]) -> List[str]:
        """Re-derive the edge label between each consecutive pair of states."""
        commands = []
        for current, successor in zip(path, path[1:]):
            for edge in self.graph.outgoing_edges(current):
                if edge.target == successor:
                    commands.append(edge.command)
                    break
            else:
                raise PlanExecutionError(
                    "No transition connects consecutive path states",
                    step_index=len(commands),
                )
        return commands

    # ========================================================================
    # Plan Execution Helpers
    # ========================================================================

    def apply_command(self, state: WorldState, command: str) -> WorldState:
        """
        Execute one action token.

        Raises:
            PlanExecutionError: If the action is not enabled in ``state``
        """
        for edge in self.graph.outgoing_edges(state):
            if edge.command == command:
                return edge.target
        raise PlanExecutionError(
            f"Action '{command}' not applicable in state {state.to_string()}",
            command=command,
        )

    def simulate_plan(self, state: WorldState, plan: List[str]) -> List[WorldState]:
        """
        Execute plan and return the state trajectory (start state included).

        Raises:
            PlanExecutionError: If an action is not applicable
        """
        states = [state]
        for index, command in enumerate(plan):
            try:
                state = self.apply_command(state, command)
            except PlanExecutionError as e:
                e.context["step_index"] = index
                raise
            states.append(state)
        return states

    def validate_plan(
        self, formula: DNFFormula, state: WorldState, plan: List[str]
    ) -> Tuple[bool, Optional[str]]:
        """
        Validate that the plan achieves the goal from ``state``.

        Returns:
            (success, error_message)
        """
        for index, command in enumerate(plan):
            try:
                state = self.apply_command(state, command)
            except PlanExecutionError:
                return False, f"Action {index} ({command}) not applicable in state"

        if not goal_test(state, formula):
            return False, "Final state does not satisfy goal"

        return True, None

    def diagnose_failure(
        self, formula: DNFFormula, state: WorldState, plan: List[str]
    ) -> Dict[str, Any]:
        """
        Analyze why a plan fails (root-cause analysis).

        Returns:
            Diagnostic information:
            - failed_at: Action index where the plan fails
            - failed_action: The failing action token (None if the plan runs)
            - unsatisfied: Goal literals not holding at the end
            - state_before: State before the failed action / final state
            - error: Description, or None if the plan works
        """
        for index, command in enumerate(plan):
            try:
                next_state = self.apply_command(state, command)
            except PlanExecutionError:
                return {
                    "failed_at": index,
                    "failed_action": command,
                    "unsatisfied": [],
                    "state_before": state,
                    "error": f"Action {command} is not enabled in {state.to_string()}",
                }
            state = next_state

        if not goal_test(state, formula):
            unsatisfied = [
                lit for conj in formula for lit in conj if not literal_holds(state, lit)
            ]
            return {
                "failed_at": len(plan),
                "failed_action": None,
                "unsatisfied": unsatisfied,
                "state_before": state,
                "error": "Goal not achieved. Missing: "
                + ", ".join(str(lit) for lit in unsatisfied),
            }

        return {"error": None}

    def narrate_plan(self, state: WorldState, plan: List[str]) -> List[str]:
        """
        Interleave narration strings with the action tokens.

        Example: ["Moving right", "r", "r", "Picking up the large white ball",
        "p", ...]
        """
        narrated: List[str] = []
        previous: Optional[str] = None

        for command in plan:
            if command == ACTION_LEFT and previous != ACTION_LEFT:
                narrated.append("Moving left")
            elif command == ACTION_RIGHT and previous != ACTION_RIGHT:
                narrated.append("Moving right")
            elif command == ACTION_PICK:
                narrated.append(f"Picking up {state.describe(state.top_of(state.arm))}")
            elif command == ACTION_DROP:
                narrated.append(self._describe_drop(state))

            narrated.append(command)
            state = self.apply_command(state, command)
            previous = command

        return narrated

    @staticmethod
    def _describe_drop(state: WorldState) -> str:
        held = state.describe(state.holding)
        top = state.top_of(state.arm)
        if top is None:
            return f"Dropping {held} on the floor"
        preposition = "into" if get_form(state, top) == FORM_BOX else "on"
        return f"Dropping {held} {preposition} {state.describe(top)}"

    # ========================================================================
    # BaseReasoningEngine Interface Implementation
    # ========================================================================

    def reason(self, query: str, context: Dict[str, Any]) -> ReasoningResult:
        """
        Plan for ``context["interpretation"]`` (a DNFFormula) starting from
        ``context["world_state"]``.
        """
        formula = context.get("interpretation")
        state = context.get("world_state")
        if formula is None or state is None:
            return ReasoningResult(
                success=False,
                answer="No interpretation or world state provided in context",
                strategy_used="blocks_world_planner",
                metadata={"error": "missing_input"},
            )

        try:
            plan = self.plan_interpretation(formula, state)
        except PlanNotFoundError as e:
            return ReasoningResult(
                success=False,
                answer="No plan found within search limits",
                strategy_used="blocks_world_planner_astar",
                computation_cost=1.0,
                metadata=dict(e.context),
            )

        is_valid, error_msg = self.validate_plan(formula, state, plan)

        return ReasoningResult(
            success=True,
            answer=", ".join(plan),
            confidence=1.0 if is_valid else 0.8,
            strategy_used="blocks_world_planner_astar",
            computation_cost=min(self.stats["expansions"] / self.max_expansions, 1.0),
            metadata={
                "plan": plan,
                "plan_length": len(plan),
                "expansions": self.stats["expansions"],
                "generated": self.stats["generated"],
                "is_valid": is_valid,
                "validation_error": error_msg,
            },
        )

    def get_capabilities(self) -> List[str]:
        return [
            "planning",
            "state_space_search",
            "astar_search",
            "heuristic_search",
            "disjunctive_goals",
            "plan_validation",
        ]

    def estimate_cost(self, query: str) -> float:
        # Bounded search, medium-high cost
        return 0.6
