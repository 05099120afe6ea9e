"""
Component 5: Planning Heuristics

Heuristic estimates guiding the blocks-world A* search:
- Heuristic: base interface (state, formula) -> estimated remaining cost
- BlocksWorldHeuristic: per-literal arm-travel and clearance estimates

For a formula the estimate is the minimum over its conjunctions, so the
search pursues the cheapest-looking disjunct. The estimate is a guide, not
a strict lower bound.

Author: Shrdlite Development Team
Date: 2025-12-04
"""

from typing import Optional

from common.constants import (
    FLOOR,
    HEURISTIC_CACHE_NAME,
    HOLDING_FLOOR_ESTIMATE,
    RELATION_BESIDE,
    RELATION_HOLDING,
    RELATION_LEFTOF,
    RELATION_RIGHTOF,
    STACKING_RELATIONS,
    UNSATISFIED_NEGATION_ESTIMATE,
)
from component_1_world_model import (
    WorldState,
    get_form,
    relation_holds,
    stack_index_of,
)
from component_2_goal_formula import Conjunction, DNFFormula, Literal
from infrastructure.cache_manager import get_cache_manager
from shrdlite_config import get_config

# ============================================================================
# Heuristics
# ============================================================================


class Heuristic:
    """Base class for planning heuristics."""

    def estimate(self, state: WorldState, formula: DNFFormula) -> float:
        """Estimate cost from state to a state satisfying formula."""
        raise NotImplementedError


class BlocksWorldHeuristic(Heuristic):
    """
    Arm-travel based estimate for blocks-world goal literals.

    Per literal:
    - holding(x): distance from the arm to x's column
    - rel(x, floor): 1 if x is held, else distance from the arm to x
    - inside/ontop/above/under(x, y): arm travel to the nearer of the two
      columns, plus the distance between the columns, plus a clearance
      cost per object stacked on x
    - beside(x, y): distance between the columns minus one (1 if they share
      a column)
    - leftof/rightof(x, y): column distance still to be covered

    A held object counts as standing in the arm's column. Satisfied
    literals cost 0. Estimates are memoised per (literal, state).
    """

    def __init__(self, clearance_cost: Optional[int] = None):
        config = get_config()
        self.clearance_cost = (
            config.clearance_cost if clearance_cost is None else clearance_cost
        )
        self._cache_size = config.heuristic_cache_size
        self._cache_ttl = config.heuristic_cache_ttl
        self.cache_name = f"{HEURISTIC_CACHE_NAME}_c{self.clearance_cost}"

    def estimate(self, state: WorldState, formula: DNFFormula) -> float:
        """Minimum over conjunctions; 0 for an empty formula."""
        cache_mgr = get_cache_manager()
        cache_mgr.ensure_cache(self.cache_name, maxsize=self._cache_size, ttl=self._cache_ttl)

        estimates = [self.estimate_conjunction(state, conj) for conj in formula]
        return float(min(estimates)) if estimates else 0.0

    def estimate_conjunction(self, state: WorldState, conjunction: Conjunction) -> float:
        """Minimum over the conjunction's literal estimates."""
        estimates = [self.estimate_literal(state, lit) for lit in conjunction]
        return float(min(estimates)) if estimates else 0.0

    def estimate_literal(self, state: WorldState, literal: Literal) -> float:
        cache_mgr = get_cache_manager()
        # Forms of the arguments decide the box/table exceptions of the predicates
        key = (literal, state, tuple(get_form(state, arg) for arg in literal.args))
        cached = cache_mgr.get(self.cache_name, key)
        if cached is not None:
            return cached

        value = float(self._compute(state, literal))
        cache_mgr.set(self.cache_name, key, value)
        return value

    def _compute(self, state: WorldState, literal: Literal) -> int:
        holds = relation_holds(state, literal.relation, literal.args)
        if not literal.polarity:
            return 0 if not holds else UNSATISFIED_NEGATION_ESTIMATE
        if holds:
            return 0

        subject = literal.args[0]

        if literal.relation == RELATION_HOLDING:
            return self._arm_distance(state, subject)

        location = literal.args[1]

        if location == FLOOR:
            if state.holding == subject:
                return HOLDING_FLOOR_ESTIMATE
            return self._arm_distance(state, subject)

        subject_column = self._column_of(state, subject)
        location_column = self._column_of(state, location)
        if subject_column is None or location_column is None:
            return 0

        distance = abs(subject_column - location_column)

        if literal.relation in STACKING_RELATIONS:
            travel = min(abs(state.arm - subject_column), abs(state.arm - location_column))
            return travel + distance + self.clearance_cost * self._objects_above(
                state, subject
            )

        if literal.relation == RELATION_BESIDE:
            if distance == 0:
                return 1
            return distance - 1

        # Unsatisfied leftof/rightof: the subject must pass the location's column
        # (a held subject may already be on the right side and only needs a drop)
        if literal.relation == RELATION_LEFTOF:
            return max(subject_column - location_column + 1, 1)

        if literal.relation == RELATION_RIGHTOF:
            return max(location_column - subject_column + 1, 1)

        return 0

    @staticmethod
    def _column_of(state: WorldState, key: str) -> Optional[int]:
        if state.holding == key:
            return state.arm
        return stack_index_of(state, key)

    def _arm_distance(self, state: WorldState, key: str) -> int:
        column = self._column_of(state, key)
        if column is None:
            return 0
        return abs(state.arm - column)

    @staticmethod
    def _objects_above(state: WorldState, key: str) -> int:
        column = stack_index_of(state, key)
        if column is None:
            return 0
        stack = state.stacks[column]
        return len(stack) - stack.index(key) - 1
