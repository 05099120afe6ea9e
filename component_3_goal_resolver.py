"""
Component 3: Goal Resolver

Turns a structured command plus the current world into a DNF goal formula.

Resolution:
1. Expand the command's object description to the matching object keys,
   keeping only objects that satisfy a nested location relation.
2. Without an object description the target is the held object ("itself").
3. For each target, enumerate candidate goal literals:
   - possession commands (take/grasp/pick up) -> holding(target)
   - placement commands (move/put/drop) -> relation(target, location) for
     every resolved location that passes the physical rule table
4. Every literal becomes its own conjunction; the union is the formula.

Ambiguous commands ("put the ball in a box") yield several disjuncts; the
planner decides which one is cheapest to realise.

Author: Shrdlite Development Team
Date: 2025-12-04
"""

from typing import Any, Dict, List, Optional

from common.constants import (
    FLOOR,
    FORM_ANY,
    FORM_FLOOR,
    ITSELF,
    PLACEMENT_COMMANDS,
    POSSESSION_COMMANDS,
    RELATION_HOLDING,
    SPATIAL_RELATIONS,
)
from component_15_logging_config import PerformanceLogger, get_logger
from component_1_world_model import (
    WorldState,
    is_move_valid,
    relation_holds,
)
from component_2_command_types import Command, LocationDescription, ObjectDescription
from component_2_goal_formula import DNFFormula, Literal
from infrastructure.interfaces import BaseReasoningEngine, ReasoningResult
from shrdlite_exceptions import NoValidMoveError, ObjectNotFoundError, ResolutionException

logger = get_logger(__name__)


class GoalResolver(BaseReasoningEngine):
    """
    Resolves structured commands into DNF goal formulas.

    The resolver is stateless; the world is passed to every call.
    """

    def resolve(self, command: Command, state: WorldState) -> DNFFormula:
        """
        Build the goal formula for one parse.

        Args:
            command: Structured command from the parser
            state: Current world

        Returns:
            DNFFormula with one single-literal conjunction per candidate goal

        Raises:
            ObjectNotFoundError: The object description matches nothing
            NoValidMoveError: No candidate goal survives the physical rules
        """
        with PerformanceLogger(logger.logger, "Goal resolution", command=command.command):
            if command.entity is not None:
                targets = self.resolve_description(command.entity, state)
                if not targets:
                    raise ObjectNotFoundError(description=str(command.entity))
            else:
                targets = [ITSELF]

            literals: List[Literal] = []
            for target in targets:
                literals.extend(
                    self.possible_moves(command.command, target, command.location, state)
                )

            formula = DNFFormula.of_literals(literals)
            if not formula:
                raise NoValidMoveError(command=command.command)

        logger.info(
            "Goal resolved",
            extra={
                "command": command.command,
                "targets": len(targets),
                "disjuncts": len(formula),
            },
        )
        return formula

    def resolve_description(
        self, description: ObjectDescription, state: WorldState
    ) -> List[str]:
        """
        Object keys matching ``description``, including its nested location.

        A nested location is resolved recursively; a candidate is kept if
        the relation holds between it and at least one resolved location.
        """
        candidates = self.find_object_keys(description, state)
        if description.location is None:
            return candidates

        relation = description.location.relation
        self._check_relation(relation)
        if not candidates:
            return candidates

        locations = self.resolve_description(description.location.object, state)

        return [
            candidate
            for candidate in candidates
            if any(
                relation_holds(state, relation, (candidate, location))
                for location in locations
            )
        ]

    def find_object_keys(
        self, description: ObjectDescription, state: WorldState
    ) -> List[str]:
        """Keys of existing objects matching the form/size/color filters."""
        if description.form == FORM_FLOOR:
            return [FLOOR]

        keys = []
        for key in state.object_keys():
            obj = state.objects.get(key)
            if obj is None:
                continue
            if description.form not in (None, FORM_ANY) and obj.form != description.form:
                continue
            if description.color is not None and obj.color != description.color:
                continue
            if description.size is not None and obj.size != description.size:
                continue
            keys.append(key)

        return sorted(keys)

    def possible_moves(
        self,
        command: str,
        target: str,
        location: Optional[LocationDescription],
        state: WorldState,
    ) -> List[Literal]:
        """Candidate goal literals for one target object."""
        if target == FLOOR:
            return []

        moving = state.holding if target == ITSELF else target
        if moving is None:
            logger.debug("Nothing held, no implicit object to act on")
            return []

        if command in POSSESSION_COMMANDS:
            return [Literal(RELATION_HOLDING, (moving,))]

        if command not in PLACEMENT_COMMANDS:
            logger.warning("Unknown command", extra={"command": command})
            return []

        if location is None:
            return []

        self._check_relation(location.relation)
        return [
            Literal(location.relation, (moving, location_key))
            for location_key in self.resolve_description(location.object, state)
            if is_move_valid(state, moving, location.relation, location_key)
        ]

    @staticmethod
    def _check_relation(relation: str) -> None:
        """
        Raises:
            NoValidMoveError: If ``relation`` is not a spatial relation
        """
        if relation not in SPATIAL_RELATIONS:
            raise NoValidMoveError(
                f"Unknown relation '{relation}'", context={"relation": relation}
            )

    # ========================================================================
    # BaseReasoningEngine Interface Implementation
    # ========================================================================

    def reason(self, query: str, context: Dict[str, Any]) -> ReasoningResult:
        """
        Resolve the command in ``context["command"]`` against
        ``context["world_state"]``.
        """
        command = context.get("command")
        state = context.get("world_state")
        if command is None or state is None:
            return ReasoningResult(
                success=False,
                answer="No command or world state provided in context",
                strategy_used="goal_resolver",
                metadata={"error": "missing_input"},
            )

        try:
            formula = self.resolve(command, state)
        except ResolutionException as e:
            return ReasoningResult(
                success=False,
                answer=e.message,
                strategy_used="goal_resolver",
                metadata={"error": type(e).__name__, "context": e.context},
            )

        return ReasoningResult(
            success=True,
            answer=str(formula),
            confidence=1.0 / len(formula),
            strategy_used="goal_resolver",
            metadata={"formula": formula, "disjuncts": len(formula)},
        )

    def get_capabilities(self) -> List[str]:
        return [
            "goal_resolution",
            "reference_resolution",
            "physical_validity",
            "dnf_goal_construction",
        ]

    def estimate_cost(self, query: str) -> float:
        # Filtering the object table; cheap compared to planning
        return 0.1
