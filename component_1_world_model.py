"""
Component 1: Blocks World Model

State representation and pure physical-relation predicates:
- WorldObject: immutable description of a physical object (form, size, color)
- WorldState: stacks of object keys, arm column and held object
- Spatial predicates: ontop, inside, above, under, beside, leftof, rightof
- Physical validity rule table (is_move_valid)

Nothing in this module searches or mutates: every predicate takes its
WorldState explicitly and new states are derived with dataclasses.replace.

Author: Shrdlite Development Team
Date: 2025-12-04
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from common.constants import (
    FLOOR,
    FORM_BALL,
    FORM_BOX,
    FORM_BRICK,
    FORM_FLOOR,
    FORM_PLANK,
    FORM_PYRAMID,
    FORM_TABLE,
    RELATION_ABOVE,
    RELATION_BESIDE,
    RELATION_HOLDING,
    RELATION_INSIDE,
    RELATION_LEFTOF,
    RELATION_ONTOP,
    RELATION_RIGHTOF,
    RELATION_UNDER,
    SIZE_LARGE,
    SIZE_SMALL,
)
from component_15_logging_config import get_logger
from shrdlite_exceptions import InvalidWorldStateError

logger = get_logger(__name__)


# ============================================================================
# Objects and State
# ============================================================================


@dataclass(frozen=True)
class WorldObject:
    """
    Immutable physical object.

    Attributes:
        form: brick, plank, ball, pyramid, box or table
        size: small or large
        color: free-form colour name
    """

    form: str
    size: str
    color: str

    def describe(self) -> str:
        return f"{self.size} {self.color} {self.form}"


@dataclass(frozen=True)
class WorldState:
    """
    One node of the planner's search graph.

    Attributes:
        stacks: One tuple of object keys per column, bottom-to-top
        arm: Column index the gripper hovers over
        holding: Key of the held object, or None
        objects: Object table (key -> WorldObject); not part of equality

    Equality and hashing cover stacks, arm and holding only, so states can
    be used directly as keys of the search's visited set.
    """

    stacks: Tuple[Tuple[str, ...], ...]
    arm: int = 0
    holding: Optional[str] = None
    objects: Mapping[str, WorldObject] = field(
        default_factory=dict, compare=False, hash=False, repr=False
    )

    def __post_init__(self):
        if not self.stacks:
            raise InvalidWorldStateError("World must have at least one column")

        if not 0 <= self.arm < len(self.stacks):
            raise InvalidWorldStateError(
                f"Arm position {self.arm} outside columns 0..{len(self.stacks) - 1}",
                context={"arm": self.arm, "columns": len(self.stacks)},
            )

        seen = set()
        placed = [key for stack in self.stacks for key in stack]
        if self.holding is not None:
            placed.append(self.holding)
        for key in placed:
            if key == FLOOR:
                raise InvalidWorldStateError("The floor cannot be placed in the world")
            if key in seen:
                raise InvalidWorldStateError(
                    f"Object '{key}' is placed more than once",
                    context={"object": key},
                )
            seen.add(key)

    @classmethod
    def create(
        cls,
        stacks: Iterable[Iterable[str]],
        objects: Optional[Mapping[str, WorldObject]] = None,
        arm: int = 0,
        holding: Optional[str] = None,
    ) -> "WorldState":
        """Build a state from plain lists (as produced by a world loader)."""
        return cls(
            stacks=tuple(tuple(stack) for stack in stacks),
            arm=arm,
            holding=holding,
            objects=dict(objects or {}),
        )

    def top_of(self, column: int) -> Optional[str]:
        """Key of the topmost object in ``column`` (None if empty)."""
        stack = self.stacks[column]
        return stack[-1] if stack else None

    def object_keys(self) -> List[str]:
        """Keys of all objects present in the world (stacked or held)."""
        keys = [key for stack in self.stacks for key in stack]
        if self.holding is not None:
            keys.append(self.holding)
        return keys

    def describe(self, key: str) -> str:
        """Human-readable description, e.g. 'the large white ball'."""
        if key == FLOOR:
            return "the floor"
        obj = self.objects.get(key)
        if obj is None:
            return key
        return f"the {obj.describe()}"

    def to_string(self) -> str:
        """Compact single-line rendering for logs."""
        columns = " | ".join(",".join(stack) or "-" for stack in self.stacks)
        return f"[{columns}] arm={self.arm} holding={self.holding}"


# ============================================================================
# Object Lookup
# ============================================================================


def get_form(state: WorldState, key: str) -> Optional[str]:
    """Form of ``key``; the synthetic floor has form 'floor'."""
    if key == FLOOR:
        return FORM_FLOOR
    obj = state.objects.get(key)
    return obj.form if obj else None


def get_size(state: WorldState, key: str) -> Optional[str]:
    obj = state.objects.get(key)
    return obj.size if obj else None


def stack_index_of(state: WorldState, key: str) -> Optional[int]:
    """Column containing ``key``, or None if held or absent."""
    for index, stack in enumerate(state.stacks):
        if key in stack:
            return index
    return None


def exists(state: WorldState, key: str) -> bool:
    """True if ``key`` is held or present in any stack."""
    return state.holding == key or stack_index_of(state, key) is not None


def _position(state: WorldState, key: str) -> Optional[Tuple[int, int]]:
    """(column, height) of ``key`` in the stacks."""
    for column, stack in enumerate(state.stacks):
        if key in stack:
            return column, stack.index(key)
    return None


# ============================================================================
# Spatial Predicates
# ============================================================================


def is_on_top(state: WorldState, below: str, above: str) -> bool:
    """
    ``above`` rests directly on ``below``.

    With ``below`` == floor, ``above`` must be the bottom object of a column.
    Nothing rests on top of a box (contents are inside it).
    """
    if above == FLOOR:
        return False

    if below == FLOOR:
        return any(stack and stack[0] == above for stack in state.stacks)

    if get_form(state, below) == FORM_BOX:
        return False

    return _directly_follows(state, below, above)


def is_inside(state: WorldState, container: str, item: str) -> bool:
    """``item`` rests directly in ``container``; nothing is inside a table."""
    if get_form(state, container) == FORM_TABLE:
        return False
    return _directly_follows(state, container, item)


def _directly_follows(state: WorldState, lower: str, upper: str) -> bool:
    for stack in state.stacks:
        for index in range(len(stack) - 1):
            if stack[index] == lower:
                return stack[index + 1] == upper
    return False


def is_above(state: WorldState, lower: str, upper: str) -> bool:
    """``upper`` is somewhere higher than ``lower`` in the same column."""
    if upper == FLOOR:
        return False

    if lower == FLOOR:
        return stack_index_of(state, upper) is not None

    lower_pos = _position(state, lower)
    upper_pos = _position(state, upper)
    if lower_pos is None or upper_pos is None:
        return False
    return lower_pos[0] == upper_pos[0] and upper_pos[1] > lower_pos[1]


def is_under(state: WorldState, lower: str, upper: str) -> bool:
    """``lower`` is somewhere below ``upper``; neither may be the floor."""
    if lower == FLOOR or upper == FLOOR:
        return False
    return is_above(state, lower, upper)


def _columns(state: WorldState, a: str, b: str) -> Optional[Tuple[int, int]]:
    column_a = stack_index_of(state, a)
    column_b = stack_index_of(state, b)
    if column_a is None or column_b is None:
        return None
    return column_a, column_b


def is_beside(state: WorldState, a: str, b: str) -> bool:
    """``a`` and ``b`` stand in adjacent columns."""
    columns = _columns(state, a, b)
    return columns is not None and abs(columns[0] - columns[1]) == 1


def is_left_of(state: WorldState, a: str, b: str) -> bool:
    """``a`` stands in a column left of ``b``'s (any distance)."""
    columns = _columns(state, a, b)
    return columns is not None and columns[0] < columns[1]


def is_right_of(state: WorldState, a: str, b: str) -> bool:
    """``a`` stands in a column right of ``b``'s (any distance)."""
    columns = _columns(state, a, b)
    return columns is not None and columns[0] > columns[1]


def relation_holds(state: WorldState, relation: str, args: Sequence[str]) -> bool:
    """
    Evaluate a relation as written in a goal literal.

    Argument order follows the literal: ontop(x, y) means x rests on y,
    under(x, y) means x is below y, holding(x) means x is in the gripper.

    Raises:
        ValueError: For an unknown relation name
    """
    if relation == RELATION_HOLDING:
        return state.holding is not None and state.holding == args[0]

    subject, location = args[0], args[1]

    if relation == RELATION_ONTOP:
        return is_on_top(state, below=location, above=subject)
    if relation == RELATION_INSIDE:
        return is_inside(state, container=location, item=subject)
    if relation == RELATION_ABOVE:
        return is_above(state, lower=location, upper=subject)
    if relation == RELATION_UNDER:
        return is_under(state, lower=subject, upper=location)
    if relation == RELATION_BESIDE:
        return is_beside(state, subject, location)
    if relation == RELATION_LEFTOF:
        return is_left_of(state, subject, location)
    if relation == RELATION_RIGHTOF:
        return is_right_of(state, subject, location)

    raise ValueError(f"Unknown relation '{relation}'")


# ============================================================================
# Physical Rules
# ============================================================================


def is_move_valid(state: WorldState, moving: str, relation: str, target: str) -> bool:
    """
    Physical rule table for placing ``moving`` in ``relation`` to ``target``.

    Rules are checked in order; the first match decides.
    """
    moving_form = get_form(state, moving)
    moving_size = get_size(state, moving)
    target_form = get_form(state, target)
    target_size = get_size(state, target)

    # Large objects do not fit in small boxes
    if (
        relation == RELATION_INSIDE
        and moving_size == SIZE_LARGE
        and target_size == SIZE_SMALL
        and target_form == FORM_BOX
    ):
        return False

    # Boxes, planks and pyramids only go in boxes that are larger than them
    if (
        relation in (RELATION_INSIDE, RELATION_ONTOP)
        and moving_form in (FORM_BOX, FORM_PLANK, FORM_PYRAMID)
        and target_form == FORM_BOX
        and (moving_size == SIZE_LARGE or target_size == SIZE_SMALL)
    ):
        return False

    # Boxes cannot be supported by bricks or pyramids
    if (
        relation in (RELATION_INSIDE, RELATION_ONTOP)
        and moving_form == FORM_BOX
        and target_form in (FORM_BRICK, FORM_PYRAMID)
    ):
        return False

    # Balls only rest on the floor
    if (
        relation == RELATION_ONTOP
        and moving_form == FORM_BALL
        and target_form != FORM_FLOOR
    ):
        return False

    if target == moving:
        return False

    return True


def can_drop_onto(state: WorldState, moving: str, column: int) -> bool:
    """``moving`` may be dropped on top of ``column`` (empty or physically valid)."""
    top = state.top_of(column)
    if top is None:
        return True
    return is_move_valid(state, moving, RELATION_ONTOP, top) or is_move_valid(
        state, moving, RELATION_INSIDE, top
    )


def build_object_table(raw: Mapping[str, Mapping[str, str]]) -> Dict[str, WorldObject]:
    """Convert a loader's {key: {form, size, color}} mapping into WorldObjects."""
    return {
        key: WorldObject(form=attrs["form"], size=attrs["size"], color=attrs["color"])
        for key, attrs in raw.items()
    }
