"""
Centralized constants for the Shrdlite blocks-world interpreter and planner.

This module provides a single source of truth for relation names, object
vocabulary, command groups, search limits and heuristic weights used across
the goal resolver and the planner.

Organization:
    - World Vocabulary: Forms, sizes and synthetic object keys
    - Relations: Spatial and possession relation names
    - Commands: Command groups understood by the goal resolver
    - Search Limits: Expansion budget for the A* search
    - Heuristic Weights: Cost estimates used by the planner heuristic
    - Cache Configuration: Policy for the heuristic memo cache
    - Action Alphabet: Primitive arm actions and user notices

Usage:
    from common.constants import FLOOR, RELATION_ONTOP, DEFAULT_MAX_EXPANSIONS

Note:
    These constants define default values. Search limits and heuristic
    weights can be overridden via shrdlite_config.get_config().
"""

# =============================================================================
# World Vocabulary
# =============================================================================

FLOOR: str = "floor"
"""
Synthetic object key for the floor.

The floor is never stored in a stack or in the object table. It only
appears as the location argument of a relation (e.g. ontop(a, floor)).
"""

ITSELF: str = "itself"
"""Implicit target of a command that names no object (the held object)."""

FORM_BRICK: str = "brick"
FORM_PLANK: str = "plank"
FORM_BALL: str = "ball"
FORM_PYRAMID: str = "pyramid"
FORM_BOX: str = "box"
FORM_TABLE: str = "table"
FORM_FLOOR: str = "floor"
FORM_ANY: str = "anyform"

SIZE_SMALL: str = "small"
SIZE_LARGE: str = "large"

# =============================================================================
# Relations
# =============================================================================

RELATION_HOLDING: str = "holding"
RELATION_ONTOP: str = "ontop"
RELATION_INSIDE: str = "inside"
RELATION_ABOVE: str = "above"
RELATION_UNDER: str = "under"
RELATION_BESIDE: str = "beside"
RELATION_LEFTOF: str = "leftof"
RELATION_RIGHTOF: str = "rightof"

STACKING_RELATIONS = frozenset(
    {RELATION_ONTOP, RELATION_INSIDE, RELATION_ABOVE, RELATION_UNDER}
)
"""Relations between two objects that share a column."""

SPATIAL_RELATIONS = STACKING_RELATIONS | frozenset(
    {RELATION_BESIDE, RELATION_LEFTOF, RELATION_RIGHTOF}
)
"""Relations a placement command may ask for."""

# =============================================================================
# Commands
# =============================================================================

POSSESSION_COMMANDS = frozenset({"take", "grasp", "pick up"})
"""Commands whose goal is holding(object)."""

PLACEMENT_COMMANDS = frozenset({"move", "put", "drop"})
"""Commands whose goal is a spatial relation to a location object."""

# =============================================================================
# Search Limits
# =============================================================================

DEFAULT_MAX_EXPANSIONS: int = 500
"""
Hard ceiling on node expansions for a single planning run.

Exceeding it terminates the search with PlanNotFoundError. This is a bounded
best-effort budget, not a completeness proof.
"""

ACTION_COST: int = 1
"""Cost of every primitive arm action."""

# =============================================================================
# Heuristic Weights
# =============================================================================

CLEARANCE_COST_PER_OBJECT: int = 3
"""
Estimated cost of removing one object stacked above the object to move.

Roughly: move there, pick, move aside, drop.
"""

HOLDING_FLOOR_ESTIMATE: int = 1
"""Estimate for a floor relation when the object is already held (one drop)."""

UNSATISFIED_NEGATION_ESTIMATE: int = 1
"""Estimate for a negative literal that does not hold yet."""

# =============================================================================
# Cache Configuration
# =============================================================================

HEURISTIC_CACHE_NAME: str = "planner_heuristics"
CACHE_MAXSIZE_HEURISTIC: int = 20000
CACHE_TTL_HEURISTIC: int = 600  # 10 minutes

# =============================================================================
# Action Alphabet
# =============================================================================

ACTION_LEFT: str = "l"
ACTION_RIGHT: str = "r"
ACTION_PICK: str = "p"
ACTION_DROP: str = "d"

ACTION_ALPHABET = frozenset({ACTION_LEFT, ACTION_RIGHT, ACTION_PICK, ACTION_DROP})

ALREADY_TRUE_NOTICE: str = "That is already true!"
"""Substituted for an empty plan when the goal already holds."""
