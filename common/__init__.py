"""
Common constants for the Shrdlite project.

This package provides the shared vocabulary (forms, sizes, relations,
commands) and the default search and heuristic settings used throughout the
goal resolver and the planner.
"""

from common.constants import *

__all__ = [
    # World Vocabulary
    "FLOOR",
    "ITSELF",
    "FORM_ANY",
    "FORM_BOX",
    "FORM_TABLE",
    # Relations
    "RELATION_HOLDING",
    "RELATION_ONTOP",
    "RELATION_INSIDE",
    "RELATION_ABOVE",
    "RELATION_UNDER",
    "RELATION_BESIDE",
    "RELATION_LEFTOF",
    "RELATION_RIGHTOF",
    "SPATIAL_RELATIONS",
    # Commands
    "POSSESSION_COMMANDS",
    "PLACEMENT_COMMANDS",
    # Search Limits
    "DEFAULT_MAX_EXPANSIONS",
    # Heuristic Weights
    "CLEARANCE_COST_PER_OBJECT",
    # Action Alphabet
    "ACTION_ALPHABET",
    "ALREADY_TRUE_NOTICE",
]
