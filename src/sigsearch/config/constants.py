"""Configuration constants.

Values here are NOT user-configurable. For configurable values, see
models.py (MatchConfig, SearchConfig).
"""

SEARCH_MAX_LIMIT = 1000
"""Maximum hits a single rank() call may return."""

MAX_TYPE_DEPTH_CEILING = 200
"""Upper bound for MatchConfig.max_type_depth; must stay below the interpreter recursion limit."""

SUBEQUAL_COST = 0.25
"""Score contribution of a Subequal judgment."""

EMPTY_SCORE = 1.0
"""Score of a comparison that produced no judgments at all."""
