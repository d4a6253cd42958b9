"""
Library-level constants for the pagination engine.

These values define SQL rewriting and cache key behavior and should NEVER be
changed via environment variables. For configurable values (dialect, cache
size, Redis connection, etc.), see sqlpager/settings.py.
"""

import sys

# ============================================================================
# Count Statement Derivation
# ============================================================================

# Marker mixed into the count statement fingerprint so it never collides with
# the fingerprint of the original statement
COUNT_KEY_SUFFIX = "_count"

# Suffix appended to a statement id to name its count form
COUNT_STATEMENT_ID_SUFFIX = "_COUNT"

# Result type of the count form (one integer per row)
COUNT_RESULT_TYPE = "int"

# Alias of the derived table wrapping the original query in COUNT(*)
COUNT_WRAP_ALIAS = "_count_wrap_"


# ============================================================================
# Row Bounds
# ============================================================================

# Offset/limit of the unbounded RowBounds.DEFAULT
NO_ROW_OFFSET = 0
NO_ROW_LIMIT = sys.maxsize


# ============================================================================
# Cache Keys
# ============================================================================

# Namespace prefix of count statement cache keys
STATEMENT_CACHE_KEY_PREFIX = "pagination:ms"

# Alias of the derived table wrapping a statement that is already bounded
PAGE_WRAP_ALIAS = "page_wrap"
