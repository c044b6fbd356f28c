"""
Domain models and value objects.

Contains the expansion value types (PowerExpansion, LogExpansion)
and the tolerance configuration they share.
"""

from powerexp.core.domain.log_expansion import LogExpansion
from powerexp.core.domain.power_expansion import (
    PowerExpansion,
    as_expansion,
    merge_terms,
)
from powerexp.core.domain.tolerance import (
    DEFAULT_TOLERANCE,
    ToleranceConfig,
    resolve_tolerance,
)

__all__ = [
    # Expansions
    "LogExpansion",
    "PowerExpansion",
    "as_expansion",
    "merge_terms",
    # Tolerance
    "DEFAULT_TOLERANCE",
    "ToleranceConfig",
    "resolve_tolerance",
]
