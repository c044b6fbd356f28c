"""
power-expansions: two-term asymptotic expansions A·ε^α + B·ε^β

Arithmetic and elementary functions on the leading two terms of a
generalized power series near a singular point, with a logarithmic
companion type for log(ε) behavior.
"""

from powerexp.core.domain import (
    LogExpansion,
    PowerExpansion,
    ToleranceConfig,
    as_expansion,
)
from powerexp.core.errors import (
    AmbiguousMerge,
    ExpansionDomainError,
    ExpansionError,
    InvalidConversion,
    InvariantViolation,
    UnknownFunction,
)
from powerexp.core.math import Dual, dual

__version__ = "0.1.0"

__all__ = [
    "AmbiguousMerge",
    "Dual",
    "ExpansionDomainError",
    "ExpansionError",
    "InvalidConversion",
    "InvariantViolation",
    "LogExpansion",
    "PowerExpansion",
    "ToleranceConfig",
    "UnknownFunction",
    "as_expansion",
    "dual",
]
