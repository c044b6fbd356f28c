"""
Core math modules для power-expansions

Численные примитивы (толерантности, продвижение видов) и dual-пары.
"""

# Numerical Safeguards
from powerexp.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_APPROX_ABS,
    EPS_APPROX_REL,
    EPS_LOG_SINGULARITY,
    # Comparisons
    is_close,
    is_real_number,
    is_zero,
    # Promotion
    numeric_rank,
    promote_pair,
    # Safe elementary functions
    safe_atanh,
    safe_log,
    safe_sqrt,
)

# Dual pairs
from powerexp.core.math.dual import (
    ANALYTIC_FUNCTIONS,
    DUAL_FUNCTIONS,
    Dual,
    apply_function,
    dual,
)

__all__ = [
    # Numerical Safeguards — Epsilon constants
    "EPS_APPROX_ABS",
    "EPS_APPROX_REL",
    "EPS_LOG_SINGULARITY",
    # Numerical Safeguards — Comparisons
    "is_close",
    "is_real_number",
    "is_zero",
    # Numerical Safeguards — Promotion
    "numeric_rank",
    "promote_pair",
    # Numerical Safeguards — Safe elementary functions
    "safe_atanh",
    "safe_log",
    "safe_sqrt",
    # Dual
    "ANALYTIC_FUNCTIONS",
    "DUAL_FUNCTIONS",
    "Dual",
    "apply_function",
    "dual",
]
