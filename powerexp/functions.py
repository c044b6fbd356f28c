"""
Functions — Функциональный API элементарных функций

Единая точка вызова для PowerExpansion, LogExpansion, Dual и обычных чисел:
    log(z), sqrt(z), exp(z), ...

PowerExpansion делегирует своим методам, Dual — таблице dual-функций,
числа — math/cmath (real где возможно, иначе complex).
"""

import cmath
import math
import numbers
from typing import Optional

from powerexp.core.domain.log_expansion import LogExpansion
from powerexp.core.domain.power_expansion import PowerExpansion, as_expansion
from powerexp.core.domain.tolerance import ToleranceConfig, resolve_tolerance
from powerexp.core.math.dual import Dual, apply_function
from powerexp.core.math.numerical_safeguards import (
    is_close,
    is_real_number,
    safe_atanh,
    safe_log,
    safe_sqrt,
)


# =============================================================================
# ДОСТУП К ПОЛЯМ
# =============================================================================


def apart(z: PowerExpansion) -> numbers.Number:
    return z.A


def bpart(z: PowerExpansion) -> numbers.Number:
    return z.B


def alpha(z: PowerExpansion) -> numbers.Real:
    return z.alpha


def beta(z: PowerExpansion) -> numbers.Real:
    return z.beta


# =============================================================================
# ЛОГАРИФМЫ И КОРНИ
# =============================================================================


def log(z):
    """log: PowerExpansion → LogExpansion; Dual → Dual; число → число."""
    if isinstance(z, PowerExpansion):
        return z.log()
    if isinstance(z, Dual):
        return apply_function("log", z)
    return safe_log(z)


def log1p(z):
    if isinstance(z, PowerExpansion):
        return z.log1p()
    if isinstance(z, Dual):
        return apply_function("log", z + 1)
    if is_real_number(z) and z > -1:
        return math.log1p(z)
    return safe_log(1 + z)


def atanh(z):
    if isinstance(z, PowerExpansion):
        return z.atanh()
    return safe_atanh(z)


def sqrt(z):
    if isinstance(z, PowerExpansion):
        return z.sqrt()
    if isinstance(z, Dual):
        return apply_function("sqrt", z)
    return safe_sqrt(z)


def inv(z):
    if isinstance(z, PowerExpansion):
        return z.inv()
    return 1 / z


# =============================================================================
# АНАЛИТИЧЕСКИЕ ФУНКЦИИ
# =============================================================================


def _analytic(name: str, real_fn, complex_fn):
    def fn(z):
        if isinstance(z, PowerExpansion):
            return z.apply(name)
        if isinstance(z, Dual):
            return apply_function(name, z)
        if is_real_number(z):
            return real_fn(z)
        return complex_fn(z)

    fn.__name__ = name
    fn.__qualname__ = name
    fn.__doc__ = f"{name}(z) для PowerExpansion, Dual и чисел."
    return fn


exp = _analytic("exp", math.exp, cmath.exp)
sin = _analytic("sin", math.sin, cmath.sin)
cos = _analytic("cos", math.cos, cmath.cos)
tan = _analytic("tan", math.tan, cmath.tan)
sinh = _analytic("sinh", math.sinh, cmath.sinh)
cosh = _analytic("cosh", math.cosh, cmath.cosh)
tanh = _analytic("tanh", math.tanh, cmath.tanh)


# =============================================================================
# ЧАСТИ
# =============================================================================


def real(z):
    return z.real


def imag(z):
    return z.imag


def conj(z):
    return z.conjugate()


# =============================================================================
# ПРИБЛИЖЁННОЕ РАВЕНСТВО
# =============================================================================


def isapprox(
    x,
    y,
    rel_tol: Optional[float] = None,
    abs_tol: Optional[float] = None,
    tolerance: Optional[ToleranceConfig] = None,
) -> bool:
    """
    x ≈ y для PowerExpansion, LogExpansion и чисел.

    Число в паре с PowerExpansion продвигается через as_expansion.

    Examples:
        >>> isapprox(PowerExpansion(1, 2, 0, 1), PowerExpansion(1 + 1e-12, 2, 0, 1))
        True
    """
    if isinstance(x, LogExpansion) or isinstance(y, LogExpansion):
        if not (isinstance(x, LogExpansion) and isinstance(y, LogExpansion)):
            return False
        return x.isapprox(y, rel_tol=rel_tol, abs_tol=abs_tol, tolerance=tolerance)

    if isinstance(x, (PowerExpansion, Dual)) or isinstance(y, (PowerExpansion, Dual)):
        return as_expansion(x).isapprox(y, rel_tol=rel_tol, abs_tol=abs_tol, tolerance=tolerance)

    tol = resolve_tolerance(rel_tol, abs_tol, tolerance)
    return is_close(x, y, tol.rel_tol, tol.abs_tol)
