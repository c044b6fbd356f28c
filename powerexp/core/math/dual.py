"""
Dual — Пары (value, derivative) и аналитические функции на них

Dual(v, d) ≡ v + d·ε с ε² = 0: разложение Тейлора первого порядка.
Используется PowerExpansion для exp/sin/cos и других аналитических функций:
f(v + d·ε) = f(v) + d·f'(v)·ε.

Real аргументы вычисляются через math, complex и вне real-области — через cmath.
"""

import cmath
import math
import numbers
from dataclasses import dataclass
from typing import Callable

from powerexp.core.errors import UnknownFunction
from powerexp.core.math.numerical_safeguards import is_real_number, safe_log, safe_sqrt


# =============================================================================
# DUAL
# =============================================================================


@dataclass(frozen=True)
class Dual:
    """Пара (value, derivative). Immutable."""

    value: numbers.Number
    derivative: numbers.Number = 0

    def __iter__(self):
        yield self.value
        yield self.derivative

    def __neg__(self) -> "Dual":
        return Dual(-self.value, -self.derivative)

    def __add__(self, other):
        if isinstance(other, Dual):
            return Dual(self.value + other.value, self.derivative + other.derivative)
        if isinstance(other, numbers.Number):
            return Dual(self.value + other, self.derivative)
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other):
        if isinstance(other, (Dual, numbers.Number)):
            return self + (-other)
        return NotImplemented

    def __rsub__(self, other):
        if isinstance(other, numbers.Number):
            return Dual(other - self.value, -self.derivative)
        return NotImplemented

    def __mul__(self, other):
        if isinstance(other, Dual):
            return Dual(
                self.value * other.value,
                self.value * other.derivative + self.derivative * other.value,
            )
        if isinstance(other, numbers.Number):
            return Dual(self.value * other, self.derivative * other)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, Dual):
            a, b = self.value, other.value
            return Dual(
                a / b,
                (b * self.derivative - a * other.derivative) / (b * b),
            )
        if isinstance(other, numbers.Number):
            return Dual(self.value / other, self.derivative / other)
        return NotImplemented

    def __rtruediv__(self, other):
        if isinstance(other, numbers.Number):
            b = self.value
            return Dual(other / b, -other * self.derivative / (b * b))
        return NotImplemented

    def __pow__(self, p):
        if not isinstance(p, numbers.Number):
            return NotImplemented
        return Dual(self.value ** p, p * self.value ** (p - 1) * self.derivative)


# =============================================================================
# ТАБЛИЦА АНАЛИТИЧЕСКИХ ФУНКЦИЙ
# =============================================================================


def _pick(real_fn: Callable, complex_fn: Callable) -> Callable:
    """Выбор реализации по виду аргумента: math для real, cmath для complex."""

    def fn(x):
        if is_real_number(x):
            return real_fn(x)
        return complex_fn(x)

    return fn


_exp = _pick(math.exp, cmath.exp)
_sin = _pick(math.sin, cmath.sin)
_cos = _pick(math.cos, cmath.cos)
_tan = _pick(math.tan, cmath.tan)
_sinh = _pick(math.sinh, cmath.sinh)
_cosh = _pick(math.cosh, cmath.cosh)
_tanh = _pick(math.tanh, cmath.tanh)

# name → (f, f')
DUAL_FUNCTIONS: dict[str, tuple[Callable, Callable]] = {
    "exp": (_exp, _exp),
    "log": (safe_log, lambda x: 1 / x),
    "sqrt": (safe_sqrt, lambda x: 1 / (2 * safe_sqrt(x))),
    "sin": (_sin, _cos),
    "cos": (_cos, lambda x: -_sin(x)),
    "tan": (_tan, lambda x: 1 / _cos(x) ** 2),
    "sinh": (_sinh, _cosh),
    "cosh": (_cosh, _sinh),
    "tanh": (_tanh, lambda x: 1 - _tanh(x) ** 2),
}

# Функции, которые PowerExpansion.apply допускает через dual (log и sqrt: своя алгебра)
ANALYTIC_FUNCTIONS: tuple[str, ...] = ("exp", "sin", "cos", "tan", "sinh", "cosh", "tanh")


def apply_function(name: str, pair) -> Dual:
    """
    Вычисление именованной аналитической функции на паре (value, derivative).

    Args:
        name: Имя функции из DUAL_FUNCTIONS ('exp', 'sin', 'cos', ...)
        pair: Dual или любая пара (value, derivative)

    Returns:
        Dual(f(value), derivative · f'(value))

    Raises:
        UnknownFunction: Если функции нет в таблице

    Examples:
        >>> apply_function("exp", (0.0, 1.0))
        Dual(value=1.0, derivative=1.0)
    """
    try:
        f, df = DUAL_FUNCTIONS[name]
    except KeyError:
        raise UnknownFunction(
            f"Unknown analytic function '{name}'. Choose from: {sorted(DUAL_FUNCTIONS)}"
        ) from None

    value, derivative = pair
    return Dual(f(value), derivative * df(value))


def dual(value: numbers.Number, derivative: numbers.Number = 0) -> Dual:
    """Shortcut конструктора: dual(v, d) == Dual(v, d)."""
    return Dual(value, derivative)


def exp(d: Dual) -> Dual:
    return apply_function("exp", d)


def sin(d: Dual) -> Dual:
    return apply_function("sin", d)


def cos(d: Dual) -> Dual:
    return apply_function("cos", d)
