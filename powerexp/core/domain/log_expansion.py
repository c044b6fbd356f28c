"""
LogExpansion — Логарифмическая сингулярность s·log(ε) + c

Результат log/atanh от PowerExpansion, когда ведущее поведение логарифмическое
и не представимо в виде A·ε^α.

Поля:
- exponent (s): коэффициент при log(ε), т.е. показатель исходного члена
- constant (c): логарифм ведущего коэффициента (плюс сдвиги от atanh)

Immutable: все операции возвращают новый экземпляр.
"""

import cmath
import math
import numbers
from dataclasses import dataclass
from typing import Optional

from powerexp.core.domain.tolerance import ToleranceConfig, resolve_tolerance
from powerexp.core.math.numerical_safeguards import is_close, is_real_number


@dataclass(frozen=True, eq=False)
class LogExpansion:
    """Значение s·log(ε) + c."""

    exponent: numbers.Number
    constant: numbers.Number

    # -------------------------------------------------------------------------
    # Evaluation
    # -------------------------------------------------------------------------

    def __call__(self, eps: numbers.Number) -> numbers.Number:
        return self.evaluate_at(eps)

    def evaluate_at(self, eps: numbers.Number) -> numbers.Number:
        """
        Вычисление s·log(ε) + c в конкретной точке ε.

        log(ε) берётся real при ε > 0, иначе главная ветвь complex log.
        При s == 0 логарифм не вычисляется (ε = 0 допустимо).

        Examples:
            >>> LogExpansion(2.0, 1.0).evaluate_at(1.0)
            1.0
        """
        if self.exponent == 0:
            return self.constant
        if is_real_number(eps) and eps > 0:
            log_eps = math.log(eps)
        else:
            log_eps = cmath.log(eps)
        return self.exponent * log_eps + self.constant

    def to_complex(self) -> complex:
        """Явная конверсия: значение при ε = 1, т.е. constant."""
        return complex(self.evaluate_at(1))

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def __neg__(self) -> "LogExpansion":
        return LogExpansion(-self.exponent, -self.constant)

    def __add__(self, other):
        if isinstance(other, LogExpansion):
            return LogExpansion(self.exponent + other.exponent, self.constant + other.constant)
        if isinstance(other, numbers.Number):
            return LogExpansion(self.exponent, self.constant + other)
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other):
        if isinstance(other, (LogExpansion, numbers.Number)):
            return self + (-other)
        return NotImplemented

    def __rsub__(self, other):
        if isinstance(other, numbers.Number):
            return (-self) + other
        return NotImplemented

    def __mul__(self, other):
        if isinstance(other, numbers.Number):
            return LogExpansion(self.exponent * other, self.constant * other)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, numbers.Number):
            return LogExpansion(self.exponent / other, self.constant / other)
        return NotImplemented

    @property
    def real(self) -> "LogExpansion":
        return LogExpansion(self.exponent.real, self.constant.real)

    @property
    def imag(self) -> "LogExpansion":
        return LogExpansion(self.exponent.imag, self.constant.imag)

    def conjugate(self) -> "LogExpansion":
        return LogExpansion(self.exponent.conjugate(), self.constant.conjugate())

    conj = conjugate

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    def __eq__(self, other):
        if isinstance(other, LogExpansion):
            return self.exponent == other.exponent and self.constant == other.constant
        return NotImplemented

    def __hash__(self) -> int:
        return hash((LogExpansion, self.exponent, self.constant))

    def isapprox(
        self,
        other: "LogExpansion",
        rel_tol: Optional[float] = None,
        abs_tol: Optional[float] = None,
        tolerance: Optional[ToleranceConfig] = None,
    ) -> bool:
        """
        Поэлементное ≈ по exponent и constant.

        Raises:
            TypeError: Если other не LogExpansion
        """
        if not isinstance(other, LogExpansion):
            raise TypeError(
                f"Cannot compare LogExpansion with {type(other).__name__}: {other!r}"
            )
        tol = resolve_tolerance(rel_tol, abs_tol, tolerance)
        return is_close(self.exponent, other.exponent, tol.rel_tol, tol.abs_tol) and is_close(
            self.constant, other.constant, tol.rel_tol, tol.abs_tol
        )

    def __str__(self) -> str:
        return f"({self.exponent})log(ε) + ({self.constant})"
