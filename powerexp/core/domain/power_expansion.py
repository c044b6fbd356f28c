"""
PowerExpansion — Двучленное степенное разложение A·ε^α + B·ε^β

Значение представляет два ведущих члена обобщённого степенного разложения
функции вблизи сингулярной точки по формальному малому параметру ε.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. α < β строго; нарушение → InvariantViolation при конструировании
2. Immutable: каждая операция возвращает новый экземпляр
3. Коэффициенты (A, B) продвигаются к общему виду, показатели (α, β) — тоже
4. Показатели всегда real (complex показатели отвергаются)

ФОРМЫ:
    Число z           ≡ PowerExpansion(z, 0, 0, ∞)
    Dual(v, d)        ≡ PowerExpansion(v, d, 0, 1)

ВЕТВИ ОПЕРАЦИЙ:
    Регулярная (A ≠ 0): разложение первого порядка относительно ведущего члена,
        для α = 0 совпадает с формулами Тейлора для x + y·ε^β.
    Сингулярная (A = 0; inv, **, sqrt): вторичный коэффициент B читается в слоте ведущего
        показателя α, результат — один член (второй показатель ∞).

СЛИЯНИЕ ЧЛЕНОВ (+, *):
    Члены сортируются по показателю (stable), γ = минимальный показатель,
    δ = первый показатель, не ≈ γ. Коэффициенты членов с показателем ≈ γ и ≈ δ
    суммируются; остальные члены отбрасываются (отслеживаются только два).
"""

import logging
import math
import numbers
from dataclasses import dataclass
from typing import Optional, Union

from powerexp.core.domain.log_expansion import LogExpansion
from powerexp.core.domain.tolerance import ToleranceConfig, resolve_tolerance
from powerexp.core.errors import (
    AmbiguousMerge,
    ExpansionDomainError,
    InvalidConversion,
    InvariantViolation,
    UnknownFunction,
)
from powerexp.core.math.dual import ANALYTIC_FUNCTIONS, Dual, apply_function
from powerexp.core.math.numerical_safeguards import (
    EPS_APPROX_REL,
    EPS_LOG_SINGULARITY,
    is_close,
    is_real_number,
    is_zero,
    promote_pair,
    safe_atanh,
    safe_log,
    safe_sqrt,
)

logger = logging.getLogger(__name__)

INF = math.inf


# =============================================================================
# POWER EXPANSION
# =============================================================================


@dataclass(frozen=True, eq=False)
class PowerExpansion:
    """
    Значение A·ε^α + B·ε^β с α < β.

    Examples:
        >>> z = PowerExpansion(1, 2, 0, 1)
        >>> z(0.5)
        2.0
        >>> str(PowerExpansion.from_number(5))
        '(5)ε^0.0 + (0)ε^inf'
    """

    A: numbers.Number
    B: numbers.Number
    alpha: numbers.Real
    beta: numbers.Real

    def __post_init__(self):
        A, B = promote_pair(self.A, self.B)

        if not (is_real_number(self.alpha) and is_real_number(self.beta)):
            raise TypeError(
                f"Exponents must be real, got α={self.alpha!r}, β={self.beta!r}"
            )
        alpha, beta = promote_pair(self.alpha, self.beta)

        # `not α < β` ловит и NaN
        if not alpha < beta:
            raise InvariantViolation(f"Must have α<β, got α={alpha!r}, β={beta!r}")

        object.__setattr__(self, "A", A)
        object.__setattr__(self, "B", B)
        object.__setattr__(self, "alpha", alpha)
        object.__setattr__(self, "beta", beta)

    # -------------------------------------------------------------------------
    # Конструкторы и конверсии
    # -------------------------------------------------------------------------

    @classmethod
    def from_number(cls, z: numbers.Number) -> "PowerExpansion":
        """Число z → z·ε^0 + 0·ε^∞ (второй член никогда не доминирует)."""
        return cls(z, 0, 0, INF)

    @classmethod
    def from_pair(cls, value: numbers.Number, derivative: numbers.Number) -> "PowerExpansion":
        """Пара (value, derivative) → value + derivative·ε."""
        return cls(value, derivative, 0, 1)

    @classmethod
    def from_dual(cls, d: Dual) -> "PowerExpansion":
        return cls.from_pair(d.value, d.derivative)

    @property
    def is_dual_compatible(self) -> bool:
        return self.alpha == 0 and self.beta == 1

    @property
    def is_constant(self) -> bool:
        """True для формы продвинутого числа: A·ε^0 + 0·ε^∞."""
        return self.B == 0 and self.alpha == 0 and self.beta == INF

    def to_dual(self) -> Dual:
        """
        Конверсия в Dual(A, B).

        Raises:
            InvalidConversion: Если (α, β) ≠ (0, 1)
        """
        if not self.is_dual_compatible:
            raise InvalidConversion(
                f"α, β must equal 0, 1 to convert to dual, got α={self.alpha}, β={self.beta}"
            )
        return Dual(self.A, self.B)

    def as_pair(self) -> tuple:
        """(value, derivative); те же ограничения, что и to_dual."""
        return tuple(self.to_dual())

    # -------------------------------------------------------------------------
    # Evaluation
    # -------------------------------------------------------------------------

    def __call__(self, eps: numbers.Number) -> numbers.Number:
        """A·ε^α + B·ε^β в конкретной точке ε (real или complex)."""
        return _term(self.A, eps, self.alpha) + _term(self.B, eps, self.beta)

    # -------------------------------------------------------------------------
    # Сложение / вычитание
    # -------------------------------------------------------------------------

    def __pos__(self) -> "PowerExpansion":
        return self

    def __neg__(self) -> "PowerExpansion":
        return PowerExpansion(-self.A, -self.B, self.alpha, self.beta)

    def __add__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return merge_terms(self.terms() + other.terms())

    __radd__ = __add__

    def __sub__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self + (-other)

    def __rsub__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return other + (-self)

    def terms(self) -> list:
        """[(A, α), (B, β)]"""
        return [(self.A, self.alpha), (self.B, self.beta)]

    # -------------------------------------------------------------------------
    # Умножение / обращение / деление
    # -------------------------------------------------------------------------

    def __mul__(self, other):
        if isinstance(other, numbers.Number):
            return self._scale(other)
        other = _coerce(other)
        if other is None:
            return NotImplemented
        if other.is_constant:
            return self._scale(other.A)
        if self.is_constant:
            return other._scale(self.A)
        return _multiply(self, other)

    __rmul__ = __mul__

    def _scale(self, c: numbers.Number) -> "PowerExpansion":
        return PowerExpansion(self.A * c, self.B * c, self.alpha, self.beta)

    def inv(self) -> "PowerExpansion":
        """
        Мультипликативное обращение.

        A ≠ 0: (1/A)·ε^(−α) − (B/A²)·ε^(β−2α)
        A = 0: (1/B)·ε^(−α), обращение меняет знак показателя

        Raises:
            ZeroDivisionError: Если A = B = 0
        """
        x, y, alpha = self.A, self.B, self.alpha

        if x != 0:
            return PowerExpansion(1 / x, -y / x**2, -alpha, self.beta - 2 * alpha)

        logger.debug("inv: singular branch for %s", self)
        return PowerExpansion(1 / y, 0, -alpha, INF)

    def __truediv__(self, other):
        if isinstance(other, numbers.Number):
            return self._scale(1 / other)
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self * other.inv()

    def __rtruediv__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return other * self.inv()

    # -------------------------------------------------------------------------
    # Степени и корни
    # -------------------------------------------------------------------------

    def __pow__(self, p):
        """
        z^p для real/complex p; целые p идут тем же путём.

        A ≠ 0: A^p·ε^(αp) + (p·B·A^(p−1))·ε^(β+α(p−1))
        A = 0: B^p·ε^(αp)
        """
        if not isinstance(p, numbers.Number):
            return NotImplemented

        x, y, alpha, beta = self.A, self.B, self.alpha, self.beta

        if x != 0:
            if alpha == 0:
                return PowerExpansion(x**p, p * y * x ** (p - 1), alpha, beta)
            return PowerExpansion(
                x**p, p * y * x ** (p - 1), alpha * p, beta + alpha * (p - 1)
            )

        logger.debug("pow: singular branch for %s ** %s", self, p)
        return PowerExpansion(y**p, 0, alpha * p if alpha != 0 else alpha, INF)

    def __rpow__(self, base):
        if not isinstance(base, numbers.Number):
            return NotImplemented
        return (self * safe_log(base)).exp()

    def sqrt(self) -> "PowerExpansion":
        """
        Квадратный корень.

        A ≠ 0: √A·ε^(α/2) + (B/(2√A))·ε^(β−α/2)
        A = 0: √B·ε^(α/2), показатель делится пополам
        """
        x, y, alpha = self.A, self.B, self.alpha

        if x != 0:
            s = safe_sqrt(x)
            return PowerExpansion(s, y / (2 * s), alpha / 2, self.beta - alpha / 2)

        logger.debug("sqrt: singular branch for %s", self)
        return PowerExpansion(safe_sqrt(y), 0, alpha / 2, INF)

    # -------------------------------------------------------------------------
    # Логарифмы
    # -------------------------------------------------------------------------

    def log(self) -> LogExpansion:
        """
        Логарифм: только вблизи нуля или бесконечности ведущего коэффициента.

        |A| ≤ tol    →  LogExpansion(β, log B)    (выживает член B·ε^β)
        α < 0        →  LogExpansion(α, log A)    (доминирует A·ε^α)
        |A| ≥ 1/tol  →  LogExpansion(−β, log B)   (сингулярность в ∞)

        Raises:
            ExpansionDomainError: Регулярная точка (логарифм не представим)

        Examples:
            >>> PowerExpansion.from_pair(0, 2).log() == LogExpansion(1, math.log(2))
            True
        """
        x, y = self.A, self.B
        tol = EPS_LOG_SINGULARITY

        if is_zero(x, tol):
            logger.debug("log: vanishing leading term for %s", self)
            return LogExpansion(self.beta, safe_log(y))
        elif self.alpha < 0:
            return LogExpansion(self.alpha, safe_log(x))
        elif abs(x) >= 1 / tol:
            logger.debug("log: singularity at infinity for %s", self)
            return LogExpansion(-self.beta, safe_log(y))

        raise ExpansionDomainError(f"Cannot eval log at {self}")

    def log1p(self) -> LogExpansion:
        return (self + 1).log()

    def atanh(self) -> Union[LogExpansion, numbers.Number]:
        """
        atanh: логарифмическая сингулярность при A ≈ ±1.

        A ≈ 1   →  LogExpansion(−g/2, log(2)/2 − log(−B)/2)
        A ≈ −1  →  LogExpansion(g/2, −log(2)/2 + log(B)/2)
        иначе   →  atanh(A) (регулярная точка, число)

        g = β − α — порядок поправки относительно ведущего члена.
        """
        x, y = self.A, self.B
        gap = self.beta - self.alpha

        if is_close(x, 1):
            return LogExpansion(-gap / 2, math.log(2) / 2 - safe_log(-y) / 2)
        elif is_close(x, -1):
            return LogExpansion(gap / 2, -math.log(2) / 2 + safe_log(y) / 2)
        return safe_atanh(x)

    # -------------------------------------------------------------------------
    # Аналитические функции через dual
    # -------------------------------------------------------------------------

    def apply(self, name: str) -> "PowerExpansion":
        """
        f(A + B·ε) через dual-пару, показатели (α, β) сохраняются.

        Точно только для α = 0, β = 1; для прочих форм — приближение.

        Raises:
            UnknownFunction: Если name не из ANALYTIC_FUNCTIONS
                (log и sqrt имеют собственные правила разложения)
        """
        if name not in ANALYTIC_FUNCTIONS:
            raise UnknownFunction(
                f"'{name}' is not evaluated through dual pairs. "
                f"Choose from: {list(ANALYTIC_FUNCTIONS)}"
            )
        fz = apply_function(name, (self.A, self.B))
        return PowerExpansion(fz.value, fz.derivative, self.alpha, self.beta)

    def exp(self) -> "PowerExpansion":
        return self.apply("exp")

    def sin(self) -> "PowerExpansion":
        return self.apply("sin")

    def cos(self) -> "PowerExpansion":
        return self.apply("cos")

    def tan(self) -> "PowerExpansion":
        return self.apply("tan")

    def sinh(self) -> "PowerExpansion":
        return self.apply("sinh")

    def cosh(self) -> "PowerExpansion":
        return self.apply("cosh")

    def tanh(self) -> "PowerExpansion":
        return self.apply("tanh")

    # -------------------------------------------------------------------------
    # Части
    # -------------------------------------------------------------------------

    @property
    def real(self) -> "PowerExpansion":
        return PowerExpansion(self.A.real, self.B.real, self.alpha, self.beta)

    @property
    def imag(self) -> "PowerExpansion":
        return PowerExpansion(self.A.imag, self.B.imag, self.alpha, self.beta)

    def conjugate(self) -> "PowerExpansion":
        return PowerExpansion(self.A.conjugate(), self.B.conjugate(), self.alpha, self.beta)

    conj = conjugate

    def __abs__(self):
        # Только ведущий коэффициент: вторичный член отбрасывается
        return abs(self.A)

    # -------------------------------------------------------------------------
    # Сравнения
    # -------------------------------------------------------------------------

    def __eq__(self, other):
        if isinstance(other, numbers.Number):
            other = PowerExpansion.from_number(other)
        if not isinstance(other, PowerExpansion):
            return NotImplemented
        return (
            self.A == other.A
            and self.B == other.B
            and self.alpha == other.alpha
            and self.beta == other.beta
        )

    def __hash__(self) -> int:
        # Согласовано с == для продвинутых чисел: hash(from_number(5)) == hash(5)
        if self.is_constant:
            return hash(self.A)
        return hash((self.A, self.B, self.alpha, self.beta))

    def isapprox(
        self,
        other,
        rel_tol: Optional[float] = None,
        abs_tol: Optional[float] = None,
        tolerance: Optional[ToleranceConfig] = None,
    ) -> bool:
        """
        Поэлементное ≈ по A, B, α, β.

        Args:
            other: PowerExpansion, Dual или число
            rel_tol: Относительная толерантность (перекрывает tolerance)
            abs_tol: Абсолютная толерантность (перекрывает tolerance)
            tolerance: ToleranceConfig (default: DEFAULT_TOLERANCE)

        Returns:
            True если все четыре поля близки

        Raises:
            TypeError: Если other не приводится к PowerExpansion
        """
        tol = resolve_tolerance(rel_tol, abs_tol, tolerance)
        other = as_expansion(other)
        return all(
            is_close(mine, theirs, tol.rel_tol, tol.abs_tol)
            for mine, theirs in (
                (self.A, other.A),
                (self.B, other.B),
                (self.alpha, other.alpha),
                (self.beta, other.beta),
            )
        )

    def __str__(self) -> str:
        return f"({self.A})ε^{self.alpha} + ({self.B})ε^{self.beta}"


# =============================================================================
# ПРОДВИЖЕНИЕ
# =============================================================================


def as_expansion(z) -> PowerExpansion:
    """
    Продвижение к PowerExpansion: PowerExpansion как есть, Dual → (v, d, 0, 1),
    число → (z, 0, 0, ∞).

    Raises:
        TypeError: Для прочих типов
    """
    coerced = _coerce(z)
    if coerced is None:
        raise TypeError(f"Cannot convert {type(z).__name__} to PowerExpansion: {z!r}")
    return coerced


def _coerce(z) -> Optional[PowerExpansion]:
    if isinstance(z, PowerExpansion):
        return z
    if isinstance(z, Dual):
        return PowerExpansion.from_dual(z)
    if isinstance(z, numbers.Number):
        return PowerExpansion.from_number(z)
    return None


def _term(coef: numbers.Number, eps: numbers.Number, exponent: numbers.Real) -> numbers.Number:
    # Нулевой коэффициент не вносит вклада: 0·ε^∞ не превращается в NaN
    if coef == 0:
        return coef
    return coef * eps**exponent


# =============================================================================
# СЛИЯНИЕ ЧЛЕНОВ
# =============================================================================


def merge_terms(terms: list, rel_tol: float = EPS_APPROX_REL) -> PowerExpansion:
    """
    Слияние членов (coef, exponent) в два ведущих.

    1. Stable sort по показателю
    2. γ = минимальный показатель; δ = первый показатель, не ≈ γ
    3. Каждый член попадает в первый подходящий bucket (γ, затем δ)
    4. Члены вне обоих bucket отбрасываются

    Args:
        terms: Список пар (coefficient, exponent)
        rel_tol: Относительная толерантность совпадения показателей

    Returns:
        PowerExpansion(tot1, tot2, γ, δ)

    Raises:
        AmbiguousMerge: Если все показатели ≈ γ (нет второго различного)

    Examples:
        >>> merge_terms([(1, 0), (1, 1), (1, 2), (1, 3)])
        PowerExpansion(A=1, B=1, alpha=0, beta=1)
    """
    ordered = sorted(terms, key=lambda term: term[1])
    gamma = ordered[0][1]

    rest = [exponent for _, exponent in ordered if not is_close(exponent, gamma, rel_tol)]
    if not rest:
        raise AmbiguousMerge(
            f"All exponents coincide at {gamma!r}: second term is undefined ({ordered})"
        )
    delta = rest[0]

    tot1, tot2 = 0, 0
    dropped = []
    for coef, exponent in ordered:
        if is_close(exponent, gamma, rel_tol):
            tot1 = tot1 + coef
        elif is_close(exponent, delta, rel_tol):
            tot2 = tot2 + coef
        else:
            dropped.append((coef, exponent))

    if dropped:
        logger.debug("merge: dropped higher-order terms %s", dropped)

    return PowerExpansion(tot1, tot2, gamma, delta)


def _multiply(x: PowerExpansion, y: PowerExpansion) -> PowerExpansion:
    """
    Произведение двух разложений: четыре перекрёстных члена с ветвлением
    по нулевым ведущим коэффициентам.
    """
    a, b, alpha, beta = x.A, x.B, x.alpha, x.beta
    c, d, gamma, delta = y.A, y.B, y.alpha, y.beta

    if a == 0 and c == 0:
        # Выживает только b·d; нулевой член остаётся в ведущем слоте
        return PowerExpansion(a * c, b * d, alpha + gamma, beta + delta)
    elif a == 0:
        cross = [(b * c, beta + gamma), (b * d, beta + delta)]
    elif c == 0:
        cross = [(a * d, alpha + delta), (b * d, beta + delta)]
    else:
        return merge_terms(
            [
                (a * c, alpha + gamma),
                (a * d, alpha + delta),
                (b * c, beta + gamma),
                (b * d, beta + delta),
            ]
        )

    # Член с показателем ∞ (одночленный множитель) не вносит вклада
    finite = [term for term in cross if term[1] != INF]
    if not finite:
        logger.debug("mul: product of %s and %s vanishes", x, y)
        return PowerExpansion(a * c, a * c, alpha + gamma, INF)
    if len(finite) == 1:
        finite.append((0, INF))
    return merge_terms(finite)
