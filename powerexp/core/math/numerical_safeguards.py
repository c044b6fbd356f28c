"""
Numerical Safeguards — Tolerance & Numeric-Kind Primitives

Модуль обеспечивает численные примитивы для арифметики разложений:
- Epsilon-параметры для приближённых сравнений (коэффициенты и показатели)
- Сравнения с толерантностью для real и complex значений
- Продвижение пары чисел к общему виду (int → float → complex)
- Безопасные log/sqrt/atanh: real math где возможно, иначе complex math

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. is_close(a, b, 0, 0) ⇔ a == b
2. is_close рефлексивна и симметрична
3. Продвижение детерминировано: вид результата зависит только от видов входов
4. Отрицательные/комплексные аргументы log/sqrt дают complex, а не исключение
"""

import cmath
import math
import numbers
import sys
from typing import Final

from powerexp.core.errors import ExpansionDomainError

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Относительная толерантность для ≈ по умолчанию: sqrt(machine epsilon)
# Используется в isapprox и при слиянии одинаковых показателей
EPS_APPROX_REL: Final[float] = math.sqrt(sys.float_info.epsilon)

# Абсолютная толерантность для ≈ по умолчанию
# Ноль: сравнение с нулём требует явного abs_tol от вызывающего
EPS_APPROX_ABS: Final[float] = 0.0

# Порог детекции сингулярности в log: |A| <= tol (ноль) или |A| >= 1/tol (∞)
EPS_LOG_SINGULARITY: Final[float] = 1e-14


# =============================================================================
# ПРОВЕРКИ
# =============================================================================


def is_close(
    a: numbers.Number,
    b: numbers.Number,
    rel_tol: float = EPS_APPROX_REL,
    abs_tol: float = EPS_APPROX_ABS,
) -> bool:
    """
    Сравнение чисел с учётом толерантности (real и complex).

    Алгоритм (как math.isclose):
        abs(a - b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)

    Бесконечности равны только самим себе: is_close(inf, inf) is True.

    Args:
        a: Первое значение
        b: Второе значение
        rel_tol: Относительная толерантность (default: sqrt(eps))
        abs_tol: Абсолютная толерантность (default: 0.0)

    Returns:
        True если значения близки с учётом толерантности

    Raises:
        ValueError: Если толерантность отрицательна

    Examples:
        >>> is_close(1.0, 1.0 + 1e-12)
        True
        >>> is_close(1.0, 1.1)
        False
        >>> is_close(0.0, 1e-20)
        False
        >>> is_close(float('inf'), float('inf'))
        True
    """
    if isinstance(a, numbers.Real) and isinstance(b, numbers.Real):
        return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)
    return cmath.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)


def is_zero(value: numbers.Number, tol: float = EPS_LOG_SINGULARITY) -> bool:
    """
    Проверка, близко ли значение к нулю (по модулю) с учётом толерантности.

    Returns:
        True если abs(value) <= tol
    """
    return abs(value) <= tol


# =============================================================================
# ПРОДВИЖЕНИЕ ВИДА ЧИСЕЛ
# =============================================================================


def numeric_rank(value: numbers.Number) -> int:
    """
    Ранг вида числа: 0 — integral, 1 — real, 2 — complex.

    Raises:
        TypeError: Если value не число
    """
    if isinstance(value, numbers.Integral):
        return 0
    if isinstance(value, numbers.Real):
        return 1
    if isinstance(value, numbers.Complex):
        return 2
    raise TypeError(f"Expected a number, got {type(value).__name__}: {value!r}")


def promote_pair(a: numbers.Number, b: numbers.Number) -> tuple:
    """
    Продвижение пары чисел к общему виду.

    Одинаковые типы возвращаются без изменений (Fraction, numpy scalars и т.д.).
    Иначе оба значения приводятся к более общему виду: int → float → complex.

    Examples:
        >>> promote_pair(1, 2)
        (1, 2)
        >>> promote_pair(1, 2.5)
        (1.0, 2.5)
        >>> promote_pair(1.0, 2j)
        ((1+0j), 2j)
    """
    rank = max(numeric_rank(a), numeric_rank(b))

    if type(a) is type(b):
        return (a, b)

    if rank == 2:
        return (complex(a), complex(b))
    if rank == 1:
        return (float(a), float(b))
    # Оба integral разных типов (bool, numpy int): нормализуем к int
    return (int(a), int(b))


def is_real_number(value: numbers.Number) -> bool:
    """True если value — real число (включая int)."""
    return isinstance(value, numbers.Real)


# =============================================================================
# БЕЗОПАСНЫЕ ЭЛЕМЕНТАРНЫЕ ФУНКЦИИ
# =============================================================================


def safe_log(value: numbers.Number) -> numbers.Number:
    """
    Натуральный логарифм: real для value > 0, иначе complex (главная ветвь).

    Raises:
        ExpansionDomainError: Если value == 0 (логарифм нуля не определён)

    Examples:
        >>> safe_log(1.0)
        0.0
        >>> safe_log(-1.0)
        3.141592653589793j
    """
    if value == 0:
        raise ExpansionDomainError(f"Logarithm of zero coefficient: {value!r}")

    if is_real_number(value) and value > 0:
        return math.log(value)
    return cmath.log(value)


def safe_sqrt(value: numbers.Number) -> numbers.Number:
    """
    Квадратный корень: real для value >= 0, иначе complex (главная ветвь).

    Examples:
        >>> safe_sqrt(4)
        2.0
        >>> safe_sqrt(-4.0)
        2j
    """
    if is_real_number(value) and value >= 0:
        return math.sqrt(value)
    return cmath.sqrt(value)


def safe_atanh(value: numbers.Number) -> numbers.Number:
    """
    Гиперболический арктангенс: real для |value| < 1, иначе complex.

    Raises:
        ValueError: Если value == ±1 (логарифмическая сингулярность)
    """
    if is_real_number(value) and abs(value) < 1:
        return math.atanh(value)
    return cmath.atanh(value)
