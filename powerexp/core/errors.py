"""
Errors — Иерархия исключений разложений

Все исключения наследуются от ExpansionError и от ближайшего builtin-типа,
чтобы вызывающий код мог ловить их как ValueError/ArithmeticError/KeyError.

Ни одна операция не выполняет retry или частичное восстановление:
ошибка немедленна и терминальна для вызова.
"""


class ExpansionError(Exception):
    """Базовое исключение для всех ошибок power/log разложений."""
    pass


class InvariantViolation(ExpansionError, ValueError):
    """
    Нарушение инварианта порядка показателей: α ≥ β.

    Возникает только при конструировании PowerExpansion.
    Вызывающий код обязан передать показатели в порядке α < β.
    """
    pass


class InvalidConversion(ExpansionError, ValueError):
    """
    Недопустимая конверсия PowerExpansion → (value, derivative).

    Конверсия определена только при α = 0, β = 1.
    """
    pass


class ExpansionDomainError(ExpansionError, ValueError):
    """
    Аргумент вне области определения операции.

    Пример: log в регулярной точке (ведущий коэффициент не близок ни к 0, ни к ∞)
    не представим ни как PowerExpansion, ни как LogExpansion.
    """
    pass


class AmbiguousMerge(ExpansionError, ArithmeticError):
    """
    Все показатели при слиянии членов совпадают (в пределах толерантности).

    Второй член разложения не определён: нет второго различного показателя.
    """
    pass


class UnknownFunction(ExpansionError, KeyError):
    """Аналитическая функция отсутствует в таблице dual-функций."""
    pass
