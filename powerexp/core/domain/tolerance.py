"""
Tolerance — Конфигурация приближённых сравнений

Immutable Pydantic модель толерантностей для isapprox и слияния показателей.
Значения по умолчанию берутся из numerical_safeguards.
"""

from typing import Optional

from pydantic import BaseModel, Field

from powerexp.core.math.numerical_safeguards import EPS_APPROX_ABS, EPS_APPROX_REL


class ToleranceConfig(BaseModel):
    """
    Толерантности для ≈.

    rel_tol = abs_tol = 0 превращает ≈ в точное равенство.
    """

    rel_tol: float = Field(
        EPS_APPROX_REL, ge=0.0, allow_inf_nan=False, description="Относительная толерантность"
    )
    abs_tol: float = Field(
        EPS_APPROX_ABS, ge=0.0, allow_inf_nan=False, description="Абсолютная толерантность"
    )

    model_config = {"frozen": True}

    @classmethod
    def exact(cls) -> "ToleranceConfig":
        """Нулевые толерантности: ≈ совпадает с ==."""
        return cls(rel_tol=0.0, abs_tol=0.0)


DEFAULT_TOLERANCE = ToleranceConfig()


def resolve_tolerance(
    rel_tol: Optional[float] = None,
    abs_tol: Optional[float] = None,
    tolerance: Optional[ToleranceConfig] = None,
) -> ToleranceConfig:
    """
    Сборка эффективной конфигурации толерантностей.

    Явные rel_tol/abs_tol перекрывают соответствующие поля tolerance
    (или DEFAULT_TOLERANCE, если tolerance не передан).

    Raises:
        pydantic.ValidationError: Если итоговая толерантность отрицательна или NaN
    """
    base = tolerance if tolerance is not None else DEFAULT_TOLERANCE
    if rel_tol is None and abs_tol is None:
        return base
    return ToleranceConfig(
        rel_tol=base.rel_tol if rel_tol is None else rel_tol,
        abs_tol=base.abs_tol if abs_tol is None else abs_tol,
    )
