"""
Тесты элементарных функций PowerExpansion

Покрывает:
- sqrt и степени (регулярная и сингулярная ветви)
- log / log1p: сингулярность в нуле и в бесконечности, регулярная точка → ошибка
- atanh: логарифмические сингулярности при A ≈ ±1
- exp/sin/cos/... через dual-пару
- real/imag/conj, abs
"""

import math

import pytest

from powerexp.core.domain.log_expansion import LogExpansion
from powerexp.core.domain.power_expansion import PowerExpansion
from powerexp.core.errors import ExpansionDomainError, UnknownFunction


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def dual_like():
    """2 + ε: совместимо с dual-парой."""
    return PowerExpansion(2.0, 1.0, 0, 1)


@pytest.fixture
def complex_expansion():
    return PowerExpansion(1 + 2j, 3 - 4j, 0, 1)


# =============================================================================
# ТЕСТЫ: sqrt / pow
# =============================================================================


class TestSqrt:
    def test_regular(self):
        """√(4ε² + 8ε³) = 2ε + 2ε²"""
        assert PowerExpansion(4, 8, 2, 3).sqrt() == PowerExpansion(2.0, 2.0, 1.0, 2.0)

    def test_regular_dual_form(self, dual_like):
        result = dual_like.sqrt()
        assert result.A == pytest.approx(math.sqrt(2.0))
        assert result.B == pytest.approx(1 / (2 * math.sqrt(2.0)))
        assert (result.alpha, result.beta) == (0, 1)

    def test_singular_halves_exponent(self):
        """√(0 + 4ε²) = 2ε"""
        result = PowerExpansion(0, 4, 2, 3).sqrt()
        assert result.A == 2
        assert result.alpha == 1
        assert result.beta == math.inf

    def test_negative_leading_goes_complex(self):
        result = PowerExpansion(-4.0, 1.0, 0, 1).sqrt()
        assert result.A == 2j

    def test_matches_half_power(self):
        z = PowerExpansion(4, 2, 0, 1)
        assert z.sqrt().isapprox(z**0.5)


class TestPower:
    def test_integer_power_dual_form(self):
        """(2 + ε)³ = 8 + 12ε + ..."""
        assert PowerExpansion(2, 1, 0, 1) ** 3 == PowerExpansion(8, 12, 0, 1)

    def test_shifted_leading(self):
        """(2ε + ε²)² = 4ε² + 4ε³ + ..."""
        assert PowerExpansion(2, 1, 1, 2) ** 2 == PowerExpansion(4, 4, 2, 3)

    def test_singular(self):
        result = PowerExpansion(0, 3, 1, 2) ** 2
        assert result.A == 9
        assert result.alpha == 2
        assert result.beta == math.inf

    def test_agrees_with_repeated_multiplication(self):
        z = PowerExpansion(2, 1, 0, 1)
        assert (z**2).isapprox(z * z)

    def test_negative_power_agrees_with_inverse(self):
        z = PowerExpansion(2.0, 4.0, 0, 1)
        assert (z**-1).isapprox(z.inv())

    def test_number_base(self):
        """2^(0 + ε) = 1 + log(2)·ε"""
        result = 2 ** PowerExpansion(0.0, 1.0, 0, 1)
        assert result.A == pytest.approx(1.0)
        assert result.B == pytest.approx(math.log(2))

    def test_non_number_exponent(self):
        with pytest.raises(TypeError):
            PowerExpansion(2, 1, 0, 1) ** "2"


# =============================================================================
# ТЕСТЫ: log / log1p
# =============================================================================


class TestLog:
    def test_vanishing_leading_term(self):
        """log(0 + 2ε²) = 2·log(ε) + log(2)"""
        result = PowerExpansion(0, 2, 1, 2).log()
        assert isinstance(result, LogExpansion)
        assert result.exponent == 2
        assert result.constant == pytest.approx(math.log(2))

    def test_pair_form_keeps_log_eps(self):
        """log(0 + 2ε) = log(ε) + log(2), а не константа"""
        result = PowerExpansion.from_pair(0.0, 2.0).log()
        assert result == LogExpansion(1, math.log(2.0))
        assert result(1e-6) == pytest.approx(math.log(2e-6))

    def test_negative_leading_exponent(self):
        """log(5ε^−1 + 2) = −log(ε) + log(5): доминирует ведущий член"""
        z = PowerExpansion(5.0, 2.0, -1, 0)
        result = z.log()
        assert result.exponent == -1
        assert result.constant == pytest.approx(math.log(5))
        assert result(1e-8) == pytest.approx(math.log(z(1e-8)), rel=1e-6)

    def test_singularity_at_infinity(self):
        result = PowerExpansion(1e20, 3, 1, 2).log()
        assert result.exponent == -2
        assert result.constant == pytest.approx(math.log(3))

    def test_tiny_leading_counts_as_zero(self):
        result = PowerExpansion(1e-16, 2, 1, 2).log()
        assert result.exponent == 2

    def test_regular_point_rejected(self):
        with pytest.raises(ExpansionDomainError, match="Cannot eval log"):
            PowerExpansion(1, 2, 0, 1).log()

    def test_domain_error_is_value_error(self):
        with pytest.raises(ValueError):
            PowerExpansion(0.5, 2, 1, 2).log()

    def test_zero_secondary_rejected(self):
        with pytest.raises(ExpansionDomainError, match="zero"):
            PowerExpansion(0, 0, 1, 2).log()

    def test_negative_secondary_complex(self):
        result = PowerExpansion(0, -1.0, 1, 2).log()
        assert result.constant == pytest.approx(1j * math.pi)

    def test_log1p_shifts_by_one(self):
        """log1p(−1 + 2ε) = log(2ε)"""
        result = PowerExpansion(-1, 2, 0, 1).log1p()
        assert result.exponent == 1
        assert result.constant == pytest.approx(math.log(2))


# =============================================================================
# ТЕСТЫ: atanh
# =============================================================================


class TestAtanh:
    def test_near_plus_one(self):
        """atanh(1 − 2ε) = −½·log(ε) + 0"""
        result = PowerExpansion(1, -2.0, 0, 1).atanh()
        assert isinstance(result, LogExpansion)
        assert result.exponent == pytest.approx(-0.5)
        assert result.constant == pytest.approx(0.0, abs=1e-15)

    def test_near_minus_one(self):
        result = PowerExpansion(-1, 2.0, 0, 1).atanh()
        assert result.exponent == pytest.approx(0.5)
        assert result.constant == pytest.approx(0.0, abs=1e-15)

    def test_gap_scales_exponent(self):
        result = PowerExpansion(1, -2.0, 0, 2).atanh()
        assert result.exponent == pytest.approx(-1.0)

    def test_approximately_one(self):
        result = PowerExpansion(1 + 1e-12, -2.0, 0, 1).atanh()
        assert isinstance(result, LogExpansion)

    def test_regular_point_returns_number(self):
        assert PowerExpansion(0.5, 1.0, 0, 1).atanh() == pytest.approx(math.atanh(0.5))

    def test_evaluates_like_atanh_near_one(self):
        """Асимптотика совпадает с atanh(1 − 2ε) при малом ε"""
        eps = 1e-8
        result = PowerExpansion(1, -2.0, 0, 1).atanh()
        assert result(eps) == pytest.approx(math.atanh(1 - 2 * eps), rel=1e-6)


# =============================================================================
# ТЕСТЫ: аналитические функции
# =============================================================================


class TestAnalyticFunctions:
    def test_exp(self):
        assert PowerExpansion(0.0, 1.0, 0, 1).exp() == PowerExpansion(1.0, 1.0, 0, 1)

    def test_sin_cos(self, dual_like):
        s = dual_like.sin()
        c = dual_like.cos()
        assert s.A == pytest.approx(math.sin(2.0))
        assert s.B == pytest.approx(math.cos(2.0))
        assert c.A == pytest.approx(math.cos(2.0))
        assert c.B == pytest.approx(-math.sin(2.0))

    def test_hyperbolic(self):
        z = PowerExpansion(0.0, 1.0, 0, 1)
        assert z.sinh().isapprox(PowerExpansion(0.0, 1.0, 0, 1), abs_tol=1e-15)
        assert z.cosh().A == pytest.approx(1.0)
        assert z.tanh().B == pytest.approx(1.0)

    def test_tan(self):
        result = PowerExpansion(0.0, 2.0, 0, 1).tan()
        assert result.B == pytest.approx(2.0)

    def test_exponents_kept(self):
        result = PowerExpansion(0.0, 1.0, 0.5, 1.5).exp()
        assert (result.alpha, result.beta) == (0.5, 1.5)

    def test_complex_exp(self):
        result = PowerExpansion(1j * math.pi, 1.0, 0, 1).exp()
        assert result.A == pytest.approx(-1.0)

    def test_unknown_function(self):
        with pytest.raises(UnknownFunction):
            PowerExpansion(1.0, 1.0, 0, 1).apply("gamma")

    def test_log_not_applied_through_dual(self):
        """log и sqrt имеют собственные правила, apply их не принимает"""
        with pytest.raises(UnknownFunction, match="not evaluated through dual"):
            PowerExpansion(1.0, 1.0, 0, 1).apply("log")


# =============================================================================
# ТЕСТЫ: части и модуль
# =============================================================================


class TestParts:
    def test_real_imag(self, complex_expansion):
        assert complex_expansion.real == PowerExpansion(1.0, 3.0, 0, 1)
        assert complex_expansion.imag == PowerExpansion(2.0, -4.0, 0, 1)

    def test_conj(self, complex_expansion):
        assert complex_expansion.conj() == PowerExpansion(1 - 2j, 3 + 4j, 0, 1)
        assert complex_expansion.conjugate() == complex_expansion.conj()

    def test_real_of_real_expansion(self):
        z = PowerExpansion(1, 2, 0, 1)
        assert z.real == z
        assert z.imag == PowerExpansion(0, 0, 0, 1)

    def test_abs_leading_only(self):
        assert abs(PowerExpansion(-3, 4, 0, 1)) == 3
        assert abs(PowerExpansion(3 + 4j, 100, 0, 1)) == pytest.approx(5.0)
