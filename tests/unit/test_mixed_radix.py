"""
Тесты для Mixed-Radix Arithmetic — State Vector spigot-разложения e

Проверяемые инварианты:
1. radix индекса k равен k + 1
2. scale_and_carry: carry идёт от индекса N к индексу 1, кандидат в [0, 9]
3. inject_terms: новые члены нормализуются вниз, overflow 0 или 1
4. digit_horizon / terms_for_horizon: точная граница точности вектора
5. check_normalized: 0 <= r[k] <= k
6. Детерминизм и мутация только переданного вектора
"""

import math
from fractions import Fraction

import pytest

from espigot.core.math import (
    INTEGER_PART,
    MAX_DIGIT,
    OUTPUT_RADIX,
    TAIL_GUARD,
    SpigotInvariantViolation,
    check_normalized,
    digit_horizon,
    inject_terms,
    radix_for,
    scale_and_carry,
    tail_capacity,
    terms_for_horizon,
)


def _value(remainders):
    """Точное значение дроби F = Σ r[k] / (k + 1)!."""
    return sum(
        Fraction(value, math.factorial(slot + 2)) for slot, value in enumerate(remainders)
    )


# =============================================================================
# ТЕСТЫ: Константы и radix
# =============================================================================


class TestConstants:
    """Константы ядра."""

    def test_output_radix_and_max_digit(self):
        assert OUTPUT_RADIX == 10
        assert MAX_DIGIT == 9

    def test_integer_part_of_e(self):
        assert INTEGER_PART == 2

    def test_tail_guard_covers_tail_bound(self):
        """Хвост Σ_{j>=N+2} 1/j! < 1.5/(N+2)! <= TAIL_GUARD/(N+2)!."""
        assert TAIL_GUARD >= 1.5


class TestRadixFor:
    """Тесты radix_for."""

    def test_radix_is_index_plus_one(self):
        assert radix_for(1) == 2
        assert radix_for(2) == 3
        assert radix_for(99) == 100

    def test_index_below_one_rejected(self):
        with pytest.raises(ValueError, match="index must be >= 1"):
            radix_for(0)


class TestTailCapacity:
    """Тесты tail_capacity."""

    def test_factorial_of_n_plus_two(self):
        assert tail_capacity(0) == 2
        assert tail_capacity(1) == 6
        assert tail_capacity(2) == 24
        assert tail_capacity(10) == math.factorial(12)

    def test_negative_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            tail_capacity(-1)


# =============================================================================
# ТЕСТЫ: Scale-and-carry
# =============================================================================


class TestScaleAndCarry:
    """Тесты scale_and_carry: умножение дроби на 10."""

    def test_classic_seeding_first_digit(self):
        """[1, 1] = 1/2 + 1/6 = 2/3 → цифра 6, остаток снова 2/3."""
        remainders = [1, 1]
        assert scale_and_carry(remainders) == 6
        assert remainders == [1, 1]

    def test_empty_vector_yields_zero(self):
        remainders = []
        assert scale_and_carry(remainders) == 0
        assert remainders == []

    def test_carry_equals_floor_of_scaled_value(self):
        """Кандидат = floor(10 * F), остаток = frac(10 * F)."""
        remainders = [1, 2, 3, 0, 5, 1, 7]
        before = _value(remainders)

        digit = scale_and_carry(remainders)

        assert digit == math.floor(before * 10)
        assert _value(remainders) == before * 10 - digit

    def test_result_stays_normalized(self):
        remainders = [1, 2, 3, 4, 5, 6, 7, 8]  # максимальные remainders
        for _ in range(20):
            digit = scale_and_carry(remainders)
            assert 0 <= digit <= MAX_DIGIT
            check_normalized(remainders)

    def test_maximal_vector_produces_nine(self):
        """F = 1 - 1/(N+1)! → 10F ≈ 9.99... → цифра 9."""
        remainders = [1, 2, 3, 4, 5, 6]
        assert scale_and_carry(remainders) == 9

    def test_custom_radix(self):
        """Radix 2 даёт двоичную цифру."""
        remainders = [1, 1]  # 2/3
        assert scale_and_carry(remainders, radix=2) == 1
        assert _value(remainders) == Fraction(1, 3)

    def test_deterministic(self):
        first = [1] * 30
        second = [1] * 30
        digits_first = [scale_and_carry(first) for _ in range(15)]
        digits_second = [scale_and_carry(second) for _ in range(15)]
        assert digits_first == digits_second
        assert first == second


# =============================================================================
# ТЕСТЫ: Inject terms
# =============================================================================


class TestInjectTerms:
    """Тесты inject_terms: рост вектора на пачку членов ряда."""

    def test_seeding_with_unit_amount(self):
        """До первой цифры масштаб 1 → все новые индексы равны 1."""
        remainders = []
        assert inject_terms(remainders, 5, 1) == 0
        assert remainders == [1, 1, 1, 1, 1]

    def test_overflow_into_last_digit(self):
        """F = 2/3, добавляем 10/4! = 5/12 → 13/12 → overflow 1, F = 1/12."""
        remainders = [1, 1]
        assert inject_terms(remainders, 1, 10) == 1
        assert remainders == [0, 0, 2]
        assert _value(remainders) == Fraction(1, 12)

    def test_no_overflow(self):
        remainders = [0, 0, 2]
        assert inject_terms(remainders, 1, 10) == 0
        assert remainders == [0, 1, 0, 0]
        assert _value(remainders) == Fraction(1, 12) + Fraction(10, 120)

    def test_batch_equals_one_by_one(self):
        """Пачка из двух членов == два последовательных добавления."""
        batch = [1, 1]
        single = [1, 1]

        overflow = inject_terms(batch, 2, 10)
        overflow_single = inject_terms(single, 1, 10) + inject_terms(single, 1, 10)

        assert batch == single == [0, 1, 0, 0]
        assert overflow == overflow_single == 1

    def test_adds_exact_term_values(self):
        """F' + overflow = F + Σ amount / j! по новым индексам."""
        remainders = [1, 0, 3, 2, 4, 1]
        before = _value(remainders)
        amount = 10 ** 5
        first = len(remainders) + 2
        terms = sum(Fraction(amount, math.factorial(j)) for j in range(first, first + 4))

        overflow = inject_terms(remainders, 4, amount)

        assert _value(remainders) + overflow == before + terms
        assert len(remainders) == 10
        check_normalized(remainders)

    def test_non_positive_arguments_rejected(self):
        with pytest.raises(ValueError, match="amount must be positive"):
            inject_terms([1, 1], 1, 0)
        with pytest.raises(ValueError, match="count must be positive"):
            inject_terms([1, 1], 0, 10)


# =============================================================================
# ТЕСТЫ: Горизонт точности
# =============================================================================


class TestDigitHorizon:
    """Тесты digit_horizon / terms_for_horizon."""

    @pytest.mark.parametrize("term_count", [0, 1, 2, 3, 4, 8, 25, 60, 200])
    def test_horizon_is_exact(self, term_count):
        """(N + 2)! > 2 * 10**h, но (N + 2)! <= 2 * 10**(h + 1)."""
        horizon = digit_horizon(term_count)
        capacity = tail_capacity(term_count)
        if horizon >= 0:
            assert capacity > TAIL_GUARD * 10 ** horizon
        assert capacity <= TAIL_GUARD * 10 ** (horizon + 1)

    def test_small_vectors(self):
        assert digit_horizon(0) == -1
        assert digit_horizon(1) == 0
        assert digit_horizon(2) == 1
        assert digit_horizon(4) == 2

    def test_horizon_non_decreasing(self):
        horizons = [digit_horizon(n) for n in range(100)]
        assert horizons == sorted(horizons)

    @pytest.mark.parametrize("horizon", [0, 1, 2, 6, 30, 100])
    def test_terms_for_horizon_is_minimal(self, horizon):
        term_count = terms_for_horizon(horizon)
        assert digit_horizon(term_count) >= horizon
        if term_count > 0:
            assert digit_horizon(term_count - 1) < horizon

    def test_start_is_respected(self):
        """Вектор не укорачивается, даже если короткого достаточно."""
        assert terms_for_horizon(1, start=10) == 10
        assert terms_for_horizon(6, start=5) == 8

    def test_negative_horizon_rejected(self):
        with pytest.raises(ValueError, match="horizon must be non-negative"):
            terms_for_horizon(-1)


# =============================================================================
# ТЕСТЫ: Check normalized
# =============================================================================


class TestCheckNormalized:
    """Тесты check_normalized."""

    def test_valid_vector_passes(self):
        check_normalized([])
        check_normalized([0, 0, 0])
        check_normalized([1, 2, 3, 4])

    def test_value_above_index_rejected(self):
        with pytest.raises(SpigotInvariantViolation, match="index 2"):
            check_normalized([1, 3, 0])

    def test_negative_value_rejected(self):
        with pytest.raises(SpigotInvariantViolation, match="index 1"):
            check_normalized([-1])
