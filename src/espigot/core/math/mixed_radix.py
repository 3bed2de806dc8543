"""
Mixed-Radix Arithmetic — State Vector для spigot-разложения e

Модуль реализует арифметику над state vector в смешанной системе счисления:
- Индексы 1..N, индекс k имеет radix (k + 1)
- Представляемая дробь: F = Σ r[k] / (k + 1)!
- Умножение дроби на output radix (10) с переносом от старших индексов к младшим
- Добавление новых членов ряда с нормализацией вниз до индекса 1

Хранение: обычный Python list, слот i соответствует индексу k = i + 1
(radix = i + 2). Вектор принадлежит одному движку, shared state нет.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. После нормализации 0 <= r[k] <= k для всех k, поэтому F < 1
2. Carry внутри одного прохода идёт строго от индекса N к индексу 1
3. Carry из индекса 1 при scale_and_carry всегда в [0, 9]
4. Overflow из индекса 1 при inject_terms всегда 0 или 1 (при соблюдении
   политики роста, см. digit_horizon)

ФОРМУЛЫ:
    e = 2 + Σ_{k>=1} 1 / (k + 1)!
    F = r[1]/2! + r[2]/3! + ... + r[N]/(N + 1)!
    max F = Σ k/(k + 1)! = 1 - 1/(N + 1)! < 1
    tail(N) = Σ_{j>=N+2} 1/j! < 1.5 / (N + 2)!
    horizon(N) = max h: (N + 2)! > TAIL_GUARD * 10**h

РАЗМЕР ЧИСЕЛ:
    Хранимое состояние — только малые целые: r[k] <= k, промежуточные
    значения scale_and_carry < 11 * (N + 1), horizon — счётчик цифр.
    Большие целые (10**t, (N + 2)!) появляются лишь транзитно внутри
    inject_terms / digit_horizon / terms_for_horizon, т.е. только в моменты
    роста вектора.
"""

import math
from typing import Final, List, Sequence

from espigot.core.math.errors import SpigotInvariantViolation

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Основание выходной системы счисления
OUTPUT_RADIX: Final[int] = 10

# Максимальная цифра в OUTPUT_RADIX (цифра, образующая 9-run)
MAX_DIGIT: Final[int] = OUTPUT_RADIX - 1

# Целая часть e: выдаётся первой и никогда не пересматривается
INTEGER_PART: Final[int] = 2

# Запас для оценки хвоста ряда: tail(N) < 1.5 / (N + 2)! <= TAIL_GUARD / (N + 2)!
TAIL_GUARD: Final[int] = 2


# =============================================================================
# RADIX HELPERS
# =============================================================================


def radix_for(index: int) -> int:
    """
    Radix для 1-based индекса state vector.

    Args:
        index: Индекс k (>= 1)

    Returns:
        k + 1

    Examples:
        >>> radix_for(1)
        2
        >>> radix_for(9)
        10
    """
    if index < 1:
        raise ValueError(f"index must be >= 1, got {index}")
    return index + 1


def tail_capacity(term_count: int) -> int:
    """
    Знаменатель, ограничивающий отброшенный хвост ряда: (N + 2)!.

    Хвост после N членов меньше TAIL_GUARD / (N + 2)!, поэтому вектор
    длины N достаточен для цифры с масштабом 10**t, пока
    (N + 2)! > TAIL_GUARD * 10**t.

    Args:
        term_count: Текущая длина вектора N (>= 0)

    Returns:
        (N + 2)!
    """
    if term_count < 0:
        raise ValueError(f"term_count must be non-negative, got {term_count}")
    return math.factorial(term_count + 2)


def digit_horizon(term_count: int) -> int:
    """
    Сколько дробных цифр обеспечивает вектор длины N.

    Наибольшее h, для которого (N + 2)! > TAIL_GUARD * 10**h. Пока число
    произведённых цифр не превышает h, отброшенный хвост в масштабе 10**t
    меньше половины единицы последней цифры.

    Оценка через lgamma уточняется точным сравнением, поэтому результат
    не зависит от погрешности float.

    Args:
        term_count: Длина вектора N (>= 0)

    Returns:
        h (-1 для пустого вектора: не хватает даже на первую цифру)

    Examples:
        >>> digit_horizon(2)  # 4! = 24 > 2 * 10
        1
        >>> digit_horizon(4)  # 6! = 720 > 2 * 100
        2
    """
    capacity = tail_capacity(term_count)
    estimate = (math.lgamma(term_count + 3) - math.log(TAIL_GUARD)) / math.log(OUTPUT_RADIX)
    horizon = max(int(estimate), 0)
    while horizon >= 0 and capacity <= TAIL_GUARD * OUTPUT_RADIX ** horizon:
        horizon -= 1
    while capacity > TAIL_GUARD * OUTPUT_RADIX ** (horizon + 1):
        horizon += 1
    return horizon


def terms_for_horizon(horizon: int, start: int = 0) -> int:
    """
    Минимальная длина вектора N >= start, для которой digit_horizon(N) >= horizon.

    Args:
        horizon: Требуемое число дробных цифр (>= 0)
        start: Текущая длина вектора (вектор не укорачивается)

    Returns:
        N

    Examples:
        >>> terms_for_horizon(1)
        2
        >>> terms_for_horizon(6)
        8
    """
    if horizon < 0:
        raise ValueError(f"horizon must be non-negative, got {horizon}")

    bound = TAIL_GUARD * OUTPUT_RADIX ** horizon
    term_count = start
    capacity = tail_capacity(start)
    while capacity <= bound:
        term_count += 1
        capacity *= term_count + 2
    return term_count


# =============================================================================
# PHASE 1: SCALE-AND-CARRY
# =============================================================================


def scale_and_carry(remainders: List[int], radix: int = OUTPUT_RADIX) -> int:
    """
    Умножение дроби F на radix с переносом от индекса N к индексу 1.

    Для k = N, N-1, ..., 1:
        carry, r[k] = divmod(r[k] * radix + carry, k + 1)

    Вектор мутируется на месте. Все промежуточные значения малые:
    r[k] * radix + carry <= k * radix + radix.

    Args:
        remainders: State vector (мутируется)
        radix: Основание выходной системы (default: OUTPUT_RADIX)

    Returns:
        Carry из индекса 1 — кандидат в следующую цифру, floor(radix * F)

    Examples:
        >>> r = [1, 1]  # F = 1/2 + 1/6
        >>> scale_and_carry(r)
        6
        >>> r
        [1, 1]
    """
    carry = 0
    for slot in range(len(remainders) - 1, -1, -1):
        carry, remainders[slot] = divmod(remainders[slot] * radix + carry, slot + 2)
    return carry


# =============================================================================
# GROWTH: INJECT NEXT TERMS
# =============================================================================


def inject_terms(remainders: List[int], count: int, amount: int) -> int:
    """
    Добавление count следующих членов ряда 1/(N + 2)!, 1/(N + 3)!, ... в масштабе amount.

    Каждый новый индекс получает amount (до первой цифры amount == 1,
    что даёт классический seeding "все единицы"), значения нормализуются
    вниз по схеме Горнера:
        carry, r[k] = divmod(r[k] + carry [+ amount для нового k], k + 1)

    Ниже старого верхнего индекса нормализация останавливается, как только
    carry обнулился. Overflow из индекса 1 означает +1 к последней
    произведённой цифре.

    Args:
        remainders: State vector (мутируется, длина растёт на count)
        count: Число новых индексов (>= 1)
        amount: Текущий масштаб вывода 10**t (>= 1)

    Returns:
        Overflow из индекса 1 (carry в последнюю произведённую цифру)

    Examples:
        >>> r = [1, 1]
        >>> inject_terms(r, 1, 10)  # 10/4! при F = 2/3 → overflow
        1
        >>> r
        [0, 0, 2]
    """
    if count < 1:
        raise ValueError(f"count must be positive, got {count}")
    if amount < 1:
        raise ValueError(f"amount must be positive, got {amount}")

    first_new = len(remainders)
    remainders.extend([0] * count)
    carry = 0
    for slot in range(len(remainders) - 1, -1, -1):
        if slot >= first_new:
            carry += amount
        elif carry == 0:
            break
        carry, remainders[slot] = divmod(remainders[slot] + carry, slot + 2)
    return carry


# =============================================================================
# INVARIANT CHECK
# =============================================================================


def check_normalized(remainders: Sequence[int]) -> None:
    """
    Проверка инварианта 0 <= r[k] <= k по всему вектору.

    Args:
        remainders: State vector

    Raises:
        SpigotInvariantViolation: Если хотя бы один remainder вне диапазона
    """
    for slot, value in enumerate(remainders):
        index = slot + 1
        if not 0 <= value <= index:
            raise SpigotInvariantViolation(
                f"remainder at index {index} out of range [0, {index}]: {value}"
            )
