"""DigitEngine — неограниченный spigot-поток десятичных цифр e.

Движок держит state vector в смешанной системе счисления и по запросу
выдаёт следующую цифру e = 2.71828...:
- Seeding: первая цифра "2" коммитится сразу, вектор до первой цифры
  заполняется единицами (Rabinowitz/Wagon)
- Шаг: рост вектора (при нехватке точности) → scale-and-carry → commit-or-defer
- Рост вектора добавляет пачку членов ряда в текущем масштабе 10**t;
  overflow из индекса 1 уходит в буфер отложенных 9-run цифр
- Пачка покрывает growth_factor * (t + 1) цифр вперёд, поэтому число
  событий роста логарифмическое по числу цифр
"""

import math
from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterator, List, Optional, Tuple
import logging

from espigot.core.domain.engine_snapshot import EngineSnapshot, EngineStatus
from espigot.core.math.errors import SpigotResourceExhausted
from espigot.core.math.mixed_radix import (
    INTEGER_PART,
    OUTPUT_RADIX,
    check_normalized,
    digit_horizon,
    inject_terms,
    scale_and_carry,
    terms_for_horizon,
)
from espigot.core.math.pending_digits import PendingDigits

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpigotConfig:
    """Конфигурация DigitEngine.

    - max_terms: потолок длины state vector (None — без ограничения)
    - max_passes: потолок числа scale-and-carry проходов (None — без ограничения)
    - growth_factor: при нехватке точности для цифры t + 1 вектор растёт
      до запаса на ceil(growth_factor * (t + 1)) цифр; 1.0 — минимальный рост
    - check_invariants: проверять 0 <= r[k] <= k после каждого прохода
    """
    max_terms: Optional[int] = None
    max_passes: Optional[int] = None
    growth_factor: float = 2.0
    check_invariants: bool = False

    def __post_init__(self):
        if self.max_terms is not None and self.max_terms < 1:
            raise ValueError(f"max_terms must be positive, got {self.max_terms}")
        if self.max_passes is not None and self.max_passes < 1:
            raise ValueError(f"max_passes must be positive, got {self.max_passes}")
        if self.growth_factor < 1.0:
            raise ValueError(f"growth_factor must be >= 1.0, got {self.growth_factor}")


class DigitEngine:
    """Spigot-движок для цифр e.

    Инварианты:
    - 0 <= r[k] <= k после каждого прохода
    - длина вектора только растёт
    - выпущенная цифра никогда не пересматривается
    - после SpigotResourceExhausted состояние не меняется, дальнейшие
      шаги снова поднимают SpigotResourceExhausted

    Example:
        >>> engine = DigitEngine()
        >>> engine.take(11)
        [2, 7, 1, 8, 2, 8, 1, 8, 2, 8, 4]
    """

    def __init__(self, config: Optional[SpigotConfig] = None):
        """
        Args:
            config: лимиты и проверки (default: SpigotConfig())
        """
        self.config = config or SpigotConfig()

        self._remainders: List[int] = []
        # сколько дробных цифр обеспечивает текущий вектор
        self._horizon = digit_horizon(0)
        self._pending = PendingDigits()
        self._ready: Deque[int] = deque([INTEGER_PART])
        self._passes = 0
        self._emitted = 0
        self._exhausted = False
        self._exhaust_reason = ""

    # ------------------------------------------------------------------
    # Pull interface
    # ------------------------------------------------------------------

    def next_digit(self) -> int:
        """Следующая закоммиченная цифра (первый вызов → 2).

        Raises:
            SpigotResourceExhausted: вектор не может расти / исчерпан max_passes
        """
        while not self._ready:
            self.advance()
        self._emitted += 1
        return self._ready.popleft()

    def take(self, count: int) -> List[int]:
        """Следующие count цифр."""
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        return [self.next_digit() for _ in range(count)]

    def __iter__(self) -> Iterator[int]:
        return self

    def __next__(self) -> int:
        return self.next_digit()

    # ------------------------------------------------------------------
    # Digit step
    # ------------------------------------------------------------------

    def advance(self) -> None:
        """Один шаг производства цифры.

        1. Рост вектора, если digit_horizon(N) < t + 1
        2. scale_and_carry: F → 10 * F, carry из индекса 1 — кандидат
        3. commit-or-defer кандидата через буфер 9-run

        Raises:
            SpigotResourceExhausted: лимит достигнут сейчас или раньше
        """
        if self._exhausted:
            raise SpigotResourceExhausted(self._exhaust_reason)

        max_passes = self.config.max_passes
        if max_passes is not None and self._passes >= max_passes:
            self._exhaust(f"pass ceiling reached: max_passes={max_passes}")

        if self._passes + 1 > self._horizon:
            self._grow(self._passes + 1)

        digit = scale_and_carry(self._remainders, OUTPUT_RADIX)
        self._passes += 1
        self._ready.extend(self._pending.push(digit))

        if self.config.check_invariants:
            check_normalized(self._remainders)

    def _grow(self, needed: int) -> None:
        """Добавление членов ряда в текущем масштабе 10**t и разрешение carry.

        Новый вектор строится на копии и подменяет старый только после
        успешной нормализации: при отказе состояние остаётся прежним.
        """
        current = len(self._remainders)
        target = max(needed, math.ceil(needed * self.config.growth_factor))
        next_count = terms_for_horizon(target, start=current)

        max_terms = self.config.max_terms
        if max_terms is not None and next_count > max_terms:
            if terms_for_horizon(needed, start=current) > max_terms:
                self._exhaust(
                    f"state vector cannot grow past max_terms={max_terms} "
                    f"(digits_emitted={self._emitted}, passes={self._passes})"
                )
            next_count = max_terms

        try:
            grown = list(self._remainders)
            overflow = inject_terms(grown, next_count - current, OUTPUT_RADIX ** self._passes)
        except MemoryError as exc:
            self._exhausted = True
            self._exhaust_reason = f"state vector allocation failed at {next_count} terms"
            logger.error("State vector allocation failed at %d terms", next_count)
            raise SpigotResourceExhausted(self._exhaust_reason) from exc

        self._remainders = grown
        self._horizon = digit_horizon(next_count)

        released = self._pending.apply_carry(overflow)
        if released:
            logger.debug("Carry resolved pending run: %s", released)
            self._ready.extend(released)

        logger.debug(
            "State vector grown to %d terms at pass %d (horizon %d)",
            next_count, self._passes, self._horizon,
        )

    def _exhaust(self, reason: str) -> None:
        self._exhausted = True
        self._exhaust_reason = reason
        logger.error("Resource exhausted: %s", reason)
        raise SpigotResourceExhausted(reason)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def verify(self) -> None:
        """Проверка инварианта 0 <= r[k] <= k по всему вектору."""
        check_normalized(self._remainders)

    def snapshot(self, window: int = 16) -> EngineSnapshot:
        """Снапшот счётчиков, буферов и верхних window индексов вектора."""
        if window < 1:
            raise ValueError(f"window must be positive, got {window}")

        state_window = self._remainders[-window:]
        return EngineSnapshot(
            digits_emitted=self._emitted,
            passes=self._passes,
            term_count=len(self._remainders),
            pending_digits=list(self._pending.pending),
            ready_digits=len(self._ready),
            window_offset=len(self._remainders) - len(state_window) + 1,
            state_window=state_window,
            status=EngineStatus.EXHAUSTED if self._exhausted else EngineStatus.RUNNING,
        )

    @property
    def term_count(self) -> int:
        return len(self._remainders)

    @property
    def passes(self) -> int:
        return self._passes

    @property
    def digits_emitted(self) -> int:
        return self._emitted

    @property
    def pending_digits(self) -> Tuple[int, ...]:
        return self._pending.pending

    @property
    def remainders(self) -> Tuple[int, ...]:
        return tuple(self._remainders)

    @property
    def exhausted(self) -> bool:
        return self._exhausted
