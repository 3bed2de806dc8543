"""
Pending Digits — 9-run deferral для spigot-потока

Цифра, произведённая scale_and_carry, ещё не окончательна: последующий
рост вектора может добавить +1 к последней произведённой позиции.
Буфер держит последнюю не-9 цифру и следующий за ней run из 9:

    push(d < 9)   → выпустить весь буфер, d становится удерживаемой цифрой
    push(9)       → дописать 9, ничего не выпускать
    apply_carry(1) → [d, 9, ..., 9] → [d + 1, 0, ..., 0], выпустить всё

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Только первая цифра буфера может быть не 9
2. Выпущенная цифра никогда не пересматривается
3. Carry больше 1, carry в пустой буфер или в буфер, начинающийся с 9,
   означает пересмотр закоммиченной цифры → SpigotInvariantViolation
"""

from typing import List, Tuple

from espigot.core.math.errors import SpigotInvariantViolation
from espigot.core.math.mixed_radix import MAX_DIGIT


class PendingDigits:
    """Буфер цифр, окончательность которых ещё не установлена."""

    def __init__(self):
        self._digits: List[int] = []

    def push(self, digit: int) -> List[int]:
        """
        Commit-or-defer для новой цифры.

        Args:
            digit: Кандидат из scale_and_carry (0..9)

        Returns:
            Список выпущенных (окончательных) цифр, возможно пустой

        Raises:
            SpigotInvariantViolation: Если digit вне [0, 9]
        """
        if not 0 <= digit <= MAX_DIGIT:
            raise SpigotInvariantViolation(
                f"digit candidate out of range [0, {MAX_DIGIT}]: {digit}"
            )

        if digit == MAX_DIGIT:
            self._digits.append(digit)
            return []

        released = self._digits
        self._digits = [digit]
        return released

    def apply_carry(self, carry: int) -> List[int]:
        """
        Перенос в последнюю произведённую позицию.

        Args:
            carry: Overflow из индекса 1 (0 или 1)

        Returns:
            Выпущенные цифры: [d + 1, 0, ..., 0] при carry == 1, иначе []

        Raises:
            SpigotInvariantViolation: Если carry пересматривает закоммиченную цифру
        """
        if carry == 0:
            return []

        if carry != 1:
            raise SpigotInvariantViolation(f"carry into digit stream must be 0 or 1, got {carry}")

        if not self._digits or self._digits[0] == MAX_DIGIT:
            raise SpigotInvariantViolation(
                f"carry would revise a committed digit (pending={self._digits})"
            )

        released = [self._digits[0] + 1] + [0] * (len(self._digits) - 1)
        self._digits = []
        return released

    @property
    def pending(self) -> Tuple[int, ...]:
        """Текущее содержимое буфера (старшая цифра первой)."""
        return tuple(self._digits)

    def __len__(self) -> int:
        return len(self._digits)

    def __repr__(self) -> str:
        return f"PendingDigits({self._digits!r})"
