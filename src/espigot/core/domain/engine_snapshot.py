"""
EngineSnapshot — Модель снапшота состояния DigitEngine

Immutable Pydantic модель, представляющая снапшот движка между шагами.
Полная совместимость с JSON Schema (core/contracts/schema/engine_snapshot.json).
Используется для preview-рендеринга и диагностики.
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field, field_validator


# =============================================================================
# ENUMS
# =============================================================================


class EngineStatus(str, Enum):
    """Состояние движка."""

    RUNNING = "RUNNING"
    EXHAUSTED = "EXHAUSTED"


# =============================================================================
# SNAPSHOT MODEL
# =============================================================================


class EngineSnapshot(BaseModel):
    """
    Снапшот DigitEngine.

    Immutable модель (frozen=True). Содержит:
    - Счётчики (digits_emitted, passes, term_count)
    - Отложенный 9-run (pending_digits) и число готовых цифр (ready_digits)
    - Окно верхних индексов state vector (window_offset, state_window)
    """

    schema_version: str = Field(
        "1", pattern="^1$", description="Версия схемы для tracking совместимости"
    )

    # Счётчики
    digits_emitted: int = Field(..., ge=0, description="Цифр выдано потребителю")
    passes: int = Field(..., ge=0, description="Выполнено scale-and-carry проходов")
    term_count: int = Field(..., ge=0, description="Длина state vector (N)")

    # Буферы
    pending_digits: List[int] = Field(
        default_factory=list, description="Отложенные цифры (не-9 + run из 9)"
    )
    ready_digits: int = Field(..., ge=0, description="Закоммиченные, но ещё не выданные цифры")

    # Окно state vector
    window_offset: int = Field(..., ge=1, description="1-based индекс первого элемента окна")
    state_window: List[int] = Field(
        default_factory=list, description="Remainders индексов window_offset.."
    )

    status: EngineStatus = Field(EngineStatus.RUNNING, description="Состояние движка")

    model_config = {"frozen": True}

    @field_validator("pending_digits")
    @classmethod
    def validate_pending_digits(cls, v: List[int]) -> List[int]:
        """Проверка, что отложенные цифры десятичные и 9 идут только после первой"""
        for digit in v:
            if not 0 <= digit <= 9:
                raise ValueError(f"pending digit {digit} out of range [0, 9]")
        if any(digit != 9 for digit in v[1:]):
            raise ValueError(f"only the first pending digit may differ from 9, got {v}")
        return v

    @field_validator("state_window")
    @classmethod
    def validate_state_window(cls, v: List[int], info) -> List[int]:
        """Проверка инварианта 0 <= r[k] <= k внутри окна"""
        if "window_offset" in info.data:
            offset = info.data["window_offset"]
            for position, value in enumerate(v):
                index = offset + position
                if not 0 <= value <= index:
                    raise ValueError(
                        f"state_window value {value} at index {index} out of range [0, {index}]"
                    )
        return v

    def window_indices(self) -> range:
        """1-based индексы, покрытые окном."""
        return range(self.window_offset, self.window_offset + len(self.state_window))
