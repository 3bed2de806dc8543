"""
espigot — unbounded spigot stream of the decimal digits of e.

    >>> from espigot import DigitEngine
    >>> DigitEngine().take(5)
    [2, 7, 1, 8, 2]
"""

from espigot.core.math.errors import (
    SpigotError,
    SpigotInvariantViolation,
    SpigotResourceExhausted,
)
from espigot.engine import (
    DigitEngine,
    SpigotConfig,
    e_characters,
    e_digits,
    e_expansion,
)

__version__ = "0.1.0"

__all__ = [
    "DigitEngine",
    "SpigotConfig",
    "SpigotError",
    "SpigotInvariantViolation",
    "SpigotResourceExhausted",
    "e_characters",
    "e_digits",
    "e_expansion",
]
