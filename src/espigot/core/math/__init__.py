"""
Core math modules для espigot

Целочисленная арифметика spigot-разложения e: state vector в смешанной
системе счисления и буфер отложенных 9-run цифр.
"""

# Errors
from espigot.core.math.errors import (
    SpigotError,
    SpigotInvariantViolation,
    SpigotResourceExhausted,
)

# Mixed-Radix State Vector
from espigot.core.math.mixed_radix import (
    INTEGER_PART,
    MAX_DIGIT,
    OUTPUT_RADIX,
    TAIL_GUARD,
    check_normalized,
    digit_horizon,
    inject_terms,
    radix_for,
    scale_and_carry,
    tail_capacity,
    terms_for_horizon,
)

# 9-run deferral
from espigot.core.math.pending_digits import PendingDigits

__all__ = [
    # Errors
    "SpigotError",
    "SpigotInvariantViolation",
    "SpigotResourceExhausted",
    # Mixed-Radix — Constants
    "INTEGER_PART",
    "MAX_DIGIT",
    "OUTPUT_RADIX",
    "TAIL_GUARD",
    # Mixed-Radix — Functions
    "check_normalized",
    "digit_horizon",
    "inject_terms",
    "radix_for",
    "scale_and_carry",
    "tail_capacity",
    "terms_for_horizon",
    # Pending Digits
    "PendingDigits",
]
