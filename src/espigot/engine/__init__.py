"""Engine — неограниченный spigot-поток цифр e.

- DigitEngine: state vector + scale-and-carry + 9-run deferral
- Host wrappers: e_digits / e_characters / e_expansion
- Preview: текстовый рендер state vector
"""

from .digit_engine import (
    DigitEngine,
    SpigotConfig,
)
from .preview import render_state_window
from .stream import (
    DECIMAL_MARKER,
    e_characters,
    e_digits,
    e_expansion,
)

__all__ = [
    "DigitEngine",
    "SpigotConfig",
    "render_state_window",
    "DECIMAL_MARKER",
    "e_characters",
    "e_digits",
    "e_expansion",
]
