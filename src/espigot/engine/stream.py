"""Host wrappers над DigitEngine: поток цифр, поток символов, строка разложения."""

from itertools import islice
from typing import Iterator, Optional

from espigot.engine.digit_engine import DigitEngine, SpigotConfig

DECIMAL_MARKER = "."


def e_digits(limit: Optional[int] = None, config: Optional[SpigotConfig] = None) -> Iterator[int]:
    """Цифры e: 2, 7, 1, 8, ...

    Args:
        limit: число цифр (None — бесконечный поток)
        config: конфигурация движка
    """
    if limit is not None and limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")

    engine = DigitEngine(config)
    if limit is None:
        yield from engine
    else:
        yield from islice(engine, limit)


def e_characters(
    limit: Optional[int] = None,
    decimal_marker: str = DECIMAL_MARKER,
    config: Optional[SpigotConfig] = None,
) -> Iterator[str]:
    """Символы разложения: "2", маркер, затем дробные цифры.

    limit считает только цифры; маркер выдаётся перед первой дробной
    цифрой, если decimal_marker непустой.
    """
    for position, digit in enumerate(e_digits(limit, config)):
        if position == 1 and decimal_marker:
            yield decimal_marker
        yield str(digit)


def e_expansion(count: int, decimal_marker: str = DECIMAL_MARKER) -> str:
    """Первые count цифр e одной строкой.

    Examples:
        >>> e_expansion(11)
        '2.7182818284'
        >>> e_expansion(0)
        ''
    """
    return "".join(e_characters(count, decimal_marker))
