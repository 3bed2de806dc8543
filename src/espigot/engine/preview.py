"""Текстовый preview state vector для диагностики (--preview в CLI)."""

from typing import List

from espigot.core.domain.engine_snapshot import EngineSnapshot


def render_state_window(snapshot: EngineSnapshot, row_size: int = 16) -> str:
    """Рендер окна state vector по строкам.

    Каждая строка начинается с 1-based индекса первого элемента:

        mem:
            1 |   1   1   0   0
        pending: 1
        passes=2 terms=4 emitted=0 ready=2 status=RUNNING
    """
    if row_size < 1:
        raise ValueError(f"row_size must be positive, got {row_size}")

    lines: List[str] = ["mem:"]
    window = snapshot.state_window
    for start in range(0, len(window), row_size):
        row = window[start:start + row_size]
        label = "%5d |" % (snapshot.window_offset + start)
        lines.append(label + "".join(" %3d" % value for value in row))

    pending = " ".join(str(digit) for digit in snapshot.pending_digits)
    lines.append(f"pending: {pending}".rstrip())
    lines.append(
        f"passes={snapshot.passes} terms={snapshot.term_count} "
        f"emitted={snapshot.digits_emitted} ready={snapshot.ready_digits} "
        f"status={snapshot.status.value}"
    )
    return "\n".join(lines)
