"""
Domain models and value objects.

Contains the immutable snapshot of the digit engine.
"""

from espigot.core.domain.engine_snapshot import EngineSnapshot, EngineStatus

__all__ = [
    "EngineSnapshot",
    "EngineStatus",
]
