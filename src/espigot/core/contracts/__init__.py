"""
Contract Validation Module

JSON Schema контракт внешнего представления снапшота движка.
"""

from .validators import (
    SNAPSHOT_SCHEMA,
    contract_violations,
    export_snapshot,
    snapshot_validator,
)

__all__ = [
    "SNAPSHOT_SCHEMA",
    "contract_violations",
    "export_snapshot",
    "snapshot_validator",
]
