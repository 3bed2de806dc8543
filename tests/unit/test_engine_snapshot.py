"""
Tests for EngineSnapshot Pydantic model

Покрывает:
- Создание и валидация модели
- JSON сериализация/десериализация
- Enum валидация
- Инвариант окна state vector
- Immutability (frozen=True)
"""

import pytest
from pydantic import ValidationError

from espigot.core.domain import EngineSnapshot, EngineStatus


@pytest.fixture
def valid_snapshot_data():
    """Валидные данные снапшота."""
    return {
        "digits_emitted": 12,
        "passes": 14,
        "term_count": 16,
        "pending_digits": [6, 9, 9],
        "ready_digits": 1,
        "window_offset": 13,
        "state_window": [2, 0, 14, 7],
        "status": "RUNNING",
    }


class TestEngineSnapshot:
    """Тесты модели EngineSnapshot."""

    def test_create(self, valid_snapshot_data):
        snapshot = EngineSnapshot(**valid_snapshot_data)
        assert snapshot.schema_version == "1"
        assert snapshot.status == EngineStatus.RUNNING
        assert list(snapshot.window_indices()) == [13, 14, 15, 16]

    def test_json_roundtrip(self, valid_snapshot_data):
        snapshot = EngineSnapshot(**valid_snapshot_data)
        restored = EngineSnapshot.model_validate_json(snapshot.model_dump_json())
        assert restored == snapshot

    def test_frozen(self, valid_snapshot_data):
        snapshot = EngineSnapshot(**valid_snapshot_data)
        with pytest.raises(ValidationError):
            snapshot.passes = 99

    def test_negative_counter_rejected(self, valid_snapshot_data):
        valid_snapshot_data["passes"] = -1
        with pytest.raises(ValidationError):
            EngineSnapshot(**valid_snapshot_data)

    def test_unknown_status_rejected(self, valid_snapshot_data):
        valid_snapshot_data["status"] = "PAUSED"
        with pytest.raises(ValidationError):
            EngineSnapshot(**valid_snapshot_data)

    def test_wrong_schema_version_rejected(self, valid_snapshot_data):
        valid_snapshot_data["schema_version"] = "2"
        with pytest.raises(ValidationError):
            EngineSnapshot(**valid_snapshot_data)

    def test_window_value_above_index_rejected(self, valid_snapshot_data):
        """Индекс 14 не может хранить 15."""
        valid_snapshot_data["state_window"] = [2, 15, 0, 0]
        with pytest.raises(ValidationError, match="out of range"):
            EngineSnapshot(**valid_snapshot_data)

    def test_pending_digit_out_of_range_rejected(self, valid_snapshot_data):
        valid_snapshot_data["pending_digits"] = [10]
        with pytest.raises(ValidationError, match="out of range"):
            EngineSnapshot(**valid_snapshot_data)

    def test_pending_run_must_be_nines(self, valid_snapshot_data):
        valid_snapshot_data["pending_digits"] = [6, 9, 8]
        with pytest.raises(ValidationError, match="differ from 9"):
            EngineSnapshot(**valid_snapshot_data)

    def test_window_offset_starts_at_one(self, valid_snapshot_data):
        valid_snapshot_data["window_offset"] = 0
        with pytest.raises(ValidationError):
            EngineSnapshot(**valid_snapshot_data)
