"""
Snapshot Contract — JSON Schema внешнего представления EngineSnapshot

JSON-снапшот движка уходит наружу (CLI --preview json), поэтому его форма
зафиксирована схемой schema/engine_snapshot.json (Draft 2020-12), а не
только pydantic-моделью:
- Схема читается из package data и проходит meta-validation один раз
- Нарушения описываются как "путь: сообщение" в порядке путей
- export_snapshot отдаёт только данные, прошедшие контракт

Pydantic-модель и схема проверяют одно и то же с двух сторон; расхождение
между ними — дефект реализации, поэтому отказ контракта при экспорте
поднимает SpigotInvariantViolation.
"""

import json
from functools import lru_cache
from importlib import resources
from typing import Any, Dict, Final, List

from jsonschema import Draft202012Validator

from espigot.core.domain.engine_snapshot import EngineSnapshot
from espigot.core.math.errors import SpigotInvariantViolation

# Имя файла схемы в package data
SNAPSHOT_SCHEMA: Final[str] = "engine_snapshot.json"

# Путь корня документа в сообщениях о нарушениях
ROOT_PATH: Final[str] = "<root>"


@lru_cache(maxsize=None)
def snapshot_validator() -> Draft202012Validator:
    """
    Валидатор контракта engine_snapshot (создаётся один раз на процесс).

    Raises:
        jsonschema.SchemaError: если файл схемы сам не является Draft 2020-12
    """
    text = (resources.files(__package__) / "schema" / SNAPSHOT_SCHEMA).read_text(encoding="utf-8")
    schema = json.loads(text)
    Draft202012Validator.check_schema(schema)
    return Draft202012Validator(schema)


def contract_violations(data: Any) -> List[str]:
    """
    Все нарушения контракта в виде "путь: сообщение".

    Пустой список — данные соответствуют контракту.

    Examples:
        >>> contract_violations({"passes": -1})[0]
        "<root>: 'schema_version' is a required property"
    """
    errors = sorted(
        snapshot_validator().iter_errors(data),
        key=lambda error: [str(part) for part in error.absolute_path],
    )
    return [
        f"{'/'.join(str(part) for part in error.absolute_path) or ROOT_PATH}: {error.message}"
        for error in errors
    ]


def export_snapshot(snapshot: EngineSnapshot) -> Dict[str, Any]:
    """
    JSON-совместимый dict снапшота, проверенный по контракту.

    Args:
        snapshot: Снапшот движка

    Returns:
        snapshot.model_dump(mode="json")

    Raises:
        SpigotInvariantViolation: снапшот не проходит JSON-контракт
    """
    data = snapshot.model_dump(mode="json")
    violations = contract_violations(data)
    if violations:
        raise SpigotInvariantViolation(
            "engine snapshot breaks its JSON contract: " + "; ".join(violations)
        )
    return data
