"""
Event contracts marketplace (JSON Schema, Draft 2020-12)

EventLog проверяет каждое событие с contract_name перед публикацией.
Схема на каждый тип события:
- order_created.json
- order_cancelled.json
- order_successful.json
- changed_publication_fee.json
- changed_owner_cut.json
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """Чтение и кэширование схем из schema/ (package data)."""

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Схема по имени файла без .json, проверенная meta-схемой.

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-validation
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


# Общий для всех валидаторов модуля
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Draft 2020-12 validator, привязанный к одному контракту событий."""

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        return self.validator.iter_errors(data)


class OrderCreatedValidator(ContractValidator):
    def __init__(self):
        super().__init__("order_created")


class OrderCancelledValidator(ContractValidator):
    def __init__(self):
        super().__init__("order_cancelled")


class OrderSuccessfulValidator(ContractValidator):
    def __init__(self):
        super().__init__("order_successful")


class ChangedPublicationFeeValidator(ContractValidator):
    def __init__(self):
        super().__init__("changed_publication_fee")


class ChangedOwnerCutValidator(ContractValidator):
    def __init__(self):
        super().__init__("changed_owner_cut")


# Валидаторы по имени контракта (используются EventLog)
_VALIDATORS: Dict[str, ContractValidator] = {}


def validator_for(schema_name: str) -> ContractValidator:
    """Кэшированный ContractValidator по имени схемы."""
    if schema_name not in _VALIDATORS:
        _VALIDATORS[schema_name] = ContractValidator(schema_name)
    return _VALIDATORS[schema_name]


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_order_created(data: Dict[str, Any]) -> None:
    """Raises jsonschema.ValidationError для невалидного OrderCreated."""
    validator_for("order_created").validate(data)


def validate_order_cancelled(data: Dict[str, Any]) -> None:
    """Raises jsonschema.ValidationError для невалидного OrderCancelled."""
    validator_for("order_cancelled").validate(data)


def validate_order_successful(data: Dict[str, Any]) -> None:
    """Raises jsonschema.ValidationError для невалидного OrderSuccessful."""
    validator_for("order_successful").validate(data)


def validate_event(event: Any) -> None:
    """
    Валидация события marketplace по его contract_name.

    События без контракта (Pause, Unpause, ...) пропускаются.

    Args:
        event: MarketplaceEvent

    Raises:
        ValidationError: Если сериализованное событие не соответствует схеме
    """
    if event.contract_name is None:
        return
    validator_for(event.contract_name).validate(event.to_contract())
