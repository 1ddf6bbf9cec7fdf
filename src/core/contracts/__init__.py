"""
Contract Validation Module

Модуль для валидации JSON контрактов событий marketplace.
"""

from .validators import (
    ChangedOwnerCutValidator,
    ChangedPublicationFeeValidator,
    ContractValidator,
    OrderCancelledValidator,
    OrderCreatedValidator,
    OrderSuccessfulValidator,
    SchemaLoader,
    validate_event,
    validate_order_cancelled,
    validate_order_created,
    validate_order_successful,
    validator_for,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "OrderCreatedValidator",
    "OrderCancelledValidator",
    "OrderSuccessfulValidator",
    "ChangedPublicationFeeValidator",
    "ChangedOwnerCutValidator",
    # Functions
    "validator_for",
    "validate_event",
    "validate_order_created",
    "validate_order_cancelled",
    "validate_order_successful",
]
