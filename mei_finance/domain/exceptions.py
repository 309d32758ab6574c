"""Domain-specific exceptions"""

from typing import List


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidInstallmentPlanError(DomainException):
    """Purchase amount or installment count cannot produce a schedule"""

    pass


class NotFoundError(DomainException):
    """Requested record does not exist"""

    def __init__(self, entity: str, entity_id: object):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class StoreUnavailableError(DomainException):
    """Relational store failed while writing; the action can be retried"""

    def __init__(self, operation: str):
        super().__init__(f"Data store unavailable during {operation}")
        self.operation = operation


class MissingSchemaError(DomainException):
    """Backing tables for a feature have not been provisioned yet"""

    def __init__(self, feature: str, missing_tables: List[str]):
        super().__init__(f"Feature '{feature}' is not provisioned: missing {', '.join(missing_tables)}")
        self.feature = feature
        self.missing_tables = missing_tables


class ConfirmationRequiredError(DomainException):
    """Destructive operation invoked without explicit confirmation"""

    pass
