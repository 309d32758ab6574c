"""Explicit schema provisioning and per-feature availability"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List

from sqlalchemy import inspect
from sqlalchemy.engine import Connection, Engine

from mei_finance.infrastructure.database.models import Base

logger = logging.getLogger(__name__)

# Tables backing each feature; a feature is usable once all of them exist
FEATURE_TABLES: Dict[str, List[str]] = {
    "transactions": ["transactions", "extra_income", "monthly_settings"],
    "history": ["monthly_summary"],
    "savings": ["monthly_savings", "savings_goals"],
    "cards": ["credit_cards", "card_transactions", "card_installments"],
}

SETUP_INSTRUCTIONS = (
    "The tables for this feature have not been created yet. "
    "Call POST /v1/setup/provision or start the service with AUTO_PROVISION_SCHEMA=true."
)


@dataclass
class SchemaStatus:
    """Snapshot of which tables exist in the store"""

    existing_tables: List[str] = field(default_factory=list)

    def missing_tables(self, feature: str) -> List[str]:
        return [t for t in FEATURE_TABLES[feature] if t not in self.existing_tables]

    def is_ready(self, feature: str) -> bool:
        return not self.missing_tables(feature)

    def as_dict(self) -> Dict[str, Dict]:
        return {
            feature: {"ready": self.is_ready(feature), "missing_tables": self.missing_tables(feature)}
            for feature in FEATURE_TABLES
        }


def inspect_schema(bind: Engine | Connection) -> SchemaStatus:
    """Probe the store once for the tables it currently has"""
    return SchemaStatus(existing_tables=inspect(bind).get_table_names())


def provision_schema(bind: Engine | Connection) -> SchemaStatus:
    """Create every missing table and return the refreshed status"""
    before = inspect_schema(bind)
    Base.metadata.create_all(bind=bind)
    after = inspect_schema(bind)

    created = sorted(set(after.existing_tables) - set(before.existing_tables))
    logger.info("Schema provisioned", extra={"step": "provision_schema", "created_tables": created})
    return after
