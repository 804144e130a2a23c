"""
Shared helpers for the entity <-> model mappers.
"""

from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import inspect


def to_float(value: Optional[Decimal]) -> Optional[float]:
    """Numeric columns come back as Decimal; entities use float."""
    return float(value) if value is not None else None


class BaseMapper:
    """Common behaviour for mappers; subclasses implement both conversions."""

    def domain_to_model(self, entity: Any) -> Any:
        raise NotImplementedError

    def model_to_domain(self, model: Any) -> Any:
        raise NotImplementedError

    def update_model(self, model: Any, entity: Any) -> None:
        """Copy every mapped column except the primary key from the entity onto a loaded row."""
        fresh = self.domain_to_model(entity)
        for attr in inspect(type(model)).column_attrs:
            if attr.key == "id":
                continue
            setattr(model, attr.key, getattr(fresh, attr.key))
