"""Services around the calculation engine."""

from earnings_engine.services.config_store import (
    ConfigStore,
    DataImportError,
    RecordNotFoundError,
)

__all__ = [
    "ConfigStore",
    "DataImportError",
    "RecordNotFoundError",
]
