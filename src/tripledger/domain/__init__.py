"""Domain layer for tripledger application."""

# Services are imported lazily: they depend on tripledger.database, which
# itself imports tripledger.domain.entities.
_SERVICES = {
    "AccountService": "tripledger.domain.account",
    "CategoryService": "tripledger.domain.category",
    "DuplicateService": "tripledger.domain.deduplication",
    "ChunkedImporter": "tripledger.domain.chunked_import",
    "ImportBatchService": "tripledger.domain.import_batch",
    "StatementImportService": "tripledger.domain.statement_import",
    "TripService": "tripledger.domain.trips",
    "TripConfirmationService": "tripledger.domain.trip_confirmation",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
