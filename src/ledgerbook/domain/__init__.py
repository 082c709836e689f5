"""Domain layer for ledgerbook application."""

# Services are resolved lazily so that the database layer can import
# ledgerbook.domain.entities without pulling the services (and itself) back in.
_SERVICES = {
    "AccountService": "ledgerbook.domain.account",
    "CategoryService": "ledgerbook.domain.category",
    "MonthReferenceService": "ledgerbook.domain.month_reference",
    "TransactionService": "ledgerbook.domain.transaction",
    "TransactionLinkService": "ledgerbook.domain.transaction_links",
    "SummaryService": "ledgerbook.domain.summary",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
