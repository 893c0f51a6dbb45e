"""Domain layer for budgettrack application."""

_SERVICES = {
    "SourceService": "budgettrack.domain.source",
    "SubCategoryService": "budgettrack.domain.category",
    "TransactionService": "budgettrack.domain.transaction",
    "BudgetService": "budgettrack.domain.budget",
    "ImportReview": "budgettrack.domain.review",
}

__all__ = list(_SERVICES)


# Services import the store layer, which imports entities from this package,
# so they are resolved lazily.
def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
