"""
Domain error types raised by the service layer.

Routes do not catch these; the handlers registered in ``main.py`` translate
each kind into its HTTP status.
"""


class BudgetTrackerError(Exception):
    """Base class for all errors raised by the budget tracker services."""


class NotFoundError(BudgetTrackerError):
    """A referenced project or activity does not exist."""

    def __init__(self, entity: str, entity_id: int):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} with id {entity_id} not found")


class ValidationError(BudgetTrackerError):
    """Input is well-formed but violates a rule checked after loading records."""


class PersistenceError(BudgetTrackerError):
    """The store rejected or failed a read or write."""


class ExchangeRateFetchError(BudgetTrackerError):
    """The external exchange rate API could not provide a usable rate."""
