class BudgetError(Exception):
    """Base class for errors raised by the budget service."""


class InvalidInputError(BudgetError, ValueError):
    """Malformed input rejected at the boundary (dates, months, periods)."""


class NotFoundError(BudgetError, LookupError):
    """A referenced row does not exist."""
