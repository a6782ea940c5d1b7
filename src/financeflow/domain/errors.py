"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as repeating a once-per-month operation."""


class DataAccessError(DomainError):
    """Records could not be read from or written to the data store."""


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def fund_not_found(fund_id: int) -> str:
    """Return message for missing fund position."""
    return f"Fund {fund_id} not found"


def invalid_choice(field_name: str, value: object, choices) -> str:
    """Return message for a value outside an enumerated set."""
    allowed = ", ".join(str(choice) for choice in choices)
    return f"Invalid {field_name} '{value}'. Expected one of: {allowed}"


def negative_amount(field_name: str) -> str:
    """Return message for a negative monetary amount."""
    return f"{field_name} must not be negative"


def invalid_date_range(start, end) -> str:
    """Return message when a range starts after it ends."""
    return f"Start date {start} is after end date {end}"
