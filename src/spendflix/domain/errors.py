"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity or stored object does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DetectionError(DomainError):
    """Uploaded header row matches no known source type."""


class CompatibilityError(DomainError):
    """Detected source type conflicts with the account's expected type."""


class ConfigurationError(DomainError):
    """A source references a source type whose config cannot be resolved.

    Raised while importing; aborts the whole import and leaves the source
    PENDING until an operator re-triggers it.
    """


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def category_path_not_found(path: str) -> str:
    """Return message for missing category by path."""
    return f"Category '{path}' not found"


def source_not_found(source_id: int) -> str:
    """Return message for missing source."""
    return f"Source {source_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def undetectable_headers(headers: list[str]) -> str:
    """Return message for a header row that matches no source type."""
    return f"Can't determine type with headers: {','.join(headers)}"


def incompatible_source_type(expected: str, detected: str) -> str:
    """Return message when the account expects another source type."""
    return (
        f"Account sourceType ({expected}) is incompatible with "
        f"CSV sourceType ({detected})"
    )


def unknown_source_type(source_id: int, source_type: str) -> str:
    """Return message for a source whose type has no config."""
    return f"Source {source_id} has no configuration for source type '{source_type}'"
