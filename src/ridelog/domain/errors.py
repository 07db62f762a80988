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
    """Domain conflict, such as duplicate custom identifiers."""


def trip_not_found(trip_id: str) -> str:
    """Return message for missing trip."""
    return f"Trip {trip_id} not found"


def negative_value(field_name: str, value) -> str:
    """Return message for a value that must not be negative."""
    return f"{field_name} must not be negative (got {value})"


def unknown_platform(platform: str) -> str:
    """Return message for a platform outside the allow-list."""
    return (
        f"Unknown platform '{platform}'. "
        "Add it first with 'ridelog settings add-platform'."
    )


def unknown_pickup_location(location: str) -> str:
    """Return message for a pickup location outside the allow-list."""
    return (
        f"Unknown pickup location '{location}'. "
        "Add it first with 'ridelog settings add-location'."
    )


def duplicate_custom_entry(kind: str, name: str) -> str:
    """Return message for a custom platform or location that already exists."""
    return f"{kind} '{name}' already exists"


def custom_entry_not_found(kind: str, name: str) -> str:
    """Return message for removing a custom entry that does not exist."""
    return f"Custom {kind.lower()} '{name}' not found"


def cashier_not_applicable(trip_id: str, payment_method) -> str:
    """Return message when a trip's payment is not settled with the cashier."""
    method = payment_method.value if payment_method is not None else "none"
    return (
        f"Trip {trip_id} was paid via {method}; only cash and credit card "
        "trips are settled with the cashier"
    )


def too_many_places(field_name: str, value, places: int) -> str:
    """Return message for a value more precise than it can be stored."""
    return f"{field_name} allows at most {places} decimal places (got {value})"


def settled_payment_locked(trip_id: str) -> str:
    """Return message for changing the payment method of a settled trip."""
    return f"Trip {trip_id} is already paid to the cashier; its payment method cannot change"
