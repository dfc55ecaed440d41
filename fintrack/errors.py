"""Exception types shared by the store, the domain and the commands."""


class FintrackError(Exception):
    """Base class for all fintrack errors."""


class ValidationError(FintrackError):
    """One or more input fields are missing or malformed.

    Attributes:
        errors: Mapping of field name to a human-readable message.
    """

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        details = "; ".join(f"{field}: {message}" for field, message in self.errors.items())
        super().__init__(f"Invalid fields - {details}")


class NotFoundError(FintrackError):
    """A record referenced by id does not exist."""

    def __init__(self, kind: str, record_id: int) -> None:
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind.capitalize()} {record_id} not found")


class StoreError(FintrackError):
    """The store could not be reached or returned something unusable."""
