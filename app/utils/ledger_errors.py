"""Rental ledger errors."""


class LedgerError(Exception):
    """Base class for business-rule failures raised by the ledger."""
    pass


class ReferenceNotFoundError(LedgerError):
    """A rental refers to a user or movie that does not exist."""

    def __init__(self, entity: str, entity_id: int):
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.entity_id = entity_id


class MovieUnavailableError(LedgerError):
    """The movie already has an open rental."""

    def __init__(self, movie_id: int):
        super().__init__("Movie is not available for rent")
        self.movie_id = movie_id


class DuplicateEmailError(LedgerError):
    """Another user already has this email."""

    def __init__(self, email: str):
        super().__init__("Email already in use")
        self.email = email


class LedgerIntegrityError(Exception):
    """
    Stored data breaks a ledger invariant, e.g. a rental whose user or movie
    is gone. Not a client error; callers should let it propagate.
    """
    pass
