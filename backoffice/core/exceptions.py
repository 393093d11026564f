"""
Back office error taxonomy

- ValidationError: a field-tagged rule was broken, nothing was written
- PersistenceError: the store rejected a commit or wrote nothing
- ConflictError: the store refused a write because of a constraint

Not-found is not an exception here: repositories and services return None.
"""


class BackofficeError(Exception):
    """Base class for all back office errors"""


class ValidationError(BackofficeError):
    """A value failed a business rule. `field` names the offending input."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


class PersistenceError(BackofficeError):
    """Commit failed or affected no rows"""


class ConflictError(PersistenceError):
    """Integrity constraint violated (e.g. a row is still referenced)"""
