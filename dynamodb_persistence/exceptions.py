"""Adapter error type.

Every failure the adapter surfaces (missing table, backend errors, invalid
configuration, underivable partition keys) is a PersistenceException. The
underlying boto error, if any, is chained as __cause__ and kept on .cause.
"""


class PersistenceException(Exception):
    """Raised when attributes cannot be read, written, or deleted."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message}: {self.cause}"
