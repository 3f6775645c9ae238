from typing import Optional

from sqlalchemy.exc import DBAPIError, SQLAlchemyError


class BackendError(Exception):
    """A query or mutation rejected by the backend."""

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        hint: Optional[str] = None,
        code: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details
        self.hint = hint
        self.code = code

    @classmethod
    def from_exception(cls, exc: SQLAlchemyError) -> "BackendError":
        if isinstance(exc, DBAPIError) and exc.orig is not None:
            return cls(str(exc.orig), details=exc.statement, code=type(exc).__name__)
        return cls(str(exc), code=type(exc).__name__)

    def describe(self) -> str:
        """Message plus any details and hint, one per line."""
        parts = [self.message]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.hint:
            parts.append(f"Hint: {self.hint}")
        return "\n".join(parts)


class StorageError(BackendError):
    pass


class AuthError(BackendError):
    pass
