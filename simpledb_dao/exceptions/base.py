from typing import Any, Dict, Optional


class SimpleDBDAOError(Exception):
    """Root of every error raised by the SimpleDB DAO.

    Attributes:
        message: Human-readable error message
        original_error: Exception from boto3/pydantic that triggered this one, if any
        context: Identifying details (domain, key, error code, ...)
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.original_error = original_error
        self.context = dict(context) if context else {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{name}={value!r}" for name, value in sorted(self.context.items()))
        return f"{self.message} [{details}]"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, context={self.context!r})"
