# Base exception class
from .base import SimpleDBDAOError

from .domain_exceptions import (
    ConnectionError,
    DomainNotFoundError,
    ItemNotFoundError,
    MappingError,
    NotFoundError,
    ParseError,
    QueryError,
    RetryableError,
    StaleCursorError,
    StoreAccessError,
    ValidationError,
)

__all__ = [
    # Base exception
    "SimpleDBDAOError",

    # Domain exceptions (alphabetically ordered)
    "ConnectionError",
    "DomainNotFoundError",
    "ItemNotFoundError",
    "MappingError",
    "NotFoundError",
    "ParseError",
    "QueryError",
    "RetryableError",
    "StaleCursorError",
    "StoreAccessError",
    "ValidationError",
]
