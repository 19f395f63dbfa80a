"""
SimpleDB DAO

A read-only data access layer over Amazon SimpleDB built on boto3 and Pydantic:
typed entities mapped from multi-valued string attributes, cursor-based
pagination, by-key lookup and count queries.
"""

from .config import SimpleDBConfig
from .exceptions import (
    ConnectionError,
    DomainNotFoundError,
    ItemNotFoundError,
    MappingError,
    NotFoundError,
    ParseError,
    QueryError,
    RetryableError,
    SimpleDBDAOError,
    StaleCursorError,
    StoreAccessError,
    ValidationError,
)
from .models import (
    Page,
    SimpleDBEntity,
    build_entity,
)
from .core import (
    CountQueryExecutor,
    DomainGateway,
    Paginator,
    create_domain_gateway,
)
from .repositories import (
    SimpleDBDAO,
    create_dao,
)

__version__ = "1.0.0"
__all__ = [
    # Configuration
    "SimpleDBConfig",

    # Exceptions
    "ConnectionError",
    "DomainNotFoundError",
    "ItemNotFoundError",
    "MappingError",
    "NotFoundError",
    "ParseError",
    "QueryError",
    "RetryableError",
    "SimpleDBDAOError",
    "StaleCursorError",
    "StoreAccessError",
    "ValidationError",

    # Models
    "Page",
    "SimpleDBEntity",
    "build_entity",

    # Core building blocks
    "CountQueryExecutor",
    "DomainGateway",
    "Paginator",
    "create_domain_gateway",

    # DAO facade
    "SimpleDBDAO",
    "create_dao",
]
