"""
Domain-Specific Exceptions for the SimpleDB DAO

Every failure a DAO call can surface is one of the exceptions below, all of
them extending SimpleDBDAOError. Nothing is retried or suppressed inside the
library: a call either returns a complete result or raises exactly one of
these.

Organized by category:
1. Store Access Errors (transport, auth, server side, cursors)
2. Not Found Errors
3. Mapping and Parsing Errors
4. Argument Validation Errors
"""

from typing import Any, Dict, Optional

from .base import SimpleDBDAOError


# =============================================================================
# Store Access Errors
# =============================================================================

class StoreAccessError(SimpleDBDAOError):
    """Raised when a call to SimpleDB fails.

    Used for:
    - Server-side failures reported by SimpleDB
    - Unknown error codes returned by the service
    - Base class of every more specific store failure below
    """

    def __init__(
        self,
        message: str,
        original_error: Optional[Exception] = None,
        domain_name: Optional[str] = None,
        error_code: Optional[str] = None,
    ):
        """Initialize store access error.

        Args:
            message: Human-readable error message
            original_error: The original exception that caused this error
            domain_name: SimpleDB domain the failing call targeted
            error_code: SimpleDB error code, when the service returned one
        """
        self.domain_name = domain_name
        self.error_code = error_code
        context: Dict[str, Any] = {}
        if domain_name:
            context['domain_name'] = domain_name
        if error_code:
            context['error_code'] = error_code
        super().__init__(message, original_error, context)


class ConnectionError(StoreAccessError):
    """Raised when SimpleDB cannot be reached or refuses the credentials.

    Used for:
    - Client/session bootstrap failures
    - Endpoint connection failures and timeouts
    - Authentication/authorization failures
    """


class RetryableError(StoreAccessError):
    """Raised for throttling and temporary service unavailability.

    The library does not retry beyond the botocore retry budget configured in
    SimpleDBConfig.retries; the caller decides whether to try again.
    """


class DomainNotFoundError(StoreAccessError):
    """Raised when the bound domain does not exist."""


class QueryError(StoreAccessError):
    """Raised when SimpleDB rejects a select expression or request parameter."""


class StaleCursorError(StoreAccessError):
    """Raised when a continuation token can no longer be used.

    Used for:
    - InvalidNextToken responses from SimpleDB
    - A page that comes back empty while still carrying a continuation token
      during full enumeration
    """

    def __init__(
        self,
        message: str,
        next_token: Optional[str] = None,
        original_error: Optional[Exception] = None,
        domain_name: Optional[str] = None,
        error_code: Optional[str] = None,
    ):
        """Initialize stale cursor error.

        Args:
            message: Human-readable error message
            next_token: The continuation token that could not be followed
            original_error: The original exception that caused this error
            domain_name: SimpleDB domain being enumerated
            error_code: SimpleDB error code, when the service returned one
        """
        self.next_token = next_token
        super().__init__(message, original_error, domain_name, error_code)


# =============================================================================
# Not Found Errors
# =============================================================================

class NotFoundError(SimpleDBDAOError):
    """Raised when a requested resource does not exist."""


class ItemNotFoundError(NotFoundError):
    """Raised when a by-id lookup finds no item for the given key.

    Used for:
    - GetAttributes calls that return no attributes
    """

    def __init__(self, domain_name: str, key: Any, original_error: Optional[Exception] = None):
        """Initialize item not found error.

        Args:
            domain_name: Name of the SimpleDB domain
            key: The item key that was not found
            original_error: The original exception that caused this error
        """
        self.domain_name = domain_name
        self.key = key
        message = f"Item not found in domain '{domain_name}' with key: {key}"
        context = {
            'domain_name': domain_name,
            'key': key
        }
        super().__init__(message, original_error, context)


# =============================================================================
# Mapping and Parsing Errors
# =============================================================================

class MappingError(SimpleDBDAOError):
    """Raised when a raw attribute set cannot be coerced into an entity.

    Used for:
    - Missing required attributes
    - Attribute values that do not convert to the declared field type
    """

    def __init__(
        self,
        message: str,
        entity_type: Optional[str] = None,
        item_name: Optional[str] = None,
        errors: Optional[Any] = None,
        original_error: Optional[Exception] = None,
    ):
        """Initialize mapping error.

        Args:
            message: Human-readable error message
            entity_type: Name of the target entity class
            item_name: Key of the item being mapped
            errors: Field-level validation errors
            original_error: The original exception that caused this error
        """
        self.entity_type = entity_type
        self.item_name = item_name
        self.errors = errors or []
        context: Dict[str, Any] = {}
        if entity_type:
            context['entity_type'] = entity_type
        if item_name is not None:
            context['item_name'] = item_name
        super().__init__(message, original_error, context)


class ParseError(SimpleDBDAOError):
    """Raised when a count query result is not a base-10 integer."""

    def __init__(self, message: str, value: Any = None, original_error: Optional[Exception] = None):
        """Initialize parse error.

        Args:
            message: Human-readable error message
            value: The raw value that failed to parse
            original_error: The original exception that caused this error
        """
        self.value = value
        super().__init__(message, original_error, {'value': value})


# =============================================================================
# Argument Validation Errors
# =============================================================================

class ValidationError(SimpleDBDAOError):
    """Raised when a caller passes an argument the store could never accept.

    Used for:
    - Negative page sizes
    - Empty item keys
    """
