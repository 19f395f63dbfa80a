"""
Thin SimpleDB Domain Gateway

This module provides a lightweight wrapper around the boto3 ``sdb`` client,
bound to a single SimpleDB domain. The gateway:

1. Creates the boto3 client lazily, exactly once, even under concurrent access
2. Exposes the three read calls the DAO needs (Select, GetAttributes, listing)
3. Maps botocore failures onto the library's exception hierarchy

Every public method performs exactly one round trip. Timeouts and the retry
budget come from SimpleDBConfig through botocore's Config.
"""

import logging
import threading
from typing import Any, Dict, List, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..config import SimpleDBConfig
from ..exceptions import (
    ConnectionError,
    DomainNotFoundError,
    QueryError,
    RetryableError,
    StaleCursorError,
    StoreAccessError,
    ValidationError,
)
from ..utils import build_select_all, clamp_batch_size

logger = logging.getLogger(__name__)

_AUTH_ERRORS = {
    'AuthFailure', 'AccessFailure', 'InvalidClientTokenId', 'SignatureDoesNotMatch',
    'OptInRequired', 'InvalidSecurity', 'ExpiredToken', 'MissingAuthenticationToken',
}

_RETRYABLE_ERRORS = {
    'ServiceUnavailable', 'RequestTimeout', 'InternalError', 'Throttling',
    'ThrottlingException', 'RequestLimitExceeded',
}

_QUERY_ERRORS = {
    'InvalidQueryExpression', 'InvalidParameterValue', 'InvalidParameterCombination',
    'MissingParameter', 'InvalidNumberPredicates', 'InvalidNumberValueTests',
    'InvalidSortExpression', 'TooManyRequestedAttributes', 'InvalidParameterError',
}


def map_simpledb_error(
    error: ClientError,
    operation: str,
    domain_name: str,
    resource_id: Optional[str] = None
) -> StoreAccessError:
    """Map a SimpleDB ClientError to a domain-specific exception.

    Args:
        error: The boto3 ClientError
        operation: The operation that failed (e.g., "Select", "GetAttributes")
        domain_name: The SimpleDB domain name
        resource_id: Optional item name or token for context

    Returns:
        Appropriate StoreAccessError subclass
    """
    error_code = error.response.get('Error', {}).get('Code', 'Unknown')
    error_message = error.response.get('Error', {}).get('Message', str(error))

    context = f"{operation} on {domain_name}"
    if resource_id:
        context += f" (resource: {resource_id})"

    full_message = f"{context}: {error_message}"

    if error_code == 'InvalidNextToken':
        return StaleCursorError(
            f"Continuation token rejected - {full_message}", resource_id,
            original_error=error, domain_name=domain_name, error_code=error_code
        )

    elif error_code == 'NoSuchDomain':
        return DomainNotFoundError(
            f"Domain not found - {full_message}",
            original_error=error, domain_name=domain_name, error_code=error_code
        )

    elif error_code in _QUERY_ERRORS:
        return QueryError(
            f"Request rejected - {full_message}",
            original_error=error, domain_name=domain_name, error_code=error_code
        )

    elif error_code in _AUTH_ERRORS:
        return ConnectionError(
            f"Authentication/authorization failed - {full_message}",
            original_error=error, domain_name=domain_name, error_code=error_code
        )

    elif error_code in _RETRYABLE_ERRORS:
        return RetryableError(
            f"Service unavailable - {full_message}",
            original_error=error, domain_name=domain_name, error_code=error_code
        )

    logger.warning(f"Unknown SimpleDB error code '{error_code}' mapped to StoreAccessError")
    return StoreAccessError(
        f"SimpleDB operation failed - {full_message}",
        original_error=error, domain_name=domain_name, error_code=error_code
    )


class DomainGateway:
    """
    Thin gateway for read operations on one SimpleDB domain.

    Designed to be used by the Paginator, the CountQueryExecutor and the DAO
    rather than directly by clients. The boto3 client is safe to share between
    threads once created; pass one in to reuse a single connection pool across
    several gateways.
    """

    def __init__(self, config: SimpleDBConfig, domain_name: str, client: Optional[Any] = None):
        """Initialize domain gateway.

        Args:
            config: SimpleDB configuration
            domain_name: Name of the SimpleDB domain
            client: Optional pre-built boto3 ``sdb`` client
        """
        self.config = config
        self.domain_name = domain_name
        self._client = client
        self._client_lock = threading.Lock()

        if config.enable_debug_logging:
            logging.getLogger("simpledb_dao").setLevel(logging.DEBUG)

    @property
    def client(self):
        """Lazy, at-most-once initialization of the SimpleDB client."""
        if self._client is None:
            with self._client_lock:
                if self._client is None:
                    self._client = self._create_client()
        return self._client

    def _create_client(self):
        try:
            session = boto3.Session(
                aws_access_key_id=self.config.aws_access_key_id,
                aws_secret_access_key=self.config.aws_secret_access_key,
                region_name=self.config.region_name
            )

            client_config = {
                'region_name': self.config.region_name
            }

            if self.config.endpoint_url:
                client_config['endpoint_url'] = self.config.endpoint_url

            boto_config = Config(
                retries={'max_attempts': self.config.retries},
                max_pool_connections=self.config.max_pool_connections,
                read_timeout=self.config.timeout_seconds,
                connect_timeout=self.config.timeout_seconds
            )
            client_config['config'] = boto_config

            client = session.client('sdb', **client_config)
            logger.debug(f"Created SimpleDB client for domain '{self.domain_name}'")
            return client
        except Exception as e:
            logger.error(f"Failed to create SimpleDB client: {e}")
            raise ConnectionError(
                f"Failed to connect to SimpleDB: {e}", original_error=e, domain_name=self.domain_name
            ) from e

    def select(self, select_expression: str, next_token: Optional[str] = None) -> Dict[str, Any]:
        """
        Execute a SimpleDB Select.

        Args:
            select_expression: Complete select expression
            next_token: Continuation token from the previous response

        Returns:
            Raw SimpleDB response ({'Items': [...], 'NextToken': ...})
        """
        select_kwargs = {'SelectExpression': select_expression}
        if next_token:
            select_kwargs['NextToken'] = next_token

        logger.debug(f"Select on {self.domain_name}: {select_expression} (token: {bool(next_token)})")
        try:
            return self.client.select(**select_kwargs)
        except ClientError as e:
            raise map_simpledb_error(e, "Select", self.domain_name, next_token) from e
        except BotoCoreError as e:
            logger.error(f"Select on {self.domain_name} failed: {e}")
            raise ConnectionError(
                f"Select on {self.domain_name} failed: {e}", original_error=e, domain_name=self.domain_name
            ) from e

    def list_items(self, max_count: Optional[int] = None, next_token: Optional[str] = None) -> Dict[str, Any]:
        """
        Fetch one batch of items with all their attributes.

        Args:
            max_count: Requested batch size, clamped to the store ceiling
            next_token: Continuation token, None for the first batch

        Returns:
            Raw SimpleDB Select response
        """
        if max_count is not None and max_count < 0:
            raise ValidationError(
                f"Batch size must not be negative, got {max_count}", context={'max_count': max_count}
            )
        limit = clamp_batch_size(max_count)
        return self.select(build_select_all(self.domain_name, limit), next_token)

    def get_attributes(self, item_name: str) -> List[Dict[str, Any]]:
        """
        Fetch all attributes of a single item.

        Args:
            item_name: SimpleDB item name

        Returns:
            Raw attribute list, empty when the item does not exist
        """
        logger.debug(f"GetAttributes on {self.domain_name}: {item_name}")
        try:
            response = self.client.get_attributes(DomainName=self.domain_name, ItemName=item_name)
        except ClientError as e:
            raise map_simpledb_error(e, "GetAttributes", self.domain_name, item_name) from e
        except BotoCoreError as e:
            logger.error(f"GetAttributes on {self.domain_name} failed: {e}")
            raise ConnectionError(
                f"GetAttributes on {self.domain_name} failed: {e}", original_error=e, domain_name=self.domain_name
            ) from e
        return response.get('Attributes', [])


def create_domain_gateway(config: SimpleDBConfig, base_name: str, client: Optional[Any] = None) -> DomainGateway:
    """
    Factory function to create a DomainGateway instance.

    Args:
        config: SimpleDB configuration
        base_name: Domain name before the configured prefix is applied
        client: Optional shared boto3 ``sdb`` client

    Returns:
        Configured DomainGateway instance
    """
    return DomainGateway(config, config.get_domain_name(base_name), client)
