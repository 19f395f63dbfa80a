"""
Cursor-based pagination over a SimpleDB domain.

SimpleDB hands results back in bounded batches together with an opaque
NextToken. The Paginator fetches one batch per call, maps every item through
the entity mapper and forwards the token untouched.
"""

import logging
from typing import Any, Callable, Dict, Generic, Iterator, List, Optional, TypeVar

from ..exceptions import MappingError, StaleCursorError
from ..models import Page
from ..utils import decode_item_name, normalize_token
from .domain_gateway import DomainGateway

logger = logging.getLogger(__name__)

T = TypeVar('T')

# (item_name, raw attribute list) -> entity
ItemMapper = Callable[[str, List[Dict[str, Any]]], T]


class Paginator(Generic[T]):
    """Drives bounded-size fetches against a domain and tracks continuation tokens."""

    def __init__(self, gateway: DomainGateway, mapper: ItemMapper):
        """
        Args:
            gateway: Gateway bound to the domain being listed
            mapper: Callable building an entity from an item name and its attributes
        """
        self.gateway = gateway
        self.mapper = mapper

    def fetch_page(self, max_count: Optional[int] = None, next_token: Optional[str] = None) -> Page[T]:
        """
        Fetch exactly one batch.

        Args:
            max_count: Maximum items to return; None, 0 or anything above 250
                means 250
            next_token: Token from the previous page, None (or "") for the first page

        Returns:
            Page with the mapped entities and the store's next token

        Raises:
            StoreAccessError: If the store call fails
            MappingError: If an item cannot be mapped
        """
        response = self.gateway.list_items(max_count, normalize_token(next_token))
        items = [
            self.mapper(self._item_name(item), item.get('Attributes', []))
            for item in response.get('Items', [])
        ]
        return Page(items=items, next_token=response.get('NextToken'))

    def _item_name(self, item: Dict[str, Any]) -> str:
        try:
            return decode_item_name(item)
        except ValueError as e:
            logger.error(f"Undecodable item name in {self.gateway.domain_name}: {item['Name']!r}")
            raise MappingError(
                f"Item name {item['Name']!r} is not valid base64",
                item_name=item['Name'],
                original_error=e,
            ) from e

    def iter_all(self) -> Iterator[T]:
        """
        Lazily enumerate the whole domain, one batch at a time.

        Stops when the store returns no token. A page that comes back empty
        while still carrying a token is treated as a broken cursor.

        Raises:
            StaleCursorError: If an empty page carries a continuation token
        """
        next_token = None
        pages = 0
        while True:
            page = self.fetch_page(None, next_token)
            pages += 1
            if not page.items and page.has_more:
                logger.error(
                    f"Empty page with continuation token on {self.gateway.domain_name} after {pages} page(s)"
                )
                raise StaleCursorError(
                    f"Empty page returned with a continuation token from domain '{self.gateway.domain_name}'",
                    page.next_token,
                    domain_name=self.gateway.domain_name,
                )
            yield from page.items
            if not page.has_more:
                logger.debug(f"Enumerated {self.gateway.domain_name} in {pages} page(s)")
                return
            next_token = page.next_token

    def fetch_all(self) -> List[T]:
        """Fetch every entity of the domain, in page order."""
        items = list(self.iter_all())
        logger.info(f"Retrieved {len(items)} items from {self.gateway.domain_name}")
        return items
