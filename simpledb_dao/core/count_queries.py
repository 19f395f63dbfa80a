"""
Count queries over a SimpleDB domain.

``select count(*)`` answers with a single row whose first attribute holds the
count. When counting takes longer than SimpleDB's per-request time limit the
answer arrives in chunks: each chunk is one row holding a partial count plus a
NextToken, and the total is the sum of the chunks.
"""

import logging
from typing import Any, Dict, Optional

from ..exceptions import ParseError, StaleCursorError
from ..utils import build_count_expression, decode_attribute
from .domain_gateway import DomainGateway

logger = logging.getLogger(__name__)


def parse_count(response: Dict[str, Any]) -> int:
    """
    Extract the count from one Select response.

    Takes the first attribute of the first row and parses it as a base-10
    integer; an empty result counts as 0.

    Raises:
        ParseError: If the value is not an integer
    """
    for item in response.get('Items', []):
        attributes = item.get('Attributes', [])
        if attributes:
            value = attributes[0].get('Value')
            try:
                _, value = decode_attribute(attributes[0])
                return int(value, 10)
            except ValueError as e:
                raise ParseError(f"Count result is not an integer: {value!r}", value, e) from e
    return 0


class CountQueryExecutor:
    """Builds, runs and parses count(*) queries against one domain."""

    def __init__(self, gateway: DomainGateway):
        self.gateway = gateway

    def count_all(self) -> int:
        return self.count_where(None)

    def count_where(self, where: Optional[str]) -> int:
        """
        Count items matching a where fragment.

        Args:
            where: Everything after WHERE in the select expression, passed
                through verbatim. None or "" counts the whole domain.

        Returns:
            Number of matching items

        Raises:
            ParseError: If SimpleDB returns a non-numeric count
            StoreAccessError: If the query fails
        """
        expression = build_count_expression(self.gateway.domain_name, where)

        total = 0
        next_token = None
        while True:
            response = self.gateway.select(expression, next_token)
            if not response.get('Items') and response.get('NextToken'):
                raise StaleCursorError(
                    f"Empty count result returned with a continuation token from domain '{self.gateway.domain_name}'",
                    response['NextToken'],
                    domain_name=self.gateway.domain_name,
                )
            total += parse_count(response)
            next_token = response.get('NextToken')
            if not next_token:
                break

        logger.info(f"Counted {total} items in {self.gateway.domain_name}" + (f" where {where}" if where else ""))
        return total
