"""
Test helpers for the SimpleDB DAO.

Sample entity types and a stub boto3 ``sdb`` client that serves a fixed list
of items in batches with opaque NextTokens.
"""

import re
from typing import Any, ClassVar, Dict, List, Optional

from pydantic import Field

from simpledb_dao import SimpleDBEntity


class Customer(SimpleDBEntity):
    """Entity used across the test suite."""

    domain: ClassVar[Optional[str]] = "customers"

    id: int
    name: str
    age: Optional[int] = None
    tags: List[str] = Field(default_factory=list)


class Order(SimpleDBEntity):
    """Entity relying on the class name as domain name."""

    id: str
    total: float


def make_item(index: int) -> Dict[str, Any]:
    """Raw SimpleDB item for customer ``index``."""
    return {
        'Name': str(index),
        'Attributes': [
            {'Name': 'name', 'Value': f"customer-{index}"},
            {'Name': 'age', 'Value': str(20 + index % 50)},
        ],
    }


class StubSDBClient:
    """In-memory stand-in for a boto3 ``sdb`` client.

    ``select`` serves ``items`` in batches honouring the ``limit`` of the select
    expression; tokens are opaque strings only this stub understands. Count
    expressions answer with ``count_value`` (defaults to the item count).
    """

    _LIMIT = re.compile(r"limit (\d+)$")

    def __init__(self, items: Optional[List[Dict[str, Any]]] = None, count_value: Optional[str] = None):
        self.items = items or []
        self.count_value = count_value
        self.select_calls: List[Dict[str, Any]] = []
        self.get_attributes_calls: List[Dict[str, Any]] = []
        self.attributes_by_name = {item['Name']: item['Attributes'] for item in self.items}

    def select(self, **kwargs) -> Dict[str, Any]:
        self.select_calls.append(kwargs)
        expression = kwargs['SelectExpression']
        if expression.startswith("select count(*)"):
            value = self.count_value if self.count_value is not None else str(len(self.items))
            return {'Items': [{'Name': 'Domain', 'Attributes': [{'Name': 'Count', 'Value': value}]}]}

        limit = int(self._LIMIT.search(expression).group(1))
        token = kwargs.get('NextToken')
        start = int(token.split(':')[1]) if token else 0
        batch = self.items[start:start + limit]
        response: Dict[str, Any] = {'Items': batch}
        if start + limit < len(self.items):
            response['NextToken'] = f"cursor:{start + limit}"
        return response

    def get_attributes(self, **kwargs) -> Dict[str, Any]:
        self.get_attributes_calls.append(kwargs)
        attributes = self.attributes_by_name.get(kwargs['ItemName'])
        if attributes is None:
            return {'ResponseMetadata': {}}
        return {'Attributes': attributes, 'ResponseMetadata': {}}
