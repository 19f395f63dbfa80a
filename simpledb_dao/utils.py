"""
Utility Functions for the SimpleDB DAO

This module provides the small pure helpers shared by the gateway, the
paginator and the count executor:

1. Raw attribute handling (decoding, grouping into a multi-map)
2. Select expression building (domain quoting, limits, count queries)
3. Continuation token normalisation
"""

import base64
import binascii
import logging
from collections import defaultdict
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

# SimpleDB never returns more than this many items per listing request
MAX_BATCH_SIZE = 250

SELECT_ALL = "select * from {domain} limit {limit}"
SELECT_COUNT_ALL = "select count(*) from {domain}"
SELECT_COUNT_WHERE = "select count(*) from {domain} where {where}"


# =============================================================================
# Raw Attribute Utilities
# =============================================================================

def _decode(value: str, encoding: Optional[str]) -> str:
    """Decode a base64-flagged string.

    Raises:
        ValueError: If the value is not valid base64 or not UTF-8 once decoded
    """
    if encoding != 'base64':
        return value
    try:
        return base64.b64decode(value, validate=True).decode('utf-8')
    except (binascii.Error, UnicodeDecodeError) as e:
        raise ValueError(f"Invalid base64-encoded value: {value!r}") from e


def decode_item_name(item: Dict[str, Any]) -> str:
    """Return the real name of a raw SimpleDB item.

    Select flags item names that are not valid XML with AlternateNameEncoding
    on the item itself.

    Raises:
        ValueError: If the name is flagged as base64 but does not decode
    """
    return _decode(item['Name'], item.get('AlternateNameEncoding'))


def decode_attribute(attribute: Dict[str, Any]) -> tuple[str, str]:
    """Return the (name, value) pair of a raw SimpleDB attribute.

    SimpleDB base64-encodes names and values that are not valid XML and flags
    them with AlternateNameEncoding / AlternateValueEncoding.

    Example:
        >>> decode_attribute({'Name': 'color', 'Value': 'cmVk', 'AlternateValueEncoding': 'base64'})
        ('color', 'red')
    """
    name = _decode(attribute['Name'], attribute.get('AlternateNameEncoding'))
    value = _decode(attribute['Value'], attribute.get('AlternateValueEncoding'))
    return name, value


def attributes_to_multimap(attributes: List[Dict[str, Any]]) -> Dict[str, List[str]]:
    """Group a raw attribute list into a name -> values multi-map.

    Args:
        attributes: Attribute dicts as returned by Select or GetAttributes

    Returns:
        Dictionary mapping each attribute name to all of its values
    """
    grouped: Dict[str, List[str]] = defaultdict(list)
    for attribute in attributes:
        name, value = decode_attribute(attribute)
        grouped[name].append(value)
    return dict(grouped)


# =============================================================================
# Select Expression Utilities
# =============================================================================

def quote_domain_name(domain_name: str) -> str:
    """Quote a domain name for use in a select expression.

    Example:
        >>> quote_domain_name('my-domain')
        '`my-domain`'
    """
    return "`" + domain_name.replace("`", "``") + "`"


def clamp_batch_size(max_count: Optional[int]) -> int:
    """Return the effective page size for a listing request.

    None, zero and anything above MAX_BATCH_SIZE become MAX_BATCH_SIZE;
    other positive values are kept. Negative values are rejected by the
    caller before reaching this function.
    """
    if not max_count or max_count > MAX_BATCH_SIZE:
        return MAX_BATCH_SIZE
    return max_count


def build_select_all(domain_name: str, limit: int) -> str:
    return SELECT_ALL.format(domain=quote_domain_name(domain_name), limit=limit)


def build_count_expression(domain_name: str, where: Optional[str] = None) -> str:
    """Build a count(*) select expression.

    The where fragment is inserted verbatim; escaping its values is the
    caller's responsibility.

    Example:
        >>> build_count_expression('users', "age > '030'")
        "select count(*) from `users` where age > '030'"
    """
    domain = quote_domain_name(domain_name)
    if where:
        return SELECT_COUNT_WHERE.format(domain=domain, where=where)
    return SELECT_COUNT_ALL.format(domain=domain)


# =============================================================================
# Continuation Token Utilities
# =============================================================================

def normalize_token(token: Optional[str]) -> Optional[str]:
    """Treat a missing and an empty continuation token the same way."""
    return token or None
