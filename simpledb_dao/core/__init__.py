"""
Core infrastructure components for SimpleDB reads.

This module contains the building blocks used by the DAO facade:
- DomainGateway: Thin wrapper over the boto3 sdb client, bound to one domain
- Paginator: Batch fetching with continuation tokens
- CountQueryExecutor: count(*) queries and result parsing
"""

from .count_queries import CountQueryExecutor, parse_count
from .domain_gateway import DomainGateway, create_domain_gateway, map_simpledb_error
from .paginator import Paginator

__all__ = [
    "CountQueryExecutor",
    "DomainGateway",
    "Paginator",
    "create_domain_gateway",
    "map_simpledb_error",
    "parse_count",
]
