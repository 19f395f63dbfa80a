"""
Test configuration and fixtures for the SimpleDB DAO.

Provides a configuration fixture and DAO/gateway fixtures wired to the stub
``sdb`` client from tests.helpers.
"""

from unittest.mock import Mock

import pytest

from simpledb_dao import SimpleDBConfig, SimpleDBDAO
from simpledb_dao.core import DomainGateway

from tests.helpers import Customer, StubSDBClient, make_item


@pytest.fixture
def simpledb_config():
    """SimpleDB configuration for testing."""
    return SimpleDBConfig(
        aws_access_key_id="test_key",
        aws_secret_access_key="test_secret",
        region_name="us-east-1",
        endpoint_url=None,
        domain_prefix="",
    )


@pytest.fixture
def stub_client():
    """Stub client holding 300 customers."""
    return StubSDBClient([make_item(i) for i in range(300)])


@pytest.fixture
def gateway(simpledb_config, stub_client):
    """Gateway bound to the stub client."""
    return DomainGateway(simpledb_config, "customers", client=stub_client)


@pytest.fixture
def customer_dao(simpledb_config, gateway):
    """Customer DAO backed by the stub client."""
    return SimpleDBDAO(simpledb_config, Customer, gateway=gateway)


@pytest.fixture
def mock_client():
    """Plain Mock client for scripting raw responses."""
    client = Mock()
    client.select.return_value = {'Items': []}
    client.get_attributes.return_value = {}
    return client
