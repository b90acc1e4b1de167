from unittest.mock import MagicMock

import pytest
import redis

from linkredirect.dao.redis.link_redis_dao import clear_link_cache


@pytest.fixture
def app_prefix() -> str:
    """Provide a consistent Redis key prefix for testing."""
    return 'testapp:test'


@pytest.fixture
def redis_client() -> redis.Redis:
    """Mock a Redis client."""
    client = MagicMock(spec=redis.Redis)
    client.connection_pool = MagicMock(
        spec=redis.ConnectionPool,
        connection_kwargs={'host': '203.0.113.1', 'port': 18000, 'db': 5},
    )
    client.ping.return_value = True
    client.get.return_value = None
    return client


@pytest.fixture(autouse=True)
def _clear_link_cache():
    clear_link_cache()
    yield
    clear_link_cache()
