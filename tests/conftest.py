"""
Pytest Configuration and Shared Fixtures

This module contains pytest configuration and shared fixtures used across
all test suites (unit, integration).

Fixtures:
    - redis_client: Redis client on a dedicated test database (skips if unavailable)
    - clean_redis: Flushes the test database before/after each test

Architecture Notes:
    - Unit tests need no external services (in-memory repositories, mocks)
    - Integration tests use a real Redis and are skipped when it is not running

Usage:
    def test_something(clean_redis):
        repo = RedisOrderRepository(redis_client=clean_redis)
"""

import logging
import os

import pytest
from redis import Redis
from redis.exceptions import RedisError

# Configure logger for tests
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Database 15 keeps test data away from development data in db 0
TEST_REDIS_URL = os.getenv("TEST_REDIS_URL", "redis://localhost:6379/15")


# ============================================================================
# REDIS FIXTURES
# ============================================================================


@pytest.fixture(scope="session")
def redis_client():
    """
    Provide Redis client for integration tests.

    Scope: session (shared across all tests in session)

    Skips the requesting test if Redis does not answer PING.
    Run `docker-compose up -d redis` to enable these tests.
    """
    client = Redis.from_url(
        TEST_REDIS_URL, decode_responses=True, socket_connect_timeout=1
    )
    try:
        client.ping()
    except RedisError as e:
        pytest.skip(f"Redis is not available at {TEST_REDIS_URL}: {e}")

    yield client
    client.close()


@pytest.fixture(scope="function")
def clean_redis(redis_client):
    """
    Clean Redis test database before and after each test.

    Yields:
        redis.Redis: Clean Redis client
    """
    redis_client.flushdb()
    logger.info("Redis database flushed (before test)")

    yield redis_client

    redis_client.flushdb()
    logger.info("Redis database flushed (after test)")


# ============================================================================
# PYTEST CONFIGURATION
# ============================================================================


def pytest_configure(config):
    """
    Pytest configuration hook.

    Markers:
        - integration: Integration tests (require Redis)
        - unit: Unit tests (no external dependencies)

    Usage:
        # Run all except integration:
        # pytest -m "not integration"
    """
    config.addinivalue_line(
        "markers", "integration: Integration tests (require Redis)"
    )
    config.addinivalue_line(
        "markers", "unit: Unit tests (no external dependencies)"
    )
