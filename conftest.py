"""
Root conftest.py - Test configuration for all tests.

This file is automatically discovered by pytest and runs before any tests.
It sets up the test environment by configuring environment variables
BEFORE any application code (including Settings) is imported.
"""

import os

# Set environment variables BEFORE importing any app code
# This ensures Settings() loads the correct env file
os.environ["ENV_FILE"] = "env.test"

import pytest  # noqa: E402


@pytest.fixture(autouse=True)
def clear_memory_caches():
    """In-process caches must not leak between tests."""
    from app.api.common.evm.block_by_date import _block_timestamp_cache
    from app.api.market.cache import CoinMarketsCache

    CoinMarketsCache.clear()
    _block_timestamp_cache.clear()
    yield
    CoinMarketsCache.clear()
    _block_timestamp_cache.clear()
