"""
Pytest configuration and fixtures for testing.

This module provides shared fixtures for statements, pages, executors and
interceptors used across the unit and integration tests.
"""

import pytest

from sqlpager.dialects import GenericDialect
from sqlpager.interceptor import PageInterceptor
from sqlpager.schemas.page import Page
from sqlpager.schemas.statement import MappedStatement
from sqlpager.storage.statement_cache import MemoryStatementCache


@pytest.fixture
def statement():
    """
    Provides the statement used by most interceptor scenarios.

    Returns:
        MappedStatement: Statement selecting active users
    """
    return MappedStatement(
        id="UserMapper.select_active",
        sql="SELECT * FROM users WHERE active = ?",
    )


@pytest.fixture
def page():
    """
    Provides a request for the second page of ten rows.

    Returns:
        Page: Page request with page_num=2, page_size=10
    """
    return Page(page_num=2, page_size=10)


@pytest.fixture
def statement_cache():
    """
    Provides an empty unbounded statement cache.

    Returns:
        MemoryStatementCache: Fresh cache instance
    """
    return MemoryStatementCache()


@pytest.fixture
def interceptor(statement_cache):
    """
    Provides an interceptor with the generic dialect and a fresh cache.

    Args:
        statement_cache: Fixture providing the statement cache

    Returns:
        PageInterceptor: Interceptor instance
    """
    return PageInterceptor(
        dialect=GenericDialect(), statement_cache=statement_cache
    )
