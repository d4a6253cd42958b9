"""
Integration tests running the page interceptor against in-memory SQLite.

Test Coverage:
- Count then page over a real database through SQLAlchemyExecutor
- Requested ordering and SQL-side bounds
- Zero-count short-circuit
- Passthrough of statements without a Page
- Count statement cache reuse across requests
"""

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from sqlpager.dialects import GenericDialect, MySQLDialect
from sqlpager.interceptor import PageInterceptor
from sqlpager.schemas.page import Page
from sqlpager.schemas.statement import MappedStatement
from sqlpager.storage.db import paginate_statement
from sqlpager.storage.statement_cache import MemoryStatementCache

pytestmark = pytest.mark.integration

ACTIVE_USERS = MappedStatement(
    id="UserMapper.select_active",
    sql="SELECT id, name FROM users WHERE active = :active",
)


@pytest.fixture
async def session():
    """
    Provides a session on an in-memory database holding 30 users, of which
    ids 1..25 are active.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", poolclass=StaticPool
    )
    async with engine.begin() as conn:
        await conn.execute(
            text(
                "CREATE TABLE users ("
                "id INTEGER PRIMARY KEY, name TEXT NOT NULL, active INTEGER)"
            )
        )
        await conn.execute(
            text("INSERT INTO users (id, name, active) VALUES (:id, :name, :active)"),
            [
                {"id": i, "name": f"user{i:02d}", "active": int(i <= 25)}
                for i in range(1, 31)
            ],
        )

    async with AsyncSession(engine) as session:
        yield session

    await engine.dispose()


@pytest.fixture
def sqlite_interceptor():
    return PageInterceptor(
        dialect=GenericDialect(), statement_cache=MemoryStatementCache()
    )


@pytest.mark.asyncio
async def test_second_page(session, sqlite_interceptor):
    page = Page(page_num=2, page_size=10).order_by("id")

    result = await paginate_statement(
        session,
        ACTIVE_USERS,
        {"active": 1, "page": page},
        interceptor=sqlite_interceptor,
    )

    assert result.total_rows == 25
    assert result.pages == 3
    assert [row["id"] for row in result.rows] == list(range(11, 21))


@pytest.mark.asyncio
async def test_last_partial_page_descending(session, sqlite_interceptor):
    page = Page(page_num=3, page_size=10).order_by("id", "desc")

    result = await paginate_statement(
        session,
        ACTIVE_USERS,
        {"active": 1, "page": page},
        interceptor=sqlite_interceptor,
    )

    assert result.total_rows == 25
    assert [row["id"] for row in result.rows] == [5, 4, 3, 2, 1]
    assert result.has_more is False


@pytest.mark.asyncio
async def test_no_matching_rows(session, sqlite_interceptor):
    page = Page(page_num=4, page_size=10)

    result = await paginate_statement(
        session,
        ACTIVE_USERS,
        {"active": 7, "page": page},
        interceptor=sqlite_interceptor,
    )

    assert result.total_rows == 0
    assert result.rows == []
    assert result.page_num == 1


@pytest.mark.asyncio
async def test_statement_without_page(session, sqlite_interceptor):
    rows = await paginate_statement(
        session, ACTIVE_USERS, {"active": 0}, interceptor=sqlite_interceptor
    )

    assert [row["id"] for row in rows] == [26, 27, 28, 29, 30]


@pytest.mark.asyncio
async def test_existing_order_by_removed_from_count(session, sqlite_interceptor):
    statement = MappedStatement(
        id="UserMapper.select_sorted",
        sql="SELECT id, name FROM users ORDER BY name DESC",
    )

    result = await paginate_statement(
        session,
        statement,
        Page(page_num=1, page_size=3),
        interceptor=sqlite_interceptor,
    )

    assert result.total_rows == 30
    assert [row["id"] for row in result.rows] == [30, 29, 28]


@pytest.mark.asyncio
async def test_mysql_bounds_accepted_by_sqlite(session):
    interceptor = PageInterceptor(
        dialect=MySQLDialect(), statement_cache=MemoryStatementCache()
    )
    page = Page(page_num=2, page_size=5).order_by("id")

    result = await paginate_statement(
        session, ACTIVE_USERS, {"active": 1, "page": page}, interceptor=interceptor
    )

    assert [row["id"] for row in result.rows] == [6, 7, 8, 9, 10]


@pytest.mark.asyncio
async def test_count_statement_reused(session):
    cache = MemoryStatementCache()
    interceptor = PageInterceptor(dialect=GenericDialect(), statement_cache=cache)

    for page_num in (1, 2, 3):
        await paginate_statement(
            session,
            ACTIVE_USERS,
            {"active": 1, "page": Page(page_num=page_num)},
            interceptor=interceptor,
        )

    assert len(cache) == 1
