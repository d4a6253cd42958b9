"""
Tests for the bounding syntax of the built-in database dialects.
"""

import pytest

from sqlpager.dialects import (
    DB2Dialect,
    Dialect,
    GenericDialect,
    MySQLDialect,
    Oracle12cDialect,
    OracleDialect,
)
from sqlpager.schemas.page import OrderType, Page

SQL = "SELECT * FROM users"


@pytest.mark.parametrize(
    "dialect",
    [
        GenericDialect(),
        MySQLDialect(),
        OracleDialect(),
        Oracle12cDialect(),
        DB2Dialect(),
    ],
)
def test_builtin_dialects_implement_protocol(dialect):
    assert isinstance(dialect, Dialect)


def test_mysql_page_sql():
    bound = MySQLDialect().build_page_sql(SQL, Page(), 20, 10, {})

    assert bound.sql == "SELECT * FROM users LIMIT 20, 10"


def test_oracle_page_sql():
    bound = OracleDialect().build_page_sql(SQL, Page(), 10, 10, {})

    assert bound.sql == (
        "SELECT * FROM ( SELECT tmp_page.*, ROWNUM row_id FROM "
        "( SELECT * FROM users ) tmp_page WHERE ROWNUM <= 20 ) "
        "WHERE row_id > 10"
    )


def test_oracle_orders_inside_inner_block():
    bound = OracleDialect().build_page_sql(
        SQL, Page(), 0, 5, {"name": OrderType.DESC}
    )

    assert "( SELECT * FROM users ORDER BY name DESC ) tmp_page" in bound.sql


def test_oracle_count_alias():
    bound = OracleDialect().build_count_sql(SQL, Page(), None)

    assert bound.sql == "SELECT COUNT(*) FROM (SELECT * FROM users) count_wrap"


def test_oracle12c_page_sql():
    bound = Oracle12cDialect().build_page_sql(SQL, Page(), 30, 15, {})

    assert bound.sql == (
        "SELECT * FROM users OFFSET 30 ROWS FETCH NEXT 15 ROWS ONLY"
    )


def test_db2_page_sql():
    bound = DB2Dialect().build_page_sql(SQL, Page(), 10, 10, {})

    assert bound.sql == (
        "SELECT * FROM ( SELECT tmp_page.*, ROW_NUMBER() OVER() AS row_id "
        "FROM ( SELECT * FROM users ) AS tmp_page ) AS paged "
        "WHERE row_id BETWEEN 11 AND 20"
    )


@pytest.mark.parametrize("dialect", [OracleDialect(), DB2Dialect()])
def test_row_id_removed_from_page_rows(dialect):
    rows = [
        {"ID": 11, "NAME": "user11", "ROW_ID": 11},
        {"id": 12, "name": "user12", "row_id": 12},
    ]

    result = dialect.assemble_page(rows, Page(page_num=2), 25)

    assert result.rows == [
        {"ID": 11, "NAME": "user11"},
        {"id": 12, "name": "user12"},
    ]


def test_row_id_kept_by_dialects_without_helper_column():
    rows = [{"id": 1, "row_id": 7}]

    for dialect in (GenericDialect(), Oracle12cDialect()):
        assert dialect.assemble_page(rows, Page(), 1).rows == rows


def test_non_mapping_rows_untouched():
    rows = [(1, "user1", 1)]

    assert OracleDialect().assemble_page(rows, Page(), 1).rows == rows
