"""
SQL dialects for count and page query rewriting.

This package implements the Strategy pattern for pagination syntax, keeping
each database's bounding clause in its own small class behind the Dialect
protocol. The dialect is selected once when the interceptor is built.

Example:
    ```python
    from sqlpager.dialects import select_dialect
    from sqlpager.schemas.page import Page

    dialect = select_dialect("oracle")
    page = Page(page_num=3, page_size=20)
    count = dialect.build_count_sql("SELECT * FROM orders", page, None)
    bounded = dialect.build_page_sql(
        "SELECT * FROM orders", page, page.offset, page.limit, page.orders
    )
    ```
"""

from sqlpager.dialects.db2 import DB2Dialect
from sqlpager.dialects.factory import DIALECTS, select_dialect
from sqlpager.dialects.generic import GenericDialect, find_page
from sqlpager.dialects.mysql import MySQLDialect
from sqlpager.dialects.oracle import Oracle12cDialect, OracleDialect
from sqlpager.dialects.protocol import Dialect

__all__ = [
    "Dialect",
    "GenericDialect",
    "MySQLDialect",
    "OracleDialect",
    "Oracle12cDialect",
    "DB2Dialect",
    "DIALECTS",
    "find_page",
    "select_dialect",
]
