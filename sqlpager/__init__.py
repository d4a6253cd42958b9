"""
sqlpager: transparent SQL pagination.

Turns an unbounded SELECT into a COUNT query plus a dialect-specific bounded
query whenever the call parameter carries a Page.
"""

from sqlpager.dialects import Dialect, GenericDialect, select_dialect
from sqlpager.exceptions import (
    ConfigurationError,
    DialectUnsupportedError,
    MissingPageParameterError,
    PaginationError,
)
from sqlpager.interceptor import PageInterceptor
from sqlpager.schemas.page import OrderType, Page
from sqlpager.schemas.statement import BoundSql, MappedStatement, RowBounds

__version__ = "0.1.0"

__all__ = [
    "BoundSql",
    "ConfigurationError",
    "Dialect",
    "DialectUnsupportedError",
    "GenericDialect",
    "MappedStatement",
    "MissingPageParameterError",
    "OrderType",
    "Page",
    "PageInterceptor",
    "PaginationError",
    "RowBounds",
    "select_dialect",
]
