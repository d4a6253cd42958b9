"""
Protocol definition for pagination dialects.

Uses Python's structural subtyping (Protocol) to define the interface for
dialects without requiring explicit inheritance. This follows the same
pattern as sqlpager.protocols.StatementCache.
"""

from typing import Any, Mapping, Protocol, runtime_checkable

from sqlpager.schemas.page import OrderType, Page
from sqlpager.schemas.statement import BoundSql, MappedStatement


@runtime_checkable
class Dialect(Protocol):
    """
    Protocol for pagination dialects.

    A dialect decides whether a statement is pageable and rewrites its SQL
    into a count query and a bounded page query. Dialects are immutable after
    construction and shared by all concurrent requests.

    Example:
        ```python
        class FirebirdDialect(GenericDialect):
            name = "firebird"

            def bound_sql(self, sql: str, offset: int, limit: int) -> str:
                return f"{sql} ROWS {offset + 1} TO {offset + limit}"


        # Type-checks as Dialect
        dialect: Dialect = FirebirdDialect()
        ```
    """

    name: str

    def can_page(
        self, statement: MappedStatement, sql: str, parameter: Any
    ) -> bool:
        """
        Decide whether the statement should be paginated.

        Must be a pure predicate: no side effects, no exceptions for a
        missing page parameter.

        Args:
            statement: Identity of the statement being executed.
            sql: Bound SQL of this call.
            parameter: Call parameter that may carry a Page.

        Returns:
            True if the call should be paginated.
        """
        ...

    def extract_page_parameter(self, parameter: Any) -> Page:
        """
        Locate the Page embedded in the call parameter.

        Raises:
            MissingPageParameterError: If no Page can be found.
        """
        ...

    def build_count_sql(
        self,
        sql: str,
        parameter: Any,
        extra_bindings: Mapping[str, Any] | None,
    ) -> BoundSql:
        """
        Build the COUNT query for the statement.

        Bind placeholders of the original SQL are kept untouched so the
        original parameter binds to the count query unchanged.
        """
        ...

    def build_page_sql(
        self,
        sql: str,
        parameter: Any,
        offset: int,
        limit: int,
        orders: Mapping[str, OrderType],
        extra_bindings: Mapping[str, Any] | None = None,
    ) -> BoundSql:
        """
        Build the bounded page query with ordering applied.
        """
        ...

    def assemble_page(
        self, rows: list[Any], page: Page, total_rows: int
    ) -> Page:
        """
        Build the page result from raw rows and page metadata.
        """
        ...
