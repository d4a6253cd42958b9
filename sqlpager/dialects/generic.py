"""
Generic pagination dialect (LIMIT/OFFSET).

Works for PostgreSQL, SQLite, H2, HSQLDB and any database accepting the
standard `LIMIT <limit> OFFSET <offset>` suffix. Other dialects subclass it
and override only the bounding syntax.
"""

from typing import Any, Mapping

from pydantic import BaseModel

from sqlpager.constants import COUNT_WRAP_ALIAS
from sqlpager.dialects.sql_utils import (
    apply_orders,
    is_select,
    split_order_by,
    strip_statement,
    wrap_bounded,
)
from sqlpager.exceptions import MissingPageParameterError
from sqlpager.schemas.page import OrderType, Page
from sqlpager.schemas.statement import BoundSql, MappedStatement

# Mapping key checked first when looking for the page parameter
PAGE_PARAMETER_KEY = "page"


def find_page(parameter: Any) -> Page | None:
    """
    Find the Page carried by a call parameter.

    Lookup order: the parameter itself, the mapping value under "page",
    any other mapping value, then fields of a pydantic model or public
    attributes of a plain object.

    Args:
        parameter: Call parameter.

    Returns:
        The Page if found, None otherwise.
    """
    if parameter is None:
        return None

    if isinstance(parameter, Page):
        return parameter

    if isinstance(parameter, Mapping):
        candidate = parameter.get(PAGE_PARAMETER_KEY)
        if isinstance(candidate, Page):
            return candidate
        values = parameter.values()
    elif isinstance(parameter, BaseModel):
        values = (
            getattr(parameter, field) for field in type(parameter).model_fields
        )
    elif hasattr(parameter, "__dict__"):
        values = (
            value
            for key, value in vars(parameter).items()
            if not key.startswith("_")
        )
    else:
        return None

    return next((value for value in values if isinstance(value, Page)), None)


class GenericDialect:
    """
    LIMIT/OFFSET dialect and base class of all built-in dialects.

    Subclasses customise:
    - bound_sql(): the bounding syntax wrapped around the ordered query
    - count_alias: alias of the derived table inside COUNT(*)
    - helper_columns: columns added by bound_sql() that are dropped from
      mapping rows in assemble_page()

    Example:
        ```python
        dialect = GenericDialect()
        page = Page(page_num=2, page_size=10)
        bound = dialect.build_page_sql(
            "SELECT * FROM users", page, page.offset, page.limit, page.orders
        )
        bound.sql  # 'SELECT * FROM users LIMIT 10 OFFSET 10'
        ```
    """

    name = "generic"
    count_alias = COUNT_WRAP_ALIAS
    helper_columns: tuple[str, ...] = ()

    def can_page(
        self, statement: MappedStatement, sql: str, parameter: Any
    ) -> bool:
        return is_select(sql) and find_page(parameter) is not None

    def extract_page_parameter(self, parameter: Any) -> Page:
        page = find_page(parameter)
        if page is None:
            raise MissingPageParameterError(
                f"No Page found in parameter of type {type(parameter).__name__}"
            )
        return page

    def build_count_sql(
        self,
        sql: str,
        parameter: Any,
        extra_bindings: Mapping[str, Any] | None,
    ) -> BoundSql:
        # ORDER BY is redundant under COUNT and rejected inside derived
        # tables by some databases
        body, _ = split_order_by(strip_statement(sql))
        return BoundSql(
            sql=f"SELECT COUNT(*) FROM ({body}) {self.count_alias}",
            parameter=parameter,
            additional_parameters=dict(extra_bindings or {}),
        )

    def build_page_sql(
        self,
        sql: str,
        parameter: Any,
        offset: int,
        limit: int,
        orders: Mapping[str, OrderType],
        extra_bindings: Mapping[str, Any] | None = None,
    ) -> BoundSql:
        ordered = apply_orders(wrap_bounded(strip_statement(sql)), orders)
        return BoundSql(
            sql=self.bound_sql(ordered, offset, limit),
            parameter=parameter,
            additional_parameters=dict(extra_bindings or {}),
        )

    def bound_sql(self, sql: str, offset: int, limit: int) -> str:
        """
        Append the bounding clause to an ordered statement.

        Args:
            sql: Statement with ordering applied.
            offset: Rows to skip.
            limit: Rows to return.

        Returns:
            Bounded statement.
        """
        return f"{sql} LIMIT {limit} OFFSET {offset}"

    def assemble_page(
        self, rows: list[Any], page: Page, total_rows: int
    ) -> Page:
        if self.helper_columns:
            rows = [self._drop_helper_columns(row) for row in rows]
        return page.model_copy(
            update={"rows": list(rows), "total_rows": total_rows}
        )

    def _drop_helper_columns(self, row: Any) -> Any:
        if not isinstance(row, Mapping):
            return row
        # Oracle reports unquoted aliases in upper case
        helpers = {column.lower() for column in self.helper_columns}
        return {
            key: value
            for key, value in row.items()
            if not (isinstance(key, str) and key.lower() in helpers)
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
