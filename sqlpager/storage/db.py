from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sqlpager.constants import COUNT_RESULT_TYPE
from sqlpager.interceptor import PageInterceptor
from sqlpager.logging import logger
from sqlpager.schemas.page import Page
from sqlpager.schemas.statement import BoundSql, MappedStatement, RowBounds

# Bind name of a scalar (non-mapping) call parameter
SCALAR_PARAMETER_NAME = "value"


def bind_parameters(
    parameter: Any, additional_parameters: Mapping[str, Any] | None = None
) -> dict[str, Any]:
    """
    Convert a call parameter into SQLAlchemy bind values.

    Page objects are pagination instructions, not bind values, and are
    dropped. Additional parameters override parameter values of the same name.

    Args:
        parameter: Mapping, pydantic model, Page, scalar or None.
        additional_parameters: Extra bind values of the bound SQL.

    Returns:
        Dictionary of bind values for text() queries.

    Example:
        >>> bind_parameters({"active": 1, "page": Page()})
        {'active': 1}
        >>> bind_parameters(42)
        {'value': 42}
    """
    if parameter is None or isinstance(parameter, Page):
        params: dict[str, Any] = {}
    elif isinstance(parameter, Mapping):
        params = {
            str(key): value
            for key, value in parameter.items()
            if not isinstance(value, Page)
        }
    elif isinstance(parameter, BaseModel):
        params = {
            field: getattr(parameter, field)
            for field in type(parameter).model_fields
            if not isinstance(getattr(parameter, field), Page)
        }
    else:
        params = {SCALAR_PARAMETER_NAME: parameter}

    if additional_parameters:
        params.update(additional_parameters)
    return params


class SQLAlchemyExecutor:
    """
    Host execution capability over an async SQLAlchemy session.

    Implements sqlpager.protocols.ExecuteFn: runs the SQL override when one
    is given (count/page queries) and the statement's own SQL otherwise.
    Non-default RowBounds are applied in memory after fetching.

    Example:
        ```python
        async with async_session() as session:
            executor = SQLAlchemyExecutor(session)
            rows = await executor(statement, {"active": 1}, RowBounds.DEFAULT, None)
        ```
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __call__(
        self,
        statement: MappedStatement,
        parameter: Any,
        row_bounds: RowBounds,
        bound_sql: BoundSql | None,
    ) -> list[Any]:
        if bound_sql is None:
            sql = statement.sql
            params = bind_parameters(parameter)
        else:
            sql = bound_sql.sql
            params = bind_parameters(
                bound_sql.parameter, bound_sql.additional_parameters
            )

        query = text(sql)

        try:
            result = await self.session.execute(query, params)
        except SQLAlchemyError as ex:
            logger.error(f"Statement {statement.id} failed: {ex}")
            raise

        if statement.result_type == COUNT_RESULT_TYPE:
            rows: list[Any] = list(result.scalars().all())
        else:
            rows = [dict(row._mapping) for row in result.all()]

        if not row_bounds.is_default:
            rows = rows[row_bounds.offset : row_bounds.offset + row_bounds.limit]
        return rows


async def paginate_statement(
    session: AsyncSession,
    statement: MappedStatement,
    parameter: Any = None,
    *,
    interceptor: PageInterceptor | None = None,
    row_bounds: RowBounds = RowBounds.DEFAULT,
) -> Page | list[Any]:
    """
    Execute a statement through the page interceptor on a SQLAlchemy session.

    Args:
        session: Async SQLAlchemy session.
        statement: Statement to execute.
        parameter: Call parameter; include a Page to get a paginated result.
        interceptor: Interceptor to use. A default one is created if None.
        row_bounds: In-memory row bounds for statements that are not
            paginated.

    Returns:
        Page when the statement was paginated, otherwise the list of rows.

    Example:
        ```python
        statement = MappedStatement(
            id="users.active", sql="SELECT * FROM users WHERE active = :active"
        )
        page = await paginate_statement(
            session,
            statement,
            {"active": 1, "page": Page(page_num=2, page_size=10)},
        )
        ```
    """
    if interceptor is None:
        interceptor = PageInterceptor()

    return await interceptor.handle(
        statement,
        statement.sql,
        parameter,
        None,
        SQLAlchemyExecutor(session),
        row_bounds,
    )
