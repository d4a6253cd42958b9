"""
Page interceptor: transparent count-then-page execution of SELECT statements.

The interceptor sits between a caller and the host execution capability.
Statements whose parameter carries a Page are executed twice: once as a COUNT
query and, when rows exist, once as a dialect-specific bounded query. Every
other statement is delegated to the host untouched.
"""

import time
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from sqlpager.dialects import Dialect, select_dialect
from sqlpager.logging import clear_log_context, logger, set_log_context
from sqlpager.protocols import ExecuteFn, StatementCache
from sqlpager.schemas.page import Page
from sqlpager.schemas.statement import MappedStatement, RowBounds
from sqlpager.settings import app_settings
from sqlpager.storage.statement_cache import create_statement_cache
from sqlpager.utils.cache_keys import count_statement_key
from sqlpager.utils.metrics import MetricsCollector


class InterceptorProperties(BaseModel):
    """
    Recognised interceptor options.

    Missing options fall back to settings; unknown options are ignored.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    dialect: str = app_settings.PAGE_DIALECT
    cache_type: str = Field(
        default=app_settings.MS_CACHE_TYPE, alias="cacheType"
    )
    cache_size: int = Field(
        default=app_settings.MS_CACHE_SIZE, alias="cacheSize"
    )
    cache_ttl: int = Field(
        default=app_settings.MS_CACHE_TTL, alias="cacheTtl", gt=0
    )


def normalize_count(rows: Sequence[Any]) -> int:
    """
    Reduce the rows returned by a count query to a single total.

    - No rows → 0
    - More than one row → number of rows (drivers that answer with one row
      per group instead of one aggregate; best effort, not a GROUP BY fix)
    - One row → its value (int, first mapping value or first column)

    Args:
        rows: Rows returned by the count query.

    Returns:
        Total number of rows.
    """
    if not rows:
        return 0
    if len(rows) > 1:
        return len(rows)

    value = rows[0]
    if isinstance(value, Mapping):
        value = next(iter(value.values()), 0)
    elif isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        value = value[0] if value else 0
    return int(value)


class PageInterceptor:
    """
    Pagination engine invoked from the host query pipeline.

    Holds an immutable dialect and a shared count statement cache; all other
    state is local to a handle() call, so one interceptor serves any number
    of concurrent requests.

    Example:
        ```python
        interceptor = PageInterceptor.from_properties(
            {"dialect": "mysql", "cacheSize": 500}
        )
        page = Page(page_num=2, page_size=10)
        result = await interceptor.handle(
            statement,
            statement.sql,
            {"active": 1, "page": page},
            {},
            executor,
        )
        result.rows, result.total_rows
        ```
    """

    def __init__(
        self,
        dialect: Dialect | None = None,
        statement_cache: StatementCache | None = None,
    ):
        """
        Initialize the interceptor.

        Args:
            dialect: Pagination dialect. Defaults to the PAGE_DIALECT setting.
            statement_cache: Count statement cache. Defaults to the store
                selected by MS_CACHE_TYPE.
        """
        self.dialect = (
            dialect if dialect is not None
            else select_dialect(app_settings.PAGE_DIALECT)
        )
        self.statement_cache = (
            statement_cache if statement_cache is not None
            else create_statement_cache()
        )

    @classmethod
    def from_properties(
        cls, properties: Mapping[str, Any] | None = None
    ) -> "PageInterceptor":
        """
        Build an interceptor from an options map.

        Args:
            properties: Options such as {"dialect": "oracle",
                "cacheType": "lru", "cacheSize": 1000, "cacheTtl": 3600}.

        Returns:
            Configured interceptor.

        Raises:
            pydantic.ValidationError: If an option has an invalid value.
            DialectUnsupportedError: If a dialect import path is unusable.
            ConfigurationError: If the cache type is unknown.
        """
        options = InterceptorProperties.model_validate(dict(properties or {}))
        interceptor = cls(
            dialect=select_dialect(options.dialect),
            statement_cache=create_statement_cache(
                options.cache_type, options.cache_size, options.cache_ttl
            ),
        )
        logger.info(
            f"Page interceptor configured: dialect={interceptor.dialect.name}, "
            f"cache={type(interceptor.statement_cache).__name__}"
        )
        return interceptor

    async def handle(
        self,
        statement: MappedStatement,
        sql: str,
        parameter: Any,
        extra_bindings: Mapping[str, Any] | None,
        execute_fn: ExecuteFn,
        row_bounds: RowBounds = RowBounds.DEFAULT,
    ) -> Page | list[Any]:
        """
        Execute a statement, paginating it when its parameter carries a Page.

        Args:
            statement: Identity of the statement being executed.
            sql: Bound SQL of this call.
            parameter: Call parameter.
            extra_bindings: Additional bind values produced while binding
                the SQL (e.g. foreach items), passed through to the host.
            execute_fn: Host execution capability.
            row_bounds: Row bounds requested by the caller; only used for
                statements that are not paginated.

        Returns:
            Page with rows and total_rows for paginated statements,
            otherwise the host's result unchanged.

        Raises:
            MissingPageParameterError: If the dialect accepted the statement
                but no Page can be extracted.
            Exception: Any error of execute_fn, unchanged.
        """
        if not self.dialect.can_page(statement, sql, parameter):
            MetricsCollector.record_request(self.dialect.name, "passthrough")
            return await execute_fn(statement, parameter, row_bounds, None)

        set_log_context(statement_id=statement.id, dialect=self.dialect.name)
        try:
            page = self.dialect.extract_page_parameter(parameter)

            total_rows = await self._query_count(
                statement, sql, parameter, extra_bindings, execute_fn
            )
            if total_rows == 0:
                logger.debug(f"No rows for {statement.id}, skipping page query")
                page.page_num = 1
                MetricsCollector.record_request(self.dialect.name, "empty")
                return self.dialect.assemble_page([], page, 0)

            result = await self._query_page(
                statement,
                sql,
                parameter,
                extra_bindings,
                execute_fn,
                page,
                total_rows,
            )
            MetricsCollector.record_request(self.dialect.name, "paged")
            return result
        finally:
            clear_log_context()

    async def _query_count(
        self,
        statement: MappedStatement,
        sql: str,
        parameter: Any,
        extra_bindings: Mapping[str, Any] | None,
        execute_fn: ExecuteFn,
    ) -> int:
        """
        Run the count query through the cached count form of the statement.

        Returns:
            Total number of rows matched by the statement.
        """
        cache_key = count_statement_key(statement, parameter)
        count_statement = await self.statement_cache.get(cache_key)
        if count_statement is None:
            MetricsCollector.record_statement_cache_miss()
            count_statement = statement.count_statement()
            await self.statement_cache.put(cache_key, count_statement)
            logger.debug(f"Derived count statement {count_statement.id}")
        else:
            MetricsCollector.record_statement_cache_hit()

        count_sql = self.dialect.build_count_sql(sql, parameter, extra_bindings)

        started = time.perf_counter()
        rows = await execute_fn(
            count_statement, parameter, RowBounds.DEFAULT, count_sql
        )
        MetricsCollector.record_step_duration(
            "count", time.perf_counter() - started
        )

        total_rows = normalize_count(rows)
        logger.debug(f"Count for {statement.id}: {total_rows}")
        return total_rows

    async def _query_page(
        self,
        statement: MappedStatement,
        sql: str,
        parameter: Any,
        extra_bindings: Mapping[str, Any] | None,
        execute_fn: ExecuteFn,
        page: Page,
        total_rows: int,
    ) -> Page:
        """
        Run the bounded page query and assemble the page result.

        The query runs with RowBounds.DEFAULT: the bounds are already part
        of the SQL and must not be applied a second time in memory.
        """
        page_sql = self.dialect.build_page_sql(
            sql,
            parameter,
            page.offset,
            page.limit,
            page.orders,
            extra_bindings,
        )

        started = time.perf_counter()
        rows = await execute_fn(
            statement, parameter, RowBounds.DEFAULT, page_sql
        )
        MetricsCollector.record_step_duration(
            "page", time.perf_counter() - started
        )

        return self.dialect.assemble_page(rows, page, total_rows)
