"""
Protocol classes for the collaborators of the pagination engine.

Protocols define interfaces without requiring explicit inheritance. Any object
that implements the required methods can be plugged into PageInterceptor,
which keeps the host execution pipeline and the cache backing store
replaceable.

Example:
    ```python
    from sqlpager.protocols import ExecuteFn


    async def execute(statement, parameter, row_bounds, bound_sql):
        sql = bound_sql.sql if bound_sql else statement.sql
        return await run_on_my_driver(sql, parameter)


    fn: ExecuteFn = execute
    ```
"""

from typing import Any, Protocol, runtime_checkable

from sqlpager.schemas.statement import BoundSql, MappedStatement, RowBounds


@runtime_checkable
class StatementCache(Protocol):
    """
    Protocol for the count statement cache.

    A value stored under a key must stay a valid substitute for recomputing
    that key's value; eviction policy and TTL are left to the backing store.
    Implementations must tolerate concurrent get/put from multiple tasks.
    """

    async def get(self, key: str) -> MappedStatement | None:
        """
        Get cached statement.

        Args:
            key: Count statement fingerprint.

        Returns:
            Cached statement if present, None otherwise.
        """
        ...

    async def put(self, key: str, value: MappedStatement) -> None:
        """
        Store statement under key.

        Args:
            key: Count statement fingerprint.
            value: Count form of the original statement.
        """
        ...


class ExecuteFn(Protocol):
    """
    Execution capability supplied by the host query pipeline.

    Called with the statement identity, the original call parameter, the
    row bounds to apply in memory and an optional SQL override. When
    bound_sql is None the host runs the statement's own SQL.
    """

    async def __call__(
        self,
        statement: MappedStatement,
        parameter: Any,
        row_bounds: RowBounds,
        bound_sql: BoundSql | None,
    ) -> list[Any]: ...
