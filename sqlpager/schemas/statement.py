"""
Statement-level value objects exchanged with the host execution pipeline.

The host pipeline describes a prepared statement with MappedStatement, the
bound SQL of one call with BoundSql and in-memory row limiting with
RowBounds. The pagination engine never opens connections itself; it only
hands these objects back to the host's execute function.
"""

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from sqlpager.constants import (
    COUNT_RESULT_TYPE,
    COUNT_STATEMENT_ID_SUFFIX,
    NO_ROW_LIMIT,
    NO_ROW_OFFSET,
)


class MappedStatement(BaseModel):
    """
    Identity and configuration of a prepared statement.

    Attributes:
        id: Unique statement id (e.g. "UserMapper.select_active").
        sql: SQL template source of the statement.
        result_type: None for mapping rows, "int" for scalar rows.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    sql: str
    result_type: str | None = None

    def count_statement(self) -> "MappedStatement":
        """
        Derive the count form of this statement.

        The count form keeps the SQL template of the original statement but
        carries its own id and a scalar result type, so the host executor
        never confuses it with the original statement.

        Returns:
            New MappedStatement describing the count query.
        """
        return self.model_copy(
            update={
                "id": f"{self.id}{COUNT_STATEMENT_ID_SUFFIX}",
                "result_type": COUNT_RESULT_TYPE,
            }
        )


class BoundSql(BaseModel):
    """SQL text of one call together with its bind parameters."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    sql: str
    parameter: Any = None
    additional_parameters: dict[str, Any] = Field(default_factory=dict)


class RowBounds(BaseModel):
    """
    In-memory offset/limit applied by the host executor to a result list.

    RowBounds.DEFAULT means "no limiting" and is what the engine passes once
    pagination has been expressed in SQL.
    """

    model_config = ConfigDict(frozen=True)

    DEFAULT: ClassVar["RowBounds"]

    offset: int = Field(default=NO_ROW_OFFSET, ge=0)
    limit: int = Field(default=NO_ROW_LIMIT, ge=0)

    @property
    def is_default(self) -> bool:
        return self.offset == NO_ROW_OFFSET and self.limit == NO_ROW_LIMIT


RowBounds.DEFAULT = RowBounds()
