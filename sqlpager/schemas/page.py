import math
import re
from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sqlpager.schemas.statement import RowBounds
from sqlpager.settings import app_settings

# Plain or dotted SQL identifier (e.g. "created_at", "u.name")
ORDER_COLUMN_PATTERN = re.compile(
    r"^[A-Za-z_][A-Za-z0-9_$]*(\.[A-Za-z_][A-Za-z0-9_$]*)*$"
)


class OrderType(str, Enum):
    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def _missing_(cls, value: object) -> "OrderType | None":
        if isinstance(value, str):
            return cls.__members__.get(value.strip().upper())
        return None


class MetadataModel(BaseModel):  # type: ignore[misc]
    page: Annotated[int, Field(ge=1)]
    per_page: Annotated[int, Field(ge=1)]
    total: Annotated[int, Field(ge=0)]
    pages: Annotated[int, Field(ge=0)]


class Page(BaseModel):
    """
    Pagination request and result.

    A caller embeds a Page in the statement parameter to ask for one page;
    the interceptor returns a Page carrying the rows of that page and the
    total row count.

    Attributes:
        page_num: 1-based page index.
        page_size: Rows per page.
        orders: Column name to direction, rendered as ORDER BY in
            insertion order.
        total_rows: Matching rows before pagination (set by the engine).
        rows: Rows of this page (set by the engine).

    Example:
        >>> page = Page(page_num=2, page_size=10).order_by("name")
        >>> page.offset, page.limit
        (10, 10)
    """

    model_config = ConfigDict(validate_assignment=True)

    page_num: Annotated[int, Field(ge=1)] = 1
    page_size: Annotated[int, Field(ge=1)] = Field(
        default_factory=lambda: app_settings.DEFAULT_PAGE_SIZE
    )
    orders: dict[str, OrderType] = Field(default_factory=dict)
    total_rows: Annotated[int, Field(ge=0)] = 0
    rows: list[Any] = Field(default_factory=list)

    @field_validator("orders")
    @classmethod
    def validate_order_columns(
        cls, orders: dict[str, OrderType]
    ) -> dict[str, OrderType]:
        for column in orders:
            if not ORDER_COLUMN_PATTERN.match(column):
                raise ValueError(f"Invalid order column: {column!r}")
        return orders

    @property
    def offset(self) -> int:
        return (self.page_num - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size

    @property
    def pages(self) -> int:
        return (
            math.ceil(self.total_rows / self.page_size)
            if self.total_rows > 0
            else 0
        )

    @property
    def has_more(self) -> bool:
        return self.page_num < self.pages

    def order_by(
        self, column: str, direction: OrderType | str = OrderType.ASC
    ) -> "Page":
        """
        Append an ordering column, keeping earlier columns first.

        Args:
            column: Column name (validated as an SQL identifier).
            direction: OrderType or "asc"/"desc".

        Returns:
            This page, for chaining.
        """
        self.orders = {**self.orders, column: OrderType(direction)}
        return self

    def to_row_bounds(self) -> RowBounds:
        return RowBounds(offset=self.offset, limit=self.limit)

    def to_metadata(self) -> MetadataModel:
        return MetadataModel(
            page=self.page_num,
            per_page=self.page_size,
            total=self.total_rows,
            pages=self.pages,
        )
