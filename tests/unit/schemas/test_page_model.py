"""
Tests for the Page request/result model.
"""

import pytest
from pydantic import ValidationError

from sqlpager.schemas.page import MetadataModel, OrderType, Page
from sqlpager.schemas.statement import RowBounds


class TestPageDefaults:
    """Tests for default values and derived fields."""

    def test_defaults(self):
        """Test a bare Page asks for the first page of the default size."""
        page = Page()

        assert page.page_num == 1
        assert page.page_size == 10
        assert page.orders == {}
        assert page.total_rows == 0
        assert page.rows == []

    @pytest.mark.parametrize(
        "page_num,page_size,offset",
        [(1, 10, 0), (2, 10, 10), (3, 25, 50), (7, 1, 6)],
    )
    def test_offset_and_limit(self, page_num, page_size, offset):
        """Test offset = (page_num - 1) * page_size and limit = page_size."""
        page = Page(page_num=page_num, page_size=page_size)

        assert page.offset == offset
        assert page.limit == page_size

    def test_pages_and_has_more(self):
        """Test total page count is rounded up."""
        page = Page(page_num=2, page_size=10, total_rows=25)

        assert page.pages == 3
        assert page.has_more is True

    def test_last_page_has_no_more(self):
        page = Page(page_num=3, page_size=10, total_rows=25)

        assert page.has_more is False

    def test_pages_zero_when_empty(self):
        page = Page(page_size=10, total_rows=0)

        assert page.pages == 0
        assert page.has_more is False


class TestPageValidation:
    """Tests for Page invariants."""

    @pytest.mark.parametrize("page_num", [0, -1])
    def test_page_num_must_be_positive(self, page_num):
        with pytest.raises(ValidationError, match="greater than or equal to 1"):
            Page(page_num=page_num)

    def test_page_size_must_be_positive(self):
        with pytest.raises(ValidationError, match="greater than or equal to 1"):
            Page(page_size=0)

    def test_assignment_is_validated(self):
        """Test page_num cannot be set below 1 after construction."""
        page = Page()

        with pytest.raises(ValidationError):
            page.page_num = 0

    def test_negative_total_rows_rejected(self):
        with pytest.raises(ValidationError):
            Page(total_rows=-1)

    @pytest.mark.parametrize(
        "column",
        ["name; DROP TABLE users", "name desc", "1col", "", "a.(b)"],
    )
    def test_invalid_order_column_rejected(self, column):
        """Test order columns that are not identifiers are rejected."""
        with pytest.raises(ValidationError, match="Invalid order column"):
            Page(orders={column: OrderType.ASC})

    def test_dotted_order_column_accepted(self):
        page = Page(orders={"u.created_at": OrderType.DESC})

        assert list(page.orders) == ["u.created_at"]


class TestPageOrders:
    """Tests for ordering specification."""

    def test_orders_keep_insertion_order(self):
        page = Page(
            orders={
                "name": OrderType.ASC,
                "created_at": OrderType.DESC,
                "id": OrderType.ASC,
            }
        )

        assert list(page.orders) == ["name", "created_at", "id"]

    def test_order_by_chains_and_appends(self):
        """Test order_by() appends columns after existing ones."""
        page = Page().order_by("name").order_by("id", "desc")

        assert page.orders == {"name": OrderType.ASC, "id": OrderType.DESC}
        assert list(page.orders) == ["name", "id"]

    def test_order_by_validates_column(self):
        with pytest.raises(ValidationError):
            Page().order_by("name --")

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("asc", OrderType.ASC),
            ("DESC", OrderType.DESC),
            (" Desc ", OrderType.DESC),
        ],
    )
    def test_order_type_accepts_any_case(self, value, expected):
        assert OrderType(value) is expected

    def test_order_type_rejects_unknown_direction(self):
        with pytest.raises(ValueError):
            OrderType("sideways")


class TestPageConversions:
    """Tests for RowBounds and metadata conversions."""

    def test_to_row_bounds(self):
        bounds = Page(page_num=3, page_size=20).to_row_bounds()

        assert bounds == RowBounds(offset=40, limit=20)
        assert not bounds.is_default

    def test_to_metadata(self):
        meta = Page(page_num=2, page_size=10, total_rows=25).to_metadata()

        assert meta == MetadataModel(page=2, per_page=10, total=25, pages=3)
