"""
DB2 pagination dialect.

Numbers rows with ROW_NUMBER() OVER() around the ordered query and keeps the
requested window with BETWEEN.
"""

from sqlpager.dialects.generic import GenericDialect


class DB2Dialect(GenericDialect):
    """ROW_NUMBER() dialect; the row_id column is removed from page rows."""

    name = "db2"
    helper_columns = ("row_id",)

    def bound_sql(self, sql: str, offset: int, limit: int) -> str:
        return (
            "SELECT * FROM ( SELECT tmp_page.*, ROW_NUMBER() OVER() AS row_id "
            f"FROM ( {sql} ) AS tmp_page ) AS paged "
            f"WHERE row_id BETWEEN {offset + 1} AND {offset + limit}"
        )
