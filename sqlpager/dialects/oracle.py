"""
Oracle pagination dialects.

Before 12c: ROWNUM double wrapping (ROWNUM is assigned before ORDER BY of the
same query block, so the ordered query must sit in an inner block).
12c and later: OFFSET/FETCH row limiting clause.
"""

from sqlpager.dialects.generic import GenericDialect


class OracleDialect(GenericDialect):
    """
    ROWNUM-based dialect for Oracle 11g and older.

    Example:
        ```python
        OracleDialect().bound_sql("SELECT * FROM users", offset=10, limit=10)
        # SELECT * FROM ( SELECT tmp_page.*, ROWNUM row_id FROM
        # ( SELECT * FROM users ) tmp_page WHERE ROWNUM <= 20 )
        # WHERE row_id > 10
        ```

    The ROWNUM alias row_id is removed from mapping rows of the page.
    """

    name = "oracle"
    # Unquoted Oracle identifiers cannot start with an underscore
    count_alias = "count_wrap"
    helper_columns = ("row_id",)

    def bound_sql(self, sql: str, offset: int, limit: int) -> str:
        return (
            "SELECT * FROM ( SELECT tmp_page.*, ROWNUM row_id FROM "
            f"( {sql} ) tmp_page WHERE ROWNUM <= {offset + limit} ) "
            f"WHERE row_id > {offset}"
        )


class Oracle12cDialect(OracleDialect):
    name = "oracle12c"
    helper_columns = ()

    def bound_sql(self, sql: str, offset: int, limit: int) -> str:
        return f"{sql} OFFSET {offset} ROWS FETCH NEXT {limit} ROWS ONLY"
