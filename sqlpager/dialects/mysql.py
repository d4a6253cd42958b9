"""
MySQL / MariaDB pagination dialect.

SELECT ... LIMIT <offset>, <limit>
"""

from sqlpager.dialects.generic import GenericDialect


class MySQLDialect(GenericDialect):
    name = "mysql"

    def bound_sql(self, sql: str, offset: int, limit: int) -> str:
        return f"{sql} LIMIT {offset}, {limit}"
