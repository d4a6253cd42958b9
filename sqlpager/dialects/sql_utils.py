"""
Shared SQL text utilities for dialects.

These helpers perform targeted textual transformations of an already bound
SQL statement. They track parentheses, quoted literals and comments so that
only top-level clauses are inspected; they are not a SQL parser.
"""

import re
from typing import Mapping

from sqlpager.constants import PAGE_WRAP_ALIAS
from sqlpager.schemas.page import ORDER_COLUMN_PATTERN, OrderType

_SELECT_RE = re.compile(
    r"^\s*(?:(?:--[^\n]*(?:\n|$)|/\*.*?\*/)\s*)*\(*\s*select\b",
    re.IGNORECASE | re.DOTALL,
)
_ORDER_BY_RE = re.compile(r"\border\s+by\b", re.IGNORECASE)
_BOUNDING_RE = re.compile(r"\b(limit|offset|fetch)\b", re.IGNORECASE)


def strip_statement(sql: str) -> str:
    """
    Remove surrounding whitespace and trailing semicolons.

    Example:
        >>> strip_statement("SELECT 1;  ")
        'SELECT 1'
    """
    return sql.strip().rstrip(";").rstrip()


def is_select(sql: str) -> bool:
    """
    Check whether the statement is a top-level SELECT.

    Leading comments and opening parentheses are skipped.

    Example:
        >>> is_select("  /* list */ SELECT * FROM users")
        True
        >>> is_select("UPDATE users SET active = 1")
        False
    """
    return bool(_SELECT_RE.match(sql))


def top_level_mask(sql: str) -> list[bool]:
    """
    Flag every character that sits at parenthesis depth 0 outside quoted
    literals and comments.

    Args:
        sql: SQL text.

    Returns:
        List with one boolean per character of sql.
    """
    mask = [False] * len(sql)
    depth = 0
    quote: str | None = None
    i = 0
    length = len(sql)

    while i < length:
        char = sql[i]

        if quote is not None:
            if char == quote:
                # Doubled quote is an escaped quote inside the literal
                if i + 1 < length and sql[i + 1] == quote:
                    i += 2
                    continue
                quote = None
            i += 1
            continue

        if char in ("'", '"', "`"):
            quote = char
        elif sql.startswith("--", i):
            end = sql.find("\n", i)
            i = length if end == -1 else end
            continue
        elif sql.startswith("/*", i):
            end = sql.find("*/", i + 2)
            i = length if end == -1 else end + 2
            continue
        elif char == "(":
            depth += 1
        elif char == ")":
            depth = max(depth - 1, 0)
        else:
            mask[i] = depth == 0

        i += 1

    return mask


def split_order_by(sql: str) -> tuple[str, str | None]:
    """
    Split a trailing top-level ORDER BY clause off the statement.

    The clause is only split off when nothing but the ordering follows it at
    top level; an ORDER BY followed by LIMIT/OFFSET/FETCH decides which rows
    are selected and is left in place.

    Args:
        sql: Statement without trailing semicolon.

    Returns:
        Tuple of (statement without the clause, the clause or None).

    Example:
        >>> split_order_by("SELECT * FROM t ORDER BY name")
        ('SELECT * FROM t', 'ORDER BY name')
        >>> split_order_by("SELECT * FROM (SELECT * FROM t ORDER BY a) x")
        ('SELECT * FROM (SELECT * FROM t ORDER BY a) x', None)
    """
    mask = top_level_mask(sql)
    matches = [m for m in _ORDER_BY_RE.finditer(sql) if mask[m.start()]]
    if not matches:
        return sql, None

    last = matches[-1]
    for bounding in _BOUNDING_RE.finditer(sql, last.end()):
        if mask[bounding.start()]:
            return sql, None

    return sql[: last.start()].rstrip(), sql[last.start() :].strip()


def has_bounding_clause(sql: str) -> bool:
    """
    Check whether the statement limits its own rows at top level.

    Example:
        >>> has_bounding_clause("SELECT * FROM t ORDER BY id LIMIT 50")
        True
        >>> has_bounding_clause("SELECT * FROM (SELECT * FROM t LIMIT 5) x")
        False
    """
    mask = top_level_mask(sql)
    return any(mask[m.start()] for m in _BOUNDING_RE.finditer(sql))


def wrap_bounded(sql: str) -> str:
    """
    Turn an already bounded statement into a derived table.

    Statements without a top-level LIMIT/OFFSET/FETCH are returned
    unchanged, so a bounding clause can always be appended to the result.

    Example:
        >>> wrap_bounded("SELECT * FROM t LIMIT 50")
        'SELECT * FROM (SELECT * FROM t LIMIT 50) page_wrap'
    """
    if not has_bounding_clause(sql):
        return sql
    return f"SELECT * FROM ({sql}) {PAGE_WRAP_ALIAS}"


def build_order_by(orders: Mapping[str, OrderType]) -> str:
    """
    Render an ORDER BY clause from column/direction pairs.

    Column names are validated on every render, including orders mutated
    in place on a Page.

    Raises:
        ValueError: If a column is not a plain or dotted identifier, or a
            direction is not ASC/DESC.

    Example:
        >>> build_order_by({"name": OrderType.ASC, "id": OrderType.DESC})
        'ORDER BY name ASC, id DESC'
        >>> build_order_by({})
        ''
    """
    if not orders:
        return ""

    clauses = []
    for column, direction in orders.items():
        if not isinstance(column, str) or not ORDER_COLUMN_PATTERN.match(
            column
        ):
            raise ValueError(f"Invalid order column: {column!r}")
        clauses.append(f"{column} {OrderType(direction).value}")
    return f"ORDER BY {', '.join(clauses)}"


def apply_orders(sql: str, orders: Mapping[str, OrderType]) -> str:
    """
    Apply the requested ordering to a statement.

    A trailing top-level ORDER BY of the statement is replaced by the
    requested one. With no requested ordering the statement is returned
    unchanged.

    Args:
        sql: Statement without trailing semicolon or top-level bounding
            clause (see wrap_bounded()).
        orders: Column/direction pairs in clause order.

    Returns:
        Statement ending with the requested ORDER BY clause.

    Raises:
        ValueError: If an order column or direction is invalid.
    """
    if not orders:
        return sql
    clause = build_order_by(orders)
    body, _ = split_order_by(sql)
    return f"{body} {clause}"
