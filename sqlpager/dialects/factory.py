"""
Dialect factory for selecting the pagination dialect at setup time.

Encapsulates the mapping from configured dialect names to the closed set of
built-in dialects, plus loading of custom dialect classes by import path.
"""

import importlib

from sqlpager.dialects.db2 import DB2Dialect
from sqlpager.dialects.generic import GenericDialect
from sqlpager.dialects.mysql import MySQLDialect
from sqlpager.dialects.oracle import Oracle12cDialect, OracleDialect
from sqlpager.dialects.protocol import Dialect
from sqlpager.exceptions import DialectUnsupportedError
from sqlpager.logging import logger

DIALECTS: dict[str, type[GenericDialect]] = {
    "generic": GenericDialect,
    "postgresql": GenericDialect,
    "postgres": GenericDialect,
    "sqlite": GenericDialect,
    "h2": GenericDialect,
    "hsqldb": GenericDialect,
    "mysql": MySQLDialect,
    "mariadb": MySQLDialect,
    "oracle": OracleDialect,
    "oracle12c": Oracle12cDialect,
    "db2": DB2Dialect,
}


def select_dialect(name: str | Dialect | None) -> Dialect:
    """
    Resolve the configured dialect into a dialect instance.

    Decision logic:
    - Dialect instance → returned as is
    - None or empty → GenericDialect
    - "package.module:ClassName" → imported and instantiated
    - Registered name (case-insensitive) → built-in dialect
    - Any other name → GenericDialect (logged as a warning)

    Args:
        name: Dialect name, import path or instance.

    Returns:
        Dialect instance.

    Raises:
        DialectUnsupportedError: If an import path cannot be loaded or does
            not provide a Dialect.

    Example:
        ```python
        from sqlpager.dialects import select_dialect

        select_dialect("mysql")  # MySQLDialect
        select_dialect("informix")  # GenericDialect (unknown name)
        select_dialect("myproject.paging:FirebirdDialect")
        ```
    """
    if name is None or (isinstance(name, str) and not name.strip()):
        return GenericDialect()

    if not isinstance(name, str):
        if isinstance(name, Dialect):
            return name
        raise DialectUnsupportedError(
            f"{type(name).__name__} does not implement the Dialect interface"
        )

    if ":" in name:
        return _load_dialect(name.strip())

    dialect_cls = DIALECTS.get(name.strip().lower())
    if dialect_cls is None:
        logger.warning(
            f"Unknown dialect '{name}', falling back to generic dialect"
        )
        dialect_cls = GenericDialect

    return dialect_cls()


def _load_dialect(path: str) -> Dialect:
    """
    Import and instantiate a dialect class from "module:ClassName".

    Args:
        path: Import path of the dialect class.

    Returns:
        Dialect instance.

    Raises:
        DialectUnsupportedError: If the path is invalid, the import fails or
            the class does not implement the Dialect interface.
    """
    module_name, _, class_name = path.partition(":")
    if not module_name or not class_name:
        raise DialectUnsupportedError(f"Invalid dialect path: '{path}'")

    try:
        module = importlib.import_module(module_name)
        dialect_cls = getattr(module, class_name)
    except (ImportError, AttributeError) as ex:
        raise DialectUnsupportedError(
            f"Cannot load dialect '{path}': {ex}"
        ) from ex

    dialect = dialect_cls()
    if not isinstance(dialect, Dialect):
        raise DialectUnsupportedError(
            f"'{path}' does not implement the Dialect interface"
        )

    logger.info(f"Loaded custom dialect {path}")
    return dialect
