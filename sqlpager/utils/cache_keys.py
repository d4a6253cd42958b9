"""
Unified cache key generation.

Provides a single factory for cache key patterns, ensuring consistent SHA-256
hashing and key format, plus the count statement fingerprint used by the
pagination engine.
"""

import hashlib
import json
from typing import Any, Mapping

from pydantic import BaseModel

from sqlpager.constants import COUNT_KEY_SUFFIX, STATEMENT_CACHE_KEY_PREFIX
from sqlpager.schemas.page import Page
from sqlpager.schemas.statement import MappedStatement, RowBounds


class CacheKeyFactory:
    """Factory for generating consistent, deterministic cache keys."""

    @staticmethod
    def generate(
        prefix: str,
        *parts: str | int,
        hash_dict: dict[str, object] | None = None,
    ) -> str:
        """
        Generate a cache key from a prefix and optional parts or dict hash.

        If hash_dict is provided, its JSON-serialised representation (sorted keys)
        is SHA-256 hashed and appended.  If no hash_dict is given, parts are
        joined with ":" and appended directly.

        Args:
            prefix: Key namespace prefix (e.g. "pagination:ms").
            *parts: Additional string/int segments joined with ":".
            hash_dict: Optional dict whose contents are hashed into the key.

        Returns:
            Cache key string.

        Examples:
            >>> CacheKeyFactory.generate("pagination:ms", "UserMapper.list")
            'pagination:ms:UserMapper.list'
            >>> CacheKeyFactory.generate(
            ...     "pagination:ms",
            ...     "UserMapper.list",
            ...     hash_dict={"parameter": {"active": "int"}},
            ... )
            'pagination:ms:UserMapper.list:<sha256>'
        """
        base = ":".join([prefix, *[str(p) for p in parts]])

        if hash_dict is None:
            return base

        serialised = json.dumps(hash_dict, sort_keys=True)
        digest = hashlib.sha256(serialised.encode()).hexdigest()
        return f"{base}:{digest}"


def parameter_shape(parameter: Any) -> Any:
    """
    Describe the structure of a call parameter without its values.

    Mappings keep their keys, pydantic models their field names; every leaf
    is reduced to its type name. Two calls that only differ in bound values
    produce the same shape.

    Args:
        parameter: Call parameter.

    Returns:
        JSON-serialisable description of the parameter.

    Example:
        >>> parameter_shape({"active": 1, "page": Page()})
        {'active': 'int', 'page': 'Page'}
    """
    if parameter is None:
        return None
    if isinstance(parameter, Page):
        return Page.__name__
    if isinstance(parameter, Mapping):
        return {str(key): parameter_shape(value) for key, value in parameter.items()}
    if isinstance(parameter, BaseModel):
        return {
            "__type__": type(parameter).__qualname__,
            "fields": {
                field: parameter_shape(getattr(parameter, field))
                for field in type(parameter).model_fields
            },
        }
    return type(parameter).__qualname__


def count_statement_key(statement: MappedStatement, parameter: Any) -> str:
    """
    Fingerprint of the count form of a statement.

    Deterministic in the statement identity, the parameter shape and the
    unbounded row bounds, with the "_count" marker keeping it distinct from
    any key of the original statement.

    Args:
        statement: Original statement.
        parameter: Call parameter.

    Returns:
        Cache key string.
    """
    bounds = RowBounds.DEFAULT
    return CacheKeyFactory.generate(
        STATEMENT_CACHE_KEY_PREFIX,
        statement.id,
        COUNT_KEY_SUFFIX,
        hash_dict={
            "sql": statement.sql,
            "parameter": parameter_shape(parameter),
            "offset": bounds.offset,
            "limit": bounds.limit,
        },
    )
