"""
Mock factory functions for the host execution capability.
"""

from unittest.mock import AsyncMock


def create_mock_executor(*results):
    """
    Creates a mock execute function returning results in call order.

    Args:
        *results: Row lists returned by consecutive calls (e.g. count rows,
            then page rows).

    Returns:
        AsyncMock: Mocked execute function
    """
    return AsyncMock(side_effect=list(results))


def make_rows(start, stop):
    """
    Creates user rows with ids in [start, stop).

    Returns:
        list[dict]: Row mappings
    """
    return [{"id": i, "name": f"user{i}"} for i in range(start, stop)]
