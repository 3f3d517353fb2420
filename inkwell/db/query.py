"""SQL fragment builders for the SQLite backend.

Values are always parameterized. Field names are interpolated, so callers
must only pass column names from trusted code.
"""

from typing import Any


def build_where_clause(
    conditions: dict[str, Any],
    param_map: dict[str, str] | None = None
) -> tuple[str, list[Any]]:
    """Build an AND-joined WHERE clause from equality conditions.

    Args:
        conditions: Column name to value. None values are skipped.
        param_map: Optional custom SQL fragment per column (must contain one ?)

    Returns:
        Tuple of (clause, params). An empty clause is returned as "1=1".
    """
    param_map = param_map or {}
    fragments = []
    params = []

    for key, value in conditions.items():
        if value is None:
            continue
        fragments.append(param_map.get(key, f"{key} = ?"))
        params.append(value)

    if not fragments:
        return "1=1", []

    return " AND ".join(fragments), params


def build_update_clause(
    data: dict[str, Any],
    exclude: set[str] | None = None
) -> tuple[str, list[Any]]:
    """Build a SET clause from field values.

    Args:
        data: Column name to new value. None values are skipped.
        exclude: Column names that must never be updated (e.g. id, user_id)

    Returns:
        Tuple of (clause, params). Empty string when nothing to update.
    """
    exclude = exclude or set()
    fragments = []
    params = []

    for key, value in data.items():
        if key in exclude or value is None:
            continue
        fragments.append(f"{key} = ?")
        params.append(value)

    return ", ".join(fragments), params
