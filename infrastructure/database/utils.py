"""
Database Utilities
==================

Shared helpers for the repositories.

Author: LeafCare Team
Date: January 2026
"""

from typing import Any


def row_to_dict(row) -> dict[str, Any]:
    """
    Convert a database row to a plain dictionary.

    Handles:
    - None: returns an empty dict
    - dict: returned as-is
    - sqlite3.Row: copied column by column

    Examples:
        >>> row = db.execute("SELECT * FROM plants WHERE id = ?", (1,)).fetchone()
        >>> plant = row_to_dict(row)
        >>> plant["name"]
    """
    if row is None:
        return {}
    if isinstance(row, dict):
        return row
    # Iterating a sqlite3.Row yields values, so go through keys().
    return {key: row[key] for key in row.keys()}
