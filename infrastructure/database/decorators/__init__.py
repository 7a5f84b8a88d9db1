"""Database decorators enforcing the repository failure contracts."""

from infrastructure.database.decorators.guards import (
    STORAGE_ERRORS,
    insert_guard,
    read_guard,
    write_guard,
)

__all__ = [
    "STORAGE_ERRORS",
    "insert_guard",
    "read_guard",
    "write_guard",
]
