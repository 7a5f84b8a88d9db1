"""Repositories over the LeafCare SQLite schema.

Every method takes the requesting ``user_id`` and filters on it; see
``infrastructure.database.decorators`` for the failure contract.
"""

from infrastructure.database.repositories.auth import AuthRepository
from infrastructure.database.repositories.cares import CareRepository
from infrastructure.database.repositories.plants import PlantRepository

__all__ = [
    "AuthRepository",
    "CareRepository",
    "PlantRepository",
]
