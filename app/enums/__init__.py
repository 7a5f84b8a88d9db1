"""
Enums Module
============

This module provides enumeration types for the LeafCare application.
Enums ensure type safety and consistency across the codebase.
"""

from app.enums.common import CareStatus, NotificationType, PlantIssue, Priority

__all__ = [
    "CareStatus",
    "NotificationType",
    "PlantIssue",
    "Priority",
]
