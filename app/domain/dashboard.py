"""
Dashboard read model.

``DashboardData`` is what the presentation boundary receives. It is always
fully populated: a failed aggregation yields ``DashboardData.empty()``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from app.domain.notification import Notification


@dataclass(frozen=True, slots=True)
class SummaryStatistics:
    total_plants: int = 0
    pending_care_count: int = 0
    healthy_plants_count: int = 0
    locations_count: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "total_plants": self.total_plants,
            "pending_care_count": self.pending_care_count,
            "healthy_plants_count": self.healthy_plants_count,
            "locations_count": self.locations_count,
        }


@dataclass(frozen=True, slots=True)
class DashboardData:
    summary_stats: SummaryStatistics = field(default_factory=SummaryStatistics)
    pending_cares: list[dict[str, Any]] = field(default_factory=list)
    notifications: list[Notification] = field(default_factory=list)
    recent_activities: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "DashboardData":
        return cls()

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary_stats": self.summary_stats.to_dict(),
            "pending_cares": list(self.pending_cares),
            "notifications": [n.to_dict() for n in self.notifications],
            "recent_activities": list(self.recent_activities),
        }
