from court_archive.domains.dashboard.schemas import (
    DashboardStats, ActivityEntry, UserProgress, ProfileStatistics, ProfileResponse
)

__all__ = [
    "DashboardStats", "ActivityEntry", "UserProgress", "ProfileStatistics", "ProfileResponse"
]
