"""Services package."""

from skill_tracker.services.dashboard import DashboardService
from skill_tracker.services.importer import RowImporter
from skill_tracker.services.store import SkillStore

__all__ = ["SkillStore", "DashboardService", "RowImporter"]
