"""FastAPI dependency providers built on the request session."""

from fastapi import Depends
from sqlalchemy.orm import Session

from skill_tracker.config import dashboard_config
from skill_tracker.database import get_db
from skill_tracker.services.dashboard import DashboardService
from skill_tracker.services.importer import RowImporter
from skill_tracker.services.store import SkillStore


def get_store(db: Session = Depends(get_db)) -> SkillStore:
    """Entity store bound to the request session."""
    return SkillStore(db)


def get_dashboard_service(store: SkillStore = Depends(get_store)) -> DashboardService:
    """Dashboard service for the request."""
    return DashboardService(store, dashboard_config)


def get_row_importer(store: SkillStore = Depends(get_store)) -> RowImporter:
    """Row importer for the request."""
    return RowImporter(store)
