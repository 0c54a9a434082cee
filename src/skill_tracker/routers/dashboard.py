"""Dashboard API router - weekly matrix, history, summary and trends."""

from __future__ import annotations

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Query, Response

from skill_tracker.deps import get_dashboard_service
from skill_tracker.schemas.dashboard import (
    DashboardSummary,
    SkillComparison,
    SkillMatrix,
    SkillTrendReport,
    WeeklyBucket,
)
from skill_tracker.services.dashboard import DashboardService
from skill_tracker.services.spreadsheet import XLSX_MEDIA_TYPE, export_matrix
from skill_tracker.services.weeks import parse_timestamp, utcnow
from skill_tracker.utils.slug import export_filename

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard")


def _resolve_week(week_of: str | None) -> datetime:
    """
    Parse the ``week_of`` query value.

    Missing or unparseable values fall back to the current time.
    """
    if not week_of:
        return utcnow()
    parsed = parse_timestamp(week_of)
    if parsed is None:
        logger.info("Unparseable week_of %r, using current week", week_of)
        return utcnow()
    return parsed


@router.get("/team-skill-matrix", response_model=SkillMatrix)
def team_skill_matrix(
    week_of: str | None = Query(None, description="Any date in the wanted week; defaults to now"),
    service: DashboardService = Depends(get_dashboard_service),
) -> SkillMatrix:
    """Dense member x skill level matrix for one week."""
    return service.team_skill_matrix(_resolve_week(week_of))


@router.get("/team-skill-matrix/export")
def export_team_skill_matrix(
    week_of: str | None = Query(None, description="Any date in the wanted week; defaults to now"),
    service: DashboardService = Depends(get_dashboard_service),
) -> Response:
    """Download the weekly matrix as an xlsx workbook."""
    matrix = service.team_skill_matrix(_resolve_week(week_of))
    filename = export_filename("Skill Matrix", matrix.week_start)
    return Response(
        content=export_matrix(matrix),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/historical-ratings", response_model=list[WeeklyBucket])
def historical_ratings(
    team_member_id: int | None = Query(None, gt=0),
    skill_id: int | None = Query(None, gt=0),
    service: DashboardService = Depends(get_dashboard_service),
) -> list[WeeklyBucket]:
    """
    Ratings grouped into week buckets, oldest first.

    Args:
        team_member_id: Keep only this member's ratings.
        skill_id: Keep only this skill's ratings.
    """
    return service.historical_ratings(team_member_id=team_member_id, skill_id=skill_id)


@router.get("/summary", response_model=DashboardSummary)
def summary(
    week_of: str | None = Query(None),
    service: DashboardService = Depends(get_dashboard_service),
) -> DashboardSummary:
    """Team average, most improved skill and skill gap."""
    return service.summary(_resolve_week(week_of))


@router.get("/skill-comparison", response_model=list[SkillComparison])
def skill_comparison(
    team_member_id: int | None = Query(None, gt=0),
    service: DashboardService = Depends(get_dashboard_service),
) -> list[SkillComparison]:
    """Average level per skill in the latest and the previous week."""
    return service.skill_comparison(team_member_id)


@router.get("/skill-trends/{skill_id}", response_model=SkillTrendReport)
def skill_trends(
    skill_id: int,
    service: DashboardService = Depends(get_dashboard_service),
) -> SkillTrendReport:
    """Per-member history and trend direction for one skill."""
    return service.skill_trends(skill_id)
