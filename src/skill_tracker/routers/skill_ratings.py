"""Skill ratings API router - list, create, weekly upsert and level update."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from skill_tracker.deps import get_store
from skill_tracker.schemas.skill_rating import (
    RatingDetail,
    SkillLevelOption,
    SkillRating,
    SkillRatingCreate,
    SkillRatingLevelUpdate,
    WeeklyRatingResult,
    skill_level_options,
)
from skill_tracker.services.store import SkillStore

router = APIRouter()


@router.get("/skill-ratings", response_model=list[SkillRating])
def list_skill_ratings(
    team_member_id: int | None = Query(None, gt=0),
    skill_id: int | None = Query(None, gt=0),
    store: SkillStore = Depends(get_store),
):
    """
    List ratings, optionally filtered.

    Args:
        team_member_id: Keep only this member's ratings.
        skill_id: Keep only this skill's ratings.
    """
    return store.list_skill_ratings(team_member_id=team_member_id, skill_id=skill_id)


@router.get("/skill-ratings/details", response_model=list[RatingDetail])
def list_skill_rating_details(store: SkillStore = Depends(get_store)) -> list[RatingDetail]:
    """List all ratings with member and skill names resolved."""
    return store.skill_ratings_with_details()


@router.post("/skill-ratings", response_model=SkillRating, status_code=status.HTTP_201_CREATED)
def create_skill_rating(rating: SkillRatingCreate, store: SkillStore = Depends(get_store)):
    """
    Record a rating.

    Raises:
        NotFoundError (404): If the member or skill does not exist.
    """
    return store.create_skill_rating(rating)


@router.put("/skill-ratings/weekly", response_model=WeeklyRatingResult)
def record_weekly_rating(
    rating: SkillRatingCreate, store: SkillStore = Depends(get_store)
) -> WeeklyRatingResult:
    """
    Create or update the rating of a member/skill for the week of ``week_of``.

    Returns:
        The stored rating and whether it was newly created.
    """
    stored, created = store.record_weekly_rating(rating)
    return WeeklyRatingResult(created=created, rating=SkillRating.model_validate(stored))


@router.patch("/skill-ratings/{rating_id}", response_model=SkillRating)
def update_skill_rating(
    rating_id: int,
    update: SkillRatingLevelUpdate,
    store: SkillStore = Depends(get_store),
):
    """
    Update the level of an existing rating.

    Raises:
        HTTPException 404: If the rating is not found.
    """
    rating = store.update_skill_rating_level(rating_id, update.level)
    if not rating:
        raise HTTPException(status_code=404, detail="Skill rating not found")
    return rating


@router.get("/skill-levels", response_model=list[SkillLevelOption])
def list_skill_levels() -> list[SkillLevelOption]:
    """Return the level catalogue (value and label)."""
    return skill_level_options()
