"""Skills API router."""

from fastapi import APIRouter, Depends, HTTPException, Response, status

from skill_tracker.deps import get_store
from skill_tracker.schemas.skill import Skill, SkillCreate
from skill_tracker.services.store import SkillStore

router = APIRouter()


@router.get("/skills", response_model=list[Skill])
def list_skills(store: SkillStore = Depends(get_store)):
    """List the skill catalog ordered by id."""
    return store.list_skills()


@router.post("/skills", response_model=Skill, status_code=status.HTTP_201_CREATED)
def create_skill(skill: SkillCreate, store: SkillStore = Depends(get_store)):
    """Create a skill. Names are unique regardless of case."""
    return store.create_skill(skill)


@router.delete("/skills/{skill_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_skill(skill_id: int, store: SkillStore = Depends(get_store)) -> Response:
    """Delete a skill together with all of its ratings."""
    if not store.delete_skill(skill_id):
        raise HTTPException(status_code=404, detail="Skill not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
