"""Team members API router - list, create and delete endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Response, status

from skill_tracker.deps import get_store
from skill_tracker.schemas.team_member import TeamMember, TeamMemberCreate
from skill_tracker.services.store import SkillStore

router = APIRouter()


@router.get("/team-members", response_model=list[TeamMember])
def list_team_members(store: SkillStore = Depends(get_store)):
    """List all team members ordered by id."""
    return store.list_team_members()


@router.post("/team-members", response_model=TeamMember, status_code=status.HTTP_201_CREATED)
def create_team_member(member: TeamMemberCreate, store: SkillStore = Depends(get_store)):
    """
    Create a team member.

    Raises:
        DuplicateError (409): If the email is already registered.
    """
    return store.create_team_member(member)


@router.delete("/team-members/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_team_member(member_id: int, store: SkillStore = Depends(get_store)) -> Response:
    """
    Delete a team member together with all of their ratings.

    Raises:
        HTTPException 404: If the member is not found.
    """
    if not store.delete_team_member(member_id):
        raise HTTPException(status_code=404, detail="Team member not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
