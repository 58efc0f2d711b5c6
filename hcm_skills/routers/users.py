from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from hcm_skills.db import get_db
from hcm_skills.dependencies import get_current_user
from hcm_skills.repositories import UsersRepository
from hcm_skills.schemas import UserSummary

router = APIRouter(
    prefix="/users",
    tags=["users"],
)


@router.get("/me", response_model=UserSummary)
async def get_me(
    user: UserSummary = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    summary = UsersRepository(db).find_summary_by_id(user.id)
    if summary is None:
        raise HTTPException(status_code=404, detail="Usuario nao encontrado.")
    return summary
