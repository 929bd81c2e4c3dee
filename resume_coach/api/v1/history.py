from fastapi import APIRouter, Depends, Request

from resume_coach.core.container import ServiceContainer, get_container
from resume_coach.core.rate_limit import rate_limit
from resume_coach.core.security import current_user_id
from resume_coach.schemas.api import HistoryResponse

router = APIRouter()


@router.get("/history", response_model=HistoryResponse)
@rate_limit()
def history(
    request: Request,
    user_id: str = Depends(current_user_id),
    container: ServiceContainer = Depends(get_container),
):
    _ = request
    return HistoryResponse(history=container.history.history(user_id))
