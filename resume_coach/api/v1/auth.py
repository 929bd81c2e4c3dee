from fastapi import APIRouter, Depends, Request

from resume_coach.core.container import ServiceContainer, get_container
from resume_coach.core.rate_limit import rate_limit
from resume_coach.schemas.api import SignupRequest, SignupResponse

router = APIRouter()


@router.post("/signup", response_model=SignupResponse)
@rate_limit()
def signup(
    request: Request,
    payload: SignupRequest,
    container: ServiceContainer = Depends(get_container),
):
    _ = request
    user = container.accounts.sign_up(payload.email, payload.password, payload.name)
    return SignupResponse(user=user)
