from fastapi import APIRouter

router = APIRouter()


@router.get("/health", summary="Health Check", description="Liveness probe; does not touch storage or the AI provider.")
async def health_check():
    return {"status": "healthy", "service": "resume-coach"}
