from fastapi import APIRouter

from leadmatch.config import settings
from leadmatch.llm.scenarios import available_scenarios

router = APIRouter()


@router.get("/health")
def health_check() -> dict:
    return {
        "status": "healthy",
        "app_name": settings.app_name,
        "llm_provider": settings.llm_provider,
        "scenarios": available_scenarios(),
    }
