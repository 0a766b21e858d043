from fastapi import APIRouter
from groupsplit.core.config import settings

router = APIRouter()

@router.get("/health")
async def health():
    return {"status": "healthy", "app": settings.APP_NAME}
