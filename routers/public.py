from fastapi import APIRouter

from core.responses import PrettyJSONResponse

router = APIRouter()


@router.get("/health")
async def health():
    return PrettyJSONResponse(content={"status": "healthy"})
