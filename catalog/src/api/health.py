from fastapi import APIRouter

from config import settings

router = APIRouter()


@router.get("/v1/healthcheck")
async def healthcheck():
    return {
        "status": "available",
        "system_info": {
            "environment": settings.ENVIRONMENT,
            "version": settings.VERSION,
        },
    }
