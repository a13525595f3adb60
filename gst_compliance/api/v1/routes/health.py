from fastapi import APIRouter

from gst_compliance.core.config import settings
from gst_compliance.api.v1.envelope import ok

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health():
    return ok(data={"app": settings.APP_NAME, "environment": settings.ENVIRONMENT}, message="running")
