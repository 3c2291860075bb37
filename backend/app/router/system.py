from fastapi import APIRouter

from app.core.config import APP_NAME, APP_VERSION
from app.models.common import APIResponse

router = APIRouter(tags=["System"])


@router.get("/", response_model=APIResponse)
def root():
    return APIResponse(
        code=0, msg="ok", data={"msg": f"{APP_NAME}. Trips are served under /api/trips."}
    )


@router.get("/health", response_model=APIResponse)
def health_check():
    return APIResponse(
        code=0,
        msg="ok",
        data={"status": "healthy", "service": "trip_itinerary-server", "version": APP_VERSION},
    )
