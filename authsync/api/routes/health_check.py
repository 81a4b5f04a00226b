from datetime import UTC, datetime

from fastapi import APIRouter, Request, status
from pydantic import BaseModel

router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    service: str


@router.get("/health", status_code=status.HTTP_200_OK, response_model=HealthResponse)
async def health(request: Request):
    """Liveness probe; never touches the identity provider"""
    return HealthResponse(
        status="OK",
        timestamp=datetime.now(UTC).isoformat().replace("+00:00", "Z"),
        service=request.app.state.config.SERVICE_NAME,
    )
