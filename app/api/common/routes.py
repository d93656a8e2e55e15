from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse

from app.api.common.models import (
    ApiError,
    HealthStatus,
    PingResponse,
    StatusResponse,
    Tags,
)
from app.core.cache import Cache

router = APIRouter(prefix="/api", tags=[Tags.HEALTH])


def setup_api_error_handler(app: FastAPI):
    async def handler(request: Request, exc: ApiError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.as_dict(),
        )

    app.add_exception_handler(ApiError, handler)


@router.get("", response_model=StatusResponse)
async def status():
    return StatusResponse(
        status="API is running",
        message="Connect to /api/eth-price to see data",
    )


@router.get("/ping", response_model=PingResponse)
async def ping():
    ok = await Cache.ping()
    return PingResponse(redis=HealthStatus.OK if ok else HealthStatus.KO)
