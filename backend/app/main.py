from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import API_PREFIX, APP_NAME, APP_VERSION, CORS_ORIGINS, SERVER_HOST, SERVER_PORT
from app.core.logging import configure_logging, get_logger
from app.db.database import close_database_connection, init_indexes, test_connection
from app.models.common import ValidationErrorDetail
from app.router.system import router as system_router
from app.router.trip import router as trip_router
from app.services.validation import field_errors

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    logger.info("app_starting", app=APP_NAME, version=APP_VERSION)
    await test_connection()
    await init_indexes()
    yield
    logger.info("app_stopping", app=APP_NAME)
    await close_database_connection()


app = FastAPI(title=APP_NAME, version=APP_VERSION, lifespan=lifespan)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """
    Malformed bodies get the same 400 field-error shape as trip validation.
    """
    detail = ValidationErrorDetail(errors=field_errors(exc.errors(), strip_prefix="body"))
    return JSONResponse(status_code=400, content={"detail": detail.model_dump()})


# Mount routers
app.include_router(system_router)
app.include_router(trip_router, prefix=API_PREFIX)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=SERVER_HOST, port=SERVER_PORT)
