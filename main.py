import logging
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from app.database import redis_manager
from app.config import settings
from app.exceptions import AppError
from app.routers.contest import router as contest_router
from app.routers.export import router as export_router
from app.routers.media import router as media_router
from app.schemas.common import HealthResponseSchema
import os

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await redis_manager.init(settings.REDIS_URL)
    yield
    await redis_manager.close()


app = FastAPI(lifespan=lifespan)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    logger.info(
        "%s %s %s %.1fms",
        request.method,
        request.url.path,
        response.status_code,
        (time.perf_counter() - started) * 1000,
    )
    return response


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(
            "%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc
        )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.get("/health", response_model=HealthResponseSchema, tags=["Health"])
async def health():
    return HealthResponseSchema()


app.include_router(contest_router)
app.include_router(export_router)
app.include_router(media_router)


if not os.path.exists(settings.MEDIA_FOLDER):
    os.makedirs(settings.MEDIA_FOLDER)

app.mount("/media", StaticFiles(directory=settings.MEDIA_FOLDER), name="media")
