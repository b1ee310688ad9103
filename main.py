"""
StatusBot: Slack `/location` directory of user statuses and teams.
"""
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import uuid
from contextlib import asynccontextmanager
import logging

from app.config import get_settings
from app.routers import all_routers
from database.connection import create_tables

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("startup")


@asynccontextmanager
async def lifespan(app: FastAPI):  # pragma: no cover
    settings = get_settings()
    logger.debug(f"ARGS {settings!r}")
    if settings.skip_migrations:
        logger.info("Skipping table creation (SKIP_MIGRATIONS)")
    else:
        create_tables()
    logger.info("🚀 StatusBot started")
    yield
    logger.info("👋 Lifespan shutdown")


app = FastAPI(
    title="StatusBot",
    description="Slack slash command that tracks user statuses and team rosters",
    version="0.1.0",
    lifespan=lifespan,
)


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):  # pragma: no cover
    rid = str(uuid.uuid4())
    request.state.request_id = rid
    response = await call_next(request)
    response.headers["X-Request-ID"] = rid
    return response


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):  # pragma: no cover
    logger.exception("Unhandled error")
    return JSONResponse(status_code=500, content={
        "error": {"type": exc.__class__.__name__},
        "request_id": getattr(request.state, "request_id", None)
    })


for router in all_routers:
    app.include_router(router)


if __name__ == "__main__":  # pragma: no cover
    import uvicorn
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)
