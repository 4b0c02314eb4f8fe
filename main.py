import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.exception_handlers import http_exception_handler, request_validation_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

import config
from database import check_connection, init_db
from logging_config import setup_logging
from routers import (
    auth_router,
    communities_router,
    dashboard_router,
    energy_router,
    pages_router,
    quotes_router,
    reporting_router,
    voting_router,
)
from services.exceptions import RayUnityError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    if config.DATABASE_URL.startswith("sqlite"):
        # Local runs and tests; server databases are migrated with Alembic
        init_db()
    if not check_connection():
        logger.warning("Database is not reachable; requests will fail until it is")
    logger.info("Ray Unity API started")
    yield
    logger.info("Ray Unity API stopped")


# App instance
app = FastAPI(title="Ray Unity API", lifespan=lifespan)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(communities_router)
app.include_router(energy_router)
app.include_router(quotes_router)
app.include_router(voting_router)
app.include_router(reporting_router)
app.include_router(dashboard_router)
app.include_router(pages_router)


# 404 fallback for unknown routes; 404s raised by handlers keep their detail
@app.exception_handler(StarletteHTTPException)
async def not_found_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404 and exc.detail == "Not Found":
        return JSONResponse(status_code=404, content={"error": "Route not found"})
    return await http_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def validation_handler(request: Request, exc: RequestValidationError):
    logger.info("Rejected %s %s: invalid request body", request.method, request.url.path)
    return await request_validation_exception_handler(request, exc)


@app.exception_handler(RayUnityError)
async def domain_error_handler(request: Request, exc: RayUnityError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=config.PORT, reload=True)
