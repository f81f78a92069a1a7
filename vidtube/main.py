import logging
import os
import time
import uuid
from dotenv import load_dotenv

# Load environment variables from .env file before anything else
load_dotenv()

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from vidtube.api.router import api_router
from vidtube.core.config import settings
from vidtube.core.db import init_models
from vidtube.core.errors import (
    ApiError,
    api_error_handler,
    http_exception_handler,
    request_validation_handler,
    unhandled_exception_handler,
)
from vidtube.core.logging import request_id_ctx, setup_logging
from vidtube.platform.staging import ensure_staging_dir

setup_logging()
app = FastAPI(title=settings.APP_NAME)
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()

    response = await call_next(request)

    process_time = (time.time() - start_time) * 1000
    logger.info(
        f"Request: {request.method} {request.url.path} - Response: {response.status_code} - Time: {process_time:.2f}ms"
    )
    return response

# outermost, so log_requests sees the request id
@app.middleware("http")
async def add_request_id(request: Request, call_next):
    rid = request.headers.get("x-request-id") or uuid.uuid4().hex[:12]
    request_id_ctx.set(rid)
    response = await call_next(request)
    response.headers["x-request-id"] = rid
    return response


app.add_exception_handler(ApiError, api_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

@app.on_event("startup")
async def on_startup():
    await init_models()
    ensure_staging_dir()

# local provider: serve stored objects under /media so references resolve
if settings.OBJECT_STORAGE_PROVIDER == "local":
    os.makedirs(settings.LOCAL_STORAGE_ROOT, exist_ok=True)
    app.mount("/media", StaticFiles(directory=settings.LOCAL_STORAGE_ROOT), name="media")

app.include_router(api_router, prefix=settings.API_PREFIX)
