"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import get_settings
from app.database import async_session_maker, init_db
from app.errors import AppError
from app.logging_config import configure_logging
from app.routers import (
    auth,
    blogs,
    categories,
    contact,
    download_docs,
    exchange_rates,
    gallery,
    schedule_file,
    site_config,
    tariff_page,
)
from app.services.auth_service import seed_admin
from app.services.storage import UPLOADS_URL_PREFIX, upload_dir

settings = get_settings()
configure_logging()
logger = logging.getLogger(__name__)

API_PREFIX = "/api"


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    async with async_session_maker() as db:
        await seed_admin(db)
        await db.commit()
    logger.info("Server running in %s mode", settings.app_env)
    yield


app = FastAPI(
    title="Baksh Group API",
    description="Content, tariff tables and exchange rates for the corporate site",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    content = {"success": False, "error": exc.message}
    if exc.details:
        content["details"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    details = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path", "form")]
        details.append({"field": ".".join(loc), "message": err.get("msg", "Invalid value")})
    message = "; ".join(f"{d['field']}: {d['message']}" if d["field"] else d["message"] for d in details)
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": message or "Invalid request", "details": details},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    if exc.status_code == 404 and message == "Not Found":
        message = f"Not found - {request.url.path}"
    return JSONResponse(status_code=exc.status_code, content={"success": False, "error": message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"success": False, "error": "Server error"})


app.include_router(auth.router, prefix=API_PREFIX)
app.include_router(gallery.router, prefix=API_PREFIX)
app.include_router(blogs.router, prefix=API_PREFIX)
app.include_router(categories.router, prefix=API_PREFIX)
app.include_router(tariff_page.router, prefix=API_PREFIX)
app.include_router(exchange_rates.router, prefix=API_PREFIX)
app.include_router(contact.router, prefix=API_PREFIX)
app.include_router(site_config.router, prefix=API_PREFIX)
app.include_router(schedule_file.router, prefix=API_PREFIX)
app.include_router(download_docs.router, prefix=API_PREFIX)

app.mount(UPLOADS_URL_PREFIX, StaticFiles(directory=upload_dir()), name="uploads")


@app.get(f"{API_PREFIX}/health")
async def health():
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}
