from contextlib import asynccontextmanager

from apscheduler.schedulers.background import BackgroundScheduler
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.api.health import router as health_router
from storefront.api.routes_admin import router as admin_router
from storefront.api.routes_auth import router as auth_router
from storefront.api.routes_catalogue import router as catalogue_router
from storefront.api.routes_reviews import router as reviews_router
from storefront.api.routes_sitemap import router as sitemap_router
from storefront.config import settings
from storefront.db import SessionLocal, init_db
from storefront.errors import RateLimited, StoreError, StorefrontError
from storefront.services.session_service import SessionAuthority
from storefront.utils.logger import get_logger

log = get_logger("store")
scheduler_log = get_logger("scheduler")


def purge_sessions_job():
    db = SessionLocal()
    try:
        n = SessionAuthority(db).purge_expired()
        if n:
            scheduler_log.info(f"purged {n} expired admin session(s)")
    except StoreError:
        scheduler_log.error("session purge failed; will retry on next run")
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    init_db()

    # scheduler for expiring admin sessions
    scheduler = BackgroundScheduler()
    scheduler.add_job(
        purge_sessions_job,
        "interval",
        seconds=settings.SESSION_PURGE_INTERVAL_SECONDS,
        id="purge_admin_sessions",
    )
    scheduler.start()

    try:
        yield
    finally:
        scheduler.shutdown(wait=False)


app = FastAPI(title="Storefront - Backend", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------- error rendering ----------------
# Every error leaves as {"error": "..."}; no tracebacks or SQL in bodies.

@app.exception_handler(StorefrontError)
async def storefront_error_handler(request: Request, exc: StorefrontError):
    if isinstance(exc, StoreError):
        log.error(f"{request.method} {request.url.path} failed: store error")
    body = {"error": exc.message}
    headers = None
    if isinstance(exc, RateLimited):
        body["retryAfter"] = exc.retry_after
        headers = {"Retry-After": str(exc.retry_after)}
    return JSONResponse(status_code=exc.status_code, content=body, headers=headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        field = ".".join(str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path"))
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(SQLAlchemyError)
async def store_failure_handler(request: Request, exc: SQLAlchemyError):
    log.error(f"{request.method} {request.url.path} failed", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal error"})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    log.error(f"{request.method} {request.url.path} failed unexpectedly", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal error"})


app.include_router(health_router, prefix="/api", tags=["health"])

app.include_router(auth_router, tags=["auth"])

app.include_router(admin_router, tags=["admin"])

app.include_router(catalogue_router, prefix="/api/products", tags=["catalogue"])

app.include_router(reviews_router, tags=["reviews"])

app.include_router(sitemap_router, tags=["sitemap"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("storefront.main:app", host=settings.APP_HOST, port=settings.APP_PORT)
