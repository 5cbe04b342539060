import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from hireflow.config import settings
from hireflow.core.errors import HireflowError, UnauthenticatedError
from hireflow.core.rate_limiter import rate_limiter
from hireflow.database import init_db, engine
from hireflow.logging_config import setup_logging
from hireflow.routers import (
    account,
    applications,
    auth,
    dashboard,
    employer_applications,
    employer_candidates,
    employer_jobs,
    jobs,
    profile,
    saved_jobs,
    settings as settings_router,
)

setup_logging()
logger = logging.getLogger(__name__)

PLACEHOLDER_SECRET = "replace-with-a-long-random-secret-key"

AUTH_RATE_LIMITED_PATHS = {"/auth/login", "/auth/register"}
UPLOAD_RATE_LIMITED_PATHS = {"/applications", "/profile/resume"}

app = FastAPI(
    title="Hireflow API",
    description="Job marketplace: postings, applications, hiring pipeline.",
    version="1.0.0",
)

cors_origins = [o.strip() for o in settings.cors_allow_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(jobs.router)
app.include_router(employer_jobs.router)
app.include_router(applications.router)
app.include_router(employer_applications.router)
app.include_router(employer_candidates.router)
app.include_router(saved_jobs.router)
app.include_router(profile.router)
app.include_router(dashboard.router)
app.include_router(settings_router.router)
app.include_router(account.router)


@app.exception_handler(HireflowError)
async def hireflow_error_handler(request: Request, exc: HireflowError):
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthenticatedError) else None
    if exc.status_code >= 500:
        logger.error("Domain error on %s %s: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=headers)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request, exc):
    logger.exception("Unhandled server error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.middleware("http")
async def apply_rate_limits(request, call_next):
    path = request.url.path.rstrip("/") or "/"
    if request.method == "OPTIONS":
        return await call_next(request)

    client_ip = request.client.host if request.client else "unknown"
    limit = None
    if request.method == "POST" and path in AUTH_RATE_LIMITED_PATHS:
        limit = settings.rate_limit_auth_per_min
    elif request.method == "POST" and path in UPLOAD_RATE_LIMITED_PATHS:
        limit = settings.rate_limit_upload_per_min

    if limit is not None and limit > 0:
        decision = rate_limiter.hit(f"{client_ip}:{path}", limit=limit, window_seconds=60)
        if not decision.allowed:
            logger.info("Rate limit hit: ip=%s path=%s", client_ip, path)
            return JSONResponse(
                status_code=429,
                content={"detail": "Too many requests. Please retry shortly."},
                headers={"Retry-After": str(decision.retry_after)},
            )

    return await call_next(request)


@app.get("/health/live")
def health_live():
    return {"status": "ok"}


@app.get("/health/ready")
def health_ready():
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"status": "ready"}
    except Exception:
        logger.exception("Readiness check failed")
        return JSONResponse(status_code=503, content={"status": "not_ready"})


def check_production_settings() -> None:
    env = (settings.app_env or "development").lower()
    if env in {"production", "prod"}:
        if settings.secret_key == PLACEHOLDER_SECRET:
            raise RuntimeError("SECRET_KEY placeholder is not allowed in production")
        if "username:password@" in settings.database_url:
            raise RuntimeError("DATABASE_URL placeholder credentials are not allowed in production")
        if settings.blob_backend == "s3" and not settings.s3_bucket:
            raise RuntimeError("BLOB_BACKEND=s3 requires S3_BUCKET in production")
    else:
        if settings.secret_key == PLACEHOLDER_SECRET:
            logger.warning("SECRET_KEY is using placeholder default. Set SECRET_KEY in .env for secure deployments.")
        if "username:password@" in settings.database_url:
            logger.warning("DATABASE_URL appears to use placeholder credentials. Set DATABASE_URL in .env.")


@app.on_event("startup")
def on_startup():
    logger.info("Starting Hireflow API")
    check_production_settings()
    init_db()


@app.get("/")
def root():
    return {"message": "Hireflow API. See /docs for the endpoint reference."}
