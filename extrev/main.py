import logging
import os
import time
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from . import __version__
from .auth import get_current_user
from .cache import get_cache_stats
from .config import ALLOWED_ORIGINS
from .csrf import CSRF_COOKIE_NAME, CSRFMiddleware, generate_csrf_token, set_csrf_cookie
from .database import Base, SessionLocal, engine, get_db
from .domain.admin import router as admin_router
from .domain.auth import router as auth_router
from .domain.clients import router as clients_router
from .domain.consultants import router as consultants_router
from .domain.consults import router as consults_router
from .domain.events import router as events_router
from .domain.locations import router as locations_router
from .domain.users import router as users_router
from .domain.users.service import UserService
from .schemas import ValidatedUser
from .security_headers import SecurityHeadersMiddleware
from .seed import seed_lookups
from .shared.errors import form_error_target

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("passlib").setLevel(logging.ERROR)

# Set CSRF_ENABLED=false only for development/testing
CSRF_ENABLED = os.getenv("CSRF_ENABLED", "true").lower() == "true"
SECURITY_HEADERS_ENABLED = os.getenv("SECURITY_HEADERS_ENABLED", "true").lower() == "true"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    try:
        Base.metadata.create_all(bind=engine, checkfirst=True)
        logger.info("Database tables created successfully")
    except Exception as e:
        # Another worker may have won the race
        error_msg = str(e)
        if "already exists" in error_msg or "duplicate key" in error_msg:
            logger.info("Database tables already exist (created by another worker)")
        else:
            logger.error(f"Failed to create database tables: {e}")
            raise

    db = SessionLocal()
    try:
        seed_lookups(db)
    finally:
        db.close()

    try:
        from .rate_limiter import get_redis_client

        get_redis_client()
        logger.info("Redis connection established")
    except Exception as e:
        logger.warning(f"Redis connection failed - queries will bypass the cache: {e}")

    yield
    logger.info("Application shutting down...")


app = FastAPI(title="ExtRev", version=__version__, lifespan=lifespan)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Form and query validation failures are a 400 with one message per field"""
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        errors.append(
            {
                "field": ".".join(loc),
                "msg": str(error.get("msg", "")).removeprefix("Value error, "),
            }
        )

    logger.warning(f"Validation error for {request.url.path}: {errors}")
    headers = {}
    if request.method in ("POST", "PATCH", "PUT"):
        headers["HX-Retarget"] = form_error_target(request.url.path)
    return JSONResponse(status_code=400, content={"detail": errors}, headers=headers)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception as e:
        logger.error(f"{request.method} {request.url.path} - Error: {str(e)}")
        raise


if SECURITY_HEADERS_ENABLED:
    app.add_middleware(SecurityHeadersMiddleware, exclude_paths=["/health", "/docs", "/openapi.json"])
    logger.info("Security headers enabled")
else:
    logger.warning("Security headers DISABLED - only use in development!")

if CSRF_ENABLED:
    app.add_middleware(CSRFMiddleware)
    logger.info("CSRF protection enabled")
else:
    logger.info("CSRF protection disabled")

logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["HX-Redirect", "HX-Retarget"],
)

# Routes
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(admin_router)
app.include_router(clients_router)
app.include_router(consultants_router)
app.include_router(locations_router)
app.include_router(consults_router)
app.include_router(events_router)


@app.get("/")
def root():
    return {"message": "ExtRev is running"}


@app.get("/homepage")
async def homepage(
    current_user: ValidatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return {"user": current_user, "feed": UserService(db).feed(current_user)}


@app.get("/health")
def health(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"❌ Database health check failed: {e}")
        return JSONResponse(status_code=503, content={"status": "unhealthy", "database": str(e)})
    return {"status": "healthy"}


@app.get("/health/redis")
async def redis_health_check():
    """Check Redis connectivity for monitoring"""
    try:
        from .rate_limiter import get_redis_client

        redis_client = get_redis_client()

        start_time = time.time()
        redis_client.ping()
        response_time = (time.time() - start_time) * 1000

        return {
            "status": "healthy",
            "redis": {"connected": True, "response_time_ms": round(response_time, 2)},
            "cache": get_cache_stats(),
        }
    except Exception as e:
        return {"status": "degraded", "redis": {"connected": False, "error": str(e)}}


@app.get("/csrf-token")
async def get_csrf_token(request: Request, response: Response):
    """Token for the X-CSRF-Token header; also (re)sets the cookie"""
    existing_token = request.cookies.get(CSRF_COOKIE_NAME)
    if existing_token:
        return {"csrf_token": existing_token}

    # The middleware already picked a token and will set the cookie
    pending_token = getattr(request.state, "csrf_token", None)
    if pending_token:
        return {"csrf_token": pending_token}

    new_token = generate_csrf_token()
    set_csrf_cookie(response, new_token)
    return {"csrf_token": new_token}
