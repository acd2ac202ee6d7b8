import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
IS_PRODUCTION = ENVIRONMENT.lower() == "production"

DATABASE_URL = os.getenv("DATABASE_URL", "postgresql://localhost:5432/extrev")

# Sessions
SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "extrev_session")
SESSION_TTL_DAYS = int(os.getenv("SESSION_TTL_DAYS", "14"))
# Cookie lifetime and server-side expiry are derived from the same setting
SESSION_MAX_AGE = SESSION_TTL_DAYS * 24 * 60 * 60
SESSION_CACHE_TTL = int(os.getenv("SESSION_CACHE_TTL", "300"))
COOKIE_SECURE = os.getenv("COOKIE_SECURE", "true" if IS_PRODUCTION else "false").lower() == "true"

# Cache TTLs (seconds)
OPTIONS_CACHE_TTL = int(os.getenv("OPTIONS_CACHE_TTL", "86400"))
ENTITY_OPTIONS_CACHE_TTL = int(os.getenv("ENTITY_OPTIONS_CACHE_TTL", "300"))
LIST_CACHE_TTL = int(os.getenv("LIST_CACHE_TTL", "60"))

# Login / register throttling
AUTH_RATE_LIMIT = int(os.getenv("AUTH_RATE_LIMIT", "20"))
AUTH_RATE_WINDOW = int(os.getenv("AUTH_RATE_WINDOW", "60"))

# Uploads
UPLOAD_DIR = os.getenv("UPLOAD_DIR", "./uploads")
MAX_UPLOAD_SIZE = int(os.getenv("MAX_UPLOAD_SIZE", str(5 * 1024 * 1024)))

# Pagination
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# For production with credentials (cookies), we need specific origins
ALLOWED_ORIGINS = os.getenv(
    "ALLOWED_ORIGINS",
    "http://localhost:8080,http://localhost:3000",
).split(",")
