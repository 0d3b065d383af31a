import logging
import os
import secrets

from app.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

# ✅ Database
DATABASE_URL = os.getenv("DATABASE_URL")

# ✅ Admin gate
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "campus-secret")
SECRET_KEY = os.getenv("SECRET_KEY") or secrets.token_urlsafe(32)
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

# ✅ Site
SITE_URL = os.getenv("SITE_URL", "https://offcampusjobs.online").rstrip("/")
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
    if origin.strip()
]

# ✅ Job defaults
DEFAULT_JOB_LOCATION = os.getenv("DEFAULT_JOB_LOCATION", "India")
DEFAULT_JOB_SUMMARY = os.getenv("DEFAULT_JOB_SUMMARY", "New job update")

# ✅ Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("LOG_DIR", "logs")


def require_database_url() -> str:
    """
    Return the configured database URL or fail.

    Raises:
        ConfigurationError: If DATABASE_URL is not set
    """
    if not DATABASE_URL:
        raise ConfigurationError(
            "DATABASE_URL is not set. Add it to your environment to use the job and resource stores."
        )
    return DATABASE_URL


def warn_on_default_secret() -> None:
    if ADMIN_PASSWORD == "campus-secret":
        logger.warning("ADMIN_PASSWORD is not set, using the default admin password")
