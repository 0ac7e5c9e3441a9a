"""Environment configuration for the storefront core."""

import logging
import os

import sentry_sdk
from dotenv import load_dotenv

load_dotenv(".env.local")

logger = logging.getLogger(__name__)


def get_server_base_url() -> str:
    """Backend API base URL, e.g. "https://api.example.com/api"."""
    return os.environ.get("SERVER_BASE_URL", "http://localhost:8000/api")


def get_frontend_url() -> str:
    """Public origin of the storefront, used for checkout redirect targets."""
    return os.environ.get("FRONTEND_URL", "http://localhost:5173").rstrip("/")


def get_default_locale() -> str:
    return os.environ.get("DEFAULT_LOCALE", "en")


def get_api_timeout() -> float:
    try:
        return float(os.environ.get("API_TIMEOUT_SECONDS", "30"))
    except ValueError:
        logger.warning("Invalid API_TIMEOUT_SECONDS, using 30")
        return 30.0


def init_sentry() -> bool:
    """Initialize Sentry error reporting if SENTRY_DSN is set.

    Returns:
        True if Sentry was initialized, False otherwise
    """
    dsn = os.environ.get("SENTRY_DSN")
    if not dsn:
        logger.info("SENTRY_DSN not set, error reporting disabled")
        return False

    sentry_sdk.init(
        dsn=dsn,
        environment=os.environ.get("ENVIRONMENT", "development"),
        traces_sample_rate=0.0,
    )
    logger.info("Sentry initialized")
    return True
