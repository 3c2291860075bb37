import os
import re

from dotenv import find_dotenv, load_dotenv


def _load_env_files() -> None:
    """
    Load the base .env, then .env.<ENVIRONMENT> if one exists.
    Existing OS environment variables are never overridden.
    """
    base_path = find_dotenv(".env", usecwd=True)
    if base_path:
        load_dotenv(base_path, override=False)

    env_name = os.environ.get("ENVIRONMENT", "").strip().lower()
    if env_name:
        path = find_dotenv(f".env.{env_name}", usecwd=True)
        if path:
            load_dotenv(path, override=False)


_load_env_files()

# === Environment Configuration ===
ENVIRONMENT = os.environ.get("ENVIRONMENT", "development").strip().lower()  # development, test, production

# === Server Configuration ===
SERVER_HOST = os.environ.get("SERVER_HOST", "0.0.0.0")


def _get_int_env(var_name: str, default_value: int) -> int:
    """
    Parse an integer environment variable robustly.
    - Trims whitespace and trailing semicolons.
    - Falls back to the first integer found in the string.
    - Returns the provided default if parsing fails.
    """
    raw = os.environ.get(var_name, str(default_value))
    text = str(raw).strip().rstrip(";")
    try:
        return int(text)
    except ValueError:
        match = re.search(r"[-+]?\d+", text or "")
        if match:
            return int(match.group(0))
    return int(default_value)


def _get_float_env(var_name: str, default_value: float) -> float:
    raw = str(os.environ.get(var_name, default_value)).strip().rstrip(";")
    try:
        return float(raw)
    except ValueError:
        return float(default_value)


SERVER_PORT = _get_int_env("SERVER_PORT", 5001)


# === CORS Configuration ===
def _get_cors_origins() -> list[str]:
    """
    Return CORS origins from env or a safe default.
    Example env format:
      CORS_ORIGINS="http://localhost:3000,http://127.0.0.1:3000,https://yourdomain.com"
    """
    raw = os.environ.get("CORS_ORIGINS", "").strip()
    if not raw:
        return ["*"]
    return [o.strip() for o in raw.split(",") if o.strip()]


CORS_ORIGINS = _get_cors_origins()

# === API Configuration ===
API_PREFIX = "/api"

# === Database Configuration ===
MONGODB_URI = os.environ.get("MONGODB_URI")
DATABASE_NAME = os.environ.get("DATABASE_NAME", "trip_itinerary")
TRIPS_COLLECTION = os.environ.get("TRIPS_COLLECTION", "trips")

# === JWT Configuration ===
JWT_SECRET = os.environ.get("JWT_SECRET", "your-secret-key-change-this-in-production")
JWT_ALGORITHM = os.environ.get("JWT_ALGORITHM", "HS256")
JWT_EXPIRATION_HOURS = _get_int_env("JWT_EXPIRATION_HOURS", 24)

# Identity used when a request carries no bearer token. Leave unset outside local development.
DEV_USER_ID = os.environ.get("DEV_USER_ID") or None

# === Logging Configuration ===
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


def _get_log_format() -> str:
    """console or json; production defaults to json when LOG_FORMAT is unset."""
    raw = os.environ.get("LOG_FORMAT", "").strip().lower()
    if raw in ("console", "json"):
        return raw
    return "json" if ENVIRONMENT == "production" else "console"


LOG_FORMAT = _get_log_format()

# === Client Configuration ===
TRIP_API_BASE_URL = os.environ.get("TRIP_API_BASE_URL", f"http://localhost:{SERVER_PORT}{API_PREFIX}")
TRIP_API_TIMEOUT = _get_float_env("TRIP_API_TIMEOUT", 5.0)

# === Application Settings ===
APP_NAME = "Trip Itinerary API"
APP_VERSION = "1.0.0"
