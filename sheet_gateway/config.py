import os
from typing import List

from dotenv import load_dotenv

load_dotenv()


def getenv(name: str, default: str = "") -> str:
    return os.environ.get(name, default).strip()


def getenv_int(name: str, default: int) -> int:
    val = getenv(name)
    if not val:
        return default
    try:
        return int(val)
    except ValueError:
        return default


class Settings:
    # Server
    host: str = getenv("HOST", "0.0.0.0")
    port: int = getenv_int("PORT", 3001)

    # CORS (credentialed requests are allowed for these origins only)
    cors_allowed_origins: List[str] = getenv(
        "CORS_ALLOWED_ORIGINS",
        "http://localhost:8080 http://localhost:8082 http://localhost:3000 "
        "http://localhost:5173 https://book-gx-back.vercel.app",
    ).split()

    # Request body cap (10 MB)
    max_body_bytes: int = getenv_int("MAX_BODY_BYTES", 10 * 1024 * 1024)

    # Google
    google_token_uri: str = getenv("GOOGLE_TOKEN_URI", "https://oauth2.googleapis.com/token")
    default_header_range: str = getenv("DEFAULT_HEADER_RANGE", "A1:ZZ1")

    # Logging
    log_level: str = getenv("LOG_LEVEL", "INFO").upper()

    # Health check
    service_message: str = getenv("SERVICE_MESSAGE", "Sheet Gateway is running")


settings = Settings()
