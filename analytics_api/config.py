import os
from typing import List
from dotenv import load_dotenv

load_dotenv()


class Settings:
    # If DB_URL is not provided, fall back to a local sqlite file so the
    # dashboard API can run without a Postgres instance.
    DB_URL: str = os.getenv("DB_URL") or "sqlite:///./dev.db"

    PROJECT_NAME: str = os.getenv("PROJECT_NAME") or "Website Analytics API"

    LOG_LEVEL: str = (os.getenv("LOG_LEVEL") or "INFO").upper()

    # Comma-separated list of allowed origins for the dashboard frontend.
    CORS_ORIGINS: List[str] = [
        origin.strip()
        for origin in (os.getenv("CORS_ORIGINS") or "*").split(",")
        if origin.strip()
    ]

    DEFAULT_PAGE_SIZE: int = int(os.getenv("DEFAULT_PAGE_SIZE") or 20)

    # Upper bound on events returned by the session activity timeline.
    SESSION_ACTIVITY_LIMIT: int = int(os.getenv("SESSION_ACTIVITY_LIMIT") or 500)


settings = Settings()
