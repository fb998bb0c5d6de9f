import os
from pathlib import Path

class Settings:
    # Database
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./data/budget.db")

    # API Settings
    API_V1_STR = "/api"
    PROJECT_NAME = "Budget Tracker"
    ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

    # Development server (run.py)
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "8000"))
    RELOAD = os.getenv("RELOAD", "true").lower() in ("1", "true", "yes")

    # Caller identity used when a request carries no X-User-Id header
    DEFAULT_USER_ID = os.getenv("DEFAULT_USER_ID", "user-1")

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # Pagination
    DEFAULT_PAGE_SIZE = 100
    MAX_CATEGORY_PAGE_SIZE = 500
    MAX_TRANSACTION_PAGE_SIZE = 1000

    def __init__(self):
        # Ensure the SQLite data directory exists
        if self.DATABASE_URL.startswith("sqlite:///") and ":memory:" not in self.DATABASE_URL:
            db_path = Path(self.DATABASE_URL[len("sqlite:///"):])
            db_path.parent.mkdir(parents=True, exist_ok=True)

settings = Settings()
