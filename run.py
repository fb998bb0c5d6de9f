#!/usr/bin/env python3
"""
Development server for Budget Tracker.

Host, port and reloading come from HOST, PORT and RELOAD (see
budget_app/config.py). For production use run_production.py.
"""
import uvicorn

from budget_app.config import settings

APP = "budget_app.main:app"


def server_options():
    """Keyword arguments for uvicorn.run"""
    options = {
        "host": settings.HOST,
        "port": settings.PORT,
        "reload": settings.RELOAD,
        "log_level": settings.LOG_LEVEL.lower(),
    }
    if settings.RELOAD:
        options["reload_dirs"] = ["budget_app"]
    return options


def run_server():
    options = server_options()
    print(f"Starting {settings.PROJECT_NAME} ({settings.ENVIRONMENT})")
    print(f"API available at: http://localhost:{options['port']}{settings.API_V1_STR}")
    print(f"Database: {settings.DATABASE_URL}")
    uvicorn.run(APP, **options)


if __name__ == "__main__":
    run_server()
