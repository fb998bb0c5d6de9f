#!/usr/bin/env python3
"""
Production server runner for Budget Tracker.

Starts Gunicorn with Uvicorn workers using gunicorn_conf.py.
For development, use run.py instead (it reloads on code changes).
"""
import sys
import os
from pathlib import Path

project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

gunicorn_bin = project_root / ".venv" / "bin" / "gunicorn"


def run_server():
    """Run the production server using Gunicorn"""
    if not gunicorn_bin.exists():
        print("Gunicorn not found. Please install: pip install -e .")
        return 1

    print("Starting Budget Tracker (Production Mode)")
    print("=" * 50)
    print(f"Environment: {os.getenv('ENVIRONMENT', 'production')}")
    print(f"Database: {os.getenv('DATABASE_URL', 'sqlite:///./data/budget.db')}")
    print(f"Config: gunicorn_conf.py")
    print("=" * 50)
    print()

    # Replace the current process so a supervisor sees gunicorn directly
    os.execv(str(gunicorn_bin), [
        str(gunicorn_bin),
        "-c", "gunicorn_conf.py",
        "budget_app.main:app"
    ])


if __name__ == "__main__":
    sys.exit(run_server() or 0)
