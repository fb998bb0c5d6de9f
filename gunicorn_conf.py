"""
Gunicorn configuration for Budget Tracker.

Handlers are stateless, so any number of workers can share the database;
the connection pool is per worker.
"""
import os

# Server socket
bind = os.getenv("BIND", "0.0.0.0:8000")
backlog = 2048

# Worker processes
workers = int(os.getenv("WEB_CONCURRENCY", "2"))

# UvicornWorker runs the ASGI app
worker_class = "uvicorn.workers.UvicornWorker"
worker_connections = 1000

timeout = 30
keepalive = 2
graceful_timeout = 30

# Log to stdout/stderr
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# Access log format with response time
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'

proc_name = "budget_tracker"

daemon = False
pidfile = None

# Each worker opens its own engine after the fork
preload_app = False

max_requests = 0
max_requests_jitter = 0
