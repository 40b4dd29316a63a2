"""
Gunicorn configuration for the courseware API.

    gunicorn -c deploy/gunicorn.conf.py courseware.main:app
"""
import os
import multiprocessing

# Server socket
bind = f"{os.environ.get('HOST', '0.0.0.0')}:{os.environ.get('PORT', '8000')}"
backlog = 2048

# Worker processes. On SQLite every transaction opens with BEGIN IMMEDIATE and
# waits up to 30s for the write lock, so keep WEB_CONCURRENCY low unless
# DATABASE_URL points at a server database.
workers = int(os.environ.get("WEB_CONCURRENCY", multiprocessing.cpu_count() * 2 + 1))
worker_class = "uvicorn.workers.UvicornWorker"
worker_connections = 1000
timeout = 60
keepalive = 5

# Logging (stdout/stderr, collected by the container runtime)
accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("LOG_LEVEL", "info").lower()
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'

# Process naming
proc_name = "courseware"

daemon = False

# Security
limit_request_line = 4094
limit_request_fields = 100
limit_request_field_size = 8190


def when_ready(server):
    """Called just after the server is started."""
    server.log.info(f"courseware ready on {bind} with {workers} workers")
