"""
Gunicorn configuration for the portal API.

    gunicorn portal.main:app -c gunicorn.conf.py
"""
import os

bind = f"{os.getenv('HOST', '0.0.0.0')}:{os.getenv('PORT', '8000')}"
workers = int(os.getenv("GUNICORN_WORKERS", 2))
worker_class = "uvicorn.workers.UvicornWorker"

# Restart workers periodically, jittered so they do not all recycle at once
max_requests = 1000
max_requests_jitter = 100

# Resume scoring waits on the LLM during submission
timeout = 60
graceful_timeout = 30
keepalive = 5

proc_name = "internship_portal"

accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()


def when_ready(server):
    server.log.info("Portal API ready, spawning %s workers", workers)
