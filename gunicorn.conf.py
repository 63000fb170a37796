# Gunicorn configuration for the Consult-Scribe service
import os
import sys

# Add src directory to Python path
current_dir = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, os.path.join(current_dir, "src"))

from consultscribe.core.config import get_settings  # noqa: E402

_settings = get_settings()

# Server socket
bind = f"{_settings.host}:{os.environ.get('PORT', _settings.port)}"

# Worker processes
workers = int(os.environ.get("WEB_CONCURRENCY", "2"))
worker_class = "uvicorn.workers.UvicornWorker"
timeout = int(os.environ.get("GUNICORN_TIMEOUT", "60"))
keepalive = 2

max_requests = 1000
max_requests_jitter = 50

# Logging
accesslog = "-"
errorlog = "-"
loglevel = _settings.logging.level.lower()

proc_name = "consultscribe"
preload_app = True
