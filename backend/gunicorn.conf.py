import multiprocessing
import os

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "core.settings")
import django  # noqa: E402

django.setup()

from django.conf import settings  # noqa: E402

bind = os.environ.get("GUNICORN_BIND", "0.0.0.0:8000")
workers = int(os.environ.get("GUNICORN_WORKERS", multiprocessing.cpu_count() * 2 + 1))
timeout = int(os.environ.get("GUNICORN_TIMEOUT", "30"))

# Disable Gunicorn's default handlers (stdout/stderr); logconfig_dict replaces them
errorlog = "-"
accesslog = "-"
loglevel = os.environ.get("LOG_LEVEL", "info").lower()
capture_output = True

# Gunicorn applies dictConfig; Django's LOGGING replaces its handlers
logconfig_dict = settings.LOGGING
