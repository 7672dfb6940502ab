import os

# Browser sessions live in worker memory, so one worker unless told otherwise.
wsgi_app = "brainstorm_buddy.main:app"
bind = "0.0.0.0:8000"
workers = int(os.environ.get("WEB_CONCURRENCY", 1))
worker_class = "uvicorn.workers.UvicornWorker"
timeout = 120
keepalive = 5
accesslog = "-"
errorlog = "-"
loglevel = "info"
