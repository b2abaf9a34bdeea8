import os

wsgi_app = "core.wsgi:application"
bind = f"0.0.0.0:{os.getenv('PORT', '3001')}"
workers = int(os.getenv("WEB_CONCURRENCY", 4))
worker_class = "sync"
worker_tmp_dir = "/dev/shm"
max_requests = 1000
max_requests_jitter = 100
timeout = 120
keepalive = 5

# Logging
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'

# Process naming
proc_name = "springlegal-site"

# Server mechanics
daemon = False
umask = 0o007

# Server hooks
def on_starting(server):
    """Called just before the master process is initialized."""
    server.log.info("Starting Spring Legal Consultancy server")

def when_ready(server):
    """Called just after the server is started."""
    server.log.info(f"Server ready on {bind} (API: /api/v1/contact, clean URLs without .html)")
