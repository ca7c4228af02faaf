"""Gunicorn configuration for production deployment."""

# Server socket
bind = '0.0.0.0:5000'

# Worker processes: 1 process with several threads keeps the event feed in
# one place; SQLite's write lock serializes bookings across threads.
workers = 1
threads = 8
worker_class = 'gthread'

# Timeout
timeout = 30
graceful_timeout = 30
keepalive = 5

# Logging
accesslog = 'logs/gunicorn-access.log'
errorlog = 'logs/gunicorn-error.log'
loglevel = 'info'
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'

# Process naming
proc_name = 'hostal'

# Preload app for faster worker startups
preload_app = True

# Security
limit_request_line = 8190
limit_request_fields = 100
limit_request_field_size = 8190
