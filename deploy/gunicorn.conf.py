# Gunicorn configuration
import multiprocessing

bind = "127.0.0.1:8000"
workers = multiprocessing.cpu_count() * 2 + 1
worker_class = "sync"
# Codeforces calls are rate limited and retried; allow for a slow user.status
timeout = 120
keepalive = 5
errorlog = "/var/log/cf-practice-coach/gunicorn-error.log"
accesslog = "/var/log/cf-practice-coach/gunicorn-access.log"
loglevel = "info"
wsgi_app = "app:create_app('production')"
