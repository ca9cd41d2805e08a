# Gunicorn configuration file
# Logging goes to stdout; the JSON access line comes from RequestContextMiddleware.
import os
import multiprocessing

from dotenv import load_dotenv

load_dotenv()

from config import env  # noqa: E402

bind = f"{env.get_str('server.host', '0.0.0.0')}:{env.get_int('server.port', 8080)}"

_default_workers = (2 * multiprocessing.cpu_count()) + 1
workers = int(os.environ.get("GUNICORN_WORKERS", _default_workers))

# gthread: one DB connection per thread, so workers * threads must stay
# under db.pg.write.max_open_connection
worker_class = "gthread"
threads = int(os.environ.get("GUNICORN_THREADS", "4"))

timeout = 60
# In-flight requests get this long after SIGTERM before workers are killed
graceful_timeout = env.get_int("server.shutdown_grace_period_seconds", 3)
keepalive = 5

max_requests = 2000
max_requests_jitter = 200

loglevel = env.get_str("server.log_level", "info")
accesslog = None
errorlog = "-"
capture_output = True

wsgi_app = "config.wsgi:application"


def on_starting(server):
    server.log.info(f"Gunicorn starting: {workers} {worker_class} workers x {threads} threads")
    open_max = env.get_int("db.pg.write.max_open_connection", 20)
    if workers * threads > open_max:
        server.log.warning(
            f"workers*threads ({workers * threads}) exceeds db.pg.write.max_open_connection ({open_max})"
        )


def post_worker_init(worker):
    # fail fast: a worker that cannot reach the database exits non-zero
    from django.db import connections

    connections["default"].ensure_connection()
    worker.log.info(f"Worker {worker.pid} connected to the database")


def worker_exit(server, worker):
    from django.db import connections

    connections.close_all()
    server.log.info(f"Worker {worker.pid} exited; connections closed")
