from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_migrate import Migrate
from redis import Redis
from rq import Queue
from flask import current_app

# kwargs understood by Queue.enqueue but not by the job function itself
RQ_KEYS = {'job_timeout', 'timeout', 'at_front', 'depends_on', 'result_ttl', 'ttl',
           'failure_ttl', 'meta', 'description', 'job_id', 'retry'}


class RQWrapper:
    def __init__(self):
        self.redis = None
        self.queue = None

    def init_app(self, app):
        url = app.config.get("REDIS_URL")
        if not url:
            # tests and local runs without redis execute jobs inline
            self.redis = None
            self.queue = None
            return
        try:
            self.redis = Redis.from_url(url)
            self.queue = Queue(app.config.get("RQ_QUEUE", "default"), connection=self.redis)
        except Exception:
            app.logger.exception('Redis/RQ init failed, falling back to sync execution')
            self.redis = None
            self.queue = None

    def _run_sync(self, args, kwargs):
        func = args[0] if args else None
        func_args = args[1:] if len(args) > 1 else ()
        safe_kwargs = {k: v for k, v in kwargs.items() if k not in RQ_KEYS}
        if func:
            return func(*func_args, **safe_kwargs)
        return None

    def enqueue(self, *args, **kwargs):
        """Enqueue to RQ when available, otherwise call the function synchronously.

        The synchronous result is returned as-is; callers that need a job id
        should check for an ``id`` attribute.
        """
        if not self.queue:
            try:
                return self._run_sync(args, kwargs)
            except Exception:
                current_app.logger.exception('Synchronous fallback execution failed')
                return None

        try:
            return self.queue.enqueue(*args, **kwargs)
        except Exception:
            # Redis down: the job still has to run once
            current_app.logger.exception('RQ enqueue failed, falling back to sync execution')
            try:
                return self._run_sync(args, kwargs)
            except Exception:
                current_app.logger.exception('Synchronous fallback execution after enqueue failure also failed')
                return None


db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()
rq = RQWrapper()
