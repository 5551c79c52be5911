from celery import Celery
from order_history.core.config import settings

celery_app = Celery("order_history", broker=settings.REDIS_URL, backend=settings.REDIS_URL)
celery_app.conf.imports = ("order_history.workers.tasks.order_status",)
celery_app.conf.task_serializer = "json"
celery_app.conf.result_serializer = "json"
celery_app.conf.timezone = "UTC"
