"""
Celery application.
Dev settings run tasks inline (CELERY_TASK_ALWAYS_EAGER); production uses Redis.
"""

import os
from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "freightdesk.settings_dev")

app = Celery("freightdesk")
app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()
