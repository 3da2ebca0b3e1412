"""
Celery application.
Used to publish queue notifications off the request path.
Dev and test settings run tasks eagerly; production uses the Redis broker.
"""

import os
from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "yardline.settings_dev")

app = Celery("yardline")
app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()
