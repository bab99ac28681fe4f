"""
Celery application factory.
"""

from celery import Celery

celery_app = Celery("resume_intake")
celery_app.config_from_object("celeryconfig")

# Auto-discover tasks in these modules
celery_app.autodiscover_tasks([
    "resume_intake.tasks.document_tasks",
])
