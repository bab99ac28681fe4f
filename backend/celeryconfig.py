"""
Celery configuration for the résumé intake workers.

Loaded by `celery_app.config_from_object("celeryconfig")` in resume_intake/tasks/__init__.py.
All broker/result-backend URLs come from environment variables,
defaulting to localhost for local dev.
"""

import os

# ═══════════════════════════════════════════════════════════
#  Broker & Result Backend
# ═══════════════════════════════════════════════════════════

broker_url = os.getenv("CELERY_BROKER_URL", "redis://localhost:6379/0")
result_backend = os.getenv("CELERY_RESULT_BACKEND", "redis://localhost:6379/1")

# ═══════════════════════════════════════════════════════════
#  Serialization — JSON only
# ═══════════════════════════════════════════════════════════

task_serializer = "json"
result_serializer = "json"
accept_content = ["json"]

# ═══════════════════════════════════════════════════════════
#  Timezone
# ═══════════════════════════════════════════════════════════

timezone = "America/Bogota"
enable_utc = True

# ═══════════════════════════════════════════════════════════
#  Task Execution
# ═══════════════════════════════════════════════════════════

# Acknowledge tasks after they complete
task_acks_late = True
task_reject_on_worker_lost = True

# One headless browser per worker process at a time
worker_prefetch_multiplier = 1

# Rendering waits up to PDF_TIMEOUT_MS per attempt
task_soft_time_limit = 300
task_time_limit = 330

# ═══════════════════════════════════════════════════════════
#  Retry Policy
# ═══════════════════════════════════════════════════════════

task_default_retry_delay = 30
task_max_retries = 3

# ═══════════════════════════════════════════════════════════
#  Result Expiry
# ═══════════════════════════════════════════════════════════

result_expires = 86400

# ═══════════════════════════════════════════════════════════
#  Worker Settings
# ═══════════════════════════════════════════════════════════

# Chromium leaks memory across many launches
worker_max_tasks_per_child = 50

worker_send_task_events = False
task_send_sent_event = False

# ═══════════════════════════════════════════════════════════
#  Task Routes
# ═══════════════════════════════════════════════════════════
# Run a dedicated worker for rendering:
#   celery -A resume_intake.tasks worker -Q pipeline

task_routes = {
    "resume_intake.tasks.document_tasks.*": {"queue": "pipeline"},
}

task_default_queue = "default"

beat_schedule = {}
