import os

from celery import Celery
from celery.schedules import crontab  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.dev")

app = Celery("hotelhub")

app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()


# ============================================================================
# CELERY BEAT SCHEDULE (Periodic Tasks)
# ============================================================================

app.conf.beat_schedule = {
    # Cancel unpaid booking holds, every minute
    "expire-pending-bookings": {
        "task": "bookings.expire_pending_bookings",
        "schedule": 60.0,
        "options": {"expires": 50},
    },
    # Close bookings once the check-out date has passed
    "complete-finished-bookings": {
        "task": "bookings.complete_finished_bookings",
        "schedule": crontab(minute=15),
    },
    # Confirmed reservations nobody checked in for
    "mark-no-show-reservations": {
        "task": "reservations.mark_no_shows",
        "schedule": crontab(minute=30),
    },
    # Deliver queued email/SMS notifications
    "process-pending-notifications": {
        "task": "notifications.process_pending_notifications",
        "schedule": 30.0,
        "options": {"expires": 25},
    },
}
