# vital/celery.py
"""
Celery app for the donor geocoding task and its periodic schedule
"""
import os
from celery import Celery

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'vital.settings')

app = Celery('vital')

# CELERY_* keys in vital.settings
app.config_from_object('django.conf:settings', namespace='CELERY')
app.autodiscover_tasks()

# Donors registered without coordinates get picked up on the next beat tick
app.conf.beat_schedule = {
    'geocode-missing-donor-locations': {
        'task': 'donors.tasks.geocode_missing_locations',
        'schedule': float(os.environ.get('GEOCODE_INTERVAL_MINUTES', 15)) * 60,
    },
}
