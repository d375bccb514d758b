# donors/tasks.py
"""
Celery tasks for filling in donor coordinates from postal codes
"""
import logging

from celery import shared_task
from django.conf import settings

from donors.geocoding import get_resolver
from donors.models import DonorProfile

logger = logging.getLogger(__name__)


def donors_missing_location(donor_ids=None):
    """Donors with no latitude (null or 0) but a postal code, optionally only those in donor_ids"""
    donors = DonorProfile.objects.filter(is_donor=True).exclude(postal_code='')
    if donor_ids is not None:
        donors = donors.filter(id__in=donor_ids)
    return [d for d in donors if d.needs_geocoding]


def store_resolved_locations(donors, resolved):
    updated = 0
    for donor in donors:
        point = resolved.get(donor.postal_code.strip())
        if point is None:
            continue
        donor.latitude = point.latitude
        donor.longitude = point.longitude
        donor.save(update_fields=['latitude', 'longitude', 'updated_at'])
        updated += 1
    return updated


@shared_task
def geocode_missing_locations(batch_limit=None, donor_ids=None):
    """
    Resolve postal codes for donors without coordinates and save the result.
    At most `batch_limit` new codes are looked up per run (GEOCODE_BATCH_LIMIT by default).
    With `donor_ids`, only those donors are considered.
    """
    if batch_limit is None:
        batch_limit = settings.GEOCODE_BATCH_LIMIT

    donors = donors_missing_location(donor_ids)
    if not donors:
        return "No donors need geocoding"

    resolved = get_resolver().resolve_many([d.postal_code for d in donors], limit=batch_limit)
    updated = store_resolved_locations(donors, resolved)

    logger.info(f"Geocoding run updated {updated} of {len(donors)} donors")
    return f"Updated {updated} of {len(donors)} donors"
