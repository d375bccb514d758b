"""
Record fetching - turns ORM rows into the plain records the matching engine reads
"""
import logging
from collections.abc import Mapping

from algorithms.achievements import Donation as DonationRecord
from algorithms.haversine import Candidate, GeoPoint
from donors.models import Donation, DonorProfile

logger = logging.getLogger(__name__)


def normalize_urgency(raw):
    """
    Reduce whatever is attached to a donation as request urgency to one optional string.

    Accepts None, a string, a mapping with 'urgency_level', an object with an
    urgency_level attribute, or a list/tuple of those (first element wins).
    Anything else is treated as no urgency.
    """
    if isinstance(raw, (list, tuple)):
        raw = raw[0] if raw else None
    if raw is None:
        return None
    if isinstance(raw, str):
        return raw or None
    if isinstance(raw, Mapping):
        value = raw.get('urgency_level')
    else:
        value = getattr(raw, 'urgency_level', None)
    return value if isinstance(value, str) and value else None


def to_donation_record(donation):
    return DonationRecord(
        timestamp=donation.created_at,
        status=donation.status,
        request_urgency=normalize_urgency(donation.blood_request),
    )


def history_queryset():
    """Donations newest first with the request joined in"""
    return Donation.objects.select_related('blood_request').order_by('-created_at', '-id')


def fetch_donation_history(donor_id):
    """All donations for a donor as engine records, newest first"""
    return [to_donation_record(d) for d in history_queryset().filter(donor_id=donor_id)]


def history_from_prefetched(donor):
    """
    Engine records from donations already loaded with
    prefetch_related(Prefetch('donations', queryset=history_queryset())).
    """
    return [to_donation_record(d) for d in donor.donations.all()]


def donor_location(donor, resolved=None):
    """
    Stored coordinates for a donor, or the resolved location of their postal code.
    A latitude of 0 counts as missing.
    """
    if donor.latitude and donor.longitude is not None:
        return GeoPoint(latitude=donor.latitude, longitude=donor.longitude)
    if resolved and donor.postal_code:
        return resolved.get(donor.postal_code.strip())
    return None


def fetch_candidates(donors=None, resolved=None):
    """
    Build ranking candidates from donor profiles.

    Args:
        donors: Iterable of DonorProfile (defaults to every active donor)
        resolved: Optional mapping postal code -> GeoPoint for donors without coordinates

    Returns:
        List of Candidate; location is None when nothing is known
    """
    if donors is None:
        donors = DonorProfile.objects.filter(is_donor=True)

    candidates = []
    for donor in donors:
        candidates.append(Candidate(
            id=donor.id,
            blood_group=donor.blood_group,
            name=donor.full_name,
            location=donor_location(donor, resolved),
        ))

    missing = sum(1 for c in candidates if c.location is None)
    if missing:
        logger.debug(f"{missing} of {len(candidates)} donors have no usable location")
    return candidates
