"""
Donation eligibility - cooling-off period between completed donations
"""
import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

# Days between completed donations; overridable per call and via settings.DONATION_RECOVERY_DAYS
DONATION_RECOVERY_DAYS = 90

SECONDS_PER_DAY = 24 * 60 * 60


@dataclass(frozen=True)
class Eligibility:
    is_eligible: bool
    days_remaining: int
    next_eligible_date: datetime


def _as_datetime(value):
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    raise TypeError(f"Expected date or datetime, got {type(value).__name__}")


def calculate_eligibility(last_donation_date, now, recovery_days: int = DONATION_RECOVERY_DAYS) -> Eligibility:
    """
    Decide whether a donor may donate again.

    Args:
        last_donation_date: When the last completed donation happened, or None
            if the donor has never donated
        now: Current time (date or datetime); passed in so results are reproducible
        recovery_days: Days that must pass after a completed donation

    Returns:
        Eligibility with days_remaining rounded up to whole days
    """
    now = _as_datetime(now)
    if last_donation_date is None:
        return Eligibility(is_eligible=True, days_remaining=0, next_eligible_date=now)

    next_date = _as_datetime(last_donation_date) + timedelta(days=recovery_days)
    days_remaining = math.ceil((next_date - now).total_seconds() / SECONDS_PER_DAY)

    if days_remaining <= 0:
        return Eligibility(is_eligible=True, days_remaining=0, next_eligible_date=now)
    return Eligibility(is_eligible=False, days_remaining=days_remaining, next_eligible_date=next_date)


def last_completed_donation(history):
    """Timestamp of the newest completed donation in a newest-first history"""
    for donation in history:
        if donation.status == 'completed':
            return donation.timestamp
    return None
