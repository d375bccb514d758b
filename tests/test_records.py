"""Tests for turning stored rows into engine records."""

import pytest

from algorithms.haversine import GeoPoint
from donors.records import fetch_candidates, fetch_donation_history, normalize_urgency


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, None),
        ('urgent', 'urgent'),
        ('', None),
        ({'urgency_level': 'critical'}, 'critical'),
        ([{'urgency_level': 'urgent'}], 'urgent'),
        ([], None),
        ({'urgency_level': 3}, None),
        ({}, None),
        (17, None),
    ],
)
def test_normalize_urgency(raw, expected):
    assert normalize_urgency(raw) == expected


@pytest.mark.django_db
def test_history_is_newest_first_with_urgency(make_donor, make_request, make_donation):
    donor = make_donor()
    urgent = make_request(urgency_level='urgent')
    make_donation(donor, days_ago=200)
    make_donation(donor, days_ago=10, blood_request=urgent)
    make_donation(donor, days_ago=100, status='cancelled')

    history = fetch_donation_history(donor.id)

    assert [d.status for d in history] == ['completed', 'cancelled', 'completed']
    assert history[0].request_urgency == 'urgent'
    assert history[1].request_urgency is None
    assert history[0].timestamp > history[1].timestamp > history[2].timestamp


@pytest.mark.django_db
def test_history_only_for_that_donor(make_donor, make_donation):
    donor = make_donor()
    other = make_donor(full_name='Ravi')
    make_donation(other)
    assert fetch_donation_history(donor.id) == []


@pytest.mark.django_db
def test_candidates_use_stored_or_resolved_location(make_donor):
    stored = make_donor(full_name='Stored', latitude=12.9, longitude=77.6)
    zero = make_donor(full_name='Zero', latitude=0, longitude=0, postal_code='560001')
    unknown = make_donor(full_name='Unknown', postal_code='111111')

    resolved = {'560001': GeoPoint(12.97, 77.59)}
    candidates = {c.name: c for c in fetch_candidates([stored, zero, unknown], resolved=resolved)}

    assert candidates['Stored'].location == GeoPoint(12.9, 77.6)
    assert candidates['Zero'].location == GeoPoint(12.97, 77.59)
    assert candidates['Unknown'].location is None
    assert candidates['Stored'].id == stored.id


@pytest.mark.django_db
def test_candidates_default_to_active_donors(make_donor):
    make_donor(full_name='Active', latitude=1, longitude=1)
    make_donor(full_name='Retired', latitude=1, longitude=1, is_donor=False)
    assert [c.name for c in fetch_candidates()] == ['Active']


@pytest.mark.django_db
def test_padded_postal_code_uses_resolved_location(make_donor):
    padded = make_donor(full_name='Padded', postal_code=' 560001 ')
    resolved = {'560001': GeoPoint(12.97, 77.59)}
    [candidate] = fetch_candidates([padded], resolved=resolved)
    assert candidate.location == GeoPoint(12.97, 77.59)
