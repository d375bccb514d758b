"""Tests for the background geocoding task."""

import pytest

from donors.models import DonorProfile
from donors.tasks import donors_missing_location, geocode_missing_locations

pytestmark = pytest.mark.django_db


def test_nothing_to_do(make_donor, default_resolver, fake_geocoder):
    make_donor(latitude=12.0, longitude=77.0, postal_code='560001')
    assert geocode_missing_locations() == "No donors need geocoding"
    assert fake_geocoder.calls == []


def test_fills_in_coordinates(make_donor, default_resolver):
    donor = make_donor(postal_code='560001')
    zeroed = make_donor(full_name='Zeroed', latitude=0, longitude=0, postal_code='400001')

    result = geocode_missing_locations(batch_limit=5)

    assert result == "Updated 2 of 2 donors"
    donor.refresh_from_db()
    zeroed.refresh_from_db()
    assert (donor.latitude, donor.longitude) == (12.9716, 77.5946)
    assert (zeroed.latitude, zeroed.longitude) == (18.9388, 72.8354)


def test_failed_codes_leave_others_updated(make_donor, default_resolver):
    make_donor(full_name='Broken', postal_code='999999')
    make_donor(full_name='Fine', postal_code='560001')

    assert geocode_missing_locations(batch_limit=5) == "Updated 1 of 2 donors"
    assert DonorProfile.objects.get(full_name='Broken').latitude is None
    assert DonorProfile.objects.get(full_name='Fine').latitude == 12.9716


def test_batch_limit(make_donor, default_resolver, fake_geocoder):
    make_donor(full_name='A', postal_code='560001')
    make_donor(full_name='B', postal_code='400001')

    geocode_missing_locations(batch_limit=1)

    assert len(fake_geocoder.calls) == 1


def test_donors_missing_location_skips_inactive_and_codeless(make_donor):
    make_donor(full_name='No code')
    make_donor(full_name='Inactive', postal_code='560001', is_donor=False)
    wanted = make_donor(full_name='Wanted', postal_code='560001')
    assert donors_missing_location() == [wanted]


def test_padded_postal_code_is_stored(make_donor, default_resolver):
    donor = make_donor(postal_code='560001 ')

    assert geocode_missing_locations(batch_limit=5) == "Updated 1 of 1 donors"
    donor.refresh_from_db()
    assert (donor.latitude, donor.longitude) == (12.9716, 77.5946)


def test_donor_ids_limit_the_run(make_donor, default_resolver, fake_geocoder):
    chosen = make_donor(full_name='Chosen', postal_code='560001')
    other = make_donor(full_name='Other', postal_code='400001')

    assert geocode_missing_locations(batch_limit=5, donor_ids=[chosen.id]) == "Updated 1 of 1 donors"
    other.refresh_from_db()
    assert other.latitude is None
    assert len(fake_geocoder.calls) == 1


def test_beat_schedule_runs_geocoding():
    from vital.celery import app

    entry = app.conf.beat_schedule['geocode-missing-donor-locations']
    assert entry['task'] == 'donors.tasks.geocode_missing_locations'
    assert entry['schedule'] > 0
