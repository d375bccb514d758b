"""Shared test fixtures for the donor matching tests."""

from datetime import timedelta

import pytest
from django.utils import timezone
from geopy.exc import GeocoderServiceError
from rest_framework.test import APIClient

import donors.geocoding
from donors.geocoding import PostalCodeResolver
from donors.models import BloodRequest, Donation, DonorProfile


class FakeLocation:
    def __init__(self, latitude, longitude):
        self.latitude = latitude
        self.longitude = longitude


class FakeGeocoder:
    """Stands in for Nominatim: known codes resolve, failing codes raise"""

    def __init__(self, known=None, failing=()):
        self.known = dict(known or {})
        self.failing = set(failing)
        self.calls = []

    def geocode(self, query, exactly_one=True):
        code = query['postalcode']
        self.calls.append(code)
        if code in self.failing:
            raise GeocoderServiceError(f"service unavailable for {code}")
        coords = self.known.get(code)
        if coords is None:
            return None
        return FakeLocation(*coords)


@pytest.fixture
def fake_geocoder():
    return FakeGeocoder(
        known={
            '560001': (12.9716, 77.5946),
            '400001': (18.9388, 72.8354),
        },
        failing={'999999'},
    )


@pytest.fixture
def resolver(fake_geocoder):
    return PostalCodeResolver(geocoder=fake_geocoder, country='India', min_delay_seconds=0)


@pytest.fixture
def default_resolver(monkeypatch, resolver):
    """Install the fake-backed resolver as the process-wide one"""
    monkeypatch.setattr(donors.geocoding, '_default_resolver', resolver)
    return resolver


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_donor(db):
    def _make(full_name='Asha Rao', blood_group='O-', **kwargs):
        return DonorProfile.objects.create(full_name=full_name, blood_group=blood_group, **kwargs)
    return _make


@pytest.fixture
def make_request(db):
    def _make(blood_group='A+', urgency_level='normal', **kwargs):
        return BloodRequest.objects.create(
            requester_name='Ward 4', blood_group=blood_group, urgency_level=urgency_level, **kwargs
        )
    return _make


@pytest.fixture
def make_donation(db):
    def _make(donor, days_ago=0, status='completed', blood_request=None):
        return Donation.objects.create(
            donor=donor,
            status=status,
            blood_request=blood_request,
            created_at=timezone.now() - timedelta(days=days_ago),
        )
    return _make
