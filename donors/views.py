# donors/views.py
"""
Read API over the matching engine. Views fetch records, hand them to the
algorithms package and serialize what comes back.
"""
import logging

from django.conf import settings
from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework.decorators import api_view
from rest_framework.response import Response

from algorithms.achievements import evaluate_achievements
from algorithms.blood_compatibility import compatible_donors_for, compatible_recipients_for, parse_blood_group
from algorithms.eligibility import calculate_eligibility, last_completed_donation
from algorithms.haversine import GeoPoint, rank_nearby
from donors.geocoding import get_resolver
from donors.models import DonorProfile, Donation
from donors.records import fetch_candidates, fetch_donation_history
from donors.serializers import (
    AchievementReportSerializer,
    CandidateSerializer,
    DonationSerializer,
    EligibilitySerializer,
    NearbyQuerySerializer,
)

logger = logging.getLogger(__name__)


@api_view(['GET'])
def donor_eligibility(request, donor_id):
    """Can this donor give blood today, and if not, when"""
    donor = get_object_or_404(DonorProfile, pk=donor_id)
    history = fetch_donation_history(donor.id)
    last_donation = last_completed_donation(history)

    recovery_days = settings.DONATION_RECOVERY_DAYS
    eligibility = calculate_eligibility(last_donation, timezone.now(), recovery_days=recovery_days)

    serializer = EligibilitySerializer({
        'is_eligible': eligibility.is_eligible,
        'days_remaining': eligibility.days_remaining,
        'next_eligible_date': eligibility.next_eligible_date,
        'last_donation_date': last_donation,
        'recovery_days': recovery_days,
    })
    return Response(serializer.data)


@api_view(['GET'])
def donor_achievements(request, donor_id):
    donor = get_object_or_404(DonorProfile, pk=donor_id)
    history = fetch_donation_history(donor.id)
    report = evaluate_achievements(history, now=timezone.now())
    return Response(AchievementReportSerializer(report).data)


@api_view(['GET'])
def donor_donations(request, donor_id):
    donor = get_object_or_404(DonorProfile, pk=donor_id)
    donations = Donation.objects.filter(donor=donor).select_related('blood_request')
    return Response(DonationSerializer(donations, many=True).data)


@api_view(['GET'])
def nearby_donors(request):
    """
    Donors closest to a point.

    Query params: lat, lng (required), limit, blood_group (recipient group;
    only compatible donors are returned), max_distance in km.
    """
    query = NearbyQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)
    params = query.validated_data

    donors = DonorProfile.objects.filter(is_donor=True)
    if 'blood_group' in params:
        donor_groups = [g.value for g in compatible_donors_for(params['blood_group'])]
        donors = donors.filter(blood_group__in=donor_groups)
    donors = list(donors)

    # Postal codes for donors without coordinates, looked up a few at a time
    codes = [d.postal_code for d in donors if d.needs_geocoding]
    resolved = {}
    if codes:
        resolved = get_resolver().resolve_many(codes, limit=settings.GEOCODE_BATCH_LIMIT)

    candidates = fetch_candidates(donors, resolved=resolved)
    ranked = rank_nearby(
        GeoPoint(latitude=params['lat'], longitude=params['lng']),
        candidates,
        limit=params.get('limit', settings.NEARBY_DONOR_LIMIT),
        max_distance_km=params.get('max_distance'),
    )

    logger.info(f"Nearby search returned {len(ranked)} of {len(candidates)} donors")
    return Response({
        'count': len(ranked),
        'results': CandidateSerializer(ranked, many=True).data,
    })


@api_view(['GET'])
def blood_compatibility(request, blood_group):
    """Donor and recipient groups for a blood group; unknown groups get empty lists"""
    group = parse_blood_group(blood_group)
    return Response({
        'blood_group': group.value if group else blood_group,
        'can_receive_from': [g.value for g in compatible_donors_for(group)],
        'can_donate_to': [g.value for g in compatible_recipients_for(group)],
    })
