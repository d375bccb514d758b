# donors/serializers.py
from rest_framework import serializers

from algorithms.blood_compatibility import BLOOD_GROUP_CHOICES
from .models import Donation


class DonationSerializer(serializers.ModelSerializer):
    urgency_level = serializers.CharField(source='blood_request.urgency_level', read_only=True, default=None)

    class Meta:
        model = Donation
        fields = ['id', 'donor', 'blood_request', 'urgency_level', 'status', 'created_at']


class EligibilitySerializer(serializers.Serializer):
    is_eligible = serializers.BooleanField()
    days_remaining = serializers.IntegerField()
    next_eligible_date = serializers.DateTimeField()
    last_donation_date = serializers.DateTimeField(allow_null=True)
    recovery_days = serializers.IntegerField()


class AchievementStatusSerializer(serializers.Serializer):
    id = serializers.CharField(source='definition.id')
    name = serializers.CharField(source='definition.name')
    description = serializers.CharField(source='definition.description')
    motto = serializers.CharField(source='definition.motto')
    icon = serializers.CharField(source='definition.icon')
    points = serializers.IntegerField(source='definition.points')
    kind = serializers.CharField(source='definition.kind')
    unlocked = serializers.BooleanField()
    unlocked_at = serializers.DateTimeField(allow_null=True)
    progress = serializers.IntegerField()
    threshold = serializers.IntegerField(allow_null=True)


class AchievementReportSerializer(serializers.Serializer):
    total_points = serializers.IntegerField()
    total_donations = serializers.IntegerField(source='completed_count')
    unlocked_count = serializers.SerializerMethodField()
    achievements = AchievementStatusSerializer(source='statuses', many=True)

    def get_unlocked_count(self, obj):
        return len(obj.unlocked)


class NearbyQuerySerializer(serializers.Serializer):
    lat = serializers.FloatField(min_value=-90, max_value=90)
    lng = serializers.FloatField(min_value=-180, max_value=180)
    limit = serializers.IntegerField(min_value=1, max_value=500, required=False)
    blood_group = serializers.ChoiceField(choices=BLOOD_GROUP_CHOICES, required=False)
    max_distance = serializers.FloatField(min_value=0, required=False)


class CandidateSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    full_name = serializers.CharField(source='name')
    blood_group = serializers.CharField()
    latitude = serializers.FloatField(source='location.latitude')
    longitude = serializers.FloatField(source='location.longitude')
    distance_km = serializers.SerializerMethodField()

    def get_distance_km(self, obj):
        return round(obj.distance_km, 2)
