from django.contrib import admin
from django.conf import settings
from django.db.models import Prefetch
from django.utils import timezone

from algorithms.achievements import evaluate_achievements
from algorithms.eligibility import calculate_eligibility, last_completed_donation
from .models import DonorProfile, BloodRequest, Donation
from .records import history_from_prefetched, history_queryset
from .tasks import geocode_missing_locations


@admin.register(DonorProfile)
class DonorProfileAdmin(admin.ModelAdmin):
    list_display   = ['full_name', 'blood_group', 'postal_code', 'has_location', 'can_donate_display', 'points_display']
    list_filter    = ['blood_group', 'is_donor']
    search_fields  = ['full_name', 'postal_code']
    readonly_fields = ['created_at', 'updated_at']

    fieldsets = (
        ('Donor', {
            'fields': ('full_name', 'blood_group', 'is_donor')
        }),
        ('Location', {
            'fields': ('postal_code', 'latitude', 'longitude')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    def get_queryset(self, request):
        # One extra query for every row's donations
        return super().get_queryset(request).prefetch_related(
            Prefetch('donations', queryset=history_queryset())
        )

    @admin.display(boolean=True, description='Location')
    def has_location(self, obj):
        return bool(obj.latitude) and obj.longitude is not None

    @admin.display(boolean=True, description='Can Donate Now')
    def can_donate_display(self, obj):
        last_donation = last_completed_donation(history_from_prefetched(obj))
        eligibility = calculate_eligibility(last_donation, timezone.now(), recovery_days=settings.DONATION_RECOVERY_DAYS)
        return eligibility.is_eligible

    @admin.display(description='Points')
    def points_display(self, obj):
        return evaluate_achievements(history_from_prefetched(obj), now=timezone.now()).total_points

    actions = ['geocode_postal_codes']

    @admin.action(description='Queue geocoding for selected donors without coordinates')
    def geocode_postal_codes(self, request, queryset):
        donor_ids = list(queryset.values_list('id', flat=True))
        geocode_missing_locations.delay(donor_ids=donor_ids)
        self.message_user(request, f'Geocoding queued for {len(donor_ids)} selected donor(s).')


@admin.register(BloodRequest)
class BloodRequestAdmin(admin.ModelAdmin):
    list_display  = ['requester_name', 'blood_group', 'units_needed', 'urgency_level', 'status', 'created_at']
    list_filter   = ['urgency_level', 'status', 'blood_group']
    search_fields = ['requester_name']


@admin.register(Donation)
class DonationAdmin(admin.ModelAdmin):
    list_display  = ['donor', 'blood_request', 'status', 'created_at']
    list_filter   = ['status']
    search_fields = ['donor__full_name']
    date_hierarchy = 'created_at'
