from django.urls import path
from . import views

app_name = 'donors'

urlpatterns = [
    path('donors/nearby/', views.nearby_donors, name='nearby'),
    path('donors/<int:donor_id>/eligibility/', views.donor_eligibility, name='eligibility'),
    path('donors/<int:donor_id>/achievements/', views.donor_achievements, name='achievements'),
    path('donors/<int:donor_id>/donations/', views.donor_donations, name='donations'),
    path('compatibility/<str:blood_group>/', views.blood_compatibility, name='compatibility'),
]

# Available endpoints:
# GET  /api/donors/nearby/?lat=&lng=        - Closest donors (limit, blood_group, max_distance optional)
# GET  /api/donors/{id}/eligibility/        - Whether the donor can donate today
# GET  /api/donors/{id}/achievements/       - Badges, progress and total points
# GET  /api/donors/{id}/donations/          - Donation history, newest first
# GET  /api/compatibility/{group}/          - Compatible donor and recipient groups
