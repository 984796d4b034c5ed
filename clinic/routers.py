"""
URL mappings for the MediLink API.

Paths match what the React front-end calls, so trailing slashes are
omitted.  Every ``api/`` route except register/login requires a bearer
token; role checks live in :mod:`clinic.permissions`.
"""
from django.urls import path, include

from .auth_views import login_view, profile_view, register_view
from .views import ai, announcements, appointments, checkups, health, patients, rooms, users

urlpatterns = [
    # exposes /metrics
    path('', include('django_prometheus.urls')),
    path('healthz', health.healthz),

    path('api/auth/register', register_view),
    path('api/auth/login', login_view),
    path('api/auth/profile', profile_view),

    path('api/patients', patients.patients_collection),
    path('api/patients/<int:pk>', patients.patient_detail),
    path('api/patients/<int:pk>/checkups', patients.patient_initial_checkups),
    path('api/patients/<int:pk>/latest-checkup', patients.patient_latest_checkup),

    path('api/checkups', checkups.checkups_collection),
    path('api/checkups/<int:pk>', checkups.checkup_detail),
    path('api/checkups/patient/<int:patient_id>', checkups.patient_checkups),

    path('api/appointments', appointments.appointments_collection),
    path('api/appointments/<int:pk>', appointments.appointment_detail),
    path('api/appointments/patient/<int:patient_id>', appointments.patient_appointments),
    path('api/appointments/<int:pk>/checkups', appointments.appointment_checkups),
    path('api/appointments/<int:pk>/checkups/reset', appointments.appointment_checkups_reset),

    path('api/rooms', rooms.rooms_collection),
    path('api/rooms/summary', rooms.rooms_summary),
    path('api/rooms/<int:pk>', rooms.room_detail),

    path('api/announcements', announcements.announcements_collection),
    path('api/announcements/<int:pk>', announcements.announcement_detail),

    path('api/users', users.users_list),
    path('api/users/role/doctors', users.doctors_list),
    path('api/users/<int:pk>', users.user_detail),

    path('api/ai/analyze-checkup', ai.analyze_checkup),
    path('api/ai/health', ai.ai_health),
    path('api/ai/stats', ai.ai_stats),
]
