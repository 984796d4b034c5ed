"""
Django admin registrations for the clinic models.

Superusers can inspect and correct records at ``/admin/``.  The user
admin is a plain ``ModelAdmin`` since accounts are keyed by email and
have no username.
"""

from django.contrib import admin

from .models import Announcement, Appointment, Checkup, Patient, Room, User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('email', 'name', 'role', 'is_active', 'is_staff')
    list_filter = ('role', 'is_active')
    search_fields = ('email', 'name')
    exclude = ('password',)


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ('nik', 'name', 'gender', 'birthdate', 'blood_type', 'contact')
    list_filter = ('gender', 'blood_type')
    search_fields = ('nik', 'name', 'contact')


@admin.register(Checkup)
class CheckupAdmin(admin.ModelAdmin):
    list_display = ('id', 'patient', 'kind', 'date', 'appointment')
    list_filter = ('kind',)
    search_fields = ('patient__name', 'patient__nik', 'symptoms')
    raw_id_fields = ('patient', 'appointment')


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ('id', 'patient', 'doctor', 'date_time')
    list_filter = ('doctor',)
    search_fields = ('patient__name', 'doctor__name', 'doctor__email')
    raw_id_fields = ('patient', 'doctor')


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ('room_number', 'name', 'status')
    list_filter = ('status',)


@admin.register(Announcement)
class AnnouncementAdmin(admin.ModelAdmin):
    list_display = ('__str__', 'urgency', 'author', 'created_at')
    list_filter = ('urgency',)
    search_fields = ('title', 'content', 'author')
