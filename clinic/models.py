"""
Database models for the MediLink backend.

One table per entity: staff users, patients, checkups, appointments,
rooms and announcements.  Nested document-style data (vital signs, AI
analysis) is kept in JSON fields so the JSON returned to the front-end
mirrors what it submitted.
"""
from __future__ import annotations

from datetime import date

from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models
from django.utils import timezone


class UserManager(BaseUserManager):
    """Manager for the email-keyed user model."""

    use_in_migrations = True

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError('email is required')
        email = self.normalize_email(email).lower()
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('role', User.ROLE_DOCTOR)
        return self._create_user(email, password, **extra_fields)


class User(AbstractUser):
    """Hospital staff account.

    Staff log in with their email address; ``role`` decides which parts
    of the API and front-end they may use.  Passwords are stored with
    Django's salted hashers and never in plain text.
    """
    ROLE_RECEPTIONIST = 'receptionist'
    ROLE_NURSE = 'nurse'
    ROLE_DOCTOR = 'doctor'
    ROLE_CHOICES = [
        (ROLE_RECEPTIONIST, 'Receptionist'),
        (ROLE_NURSE, 'Nurse'),
        (ROLE_DOCTOR, 'Doctor'),
    ]

    username = None
    email = models.EmailField(unique=True)
    name = models.CharField(max_length=150, blank=True)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, db_index=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS: list[str] = []

    objects = UserManager()

    def __str__(self) -> str:
        return f"{self.email} ({self.role})"


class Patient(models.Model):
    """A registered patient.  ``nik`` is the national identity number."""
    GENDER_CHOICES = [
        ('Male', 'Male'),
        ('Female', 'Female'),
        ('Other', 'Other'),
    ]
    BLOOD_TYPE_CHOICES = [
        ('A', 'A'),
        ('B', 'B'),
        ('AB', 'AB'),
        ('O', 'O'),
    ]

    nik = models.CharField(max_length=32, unique=True)
    name = models.CharField(max_length=255)
    gender = models.CharField(max_length=10, choices=GENDER_CHOICES, blank=True)
    birthdate = models.DateField(null=True, blank=True)
    blood_type = models.CharField(max_length=2, choices=BLOOD_TYPE_CHOICES, blank=True)
    contact = models.CharField(max_length=64, blank=True)
    address = models.TextField(blank=True)
    medical_history = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name', 'id']

    @property
    def age(self) -> int | None:
        if not self.birthdate:
            return None
        today = date.today()
        born = self.birthdate
        return today.year - born.year - ((today.month, today.day) < (born.month, born.day))

    def __str__(self) -> str:
        return f"{self.name} ({self.nik})"


class Appointment(models.Model):
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='appointments')
    doctor = models.ForeignKey(User, on_delete=models.CASCADE, related_name='appointments')
    date_time = models.DateTimeField(db_index=True)
    notes = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['date_time', 'id']

    def __str__(self) -> str:
        return f"Appointment {self.patient_id} with {self.doctor_id} at {self.date_time:%F %R}"


class Checkup(models.Model):
    """A clinical checkup of a patient.

    ``kind='initial'`` rows are the nurse's lightweight vitals records;
    they are what a patient's ``initialCheckups`` and an appointment's
    ``checkups`` list.  Doctor checkups use ``kind='general'`` and may
    carry an AI analysis.
    """
    KIND_GENERAL = 'general'
    KIND_INITIAL = 'initial'
    KIND_CHOICES = [
        (KIND_GENERAL, 'General'),
        (KIND_INITIAL, 'Initial'),
    ]
    VITAL_SIGN_KEYS = ('temperature', 'bloodPressure', 'heartRate', 'weight', 'height')

    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='checkups')
    appointment = models.ForeignKey(
        Appointment, null=True, blank=True, on_delete=models.SET_NULL, related_name='checkups'
    )
    kind = models.CharField(max_length=10, choices=KIND_CHOICES, default=KIND_GENERAL, db_index=True)
    date = models.DateTimeField(default=timezone.now, db_index=True)
    symptoms = models.TextField(blank=True)
    vital_signs = models.JSONField(default=dict, blank=True)
    details = models.TextField(blank=True)
    doctor_notes = models.TextField(blank=True)
    notes = models.TextField(blank=True)
    ai_response = models.JSONField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-date', '-id']
        indexes = [
            models.Index(fields=['patient', 'kind', 'date'], name='checkup_patient_kind_date_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.kind} checkup of {self.patient_id} @ {self.date:%F %T}"


class Room(models.Model):
    STATUS_AVAILABLE = 'Available'
    STATUS_OCCUPIED = 'Occupied'
    STATUS_CHOICES = [
        (STATUS_AVAILABLE, 'Available'),
        (STATUS_OCCUPIED, 'Occupied'),
    ]

    name = models.CharField(max_length=100)
    room_number = models.PositiveIntegerField(unique=True)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_AVAILABLE, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['room_number']

    def __str__(self) -> str:
        return f"{self.name} [{self.status}]"


class Announcement(models.Model):
    URGENCY_NORMAL = 'normal'
    URGENCY_URGENT = 'urgent'
    URGENCY_CHOICES = [
        (URGENCY_NORMAL, 'Normal'),
        (URGENCY_URGENT, 'Urgent'),
    ]

    title = models.CharField(max_length=255, blank=True, default='')
    content = models.TextField()
    urgency = models.CharField(max_length=10, choices=URGENCY_CHOICES, default=URGENCY_NORMAL)
    author = models.CharField(max_length=150)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self) -> str:
        return (self.title or self.content)[:30]
