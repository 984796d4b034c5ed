"""Clinic application for the MediLink backend.

Models, serializers, services, views and route registrations for the
staff-facing hospital API used by the React front-end.
"""
