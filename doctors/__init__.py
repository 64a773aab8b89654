"""Doctor registry app for the Voll.med backend.

This package contains the Doctor model, serializers, services, views and
route registrations behind the ``/medicos`` API.
"""
