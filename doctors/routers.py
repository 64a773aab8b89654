"""
URL mappings for the doctor registry API.

Trailing slashes are deliberately omitted: clients call ``/medicos``
and ``/medicos/<id>``.
"""
from django.urls import path, include

from .views import doctors
from .views import health


urlpatterns = [
    path('', include('django_prometheus.urls')),
    path('healthz', health.healthz, name='healthz'),
    # Doctors
    path('medicos', doctors.doctors, name='doctor-list'),
    path('medicos/<int:pk>', doctors.doctor_detail, name='doctor-detail'),
]
