"""
Doctor registry views.

``/medicos`` accepts registration (POST), the paginated listing of
active doctors (GET) and updates of the mutable fields (PUT).
``/medicos/<id>`` returns one doctor (GET) or deactivates it (DELETE).
Validation happens in the serializers and persistence in
:mod:`doctors.services.doctors`; errors surface through the unified
exception handler.
"""
from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from doctors.serializers.doctor import (
    DoctorCreateSerializer,
    DoctorPageQuerySerializer,
    DoctorUpdateSerializer,
    detail_view,
    page_view,
)
from doctors.services.doctors import (
    deactivate_doctor,
    list_active_doctors,
    load_doctor,
    register_doctor,
    update_doctor,
)


@api_view(['GET', 'POST', 'PUT'])
@permission_classes([AllowAny])
def doctors(request):
    if request.method == 'GET':
        return _list_doctors(request)
    if request.method == 'POST':
        return _register_doctor(request)
    return _update_doctor(request)


def _register_doctor(request):
    data = DoctorCreateSerializer(data=request.data)
    data.is_valid(raise_exception=True)
    doctor = register_doctor(**data.validated_data)
    location = request.build_absolute_uri(reverse('doctor-detail', args=[doctor.id]))
    return Response(detail_view(doctor), status=status.HTTP_201_CREATED, headers={'Location': location})


def _list_doctors(request):
    """Active doctors only.  Defaults: ``page=0``, ``size=10``, ``sort=name,asc``."""
    q = DoctorPageQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    page, size, sort = q.validated_data['page'], q.validated_data['size'], q.validated_data['sort']
    content, total = list_active_doctors(page=page, size=size, sort=sort)
    return Response(page_view(content, total=total, page=page, size=size, sort=sort))


def _update_doctor(request):
    data = DoctorUpdateSerializer(data=request.data)
    data.is_valid(raise_exception=True)
    fields = dict(data.validated_data)
    doctor = update_doctor(fields.pop('id'), **fields)
    return Response(detail_view(doctor))


@api_view(['GET', 'DELETE'])
@permission_classes([AllowAny])
def doctor_detail(request, pk: int):
    if request.method == 'DELETE':
        deactivate_doctor(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
    return Response(detail_view(load_doctor(pk)))
