from typing import Optional

import structlog
from django.db import transaction

from doctors.exceptions import DoctorNotFound
from doctors.models import ADDRESS_FIELDS, Doctor
from doctors.serializers.doctor import SORT_FIELDS

logger = structlog.get_logger(__name__)


def load_doctor(doctor_id: int, *, for_update: bool = False) -> Doctor:
    """Fetch a doctor by id whether active or not; raise :class:`DoctorNotFound` if absent."""
    qs = Doctor.objects.select_for_update() if for_update else Doctor.objects
    doctor = qs.filter(id=doctor_id).first()
    if doctor is None:
        raise DoctorNotFound(f'doctor {doctor_id} not found')
    return doctor


def register_doctor(*, name: str, email: str, crm: str, specialty: str, address: dict,
                    phone: str = '') -> Doctor:
    columns = {column: address.get(key) or '' for key, column in ADDRESS_FIELDS.items()}
    with transaction.atomic():
        doctor = Doctor.objects.create(
            name=name, email=email, phone=phone or '', crm=crm, specialty=specialty, **columns
        )
    logger.info('doctor_registered', doctor_id=doctor.id, crm=doctor.crm, specialty=doctor.specialty)
    return doctor


def list_active_doctors(*, page: int = 0, size: int = 10,
                        sort: Optional[list[tuple[str, str]]] = None) -> tuple[list[Doctor], int]:
    """Return one page of active doctors and the total number of active doctors.

    ``page`` is zero based.  ``id`` is always the last ordering key so that
    consecutive pages never overlap or skip a row.
    """
    sort = sort or [('name', 'asc')]
    ordering = [('-' if direction == 'desc' else '') + SORT_FIELDS[field] for field, direction in sort]
    if not any(o.lstrip('-') == 'id' for o in ordering):
        ordering.append('id')

    qs = Doctor.objects.filter(active=True).order_by(*ordering)
    total = qs.count()
    start = page * size
    if start >= total:
        return [], total
    return list(qs[start:start + size]), total


def update_doctor(doctor_id: int, *, name: Optional[str] = None, phone: Optional[str] = None,
                  address: Optional[dict] = None) -> Doctor:
    with transaction.atomic():
        doctor = load_doctor(doctor_id, for_update=True)
        changed = doctor.update_information(name=name, phone=phone, address=address)
        if changed:
            doctor.save(update_fields=changed)
    logger.info('doctor_updated', doctor_id=doctor.id, fields=changed)
    return doctor


def deactivate_doctor(doctor_id: int) -> Doctor:
    """Soft delete.  Deactivating an inactive doctor succeeds and changes nothing."""
    with transaction.atomic():
        doctor = load_doctor(doctor_id, for_update=True)
        doctor.deactivate()
        doctor.save(update_fields=['active'])
    logger.info('doctor_deactivated', doctor_id=doctor.id)
    return doctor
