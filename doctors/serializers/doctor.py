import html

import bleach
from django.conf import settings
from rest_framework import serializers

from doctors.models import SPECIALTY_CHOICES, Doctor

# API sort key -> model column
SORT_FIELDS = {
    'id': 'id',
    'name': 'name',
    'email': 'email',
    'crm': 'crm',
    'specialty': 'specialty',
}
SORT_DIRECTIONS = ('asc', 'desc')


def _clean_text(v):
    """Drop markup but keep the text as typed (bleach escapes &, < and >)."""
    cleaned = bleach.clean((v or '').strip(), tags=set(), strip=True)
    return html.unescape(cleaned).strip()


class AddressSerializer(serializers.Serializer):
    street = serializers.CharField(max_length=100)
    district = serializers.CharField(max_length=100)
    zipCode = serializers.CharField(max_length=9)
    city = serializers.CharField(max_length=100)
    state = serializers.CharField(required=False, allow_blank=True, max_length=2)
    number = serializers.CharField(required=False, allow_blank=True, max_length=20)
    complement = serializers.CharField(required=False, allow_blank=True, max_length=100)


class AddressUpdateSerializer(AddressSerializer):
    """Every field optional; the ones required at registration still cannot be blanked."""
    street = serializers.CharField(required=False, max_length=100)
    district = serializers.CharField(required=False, max_length=100)
    zipCode = serializers.CharField(required=False, max_length=9)
    city = serializers.CharField(required=False, max_length=100)


class DoctorCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    email = serializers.EmailField(max_length=100)
    phone = serializers.CharField(required=False, allow_blank=True, max_length=20)
    crm = serializers.CharField(max_length=20)
    specialty = serializers.ChoiceField(choices=SPECIALTY_CHOICES)
    address = AddressSerializer()

    def validate_name(self, v):
        v = _clean_text(v)
        if not v:
            raise serializers.ValidationError('This field may not be blank.')
        return v

    def validate_phone(self, v):
        return _clean_text(v)


class DoctorUpdateSerializer(serializers.Serializer):
    """Mutable fields only.

    ``crm``, ``specialty`` and ``email`` are not declared, so values sent
    for them never reach ``validated_data``.
    """
    id = serializers.IntegerField(min_value=1)
    name = serializers.CharField(required=False, max_length=100)
    phone = serializers.CharField(required=False, allow_blank=True, max_length=20)
    address = AddressUpdateSerializer(required=False)

    def validate_name(self, v):
        v = _clean_text(v)
        if not v:
            raise serializers.ValidationError('This field may not be blank.')
        return v

    def validate_phone(self, v):
        return _clean_text(v)


class DoctorPageQuerySerializer(serializers.Serializer):
    """Query string of ``GET /medicos``.

    ``sort`` may repeat; each value is ``field`` or ``field,direction``.
    The validated ``sort`` is a list of ``(field, direction)`` pairs.
    """
    page = serializers.IntegerField(required=False, min_value=0)
    size = serializers.IntegerField(required=False, min_value=1)
    sort = serializers.ListField(child=serializers.CharField(), required=False)

    def validate_size(self, v):
        if v > settings.DOCTORS_MAX_PAGE_SIZE:
            raise serializers.ValidationError(
                f'Ensure this value is less than or equal to {settings.DOCTORS_MAX_PAGE_SIZE}.'
            )
        return v

    def validate_sort(self, values):
        orders = []
        for raw in values:
            field, _, direction = raw.partition(',')
            field = field.strip()
            direction = (direction.strip() or 'asc').lower()
            if field not in SORT_FIELDS:
                raise serializers.ValidationError(
                    f"'{field}' is not sortable; use one of: {', '.join(SORT_FIELDS)}."
                )
            if direction not in SORT_DIRECTIONS:
                raise serializers.ValidationError(f"'{direction}' is not a sort direction; use asc or desc.")
            orders.append((field, direction))
        return orders

    def validate(self, attrs):
        attrs.setdefault('page', 0)
        attrs.setdefault('size', settings.DOCTORS_PAGE_SIZE)
        if not attrs.get('sort'):
            attrs['sort'] = [('name', 'asc')]
        return attrs


def detail_view(doctor: Doctor) -> dict:
    return {
        'id': doctor.id,
        'name': doctor.name,
        'email': doctor.email,
        'phone': doctor.phone,
        'crm': doctor.crm,
        'specialty': doctor.specialty,
        'active': doctor.active,
        'address': doctor.address,
    }


def summary_view(doctor: Doctor) -> dict:
    return {
        'id': doctor.id,
        'name': doctor.name,
        'email': doctor.email,
        'crm': doctor.crm,
        'specialty': doctor.specialty,
    }


def page_view(doctors, *, total: int, page: int, size: int, sort) -> dict:
    """Page envelope: ``content`` plus the metadata clients need to paginate."""
    content = [summary_view(d) for d in doctors]
    total_pages = -(-total // size)
    return {
        'content': content,
        'totalElements': total,
        'totalPages': total_pages,
        'size': size,
        'number': page,
        'numberOfElements': len(content),
        'first': page == 0,
        'last': page >= total_pages - 1,
        'empty': not content,
        'sort': [f'{field},{direction}' for field, direction in sort],
    }
