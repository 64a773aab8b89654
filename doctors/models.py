"""
Database models for the doctor registry.

A :class:`Doctor` carries its postal address embedded in the same row
(``address_*`` columns) rather than in a joined table, so an address has
no identity of its own and is only ever read or written through the
doctor that owns it.
"""
from __future__ import annotations

from django.db import models


SPECIALTY_CHOICES = [
    ('ORTOPEDIA', 'Ortopedia'),
    ('CARDIOLOGIA', 'Cardiologia'),
    ('GINECOLOGIA', 'Ginecologia'),
    ('DERMATOLOGIA', 'Dermatologia'),
]

# API key -> model column for the embedded address
ADDRESS_FIELDS = {
    'street': 'address_street',
    'district': 'address_district',
    'zipCode': 'address_zip_code',
    'city': 'address_city',
    'state': 'address_state',
    'number': 'address_number',
    'complement': 'address_complement',
}


class Doctor(models.Model):
    """A registered doctor.

    ``crm`` (professional registration) and ``specialty`` are fixed at
    registration.  Doctors are never deleted: deactivation flips
    ``active`` and hides the record from listings only.
    """
    name = models.CharField(max_length=100)
    email = models.EmailField(max_length=100, unique=True)
    phone = models.CharField(max_length=20, blank=True)
    crm = models.CharField(max_length=20, unique=True)
    specialty = models.CharField(max_length=20, choices=SPECIALTY_CHOICES)

    address_street = models.CharField(max_length=100)
    address_district = models.CharField(max_length=100)
    address_zip_code = models.CharField(max_length=9)
    address_city = models.CharField(max_length=100)
    address_state = models.CharField(max_length=2, blank=True)
    address_number = models.CharField(max_length=20, blank=True)
    address_complement = models.CharField(max_length=100, blank=True)

    # Listings filter on this flag, so it is indexed
    active = models.BooleanField(default=True, db_index=True)

    class Meta:
        ordering = ['name', 'id']

    def __str__(self) -> str:
        return f"{self.name} (CRM {self.crm})"

    @property
    def address(self) -> dict:
        return {key: getattr(self, column) for key, column in ADDRESS_FIELDS.items()}

    def apply_address(self, values: dict) -> list[str]:
        """Overwrite the address fields present in ``values``.

        Keys that are absent or ``None`` keep their stored value.  Returns
        the names of the columns that changed.
        """
        changed: list[str] = []
        for key, column in ADDRESS_FIELDS.items():
            value = values.get(key)
            if value is None or getattr(self, column) == value:
                continue
            setattr(self, column, value)
            changed.append(column)
        return changed

    def update_information(self, *, name: str | None = None, phone: str | None = None,
                           address: dict | None = None) -> list[str]:
        """Apply the mutable fields of an update request.

        Returns the changed column names so callers can save with
        ``update_fields``.
        """
        changed: list[str] = []
        if name is not None and name != self.name:
            self.name = name
            changed.append('name')
        if phone is not None and phone != self.phone:
            self.phone = phone
            changed.append('phone')
        if address:
            changed.extend(self.apply_address(address))
        return changed

    def deactivate(self) -> None:
        self.active = False
