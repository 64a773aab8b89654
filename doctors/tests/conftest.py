import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from doctors.services.doctors import register_doctor


@pytest.fixture(autouse=True)
def clear_throttle_cache():
    """Throttling counters live in the locmem cache; start every test clean."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def address_payload():
    return {
        'street': 'Rua 1',
        'district': 'Centro',
        'zipCode': '12345678',
        'city': 'Brasilia',
        'state': 'DF',
        'number': '1',
        'complement': 'sala 2',
    }


@pytest.fixture
def doctor_payload(address_payload):
    return {
        'name': 'Ana',
        'email': 'a@x.com',
        'phone': '61999998888',
        'crm': '123',
        'specialty': 'CARDIOLOGIA',
        'address': address_payload,
    }


@pytest.fixture
def make_doctor(db, address_payload):
    """Register a doctor through the service layer; unique email/crm per call."""
    counter = {'n': 0}

    def _make(name='Ana', specialty='CARDIOLOGIA', **overrides):
        counter['n'] += 1
        n = counter['n']
        fields = {
            'name': name,
            'email': f'doctor{n}@voll.med',
            'crm': f'{100000 + n}',
            'specialty': specialty,
            'address': dict(address_payload),
        }
        fields.update(overrides)
        return register_doctor(**fields)

    return _make
