"""
Integration tests for the doctor registry API.

These tests exercise registration, update, detail and deactivation
through DRF's APIClient within the APITestCase base class.

To run the tests:

```
pytest -q doctors/tests
```
"""

from rest_framework import status
from rest_framework.test import APITestCase

from doctors.models import Doctor


class DoctorAPITests(APITestCase):
    def setUp(self) -> None:
        self.address = {
            'street': 'Rua 1',
            'district': 'Centro',
            'zipCode': '12345678',
            'city': 'Brasilia',
            'state': 'DF',
            'number': '1',
            'complement': '',
        }
        self.payload = {
            'name': 'Ana',
            'email': 'a@x.com',
            'crm': '123',
            'specialty': 'CARDIOLOGIA',
            'address': self.address,
        }

    def register(self, **overrides):
        body = {**self.payload, **overrides}
        return self.client.post('/medicos', body, format='json')

    def error_fields(self, response) -> set:
        return {e['field'] for e in response.data['error']['fields']}

    def test_register_returns_created_with_location(self):
        response = self.register()
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIsNotNone(response.data['id'])
        self.assertTrue(response.data['active'])
        self.assertEqual(response['Location'], f"http://testserver/medicos/{response.data['id']}")
        self.assertEqual(response.data['address']['city'], 'Brasilia')
        self.assertEqual(response.data['phone'], '')

    def test_location_resolves_to_detail(self):
        created = self.register()
        response = self.client.get(created['Location'])
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, created.data)

    def test_detail_unknown_id_is_not_found(self):
        response = self.client.get('/medicos/999')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(response.data['ok'])
        self.assertEqual(response.data['error']['code'], 'not_found')

    def test_name_with_ampersand_is_stored_as_submitted(self):
        created = self.register(name='Ana & Bia')
        self.assertEqual(created.status_code, status.HTTP_201_CREATED)
        self.assertEqual(created.data['name'], 'Ana & Bia')
        self.assertEqual(Doctor.objects.get(id=created.data['id']).name, 'Ana & Bia')

        listing = self.client.get('/medicos')
        self.assertEqual([d['name'] for d in listing.data['content']], ['Ana & Bia'])

        response = self.client.put('/medicos', {'id': created.data['id'], 'name': 'Ana & Bia <Filho>'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['name'], 'Ana & Bia')
        self.assertEqual(Doctor.objects.get(id=created.data['id']).name, 'Ana & Bia')

    def test_register_rejects_missing_required_fields(self):
        response = self.client.post('/medicos', {'email': 'a@x.com'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data['ok'])
        self.assertEqual(response.data['error']['code'], 'validation_error')
        self.assertTrue({'name', 'crm', 'specialty', 'address'} <= self.error_fields(response))
        self.assertEqual(Doctor.objects.count(), 0)

    def test_register_rejects_blank_name_and_bad_email(self):
        response = self.register(name='   ', email='not-an-email')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self.error_fields(response), {'name', 'email'})

    def test_register_rejects_unknown_specialty(self):
        response = self.register(specialty='NEUROLOGIA')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self.error_fields(response), {'specialty'})
        self.assertEqual(Doctor.objects.count(), 0)

    def test_register_reports_nested_address_errors(self):
        address = dict(self.address)
        del address['city']
        response = self.register(address=address)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self.error_fields(response), {'address.city'})

    def test_duplicate_email_is_a_conflict(self):
        self.assertEqual(self.register().status_code, status.HTTP_201_CREATED)
        response = self.register(crm='999')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data['error']['code'], 'conflict')
        self.assertEqual(Doctor.objects.count(), 1)

    def test_update_changes_only_mutable_fields(self):
        created = self.register().data
        response = self.client.put('/medicos', {
            'id': created['id'],
            'name': 'Ana Maria',
            'phone': '61988887777',
            'crm': '999999',
            'specialty': 'ORTOPEDIA',
            'email': 'other@x.com',
            'address': {'city': 'Goiania'},
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['name'], 'Ana Maria')
        self.assertEqual(response.data['phone'], '61988887777')
        self.assertEqual(response.data['crm'], '123')
        self.assertEqual(response.data['specialty'], 'CARDIOLOGIA')
        self.assertEqual(response.data['email'], 'a@x.com')
        self.assertEqual(response.data['address']['city'], 'Goiania')
        self.assertEqual(response.data['address']['street'], 'Rua 1')

        doctor = Doctor.objects.get(id=created['id'])
        self.assertEqual(doctor.crm, '123')
        self.assertEqual(doctor.specialty, 'CARDIOLOGIA')
        self.assertEqual(doctor.address_city, 'Goiania')

    def test_update_unknown_id_is_not_found(self):
        response = self.client.put('/medicos', {'id': 999, 'name': 'X'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error']['code'], 'not_found')

    def test_update_requires_id(self):
        response = self.client.put('/medicos', {'name': 'X'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self.error_fields(response), {'id'})

    def test_update_cannot_blank_required_address_field(self):
        created = self.register().data
        response = self.client.put('/medicos', {'id': created['id'], 'address': {'street': ''}}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self.error_fields(response), {'address.street'})

    def test_deactivate_hides_from_listing_but_keeps_record(self):
        created = self.register().data
        response = self.client.delete(f"/medicos/{created['id']}")
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

        listing = self.client.get('/medicos')
        self.assertEqual(listing.data['totalElements'], 0)

        detail = self.client.get(f"/medicos/{created['id']}")
        self.assertEqual(detail.status_code, status.HTTP_200_OK)
        self.assertFalse(detail.data['active'])

        update = self.client.put('/medicos', {'id': created['id'], 'name': 'Ana B'}, format='json')
        self.assertEqual(update.status_code, status.HTTP_200_OK)
        self.assertFalse(update.data['active'])
        self.assertTrue(Doctor.objects.filter(id=created['id']).exists())

    def test_deactivate_twice_is_a_no_op(self):
        created = self.register().data
        self.assertEqual(self.client.delete(f"/medicos/{created['id']}").status_code, status.HTTP_204_NO_CONTENT)
        self.assertEqual(self.client.delete(f"/medicos/{created['id']}").status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Doctor.objects.get(id=created['id']).active)

    def test_deactivate_unknown_id_alters_nothing(self):
        created = self.register().data
        response = self.client.delete('/medicos/999')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(Doctor.objects.count(), 1)
        self.assertTrue(Doctor.objects.get(id=created['id']).active)

    def test_responses_carry_request_id(self):
        response = self.client.get('/medicos', HTTP_X_REQUEST_ID='abc123')
        self.assertEqual(response['X-Request-ID'], 'abc123')

    def test_long_request_id_is_truncated(self):
        response = self.client.get('/medicos', HTTP_X_REQUEST_ID='x' * 500)
        self.assertEqual(response['X-Request-ID'], 'x' * 64)
