"""
Management command to populate the database with sample doctors.
"""
from django.core.management.base import BaseCommand

from doctors.models import Doctor
from doctors.services.doctors import register_doctor

SAMPLE_DOCTORS = [
    ("Ana Souza", "ana.souza@voll.med", "123456", "CARDIOLOGIA", "São Paulo", "SP"),
    ("Bruno Lima", "bruno.lima@voll.med", "234567", "ORTOPEDIA", "Belo Horizonte", "MG"),
    ("Carla Mendes", "carla.mendes@voll.med", "345678", "GINECOLOGIA", "Curitiba", "PR"),
    ("Diego Rocha", "diego.rocha@voll.med", "456789", "DERMATOLOGIA", "Recife", "PE"),
    ("Elisa Prado", "elisa.prado@voll.med", "567890", "CARDIOLOGIA", "Porto Alegre", "RS"),
]


class Command(BaseCommand):
    help = "Create sample doctors (idempotent by crm)."

    def add_arguments(self, parser):
        parser.add_argument("--limit", type=int, default=len(SAMPLE_DOCTORS),
                            help="Number of sample doctors to ensure.")

    def handle(self, *args, **opts):
        created = 0
        for name, email, crm, specialty, city, state in SAMPLE_DOCTORS[:opts["limit"]]:
            if Doctor.objects.filter(crm=crm).exists():
                self.stdout.write(f"skip: {name} (crm {crm})")
                continue
            register_doctor(
                name=name,
                email=email,
                crm=crm,
                specialty=specialty,
                phone="11999990000",
                address={
                    "street": "Rua das Flores",
                    "district": "Centro",
                    "zipCode": "01001000",
                    "city": city,
                    "state": state,
                    "number": str(100 + created),
                },
            )
            created += 1
            self.stdout.write(self.style.SUCCESS(f"ok: {name} ({specialty})"))
        self.stdout.write(self.style.SUCCESS(f"{created} doctors created."))
