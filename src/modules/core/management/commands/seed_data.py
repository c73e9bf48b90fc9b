from __future__ import annotations

import random

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from validate_docbr import CPF

from modules.clients.documents import DocumentKind, check_digits, format_document
from modules.clients.dtos import CreateClientDTO
from modules.clients.exceptions import DocumentAlreadyRegistered
from modules.clients.repositories.django_repository import ClientDjangoRepository
from modules.clients.services import ClientService

SEED_INDIVIDUALS = [
    ("Ana Souza", "ana@example.com", "01001000", "São Paulo", "SP"),
    ("Carla Mendes", "carla@example.com", "20040002", "Rio de Janeiro", "RJ"),
    ("Fernanda Rocha", "fernanda@example.com", "30130010", "Belo Horizonte", "MG"),
    ("Gabriel Santos", "gabriel@example.com", "40020000", "Salvador", "BA"),
    ("Helena Ferreira", "", "", "", ""),
    ("Julia Oliveira", "julia@example.com", "80010000", "Curitiba", "PR"),
]

SEED_ORGANIZATIONS = [
    ("Lima Comércio de Alimentos Ltda", "Mercado Lima", "contato@mercadolima.com.br"),
    ("Costa & Alves Engenharia S.A.", "Costa Alves", "obras@costaalves.com.br"),
    ("Ramos Tecnologia Ltda", "", "ti@ramostec.com.br"),
    ("Oliveira Transportes Eireli", "Rápido Oliveira", ""),
]


def _headquarters_cnpj() -> str:
    root = "".join(random.choice("0123456789") for _ in range(8))
    base = root + "0001"
    kind = DocumentKind.ORGANIZATION
    return format_document(base + check_digits(base, kind), kind)


class Command(BaseCommand):
    help = "Seed database with development users and clients."

    def handle(self, *args, **options):
        # Generated documents come from ``random``; a fixed seed keeps reruns idempotent.
        random.seed(42)
        self.stdout.write("Seeding development data...")

        users_created = self._seed_users()
        created, skipped = self._seed_clients()

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"users={users_created}, "
                f"clients={created}, "
                f"already_registered={skipped}"
            )
        )

    def _seed_users(self) -> int:
        User = get_user_model()
        created = 0
        if not User.objects.filter(username="admin").exists():
            User.objects.create_superuser("admin", password="admin123")
            created += 1
        if not User.objects.filter(username="user").exists():
            User.objects.create_user("user", password="user123")
            created += 1
        return created

    def _seed_clients(self) -> tuple[int, int]:
        self.stdout.write("Creating clients...")
        service = ClientService(repository=ClientDjangoRepository())
        cpf = CPF()

        payloads = [
            {
                "party_type": DocumentKind.INDIVIDUAL,
                "legal_name": name,
                "document": cpf.generate(mask=True),
                "email": email,
                "postal_code": postal_code,
                "city": city,
                "state": state,
            }
            for name, email, postal_code, city, state in SEED_INDIVIDUALS
        ]
        payloads += [
            {
                "party_type": DocumentKind.ORGANIZATION,
                "legal_name": legal_name,
                "trade_name": trade_name,
                "document": _headquarters_cnpj(),
                "email": email,
            }
            for legal_name, trade_name, email in SEED_ORGANIZATIONS
        ]

        created = skipped = 0
        for payload in payloads:
            try:
                service.create_client(CreateClientDTO(**payload))
            except DocumentAlreadyRegistered:
                skipped += 1
                continue
            created += 1

        self.stdout.write(self.style.SUCCESS("Creating clients... Done!"))
        return created, skipped
