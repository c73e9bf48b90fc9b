"""Document uniqueness under concurrent registration.

Scenario:
- 8 threads register a client with the **same** CPF at the same time,
  each through its own ``ClientService`` and database connection.
- Exactly one succeeds; the other 7 get ``DocumentAlreadyRegistered``.
- Exactly one row holds the document afterwards.

Uses ``TransactionTestCase`` so each thread sees committed data and the
database unique constraint arbitrates between real transactions.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed

import django
import pytest
from django.test import TransactionTestCase

from modules.clients.documents import DocumentKind
from modules.clients.dtos import CreateClientDTO
from modules.clients.exceptions import DocumentAlreadyRegistered
from modules.clients.models import Client
from modules.clients.repositories.django_repository import ClientDjangoRepository
from modules.clients.services import ClientService

pytestmark = pytest.mark.integration

logger = logging.getLogger(__name__)

VALID_CPF = "11144477735"
NUM_WORKERS = 8

# Distinct valid CPFs for the no-contention scenario.
DISTINCT_CPFS = [
    "11144477735",
    "59860184275",
    "39053344705",
    "12345678909",
    "52998224725",
    "16899535009",
]


class TestConcurrentRegistration(TransactionTestCase):
    """Prove that the store, not a pre-check, decides who owns a document."""

    def _register_in_thread(self, thread_id: int, document: str, barrier) -> str:
        django.db.connections.close_all()
        service = ClientService(repository=ClientDjangoRepository())
        dto = CreateClientDTO(
            party_type=DocumentKind.INDIVIDUAL,
            legal_name=f"Cliente {thread_id}",
            document=document,
        )
        try:
            barrier.wait()
            service.create_client(dto)
            logger.warning("Thread %d: client created", thread_id)
            return "created"
        except DocumentAlreadyRegistered:
            logger.warning("Thread %d: DocumentAlreadyRegistered (expected)", thread_id)
            return "conflict"
        finally:
            django.db.connections.close_all()

    def _run(self, documents):
        barrier = threading.Barrier(len(documents))
        results = []
        with ThreadPoolExecutor(max_workers=len(documents)) as pool:
            futures = [
                pool.submit(self._register_in_thread, i, document, barrier)
                for i, document in enumerate(documents)
            ]
            for future in as_completed(futures):
                results.append(future.result())
        return results

    def test_same_document_exactly_one_wins(self):
        """8 threads register the same CPF: exactly 1 succeeds."""
        results = self._run([VALID_CPF] * NUM_WORKERS)

        self.assertEqual(results.count("created"), 1, results)
        self.assertEqual(results.count("conflict"), NUM_WORKERS - 1, results)
        self.assertEqual(Client.objects.filter(document=VALID_CPF).count(), 1)

    def test_formatting_does_not_bypass_uniqueness(self):
        """Raw and punctuated spellings of one CPF race: still one winner."""
        spellings = ["11144477735", "111.444.777-35", "111 444 777 35", "111444777-35"]
        results = self._run(spellings)

        self.assertEqual(results.count("created"), 1, results)
        self.assertEqual(Client.objects.count(), 1)

    def test_distinct_documents_all_succeed(self):
        results = self._run(DISTINCT_CPFS)

        self.assertEqual(results.count("created"), len(DISTINCT_CPFS), results)
        self.assertEqual(Client.objects.count(), len(DISTINCT_CPFS))
