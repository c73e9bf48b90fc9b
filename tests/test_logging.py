"""Client events as emitted through structlog and the stdlib bridge."""

import logging

import pytest
import structlog

from modules.clients.documents import DocumentKind
from modules.clients.dtos import CreateClientDTO
from modules.clients.exceptions import DocumentAlreadyRegistered
from modules.clients.repositories.django_repository import ClientDjangoRepository
from modules.clients.services import ClientService

VALID_CPF = "11144477735"


def _messages(caplog):
    return [record.getMessage() for record in caplog.records]


class TestClientEventLogs:
    @pytest.fixture()
    def service(self):
        return ClientService(repository=ClientDjangoRepository())

    @pytest.fixture()
    def dto(self):
        return CreateClientDTO(
            party_type=DocumentKind.INDIVIDUAL, legal_name="Ana Souza", document=VALID_CPF
        )

    def test_created_event_masks_document(self, service, dto, caplog):
        with caplog.at_level(logging.INFO):
            service.create_client(dto)

        messages = _messages(caplog)
        assert any("client.created" in message for message in messages), messages
        assert any("***7735" in message for message in messages), messages
        assert not any(VALID_CPF in message for message in messages)

    def test_conflict_logged_as_warning(self, service, dto, caplog):
        service.create_client(dto)

        with caplog.at_level(logging.INFO):
            with pytest.raises(DocumentAlreadyRegistered):
                service.create_client(dto)

        warnings = [
            record.getMessage()
            for record in caplog.records
            if record.levelno == logging.WARNING
        ]
        assert any("client.document_conflict" in message for message in warnings), warnings
        assert not any(VALID_CPF in message for message in _messages(caplog))

    def test_document_in_free_text_is_masked_end_to_end(self, caplog):
        logger = structlog.get_logger("modules.clients.services")

        with caplog.at_level(logging.INFO):
            logger.warning("client.invalid_document", detail=f"document {VALID_CPF} failed the checksum")

        messages = _messages(caplog)
        assert any("client.invalid_document" in message for message in messages), messages
        assert not any(VALID_CPF in message for message in messages)
