"""Client DRF serializers for API output.

The serializer operates at the Interface layer (API Views).  It only
renders responses: input parsing and validation go through the Pydantic
DTOs in ``dtos.py`` and business logic lives in the Service Layer.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.clients.models import Client


class ClientSerializer(serializers.ModelSerializer):
    """Read serializer for the Client resource.

    ``document`` is the canonical digit string; ``document_display`` is
    the punctuated CPF/CNPJ form for presentation.
    """

    document_display = serializers.CharField(read_only=True)

    class Meta:
        model = Client
        fields = [
            "id",
            "party_type",
            "legal_name",
            "trade_name",
            "document",
            "document_display",
            "email",
            "phone",
            "postal_code",
            "street",
            "number",
            "complement",
            "neighborhood",
            "city",
            "state",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class AddressSerializer(serializers.Serializer):
    postal_code = serializers.CharField()
    street = serializers.CharField(allow_blank=True)
    complement = serializers.CharField(allow_blank=True)
    neighborhood = serializers.CharField(allow_blank=True)
    city = serializers.CharField(allow_blank=True)
    state = serializers.CharField(allow_blank=True)
