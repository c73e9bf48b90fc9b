from django.contrib import admin

from modules.clients.documents import mask_document
from modules.clients.models import Client


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ["legal_name", "party_type", "masked_document", "city", "created_at"]
    list_filter = ["party_type", "state"]
    search_fields = ["legal_name", "trade_name", "document", "email"]
    ordering = ["legal_name"]
    readonly_fields = ["id", "created_at", "updated_at"]

    @admin.display(description="Document")
    def masked_document(self, obj: Client) -> str:
        return mask_document(obj.document)
