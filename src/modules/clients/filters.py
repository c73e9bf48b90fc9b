import django_filters

from modules.clients import documents
from modules.clients.models import Client, PartyType


class ClientFilter(django_filters.FilterSet):
    name = django_filters.CharFilter(field_name="legal_name", lookup_expr="icontains")
    party_type = django_filters.ChoiceFilter(choices=PartyType.choices)
    document = django_filters.CharFilter(method="filter_document")
    city = django_filters.CharFilter(field_name="city", lookup_expr="iexact")

    class Meta:
        model = Client
        fields = ["name", "party_type", "document", "city"]

    def filter_document(self, queryset, name, value):
        # Accept formatted input ("111.444.777-35") as well as raw digits.
        return queryset.filter(document=documents.normalize(value))
