"""Client URL configuration."""

from __future__ import annotations

from django.urls import path
from rest_framework.routers import DefaultRouter

from modules.clients.views import ClientViewSet, PostalCodeLookupView

router = DefaultRouter(trailing_slash=True)
router.register("clients", ClientViewSet, basename="client")

urlpatterns = [
    path(
        "postal-codes/<str:postal_code>/",
        PostalCodeLookupView.as_view(),
        name="postal_code_lookup",
    ),
    *router.urls,
]
