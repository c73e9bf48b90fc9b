import uuid6
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Client",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid6.uuid7,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "party_type",
                    models.CharField(
                        choices=[
                            ("INDIVIDUAL", "Pessoa física"),
                            ("ORGANIZATION", "Pessoa jurídica"),
                        ],
                        max_length=12,
                    ),
                ),
                ("legal_name", models.CharField(max_length=255)),
                ("trade_name", models.CharField(blank=True, default="", max_length=255)),
                ("document", models.CharField(max_length=14)),
                ("email", models.EmailField(blank=True, default="", max_length=254)),
                ("phone", models.CharField(blank=True, default="", max_length=20)),
                ("postal_code", models.CharField(blank=True, default="", max_length=8)),
                ("street", models.CharField(blank=True, default="", max_length=255)),
                ("number", models.CharField(blank=True, default="", max_length=20)),
                ("complement", models.CharField(blank=True, default="", max_length=255)),
                ("neighborhood", models.CharField(blank=True, default="", max_length=255)),
                ("city", models.CharField(blank=True, default="", max_length=255)),
                ("state", models.CharField(blank=True, default="", max_length=2)),
            ],
            options={
                "db_table": "clients",
                "ordering": ["legal_name", "id"],
                "indexes": [
                    models.Index(fields=["legal_name"], name="clients_legal_name_idx"),
                    models.Index(fields=["party_type"], name="clients_party_type_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("document",), name="clients_document_unique"
                    ),
                ],
            },
        ),
    ]
