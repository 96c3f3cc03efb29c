import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("org", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="HrmDevice",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("name", models.CharField(max_length=150)),
                (
                    "api_key",
                    models.CharField(db_index=True, max_length=128, unique=True),
                ),
                ("active", models.BooleanField(default=True)),
                ("allowed_ips", models.JSONField(blank=True, default=list)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "organization",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="hrm_devices",
                        to="org.organization",
                    ),
                ),
            ],
            options={
                "verbose_name": "HRM device",
                "ordering": ["organization_id", "name"],
            },
        ),
    ]
