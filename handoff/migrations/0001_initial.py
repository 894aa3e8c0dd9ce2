from django.db import migrations, models
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Patient",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("patient_name", models.CharField(max_length=255)),
                ("age", models.PositiveIntegerField(blank=True, null=True)),
                ("gender", models.CharField(blank=True, max_length=20)),
                ("medical_condition", models.CharField(blank=True, max_length=255)),
                ("blood_pressure", models.CharField(blank=True, max_length=20)),
                ("heart_rate", models.PositiveIntegerField(blank=True, null=True)),
                ("oxygen_saturation", models.PositiveIntegerField(blank=True, null=True)),
                ("allergies", models.CharField(blank=True, max_length=255)),
                ("medical_needs", models.JSONField(blank=True, default=list)),
                ("additional_notes", models.TextField(blank=True)),
                ("selected_hospital", models.CharField(blank=True, max_length=255)),
                ("driver_email", models.EmailField(blank=True, db_index=True, max_length=254)),
                ("latitude", models.FloatField(blank=True, null=True)),
                ("longitude", models.FloatField(blank=True, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "pending"),
                            ("sent_to_hospital", "sent_to_hospital"),
                            ("admitted", "admitted"),
                            ("declined", "declined"),
                        ],
                        db_index=True,
                        default="pending",
                        max_length=20,
                    ),
                ),
                ("decline_reason", models.TextField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(blank=True, null=True)),
            ],
            options={
                "indexes": [models.Index(fields=["status", "created_at"], name="patient_status_created_idx")],
            },
        ),
        migrations.CreateModel(
            name="Driver",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("driver_name", models.CharField(max_length=255)),
                ("email", models.EmailField(max_length=254, unique=True)),
                ("password", models.CharField(max_length=128)),
                ("phone", models.CharField(max_length=32)),
                ("licence_number", models.CharField(max_length=64)),
                ("registered_at", models.DateTimeField(auto_now_add=True)),
                ("last_login", models.DateTimeField(blank=True, null=True)),
            ],
        ),
        migrations.CreateModel(
            name="Notification",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("driver_email", models.EmailField(max_length=254)),
                ("patient_id", models.BigIntegerField(db_index=True)),
                ("patient_name", models.CharField(blank=True, max_length=255)),
                ("hospital_name", models.CharField(blank=True, max_length=255)),
                (
                    "status",
                    models.CharField(choices=[("accepted", "accepted"), ("declined", "declined")], max_length=16),
                ),
                ("message", models.CharField(max_length=255)),
                ("reason", models.TextField(blank=True, null=True)),
                ("is_read", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "indexes": [
                    models.Index(fields=["driver_email", "is_read", "created_at"], name="notif_driver_unread_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ContactMessage",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("email", models.EmailField(max_length=254)),
                ("organization", models.CharField(blank=True, max_length=255)),
                ("phone", models.CharField(blank=True, max_length=32)),
                ("subject", models.CharField(max_length=255)),
                ("message", models.TextField()),
                (
                    "status",
                    models.CharField(
                        choices=[("new", "new"), ("read", "read"), ("replied", "replied")],
                        default="new",
                        max_length=16,
                    ),
                ),
                ("submitted_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
        ),
        migrations.CreateModel(
            name="AuditEvent",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("actor", models.CharField(blank=True, max_length=255)),
                ("action", models.CharField(max_length=64)),
                ("object_type", models.CharField(blank=True, max_length=64, null=True)),
                ("object_id", models.CharField(blank=True, max_length=64, null=True)),
                ("detail", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "indexes": [
                    models.Index(fields=["action", "created_at"], name="audit_action_created_idx"),
                    models.Index(fields=["object_type", "object_id", "created_at"], name="audit_object_created_idx"),
                ],
            },
        ),
    ]
