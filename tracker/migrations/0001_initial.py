from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="StudySession",
            fields=[
                ("id", models.CharField(editable=False, max_length=36, primary_key=True, serialize=False)),
                ("level", models.CharField(choices=[("B1_PLUS", "B1+"), ("B2", "B2")], db_index=True, max_length=16)),
                ("started_at", models.DateTimeField()),
                ("ended_at", models.DateTimeField(blank=True, null=True)),
                ("duration_seconds", models.PositiveIntegerField(blank=True, null=True)),
            ],
            options={
                "indexes": [models.Index(fields=["level", "ended_at"], name="idx_level_ended")],
                "constraints": [
                    models.CheckConstraint(
                        condition=(
                            models.Q(("ended_at__isnull", True), ("duration_seconds__isnull", True))
                            | models.Q(("ended_at__isnull", False), ("duration_seconds__isnull", False))
                        ),
                        name="ck_session_stop_fields_together",
                    ),
                ],
            },
        ),
    ]
