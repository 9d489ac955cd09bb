# Activity log: append-only audit events with polymorphic subject and causer.

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Activity",
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
                (
                    "log_name",
                    models.CharField(blank=True, max_length=255, null=True),
                ),
                ("description", models.TextField()),
                (
                    "subject_type",
                    models.CharField(blank=True, max_length=100, null=True),
                ),
                ("subject_id", models.BigIntegerField(blank=True, null=True)),
                (
                    "causer_type",
                    models.CharField(blank=True, max_length=100, null=True),
                ),
                ("causer_id", models.BigIntegerField(blank=True, null=True)),
                ("properties", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "db_table": "activity_log",
                "ordering": ["-created_at", "-id"],
            },
        ),
        migrations.AddIndex(
            model_name="activity",
            index=models.Index(fields=["log_name"], name="idx_activity_log_name"),
        ),
        migrations.AddIndex(
            model_name="activity",
            index=models.Index(
                fields=["subject_type", "subject_id"], name="idx_activity_subject"
            ),
        ),
        migrations.AddIndex(
            model_name="activity",
            index=models.Index(
                fields=["causer_type", "causer_id"], name="idx_activity_causer"
            ),
        ),
        migrations.AddIndex(
            model_name="activity",
            index=models.Index(fields=["created_at"], name="idx_activity_created"),
        ),
    ]
