import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="ScheduledNotification",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("activity_id", models.BigIntegerField(db_index=True)),
                ("child_id", models.BigIntegerField(db_index=True)),
                ("scheduled_time", models.DateTimeField(db_index=True, help_text="When the reminder should be delivered")),
                ("notification_type", models.CharField(choices=[("oneHour", "1 hour before"), ("thirtyMinutes", "30 minutes before")], max_length=20)),
                ("activity_title", models.CharField(max_length=100)),
                ("child_name", models.CharField(max_length=50)),
                ("activity_start_time", models.DateTimeField()),
                ("location", models.CharField(blank=True, max_length=200)),
                ("activity_timezone", models.CharField(default="UTC", max_length=64)),
                ("sent", models.BooleanField(db_index=True, default=False)),
                ("sent_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("user", models.ForeignKey(help_text="User who receives this reminder", on_delete=django.db.models.deletion.CASCADE, related_name="scheduled_notifications", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["scheduled_time"],
                "indexes": [
                    models.Index(fields=["activity_id", "sent"], name="schednotif_activity_sent_idx"),
                    models.Index(fields=["sent", "scheduled_time"], name="schednotif_due_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="PushSubscription",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("endpoint", models.TextField(unique=True)),
                ("p256dh", models.CharField(max_length=255)),
                ("auth", models.CharField(max_length=255)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="push_subscriptions", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "indexes": [models.Index(fields=["user", "is_active"], name="pushsub_user_active_idx")],
            },
        ),
    ]
