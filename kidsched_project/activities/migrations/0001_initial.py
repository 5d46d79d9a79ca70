import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("accounts", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Activity",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=100, validators=[django.core.validators.MinLengthValidator(2)])),
                ("location", models.CharField(max_length=200, validators=[django.core.validators.MinLengthValidator(2)])),
                ("days_of_week", models.JSONField(default=list, help_text="Weekday indexes, 0 = Sunday … 6 = Saturday")),
                ("start_time", models.CharField(help_text="HH:MM, 24-hour", max_length=5)),
                ("end_time", models.CharField(help_text="HH:MM, 24-hour", max_length=5)),
                ("timezone", models.CharField(help_text="IANA timezone, e.g. America/New_York", max_length=64)),
                ("revision", models.PositiveIntegerField(default=0, editable=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("child", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="activities", to="accounts.child")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="activities", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "verbose_name_plural": "activities",
                "ordering": ["start_time", "title"],
                "indexes": [models.Index(fields=["user", "child"], name="activity_user_child_idx")],
            },
        ),
    ]
