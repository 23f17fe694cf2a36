import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Pitch",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=150)),
                ("location", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True)),
                ("capacity", models.PositiveSmallIntegerField(default=0)),
                ("price", models.CharField(blank=True, max_length=50)),
                ("price_value", models.PositiveIntegerField()),
                ("type", models.CharField(choices=[("5v5", "5 a side"), ("7v7", "7 a side"), ("11v11", "11 a side")], max_length=10)),
                ("status", models.CharField(choices=[("active", "Active"), ("pending", "Pending approval"), ("locked", "Locked")], default="pending", max_length=10)),
                ("image", models.CharField(blank=True, max_length=500)),
                ("slots", models.JSONField(blank=True, default=list)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("owner", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="pitches", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["status", "type"], name="pitch_status_type_idx")],
            },
        ),
        migrations.CreateModel(
            name="Booking",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("pitch_name", models.CharField(max_length=150)),
                ("date", models.DateField()),
                ("date_display", models.CharField(max_length=10)),
                ("time_slot", models.CharField(max_length=20)),
                ("customer_name", models.CharField(max_length=150)),
                ("phone", models.CharField(max_length=20)),
                ("price", models.CharField(max_length=50)),
                ("price_value", models.PositiveIntegerField()),
                ("status", models.CharField(choices=[("pending", "Pending"), ("confirmed", "Confirmed"), ("cancelled", "Cancelled")], default="pending", max_length=10)),
                ("payment_method", models.CharField(blank=True, max_length=20)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("confirmed_at", models.DateTimeField(blank=True, null=True)),
                ("cancelled_at", models.DateTimeField(blank=True, null=True)),
                ("pitch", models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="bookings", to="Pitch.pitch")),
                ("user", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="bookings", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["pitch", "date"], name="booking_pitch_date_idx"),
                    models.Index(fields=["status", "date"], name="booking_status_date_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(condition=models.Q(("status__in", ["pending", "confirmed"])), fields=("pitch", "date", "time_slot"), name="unique_active_booking_per_slot"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Payment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("payment_method", models.CharField(choices=[("card", "Card"), ("ewallet", "E-wallet"), ("bank", "Bank transfer"), ("cash", "Cash")], max_length=20)),
                ("transaction_ref", models.CharField(max_length=100, unique=True)),
                ("amount_paid", models.DecimalField(decimal_places=2, max_digits=12)),
                ("currency", models.CharField(default="VND", max_length=10)),
                ("status", models.CharField(choices=[("success", "Success"), ("failed", "Failed")], max_length=20)),
                ("paid_at", models.DateTimeField(auto_now_add=True)),
                ("booking", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="payment", to="Pitch.booking")),
            ],
        ),
    ]
