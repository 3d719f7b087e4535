import django.db.models.deletion
import uuid
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Vendor",
            fields=[
                ("id",             models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("vendor_code",    models.CharField(max_length=20, unique=True)),
                ("name",           models.CharField(max_length=150)),
                ("contact_number", models.CharField(blank=True, max_length=15)),
                ("email",          models.EmailField(blank=True, max_length=254)),
                ("address",        models.TextField(blank=True)),
                ("pincode",        models.CharField(blank=True, max_length=6)),
                ("gst_number",     models.CharField(blank=True, max_length=15)),
                ("created_at",     models.DateTimeField(auto_now_add=True)),
                ("updated_at",     models.DateTimeField(auto_now=True)),
            ],
            options={"ordering": ["-created_at"]},
        ),
        migrations.CreateModel(
            name="Client",
            fields=[
                ("id",             models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("client_code",    models.CharField(max_length=20, unique=True)),
                ("client_name",    models.CharField(max_length=150)),
                ("contact_number", models.CharField(blank=True, max_length=15)),
                ("email_id",       models.EmailField(blank=True, max_length=254)),
                ("address",        models.TextField(blank=True)),
                ("pin_code",       models.CharField(blank=True, max_length=6)),
                ("gst_number",     models.CharField(blank=True, max_length=15)),
                ("created_at",     models.DateTimeField(auto_now_add=True)),
                ("updated_at",     models.DateTimeField(auto_now=True)),
                ("created_by",     models.ForeignKey(
                    blank=True, null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name="clients_created",
                    to=settings.AUTH_USER_MODEL,
                )),
            ],
            options={"ordering": ["-created_at"]},
        ),
        migrations.CreateModel(
            name="VendorPincode",
            fields=[
                ("id",      models.BigAutoField(auto_created=True, primary_key=True, serialize=False)),
                ("pincode", models.CharField(max_length=6)),
                ("oda",     models.CharField(
                    choices=[("NORMAL", "Normal"), ("ODA", "Out of Delivery Area")],
                    default="NORMAL",
                    max_length=6,
                )),
                ("vendor",  models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="pincodes",
                    to="masters.vendor",
                )),
            ],
            options={"ordering": ["pincode"]},
        ),
        migrations.AddConstraint(
            model_name="vendorpincode",
            constraint=models.UniqueConstraint(fields=("vendor", "pincode"), name="uniq_vendor_pincode"),
        ),
    ]
