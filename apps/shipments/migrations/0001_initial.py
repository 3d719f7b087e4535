import django.core.validators
import django.db.models.deletion
import django.utils.timezone
import uuid
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("masters", "0001_initial"),
        ("rates", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Shipment",
            fields=[
                ("id",                      models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("wfl_number",              models.CharField(blank=True, db_index=True, max_length=40)),
                ("vendor_awb_number",       models.CharField(blank=True, db_index=True, max_length=40)),
                ("mode",                    models.CharField(
                    choices=[("air", "Air"), ("surface", "Surface"), ("express", "Express")],
                    max_length=10,
                )),
                ("invoice_number",          models.CharField(blank=True, max_length=40)),
                ("invoice_value",           models.DecimalField(
                    decimal_places=2, default=0, max_digits=12,
                    validators=[django.core.validators.MinValueValidator(0)],
                )),
                ("consignor_from_location", models.CharField(blank=True, max_length=150)),
                ("consignee",               models.CharField(blank=True, max_length=150)),
                ("destination",             models.CharField(blank=True, max_length=150)),
                ("pin_code",                models.CharField(max_length=6)),
                ("oda",                     models.CharField(
                    choices=[("NORMAL", "Normal"), ("ODA", "Out of Delivery Area")],
                    default="NORMAL", max_length=6,
                )),
                ("total_box",               models.PositiveIntegerField(default=0)),
                ("actual_weight",            models.FloatField(default=0)),
                ("actual_volumetric_weight", models.FloatField(default=0)),
                ("wfl_weight",               models.FloatField(default=0)),
                ("wfl_volumetric_weight",    models.FloatField(default=0)),
                ("shipment_date",           models.DateField(default=django.utils.timezone.localdate)),
                ("created_at",              models.DateTimeField(auto_now_add=True)),
                ("updated_at",              models.DateTimeField(auto_now=True)),
                ("client",     models.ForeignKey(on_delete=django.db.models.deletion.PROTECT,
                                                 related_name="shipments", to="masters.client")),
                ("vendor",     models.ForeignKey(on_delete=django.db.models.deletion.PROTECT,
                                                 related_name="shipments", to="masters.vendor")),
                ("zone",       models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT,
                                                 related_name="shipments", to="rates.zone")),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                                                 related_name="shipments_entered", to=settings.AUTH_USER_MODEL)),
            ],
            options={"ordering": ["-shipment_date", "-created_at"]},
        ),
        migrations.CreateModel(
            name="ShipmentBox",
            fields=[
                ("id",                          models.BigAutoField(auto_created=True, primary_key=True, serialize=False)),
                ("kind",                        models.CharField(choices=[("VENDOR", "Vendor"), ("WFL", "WFL")], max_length=6)),
                ("position",                    models.PositiveIntegerField(default=0)),
                ("number_of_pieces",            models.PositiveIntegerField(default=1)),
                ("length_cm",                   models.FloatField(validators=[django.core.validators.MinValueValidator(0)])),
                ("breadth_cm",                  models.FloatField(validators=[django.core.validators.MinValueValidator(0)])),
                ("height_cm",                   models.FloatField(validators=[django.core.validators.MinValueValidator(0)])),
                ("actual_weight_per_piece",     models.FloatField(default=0, validators=[django.core.validators.MinValueValidator(0)])),
                ("volumetric_weight_per_piece", models.FloatField(default=0)),
                ("total_volumetric_weight",     models.FloatField(default=0)),
                ("shipment",    models.ForeignKey(on_delete=django.db.models.deletion.CASCADE,
                                                  related_name="boxes", to="shipments.shipment")),
            ],
            options={"ordering": ["kind", "position"]},
        ),
        migrations.AddIndex(
            model_name="shipment",
            index=models.Index(fields=["client", "shipment_date"], name="shipment_client_date_idx"),
        ),
        migrations.AddIndex(
            model_name="shipment",
            index=models.Index(fields=["created_by"], name="shipment_created_by_idx"),
        ),
    ]
