import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("masters", "0001_initial"),
        ("rates", "0001_initial"),
        ("shipments", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Bill",
            fields=[
                ("id",             models.BigAutoField(auto_created=True, primary_key=True, serialize=False)),
                ("period_start",   models.DateField()),
                ("period_end",     models.DateField()),
                ("total_amount",   models.DecimalField(decimal_places=2, max_digits=14)),
                ("shipment_count", models.PositiveIntegerField(default=0)),
                ("created_at",     models.DateTimeField(auto_now_add=True)),
                ("client",     models.ForeignKey(on_delete=django.db.models.deletion.PROTECT,
                                                 related_name="bills", to="masters.client")),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                                                 related_name="bills_generated", to=settings.AUTH_USER_MODEL)),
            ],
            options={"ordering": ["-period_end", "-created_at"]},
        ),
        migrations.CreateModel(
            name="BillLine",
            fields=[
                ("id",                models.BigAutoField(auto_created=True, primary_key=True, serialize=False)),
                ("mode",              models.CharField(max_length=10)),
                ("chargeable_weight", models.DecimalField(decimal_places=3, max_digits=12)),
                ("rate_per_kg",       models.DecimalField(decimal_places=2, max_digits=10)),
                ("freight",           models.DecimalField(decimal_places=2, max_digits=12)),
                ("fuel",              models.DecimalField(decimal_places=2, max_digits=12)),
                ("fov",               models.DecimalField(decimal_places=2, max_digits=12)),
                ("docket",            models.DecimalField(decimal_places=2, max_digits=12)),
                ("oda",               models.DecimalField(decimal_places=2, max_digits=12)),
                ("other",             models.DecimalField(decimal_places=2, max_digits=12)),
                ("amount",            models.DecimalField(decimal_places=2, max_digits=12)),
                ("bill",     models.ForeignKey(on_delete=django.db.models.deletion.CASCADE,
                                               related_name="lines", to="billing.bill")),
                ("shipment", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT,
                                               related_name="bill_lines", to="shipments.shipment")),
                ("zone",     models.ForeignKey(on_delete=django.db.models.deletion.PROTECT,
                                               related_name="bill_lines", to="rates.zone")),
            ],
            options={"ordering": ["id"]},
        ),
        migrations.AddConstraint(
            model_name="bill",
            constraint=models.UniqueConstraint(fields=("client", "period_start", "period_end"),
                                               name="uniq_bill_client_period"),
        ),
        migrations.AddConstraint(
            model_name="billline",
            constraint=models.UniqueConstraint(fields=("shipment",), name="uniq_bill_line_shipment"),
        ),
    ]
