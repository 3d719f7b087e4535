import django.core.validators
import django.db.models.deletion
from decimal import Decimal
from django.db import migrations, models


def _money():
    return models.DecimalField(
        decimal_places=2, default=Decimal("0"), max_digits=10,
        validators=[django.core.validators.MinValueValidator(0)],
    )


def _percent():
    return models.DecimalField(
        decimal_places=2, default=Decimal("0"), max_digits=5,
        validators=[
            django.core.validators.MinValueValidator(0),
            django.core.validators.MaxValueValidator(100),
        ],
    )


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("masters", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Zone",
            fields=[
                ("id",         models.BigAutoField(auto_created=True, primary_key=True, serialize=False)),
                ("name",       models.CharField(max_length=80, unique=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={"ordering": ["name"]},
        ),
        migrations.CreateModel(
            name="ClientRate",
            fields=[
                ("id",              models.BigAutoField(auto_created=True, primary_key=True, serialize=False)),
                ("mode",            models.CharField(
                    choices=[("air", "Air"), ("surface", "Surface"), ("express", "Express")],
                    max_length=10,
                )),
                ("cft",             models.DecimalField(
                    decimal_places=3, default=Decimal("1"), max_digits=8,
                    validators=[django.core.validators.MinValueValidator(0)],
                )),
                ("minimum_weight",  models.DecimalField(
                    decimal_places=3, default=Decimal("0"), max_digits=10,
                    validators=[django.core.validators.MinValueValidator(0)],
                )),
                ("minimum_freight", _money()),
                ("docket_charges",  _money()),
                ("fuel_pct",        _percent()),
                ("fov_pct",         _percent()),
                ("oda_charge",      _money()),
                ("other_charges",   _money()),
                ("created_at",      models.DateTimeField(auto_now_add=True)),
                ("updated_at",      models.DateTimeField(auto_now=True)),
                ("client",          models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="rates",
                    to="masters.client",
                )),
            ],
            options={"ordering": ["client", "mode"]},
        ),
        migrations.CreateModel(
            name="ClientZoneRate",
            fields=[
                ("id",          models.BigAutoField(auto_created=True, primary_key=True, serialize=False)),
                ("rate_per_kg", models.DecimalField(
                    decimal_places=2, max_digits=10,
                    validators=[django.core.validators.MinValueValidator(0)],
                )),
                ("client_rate", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="zone_rates",
                    to="rates.clientrate",
                )),
                ("zone",        models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name="client_rates",
                    to="rates.zone",
                )),
            ],
            options={"ordering": ["zone__name"]},
        ),
        migrations.AddConstraint(
            model_name="clientrate",
            constraint=models.UniqueConstraint(fields=("client", "mode"), name="uniq_client_rate_mode"),
        ),
        migrations.AddConstraint(
            model_name="clientzonerate",
            constraint=models.UniqueConstraint(fields=("client_rate", "zone"), name="uniq_client_zone_rate"),
        ),
    ]
