import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("drivers", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="DriverLocation",
            fields=[
                ("id",          models.BigAutoField(auto_created=True, primary_key=True, serialize=False)),
                ("latitude",    models.FloatField(validators=[
                    django.core.validators.MinValueValidator(-90),
                    django.core.validators.MaxValueValidator(90),
                ])),
                ("longitude",   models.FloatField(validators=[
                    django.core.validators.MinValueValidator(-180),
                    django.core.validators.MaxValueValidator(180),
                ])),
                ("recorded_at", models.DateTimeField()),
                ("received_at", models.DateTimeField(auto_now_add=True)),
                ("enrollment",  models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="locations", to="drivers.driverenrollment",
                )),
            ],
            options={"ordering": ["-recorded_at"]},
        ),
        migrations.AddIndex(
            model_name="driverlocation",
            index=models.Index(fields=["enrollment", "-recorded_at"], name="location_driver_time_idx"),
        ),
    ]
