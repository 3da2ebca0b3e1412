import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Waypoint",
            fields=[
                ("id",         models.BigAutoField(auto_created=True, primary_key=True, serialize=False)),
                ("city",       models.CharField(max_length=80)),
                ("code",       models.CharField(max_length=20, unique=True)),
                ("latitude",   models.FloatField()),
                ("longitude",  models.FloatField()),
                ("radius_m",   models.PositiveIntegerField(
                    validators=[django.core.validators.MinValueValidator(1)],
                )),
                ("origin",     models.CharField(blank=True, max_length=40)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={"ordering": ["city"]},
        ),
        migrations.CreateModel(
            name="DriverEnrollment",
            fields=[
                ("id",                 models.BigAutoField(auto_created=True, primary_key=True, serialize=False)),
                ("full_name",          models.CharField(max_length=120)),
                ("tax_id",             models.CharField(max_length=20, unique=True)),
                ("phone",              models.CharField(max_length=20)),
                ("email",              models.EmailField(max_length=254)),
                ("origin",             models.CharField(max_length=40)),
                ("destination",        models.CharField(max_length=20)),
                ("identification_key", models.CharField(max_length=200, unique=True)),
                ("created_at",         models.DateTimeField(auto_now_add=True)),
                ("updated_at",         models.DateTimeField(auto_now=True)),
            ],
            options={"ordering": ["full_name"]},
        ),
        migrations.AddIndex(
            model_name="driverenrollment",
            index=models.Index(fields=["destination"], name="enroll_destination_idx"),
        ),
    ]
