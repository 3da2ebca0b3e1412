import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="QueueEntry",
            fields=[
                ("id",                 models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("tax_id",             models.CharField(db_index=True, max_length=20)),
                ("driver_name",        models.CharField(max_length=120)),
                ("identification_key", models.CharField(max_length=200)),
                ("origin",             models.CharField(blank=True, max_length=40)),
                ("destination",        models.CharField(max_length=20)),
                ("status",             models.CharField(
                    choices=[("waiting", "Waiting"), ("unloading", "Unloading"), ("finished", "Finished")],
                    default="waiting", max_length=10,
                )),
                ("arrived_at",         models.DateTimeField()),
                ("unload_started_at",  models.DateTimeField(blank=True, null=True)),
                ("unload_finished_at", models.DateTimeField(blank=True, null=True)),
                ("wait_seconds",       models.PositiveIntegerField(default=0)),
                ("unload_seconds",     models.PositiveIntegerField(default=0)),
                ("dock",               models.CharField(blank=True, max_length=20, null=True)),
                ("dock_notified_at",   models.DateTimeField(blank=True, null=True)),
                ("cage_count",         models.PositiveIntegerField(blank=True, null=True)),
                ("pallet_count",       models.PositiveIntegerField(blank=True, null=True)),
                ("sleeve_count",       models.PositiveIntegerField(blank=True, null=True)),
                ("updated_at",         models.DateTimeField(auto_now=True)),
            ],
            options={"ordering": ["-arrived_at"], "verbose_name_plural": "queue entries"},
        ),
        migrations.CreateModel(
            name="QueueEvent",
            fields=[
                ("id",          models.BigAutoField(auto_created=True, primary_key=True, serialize=False)),
                ("kind",        models.CharField(
                    choices=[
                        ("admitted", "Admitted"),
                        ("dock_assigned", "Dock assigned"),
                        ("unloading_started", "Unloading started"),
                        ("unloading_finished", "Unloading finished"),
                    ],
                    max_length=20,
                )),
                ("from_status", models.CharField(blank=True, max_length=10)),
                ("to_status",   models.CharField(max_length=10)),
                ("note",        models.CharField(blank=True, max_length=255)),
                ("occurred_at", models.DateTimeField()),
                ("entry",       models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="events", to="queue.queueentry",
                )),
            ],
            options={"ordering": ["occurred_at", "id"]},
        ),
        migrations.AddConstraint(
            model_name="queueentry",
            constraint=models.UniqueConstraint(
                condition=models.Q(("status__in", ["waiting", "unloading"])),
                fields=("tax_id",), name="uq_active_entry_per_driver",
            ),
        ),
        migrations.AddIndex(
            model_name="queueentry",
            index=models.Index(fields=["status"], name="queue_status_idx"),
        ),
        migrations.AddIndex(
            model_name="queueentry",
            index=models.Index(fields=["destination", "status"], name="queue_dest_status_idx"),
        ),
        migrations.AddIndex(
            model_name="queueentry",
            index=models.Index(fields=["arrived_at"], name="queue_arrived_idx"),
        ),
    ]
