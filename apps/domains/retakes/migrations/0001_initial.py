# PATH: apps/domains/retakes/migrations/0001_initial.py

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


STATUS_CHOICES = [("pending", "예정"), ("completed", "완료"), ("absent", "불참")]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("core", "0001_initial"),
        ("exams", "0001_initial"),
        ("students", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="ManagementStatus",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=30)),
                ("display_order", models.IntegerField(default=0)),
                (
                    "color",
                    models.CharField(
                        choices=[
                            ("success", "Success"),
                            ("warning", "Warning"),
                            ("danger", "Danger"),
                            ("info", "Info"),
                            ("neutral", "Neutral"),
                        ],
                        default="neutral",
                        max_length=20,
                    ),
                ),
                (
                    "tenant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="retake_management_statuses",
                        to="core.tenant",
                    ),
                ),
            ],
            options={
                "ordering": ["display_order", "id"],
            },
        ),
        migrations.AddConstraint(
            model_name="managementstatus",
            constraint=models.UniqueConstraint(fields=("tenant", "name"), name="retakes_mgmtstatus_tenant_name_uniq"),
        ),
        migrations.AddConstraint(
            model_name="managementstatus",
            constraint=models.UniqueConstraint(
                fields=("tenant", "display_order"), name="retakes_mgmtstatus_tenant_order_uniq"
            ),
        ),
        migrations.CreateModel(
            name="RetakeAssignment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("status", models.CharField(choices=STATUS_CHOICES, db_index=True, default="pending", max_length=20)),
                ("management_status", models.CharField(blank=True, default="", max_length=30)),
                ("scheduled_date", models.DateField(blank=True, db_index=True, null=True)),
                ("postpone_count", models.PositiveIntegerField(default=0)),
                ("absent_count", models.PositiveIntegerField(default=0)),
                ("note", models.TextField(blank=True, null=True)),
                ("history_seq", models.PositiveIntegerField(default=0)),
                (
                    "exam",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="retake_assignments",
                        to="exams.exam",
                    ),
                ),
                (
                    "student",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="retake_assignments",
                        to="students.student",
                    ),
                ),
            ],
            options={
                "ordering": ["scheduled_date", "id"],
            },
        ),
        migrations.AddConstraint(
            model_name="retakeassignment",
            constraint=models.UniqueConstraint(fields=("exam", "student"), name="retakes_assignment_exam_student_uniq"),
        ),
        migrations.CreateModel(
            name="RetakeHistory",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("sequence", models.PositiveIntegerField()),
                (
                    "action_type",
                    models.CharField(
                        choices=[
                            ("assign", "할당"),
                            ("postpone", "연기"),
                            ("absent", "불참"),
                            ("complete", "완료"),
                            ("status_change", "상태 변경"),
                            ("management_status_change", "관리 상태 변경"),
                            ("date_edit", "날짜 수정"),
                        ],
                        max_length=40,
                    ),
                ),
                ("previous_date", models.DateField(blank=True, null=True)),
                ("new_date", models.DateField(blank=True, null=True)),
                ("previous_status", models.CharField(blank=True, choices=STATUS_CHOICES, max_length=20, null=True)),
                ("new_status", models.CharField(blank=True, choices=STATUS_CHOICES, max_length=20, null=True)),
                ("previous_management_status", models.CharField(blank=True, max_length=30, null=True)),
                ("new_management_status", models.CharField(blank=True, max_length=30, null=True)),
                ("note", models.TextField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                (
                    "performed_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="retake_history_actions",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "retake_assignment",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="history",
                        to="retakes.retakeassignment",
                    ),
                ),
            ],
            options={
                "ordering": ["-sequence"],
            },
        ),
        migrations.AddConstraint(
            model_name="retakehistory",
            constraint=models.UniqueConstraint(
                fields=("retake_assignment", "sequence"), name="retakes_history_assignment_seq_uniq"
            ),
        ),
    ]
