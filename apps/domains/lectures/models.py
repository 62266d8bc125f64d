from django.db import models

from apps.api.common.models import TimestampModel


# ========================================================
# Lecture (강의 = 재시험 필터의 "수업")
# ========================================================

class Lecture(TimestampModel):
    tenant = models.ForeignKey(
        "core.Tenant",
        on_delete=models.CASCADE,
        related_name="lectures",
        db_index=True,
    )

    title = models.CharField(max_length=255)
    subject = models.CharField(max_length=50, blank=True)
    description = models.TextField(blank=True)

    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)

    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["-id"]

    def __str__(self):
        return self.title
