from django.db import models

from apps.api.common.models import TimestampModel


class Exam(TimestampModel):
    """
    시험 정의 (메타 정보만)

    tenant 는 lecture 를 통해 결정된다 (exam.lecture.tenant).
    """

    lecture = models.ForeignKey(
        "lectures.Lecture",
        on_delete=models.CASCADE,
        related_name="exams",
    )

    title = models.CharField(max_length=255)
    subject = models.CharField(max_length=100, blank=True)

    # 회차 (예: 3회차 주간테스트)
    round = models.PositiveIntegerField(default=1)
    exam_date = models.DateField(null=True, blank=True)

    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "exams_exam"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.title} ({self.round}회차)"
