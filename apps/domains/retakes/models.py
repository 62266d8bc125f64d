# PATH: apps/domains/retakes/models.py
"""
재시험 (Retake) 도메인 모델

- RetakeAssignment : 학생 × 시험 1행. 상태/관리상태/예정일/카운터
- RetakeHistory    : append-only 이력. undo 의 단일 진실
- ManagementStatus : 테넌트별 관리 상태 라벨 (assignment 는 FK 가 아닌 이름으로 참조)

🔒 원칙:
- postpone_count / absent_count 는 직접 수정 금지 (전이 use case 와 undo 로만 변경)
- RetakeHistory 는 insert 외 수정 없음. 삭제는 undo(최신 1건) 또는 assignment cascade 뿐
"""
from django.conf import settings
from django.db import models

from apps.api.common.models import TimestampModel


# --------------------------------------------------
# Management Status Catalog
# --------------------------------------------------

class ManagementStatus(TimestampModel):
    class Color(models.TextChoices):
        SUCCESS = "success", "Success"
        WARNING = "warning", "Warning"
        DANGER = "danger", "Danger"
        INFO = "info", "Info"
        NEUTRAL = "neutral", "Neutral"

    NAME_MAX_LENGTH = 30

    tenant = models.ForeignKey(
        "core.Tenant",
        on_delete=models.CASCADE,
        related_name="retake_management_statuses",
        db_index=True,
    )
    name = models.CharField(max_length=NAME_MAX_LENGTH)
    display_order = models.IntegerField(default=0)
    color = models.CharField(max_length=20, choices=Color.choices, default=Color.NEUTRAL)

    class Meta:
        app_label = "retakes"
        ordering = ["display_order", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["tenant", "name"],
                name="retakes_mgmtstatus_tenant_name_uniq",
            ),
            models.UniqueConstraint(
                fields=["tenant", "display_order"],
                name="retakes_mgmtstatus_tenant_order_uniq",
            ),
        ]

    def __str__(self):
        return self.name


# --------------------------------------------------
# Retake Assignment
# --------------------------------------------------

class RetakeAssignment(TimestampModel):
    class Status(models.TextChoices):
        PENDING = "pending", "예정"
        COMPLETED = "completed", "완료"
        ABSENT = "absent", "불참"

    exam = models.ForeignKey(
        "exams.Exam",
        on_delete=models.CASCADE,
        related_name="retake_assignments",
    )
    student = models.ForeignKey(
        "students.Student",
        on_delete=models.CASCADE,
        related_name="retake_assignments",
    )

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
    )
    # ManagementStatus.name 복사본 (카탈로그 변경/삭제와 무관하게 유지)
    management_status = models.CharField(max_length=ManagementStatus.NAME_MAX_LENGTH, blank=True, default="")

    # null = 미지정
    scheduled_date = models.DateField(null=True, blank=True, db_index=True)

    postpone_count = models.PositiveIntegerField(default=0)
    absent_count = models.PositiveIntegerField(default=0)

    note = models.TextField(null=True, blank=True)

    # 마지막으로 발급한 이력 sequence (행 락 하에서만 증가)
    history_seq = models.PositiveIntegerField(default=0)

    class Meta:
        app_label = "retakes"
        ordering = ["scheduled_date", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["exam", "student"],
                name="retakes_assignment_exam_student_uniq",
            ),
        ]

    def __str__(self):
        return f"Retake<{self.exam_id}:{self.student_id}> {self.status}"


# --------------------------------------------------
# Retake History (append-only ledger)
# --------------------------------------------------

class RetakeHistory(models.Model):
    class ActionType(models.TextChoices):
        ASSIGN = "assign", "할당"
        POSTPONE = "postpone", "연기"
        ABSENT = "absent", "불참"
        COMPLETE = "complete", "완료"
        STATUS_CHANGE = "status_change", "상태 변경"
        MANAGEMENT_STATUS_CHANGE = "management_status_change", "관리 상태 변경"
        DATE_EDIT = "date_edit", "날짜 수정"

    retake_assignment = models.ForeignKey(
        RetakeAssignment,
        on_delete=models.CASCADE,
        related_name="history",
    )

    # assignment 단위 순번 (1, 2, 3 ...). 큰 값이 최신.
    sequence = models.PositiveIntegerField()

    action_type = models.CharField(max_length=40, choices=ActionType.choices)

    previous_date = models.DateField(null=True, blank=True)
    new_date = models.DateField(null=True, blank=True)

    previous_status = models.CharField(max_length=20, choices=RetakeAssignment.Status.choices, null=True, blank=True)
    new_status = models.CharField(max_length=20, choices=RetakeAssignment.Status.choices, null=True, blank=True)

    previous_management_status = models.CharField(max_length=ManagementStatus.NAME_MAX_LENGTH, null=True, blank=True)
    new_management_status = models.CharField(max_length=ManagementStatus.NAME_MAX_LENGTH, null=True, blank=True)

    note = models.TextField(null=True, blank=True)

    performed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="retake_history_actions",
    )

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        app_label = "retakes"
        ordering = ["-sequence"]
        constraints = [
            models.UniqueConstraint(
                fields=["retake_assignment", "sequence"],
                name="retakes_history_assignment_seq_uniq",
            ),
        ]

    def __str__(self):
        return f"RetakeHistory<{self.retake_assignment_id}#{self.sequence}> {self.action_type}"
