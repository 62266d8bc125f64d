# PATH: apps/domains/retakes/serializers.py
from rest_framework import serializers

from .models import ManagementStatus, RetakeAssignment, RetakeHistory


# --------------------------------------------------
# Read
# --------------------------------------------------

class RetakeExamSummarySerializer(serializers.Serializer):
    id = serializers.IntegerField()
    title = serializers.CharField()
    round = serializers.IntegerField()
    lecture_id = serializers.IntegerField()
    lecture_title = serializers.CharField(source="lecture.title")


class RetakeStudentSummarySerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    phone = serializers.CharField(allow_null=True)
    school = serializers.CharField(allow_null=True)


class RetakeAssignmentSerializer(serializers.ModelSerializer):
    exam = RetakeExamSummarySerializer(read_only=True)
    student = RetakeStudentSummarySerializer(read_only=True)

    class Meta:
        model = RetakeAssignment
        fields = [
            "id",
            "exam",
            "student",
            "status",
            "management_status",
            "scheduled_date",
            "postpone_count",
            "absent_count",
            "note",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class RetakeHistorySerializer(serializers.ModelSerializer):
    performed_by_name = serializers.SerializerMethodField()

    class Meta:
        model = RetakeHistory
        fields = [
            "id",
            "retake_assignment",
            "sequence",
            "action_type",
            "previous_date",
            "new_date",
            "previous_status",
            "new_status",
            "previous_management_status",
            "new_management_status",
            "note",
            "performed_by",
            "performed_by_name",
            "created_at",
        ]
        read_only_fields = fields

    def get_performed_by_name(self, obj):
        user = obj.performed_by
        if user is None:
            return None
        return user.name or user.username


class RetakeFeedSerializer(RetakeHistorySerializer):
    """최근 활동 피드: 이력 + 재시험 요약."""
    student_name = serializers.CharField(source="retake_assignment.student.name", read_only=True)
    exam_title = serializers.CharField(source="retake_assignment.exam.title", read_only=True)
    exam_round = serializers.IntegerField(source="retake_assignment.exam.round", read_only=True)
    lecture_title = serializers.CharField(source="retake_assignment.exam.lecture.title", read_only=True)

    class Meta(RetakeHistorySerializer.Meta):
        fields = RetakeHistorySerializer.Meta.fields + [
            "student_name",
            "exam_title",
            "exam_round",
            "lecture_title",
        ]
        read_only_fields = fields


class ManagementStatusSerializer(serializers.ModelSerializer):
    class Meta:
        model = ManagementStatus
        fields = ["id", "name", "color", "display_order", "created_at"]
        read_only_fields = fields


# --------------------------------------------------
# Write (입력 형태만 검증, 규칙은 use case/서비스)
# --------------------------------------------------

class RetakeAssignInputSerializer(serializers.Serializer):
    exam_id = serializers.IntegerField()
    student_ids = serializers.ListField(child=serializers.IntegerField(), allow_empty=False)
    scheduled_date = serializers.DateField()
    management_status = serializers.CharField(required=False, allow_blank=True, max_length=30)


class RetakeNoteInputSerializer(serializers.Serializer):
    note = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class RetakeNewDateInputSerializer(serializers.Serializer):
    new_date = serializers.DateField()
    note = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class RetakeStatusInputSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=RetakeAssignment.Status.choices)
    note = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class RetakeManagementStatusInputSerializer(serializers.Serializer):
    management_status = serializers.CharField(allow_blank=True)


class ManagementStatusReorderInputSerializer(serializers.Serializer):
    ids = serializers.ListField(child=serializers.IntegerField(), allow_empty=False)


class RetakeNoticeInputSerializer(serializers.Serializer):
    retake_ids = serializers.ListField(child=serializers.IntegerField(), allow_empty=False)
    recipient_type = serializers.ChoiceField(choices=["student", "parent", "both"])
    template = serializers.CharField()
