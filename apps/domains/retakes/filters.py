import django_filters

from .models import RetakeAssignment


class RetakeAssignmentFilter(django_filters.FilterSet):
    lecture = django_filters.NumberFilter(field_name="exam__lecture_id")
    exam = django_filters.NumberFilter(field_name="exam_id")
    student = django_filters.NumberFilter(field_name="student_id")
    status = django_filters.ChoiceFilter(choices=RetakeAssignment.Status.choices)
    management_status = django_filters.CharFilter(field_name="management_status")

    date_from = django_filters.DateFilter(field_name="scheduled_date", lookup_expr="gte")
    date_to = django_filters.DateFilter(field_name="scheduled_date", lookup_expr="lte")

    class Meta:
        model = RetakeAssignment
        fields = ["lecture", "exam", "student", "status", "management_status"]
