# PATH: apps/domains/retakes/selectors.py
"""
재시험 조회 전용 (QuerySet 반환). 쓰기는 academy use case 경유.
"""
from __future__ import annotations

from django.db.models import F, QuerySet

from apps.domains.retakes.models import RetakeAssignment, RetakeHistory


def retake_queryset(tenant) -> QuerySet:
    """tenant 범위 재시험: exam.lecture.tenant == student.tenant == tenant."""
    return (
        RetakeAssignment.objects.filter(
            exam__lecture__tenant=tenant,
            student__tenant=tenant,
        )
        .select_related("exam", "exam__lecture", "student")
        .order_by(F("scheduled_date").asc(nulls_last=True), "id")
    )


def history_for_retake(retake: RetakeAssignment) -> QuerySet:
    return (
        RetakeHistory.objects.filter(retake_assignment=retake)
        .select_related("performed_by")
        .order_by("-sequence")
    )


def history_feed(tenant, *, limit: int) -> QuerySet:
    """tenant 전체 최근 이력 (최신순, 최대 limit 건)."""
    return (
        RetakeHistory.objects.filter(
            retake_assignment__exam__lecture__tenant=tenant,
            retake_assignment__student__tenant=tenant,
        )
        .select_related(
            "performed_by",
            "retake_assignment__student",
            "retake_assignment__exam",
            "retake_assignment__exam__lecture",
        )
        .order_by("-created_at", "-id")[: max(int(limit), 0)]
    )
