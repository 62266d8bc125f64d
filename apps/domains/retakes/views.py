# PATH: apps/domains/retakes/views.py
"""
재시험 API

- 상태 전이/undo 는 academy use case + DjangoUnitOfWork 로만 수행 (행 락 + 이력 1건)
- 조회는 selectors (tenant 범위 QuerySet)
- 도메인 오류는 {"detail", "code"} + http_status 로 응답
"""
import logging

from django.conf import settings
from django.http import Http404
from django.utils import timezone
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response

from academy.adapters.db.django.uow import DjangoUnitOfWork
from academy.application.use_cases.retakes import (
    Actor,
    assign_retakes,
    change_retake_management_status,
    change_retake_status,
    complete_retake,
    delete_retake,
    edit_retake_date,
    mark_retake_absent,
    postpone_retake,
    undo_retake_history,
    update_retake_note,
)
from academy.domain.retakes.errors import RetakeDomainError
from apps.core.models import TenantMembership
from apps.core.permissions import IsTenantMember, IsTenantStaff

from .filters import RetakeAssignmentFilter
from .selectors import history_feed, history_for_retake, retake_queryset
from .serializers import (
    ManagementStatusReorderInputSerializer,
    ManagementStatusSerializer,
    RetakeAssignInputSerializer,
    RetakeAssignmentSerializer,
    RetakeFeedSerializer,
    RetakeHistorySerializer,
    RetakeManagementStatusInputSerializer,
    RetakeNewDateInputSerializer,
    RetakeNoteInputSerializer,
    RetakeNoticeInputSerializer,
    RetakeStatusInputSerializer,
)
from .services import ManagementStatusService, send_retake_notice

logger = logging.getLogger(__name__)


def actor_from_request(request) -> Actor:
    tenant = request.tenant
    user = request.user
    role = TenantMembership.role_of(tenant=tenant, user=user) or ""
    return Actor(tenant_id=tenant.id, user_id=user.id, role=role)


def _first_error(detail):
    if isinstance(detail, dict):
        for value in detail.values():
            return _first_error(value)
    if isinstance(detail, list) and detail:
        return _first_error(detail[0])
    return str(detail)


class RetakeErrorMixin:
    """RetakeDomainError / 입력 오류 / 404 를 {"detail", "code"} 로 통일."""

    not_found_message = "재시험을 찾을 수 없습니다."

    def handle_exception(self, exc):
        if isinstance(exc, RetakeDomainError):
            log = logger.warning if exc.http_status >= 500 else logger.info
            log(
                "[retake] rejected path=%s code=%s message=%s",
                self.request.path,
                exc.code,
                exc.message,
            )
            return Response({"detail": exc.message, "code": exc.code}, status=exc.http_status)

        if isinstance(exc, ValidationError):
            return Response(
                {"detail": _first_error(exc.detail), "code": "invalid_input", "errors": exc.detail},
                status=status.HTTP_400_BAD_REQUEST,
            )

        if isinstance(exc, Http404):
            return Response(
                {"detail": self.not_found_message, "code": "not_found"},
                status=status.HTTP_404_NOT_FOUND,
            )

        return super().handle_exception(exc)


class RetakePagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = "page_size"
    max_page_size = 500


# ---------------------------
# Retake Assignment
# ---------------------------

class RetakeViewSet(RetakeErrorMixin, viewsets.GenericViewSet):
    serializer_class = RetakeAssignmentSerializer
    pagination_class = RetakePagination
    filter_backends = (DjangoFilterBackend,)
    filterset_class = RetakeAssignmentFilter
    lookup_value_regex = r"\d+"

    def get_permissions(self):
        if self.action in ("list", "retrieve"):
            return [IsTenantMember()]
        return [IsTenantStaff()]

    def get_queryset(self):
        """
        🔐 tenant 단일 진실
        학생 계정은 본인 재시험만
        """
        qs = retake_queryset(self.request.tenant)
        user = self.request.user
        if user.is_superuser:
            return qs
        if not TenantMembership.is_staff_of(tenant=self.request.tenant, user=user):
            qs = qs.filter(student__user=user)
        return qs

    def _respond(self, assignment_id, http_status=status.HTTP_200_OK):
        obj = retake_queryset(self.request.tenant).get(id=assignment_id)
        return Response(RetakeAssignmentSerializer(obj).data, status=http_status)

    # GET /retakes/
    def list(self, request):
        qs = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(self.get_serializer(page, many=True).data)
        return Response(self.get_serializer(qs, many=True).data)

    # GET /retakes/{id}/
    def retrieve(self, request, pk=None):
        return Response(self.get_serializer(self.get_object()).data)

    # POST /retakes/
    def create(self, request):
        serializer = RetakeAssignInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        created = assign_retakes(
            DjangoUnitOfWork(),
            actor_from_request(request),
            exam_id=data["exam_id"],
            student_ids=data["student_ids"],
            scheduled_date=data["scheduled_date"],
            management_status=data.get("management_status") or settings.RETAKE_DEFAULT_MANAGEMENT_STATUS,
        )
        qs = retake_queryset(request.tenant).filter(id__in=[a.id for a in created])
        return Response(RetakeAssignmentSerializer(qs, many=True).data, status=status.HTTP_201_CREATED)

    # PATCH /retakes/{id}/  (메모만)
    def partial_update(self, request, pk=None):
        serializer = RetakeNoteInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        a = update_retake_note(
            DjangoUnitOfWork(),
            actor_from_request(request),
            int(pk),
            note=serializer.validated_data.get("note"),
        )
        return self._respond(a.id)

    # DELETE /retakes/{id}/
    def destroy(self, request, pk=None):
        delete_retake(DjangoUnitOfWork(), actor_from_request(request), int(pk))
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ---------------------------
    # 상태 전이
    # ---------------------------

    @action(detail=True, methods=["patch"], url_path="postpone")
    def postpone(self, request, pk=None):
        serializer = RetakeNewDateInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        a = postpone_retake(
            DjangoUnitOfWork(),
            actor_from_request(request),
            int(pk),
            new_date=serializer.validated_data["new_date"],
            note=serializer.validated_data.get("note"),
        )
        return self._respond(a.id)

    @action(detail=True, methods=["patch"], url_path="absent")
    def absent(self, request, pk=None):
        serializer = RetakeNoteInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        a = mark_retake_absent(
            DjangoUnitOfWork(),
            actor_from_request(request),
            int(pk),
            note=serializer.validated_data.get("note"),
        )
        return self._respond(a.id)

    @action(detail=True, methods=["patch"], url_path="complete")
    def complete(self, request, pk=None):
        serializer = RetakeNoteInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        a = complete_retake(
            DjangoUnitOfWork(),
            actor_from_request(request),
            int(pk),
            today=timezone.localdate(),
            note=serializer.validated_data.get("note"),
        )
        return self._respond(a.id)

    @action(detail=True, methods=["patch"], url_path="edit-date", url_name="edit-date")
    def edit_date(self, request, pk=None):
        serializer = RetakeNewDateInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        a = edit_retake_date(
            DjangoUnitOfWork(),
            actor_from_request(request),
            int(pk),
            new_date=serializer.validated_data["new_date"],
        )
        return self._respond(a.id)

    @action(detail=True, methods=["patch"], url_path="status", url_name="change-status")
    def change_status(self, request, pk=None):
        serializer = RetakeStatusInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        a = change_retake_status(
            DjangoUnitOfWork(),
            actor_from_request(request),
            int(pk),
            status=serializer.validated_data["status"],
            note=serializer.validated_data.get("note"),
        )
        return self._respond(a.id)

    @action(detail=True, methods=["patch"], url_path="management-status", url_name="management-status")
    def management_status(self, request, pk=None):
        serializer = RetakeManagementStatusInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        a = change_retake_management_status(
            DjangoUnitOfWork(),
            actor_from_request(request),
            int(pk),
            management_status=serializer.validated_data["management_status"],
        )
        return self._respond(a.id)

    # ---------------------------
    # 이력
    # ---------------------------

    # GET /retakes/{id}/history/
    @action(detail=True, methods=["get"], url_path="history", url_name="history")
    def history(self, request, pk=None):
        retake = self.get_object()
        return Response(RetakeHistorySerializer(history_for_retake(retake), many=True).data)

    # POST /retakes/{id}/history/{history_id}/undo/
    @action(
        detail=True,
        methods=["post"],
        url_path=r"history/(?P<history_id>\d+)/undo",
        url_name="undo",
    )
    def undo(self, request, pk=None, history_id=None):
        a = undo_retake_history(
            DjangoUnitOfWork(),
            actor_from_request(request),
            int(pk),
            int(history_id),
        )
        return self._respond(a.id)

    # GET /retakes/history/  (tenant 전체 최근 활동)
    @action(detail=False, methods=["get"], url_path="history", url_name="feed")
    def feed(self, request):
        limit = getattr(settings, "RETAKE_HISTORY_FEED_LIMIT", 50)
        qs = history_feed(request.tenant, limit=limit)
        return Response(RetakeFeedSerializer(qs, many=True).data)

    # ---------------------------
    # 안내 문자
    # ---------------------------

    # POST /retakes/notice/
    @action(detail=False, methods=["post"], url_path="notice", url_name="notice")
    def notice(self, request):
        serializer = RetakeNoticeInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        result = send_retake_notice(
            request.tenant,
            retake_ids=data["retake_ids"],
            recipient_type=data["recipient_type"],
            template=data["template"],
        )
        return Response(result)


# ---------------------------
# Management Status Catalog
# ---------------------------

class ManagementStatusViewSet(RetakeErrorMixin, viewsets.GenericViewSet):
    serializer_class = ManagementStatusSerializer
    permission_classes = [IsTenantStaff]
    pagination_class = None
    lookup_value_regex = r"\d+"
    not_found_message = "관리 상태를 찾을 수 없습니다."

    def _service(self):
        return ManagementStatusService(self.request.tenant.id)

    def list(self, request):
        return Response(self.get_serializer(self._service().list(), many=True).data)

    def create(self, request):
        obj = self._service().create(
            name=request.data.get("name"),
            color=request.data.get("color"),
        )
        return Response(self.get_serializer(obj).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        obj = self._service().update(
            pk,
            name=request.data.get("name"),
            color=request.data.get("color"),
        )
        return Response(self.get_serializer(obj).data)

    def destroy(self, request, pk=None):
        self._service().delete(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    # POST /retakes/management-statuses/reorder/
    @action(detail=False, methods=["post"], url_path="reorder", url_name="reorder")
    def reorder(self, request):
        serializer = ManagementStatusReorderInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        rows = self._service().reorder(serializer.validated_data["ids"])
        return Response(self.get_serializer(rows, many=True).data)
