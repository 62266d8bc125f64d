# PATH: apps/domains/retakes/services/management_status_service.py
"""
관리 상태 카탈로그 (tenant 별 라벨 목록)

- 재시험은 라벨을 "이름" 으로 복사해 들고 있으므로 여기서의 수정/삭제가
  기존 재시험 행을 바꾸지 않는다.
- 기본 라벨 시드는 tenant 생성 시(signals) 와 seed_management_statuses 명령에서만.
  운영자가 전부 지운 카탈로그는 빈 채로 둔다.
"""
from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import Max

from academy.domain.retakes.errors import RetakeConflict, RetakeInvalidInput, RetakeNotFound
from apps.domains.retakes.models import ManagementStatus

logger = logging.getLogger(__name__)


def _clean_name(name: Any) -> str:
    if not isinstance(name, str) or not name.strip():
        raise RetakeInvalidInput("상태 이름은 필수입니다.")
    if len(name) > ManagementStatus.NAME_MAX_LENGTH:
        raise RetakeInvalidInput("상태 이름은 30자 이하여야 합니다.")
    return name.strip()


def _clean_color(color: Any) -> str:
    if color not in ManagementStatus.Color.values:
        raise RetakeInvalidInput("유효한 색상을 선택해주세요.")
    return color


class ManagementStatusService:
    """tenant_id 단위 카탈로그 CRUD + 정렬."""

    def __init__(self, tenant_id: int):
        self.tenant_id = int(tenant_id)

    def _qs(self):
        return ManagementStatus.objects.filter(tenant_id=self.tenant_id)

    # --------------------------------------------------
    # 조회
    # --------------------------------------------------

    def ensure_seeded(self) -> None:
        if self._qs().exists():
            return
        defaults = getattr(settings, "RETAKE_DEFAULT_MANAGEMENT_STATUSES", [])
        # 명령과 동시에 실행되어도 유니크 충돌은 무시 (먼저 만든 쪽이 유지)
        ManagementStatus.objects.bulk_create(
            [
                ManagementStatus(tenant_id=self.tenant_id, name=name, color=color, display_order=i)
                for i, (name, color) in enumerate(defaults, start=1)
            ],
            ignore_conflicts=True,
        )
        logger.info("[retake] management statuses seeded tenant=%s count=%s", self.tenant_id, len(defaults))

    def list(self):
        return self._qs().order_by("display_order", "id")

    def names(self) -> set[str]:
        return set(self._qs().values_list("name", flat=True))

    def get(self, status_id: Any) -> ManagementStatus:
        obj = self._qs().filter(id=status_id).first()
        if obj is None:
            raise RetakeNotFound("관리 상태를 찾을 수 없습니다.")
        return obj

    # --------------------------------------------------
    # 쓰기
    # --------------------------------------------------

    def create(self, *, name: Any, color: Any) -> ManagementStatus:
        name = _clean_name(name)
        color = _clean_color(color)

        if self._qs().filter(name=name).exists():
            raise RetakeConflict("이미 존재하는 상태 이름입니다.")

        next_order = (self._qs().aggregate(m=Max("display_order"))["m"] or 0) + 1
        try:
            with transaction.atomic():
                obj = ManagementStatus.objects.create(
                    tenant_id=self.tenant_id,
                    name=name,
                    color=color,
                    display_order=next_order,
                )
        except IntegrityError:
            raise RetakeConflict("이미 존재하는 상태 이름입니다.")
        return obj

    def update(self, status_id: Any, *, name: Optional[Any] = None, color: Optional[Any] = None) -> ManagementStatus:
        obj = self.get(status_id)
        update_fields = ["updated_at"]

        if name is not None:
            obj.name = _clean_name(name)
            update_fields.append("name")
            if self._qs().filter(name=obj.name).exclude(id=obj.id).exists():
                raise RetakeConflict("이미 존재하는 상태 이름입니다.")
        if color is not None:
            obj.color = _clean_color(color)
            update_fields.append("color")

        try:
            with transaction.atomic():
                obj.save(update_fields=update_fields)
        except IntegrityError:
            raise RetakeConflict("이미 존재하는 상태 이름입니다.")
        return obj

    def delete(self, status_id: Any) -> None:
        obj = self.get(status_id)
        obj.delete()
        logger.info("[retake] management status deleted tenant=%s name=%s", self.tenant_id, obj.name)

    @transaction.atomic
    def reorder(self, ordered_ids: Sequence[Any]) -> list[ManagementStatus]:
        """
        ordered_ids 순서대로 display_order = 1..n.
        tenant 의 항목 전체를 정확히 한 번씩 포함해야 한다.
        """
        if not isinstance(ordered_ids, (list, tuple)) or not ordered_ids:
            raise RetakeInvalidInput("정렬할 상태 목록이 필요합니다.")
        try:
            ids = [int(x) for x in ordered_ids]
        except (TypeError, ValueError):
            raise RetakeInvalidInput("상태 ID 형식이 올바르지 않습니다.")

        rows = {m.id: m for m in self._qs().select_for_update()}
        if len(ids) != len(set(ids)) or set(ids) != set(rows):
            raise RetakeInvalidInput("모든 관리 상태를 정확히 한 번씩 포함해야 합니다.")

        # (tenant, display_order) 유니크 → 음수로 비운 뒤 최종값 기록
        for i, sid in enumerate(ids, start=1):
            ManagementStatus.objects.filter(id=sid).update(display_order=-i)
        for i, sid in enumerate(ids, start=1):
            ManagementStatus.objects.filter(id=sid).update(display_order=i)

        return list(self._qs().order_by("display_order", "id"))
