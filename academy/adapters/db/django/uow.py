"""
Django Unit of Work: transaction.atomic 래퍼 (lazy import)
"""
from __future__ import annotations

import logging

from academy.domain.retakes.errors import RetakeStorageError

logger = logging.getLogger(__name__)


class DjangoUnitOfWork:
    """Django transaction.atomic으로 트랜잭션 경계. 메서드 내부에서 Django import."""

    def __init__(self) -> None:
        self._atomic = None
        self._retakes = None
        self._retake_history = None
        self._management_statuses = None

    @property
    def retakes(self):
        from academy.adapters.db.django.repositories_retakes import DjangoRetakeAssignmentRepository
        if self._retakes is None:
            self._retakes = DjangoRetakeAssignmentRepository()
        return self._retakes

    @property
    def retake_history(self):
        from academy.adapters.db.django.repositories_retakes import DjangoRetakeHistoryRepository
        if self._retake_history is None:
            self._retake_history = DjangoRetakeHistoryRepository()
        return self._retake_history

    @property
    def management_statuses(self):
        from academy.adapters.db.django.repositories_retakes import DjangoManagementStatusCatalog
        if self._management_statuses is None:
            self._management_statuses = DjangoManagementStatusCatalog()
        return self._management_statuses

    def __enter__(self) -> DjangoUnitOfWork:
        from django.db import transaction
        self._atomic = transaction.atomic()
        self._atomic.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        from django.db import DatabaseError

        atomic, self._atomic = self._atomic, None
        try:
            if atomic is not None:
                atomic.__exit__(exc_type, exc_val, exc_tb)
        except DatabaseError as e:
            # commit 단계 실패
            logger.exception("[uow] commit failed")
            raise RetakeStorageError("저장 중 오류가 발생했습니다.") from e

        if exc_type is not None and issubclass(exc_type, DatabaseError):
            logger.error("[uow] rolled back: %s", exc_val)
            raise RetakeStorageError("저장 중 오류가 발생했습니다.") from exc_val
