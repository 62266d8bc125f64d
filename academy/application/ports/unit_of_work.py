"""
Unit of Work 포트: 트랜잭션 경계 (Django 미사용)
"""
from __future__ import annotations

from typing import Protocol

from academy.application.ports.repositories import (
    ManagementStatusCatalog,
    RetakeAssignmentRepository,
    RetakeHistoryRepository,
)


class UnitOfWork(Protocol):
    """
    트랜잭션 단위. __enter__에서 시작, __exit__에서 commit/rollback.
    명시적 commit/rollback 메서드는 두지 않는다 (예외 전파 = rollback).
    저장소 오류는 __exit__에서 RetakeStorageError로 변환 (부분 반영 없음).
    """

    @property
    def retakes(self) -> RetakeAssignmentRepository:
        ...

    @property
    def retake_history(self) -> RetakeHistoryRepository:
        ...

    @property
    def management_statuses(self) -> ManagementStatusCatalog:
        ...

    def __enter__(self) -> "UnitOfWork":
        ...

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        ...
