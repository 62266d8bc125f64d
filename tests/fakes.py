"""
In-memory UnitOfWork: academy use case 를 Django 없이 돌리기 위한 테스트 대역.

- get_for_update 는 assignment 별 threading.Lock 을 잡고 UoW 종료 시 놓는다 (행 락 흉내)
- UoW 안에서 예외가 나면 진입 시점 스냅샷으로 되돌린다 (트랜잭션 흉내)
- fail_on 에 연산 이름을 넣으면 해당 지점에서 StorageFailure → RetakeStorageError
"""
from __future__ import annotations

import copy
import itertools
import threading
import time
from collections import defaultdict
from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence

from academy.domain.retakes.entities import (
    HistoryDraft,
    RetakeAssignment,
    RetakeHistoryEntry,
)
from academy.domain.retakes.errors import RetakeConflict, RetakeStorageError


class StorageFailure(Exception):
    pass


class InMemoryStore:
    def __init__(self) -> None:
        self.exams: dict[int, int] = {}  # exam_id -> tenant_id
        self.students: dict[int, int] = {}  # student_id -> tenant_id
        self.catalog: dict[int, set[str]] = defaultdict(set)
        self.assignments: dict[int, RetakeAssignment] = {}
        self.history: dict[int, RetakeHistoryEntry] = {}
        self.row_locks: defaultdict[int, threading.Lock] = defaultdict(threading.Lock)
        self.meta_lock = threading.RLock()
        self.fail_on: set[str] = set()
        self.read_delay: float = 0.0
        self._assignment_ids = itertools.count(1)
        self._history_ids = itertools.count(1)

    def next_assignment_id(self) -> int:
        with self.meta_lock:
            return next(self._assignment_ids)

    def next_history_id(self) -> int:
        with self.meta_lock:
            return next(self._history_ids)

    def maybe_fail(self, op: str) -> None:
        if op in self.fail_on:
            raise StorageFailure(op)

    def history_for(self, retake_id: int) -> list[RetakeHistoryEntry]:
        with self.meta_lock:
            rows = [h for h in self.history.values() if h.retake_assignment_id == retake_id]
        return sorted(rows, key=lambda h: h.sequence, reverse=True)


def _fresh(a: RetakeAssignment) -> RetakeAssignment:
    return replace(a, changed_fields=set())


class InMemoryRetakeRepository:
    def __init__(self, store: InMemoryStore, uow: "InMemoryUnitOfWork") -> None:
        self.store = store
        self.uow = uow

    def _in_tenant(self, a: RetakeAssignment, tenant_id: int) -> bool:
        return (
            self.store.exams.get(a.exam_id) == tenant_id
            and self.store.students.get(a.student_id) == tenant_id
        )

    def get(self, tenant_id: int, retake_id: int) -> Optional[RetakeAssignment]:
        a = self.store.assignments.get(retake_id)
        if a is None or not self._in_tenant(a, tenant_id):
            return None
        return _fresh(a)

    def get_for_update(self, tenant_id: int, retake_id: int) -> Optional[RetakeAssignment]:
        if retake_id in self.store.assignments:
            lock = self.store.row_locks[retake_id]
            lock.acquire()
            self.uow.held_locks.append(lock)
        a = self.get(tenant_id, retake_id)
        if self.store.read_delay:
            time.sleep(self.store.read_delay)
        return a

    def exam_exists(self, tenant_id: int, exam_id: int) -> bool:
        return self.store.exams.get(exam_id) == tenant_id

    def existing_student_ids(self, tenant_id: int, student_ids: Sequence[int]) -> set[int]:
        return {s for s in student_ids if self.store.students.get(s) == tenant_id}

    def assigned_student_ids(self, exam_id: int, student_ids: Sequence[int]) -> set[int]:
        wanted = set(student_ids)
        return {
            a.student_id
            for a in self.store.assignments.values()
            if a.exam_id == exam_id and a.student_id in wanted
        }

    def create_many(self, assignments: Sequence[RetakeAssignment]) -> list[RetakeAssignment]:
        self.store.maybe_fail("create_many")
        if self.assigned_student_ids(assignments[0].exam_id, [a.student_id for a in assignments]):
            raise RetakeConflict("이미 재시험이 할당된 학생이 있습니다.")
        created = []
        for a in assignments:
            row = replace(a, id=self.store.next_assignment_id(), changed_fields=set())
            self.store.assignments[row.id] = row
            created.append(_fresh(row))
        return created

    def save(self, assignment: RetakeAssignment) -> None:
        self.store.maybe_fail("save")
        row = self.store.assignments[assignment.id]
        for name in assignment.changed_fields:
            setattr(row, name, getattr(assignment, name))
        assignment.changed_fields.clear()

    def delete(self, tenant_id: int, retake_id: int) -> bool:
        if self.get(tenant_id, retake_id) is None:
            return False
        del self.store.assignments[retake_id]
        for h in self.store.history_for(retake_id):
            del self.store.history[h.id]
        return True


class InMemoryHistoryRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    def append(
        self,
        assignment: RetakeAssignment,
        draft: HistoryDraft,
        performed_by_id: Optional[int] = None,
    ) -> RetakeHistoryEntry:
        self.store.maybe_fail("append")
        entry = RetakeHistoryEntry(
            id=self.store.next_history_id(),
            retake_assignment_id=assignment.id,
            sequence=assignment.next_sequence(),
            action_type=draft.action_type,
            previous_date=draft.previous_date,
            new_date=draft.new_date,
            previous_status=draft.previous_status,
            new_status=draft.new_status,
            previous_management_status=draft.previous_management_status,
            new_management_status=draft.new_management_status,
            note=draft.note,
            performed_by_id=performed_by_id,
            created_at=datetime(2025, 1, 1),
        )
        with self.store.meta_lock:
            self.store.history[entry.id] = entry
        return entry

    def latest(self, retake_id: int) -> Optional[RetakeHistoryEntry]:
        rows = self.store.history_for(retake_id)
        return rows[0] if rows else None

    def list_for_assignment(self, retake_id: int) -> list[RetakeHistoryEntry]:
        return self.store.history_for(retake_id)

    def delete(self, history_id: int) -> None:
        self.store.maybe_fail("delete_history")
        self.store.history.pop(history_id, None)


class InMemoryCatalog:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    def list_names(self, tenant_id: int) -> set[str]:
        return set(self.store.catalog[tenant_id])


class InMemoryUnitOfWork:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store
        self.held_locks: list[threading.Lock] = []
        self.retakes = InMemoryRetakeRepository(store, self)
        self.retake_history = InMemoryHistoryRepository(store)
        self.management_statuses = InMemoryCatalog(store)
        self._snapshot = None

    def __enter__(self) -> "InMemoryUnitOfWork":
        with self.store.meta_lock:
            self._snapshot = (
                copy.deepcopy(self.store.assignments),
                copy.deepcopy(self.store.history),
            )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        try:
            if exc_type is not None:
                self.store.assignments, self.store.history = self._snapshot
        finally:
            self._snapshot = None
            while self.held_locks:
                self.held_locks.pop().release()
        if exc_type is not None and issubclass(exc_type, StorageFailure):
            raise RetakeStorageError("저장 중 오류가 발생했습니다.") from exc_val
