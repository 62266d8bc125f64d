"""
재시험(Retake) 도메인 오류: 순수 파이썬

code / message / http_status 를 함께 들고 다닌다.
HTTP 변환은 API 계층에서 http_status 를 그대로 사용.

code:
  - not_found      : 테넌트 범위 안에서 재시험/시험/학생/이력을 찾을 수 없음
  - conflict       : (exam, student) 재시험 중복 할당
  - invalid_input  : 필수값 누락, 변경 없는 날짜 수정, 허용되지 않은 상태값
  - invalid_state  : 최신 이력이 아닌 항목 되돌리기, 되돌릴 수 없는 이력
  - storage_error  : 트랜잭션 내 저장소 오류 (부분 반영 없음)
"""
from __future__ import annotations


class RetakeDomainError(Exception):
    code = "retake_error"
    http_status = 400

    def __init__(self, message: str, *, code: str | None = None):
        super().__init__(message)
        self.message = str(message)
        if code:
            self.code = str(code)


class RetakeNotFound(RetakeDomainError):
    """다른 테넌트의 행인지 실제로 없는 행인지 구분하지 않는다."""
    code = "not_found"
    http_status = 404


class RetakeConflict(RetakeDomainError):
    code = "conflict"
    http_status = 409


class RetakeInvalidInput(RetakeDomainError):
    code = "invalid_input"
    http_status = 400


class RetakeInvalidState(RetakeDomainError):
    code = "invalid_state"
    http_status = 400


class RetakeStorageError(RetakeDomainError):
    code = "storage_error"
    http_status = 500
