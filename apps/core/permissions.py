# PATH: apps/core/permissions.py

from rest_framework.permissions import BasePermission

from apps.core.models import TenantMembership


class IsTenantStaff(BasePermission):
    """
    학원 운영자 전용 Permission
    - 로그인 필수 + request.tenant 확정
    - 해당 tenant 의 활성 membership role 이 owner/admin/teacher/staff
    - superuser 는 통과
    """
    message = "Staff account required."

    def has_permission(self, request, view):
        user = request.user
        if not (user and user.is_authenticated):
            return False
        if user.is_superuser:
            return True
        return TenantMembership.is_staff_of(tenant=getattr(request, "tenant", None), user=user)


class IsTenantMember(BasePermission):
    """tenant 의 활성 membership 이 있는 사용자 (학생 포함)."""
    message = "Tenant membership required."

    def has_permission(self, request, view):
        user = request.user
        if not (user and user.is_authenticated):
            return False
        if user.is_superuser:
            return True
        return TenantMembership.role_of(tenant=getattr(request, "tenant", None), user=user) is not None
