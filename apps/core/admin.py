# PATH: apps/core/admin.py
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from apps.core.models import Tenant, TenantMembership, User


@admin.register(Tenant)
class TenantAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "code", "messaging_sender", "is_active")
    list_filter = ("is_active",)
    search_fields = ("name", "code")


@admin.register(User)
class TenantUserAdmin(UserAdmin):
    list_display = ("id", "username", "name", "tenant", "is_staff", "is_active")
    list_filter = ("tenant", "is_staff", "is_active")
    fieldsets = UserAdmin.fieldsets + (
        ("Tenant", {"fields": ("tenant", "name", "phone")}),
    )


@admin.register(TenantMembership)
class TenantMembershipAdmin(admin.ModelAdmin):
    list_display = ("id", "tenant", "user", "role", "is_active", "joined_at")
    list_filter = ("role", "is_active")
