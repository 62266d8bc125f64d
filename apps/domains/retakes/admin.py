from django.contrib import admin

from .models import ManagementStatus, RetakeAssignment, RetakeHistory


class RetakeHistoryInline(admin.TabularInline):
    model = RetakeHistory
    extra = 0
    can_delete = False
    ordering = ("-sequence",)
    fields = (
        "sequence",
        "action_type",
        "previous_date",
        "new_date",
        "previous_status",
        "new_status",
        "previous_management_status",
        "new_management_status",
        "note",
        "performed_by",
        "created_at",
    )
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(RetakeAssignment)
class RetakeAssignmentAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "exam",
        "student",
        "status",
        "management_status",
        "scheduled_date",
        "postpone_count",
        "absent_count",
    )
    list_filter = ("status", "management_status", "scheduled_date")
    search_fields = ("student__name", "exam__title")
    # 상태/날짜/카운터는 API(이력 동반)로만 변경
    readonly_fields = (
        "exam",
        "student",
        "status",
        "management_status",
        "scheduled_date",
        "postpone_count",
        "absent_count",
        "history_seq",
        "created_at",
        "updated_at",
    )
    inlines = [RetakeHistoryInline]


@admin.register(ManagementStatus)
class ManagementStatusAdmin(admin.ModelAdmin):
    list_display = ("id", "tenant", "display_order", "name", "color")
    list_filter = ("tenant", "color")
    ordering = ("tenant", "display_order")
