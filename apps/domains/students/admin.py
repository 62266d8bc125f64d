from django.contrib import admin

from .models import Student


@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "tenant",
        "name",
        "grade",
        "school",
        "phone",
        "parent_phone",
        "created_at",
    )
    list_filter = ("tenant", "grade")
    search_fields = ("name", "phone", "parent_phone")
    raw_id_fields = ("user",)
