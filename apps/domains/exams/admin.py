from django.contrib import admin

from .models import Exam


@admin.register(Exam)
class ExamAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "round", "lecture", "exam_date", "is_active")
    list_filter = ("is_active",)
    search_fields = ("title", "lecture__title")
    ordering = ("-created_at",)
