from django.contrib import admin
from .models import Message


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ("id", "employee", "month", "year", "sent_date")
    search_fields = ("employee__code", "employee__user__email", "message")
    list_filter = ("year", "month")
    readonly_fields = ("employee", "message", "month", "year", "sent_date", "created_at")
