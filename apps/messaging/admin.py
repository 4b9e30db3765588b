from django.contrib import admin
from .models import Message


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ['uuid', 'match', 'sender', 'created_at']
    search_fields = ['content']
    readonly_fields = ['uuid', 'match', 'sender', 'content', 'created_at']
