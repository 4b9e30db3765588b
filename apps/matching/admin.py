from django.contrib import admin
from .models import Match, SwipeAction


@admin.register(SwipeAction)
class SwipeActionAdmin(admin.ModelAdmin):
    list_display = ['actor', 'direction', 'target', 'action_date', 'created_at']
    list_filter = ['direction', 'action_date']
    readonly_fields = ['uuid', 'actor', 'target', 'direction', 'action_date', 'created_at']


@admin.register(Match)
class MatchAdmin(admin.ModelAdmin):
    list_display = ['uuid', 'user1', 'user2', 'created_at', 'last_interaction_at']
    readonly_fields = ['uuid', 'user1', 'user2', 'created_at']
