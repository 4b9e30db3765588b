"""
Messaging Serializers
======================
"""

from rest_framework import serializers
from .models import Message


class MatchMessageSerializer(serializers.ModelSerializer):
    """
    Serializer for Message model.
    """

    id = serializers.UUIDField(source='uuid', read_only=True)
    match_id = serializers.UUIDField(source='match.uuid', read_only=True)
    sender_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = Message
        fields = ['id', 'match_id', 'sender_id', 'content', 'created_at']
        read_only_fields = fields


class MatchMessageCreateSerializer(serializers.Serializer):
    """
    Serializer for posting messages.

    Design: only checks presence and type. Trimming and length rules are
    applied by MessageService so every caller gets the same rules.
    """

    content = serializers.CharField(
        required=True,
        allow_blank=True,
        trim_whitespace=False,
        error_messages={'required': 'Message content is required'}
    )
