"""
Messaging Service Layer
========================
Conversation log for matches. Access uses the same participant check as
match details: unknown match -> NotFound, outsider -> Forbidden.
"""

from django.db import transaction
from django.utils import timezone
import logging

from apps.common.exceptions import InvalidContent
from apps.matching.models import Match
from apps.matching.services import SwipeService
from .models import Message

logger = logging.getLogger(__name__)


class MessageService:

    @staticmethod
    def clean_content(content):
        """
        Strip surrounding whitespace and enforce 1-1000 characters.

        Raises:
            InvalidContent: If the trimmed content is empty or too long
        """
        trimmed = (content or '').strip()
        if not trimmed:
            raise InvalidContent('Message content cannot be empty')
        if len(trimmed) > Message.MAX_LENGTH:
            raise InvalidContent(f'Message content must be {Message.MAX_LENGTH} characters or less')
        return trimmed

    @staticmethod
    def list_messages(match_id, user_id):
        """
        Messages of a match, oldest first.
        """
        match = SwipeService.get_match_for_participant(match_id, user_id)
        return list(
            Message.objects.filter(match=match).select_related('match').order_by('created_at', 'id')
        )

    @staticmethod
    @transaction.atomic
    def post_message(match_id, sender_id, content):
        """
        Append a message to a match conversation.

        The match's last_interaction_at is moved to the message timestamp in
        the same transaction.

        Returns:
            Message: The stored message, content as trimmed
        """
        match = SwipeService.get_match_for_participant(match_id, sender_id)
        trimmed = MessageService.clean_content(content)

        created_at = timezone.now()
        message = Message.objects.create(
            match=match,
            sender_id=sender_id,
            content=trimmed,
            created_at=created_at,
        )

        Match.objects.filter(pk=match.pk).update(last_interaction_at=created_at)

        logger.info(f"Message posted in match {match.uuid} by {sender_id}")
        return message
