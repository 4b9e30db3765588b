"""
Match Conversation Models
==========================
Append-only message log per match. Messages are immutable once written and
displayed oldest first.
"""

from django.db import models
from django.conf import settings
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
import uuid


# ============================================================================
# MESSAGE MODEL
# ============================================================================

class Message(models.Model):
    """
    Individual message within a match conversation.

    Design Decisions:
    - Scoped by match FK; the match's two participants are the only senders
    - Auto-increment pk breaks ties between messages sharing a timestamp
    """

    MAX_LENGTH = 1000

    uuid = models.UUIDField(
        default=uuid.uuid4,
        editable=False,
        unique=True,
        db_index=True
    )

    match = models.ForeignKey(
        'matching.Match',
        on_delete=models.CASCADE,
        related_name='messages'
    )

    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='sent_messages'
    )

    content = models.TextField(
        max_length=MAX_LENGTH,
        help_text=_('Message content (max 1000 characters)')
    )

    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = 'messages'
        ordering = ['created_at', 'id']
        indexes = [
            models.Index(fields=['match', 'created_at'], name='messages_match_created_idx'),
        ]

    def __str__(self):
        return f"Message from {self.sender_id} in match {self.match_id}"
