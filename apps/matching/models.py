"""
Matching System Models
=======================
- SwipeAction: one directional like/pass decision per ordered user pair
- Match: one confirmed mutual connection per unordered user pair

Both invariants are enforced by database constraints so that concurrent
requests end in an IntegrityError rather than duplicated rows.
"""

from django.db import models
from django.conf import settings
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
import uuid


# ============================================================================
# SWIPE ACTION MODEL
# ============================================================================

class SwipeAction(models.Model):
    """
    Records every swipe action (like/pass). Immutable once written.

    Business Value:
    - Quota: action_date is the UTC day the action counts against
    - User Experience: Don't show already decided profiles again
    - Match Making: a like in both directions creates a Match
    """

    LIKE = 'like'
    PASS = 'pass'
    ACTION_TYPES = [
        (LIKE, 'Like'),
        (PASS, 'Pass'),
    ]

    uuid = models.UUIDField(
        default=uuid.uuid4,
        editable=False,
        unique=True,
        db_index=True
    )

    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='swipe_actions'
    )

    target = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='received_swipes'
    )

    direction = models.CharField(
        max_length=10,
        choices=ACTION_TYPES,
    )

    # Quota bucket key, not the exact instant
    action_date = models.DateField(db_index=True)

    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'swipe_actions'
        constraints = [
            models.UniqueConstraint(fields=['actor', 'target'], name='unique_swipe_per_pair'),
            models.CheckConstraint(
                condition=~models.Q(actor=models.F('target')),
                name='swipe_actor_not_target',
            ),
        ]
        indexes = [
            models.Index(fields=['actor', 'action_date'], name='swipe_actor_date_idx'),
            models.Index(fields=['target', 'direction'], name='swipe_target_direction_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.actor_id} {self.direction} {self.target_id}"


# ============================================================================
# MATCH MODEL
# ============================================================================

class Match(models.Model):
    """
    Represents a match between two users.

    Design Pattern: one row per unordered pair, participants stored ordered
    (user1 < user2) so the pair has a single key regardless of who liked first.
    """

    uuid = models.UUIDField(
        default=uuid.uuid4,
        editable=False,
        unique=True,
        db_index=True
    )

    user1 = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='matches_as_user1'
    )

    user2 = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='matches_as_user2'
    )

    created_at = models.DateTimeField(default=timezone.now)
    last_interaction_at = models.DateTimeField(
        null=True,
        blank=True,
        db_index=True,
        help_text=_('Updated on any conversation activity')
    )

    class Meta:
        db_table = 'matches'
        constraints = [
            models.UniqueConstraint(fields=['user1', 'user2'], name='unique_match_per_pair'),
            models.CheckConstraint(
                condition=models.Q(user1__lt=models.F('user2')),
                name='match_users_ordered',
            ),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.user1_id} <-> {self.user2_id}"

    @staticmethod
    def ordered_pair(id_a, id_b):
        """Return the two ids as (smaller, larger)."""
        return (id_a, id_b) if id_a < id_b else (id_b, id_a)

    @classmethod
    def find_by_pair(cls, id_a, id_b):
        user1_id, user2_id = cls.ordered_pair(id_a, id_b)
        return cls.objects.filter(user1_id=user1_id, user2_id=user2_id).first()

    def save(self, *args, **kwargs):
        """
        Override save to ensure participants are always ordered.
        This prevents duplicate matches with reversed participants.
        """
        if self.user1_id > self.user2_id:
            self.user1_id, self.user2_id = self.user2_id, self.user1_id
        super().save(*args, **kwargs)

    def is_participant(self, user_id):
        return user_id in (self.user1_id, self.user2_id)

    def get_other_participant(self, user_id):
        """
        Get the other participant in the match for the given user.
        """
        return self.user2 if user_id == self.user1_id else self.user1
