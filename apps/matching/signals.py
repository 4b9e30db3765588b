from django.db import transaction
from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import Match
from apps.users.utils.push_notifications import dispatch_match_notification


@receiver(post_save, sender=Match)
def notify_participants_on_match(sender, instance, created, **kwargs):
    """
    Emit the match notification once the creating transaction commits.
    A rolled back match never notifies, and delivery never holds the transaction open.
    """
    if not created:
        return

    match_id = str(instance.uuid)
    user1_id = str(instance.user1_id)
    user2_id = str(instance.user2_id)
    transaction.on_commit(
        lambda: dispatch_match_notification(match_id, user1_id, user2_id)
    )
