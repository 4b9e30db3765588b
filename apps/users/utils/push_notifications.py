# apps/users/utils/push_notifications.py

import json
import logging
import threading
from typing import Dict, Any, Optional

import requests
from django.conf import settings
from django.db import connection

from apps.users.models import DeviceToken, Profile

logger = logging.getLogger(__name__)

APP_ICON_URL = 'https://i.pinimg.com/736x/df/c7/4e/dfc74efc5fdaacc9f50beb5a795aa46b.jpg'


def send_push_notification(
    user_id: str,
    title: str,
    body: str,
    data: Dict[str, Any] = None
) -> bool:
    """
    Send push notification to a specific user.

    Args:
        user_id: User UUID
        title: Notification title
        body: Notification body
        data: Additional data to include (can contain 'imageUrl' for rich media)

    Returns:
        bool: True if sent successfully. Delivery problems are logged, never raised.
    """
    data = data or {}
    final_image_url = data.get('imageUrl', APP_ICON_URL)

    tokens = list(
        DeviceToken.objects.filter(
            user__id=user_id,
            is_active=True
        ).values_list('token', flat=True)
    )

    if not tokens:
        logger.debug(f'No active tokens for user {user_id}')
        return False

    messages = [
        {
            'to': token,
            'sound': 'default',
            'title': title,
            'body': body,
            'data': {**data, 'imageUrl': final_image_url},
            'priority': 'high',
        }
        for token in tokens
    ]

    try:
        response = requests.post(
            settings.EXPO_PUSH_URL,
            headers={
                'Accept': 'application/json',
                'Accept-encoding': 'gzip, deflate',
                'Content-Type': 'application/json',
            },
            data=json.dumps(messages),
            timeout=settings.PUSH_NOTIFICATION_TIMEOUT,
        )
    except requests.RequestException as e:
        logger.warning(f'Error sending push notification to {user_id}: {e}')
        return False

    if response.status_code != 200:
        logger.warning(f'Failed to send notification to {user_id}: {response.text}')
        return False

    logger.info(f'Push notification sent to {user_id}')
    return True


def get_user_photo_url(user_id: str) -> Optional[str]:
    """Helper to get the primary photo URL for a user."""
    profile = Profile.objects.filter(user_id=user_id).first()
    if profile is None:
        return None
    photo = profile.primary_photo
    return photo.url if photo else None


def get_display_name(user_id: str) -> str:
    profile = Profile.objects.filter(user_id=user_id).select_related('user').first()
    if profile is None:
        return 'Someone'
    return profile.display_name or profile.user.username


def send_match_notification(matched_username: str, user_id: str, match_id: str, matched_user_id: str):
    """Send notification when there's a mutual match."""
    image_url = get_user_photo_url(matched_user_id)

    data_payload = {
        'type': 'match',
        'username': matched_username,
        'matchId': match_id,
    }
    if image_url:
        data_payload['imageUrl'] = image_url

    return send_push_notification(
        user_id=user_id,
        title="It's a Match! 🎉",
        body=f"You and {matched_username} liked each other!",
        data=data_payload
    )


def notify_match(match_id: str, user1_id: str, user2_id: str):
    """
    Tell both participants about a new match.

    Failures are logged and dropped: a match never depends on delivery.
    """
    for user_id, other_id in ((user1_id, user2_id), (user2_id, user1_id)):
        try:
            send_match_notification(
                matched_username=get_display_name(other_id),
                user_id=user_id,
                match_id=match_id,
                matched_user_id=other_id,
            )
        except Exception:
            logger.exception(f'Match notification for {user_id} failed (match {match_id})')


def _notify_match_in_thread(match_id, user1_id, user2_id):
    try:
        notify_match(match_id, user1_id, user2_id)
    finally:
        connection.close()


def dispatch_match_notification(match_id: str, user1_id: str, user2_id: str):
    """
    Fire-and-forget delivery on a daemon thread so the request never waits
    on the push service.
    """
    if not settings.PUSH_NOTIFICATIONS_ENABLED:
        logger.info(f'[Match notification] Users {user1_id} and {user2_id} matched (push disabled)')
        return None

    thread = threading.Thread(
        target=_notify_match_in_thread,
        args=(match_id, user1_id, user2_id),
        name=f'match-notify-{match_id}',
        daemon=True,
    )
    thread.start()
    return thread
