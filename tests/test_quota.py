from datetime import datetime, timedelta, timezone as dt_timezone

import pytest

from apps.common.exceptions import QuotaExceeded
from apps.matching.models import SwipeAction
from apps.matching.services import QuotaService, SwipeService, DAILY_SWIPE_LIMIT

pytestmark = pytest.mark.django_db

NOON = datetime(2024, 3, 10, 12, 0, tzinfo=dt_timezone.utc)


def test_next_reset_is_next_utc_midnight():
    assert QuotaService.next_reset(NOON) == datetime(2024, 3, 11, tzinfo=dt_timezone.utc)


def test_next_reset_uses_utc_day_for_offset_timestamps():
    # 23:30 at UTC-5 is already 04:30 the next day in UTC
    late_evening = datetime(2024, 3, 10, 23, 30, tzinfo=dt_timezone(timedelta(hours=-5)))
    assert QuotaService.next_reset(late_evening) == datetime(2024, 3, 12, tzinfo=dt_timezone.utc)


def test_stats_for_new_user(make_user):
    user = make_user()
    stats = QuotaService.get_stats(user.id, NOON)
    assert stats['count_today'] == 0
    assert stats['remaining'] == DAILY_SWIPE_LIMIT


def test_counts_only_todays_actions(make_user):
    actor = make_user()
    yesterday_target, today_target = make_user(), make_user()

    SwipeService.record_action(actor.id, yesterday_target.id, 'pass', now=NOON - timedelta(days=1))
    SwipeService.record_action(actor.id, today_target.id, 'like', now=NOON)

    stats = QuotaService.get_stats(actor.id, NOON)
    assert stats['count_today'] == 1
    assert stats['remaining'] == DAILY_SWIPE_LIMIT - 1

    tomorrow = NOON + timedelta(days=1)
    assert QuotaService.get_stats(actor.id, tomorrow)['count_today'] == 0


def test_action_past_the_daily_limit_is_rejected(make_user):
    actor = make_user()
    for _ in range(DAILY_SWIPE_LIMIT):
        SwipeService.record_action(actor.id, make_user().id, 'pass', now=NOON)

    assert QuotaService.get_stats(actor.id, NOON)['remaining'] == 0

    extra_target = make_user()
    with pytest.raises(QuotaExceeded) as exc_info:
        SwipeService.record_action(actor.id, extra_target.id, 'like', now=NOON)

    assert exc_info.value.limit == DAILY_SWIPE_LIMIT
    assert exc_info.value.reset_at == datetime(2024, 3, 11, tzinfo=dt_timezone.utc)
    # Retry-After is measured from the same clock as the reset instant
    assert exc_info.value.wait == 12 * 60 * 60
    assert not SwipeAction.objects.filter(actor=actor, target=extra_target).exists()

    # Next UTC day the quota is fresh again
    result = SwipeService.record_action(actor.id, extra_target.id, 'like', now=NOON + timedelta(days=1))
    assert result['success'] is True


def test_quota_error_wait_uses_given_clock():
    error = QuotaExceeded(limit=5, reset_at=QuotaService.next_reset(NOON), now=NOON)
    assert error.wait == 12 * 60 * 60
    assert error.limit == 5
