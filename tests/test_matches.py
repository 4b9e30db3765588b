import uuid
from datetime import timedelta

import pytest
from django.utils import timezone

from apps.common.exceptions import NotFound, Forbidden
from apps.matching.models import Match
from apps.matching.services import SwipeService
from apps.users.models import ProfilePhoto

pytestmark = pytest.mark.django_db


@pytest.fixture
def matched_pair(make_user):
    a = make_user(display_name='Alex', age=29, gender='female', bio='Hi there')
    b = make_user(display_name='Blair', age=31, gender='male')
    SwipeService.record_action(a.id, b.id, 'like')
    result = SwipeService.record_action(b.id, a.id, 'like')
    return a, b, Match.objects.get(uuid=result['match_id'])


def test_match_details_for_each_participant(matched_pair):
    a, b, match = matched_pair

    details = SwipeService.get_match_details(match.uuid, a.id)

    assert details['id'] == match.uuid
    assert details['matched_with']['id'] == b.id
    assert details['matched_with']['display_name'] == 'Blair'
    assert details['matched_with']['age'] == 31
    assert details['matched_with']['primary_photo'] is None

    assert SwipeService.get_match_details(str(match.uuid), b.id)['matched_with']['bio'] == 'Hi there'


def test_match_details_include_primary_photo(matched_pair):
    a, b, match = matched_pair
    profile = b.profile
    ProfilePhoto.objects.create(profile=profile, url='https://cdn.example.com/first.jpg')
    ProfilePhoto.objects.create(profile=profile, url='https://cdn.example.com/second.jpg')

    details = SwipeService.get_match_details(match.uuid, a.id)

    assert details['matched_with']['primary_photo'] == 'https://cdn.example.com/first.jpg'


def test_outsider_cannot_view_match(matched_pair, make_user):
    _, _, match = matched_pair
    outsider = make_user()

    with pytest.raises(Forbidden):
        SwipeService.get_match_details(match.uuid, outsider.id)


def test_unknown_match(make_user):
    user = make_user()
    with pytest.raises(NotFound):
        SwipeService.get_match_details(uuid.uuid4(), user.id)
    with pytest.raises(NotFound):
        SwipeService.get_match_details('garbage', user.id)


def test_list_matches_most_recent_interaction_first(make_user):
    me = make_user()
    quiet, busy, fresh = make_user(display_name='Quiet'), make_user(display_name='Busy'), make_user(display_name='Fresh')
    now = timezone.now()

    Match.objects.create(user1_id=me.id, user2_id=quiet.id, created_at=now - timedelta(days=3),
                         last_interaction_at=now - timedelta(days=3))
    Match.objects.create(user1_id=me.id, user2_id=busy.id, created_at=now - timedelta(days=5),
                         last_interaction_at=now - timedelta(minutes=5))
    Match.objects.create(user1_id=me.id, user2_id=fresh.id, created_at=now - timedelta(days=1))

    summaries = SwipeService.list_matches(me.id)

    assert [s['matched_with_name'] for s in summaries] == ['Busy', 'Quiet', 'Fresh']
    assert all(s['matched_with_id'] != me.id for s in summaries)


def test_list_matches_only_returns_own_matches(matched_pair, make_user):
    a, b, _ = matched_pair
    loner = make_user()

    assert len(SwipeService.list_matches(a.id)) == 1
    assert SwipeService.list_matches(b.id)[0]['matched_with_name'] == 'Alex'
    assert SwipeService.list_matches(loner.id) == []
