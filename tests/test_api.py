import uuid

import pytest

from apps.matching.models import Match
from apps.matching.services import SwipeService

from .conftest import NEW_YORK, MIDTOWN

pytestmark = pytest.mark.django_db


def test_requires_authentication(api_client):
    response = api_client.get('/api/matches/')
    assert response.status_code == 401
    assert response.data['code'] == 'not_authenticated'


def test_register_and_login(api_client):
    response = api_client.post('/api/auth/register/', {
        'username': 'jordan',
        'email': 'jordan@example.com',
        'password': 'Str0ng-passw0rd!',
        'password_confirm': 'Str0ng-passw0rd!',
    }, format='json')

    assert response.status_code == 201
    assert response.data['token']
    assert response.data['user']['profile']['status'] == 'active'

    response = api_client.post('/api/auth/login/', {
        'email': 'jordan@example.com',
        'password': 'Str0ng-passw0rd!',
    }, format='json')
    assert response.status_code == 200


def test_swipe_created(make_user, auth_client):
    actor, target = make_user(), make_user()

    response = auth_client(actor).post('/api/swipes/', {'target_id': str(target.id), 'direction': 'like'}, format='json')

    assert response.status_code == 201
    assert response.data['swipe']['match_created'] is False
    assert response.data['swipe']['message'] == 'Swiped like'


def test_swipe_errors(make_user, auth_client):
    actor, target = make_user(), make_user()
    client = auth_client(actor)

    response = client.post('/api/swipes/', {'target_id': str(actor.id), 'direction': 'like'}, format='json')
    assert response.status_code == 400
    assert response.data['code'] == 'invalid_target'

    response = client.post('/api/swipes/', {'target_id': str(uuid.uuid4()), 'direction': 'like'}, format='json')
    assert response.status_code == 400
    assert response.data['code'] == 'not_found'

    response = client.post('/api/swipes/', {'target_id': str(target.id), 'direction': 'maybe'}, format='json')
    assert response.status_code == 400
    assert response.data['code'] == 'invalid'
    assert 'direction' in response.data['details']

    client.post('/api/swipes/', {'target_id': str(target.id), 'direction': 'pass'}, format='json')
    response = client.post('/api/swipes/', {'target_id': str(target.id), 'direction': 'like'}, format='json')
    assert response.status_code == 409
    assert response.data['code'] == 'duplicate_action'


def test_quota_exceeded_response(make_user, auth_client, monkeypatch):
    monkeypatch.setattr('apps.matching.services.DAILY_SWIPE_LIMIT', 1)
    actor = make_user()
    client = auth_client(actor)

    client.post('/api/swipes/', {'target_id': str(make_user().id), 'direction': 'like'}, format='json')
    response = client.post('/api/swipes/', {'target_id': str(make_user().id), 'direction': 'like'}, format='json')

    assert response.status_code == 429
    assert response.data['code'] == 'quota_exceeded'
    assert response.data['limit'] == 1
    assert response.data['retry_after'] == 'midnight UTC'
    assert 'reset_at' in response.data
    assert int(response['Retry-After']) > 0


def test_swipe_status(make_user, auth_client):
    actor = make_user()
    SwipeService.record_action(actor.id, make_user().id, 'pass')

    response = auth_client(actor).get('/api/swipes/status/')

    assert response.status_code == 200
    assert response.data['stats']['total_swipes_today'] == 1
    assert response.data['stats']['swipes_remaining'] == 99


def test_discovery_feed(make_user, auth_client):
    viewer = make_user(location=NEW_YORK)
    candidate = make_user(location=MIDTOWN)

    response = auth_client(viewer).get('/api/discovery/profiles/', {'limit': 10})

    assert response.status_code == 200
    assert [p['user_id'] for p in response.data['profiles']] == [str(candidate.id)]
    assert response.data['profiles'][0]['distance'] == 3.4
    assert response.data['pagination'] == {'has_more': False, 'total': 1, 'limit': 10, 'offset': 0}


def test_discovery_requires_location(make_user, auth_client):
    response = auth_client(make_user()).get('/api/discovery/profiles/')
    assert response.status_code == 400
    assert response.data['code'] == 'location_required'


def test_discovery_rejects_bad_query(make_user, auth_client):
    response = auth_client(make_user(location=NEW_YORK)).get('/api/discovery/profiles/', {'limit': 0})
    assert response.status_code == 400
    assert 'limit' in response.data['details']


def test_match_endpoints(make_user, auth_client):
    a, b, outsider = make_user(), make_user(), make_user()
    SwipeService.record_action(a.id, b.id, 'like')
    match_id = SwipeService.record_action(b.id, a.id, 'like')['match_id']

    client = auth_client(a)
    response = client.get('/api/matches/')
    assert response.status_code == 200
    assert response.data['total'] == 1
    assert response.data['matches'][0]['matched_with_id'] == str(b.id)

    response = client.get(f'/api/matches/{match_id}/')
    assert response.status_code == 200
    assert response.data['match']['matched_with']['id'] == str(b.id)

    response = client.get(f'/api/matches/{uuid.uuid4()}/')
    assert response.status_code == 404
    assert response.data['code'] == 'not_found'

    response = auth_client(outsider).get(f'/api/matches/{match_id}/')
    assert response.status_code == 403
    assert response.data['code'] == 'forbidden'


def test_message_endpoints(make_user, auth_client):
    a, b = make_user(), make_user()
    SwipeService.record_action(a.id, b.id, 'like')
    match_id = SwipeService.record_action(b.id, a.id, 'like')['match_id']
    client = auth_client(a)
    url = f'/api/matches/{match_id}/messages/'

    response = client.post(url, {'content': '  Coffee this weekend?  '}, format='json')
    assert response.status_code == 201
    assert response.data['message']['content'] == 'Coffee this weekend?'
    assert response.data['message']['match_id'] == str(match_id)
    assert response.data['message']['sender_id'] == str(a.id)

    response = client.post(url, {'content': '   '}, format='json')
    assert response.status_code == 400
    assert response.data['code'] == 'invalid_content'

    response = client.get(url)
    assert response.status_code == 200
    assert [m['content'] for m in response.data['messages']] == ['Coffee this weekend?']

    assert Match.objects.get(uuid=match_id).last_interaction_at is not None


def test_profile_update_and_location(make_user, make_hobby, auth_client):
    hiking = make_hobby('Hiking')
    client = auth_client(make_user())

    response = client.patch('/api/profile/update/', {'display_name': 'Robin', 'hobbies': [hiking.id]}, format='json')
    assert response.status_code == 200
    assert response.data['profile']['display_name'] == 'Robin'
    assert [h['name'] for h in response.data['profile']['hobbies']] == ['Hiking']

    response = client.post('/api/profile/location/', {'lat': NEW_YORK[0], 'lng': NEW_YORK[1]}, format='json')
    assert response.status_code == 200
    assert response.data['profile']['has_location'] is True

    response = client.get('/api/discovery/preferences/')
    assert response.data['preferences'] == {'radius_preference': 25, 'has_location': True}


def test_device_token_registration(make_user, auth_client):
    client = auth_client(make_user())
    payload = {'token': 'ExponentPushToken[abc]', 'platform': 'ios', 'device_type': 'iPhone 13'}

    assert client.post('/api/device-tokens/register/', payload, format='json').status_code == 201
    assert client.post('/api/device-tokens/register/', payload, format='json').status_code == 200
