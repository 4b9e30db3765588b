import itertools

import pytest
from rest_framework.test import APIClient

from apps.users.models import User, Profile, Hobby, ProfileHobby

NEW_YORK = (40.7128, -74.0060)
MIDTOWN = (40.7589, -73.9851)

_sequence = itertools.count(1)


@pytest.fixture
def make_user(db):
    """
    Factory for a user with a profile.

    Profile attributes are passed as keyword arguments; `location` is a
    (lat, lng) tuple and `hobbies` a list of Hobby instances.
    """
    def factory(location=None, hobbies=None, **profile_fields):
        n = next(_sequence)
        user = User.objects.create_user(
            email=f'user{n}@example.com',
            username=f'user{n}',
            password='testpassword123',
        )
        if location is not None:
            profile_fields['location_lat'], profile_fields['location_lng'] = location
        profile_fields.setdefault('display_name', f'User {n}')
        profile = Profile.objects.create(user=user, **profile_fields)
        for hobby in hobbies or []:
            ProfileHobby.objects.create(profile=profile, hobby=hobby)
        return user

    return factory


@pytest.fixture
def make_hobby(db):
    def factory(name, category='General'):
        return Hobby.objects.create(name=name, category=category, description=f'{name} fans')
    return factory


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def auth_client(api_client):
    """APIClient authenticated as the given user."""
    def factory(user):
        api_client.force_authenticate(user=user)
        return api_client
    return factory
