import pytest
from django.core.management import call_command
from rest_framework.exceptions import ValidationError

from apps.users.models import User, Profile, Hobby, ProfileHobby, ProfilePhoto
from apps.users.serializers import ProfileLocationSerializer
from apps.users.services import ProfileService

from .conftest import NEW_YORK

pytestmark = pytest.mark.django_db


def test_get_or_create_profile_defaults():
    user = User.objects.create_user(email='new@example.com', username='new', password='x')

    profile = ProfileService.get_or_create_profile(user.id)

    assert profile.status == 'active'
    assert profile.radius_preference == 25
    assert profile.has_location is False
    assert ProfileService.get_or_create_profile(user.id).pk == profile.pk


def test_update_profile_fields_and_hobbies(make_user, make_hobby):
    hiking, cooking, chess = make_hobby('Hiking'), make_hobby('Cooking'), make_hobby('Chess')
    user = make_user(hobbies=[chess])

    profile = ProfileService.update_profile(user.id, {
        'display_name': 'Sam',
        'age': 33,
        'hobbies': [hiking.id, cooking.id],
    })

    assert profile.display_name == 'Sam'
    assert profile.age == 33
    assert set(profile.hobbies.values_list('name', flat=True)) == {'Hiking', 'Cooking'}


def test_update_without_hobbies_keeps_them(make_user, make_hobby):
    chess = make_hobby('Chess')
    user = make_user(hobbies=[chess])

    profile = ProfileService.update_profile(user.id, {'bio': 'Opening theory nerd'})

    assert list(profile.hobbies.all()) == [chess]


def test_unknown_hobby_rolls_back_the_update(make_user, make_hobby):
    chess = make_hobby('Chess')
    user = make_user(display_name='Before', hobbies=[chess])

    with pytest.raises(ValidationError):
        ProfileService.update_profile(user.id, {'display_name': 'After', 'hobbies': [chess.id, 99999]})

    profile = Profile.objects.get(user=user)
    assert profile.display_name == 'Before'
    assert list(profile.hobbies.all()) == [chess]


def test_update_location(make_user):
    user = make_user()
    profile = ProfileService.update_location(user.id, *NEW_YORK)
    assert profile.has_location
    assert (profile.location_lat, profile.location_lng) == NEW_YORK


def test_first_photo_becomes_primary(make_user):
    user = make_user()
    first = ProfileService.add_photo(user.id, 'https://cdn.example.com/1.jpg')
    second = ProfileService.add_photo(user.id, 'https://cdn.example.com/2.jpg')

    assert ProfilePhoto.objects.get(pk=first.pk).is_primary is True
    assert ProfilePhoto.objects.get(pk=second.pk).is_primary is False
    assert user.profile.primary_photo == first


def test_list_hobbies_by_category(make_hobby):
    make_hobby('Hiking', category='Outdoors')
    make_hobby('Chess', category='Games')

    assert [h.name for h in ProfileService.list_hobbies('Games')] == ['Chess']
    assert len(ProfileService.list_hobbies()) == 2


def test_create_hobbies_command_is_idempotent():
    call_command('create_hobbies')
    count = Hobby.objects.count()
    call_command('create_hobbies')

    assert count > 0
    assert Hobby.objects.count() == count


def test_create_fake_users_command():
    call_command('create_hobbies')
    call_command('create_fake_users', count=3, lat=NEW_YORK[0], lng=NEW_YORK[1], spread=0.1)

    profiles = Profile.objects.all()
    assert profiles.count() == 3
    assert all(p.has_location and p.hobbies.exists() for p in profiles)


def test_create_fake_users_leaves_no_partial_users(monkeypatch):
    call_command('create_hobbies')

    def failing_bulk_create(*args, **kwargs):
        raise RuntimeError('hobby insert failed')

    monkeypatch.setattr(ProfileHobby.objects, 'bulk_create', failing_bulk_create)

    call_command('create_fake_users', count=2)

    assert User.objects.count() == 0
    assert Profile.objects.count() == 0


def test_location_input_is_just_coordinates():
    serializer = ProfileLocationSerializer(data={'lat': NEW_YORK[0], 'lng': NEW_YORK[1], 'manual_entry': True})
    assert serializer.is_valid()
    assert serializer.validated_data == {'lat': NEW_YORK[0], 'lng': NEW_YORK[1]}
