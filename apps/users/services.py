"""
Profile Service Layer
======================
Profile repository used by the matching core:
- Lazy profile creation with defaults
- Partial updates, including the hobby set
- Location updates
- Candidate listing for discovery
- Hobby taxonomy lookups
"""

from django.db import transaction
from rest_framework.exceptions import ValidationError
import logging

from .models import User, Profile, Hobby, ProfileHobby, ProfilePhoto

logger = logging.getLogger(__name__)


class ProfileService:

    @staticmethod
    def user_exists(user_id):
        return User.objects.filter(id=user_id).exists()

    @staticmethod
    def get_or_create_profile(user_id):
        """
        Get the profile for a user, creating it with defaults
        (status=active, radius_preference=25) if absent.
        """
        profile, created = Profile.objects.get_or_create(
            user_id=user_id,
            defaults={
                'status': 'active',
                'radius_preference': Profile.DEFAULT_RADIUS_MILES,
            }
        )
        if created:
            logger.debug(f"Created default profile for user {user_id}")
        return profile

    @staticmethod
    @transaction.atomic
    def update_profile(user_id, fields):
        """
        Apply already-validated partial fields to the user's profile.

        Args:
            user_id: Owner of the profile
            fields: dict of profile attributes; an optional 'hobbies' key holds
                    hobby ids and replaces the whole hobby set

        Returns:
            Profile: The updated profile

        Raises:
            ValidationError: If any hobby id does not exist
        """
        fields = dict(fields)
        hobby_ids = fields.pop('hobbies', None)

        profile = ProfileService.get_or_create_profile(user_id)
        for attr, value in fields.items():
            setattr(profile, attr, value)
        profile.save()

        if hobby_ids is not None:
            hobby_ids = list(dict.fromkeys(hobby_ids))
            hobbies = list(Hobby.objects.filter(id__in=hobby_ids))
            if len(hobbies) != len(hobby_ids):
                raise ValidationError({'hobbies': 'One or more hobby IDs are invalid'})

            ProfileHobby.objects.filter(profile=profile).delete()
            ProfileHobby.objects.bulk_create([
                ProfileHobby(profile=profile, hobby=hobby) for hobby in hobbies
            ])

        return profile

    @staticmethod
    def update_location(user_id, lat, lng):
        profile = ProfileService.get_or_create_profile(user_id)
        profile.location_lat = lat
        profile.location_lng = lng
        profile.save(update_fields=['location_lat', 'location_lng', 'updated_at'])
        return profile

    @staticmethod
    def add_photo(user_id, url, is_primary=False):
        profile = ProfileService.get_or_create_profile(user_id)
        return ProfilePhoto.objects.create(profile=profile, url=url, is_primary=is_primary)

    @staticmethod
    def list_active_profiles_with_location(excluding):
        """
        Active profiles that have coordinates, minus the given user ids.

        Hobbies and photos are prefetched since discovery reads both for
        every candidate.
        """
        return (
            Profile.objects.filter(
                status='active',
                location_lat__isnull=False,
                location_lng__isnull=False,
            )
            .exclude(user_id__in=list(excluding))
            .order_by('user_id')
            .select_related('user')
            .prefetch_related('hobbies', 'photos')
        )

    @staticmethod
    def list_hobbies(category=None):
        if category:
            return Hobby.objects.filter(category=category).order_by('name')
        return Hobby.objects.order_by('category', 'name')
