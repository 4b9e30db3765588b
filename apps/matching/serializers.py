"""
Matching Serializers
=====================
Request validation for swipes and discovery queries, plus response shapes
for the service layer's plain dict results.
"""

from rest_framework import serializers

from apps.users.models import Profile
from .models import SwipeAction


# ============================================================================
# REQUEST SERIALIZERS
# ============================================================================

class SwipeSerializer(serializers.Serializer):
    target_id = serializers.UUIDField(required=True)
    direction = serializers.ChoiceField(
        choices=SwipeAction.ACTION_TYPES,
        error_messages={'invalid_choice': 'Direction must be either "like" or "pass"'}
    )


class DiscoveryQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(min_value=1, max_value=50, default=20)
    offset = serializers.IntegerField(min_value=0, default=0)
    # Overrides the user's stored radius preference
    radius = serializers.IntegerField(min_value=1, max_value=500, required=False)
    gender_preference = serializers.ChoiceField(choices=Profile.GENDER_CHOICES, required=False)
    min_age = serializers.IntegerField(min_value=18, max_value=120, required=False)
    max_age = serializers.IntegerField(min_value=18, max_value=120, required=False)
    same_city = serializers.BooleanField(default=False)


# ============================================================================
# RESPONSE SERIALIZERS
# ============================================================================

class SwipeResultSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    action_id = serializers.UUIDField()
    match_created = serializers.BooleanField()
    match_id = serializers.UUIDField(allow_null=True)
    message = serializers.CharField()


class SwipeStatsSerializer(serializers.Serializer):
    total_swipes_today = serializers.IntegerField(source='count_today')
    swipes_remaining = serializers.IntegerField(source='remaining')
    reset_time = serializers.DateTimeField(source='reset_at')


class SharedHobbySerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    description = serializers.CharField(allow_null=True)
    category = serializers.CharField(allow_null=True)


class FeedPhotoSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    url = serializers.CharField()
    is_primary = serializers.BooleanField()


class DiscoveryProfileSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    display_name = serializers.CharField(allow_null=True)
    age = serializers.IntegerField(allow_null=True)
    gender = serializers.CharField(allow_null=True)
    pronouns = serializers.CharField(allow_null=True)
    bio = serializers.CharField(allow_null=True)
    status = serializers.CharField()
    location_lat = serializers.FloatField()
    location_lng = serializers.FloatField()
    distance = serializers.FloatField(allow_null=True)
    shared_hobbies = SharedHobbySerializer(many=True)
    photos = FeedPhotoSerializer(many=True)


class MatchSummarySerializer(serializers.Serializer):
    id = serializers.UUIDField()
    matched_with_id = serializers.UUIDField()
    matched_with_name = serializers.CharField(allow_null=True)
    created_at = serializers.DateTimeField()
    last_interaction_at = serializers.DateTimeField(allow_null=True)


class MatchedUserSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    display_name = serializers.CharField(allow_null=True)
    age = serializers.IntegerField(allow_null=True)
    gender = serializers.CharField(allow_null=True)
    bio = serializers.CharField(allow_null=True)
    primary_photo = serializers.CharField(allow_null=True)


class MatchDetailSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    matched_with = MatchedUserSerializer()
    created_at = serializers.DateTimeField()
    last_interaction_at = serializers.DateTimeField(allow_null=True)
