"""
User & Profile Serializers
===========================
- Separate read/write serializers for profiles
- Request validation for profile, location, photo and device token input
"""

from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password
from django.contrib.auth import authenticate

from .models import User, Profile, ProfilePhoto, Hobby, DeviceToken


# ============================================================================
# AUTHENTICATION SERIALIZERS
# ============================================================================

class UserRegistrationSerializer(serializers.ModelSerializer):
    """
    Serializer for minimal user registration.
    Profile details are collected after authentication.
    """
    password = serializers.CharField(
        write_only=True,
        required=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    password_confirm = serializers.CharField(
        write_only=True,
        required=True,
        style={'input_type': 'password'}
    )

    class Meta:
        model = User
        fields = ['username', 'email', 'password', 'password_confirm']
        extra_kwargs = {'email': {'required': True}}

    def validate(self, attrs):
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError({
                'password_confirm': 'Passwords do not match.'
            })
        return attrs

    def create(self, validated_data):
        validated_data.pop('password_confirm')
        user = User.objects.create_user(
            username=validated_data['username'],
            email=validated_data['email'],
            password=validated_data['password']
        )
        Profile.objects.create(user=user)
        return user


class UserLoginSerializer(serializers.Serializer):
    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )

    def validate(self, attrs):
        """
        Validate credentials and authenticate user.
        """
        user = authenticate(
            request=self.context.get('request'),
            email=attrs['email'],
            password=attrs['password']
        )
        if not user:
            raise serializers.ValidationError(
                'Unable to login with provided credentials.',
                code='authorization'
            )
        attrs['user'] = user
        return attrs


# ============================================================================
# PROFILE SERIALIZERS
# ============================================================================

class ProfilePhotoSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProfilePhoto
        fields = ['id', 'url', 'is_primary', 'uploaded_at']
        read_only_fields = ['id', 'uploaded_at']


class HobbySerializer(serializers.ModelSerializer):
    class Meta:
        model = Hobby
        fields = ['id', 'name', 'description', 'category']
        read_only_fields = fields


class ProfileSerializer(serializers.ModelSerializer):
    """
    Read serializer for Profile model.
    """
    user_id = serializers.UUIDField(read_only=True)
    hobbies = HobbySerializer(many=True, read_only=True)
    photos = ProfilePhotoSerializer(many=True, read_only=True)
    has_location = serializers.BooleanField(read_only=True)

    class Meta:
        model = Profile
        fields = [
            'user_id', 'display_name', 'age', 'gender', 'pronouns', 'bio', 'status',
            'location_lat', 'location_lng', 'has_location', 'radius_preference',
            'hobbies', 'photos', 'created_at', 'updated_at'
        ]
        read_only_fields = fields


class ProfileUpdateSerializer(serializers.Serializer):
    """
    Write serializer for partial profile updates.
    Design Pattern: Separate write serializer; persistence is left to ProfileService.
    """
    display_name = serializers.CharField(min_length=1, max_length=50, required=False)
    age = serializers.IntegerField(min_value=18, max_value=120, required=False)
    gender = serializers.ChoiceField(choices=Profile.GENDER_CHOICES, required=False)
    pronouns = serializers.CharField(max_length=50, required=False, allow_blank=True)
    bio = serializers.CharField(max_length=500, required=False, allow_blank=True, trim_whitespace=False)
    status = serializers.ChoiceField(choices=Profile.STATUS_CHOICES, required=False)
    location_lat = serializers.FloatField(min_value=-90, max_value=90, required=False)
    location_lng = serializers.FloatField(min_value=-180, max_value=180, required=False)
    radius_preference = serializers.IntegerField(min_value=1, max_value=500, required=False)
    hobbies = serializers.ListField(child=serializers.IntegerField(), required=False)


class ProfileLocationSerializer(serializers.Serializer):
    lat = serializers.FloatField(min_value=-90, max_value=90)
    lng = serializers.FloatField(min_value=-180, max_value=180)


class ProfilePhotoCreateSerializer(serializers.Serializer):
    url = serializers.URLField(max_length=500)
    is_primary = serializers.BooleanField(default=False)

    def validate(self, attrs):
        """
        Enforce the per-profile photo cap.
        """
        from django.conf import settings
        profile = self.context['profile']
        max_photos = getattr(settings, 'MAX_PROFILE_PHOTOS', 6)
        if profile.photos.count() >= max_photos:
            raise serializers.ValidationError(
                f'You can only upload up to {max_photos} photos.'
            )
        return attrs


class UserSerializer(serializers.ModelSerializer):
    """
    Read serializer for User model including profile data.
    """
    profile = ProfileSerializer(read_only=True)

    class Meta:
        model = User
        fields = ['id', 'username', 'email', 'first_name', 'last_name', 'profile']
        read_only_fields = ['id']


class DeviceTokenSerializer(serializers.ModelSerializer):
    class Meta:
        model = DeviceToken
        fields = ['token', 'platform', 'device_type']
        extra_kwargs = {'device_type': {'required': False}}
        # (user, token) uniqueness is handled with update_or_create in the view
        validators = []
