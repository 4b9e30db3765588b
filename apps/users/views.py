"""
User Views
===========
Handles:
- Authentication (register, login, logout, me)
- Profile management (read, update, location, photos)
- Hobby taxonomy
- Device token registration for push notifications
"""

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.authtoken.models import Token
from django.contrib.auth import login, logout

from .models import DeviceToken
from .serializers import (
    UserRegistrationSerializer, UserLoginSerializer, UserSerializer,
    ProfileSerializer, ProfileUpdateSerializer, ProfileLocationSerializer,
    ProfilePhotoCreateSerializer, ProfilePhotoSerializer,
    HobbySerializer, DeviceTokenSerializer
)
from .services import ProfileService


# ============================================================================
# AUTH VIEWSET
# ============================================================================
class AuthViewSet(viewsets.GenericViewSet):
    """
    ViewSet for authentication operations.

    Endpoints:
    - POST /api/auth/register/ - Register new user
    - POST /api/auth/login/ - Login user
    - POST /api/auth/logout/ - Logout user
    - GET /api/auth/me/ - Get current user info
    """

    permission_classes = [AllowAny]
    serializer_class = UserLoginSerializer

    def get_serializer_class(self):
        """
        Return different serializers depending on the current action.
        """
        if self.action == 'register':
            return UserRegistrationSerializer
        elif self.action == 'login':
            return UserLoginSerializer
        return UserSerializer

    @action(detail=False, methods=['post'])
    def register(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        token, _ = Token.objects.get_or_create(user=user)
        login(request, user)

        return Response({
            'message': 'User registered successfully.',
            'user': UserSerializer(user, context={'request': request}).data,
            'token': token.key
        }, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=['post'])
    def login(self, request):
        serializer = self.get_serializer(data=request.data, context={'request': request})
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data['user']
        token, _ = Token.objects.get_or_create(user=user)
        login(request, user)

        return Response({
            'message': 'User logged in successfully.',
            'user': UserSerializer(user, context={'request': request}).data,
            'token': token.key
        }, status=status.HTTP_200_OK)

    @action(detail=False, methods=['post'], permission_classes=[IsAuthenticated])
    def logout(self, request):
        Token.objects.filter(user=request.user).delete()
        logout(request)
        return Response({'message': 'User logged out successfully.'}, status=status.HTTP_200_OK)

    @action(detail=False, methods=['get'], permission_classes=[IsAuthenticated])
    def me(self, request):
        ProfileService.get_or_create_profile(request.user.id)
        return Response({
            'user': UserSerializer(request.user, context={'request': request}).data
        }, status=status.HTTP_200_OK)


# ============================================================================
# PROFILE VIEWSET
# ============================================================================
class ProfileViewSet(viewsets.GenericViewSet):
    """
    Manage the authenticated user's profile.
    - View, update, set location, add photo.
    """
    permission_classes = [IsAuthenticated]

    def get_object(self):
        """
        Get or create the profile for the current user.
        """
        return ProfileService.get_or_create_profile(self.request.user.id)

    @action(detail=False, methods=['get'])
    def me(self, request):
        """
        Get current user's profile.
        """
        profile = self.get_object()
        return Response({
            'profile': ProfileSerializer(profile, context={'request': request}).data
        }, status=status.HTTP_200_OK)

    @action(detail=False, methods=['put', 'patch'], url_path='update')
    def update_profile(self, request):
        """
        Update user's profile details.
        """
        serializer = ProfileUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        profile = ProfileService.update_profile(request.user.id, serializer.validated_data)

        return Response({
            "message": "Profile updated successfully",
            "profile": ProfileSerializer(profile, context={'request': request}).data
        }, status=status.HTTP_200_OK)

    @action(detail=False, methods=['post'])
    def location(self, request):
        """
        Update user's coordinates.

        POST /api/profile/location/
        Body: {"lat": 40.71, "lng": -74.0}
        """
        serializer = ProfileLocationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        profile = ProfileService.update_location(
            request.user.id,
            serializer.validated_data['lat'],
            serializer.validated_data['lng'],
        )

        return Response({
            "message": "Location updated successfully",
            "profile": ProfileSerializer(profile, context={'request': request}).data
        }, status=status.HTTP_200_OK)

    @action(detail=False, methods=['post'])
    def add_photo(self, request):
        """
        Attach a photo URL to the user's profile.
        """
        profile = self.get_object()
        serializer = ProfilePhotoCreateSerializer(
            data=request.data,
            context={'request': request, 'profile': profile}
        )
        serializer.is_valid(raise_exception=True)
        photo = ProfileService.add_photo(request.user.id, **serializer.validated_data)

        return Response({
            "message": "Photo added successfully",
            "photo": ProfilePhotoSerializer(photo).data
        }, status=status.HTTP_201_CREATED)


# ============================================================================
# HOBBY VIEWSET (Read-only)
# ============================================================================
class HobbyViewSet(viewsets.ViewSet):
    """
    List available hobbies, optionally filtered by ?category=.
    """
    permission_classes = [IsAuthenticated]

    def list(self, request):
        hobbies = ProfileService.list_hobbies(request.query_params.get('category'))
        return Response({
            'hobbies': HobbySerializer(hobbies, many=True).data
        })


#======= Push notification device tokens
class DeviceTokenViewSet(viewsets.ViewSet):
    """
    Manage device tokens for push notifications.
    """
    permission_classes = [IsAuthenticated]

    @action(detail=False, methods=['post'])
    def register(self, request):
        """
        Register or update device token.

        POST /api/device-tokens/register/
        Body: {
            "token": "ExponentPushToken[xxx]",
            "platform": "ios" or "android",
            "device_type": "iPhone 13"
        }
        """
        serializer = DeviceTokenSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        device_token, created = DeviceToken.objects.update_or_create(
            user=request.user,
            token=data['token'],
            defaults={
                'platform': data['platform'],
                'device_type': data.get('device_type', ''),
                'is_active': True
            }
        )

        return Response({
            'message': 'Token registered successfully',
            'created': created
        }, status=status.HTTP_201_CREATED if created else status.HTTP_200_OK)
