from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from apps.matching.services import SwipeService, DiscoveryService
from apps.messaging.services import MessageService
from apps.messaging.serializers import MatchMessageSerializer, MatchMessageCreateSerializer
from .serializers import (
    SwipeSerializer, SwipeResultSerializer, SwipeStatsSerializer,
    DiscoveryQuerySerializer, DiscoveryProfileSerializer,
    MatchSummarySerializer, MatchDetailSerializer
)


# ============================================================================
# SWIPE VIEWSET
# ============================================================================
class SwipeViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]

    def create(self, request):
        """
        Record a swipe action (like or pass).

        POST /api/swipes/
        Body: {"target_id": "user_uuid", "direction": "like" | "pass"}
        """
        serializer = SwipeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = SwipeService.record_action(
            actor_id=request.user.id,
            target_id=serializer.validated_data['target_id'],
            direction=serializer.validated_data['direction']
        )

        return Response({
            'swipe': SwipeResultSerializer(result).data
        }, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=['get'], url_path='status')
    def swipe_status(self, request):
        """
        Swipe statistics for the current UTC day.
        """
        stats = SwipeService.get_stats(request.user.id)
        return Response({
            'stats': SwipeStatsSerializer(stats).data
        }, status=status.HTTP_200_OK)


# ============================================================================
# DISCOVERY VIEWSET
# ============================================================================
class DiscoveryViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]

    @action(detail=False, methods=['get'])
    def profiles(self, request):
        """
        Get nearby profiles for the discovery feed.

        Query params:
        - limit (1-50, default 20), offset (default 0)
        - radius (1-500 miles, defaults to the stored preference)
        - gender_preference, min_age, max_age, same_city
        """
        serializer = DiscoveryQuerySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        query = serializer.validated_data

        result = DiscoveryService.get_nearby_profiles(request.user.id, query)

        return Response({
            'profiles': DiscoveryProfileSerializer(result['profiles'], many=True).data,
            'pagination': {
                'has_more': result['has_more'],
                'total': result['total'],
                'limit': query['limit'],
                'offset': query['offset'],
            },
        }, status=status.HTTP_200_OK)

    @action(detail=False, methods=['get'])
    def preferences(self, request):
        return Response({
            'preferences': DiscoveryService.get_preferences(request.user.id)
        }, status=status.HTTP_200_OK)


# ============================================================================
# MATCH VIEWSET
# ============================================================================
class MatchViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]

    def list(self, request):
        matches = SwipeService.list_matches(request.user.id)
        return Response({
            'matches': MatchSummarySerializer(matches, many=True).data,
            'total': len(matches),
        })

    def retrieve(self, request, pk=None):
        detail = SwipeService.get_match_details(pk, request.user.id)
        return Response({
            'match': MatchDetailSerializer(detail).data
        })

    @action(detail=True, methods=['get', 'post'])
    def messages(self, request, pk=None):
        """
        GET  /api/matches/{id}/messages/ - conversation, oldest first
        POST /api/matches/{id}/messages/ - Body: {"content": "..."}
        """
        if request.method == 'POST':
            serializer = MatchMessageCreateSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            message = MessageService.post_message(
                match_id=pk,
                sender_id=request.user.id,
                content=serializer.validated_data['content']
            )
            return Response({
                'message': MatchMessageSerializer(message).data
            }, status=status.HTTP_201_CREATED)

        messages = MessageService.list_messages(pk, request.user.id)
        return Response({
            'messages': MatchMessageSerializer(messages, many=True).data
        })
