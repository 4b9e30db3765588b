from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import SwipeViewSet, DiscoveryViewSet, MatchViewSet


router = DefaultRouter()
router.register(r'swipes', SwipeViewSet, basename='swipes')
router.register(r'discovery', DiscoveryViewSet, basename='discovery')
router.register(r'matches', MatchViewSet, basename='matches')


urlpatterns = [
    path('', include(router.urls)),
]
