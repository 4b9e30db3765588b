"""
Matching Service Layer
=======================
- QuotaService: daily swipe counts per UTC calendar day
- SwipeService: like/pass recording, mutual-like detection, match access
- DiscoveryService: distance- and preference-filtered, ranked candidate feed

The discovery feed is a full scan over active located profiles:
1. Exclude self and everyone already swiped on
2. Keep candidates within the search radius
3. Apply gender, age and same-city filters
4. Rank by distance, then by number of shared hobbies
"""

from django.db import transaction, IntegrityError
from django.db.models import Q, F
from django.utils import timezone
from datetime import datetime, time, timedelta, timezone as dt_timezone
import logging
import uuid

from apps.common.exceptions import (
    InvalidTarget, TargetNotFound, QuotaExceeded, DuplicateAction,
    NotFound, Forbidden, LocationRequired
)
from apps.users.models import User, Profile
from apps.users.services import ProfileService
from .models import Match, SwipeAction
from .utils.distance import distance_miles

logger = logging.getLogger(__name__)

DAILY_SWIPE_LIMIT = 100

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 50

# Candidates this close count as being in the same city
SAME_CITY_MILES = 10


def _as_uuid(value):
    if isinstance(value, uuid.UUID):
        return value
    return uuid.UUID(str(value))


def _profile_of(user):
    return user.profile if hasattr(user, 'profile') else None


# ============================================================================
# QUOTA SERVICE
# ============================================================================

class QuotaService:
    """
    Read-only view of a user's swipe quota. The day boundary is midnight UTC.
    """

    @staticmethod
    def today_utc(now=None):
        now = now or timezone.now()
        return now.astimezone(dt_timezone.utc).date()

    @staticmethod
    def next_reset(now=None):
        """Midnight UTC at the start of tomorrow."""
        tomorrow = QuotaService.today_utc(now) + timedelta(days=1)
        return datetime.combine(tomorrow, time.min, tzinfo=dt_timezone.utc)

    @staticmethod
    def count_today(user_id, now=None):
        today = QuotaService.today_utc(now)
        return SwipeAction.objects.filter(
            actor_id=user_id,
            action_date__gte=today,
            action_date__lt=today + timedelta(days=1),
        ).count()

    @staticmethod
    def get_stats(user_id, now=None):
        """
        Returns:
            dict: count_today, remaining, reset_at
        """
        count = QuotaService.count_today(user_id, now)
        return {
            'count_today': count,
            'remaining': max(0, DAILY_SWIPE_LIMIT - count),
            'reset_at': QuotaService.next_reset(now),
        }


# ============================================================================
# SWIPE SERVICE
# ============================================================================

class SwipeService:
    """
    Records swipes and turns mutual likes into matches.

    Concurrency: the whole of record_action runs in one transaction with the
    actor's row locked, so two requests from the same actor cannot both pass
    the quota check. The unique constraints on SwipeAction and Match catch
    what the checks miss across different actors.
    """

    @staticmethod
    def record_action(actor_id, target_id, direction, now=None):
        """
        Record a swipe action (like/pass).

        Args:
            actor_id: User performing the swipe
            target_id: User being swiped on
            direction: 'like' or 'pass'
            now: Current instant (defaults to timezone.now())

        Returns:
            dict: success, action_id, match_created, match_id, message

        Raises:
            InvalidTarget, TargetNotFound, QuotaExceeded, DuplicateAction
        """
        if direction not in (SwipeAction.LIKE, SwipeAction.PASS):
            raise ValueError(f"Unknown swipe direction: {direction!r}")

        now = now or timezone.now()
        actor_id = _as_uuid(actor_id)
        try:
            target_id = _as_uuid(target_id)
        except ValueError:
            raise TargetNotFound()

        if actor_id == target_id:
            raise InvalidTarget()

        if not ProfileService.user_exists(target_id):
            raise TargetNotFound()

        with transaction.atomic():
            # Lock both users in id order: serialises the actor's quota check and
            # any concurrent swipe within the same pair
            list(
                User.objects.select_for_update()
                .filter(id__in=[actor_id, target_id])
                .order_by('id')
            )

            stats = QuotaService.get_stats(actor_id, now)
            if stats['count_today'] >= DAILY_SWIPE_LIMIT:
                logger.info(f"Swipe quota reached for {actor_id}")
                raise QuotaExceeded(limit=DAILY_SWIPE_LIMIT, reset_at=stats['reset_at'], now=now)

            if SwipeService.has_acted_on(actor_id, target_id):
                raise DuplicateAction()

            try:
                with transaction.atomic():
                    swipe = SwipeAction.objects.create(
                        actor_id=actor_id,
                        target_id=target_id,
                        direction=direction,
                        action_date=QuotaService.today_utc(now),
                        created_at=now,
                    )
            except IntegrityError:
                logger.warning(f"Concurrent duplicate swipe {actor_id} -> {target_id}")
                raise DuplicateAction()

            logger.debug(f"Swipe recorded: {actor_id} {direction} {target_id}")

            match = None
            if direction == SwipeAction.LIKE:
                match = SwipeService._create_match_if_mutual(actor_id, target_id, now)

        return {
            'success': True,
            'action_id': swipe.uuid,
            'match_created': match is not None,
            'match_id': match.uuid if match else None,
            'message': 'Mutual like! Match created' if match else f'Swiped {direction}',
        }

    @staticmethod
    def _create_match_if_mutual(actor_id, target_id, now):
        """
        Create the pair's match if the target already liked the actor.

        Returns:
            Match or None if not mutual or already matched
        """
        reverse = SwipeAction.objects.filter(actor_id=target_id, target_id=actor_id).first()
        if reverse is None or reverse.direction != SwipeAction.LIKE:
            return None

        if Match.find_by_pair(actor_id, target_id) is not None:
            return None

        user1_id, user2_id = Match.ordered_pair(actor_id, target_id)
        try:
            with transaction.atomic():
                match = Match.objects.create(
                    user1_id=user1_id,
                    user2_id=user2_id,
                    created_at=now,
                    last_interaction_at=now,
                )
        except IntegrityError:
            logger.warning(f"Match {user1_id} <-> {user2_id} already created concurrently")
            return None

        logger.info(f"Mutual match created: {user1_id} <-> {user2_id}")
        return match

    @staticmethod
    def get_stats(user_id, now=None):
        return QuotaService.get_stats(user_id, now)

    @staticmethod
    def has_acted_on(actor_id, target_id):
        return SwipeAction.objects.filter(actor_id=actor_id, target_id=target_id).exists()

    @staticmethod
    def list_target_ids_acted_on_by(actor_id):
        return set(
            SwipeAction.objects.filter(actor_id=actor_id).values_list('target_id', flat=True)
        )

    @staticmethod
    def get_match_for_participant(match_id, user_id):
        """
        Load a match the user takes part in.

        Raises:
            NotFound: No such match
            Forbidden: User is not one of the two participants
        """
        try:
            match_uuid = _as_uuid(match_id)
        except ValueError:
            raise NotFound()

        match = Match.objects.select_related(
            'user1__profile', 'user2__profile'
        ).filter(uuid=match_uuid).first()

        if match is None:
            raise NotFound()

        if not match.is_participant(_as_uuid(user_id)):
            raise Forbidden()

        return match

    @staticmethod
    def list_matches(user_id):
        """
        All matches of the user, most recent interaction first.

        Matches that never had an interaction sort last, newest first among them.
        """
        user_id = _as_uuid(user_id)
        matches = Match.objects.filter(
            Q(user1_id=user_id) | Q(user2_id=user_id)
        ).select_related(
            'user1__profile', 'user2__profile'
        ).order_by(
            F('last_interaction_at').desc(nulls_last=True), '-created_at'
        )

        summaries = []
        for match in matches:
            other = match.get_other_participant(user_id)
            profile = _profile_of(other)
            summaries.append({
                'id': match.uuid,
                'matched_with_id': other.id,
                'matched_with_name': profile.display_name if profile else None,
                'created_at': match.created_at,
                'last_interaction_at': match.last_interaction_at,
            })
        return summaries

    @staticmethod
    def get_match_details(match_id, user_id):
        match = SwipeService.get_match_for_participant(match_id, user_id)
        other = match.get_other_participant(_as_uuid(user_id))
        profile = _profile_of(other)
        primary_photo = profile.primary_photo if profile else None

        return {
            'id': match.uuid,
            'matched_with': {
                'id': other.id,
                'display_name': profile.display_name if profile else None,
                'age': profile.age if profile else None,
                'gender': profile.gender if profile else None,
                'bio': profile.bio if profile else None,
                'primary_photo': primary_photo.url if primary_photo else None,
            },
            'created_at': match.created_at,
            'last_interaction_at': match.last_interaction_at,
        }


# ============================================================================
# DISCOVERY SERVICE
# ============================================================================

class DiscoveryService:

    @staticmethod
    def passes_filters(candidate, distance, radius, query):
        """
        Conjunctive candidate filter: radius AND gender AND age bounds AND same city.
        """
        if distance > radius:
            return False

        gender_preference = query.get('gender_preference')
        if gender_preference and candidate.gender != gender_preference:
            return False

        min_age = query.get('min_age')
        if min_age is not None and (candidate.age is None or candidate.age < min_age):
            return False

        max_age = query.get('max_age')
        if max_age is not None and (candidate.age is None or candidate.age > max_age):
            return False

        if query.get('same_city') and distance > SAME_CITY_MILES:
            return False

        return True

    @staticmethod
    def get_nearby_profiles(user_id, query=None):
        """
        Ranked, paginated discovery feed for a user.

        Args:
            user_id: Requesting user
            query: dict with optional limit, offset, radius, gender_preference,
                   min_age, max_age, same_city

        Returns:
            dict: profiles (current page), has_more, total (after filtering)

        Raises:
            LocationRequired: Requester has no stored coordinates
        """
        query = query or {}
        user_id = _as_uuid(user_id)

        profile = ProfileService.get_or_create_profile(user_id)
        if not profile.has_location:
            raise LocationRequired()

        radius = query.get('radius') or profile.radius_preference or Profile.DEFAULT_RADIUS_MILES
        offset = query.get('offset') or 0
        limit = min(query.get('limit') or DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE)

        excluded = SwipeService.list_target_ids_acted_on_by(user_id)
        excluded.add(user_id)
        user_hobby_ids = set(profile.hobbies.values_list('id', flat=True))

        ranked = []
        for candidate in ProfileService.list_active_profiles_with_location(excluded):
            distance = distance_miles(
                profile.location_lat, profile.location_lng,
                candidate.location_lat, candidate.location_lng
            )
            if not DiscoveryService.passes_filters(candidate, distance, radius, query):
                continue

            shared_hobbies = [h for h in candidate.hobbies.all() if h.id in user_hobby_ids]
            ranked.append((candidate, round(distance, 1), shared_hobbies))

        # Distance ascending, then more shared hobbies first. Unknown distances go last.
        ranked.sort(key=lambda item: (
            item[1] is None,
            item[1] if item[1] is not None else 0,
            -len(item[2]),
        ))

        total = len(ranked)
        page = ranked[offset:offset + limit]

        logger.debug(f"Discovery for {user_id}: {total} candidates, returning {len(page)}")

        return {
            'profiles': [
                DiscoveryService._to_feed_entry(candidate, distance, shared)
                for candidate, distance, shared in page
            ],
            'has_more': offset + limit < total,
            'total': total,
        }

    @staticmethod
    def _to_feed_entry(candidate, distance, shared_hobbies):
        return {
            'user_id': candidate.user_id,
            'display_name': candidate.display_name,
            'age': candidate.age,
            'gender': candidate.gender,
            'pronouns': candidate.pronouns,
            'bio': candidate.bio,
            'status': candidate.status,
            'location_lat': candidate.location_lat,
            'location_lng': candidate.location_lng,
            'distance': distance,
            'shared_hobbies': [
                {
                    'id': hobby.id,
                    'name': hobby.name,
                    'description': hobby.description,
                    'category': hobby.category,
                }
                for hobby in shared_hobbies
            ],
            'photos': [
                {'id': photo.id, 'url': photo.url, 'is_primary': photo.is_primary}
                for photo in candidate.photos.all()
            ],
        }

    @staticmethod
    def get_preferences(user_id):
        profile = ProfileService.get_or_create_profile(user_id)
        return {
            'radius_preference': profile.radius_preference or Profile.DEFAULT_RADIUS_MILES,
            'has_location': profile.has_location,
        }
