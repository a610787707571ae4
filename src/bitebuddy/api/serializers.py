"""JSON serialization of domain models."""

from datetime import datetime

from bitebuddy.domain.friends import Friendship, FriendWithProfile
from bitebuddy.domain.models import Profile
from bitebuddy.domain.places import PlaceBusiness
from bitebuddy.domain.sessions import (
    Candidate,
    Category,
    DiningSession,
    SessionDetails,
    SessionMember,
)
from bitebuddy.domain.swipes import (
    Match,
    MatchWithCandidate,
    RecentMatch,
    SessionResults,
    SwipeOutcome,
)


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _categories(categories: list[Category]) -> list[dict[str, str]]:
    return [{"alias": c.alias, "title": c.title} for c in categories]


def serialize_profile(profile: Profile | None) -> dict[str, object] | None:
    if profile is None:
        return None
    return {
        "id": str(profile.id),
        "username": profile.username,
        "display_name": profile.display_name,
        "avatar_url": profile.avatar_url,
        "created_at": _iso(profile.created_at),
    }


def serialize_friendship(friendship: Friendship) -> dict[str, object]:
    return {
        "id": str(friendship.id),
        "requester_id": str(friendship.requester_id),
        "addressee_id": str(friendship.addressee_id),
        "status": friendship.status,
        "created_at": _iso(friendship.created_at),
    }


def serialize_friend(friend: FriendWithProfile) -> dict[str, object]:
    return {
        **serialize_friendship(friend.friendship),
        "profile": serialize_profile(friend.profile),
    }


def serialize_session(session: DiningSession) -> dict[str, object]:
    return {
        "id": str(session.id),
        "created_by": str(session.created_by),
        "name": session.name,
        "status": session.status,
        "latitude": session.latitude,
        "longitude": session.longitude,
        "radius_meters": session.radius_meters,
        "price_filter": session.price_filter,
        "category_filter": session.category_filter,
        "created_at": _iso(session.created_at),
    }


def serialize_member(member: SessionMember) -> dict[str, object]:
    return {
        "id": str(member.id),
        "session_id": str(member.session_id),
        "user_id": str(member.user_id),
        "joined_at": _iso(member.joined_at),
        "profile": serialize_profile(member.profile),
    }


def serialize_session_details(details: SessionDetails) -> dict[str, object]:
    return {
        **serialize_session(details.session),
        "members": [serialize_member(m) for m in details.members],
        "restaurant_count": details.restaurant_count,
        "match_count": details.match_count,
    }


def serialize_candidate(candidate: Candidate | None) -> dict[str, object] | None:
    if candidate is None:
        return None
    return {
        "id": str(candidate.id),
        "session_id": str(candidate.session_id),
        "place_id": candidate.external_id,
        "name": candidate.name,
        "image_url": candidate.image_url,
        "rating": candidate.rating,
        "review_count": candidate.review_count,
        "price": candidate.price,
        "categories": _categories(candidate.categories),
        "address": candidate.address,
        "latitude": candidate.latitude,
        "longitude": candidate.longitude,
        "phone": candidate.phone,
        "url": candidate.url,
    }


def serialize_match(match: Match | None) -> dict[str, object] | None:
    if match is None:
        return None
    return {
        "id": str(match.id),
        "session_id": str(match.session_id),
        "restaurant_id": str(match.restaurant_id),
        "matched_at": match.matched_at.isoformat(),
    }


def serialize_swipe_outcome(outcome: SwipeOutcome) -> dict[str, object]:
    return {
        "swipe_id": str(outcome.swipe.id),
        "liked": outcome.swipe.liked,
        "is_match": outcome.is_match,
        "match_status": outcome.match_status,
        "match": serialize_match(outcome.match),
    }


def _serialize_match_with_candidate(item: MatchWithCandidate) -> dict[str, object]:
    return {
        **(serialize_match(item.match) or {}),
        "restaurant": serialize_candidate(item.restaurant),
    }


def serialize_results(results: SessionResults) -> dict[str, object]:
    return {
        "status": results.status,
        "matches": [_serialize_match_with_candidate(m) for m in results.matches],
        "total_restaurants": results.total_restaurants,
        "swipe_progress": {
            str(user_id): count for user_id, count in results.swipe_progress.items()
        },
    }


def serialize_recent_match(match: RecentMatch) -> dict[str, object]:
    return {
        "match_id": str(match.match_id),
        "session_id": str(match.session_id),
        "session_name": match.session_name,
        "restaurant_name": match.restaurant_name,
        "restaurant_image_url": match.restaurant_image_url,
        "restaurant_rating": match.restaurant_rating,
        "matched_at": match.matched_at.isoformat(),
    }


def serialize_place(place: PlaceBusiness) -> dict[str, object]:
    return {
        "id": place.id,
        "name": place.name,
        "image_url": place.image_url,
        "rating": place.rating,
        "review_count": place.review_count,
        "price": place.price,
        "categories": _categories(place.categories),
        "address": place.address,
        "latitude": place.latitude,
        "longitude": place.longitude,
        "phone": place.phone,
        "url": place.url,
    }
