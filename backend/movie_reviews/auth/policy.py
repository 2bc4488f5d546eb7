"""Access rules for movie and review mutations.

:func:`decide` is a pure function of the actor, the action and, for reviews,
the id of the review's author. Reads are open to everyone, movie writes need
the admin role, anyone signed in may post a review, and a review may only be
changed or removed by its author or an admin.

:func:`authorize` applies a decision, raising
:class:`~movie_reviews.exceptions.auth.AuthenticationException` when no actor
is present and :class:`~movie_reviews.exceptions.auth.AuthorizationException`
when the actor lacks the privilege.
"""
import logging
from enum import Enum
from typing import NamedTuple, Optional

from movie_reviews.domain.dto import TokenData
from movie_reviews.domain.models import Role
from movie_reviews.exceptions.auth import AuthenticationException, AuthorizationException

logger = logging.getLogger(__name__)


class Action(str, Enum):
    READ_MOVIES = "read_movies"
    READ_REVIEWS = "read_reviews"
    CREATE_MOVIE = "create_movie"
    UPDATE_MOVIE = "update_movie"
    DELETE_MOVIE = "delete_movie"
    CREATE_REVIEW = "create_review"
    UPDATE_REVIEW = "update_review"
    DELETE_REVIEW = "delete_review"


class DenyReason(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"


class Decision(NamedTuple):
    allowed: bool
    reason: Optional[DenyReason] = None


ALLOW = Decision(True)
DENY_UNAUTHENTICATED = Decision(False, DenyReason.UNAUTHENTICATED)
DENY_FORBIDDEN = Decision(False, DenyReason.FORBIDDEN)

READ_ACTIONS = frozenset({Action.READ_MOVIES, Action.READ_REVIEWS})
MOVIE_WRITE_ACTIONS = frozenset({Action.CREATE_MOVIE, Action.UPDATE_MOVIE, Action.DELETE_MOVIE})
REVIEW_OWNER_ACTIONS = frozenset({Action.UPDATE_REVIEW, Action.DELETE_REVIEW})

FORBIDDEN_MESSAGES = {
    Action.CREATE_MOVIE: "Forbidden: You do not have permission to perform this action",
    Action.UPDATE_MOVIE: "Forbidden: You do not have permission to perform this action",
    Action.DELETE_MOVIE: "Forbidden: You do not have permission to perform this action",
    Action.UPDATE_REVIEW: "Forbidden: You can only update your own reviews.",
    Action.DELETE_REVIEW: "Forbidden: You can only delete your own reviews.",
}


def decide(actor: Optional[TokenData], action: Action, resource_owner_id: Optional[int] = None) -> Decision:
    if action in READ_ACTIONS:
        return ALLOW

    if actor is None:
        return DENY_UNAUTHENTICATED

    if action in MOVIE_WRITE_ACTIONS:
        return ALLOW if actor.role == Role.ADMIN else DENY_FORBIDDEN

    if action == Action.CREATE_REVIEW:
        return ALLOW

    if action in REVIEW_OWNER_ACTIONS:
        if actor.role == Role.ADMIN or actor.user_id == resource_owner_id:
            return ALLOW
        return DENY_FORBIDDEN

    # unknown actions are never allowed
    return DENY_FORBIDDEN


def authorize(actor: Optional[TokenData], action: Action, resource_owner_id: Optional[int] = None) -> None:
    decision = decide(actor, action, resource_owner_id)
    if decision.allowed:
        return

    if decision.reason == DenyReason.UNAUTHENTICATED:
        logger.warning(f"Permission denied: anonymous request attempted {action.value}")
        raise AuthenticationException("Authentication required")

    logger.warning(
        f"Permission denied: User {actor.user_id} (Role: {actor.role.value}) attempted {action.value}"
    )
    raise AuthorizationException(
        FORBIDDEN_MESSAGES.get(action, "Forbidden: You do not have permission to perform this action"),
        payload={"user_id": actor.user_id, "action": action.value, "owner_id": resource_owner_id},
    )
