"""Derivation of a movie's average rating from its reviews."""
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable

_TWO_PLACES = Decimal("0.01")


def _rating_of(review: Any) -> int:
    if isinstance(review, dict):
        return review["rating"]
    return review.rating


def compute_average_rating(reviews: Iterable[Any]) -> float:
    """Return the mean rating of ``reviews`` rounded to two decimal places.

    Ties round half away from zero, so a mean of exactly 2.125 becomes 2.13.
    The division is carried out on ``Decimal`` values so that the tie is seen
    exactly rather than through a binary float approximation. An empty
    collection averages to 0.

    Reviews may be objects exposing ``rating`` or mappings with a ``rating`` key.
    """
    ratings = [_rating_of(review) for review in reviews]
    if not ratings:
        return 0.0

    mean = Decimal(sum(ratings)) / Decimal(len(ratings))
    return float(mean.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))
