"""
Hand categories and the strength -> category classifier.
"""

import enum
import operator
from typing import Tuple

import jax
import jax.numpy as jnp

from .cardset import integer_array
from .errors import OutOfRange
from .tables.constants import (
    BEST_STRENGTH, WORST_STRENGTH, CLASS_UPPER_BOUNDS, CLASS_BOUNDARIES,
    MAX_STRAIGHT_FLUSH, MAX_FOUR_OF_A_KIND, MAX_FULL_HOUSE, MAX_FLUSH,
    MAX_STRAIGHT, MAX_THREE_OF_A_KIND, MAX_TWO_PAIR, MAX_ONE_PAIR
)


class HandCategory(enum.IntEnum):
    """Hand categories; enumeration order is strength order."""

    STRAIGHT_FLUSH = 0
    FOUR_OF_A_KIND = 1
    FULL_HOUSE = 2
    FLUSH = 3
    STRAIGHT = 4
    THREE_OF_A_KIND = 5
    TWO_PAIR = 6
    ONE_PAIR = 7
    HIGH_CARD = 8

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    HandCategory.STRAIGHT_FLUSH: "Straight Flush",
    HandCategory.FOUR_OF_A_KIND: "Four of a Kind",
    HandCategory.FULL_HOUSE: "Full House",
    HandCategory.FLUSH: "Flush",
    HandCategory.STRAIGHT: "Straight",
    HandCategory.THREE_OF_A_KIND: "Three of a Kind",
    HandCategory.TWO_PAIR: "Two Pair",
    HandCategory.ONE_PAIR: "One Pair",
    HandCategory.HIGH_CARD: "High Card",
}


def _strength(value) -> int:
    try:
        if isinstance(value, bool):
            raise TypeError
        value = operator.index(value)
    except TypeError:
        raise OutOfRange(f"Strength value must be an integer, got {value!r}") from None
    if not BEST_STRENGTH <= value <= WORST_STRENGTH:
        raise OutOfRange(f"Strength value {value} outside [{BEST_STRENGTH}, {WORST_STRENGTH}]")
    return value


def classify(strength: int) -> HandCategory:
    """
    Get hand category from hand strength value.

    Args:
        strength: Hand strength value from evaluator (1..7462)

    Returns:
        Hand category, STRAIGHT_FLUSH for the smallest values
    """
    strength = _strength(strength)

    if strength <= MAX_STRAIGHT_FLUSH:
        return HandCategory.STRAIGHT_FLUSH   # 10 straight-flushes
    elif strength <= MAX_FOUR_OF_A_KIND:
        return HandCategory.FOUR_OF_A_KIND   # 156 four-kind
    elif strength <= MAX_FULL_HOUSE:
        return HandCategory.FULL_HOUSE       # 156 full house
    elif strength <= MAX_FLUSH:
        return HandCategory.FLUSH            # 1277 flushes
    elif strength <= MAX_STRAIGHT:
        return HandCategory.STRAIGHT         # 10 straights
    elif strength <= MAX_THREE_OF_A_KIND:
        return HandCategory.THREE_OF_A_KIND  # 858 three-kind
    elif strength <= MAX_TWO_PAIR:
        return HandCategory.TWO_PAIR         # 858 two pair
    elif strength <= MAX_ONE_PAIR:
        return HandCategory.ONE_PAIR         # 2860 one pair
    else:
        return HandCategory.HIGH_CARD        # 1277 high card


def hand_description(strength: int) -> str:
    """
    Get the category label of a hand.

    Args:
        strength: Hand strength value from evaluator

    Returns:
        String label such as "Flush"
    """
    return classify(strength).label


def category_bounds(category: HandCategory) -> Tuple[int, int]:
    """Inclusive (best, worst) strength range of a category."""
    category = HandCategory(category)
    first = BEST_STRENGTH if category == 0 else CLASS_UPPER_BOUNDS[category - 1] + 1
    return first, CLASS_UPPER_BOUNDS[category]


@jax.jit
def _classify_kernel(strengths: jnp.ndarray) -> jnp.ndarray:
    # side='left': a value equal to a boundary stays in the lower class
    return jnp.searchsorted(CLASS_BOUNDARIES, strengths, side="left")


def batch_classify(strengths) -> jnp.ndarray:
    """
    Classify an array of strength values.

    Args:
        strengths: Array of strength values

    Returns:
        Array of category indices (HandCategory values)
    """
    strengths = integer_array(strengths, OutOfRange, "Strength values")
    if not ((strengths >= BEST_STRENGTH) & (strengths <= WORST_STRENGTH)).all():
        raise OutOfRange(f"Strength values outside [{BEST_STRENGTH}, {WORST_STRENGTH}]")
    return _classify_kernel(jnp.asarray(strengths, dtype=jnp.int32))
