"""
Core poker hand evaluation functions using precomputed lookup tables.

Strength values run from 1 (royal flush) to 7462 (worst high card); lower is
stronger and equal values are exact ties. The compiled kernels work on int32
card code arrays and never branch on card values; the Python entry points
validate input and raise before a kernel runs.
"""

from typing import Iterable, Sequence

import jax
import jax.numpy as jnp
import numpy as np

from .cardset import (
    Card, VALID_CODES, card_codes, board_codes, codes_to_rank_mask, format_card, integer_array
)
from .errors import DuplicateCard, InvalidCode, UnsupportedHandSize
from .hand_rank import HandCategory, classify
from .tables import (
    PRIME_MASK, SUIT_MASK, STRAIGHT_INDEX, STRAIGHT_FLUSH_VALUES, STRAIGHT_VALUES,
    FLUSH_VALUES, HIGH_CARD_VALUES, PRIME_PRODUCTS, PRIME_PRODUCT_VALUES, SUBSET_INDICES
)

SUPPORTED_HAND_SIZES = tuple(sorted(SUBSET_INDICES))

_LAST_PRODUCT_SLOT = PRIME_PRODUCTS.shape[0] - 1
_VALID_CODES_HOST = np.asarray(VALID_CODES)


@jax.jit
def evaluate_5_codes(codes: jnp.ndarray) -> jnp.ndarray:
    """
    Evaluate exactly 5 distinct card codes.

    Args:
        codes: int32 array of 5 valid card codes

    Returns:
        Hand strength value (lower = better)
    """
    # All five share a suit iff their suit bits survive the AND
    is_flush = (jnp.bitwise_and.reduce(codes) & SUIT_MASK) != 0
    mask = codes_to_rank_mask(codes)

    straight = STRAIGHT_INDEX[mask]
    is_straight = straight >= 0
    straight = jnp.maximum(straight, 0)

    # Five distinct ranks that do not form a straight
    high_card_val = HIGH_CARD_VALUES[mask]
    is_unpaired = high_card_val > 0

    # Repeated ranks: prime product is a perfect hash of the rank multiset
    product = jnp.prod(codes & PRIME_MASK)
    slot = jnp.minimum(jnp.searchsorted(PRIME_PRODUCTS, product), _LAST_PRODUCT_SLOT)

    result = PRIME_PRODUCT_VALUES[slot]
    result = jnp.where(is_unpaired, high_card_val, result)
    result = jnp.where(is_straight, STRAIGHT_VALUES[straight], result)
    result = jnp.where(is_flush, FLUSH_VALUES[mask], result)
    result = jnp.where(is_flush & is_straight, STRAIGHT_FLUSH_VALUES[straight], result)
    return result


@jax.jit
def evaluate_codes(codes: jnp.ndarray) -> jnp.ndarray:
    """
    Evaluate 5-7 distinct card codes as the best 5-card subset.

    Args:
        codes: int32 array of 5, 6 or 7 valid card codes

    Returns:
        Minimum strength over every 5-card subset
    """
    # Shape is static under jit, so the subset table is picked at trace time
    subsets = SUBSET_INDICES[codes.shape[0]]
    return jnp.min(jax.vmap(evaluate_5_codes)(codes[subsets]))


batch_evaluate_codes = jax.jit(jax.vmap(evaluate_codes))


def _check_hand(codes: Sequence[int]) -> None:
    if len(codes) not in SUPPORTED_HAND_SIZES:
        raise UnsupportedHandSize(f"Can only evaluate 5, 6 or 7 cards, got {len(codes)}")
    seen = set()
    for code in codes:
        if code in seen:
            raise DuplicateCard(f"Duplicate card: {format_card(code)}")
        seen.add(code)


def prepare_hand(cards: Iterable[Card]) -> jnp.ndarray:
    """
    Validate cards and convert them to a kernel-ready array.

    Args:
        cards: 5-7 notation strings or card codes

    Returns:
        int32 array of card codes
    """
    codes = card_codes(cards)
    _check_hand(codes)
    return jnp.array(codes, dtype=jnp.int32)


def evaluate(cards: Iterable[Card]) -> int:
    """
    Evaluate 5-7 cards to a hand strength, smaller is better.

    Args:
        cards: Cards like ['Ah', 'Ks', 'Td', '3c', 'Ad'] or their card codes

    Returns:
        Strength of the best 5-card hand among the cards
    """
    return int(evaluate_codes(prepare_hand(cards)))


def evaluate_5(c1: Card, c2: Card, c3: Card, c4: Card, c5: Card) -> int:
    """Evaluate exactly five cards."""
    return evaluate([c1, c2, c3, c4, c5])


def evaluate_board(board: str) -> int:
    """
    Evaluate a board given as one string.

    Args:
        board: The board, i.e. 'Ah Ks Td 3c Ad'

    Returns:
        Strength of the hand comprised by the cards of the board
    """
    codes = board_codes(board)
    _check_hand(codes)
    return int(evaluate_codes(jnp.array(codes, dtype=jnp.int32)))


def batch_evaluate(hands) -> jnp.ndarray:
    """
    Evaluate many hands of the same size in parallel.

    Args:
        hands: Array of shape (batch_size, num_cards) with card codes, or a
            list of equally sized hands in notation

    Returns:
        Array of hand strength values
    """
    if not hasattr(hands, "shape"):
        rows = [card_codes(hand) for hand in hands]
        if len({len(row) for row in rows}) > 1:
            raise UnsupportedHandSize("All hands in a batch must have the same number of cards")
        hands = rows
    hands = integer_array(hands, InvalidCode, "Card codes")

    if hands.ndim != 2 or hands.shape[1] not in SUPPORTED_HAND_SIZES:
        raise UnsupportedHandSize(f"Expected hands of shape (N, 5..7), got {hands.shape}")
    # Checked before the int32 cast so wider values cannot wrap onto a valid code
    if not np.isin(hands, _VALID_CODES_HOST).all():
        raise InvalidCode("Batch contains invalid card codes")
    hands = jnp.asarray(hands, dtype=jnp.int32)
    ordered = jnp.sort(hands, axis=1)
    if bool(jnp.any(ordered[:, 1:] == ordered[:, :-1])):
        raise DuplicateCard("Batch contains a hand with a duplicate card")

    return batch_evaluate_codes(hands)


def hand_vs_hand(hand1: Iterable[Card], hand2: Iterable[Card]) -> int:
    """
    Compare two hands.

    Args:
        hand1: First hand (5-7 cards)
        hand2: Second hand (5-7 cards)

    Returns:
        1 if hand1 wins, -1 if hand2 wins, 0 if tie
    """
    strength1 = evaluate(hand1)
    strength2 = evaluate(hand2)
    return (strength1 < strength2) - (strength1 > strength2)


def rank_cards(cards: Iterable[Card]) -> HandCategory:
    """Evaluate 5-7 cards and return the hand category."""
    return classify(evaluate(cards))


def rank_board(board: str) -> HandCategory:
    """Evaluate a board string and return the hand category."""
    return classify(evaluate_board(board))
