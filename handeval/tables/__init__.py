"""
Precomputed lookup tables for hand evaluation.

Importing this package builds every table once; the resulting arrays are
process-wide constants and are never mutated afterwards.
"""

from .constants import (
    NUM_RANKS, NUM_SUITS, NUM_CARDS, RANK_CHARS, SUIT_CHARS, PRIMES,
    RANK_BIT_SHIFT, SUIT_BIT_SHIFT, RANK_INDEX_SHIFT, PRIME_MASK, SUIT_MASK, RANK_INDEX_MASK,
    MAX_STRAIGHT_FLUSH, MAX_FOUR_OF_A_KIND, MAX_FULL_HOUSE, MAX_FLUSH, MAX_STRAIGHT,
    MAX_THREE_OF_A_KIND, MAX_TWO_PAIR, MAX_ONE_PAIR, MAX_HIGH_CARD,
    BEST_STRENGTH, WORST_STRENGTH, CLASS_UPPER_BOUNDS, CLASS_BOUNDARIES, STRAIGHT_MASKS,
    LOW_ACE, NO_QUALIFYING_LOW
)
from .builder import (
    STRAIGHT_INDEX, STRAIGHT_FLUSH_VALUES, STRAIGHT_VALUES,
    FLUSH_VALUES, HIGH_CARD_VALUES, PRIME_PRODUCTS, PRIME_PRODUCT_VALUES,
    SUBSET_INDICES, LOW_KEY_WEIGHTS, build_low_table, low_key, unpack_low_key
)
