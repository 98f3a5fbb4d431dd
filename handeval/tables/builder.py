"""
Construction of the evaluator lookup tables.

All tables are derived from first principles by enumerating hand equivalence
classes from strongest to weakest, so every strength value is assigned in
exactly one place. The tables are built once, when ``handeval.tables`` is
first imported, and exposed as read-only ``jnp`` arrays.

Tables:
    STRAIGHT_INDEX        rank mask -> straight index (0=ace high .. 9=wheel), -1 otherwise
    STRAIGHT_FLUSH_VALUES straight index -> strength of that straight flush
    STRAIGHT_VALUES       straight index -> strength of that straight
    FLUSH_VALUES          rank mask of 5 distinct ranks -> flush strength (0 if straight/invalid)
    HIGH_CARD_VALUES      rank mask of 5 distinct ranks -> high card strength (0 if straight/invalid)
    PRIME_PRODUCTS        sorted prime products of every paired rank multiset
    PRIME_PRODUCT_VALUES  strength for the product at the same position
    SUBSET_INDICES        hand size -> (C(n, 5), 5) positions of every 5-card subset
"""

import itertools
import logging
from typing import Dict, Iterable, List, Sequence, Tuple

import jax.numpy as jnp

from .constants import (
    PRIMES, NUM_RANKS, NUM_RANK_MASKS, STRAIGHT_MASKS, LOW_ACE, LOW_KEY_BITS,
    MAX_STRAIGHT_FLUSH, MAX_FOUR_OF_A_KIND, MAX_FULL_HOUSE, MAX_FLUSH,
    MAX_STRAIGHT, MAX_THREE_OF_A_KIND, MAX_TWO_PAIR, MAX_ONE_PAIR, MAX_HIGH_CARD
)

logger = logging.getLogger(__name__)

# Rank indices from ace (12) down to deuce (0)
_DESCENDING_RANKS = tuple(range(NUM_RANKS - 1, -1, -1))

# Weights packing 5 descending low ranks into one key, 4 bits per rank
LOW_KEY_WEIGHTS = tuple(1 << (LOW_KEY_BITS * i) for i in range(4, -1, -1))


def rank_mask(rank_indices: Iterable[int]) -> int:
    """Bit mask with bit r set for every rank index r."""
    mask = 0
    for r in rank_indices:
        mask |= 1 << r
    return mask


def prime_product(rank_indices: Iterable[int]) -> int:
    """Product of the rank primes, one factor per card."""
    product = 1
    for r in rank_indices:
        product *= PRIMES[r]
    return product


def _others(*excluded: int) -> Tuple[int, ...]:
    return tuple(r for r in _DESCENDING_RANKS if r not in excluded)


def build_straight_tables() -> Tuple[jnp.ndarray, jnp.ndarray, jnp.ndarray]:
    """
    Build the straight index table and the per-straight strength tables.

    Returns:
        Tuple of (STRAIGHT_INDEX, STRAIGHT_FLUSH_VALUES, STRAIGHT_VALUES)
    """
    straight_index = [-1] * NUM_RANK_MASKS
    for i, mask in enumerate(STRAIGHT_MASKS):
        straight_index[mask] = i

    num_straights = len(STRAIGHT_MASKS)
    straight_flush_values = [MAX_STRAIGHT_FLUSH - num_straights + 1 + i for i in range(num_straights)]
    straight_values = [MAX_FLUSH + 1 + i for i in range(num_straights)]

    return (
        jnp.array(straight_index, dtype=jnp.int32),
        jnp.array(straight_flush_values, dtype=jnp.int32),
        jnp.array(straight_values, dtype=jnp.int32),
    )


def build_unpaired_tables() -> Tuple[jnp.ndarray, jnp.ndarray]:
    """
    Build the flush and high card tables keyed by 13-bit rank mask.

    Both classes share the same 1277 non-straight patterns of 5 distinct
    ranks; they differ only in the base strength of the block.

    Returns:
        Tuple of (FLUSH_VALUES, HIGH_CARD_VALUES)
    """
    straights = set(STRAIGHT_MASKS)
    flush_values = [0] * NUM_RANK_MASKS
    high_card_values = [0] * NUM_RANK_MASKS

    # combinations over descending ranks come out strongest first
    offset = 0
    for ranks in itertools.combinations(_DESCENDING_RANKS, 5):
        mask = rank_mask(ranks)
        if mask in straights:
            continue
        flush_values[mask] = MAX_FULL_HOUSE + 1 + offset
        high_card_values[mask] = MAX_ONE_PAIR + 1 + offset
        offset += 1

    assert MAX_FULL_HOUSE + offset == MAX_FLUSH
    assert MAX_ONE_PAIR + offset == MAX_HIGH_CARD

    return (
        jnp.array(flush_values, dtype=jnp.int32),
        jnp.array(high_card_values, dtype=jnp.int32),
    )


def _paired_patterns() -> Dict[int, int]:
    """Map prime product -> strength for every hand with a repeated rank."""
    values: Dict[int, int] = {}

    def assign(start: int, products: List[int], last: int) -> None:
        for offset, product in enumerate(products):
            values[product] = start + offset
        assert start + len(products) - 1 == last, (start, len(products), last)

    # Four of a kind: quad rank, then kicker
    assign(MAX_STRAIGHT_FLUSH + 1, [
        PRIMES[quad] ** 4 * PRIMES[kicker]
        for quad in _DESCENDING_RANKS
        for kicker in _others(quad)
    ], MAX_FOUR_OF_A_KIND)

    # Full house: trips rank, then pair rank
    assign(MAX_FOUR_OF_A_KIND + 1, [
        PRIMES[trips] ** 3 * PRIMES[pair] ** 2
        for trips in _DESCENDING_RANKS
        for pair in _others(trips)
    ], MAX_FULL_HOUSE)

    # Three of a kind: trips rank, then two kickers
    assign(MAX_STRAIGHT + 1, [
        PRIMES[trips] ** 3 * prime_product(kickers)
        for trips in _DESCENDING_RANKS
        for kickers in itertools.combinations(_others(trips), 2)
    ], MAX_THREE_OF_A_KIND)

    # Two pair: high pair, low pair, then kicker
    assign(MAX_THREE_OF_A_KIND + 1, [
        PRIMES[high] ** 2 * PRIMES[low] ** 2 * PRIMES[kicker]
        for high, low in itertools.combinations(_DESCENDING_RANKS, 2)
        for kicker in _others(high, low)
    ], MAX_TWO_PAIR)

    # One pair: pair rank, then three kickers
    assign(MAX_TWO_PAIR + 1, [
        PRIMES[pair] ** 2 * prime_product(kickers)
        for pair in _DESCENDING_RANKS
        for kickers in itertools.combinations(_others(pair), 3)
    ], MAX_ONE_PAIR)

    return values


def build_paired_tables() -> Tuple[jnp.ndarray, jnp.ndarray]:
    """
    Build the sorted prime product table for repeated-rank hands.

    Prime factorisation is unique, so the product of the five rank primes
    is a collision-free key for the rank multiset.

    Returns:
        Tuple of (PRIME_PRODUCTS, PRIME_PRODUCT_VALUES), sorted by product
    """
    values = _paired_patterns()
    products = sorted(values)
    return (
        jnp.array(products, dtype=jnp.int32),
        jnp.array([values[p] for p in products], dtype=jnp.int32),
    )


def build_subset_indices(sizes: Sequence[int] = (5, 6, 7)) -> Dict[int, jnp.ndarray]:
    """Positions of every 5-card subset for each supported hand size."""
    return {
        n: jnp.array(list(itertools.combinations(range(n), 5)), dtype=jnp.int32)
        for n in sizes
    }


def low_key(ranks_descending: Sequence[int]) -> int:
    """Pack 5 descending low ranks (ace = 1) into a single integer key."""
    return sum(r * w for r, w in zip(ranks_descending, LOW_KEY_WEIGHTS))


def unpack_low_key(key: int) -> Tuple[int, ...]:
    """Inverse of low_key."""
    mask = (1 << LOW_KEY_BITS) - 1
    return tuple((key // w) & mask for w in LOW_KEY_WEIGHTS)


def build_low_table(ceiling: int) -> jnp.ndarray:
    """
    Build the ascending key table of qualifying low hands.

    A qualifying low has 5 distinct ranks between ace (1) and ``ceiling``.
    Keys pack the ranks highest first, so ascending key order is exactly
    low hand order: best (5-4-3-2-A) first.

    Args:
        ceiling: Highest rank allowed in a qualifying low (5..13)

    Returns:
        Sorted int32 array of packed keys
    """
    keys = sorted(
        low_key(sorted(ranks, reverse=True))
        for ranks in itertools.combinations(range(LOW_ACE, ceiling + 1), 5)
    )
    logger.debug("Built low table for ceiling %d with %d hands", ceiling, len(keys))
    return jnp.array(keys, dtype=jnp.int32)


STRAIGHT_INDEX, STRAIGHT_FLUSH_VALUES, STRAIGHT_VALUES = build_straight_tables()
FLUSH_VALUES, HIGH_CARD_VALUES = build_unpaired_tables()
PRIME_PRODUCTS, PRIME_PRODUCT_VALUES = build_paired_tables()
SUBSET_INDICES = build_subset_indices()

logger.debug(
    "Built evaluator tables: %d straights, %d unpaired masks, %d paired products",
    len(STRAIGHT_MASKS), int((FLUSH_VALUES > 0).sum()), PRIME_PRODUCTS.shape[0]
)
