"""
Constants shared by the card codec and the lookup tables.

Strength values run from 1 (royal flush) to 7462 (7-5-4-3-2 offsuit).
Each hand class occupies a contiguous block; the MAX_* values below are the
inclusive upper bound of each block.
"""

import jax.numpy as jnp

NUM_RANKS = 13
NUM_SUITS = 4
NUM_CARDS = 52

RANK_CHARS = "23456789TJQKA"
SUIT_CHARS = "cdhs"

# One prime per rank index (2=0, ..., A=12); products identify rank multisets
PRIMES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41)

# Card code layout: xxxAKQJT 98765432 CDHSrrrr xxpppppp
RANK_BIT_SHIFT = 16
SUIT_BIT_SHIFT = 12
RANK_INDEX_SHIFT = 8
PRIME_MASK = 0xFF
SUIT_MASK = 0xF000
RANK_INDEX_MASK = 0xF

# Inclusive upper bound of each hand class
MAX_STRAIGHT_FLUSH = 10
MAX_FOUR_OF_A_KIND = 166
MAX_FULL_HOUSE = 322
MAX_FLUSH = 1599
MAX_STRAIGHT = 1609
MAX_THREE_OF_A_KIND = 2467
MAX_TWO_PAIR = 3325
MAX_ONE_PAIR = 6185
MAX_HIGH_CARD = 7462

BEST_STRENGTH = 1
WORST_STRENGTH = MAX_HIGH_CARD

# Upper bounds in strength order, straight flush first
CLASS_UPPER_BOUNDS = (
    MAX_STRAIGHT_FLUSH, MAX_FOUR_OF_A_KIND, MAX_FULL_HOUSE,
    MAX_FLUSH, MAX_STRAIGHT, MAX_THREE_OF_A_KIND,
    MAX_TWO_PAIR, MAX_ONE_PAIR, MAX_HIGH_CARD
)

# The 8 boundaries separating the 9 classes, as a device array for searchsorted
CLASS_BOUNDARIES = jnp.array(CLASS_UPPER_BOUNDS[:-1], dtype=jnp.int32)

# Rank masks of the 10 straights, ace-high first, wheel (A-5-4-3-2) last
STRAIGHT_MASKS = tuple(0b11111 << (high - 4) for high in range(12, 3, -1)) + (0b1000000001111,)

# Number of distinct 13-bit rank masks
NUM_RANK_MASKS = 1 << NUM_RANKS

# Low hands: ranks are 1 (ace) .. 13 (king), packed 4 bits per card
LOW_ACE = 1
LOW_KEY_BITS = 4
NO_QUALIFYING_LOW = 9999
