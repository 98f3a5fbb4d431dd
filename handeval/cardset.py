"""
Card representation and conversion utilities for poker hand evaluation.

Provides functions to convert between card notation ("As", "Th", "0h"),
the packed integer card code used by the evaluator, and (rank, suit) pairs.

Card code layout (32 bits, fits in int32):

    xxxAKQJT 98765432 CDHSrrrr xxpppppp

- bits 16-28: one-hot rank bit (used to build the rank mask)
- bits 12-15: one-hot suit bit (AND of five codes detects a flush)
- bits 8-11:  rank index (2=0, ..., A=12)
- bits 0-7:   rank prime (product of five identifies the rank multiset)
"""

import enum
import operator
from typing import Iterable, List, Sequence, Tuple, Type, Union

import jax
import jax.numpy as jnp
import numpy as np

from .errors import HandEvalError, InvalidCode, InvalidNotation
from .tables.constants import (
    NUM_RANKS, NUM_SUITS, NUM_CARDS, RANK_CHARS, SUIT_CHARS, PRIMES,
    RANK_BIT_SHIFT, SUIT_BIT_SHIFT, RANK_INDEX_SHIFT, RANK_INDEX_MASK
)

Card = Union[str, int]

MIN_RANK = 2
MAX_RANK = 14
TEN = 10


class Suit(enum.IntEnum):
    CLUBS = 0
    DIAMONDS = 1
    HEARTS = 2
    SPADES = 3

    @property
    def char(self) -> str:
        return SUIT_CHARS[self]


# Notation lookups; '0' is the legacy spelling of Ten
_RANK_FROM_CHAR = {c: i + MIN_RANK for i, c in enumerate(RANK_CHARS)}
_RANK_FROM_CHAR["0"] = TEN
_SUIT_FROM_CHAR = {c: Suit(i) for i, c in enumerate(SUIT_CHARS)}


def _as_int(value) -> int:
    """Coerce an integer-like value (Python, numpy or 0-d jax) to int, rejecting bools."""
    if isinstance(value, bool):
        raise TypeError("bool is not a card value")
    return operator.index(value)


def integer_array(values, error: Type[HandEvalError], what: str) -> np.ndarray:
    """
    Host-side integer array of batch input, before any int32 cast.

    Args:
        values: Array-like batch input
        error: Error class raised for non-integer input
        what: Name of the values, used in the message

    Returns:
        numpy array with an integer dtype (or an empty array)
    """
    try:
        array = np.asarray(values)
    except (TypeError, ValueError):
        raise error(f"{what} must be a rectangular integer array") from None
    if array.size and not np.issubdtype(array.dtype, np.integer):
        raise error(f"{what} must be integers, got dtype {array.dtype}")
    return array


def _encode_unchecked(rank: int, suit: int) -> int:
    r = rank - MIN_RANK
    return (
        (1 << (RANK_BIT_SHIFT + r))
        | (1 << (SUIT_BIT_SHIFT + suit))
        | (r << RANK_INDEX_SHIFT)
        | PRIMES[r]
    )


# Valid codes in card index order: index = (rank - 2) * 4 + suit
_CODES_BY_INDEX = tuple(
    _encode_unchecked(rank, suit)
    for rank in range(MIN_RANK, MAX_RANK + 1)
    for suit in range(NUM_SUITS)
)
_CARD_BY_CODE = {
    code: (index // NUM_SUITS + MIN_RANK, Suit(index % NUM_SUITS))
    for index, code in enumerate(_CODES_BY_INDEX)
}
_INDEX_BY_CODE = {code: index for index, code in enumerate(_CODES_BY_INDEX)}

# Sorted device array of the 52 valid codes, for vectorised validation
VALID_CODES = jnp.array(sorted(_CODES_BY_INDEX), dtype=jnp.int32)


def encode(rank: int, suit: Union[Suit, int]) -> int:
    """
    Convert rank and suit to card code.

    Args:
        rank: 2..14 (Ace high)
        suit: Suit member or 0=clubs, 1=diamonds, 2=hearts, 3=spades

    Returns:
        Card code
    """
    try:
        rank = _as_int(rank)
        suit = _as_int(suit)
    except TypeError:
        raise InvalidCode(f"Invalid rank/suit: {rank!r}, {suit!r}") from None
    if not MIN_RANK <= rank <= MAX_RANK or not 0 <= suit < NUM_SUITS:
        raise InvalidCode(f"Invalid rank/suit: {rank}, {suit}")
    return _encode_unchecked(rank, suit)


def decode(code: int) -> Tuple[int, Suit]:
    """
    Convert card code to rank and suit.

    Args:
        code: Card code produced by encode

    Returns:
        Tuple of (rank, suit)
    """
    try:
        card = _CARD_BY_CODE.get(_as_int(code))
    except TypeError:
        card = None
    if card is None:
        raise InvalidCode(f"Invalid card code: {code!r}")
    return card


def validate_code(code: int) -> int:
    """Return code as a plain int, raising InvalidCode if it is not one of the 52 cards."""
    decode(code)
    return _as_int(code)


def rank_of(code: int) -> int:
    """Rank (2..14) of a card code."""
    return decode(code)[0]


def suit_of(code: int) -> Suit:
    """Suit of a card code."""
    return decode(code)[1]


def card_index(code: int) -> int:
    """Dense index (0-51) of a card code: (rank - 2) * 4 + suit."""
    validate_code(code)
    return _INDEX_BY_CODE[_as_int(code)]


def card_from_index(index: int) -> int:
    """Card code for a dense index (0-51)."""
    try:
        index = _as_int(index)
    except TypeError:
        raise InvalidCode(f"Invalid card index: {index!r}") from None
    if not 0 <= index < NUM_CARDS:
        raise InvalidCode(f"Invalid card index: {index}")
    return _CODES_BY_INDEX[index]


def parse_card(card_str: str) -> int:
    """
    Parse card string to card code.

    Rank is one of 23456789TJQKA, with '0' and '10' accepted for Ten; suit is
    one of hdcs. Both are case-insensitive.

    Args:
        card_str: String like "As", "th", "0H" or "10h"

    Returns:
        Card code
    """
    if not isinstance(card_str, str):
        raise InvalidNotation(f"Invalid card string: {card_str!r}")

    text = card_str
    if len(text) == 3 and text.startswith("10"):
        text = "T" + text[2]
    if len(text) != 2:
        raise InvalidNotation(f"Invalid card string: {card_str!r}")

    rank = _RANK_FROM_CHAR.get(text[0].upper())
    suit = _SUIT_FROM_CHAR.get(text[1].lower())
    if rank is None or suit is None:
        raise InvalidNotation(f"Invalid card string: {card_str!r}")
    return _encode_unchecked(rank, suit)


def is_valid_card(card_str: str) -> bool:
    """Check card notation without raising."""
    try:
        parse_card(card_str)
    except InvalidNotation:
        return False
    return True


def format_card(code: int) -> str:
    """
    Format card code as human-readable string.

    Args:
        code: Card code

    Returns:
        String like "As" (Ace of spades) or "Th" (Ten of hearts)
    """
    rank, suit = decode(code)
    return RANK_CHARS[rank - MIN_RANK] + suit.char


def normalize_card(card_str: str) -> str:
    """Canonical notation for a card string, e.g. '0h', 'th' and '10H' all become 'Th'."""
    if isinstance(card_str, str):
        card_str = card_str.strip()
    return format_card(parse_card(card_str))


def format_hand(cards: Iterable[int]) -> str:
    """
    Format card codes as readable string.

    Args:
        cards: Card codes

    Returns:
        String like "As Kh Qd Jc Ts"
    """
    return " ".join(format_card(card) for card in cards)


def to_code(card: Card) -> int:
    """Card code from either notation or an existing code."""
    if isinstance(card, str):
        return parse_card(card)
    return validate_code(card)


def card_codes(cards: Iterable[Card]) -> List[int]:
    """
    Convert cards to card codes.

    Args:
        cards: Notation strings, card codes, or a mix

    Returns:
        List of card codes
    """
    if isinstance(cards, str):
        raise InvalidNotation(f"Expected a sequence of cards, got string {cards!r}")
    if hasattr(cards, "tolist"):
        cards = cards.tolist()
    return [to_code(card) for card in cards]


def board_codes(board: str) -> List[int]:
    """Convert a space-separated board like 'Ah Ks Td 3c Ad' to card codes."""
    if not isinstance(board, str):
        raise InvalidNotation(f"Board needs to be a string, got {board!r}")
    return [parse_card(card) for card in board.split()]


def ranks_from_card_notation(cards: Sequence[Card]) -> List[int]:
    """
    Convert cards to rank numbers, e.g. ['AS', '2C', '3D', '4H', '0S'] -> [14, 2, 3, 4, 10].

    Bridges notation to the low evaluator, which consumes ranks only.

    Args:
        cards: Notation strings or card codes

    Returns:
        List of ranks (2..14, Ace = 14)
    """
    return [rank_of(code) for code in card_codes(cards)]


def full_deck() -> jnp.ndarray:
    """All 52 card codes in card index order."""
    return jnp.array(_CODES_BY_INDEX, dtype=jnp.int32)


def shuffled_deck(key: jax.random.PRNGKey) -> jnp.ndarray:
    """
    Shuffled 52-card deck.

    Args:
        key: JAX PRNG key

    Returns:
        Permutation of all 52 card codes
    """
    return jax.random.permutation(key, full_deck())


@jax.jit
def codes_to_rank_mask(codes: jnp.ndarray) -> jnp.ndarray:
    """13-bit mask of ranks present among the card codes."""
    return (jnp.bitwise_or.reduce(codes) >> RANK_BIT_SHIFT) & ((1 << NUM_RANKS) - 1)


@jax.jit
def codes_to_ranks(codes: jnp.ndarray) -> jnp.ndarray:
    """Ranks (2..14) of an array of card codes."""
    return ((codes >> RANK_INDEX_SHIFT) & RANK_INDEX_MASK) + MIN_RANK
