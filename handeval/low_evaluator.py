"""
Ace-to-five lowball evaluation for split-pot games.

Only the multiset of five ranks matters: suits, straights and flushes are
ignored and the ace always plays low. The five ranks are sorted highest
first, packed into a composite key and located in an ascending table of all
qualifying lows, so the 1-based table position is the low strength (1 is the
wheel, 5-4-3-2-A). Hands with a repeated rank or a rank above the ruleset's
ceiling do not qualify and evaluate to NO_QUALIFYING_LOW.
"""

import logging
import operator
import threading
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

import jax
import jax.numpy as jnp

from .cardset import Card, card_from_index, integer_array, ranks_from_card_notation
from .errors import InvalidRankInput, OutOfRange
from .tables import LOW_ACE, LOW_KEY_WEIGHTS, NO_QUALIFYING_LOW, build_low_table, unpack_low_key

logger = logging.getLogger(__name__)

LOW_HAND_SIZE = 5
MIN_LOW_RANK = 1
MAX_LOW_RANK = 14
ACE_HIGH = 14

_KEY_WEIGHTS = jnp.array(LOW_KEY_WEIGHTS, dtype=jnp.int32)


@dataclass(frozen=True)
class LowRules:
    """
    Qualifying rule for low hands.

    Attributes:
        ceiling: Highest rank allowed in a qualifying low, ace counting as 1.
            8 is "eight-or-better", 13 admits every unpaired hand.
        name: Label of the ruleset
    """

    ceiling: int = 8
    name: str = "eight-or-better"

    def __post_init__(self):
        if isinstance(self.ceiling, bool) or not isinstance(self.ceiling, int):
            raise ValueError(f"Low ceiling must be an int, got {self.ceiling!r}")
        if not LOW_HAND_SIZE <= self.ceiling <= 13:
            raise ValueError(f"Low ceiling must be between {LOW_HAND_SIZE} and 13, got {self.ceiling}")

    @property
    def table(self) -> jnp.ndarray:
        return low_table(self)

    @property
    def size(self) -> int:
        """Number of qualifying low hands."""
        return int(self.table.shape[0])


EIGHT_OR_BETTER = LowRules(8, "eight-or-better")
ACE_TO_FIVE = LowRules(13, "ace-to-five")

_TABLES: Dict[int, jnp.ndarray] = {}
_TABLES_LOCK = threading.Lock()


def low_table(rules: LowRules = EIGHT_OR_BETTER) -> jnp.ndarray:
    """
    Ascending key table of qualifying lows for a ruleset.

    Tables are built once per ceiling; concurrent first use builds only one.
    """
    table = _TABLES.get(rules.ceiling)
    if table is None:
        with _TABLES_LOCK:
            table = _TABLES.get(rules.ceiling)
            if table is None:
                logger.debug("Building low table for %s", rules.name)
                table = build_low_table(rules.ceiling)
                _TABLES[rules.ceiling] = table
    return table


for _rules in (EIGHT_OR_BETTER, ACE_TO_FIVE):
    low_table(_rules)


@jax.jit
def low_key_from_ranks(ranks: jnp.ndarray) -> jnp.ndarray:
    """Composite key of 5 ranks: ace mapped to 1, sorted highest first, 4 bits each."""
    ranks = jnp.where(ranks == ACE_HIGH, LOW_ACE, ranks)
    ordered = jnp.sort(ranks)[::-1]
    return jnp.sum(ordered * _KEY_WEIGHTS)


@jax.jit
def evaluate_low_ranks(ranks: jnp.ndarray, table: jnp.ndarray) -> jnp.ndarray:
    """
    Low strength of 5 validated ranks against a key table.

    Args:
        ranks: int32 array of 5 ranks in [1, 14]
        table: Ascending key table from low_table

    Returns:
        1-based position in the table, or NO_QUALIFYING_LOW
    """
    key = low_key_from_ranks(ranks)
    slot = jnp.minimum(jnp.searchsorted(table, key), table.shape[0] - 1)
    return jnp.where(table[slot] == key, slot + 1, NO_QUALIFYING_LOW)


batch_evaluate_low_ranks = jax.jit(jax.vmap(evaluate_low_ranks, in_axes=(0, None)))


def _check_ranks(ranks: Iterable[int]) -> List[int]:
    try:
        ranks = list(ranks)
    except TypeError:
        raise InvalidRankInput(f"Expected 5 ranks, got {ranks!r}") from None
    if len(ranks) != LOW_HAND_SIZE:
        raise InvalidRankInput(f"Only 5 card low hands are supported, got {len(ranks)} ranks")

    checked = []
    for rank in ranks:
        try:
            if isinstance(rank, bool):
                raise TypeError
            rank = operator.index(rank)
        except TypeError:
            raise InvalidRankInput(f"Rank must be an integer, got {rank!r}") from None
        if not MIN_LOW_RANK <= rank <= MAX_LOW_RANK:
            raise InvalidRankInput(f"Rank {rank} outside [{MIN_LOW_RANK}, {MAX_LOW_RANK}]")
        checked.append(rank)
    return checked


def evaluate_low(ranks: Sequence[int], rules: LowRules = EIGHT_OR_BETTER) -> int:
    """
    Evaluate 5 ranks as an ace-to-five low hand.

    The input is not modified.

    Args:
        ranks: Exactly 5 ranks in [1, 14]; ace may be given as 14 or 1
        rules: Qualifying ruleset

    Returns:
        Low strength (1 = wheel, lower is better) or NO_QUALIFYING_LOW
    """
    checked = _check_ranks(ranks)
    return int(evaluate_low_ranks(jnp.array(checked, dtype=jnp.int32), low_table(rules)))


def evaluate_low_cards(cards: Sequence[Card], rules: LowRules = EIGHT_OR_BETTER) -> int:
    """Evaluate 5 cards (notation or codes) as a low hand."""
    return evaluate_low(ranks_from_card_notation(cards), rules)


def evaluate_low_indices(indices: Sequence[int], rules: LowRules = EIGHT_OR_BETTER) -> int:
    """
    Evaluate 5 dense card indices (0-51, rank = index // 4 + 2) as a low hand.
    """
    try:
        indices = list(indices)
    except TypeError:
        raise InvalidRankInput(f"Expected 5 card indices, got {indices!r}") from None

    ranks = []
    for index in indices:
        card_from_index(index)
        ranks.append(operator.index(index) // 4 + 2)
    return evaluate_low(ranks, rules)


def batch_evaluate_low(ranks, rules: LowRules = EIGHT_OR_BETTER) -> jnp.ndarray:
    """
    Evaluate many low hands in parallel.

    Args:
        ranks: Array of shape (batch_size, 5) with ranks in [1, 14]
        rules: Qualifying ruleset

    Returns:
        Array of low strength values
    """
    ranks = integer_array(ranks, InvalidRankInput, "Ranks")
    if ranks.ndim != 2 or ranks.shape[1] != LOW_HAND_SIZE:
        raise InvalidRankInput(f"Expected ranks of shape (N, 5), got {ranks.shape}")
    if not ((ranks >= MIN_LOW_RANK) & (ranks <= MAX_LOW_RANK)).all():
        raise InvalidRankInput(f"Ranks outside [{MIN_LOW_RANK}, {MAX_LOW_RANK}]")
    return batch_evaluate_low_ranks(jnp.asarray(ranks, dtype=jnp.int32), low_table(rules))


def low_hand_ranks(value: int, rules: LowRules = EIGHT_OR_BETTER) -> Tuple[int, ...]:
    """
    Ranks of the low hand with a given low strength.

    Args:
        value: Low strength, 1..rules.size
        rules: Qualifying ruleset

    Returns:
        Ranks highest first, ace as 1, e.g. (5, 4, 3, 2, 1) for value 1
    """
    table = low_table(rules)
    size = table.shape[0]
    try:
        if isinstance(value, bool):
            raise TypeError
        value = operator.index(value)
    except TypeError:
        raise OutOfRange(f"Low value must be an integer, got {value!r}") from None
    if not 1 <= value <= size:
        raise OutOfRange(f"Low value {value} outside [1, {size}] for {rules.name}")
    return unpack_low_key(int(table[value - 1]))
