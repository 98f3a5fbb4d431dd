"""
Best-hand selection from hole and board cards.

Every combination of ``hole_count`` hole cards with ``board_count`` board
cards is evaluated (two and three by default, as in Omaha), either for high
with the strength evaluator or for low with the ace-to-five evaluator. All
combinations are evaluated in one batched kernel call.
"""

import itertools
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import jax.numpy as jnp

from .cardset import Card, card_codes, codes_to_ranks, format_card, format_hand
from .errors import DuplicateCard, UnsupportedHandSize
from .evaluator import batch_evaluate_codes
from .hand_rank import HandCategory, classify
from .low_evaluator import EIGHT_OR_BETTER, LowRules, batch_evaluate_low_ranks, low_table
from .tables import NO_QUALIFYING_LOW

HIGH = "high"
LOW = "low"
MODES = (HIGH, LOW)


@dataclass(frozen=True)
class EvaluatedHand:
    """One 5-card combination and its value under the selected mode."""

    cards: Tuple[int, ...]
    value: int
    mode: str
    hole_cards: Tuple[int, ...]
    board_cards: Tuple[int, ...]
    hole_index: int
    board_index: int

    @property
    def qualifies(self) -> bool:
        return self.value != NO_QUALIFYING_LOW

    @property
    def category(self) -> Optional[HandCategory]:
        """Hand category for high hands, None for low hands."""
        if self.mode != HIGH:
            return None
        return classify(self.value)

    def __str__(self) -> str:
        return format_hand(self.cards)


def _combination_codes(hole: Sequence[Card], board: Sequence[Card],
                       hole_count: int, board_count: int):
    if hole_count < 0 or board_count < 0 or hole_count + board_count != 5:
        raise UnsupportedHandSize(
            f"hole_count + board_count must be 5, got {hole_count} + {board_count}")
    hole_codes = card_codes(hole)
    board_cards = card_codes(board)

    seen = set()
    for code in hole_codes + board_cards:
        if code in seen:
            raise DuplicateCard(f"Duplicate card: {format_card(code)}")
        seen.add(code)

    hole_combos = list(itertools.combinations(hole_codes, hole_count))
    board_combos = list(itertools.combinations(board_cards, board_count))
    return hole_combos, board_combos


def evaluate_combinations(hole: Sequence[Card], board: Sequence[Card], mode: str = HIGH,
                          rules: LowRules = EIGHT_OR_BETTER,
                          hole_count: int = 2, board_count: int = 3) -> List[EvaluatedHand]:
    """
    Evaluate every hole/board combination.

    Args:
        hole: Player's hole cards (notation or codes)
        board: Board cards (notation or codes)
        mode: "high" or "low"
        rules: Low qualifying rules, used in low mode
        hole_count: Hole cards used per combination
        board_count: Board cards used per combination

    Returns:
        One EvaluatedHand per combination, hole-major order; empty when
        there are too few cards to form a combination
    """
    if mode not in MODES:
        raise ValueError(f"Mode must be one of {MODES}, got {mode!r}")

    hole_combos, board_combos = _combination_codes(hole, board, hole_count, board_count)
    if not hole_combos or not board_combos:
        return []

    hands = jnp.array([h + b for h in hole_combos for b in board_combos], dtype=jnp.int32)
    if mode == HIGH:
        values = batch_evaluate_codes(hands)
    else:
        values = batch_evaluate_low_ranks(codes_to_ranks(hands), low_table(rules))
    values = values.tolist()

    results = []
    for i, (hi, bi) in enumerate(itertools.product(range(len(hole_combos)), range(len(board_combos)))):
        results.append(EvaluatedHand(
            cards=hole_combos[hi] + board_combos[bi],
            value=values[i],
            mode=mode,
            hole_cards=hole_combos[hi],
            board_cards=board_combos[bi],
            hole_index=hi,
            board_index=bi,
        ))
    return results


def best_hand(hole: Sequence[Card], board: Sequence[Card], mode: str = HIGH,
              rules: LowRules = EIGHT_OR_BETTER,
              hole_count: int = 2, board_count: int = 3) -> Optional[EvaluatedHand]:
    """
    Find the best combination of hole and board cards.

    Lower values are better in both modes. In low mode hands that do not
    qualify are skipped. Ties keep the first combination found.

    Returns:
        The best EvaluatedHand, or None if no combination exists or qualifies
    """
    best = None
    for hand in evaluate_combinations(hole, board, mode, rules, hole_count, board_count):
        if not hand.qualifies:
            continue
        if best is None or hand.value < best.value:
            best = hand
    return best


def split_pot_winners(values: Sequence[int]) -> List[int]:
    """
    Indices of the players holding the best value.

    Args:
        values: One high strength or low value per player, lower is better

    Returns:
        Indices sharing the minimum value; NO_QUALIFYING_LOW never wins, so
        an empty list means nobody qualified
    """
    qualifying = [v for v in values if v != NO_QUALIFYING_LOW]
    if not qualifying:
        return []
    best = min(qualifying)
    return [i for i, v in enumerate(values) if v == best]
