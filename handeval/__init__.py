"""
Fast poker hand evaluation library using precomputed lookup tables.

Evaluates 5, 6 or 7 card hands to a strength value (1 = royal flush, lower is
better), classifies strengths into the nine hand categories, and ranks
ace-to-five low hands for split-pot games.
"""

__version__ = "0.1.0"

from .errors import (
    HandEvalError, InvalidNotation, InvalidCode, DuplicateCard,
    UnsupportedHandSize, InvalidRankInput, OutOfRange
)
from .cardset import (
    Suit, encode, decode, parse_card, format_card, format_hand, normalize_card,
    card_codes, board_codes, ranks_from_card_notation, is_valid_card, full_deck, shuffled_deck
)
from .hand_rank import HandCategory, classify, hand_description, category_bounds, batch_classify
from .evaluator import (
    evaluate, evaluate_5, evaluate_board, batch_evaluate, hand_vs_hand, rank_cards, rank_board
)
from .low_evaluator import (
    LowRules, EIGHT_OR_BETTER, ACE_TO_FIVE, evaluate_low, evaluate_low_cards, evaluate_low_indices,
    batch_evaluate_low, low_hand_ranks
)
from .showdown import EvaluatedHand, best_hand, evaluate_combinations, split_pot_winners
from .tables import NO_QUALIFYING_LOW

__all__ = [
    'HandEvalError', 'InvalidNotation', 'InvalidCode', 'DuplicateCard',
    'UnsupportedHandSize', 'InvalidRankInput', 'OutOfRange',
    'Suit', 'encode', 'decode', 'parse_card', 'format_card', 'format_hand', 'normalize_card',
    'card_codes', 'board_codes', 'ranks_from_card_notation', 'is_valid_card',
    'full_deck', 'shuffled_deck',
    'HandCategory', 'classify', 'hand_description', 'category_bounds', 'batch_classify',
    'evaluate', 'evaluate_5', 'evaluate_board', 'batch_evaluate', 'hand_vs_hand',
    'rank_cards', 'rank_board',
    'LowRules', 'EIGHT_OR_BETTER', 'ACE_TO_FIVE', 'NO_QUALIFYING_LOW',
    'evaluate_low', 'evaluate_low_cards', 'evaluate_low_indices', 'batch_evaluate_low',
    'low_hand_ranks',
    'EvaluatedHand', 'best_hand', 'evaluate_combinations', 'split_pot_winners',
]
