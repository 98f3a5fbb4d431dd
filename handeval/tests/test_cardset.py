"""
Unit tests for card codes, notation and deck helpers.
"""

import jax
import jax.numpy as jnp
import pytest

from handeval.cardset import (
    Suit, encode, decode, validate_code, rank_of, suit_of, card_index, card_from_index,
    parse_card, is_valid_card, format_card, normalize_card, format_hand, to_code,
    card_codes, board_codes, ranks_from_card_notation, full_deck, shuffled_deck,
    codes_to_rank_mask, codes_to_ranks, VALID_CODES
)
from handeval.errors import InvalidCode, InvalidNotation
from handeval.tables import PRIMES


class TestCardCodes:
    """Test the packed card code layout."""

    def test_all_codes_round_trip(self):
        codes = set()
        for rank in range(2, 15):
            for suit in Suit:
                code = encode(rank, suit)
                assert decode(code) == (rank, suit)
                codes.add(code)
        assert len(codes) == 52

    def test_code_fields(self):
        """Ace of spades: rank bit 28, spade bit 15, rank index 12, prime 41."""
        code = encode(14, Suit.SPADES)
        assert code == (1 << 28) | (1 << 15) | (12 << 8) | 41
        # King of diamonds
        assert encode(13, Suit.DIAMONDS) == 0x08002B25

    def test_two_of_clubs(self):
        assert encode(2, 0) == (1 << 16) | (1 << 12) | 2

    def test_primes_by_rank(self):
        for rank in range(2, 15):
            assert encode(rank, 0) & 0xFF == PRIMES[rank - 2]

    def test_codes_fit_int32(self):
        assert all(0 < int(code) < 2 ** 31 for code in full_deck())

    def test_encode_rejects_out_of_range(self):
        with pytest.raises(InvalidCode):
            encode(1, 0)
        with pytest.raises(InvalidCode):
            encode(15, 0)
        with pytest.raises(InvalidCode):
            encode(10, 4)
        with pytest.raises(InvalidCode):
            encode(True, 0)

    def test_decode_rejects_garbage(self):
        with pytest.raises(InvalidCode):
            decode(0)
        with pytest.raises(InvalidCode):
            decode(encode(14, 3) + 1)
        with pytest.raises(InvalidCode):
            decode("As")

    def test_validate_code(self):
        code = encode(7, 2)
        assert validate_code(code) == code
        with pytest.raises(InvalidCode):
            validate_code(12345)

    def test_rank_and_suit_of(self):
        code = parse_card("Qd")
        assert rank_of(code) == 12
        assert suit_of(code) == Suit.DIAMONDS
        assert suit_of(code).char == "d"

    def test_card_index(self):
        assert card_index(encode(2, 0)) == 0
        assert card_index(encode(14, 3)) == 51
        for index in range(52):
            assert card_index(card_from_index(index)) == index

    def test_card_from_index_rejects_out_of_range(self):
        with pytest.raises(InvalidCode):
            card_from_index(52)
        with pytest.raises(InvalidCode):
            card_from_index(-1)


class TestNotation:
    """Test parsing and formatting of card strings."""

    def test_parse_card(self):
        assert parse_card("As") == encode(14, Suit.SPADES)
        assert parse_card("2c") == encode(2, Suit.CLUBS)

    def test_ten_spellings(self):
        expected = encode(10, Suit.HEARTS)
        for text in ("Th", "th", "0h", "10h", "TH", "10H"):
            assert parse_card(text) == expected

    def test_case_insensitive(self):
        assert parse_card("aS") == parse_card("As") == parse_card("AS")

    @pytest.mark.parametrize("text", ["", "A", "Ax", "1s", "Asx", "11h", " As", "As ", "Zs"])
    def test_invalid_notation(self, text):
        with pytest.raises(InvalidNotation):
            parse_card(text)
        assert not is_valid_card(text)

    def test_parse_rejects_non_string(self):
        with pytest.raises(InvalidNotation):
            parse_card(14)

    def test_is_valid_card(self):
        assert is_valid_card("Kd")
        assert is_valid_card("10c")

    def test_format_card(self):
        assert format_card(parse_card("0h")) == "Th"
        assert format_card(parse_card("as")) == "As"

    def test_notation_round_trip(self):
        for code in full_deck().tolist():
            assert parse_card(format_card(code)) == code

    def test_normalize_card(self):
        assert normalize_card("0h") == "Th"
        assert normalize_card(" 10H ") == "Th"
        assert normalize_card("kd") == "Kd"

    def test_format_hand(self):
        hand = card_codes(["As", "Kh", "Qd", "Jc", "0s"])
        assert format_hand(hand) == "As Kh Qd Jc Ts"


class TestConversions:
    """Test conversion helpers."""

    def test_to_code(self):
        code = parse_card("9c")
        assert to_code("9c") == code
        assert to_code(code) == code

    def test_card_codes_mixed(self):
        assert card_codes(["As", parse_card("Kd")]) == [parse_card("As"), parse_card("Kd")]

    def test_card_codes_from_array(self):
        deck = full_deck()
        assert card_codes(deck[:3]) == deck[:3].tolist()

    def test_card_codes_rejects_string(self):
        with pytest.raises(InvalidNotation):
            card_codes("As Kd")

    def test_board_codes(self):
        assert board_codes("Ah Ks Td 3c Ad") == card_codes(["Ah", "Ks", "Td", "3c", "Ad"])
        with pytest.raises(InvalidNotation):
            board_codes(["Ah", "Ks"])

    def test_ranks_from_card_notation(self):
        assert ranks_from_card_notation(["AS", "2C", "3D", "4H", "0S"]) == [14, 2, 3, 4, 10]


class TestDeck:
    """Test deck construction."""

    def test_full_deck(self):
        deck = full_deck()
        assert deck.shape == (52,)
        assert deck.dtype == jnp.int32
        assert len(set(deck.tolist())) == 52
        assert sorted(deck.tolist()) == VALID_CODES.tolist()

    def test_shuffled_deck(self):
        deck = shuffled_deck(jax.random.PRNGKey(0))
        assert sorted(deck.tolist()) == sorted(full_deck().tolist())

    def test_shuffle_deterministic(self):
        key = jax.random.PRNGKey(42)
        assert shuffled_deck(key).tolist() == shuffled_deck(key).tolist()


class TestKernelHelpers:
    """Test the jitted code helpers."""

    def test_rank_mask(self):
        codes = jnp.array(card_codes(["As", "Kh", "2d", "2c", "5s"]), dtype=jnp.int32)
        assert int(codes_to_rank_mask(codes)) == (1 << 12) | (1 << 11) | (1 << 0) | (1 << 3)

    def test_ranks(self):
        codes = jnp.array(card_codes(["As", "Th", "2d"]), dtype=jnp.int32)
        assert codes_to_ranks(codes).tolist() == [14, 10, 2]
