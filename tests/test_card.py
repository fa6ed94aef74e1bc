import dataclasses

import pytest
from holecard.common.card import Card, Suit, Rank


def test_card_initialization():
    card = Card(Suit.HEARTS, Rank.EIGHT)
    assert card.suit == Suit.HEARTS
    assert card.rank == Rank.EIGHT


def test_card_repr():
    card = Card(Suit.HEARTS, Rank.EIGHT)
    assert repr(card) == "Card(Suit.HEARTS, Rank.EIGHT)"


def test_card_str():
    assert str(Card(Suit.HEARTS, Rank.EIGHT)) == "8 of ♥"
    assert str(Card(Suit.SPADES, Rank.ACE)) == "A of ♠"
    assert str(Card(Suit.CLUBS, Rank.QUEEN)) == "Q of ♣"


def test_invalid_suit():
    with pytest.raises(TypeError):
        Card("Z", Rank.EIGHT)


def test_invalid_rank():
    with pytest.raises(TypeError):
        Card(Suit.HEARTS, "invalid")


def test_non_string_rank():
    with pytest.raises(TypeError):
        Card(Suit.HEARTS, 123)


def test_card_is_immutable():
    card = Card(Suit.HEARTS, Rank.EIGHT)
    with pytest.raises(dataclasses.FrozenInstanceError):
        card.rank = Rank.NINE


def test_ranks_are_distinct_members():
    # Ten and the face cards share a value but must stay separate ranks
    assert len(list(Rank)) == 13
    assert Rank.JACK is not Rank.TEN
    assert len({Card(Suit.HEARTS, rank) for rank in Rank}) == 13


@pytest.mark.parametrize(
    "rank, value",
    [
        (Rank.ACE, 11),
        (Rank.TWO, 2),
        (Rank.SEVEN, 7),
        (Rank.TEN, 10),
        (Rank.JACK, 10),
        (Rank.QUEEN, 10),
        (Rank.KING, 10),
    ],
)
def test_base_value(rank, value):
    assert rank.base_value == value
    assert Card(Suit.DIAMONDS, rank).base_value == value


def test_numeral_base_values_match_face_value():
    numerals = [r for r in Rank if r.value.isdigit()]
    assert len(numerals) == 9
    for rank in numerals:
        assert rank.base_value == int(rank.value)


def test_display_key():
    assert Card(Suit.SPADES, Rank.ACE).display_key == "spades_ace"
    assert Card(Suit.HEARTS, Rank.TEN).display_key == "hearts_10"
    assert Card(Suit.CLUBS, Rank.KING).display_key == "clubs_king"


def test_from_display_key_round_trips_every_card():
    for suit in Suit:
        for rank in Rank:
            card = Card(suit, rank)
            assert Card.from_display_key(card.display_key) == card


@pytest.mark.parametrize("key", ["", "spades", "spades_11", "cups_ace", "ace_spades"])
def test_from_display_key_rejects_unknown_keys(key):
    with pytest.raises(ValueError):
        Card.from_display_key(key)


def test_card_equality():
    card1 = Card(Suit.HEARTS, Rank.EIGHT)
    card2 = Card(Suit.HEARTS, Rank.EIGHT)
    card3 = Card(Suit.CLUBS, Rank.EIGHT)
    card4 = Card(Suit.HEARTS, Rank.NINE)

    assert card1 == card2
    assert card1 != card3
    assert card1 != card4


def test_card_hash():
    card1 = Card(Suit.HEARTS, Rank.EIGHT)
    card2 = Card(Suit.HEARTS, Rank.EIGHT)
    card3 = Card(Suit.CLUBS, Rank.NINE)

    card_dict = {}
    card_dict[card1] = "card1"
    card_dict[card2] = "card2"
    card_dict[card3] = "card3"

    assert len(card_dict) == 2
    assert card_dict[card1] == "card2"
    assert card_dict[card3] == "card3"


def test_suit_symbols():
    assert [str(suit) for suit in Suit] == ["♥", "♦", "♣", "♠"]
