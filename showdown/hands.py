import logging
from enum import IntEnum
from dataclasses import dataclass
from functools import total_ordering
from typing import List
from typing import Sequence
from typing import Tuple

from showdown.cards import ACE
from showdown.cards import Card
from showdown.cards import NotACard
from showdown.cards import parse_card

logger = logging.getLogger(__name__)

HAND_SIZE = 5


class Category(IntEnum):
    # Placeholder before classification; a classified hand never has it
    UNRANKED = 0
    HIGH_CARD = 1
    ONE_PAIR = 2
    TWO_PAIR = 3
    THREE_OF_A_KIND = 4
    STRAIGHT = 5
    FLUSH = 6
    FULL_HOUSE = 7
    FOUR_OF_A_KIND = 8
    STRAIGHT_FLUSH = 9


class InvalidHand(ValueError):
    """A hand string that cannot be played. Identifies the offending hand by its
    position in the input and by the string itself."""

    def __init__(self, index, hand, reason):
        super().__init__(reason, index, hand)
        self.index = index
        self.hand = hand
        self.reason = reason

    def __str__(self):
        return f"Hand {self.index} ({self.hand!r}): {self.reason}"


class WrongCardCount(InvalidHand):
    pass


class BadCard(InvalidHand):
    pass


class DuplicateCard(InvalidHand):
    pass


def _ranks(cards):
    return tuple(card.rank for card in cards)


@total_ordering
@dataclass(frozen=True, eq=False)
class Hand:
    original_index: int

    # Ascending by rank, aces as 14
    cards: Tuple[Card, ...]
    category: Category = Category.UNRANKED

    # In comparison order. The ace of a wheel (A-2-3-4-5) is held as rank 1.
    ranked_group: Tuple[Card, ...] = ()

    # Descending, aces always high
    kickers: Tuple[Card, ...] = ()
    used_ace_low: bool = False

    @property
    def sort_key(self):
        return (self.category, _ranks(self.ranked_group), _ranks(self.kickers))

    @property
    def top_rank(self):
        """The highest rank that counts for this hand: 5 for a wheel."""
        if self.ranked_group:
            return self.ranked_group[0].rank

        return self.kickers[0].rank

    # Suits never matter: two hands are equal when their categories match and
    # their ranks match position by position.
    def __eq__(self, other):
        if not isinstance(other, Hand):
            return NotImplemented

        return self.category == other.category and _ranks(self.cards) == _ranks(
            other.cards
        )

    def __hash__(self):
        return hash((self.category, _ranks(self.cards)))

    def __lt__(self, other):
        if not isinstance(other, Hand):
            return NotImplemented

        return self.sort_key < other.sort_key


def compare(a: Hand, b: Hand) -> int:
    if a == b:
        return 0

    return 1 if a > b else -1


def _is_run(cards):
    return all(b.rank == a.rank + 1 for a, b in zip(cards, cards[1:]))


def _is_flush(cards):
    return all(card.suit == cards[0].suit for card in cards)


def _find_run(cards):
    """Returns the cards highest first if they make a straight, along with
    whether the ace had to play low to make it."""
    if _is_run(cards):
        return cards[::-1], False

    low_cards = sorted(card.low_ace() for card in cards)
    if _is_run(low_cards):
        return low_cards[::-1], True

    return None, False


def _get_rank_groups(cards) -> List[List[Card]]:
    slots: List[List[Card]] = [[] for _ in range(ACE + 1)]
    for card in cards:
        slots[card.rank].append(card)

    # Largest group first; the sort is stable so ties stay highest rank first
    groups = [group for group in slots[::-1] if group]
    return sorted(groups, key=len, reverse=True)


# Each check returns (category, ranked group, kickers, used_ace_low) or None.
# They are only meaningful when tried in descending order: a straight flush is
# also a flush, a full house also holds a set, and so on.


def get_straight_flush(cards, groups):
    if not _is_flush(cards):
        return None

    run, used_ace_low = _find_run(cards)
    if run is None:
        return None

    return Category.STRAIGHT_FLUSH, run, [], used_ace_low


def get_quad(cards, groups):
    if len(groups) == 2 and len(groups[0]) == 4:
        return Category.FOUR_OF_A_KIND, groups[0], groups[1], False


def get_full_house(cards, groups):
    if len(groups) == 2 and len(groups[0]) == 3:
        return Category.FULL_HOUSE, groups[0] + groups[1], [], False


def get_flush(cards, groups):
    if _is_flush(cards):
        return Category.FLUSH, cards[::-1], [], False


def get_straight(cards, groups):
    run, used_ace_low = _find_run(cards)
    if run is not None:
        return Category.STRAIGHT, run, [], used_ace_low


def get_set(cards, groups):
    if len(groups) == 3 and len(groups[0]) == 3:
        return Category.THREE_OF_A_KIND, groups[0], groups[1] + groups[2], False


def get_two_pairs(cards, groups):
    if len(groups) == 3 and len(groups[0]) == 2:
        # groups[0] is the higher pair
        return Category.TWO_PAIR, groups[0] + groups[1], groups[2], False


def get_pair(cards, groups):
    if len(groups) == 4:
        return Category.ONE_PAIR, groups[0], sum(groups[1:], []), False


def get_high_card(cards, groups):
    if len(groups) == HAND_SIZE:
        return Category.HIGH_CARD, [], cards, False


_CHECKS = [
    get_straight_flush,
    get_quad,
    get_full_house,
    get_flush,
    get_straight,
    get_set,
    get_two_pairs,
    get_pair,
    get_high_card,
]


def classify(cards, index=0) -> Hand:
    cards = tuple(sorted(cards))
    if len(cards) != HAND_SIZE:
        raise ValueError("A hand has exactly five cards", cards)

    groups = _get_rank_groups(cards)
    for check in _CHECKS:
        found = check(cards, groups)
        if found is None:
            continue

        category, ranked, kickers, used_ace_low = found
        return Hand(
            original_index=index,
            cards=cards,
            category=category,
            ranked_group=tuple(ranked),
            kickers=tuple(sorted(kickers, reverse=True)),
            used_ace_low=used_ace_low,
        )

    # Unreachable for five cards
    raise RuntimeError("Hand matched no category", cards)


def parse_hand(text: str, index: int = 0) -> Hand:
    tokens = text.split(" ")
    if len(tokens) != HAND_SIZE:
        raise WrongCardCount(
            index, text, f"Expected {HAND_SIZE} space separated cards"
        )

    try:
        cards = [parse_card(token) for token in tokens]
    except NotACard as ex:
        raise BadCard(index, text, ex.args[0]) from ex

    seen = set()
    for card in cards:
        if card in seen:
            raise DuplicateCard(index, text, f"{card} appears more than once")

        seen.add(card)

    return classify(cards, index)


def _get_winners(hands):
    evaluated_hands = [
        (owner, parse_hand(text, index)) for index, (owner, text) in enumerate(hands)
    ]
    if not evaluated_hands:
        return

    best = max(hand for (_, hand) in evaluated_hands)
    for owner, hand in evaluated_hands:
        # Nothing can beat the maximum; equal ones share the win
        if hand == best:
            yield owner, hand


def get_winners(hands):
    """Takes (owner, hand string) pairs and returns the (owner, Hand) pairs that
    tie for the best hand, in the order they were given."""
    winners = list(_get_winners(hands))
    logger.debug("Winners: %s", winners)
    return winners


def winning_hands(hands: Sequence[str]) -> List[str]:
    hands = list(hands)
    winners = get_winners(enumerate(hands))

    # The caller's own string objects, not rebuilt ones
    return [hands[hand.original_index] for (_, hand) in winners]
