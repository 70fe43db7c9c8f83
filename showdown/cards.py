from enum import IntEnum
from dataclasses import dataclass
from dataclasses import replace

ACE = 14

_FACES = dict(J=11, Q=12, K=13, A=ACE)
_FACE_NAMES = dict((value, name) for (name, value) in _FACES.items())


class NotACard(ValueError):
    pass


class Suit(IntEnum):
    # Only produced for undecodable input
    UNKNOWN = 0
    CLUB = 1
    DIAMOND = 2
    HEART = 3
    SPADE = 4

    @classmethod
    def from_abbrev(cls, ch):
        return _ABBREVS.get(ch.upper(), cls.UNKNOWN)

    @property
    def abbrev(self):
        return self.name[0] if self is not Suit.UNKNOWN else "?"


_ABBREVS = dict(S=Suit.SPADE, H=Suit.HEART, D=Suit.DIAMOND, C=Suit.CLUB)


@dataclass(frozen=True, order=False)
class Card:
    rank: int
    suit: Suit

    # Cards order by rank alone. Equality still includes the suit, so that two
    # copies of the same card can be told apart from a pair.
    def __lt__(self, other):
        return self.rank < other.rank

    def __le__(self, other):
        return self.rank <= other.rank

    def __gt__(self, other):
        return self.rank > other.rank

    def __ge__(self, other):
        return self.rank >= other.rank

    def low_ace(self):
        """The same card with an ace counted as 1, for wheel straights."""
        if self.rank != ACE:
            return self

        return replace(self, rank=1)

    def __str__(self):
        rank = ACE if self.rank == 1 else self.rank
        return _FACE_NAMES.get(rank, str(rank)) + self.suit.abbrev


def parse_rank(text: str) -> int:
    text = text.upper()
    if text in _FACES:
        return _FACES[text]

    # Only plain digits: int() would also accept "+5" or " 5". 11 to 14 are
    # numeric spellings of the face cards.
    if text.isdigit() and not text.startswith("0") and 2 <= int(text) <= ACE:
        return int(text)

    raise NotACard(f"Unknown rank {text!r}")


def parse_card(token: str) -> Card:
    # The suit is always the last character; "10" makes the rank two wide
    if not 2 <= len(token) <= 3:
        raise NotACard(f"Malformed card {token!r}")

    suit = Suit.from_abbrev(token[-1])
    if suit is Suit.UNKNOWN:
        raise NotACard(f"Unknown suit {token[-1]!r} in {token!r}")

    return Card(parse_rank(token[:-1]), suit)
