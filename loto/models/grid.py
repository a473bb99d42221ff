"""A single playable grid: main numbers plus "chance" (bonus) numbers.

A grid prices itself from its sizes when created and, once a winning grid is
attached, scores itself against it. The winning grid is shared by every grid
of a draw; it is only read, never copied or modified.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from math import factorial
from typing import Iterable

from loto.errors import MissingReferenceError, RangeError, ValidationError
from loto.utils.sampling import draw_unique

NUMBER_MIN = 1
NUMBER_MAX = 49
MAIN_COUNT_MIN = 5
MAIN_COUNT_MAX = 9

BONUS_NUMBER_MIN = 1
BONUS_NUMBER_MAX = 10
BONUS_COUNT_MIN = 1
BONUS_COUNT_MAX = 10

# Euros per grid, before the combinatorial multiplier.
BASE_STAKE = 2

NO_RANK = 0
CHANCE_RANK = 6
COMPLEMENTARY_RANKS = (9, 10, 11)

# (matched main, any bonus matched) -> rank
RANK_TABLE: dict[tuple[int, bool], int] = {
    (5, True): 1,
    (5, False): 2,
    (4, True): 9,
    (4, False): 3,
    (3, True): 10,
    (3, False): 4,
    (2, True): 11,
    (2, False): 5,
    (1, True): CHANCE_RANK,
    (0, True): CHANCE_RANK,
}

# main count -> highest bonus count a random grid may take
_RANDOM_BONUS_BOUNDS = {
    9: 1,
    8: 3,
    7: 8,
}


def combinations_count(n: int, k: int) -> int:
    """Binomial coefficient C(n, k) computed from factorials."""

    if k < 0 or k > n:
        return 0
    return factorial(n) // (factorial(k) * factorial(n - k))


def compute_stake(main_count: int, bonus_count: int) -> int:
    return bonus_count * combinations_count(main_count, MAIN_COUNT_MIN) * BASE_STAKE


def rank_for(matched_main: int, matched_bonus: int) -> int:
    """Map match counts to a prize rank (0 = no prize)."""

    return RANK_TABLE.get((int(matched_main), int(matched_bonus) > 0), NO_RANK)


def random_main_count(rng: random.Random | None = None) -> int:
    return (rng or random).randint(MAIN_COUNT_MIN, MAIN_COUNT_MAX)


def random_bonus_count(main_count: int, rng: random.Random | None = None) -> int:
    bound = _RANDOM_BONUS_BOUNDS.get(int(main_count), BONUS_COUNT_MAX)
    return (rng or random).randint(BONUS_COUNT_MIN, bound)


def check_sizes(main_count: int, bonus_count: int) -> None:
    if not MAIN_COUNT_MIN <= main_count <= MAIN_COUNT_MAX:
        raise RangeError(
            message=(
                f"Requested main number count ({main_count}) is out of range "
                f"({MAIN_COUNT_MIN} to {MAIN_COUNT_MAX})"
            ),
            details={"main_count": main_count},
        )
    if not BONUS_COUNT_MIN <= bonus_count <= BONUS_COUNT_MAX:
        raise RangeError(
            message=(
                f"Requested bonus number count ({bonus_count}) is out of range "
                f"({BONUS_COUNT_MIN} to {BONUS_COUNT_MAX})"
            ),
            details={"bonus_count": bonus_count},
        )


@dataclass(frozen=True)
class SizingPolicy:
    """How many main and bonus numbers a new grid gets.

    ``main_count``/``bonus_count`` of ``None`` means "random", following the
    bound table used for random grids.
    """

    main_count: int | None = MAIN_COUNT_MIN
    bonus_count: int | None = BONUS_COUNT_MIN

    @classmethod
    def fixed(cls, main_count: int = MAIN_COUNT_MIN, bonus_count: int = BONUS_COUNT_MIN) -> SizingPolicy:
        return cls(main_count=int(main_count), bonus_count=int(bonus_count))

    @classmethod
    def random(cls) -> SizingPolicy:
        return cls(main_count=None, bonus_count=None)

    @property
    def is_random(self) -> bool:
        return self.main_count is None

    def resolve(self, rng: random.Random | None = None) -> tuple[int, int]:
        main_count = self.main_count
        if main_count is None:
            main_count = random_main_count(rng)

        bonus_count = self.bonus_count
        if bonus_count is None:
            bonus_count = random_bonus_count(main_count, rng)

        return main_count, bonus_count


class Grid:
    """One playable combination with its stake and, once scored, its rank."""

    def __init__(self, main_numbers: Iterable[int], bonus_numbers: Iterable[int]) -> None:
        main = tuple(int(n) for n in main_numbers)
        bonus = tuple(int(n) for n in bonus_numbers)

        check_sizes(len(main), len(bonus))
        self._check_numbers("main_numbers", main, NUMBER_MIN, NUMBER_MAX)
        self._check_numbers("bonus_numbers", bonus, BONUS_NUMBER_MIN, BONUS_NUMBER_MAX)

        self._main = main
        self._bonus = bonus
        self._main_set = frozenset(main)
        self._bonus_set = frozenset(bonus)
        self._stake = compute_stake(len(main), len(bonus))

        self._winning: Grid | None = None
        self._matched_main = 0
        self._matched_bonus = 0
        self._rank = NO_RANK

    @staticmethod
    def _check_numbers(field: str, numbers: tuple[int, ...], lo: int, hi: int) -> None:
        bad = [n for n in numbers if n < lo or n > hi]
        if bad:
            raise RangeError(
                message=f"{field} must be within {lo}..{hi}",
                details={field: bad},
            )
        if len(set(numbers)) != len(numbers):
            raise ValidationError(
                message=f"{field} must be unique",
                details={field: list(numbers)},
            )

    @classmethod
    def draw(
        cls,
        main_count: int = MAIN_COUNT_MIN,
        bonus_count: int = BONUS_COUNT_MIN,
        *,
        rng: random.Random | None = None,
    ) -> Grid:
        """Fill a grid of the given sizes with random numbers."""

        main_count, bonus_count = int(main_count), int(bonus_count)
        check_sizes(main_count, bonus_count)
        main = draw_unique(main_count, NUMBER_MIN, NUMBER_MAX, rng)
        bonus = draw_unique(bonus_count, BONUS_NUMBER_MIN, BONUS_NUMBER_MAX, rng)
        return cls(main, bonus)

    @classmethod
    def random(cls, *, rng: random.Random | None = None) -> Grid:
        return cls.from_policy(SizingPolicy.random(), rng=rng)

    @classmethod
    def from_policy(cls, policy: SizingPolicy, *, rng: random.Random | None = None) -> Grid:
        main_count, bonus_count = policy.resolve(rng)
        return cls.draw(main_count, bonus_count, rng=rng)

    def attach_winning(self, winning: Grid | None) -> int:
        """Score this grid against ``winning`` and return the resulting rank.

        Match counts restart from zero on every call.
        """

        if winning is None:
            raise MissingReferenceError(message="The winning grid supplied is None")

        self._winning = winning
        self._matched_main = sum(1 for n in self._main if n in winning._main_set)
        self._matched_bonus = sum(1 for n in self._bonus if n in winning._bonus_set)
        self._rank = rank_for(self._matched_main, self._matched_bonus)
        return self._rank

    def rescore(self) -> int:
        if self._winning is None:
            raise MissingReferenceError(message="No winning grid attached to compare against")
        return self.attach_winning(self._winning)

    @property
    def main_numbers(self) -> tuple[int, ...]:
        return self._main

    @property
    def bonus_numbers(self) -> tuple[int, ...]:
        return self._bonus

    @property
    def sorted_main(self) -> list[int]:
        return sorted(self._main)

    @property
    def sorted_bonus(self) -> list[int]:
        return sorted(self._bonus)

    @property
    def main_count(self) -> int:
        return len(self._main)

    @property
    def bonus_count(self) -> int:
        return len(self._bonus)

    @property
    def stake(self) -> int:
        return self._stake

    @property
    def winning(self) -> Grid | None:
        return self._winning

    @property
    def matched_main(self) -> int:
        return self._matched_main

    @property
    def matched_bonus(self) -> int:
        return self._matched_bonus

    @property
    def rank(self) -> int:
        return self._rank

    @property
    def is_winner(self) -> bool:
        return self._rank != NO_RANK

    @property
    def is_complementary(self) -> bool:
        return self._rank in COMPLEMENTARY_RANKS

    def to_dict(self) -> dict[str, object]:
        return {
            "main_numbers": self.sorted_main,
            "bonus_numbers": self.sorted_bonus,
            "stake": self._stake,
            "matched_main": self._matched_main,
            "matched_bonus": self._matched_bonus,
            "rank": self._rank,
        }

    def __repr__(self) -> str:
        return f"Grid(main={self.sorted_main}, bonus={self.sorted_bonus}, stake={self._stake}, rank={self._rank})"
