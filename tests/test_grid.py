from __future__ import annotations

import random

import pytest

from loto.errors import MissingReferenceError, RangeError, ValidationError
from loto.models.grid import (
    Grid,
    SizingPolicy,
    combinations_count,
    compute_stake,
    rank_for,
)
from loto.utils.sampling import draw_unique


def test_draw_unique_stays_in_range_without_duplicates(rng):
    for _ in range(200):
        nums = draw_unique(9, 1, 49, rng)
        assert len(nums) == 9
        assert len(set(nums)) == 9
        assert all(1 <= n <= 49 for n in nums)


def test_draw_unique_can_exhaust_the_range(rng):
    assert sorted(draw_unique(10, 1, 10, rng)) == list(range(1, 11))


def test_draw_unique_rejects_impossible_count(rng):
    with pytest.raises(ValueError):
        draw_unique(11, 1, 10, rng)


def test_generated_grids_hold_unique_numbers_in_range(rng):
    for _ in range(500):
        grid = Grid.random(rng=rng)
        assert 5 <= grid.main_count <= 9
        assert 1 <= grid.bonus_count <= 10
        assert len(set(grid.main_numbers)) == grid.main_count
        assert len(set(grid.bonus_numbers)) == grid.bonus_count
        assert all(1 <= n <= 49 for n in grid.main_numbers)
        assert all(1 <= n <= 10 for n in grid.bonus_numbers)


def test_combinations_count():
    assert combinations_count(5, 5) == 1
    assert combinations_count(6, 5) == 6
    assert combinations_count(9, 5) == 126
    assert combinations_count(4, 5) == 0


def test_stake_formula():
    assert compute_stake(5, 1) == 2
    assert compute_stake(6, 2) == 24
    assert compute_stake(9, 1) == 252


def test_drawn_grid_stake_matches_its_sizes(rng):
    assert Grid.draw(5, 1, rng=rng).stake == 2
    assert Grid.draw(6, 2, rng=rng).stake == 24


def test_default_grid_uses_minimum_sizes(rng):
    grid = Grid.draw(rng=rng)
    assert grid.main_count == 5
    assert grid.bonus_count == 1
    assert grid.rank == 0
    assert grid.winning is None


@pytest.mark.parametrize(
    "matched_main, matched_bonus, expected",
    [
        (5, 1, 1),
        (5, 0, 2),
        (4, 1, 9),
        (4, 0, 3),
        (3, 2, 10),
        (3, 0, 4),
        (2, 1, 11),
        (2, 0, 5),
        (1, 1, 6),
        (0, 3, 6),
        (1, 0, 0),
        (0, 0, 0),
        (6, 1, 0),
    ],
)
def test_rank_table(matched_main, matched_bonus, expected):
    assert rank_for(matched_main, matched_bonus) == expected


@pytest.mark.parametrize("main_count, bonus_count", [(10, 1), (4, 1), (5, 0), (5, 11)])
def test_out_of_range_sizes_raise(main_count, bonus_count, rng):
    with pytest.raises(RangeError):
        Grid.draw(main_count, bonus_count, rng=rng)


def test_range_error_is_an_index_error(rng):
    with pytest.raises(IndexError):
        Grid.draw(10, 1, rng=rng)


def test_explicit_numbers_are_validated():
    with pytest.raises(RangeError):
        Grid([1, 2, 3, 4, 50], [1])
    with pytest.raises(RangeError):
        Grid([1, 2, 3, 4, 5], [11])
    with pytest.raises(ValidationError):
        Grid([1, 2, 3, 4, 4], [1])


def test_random_sizing_respects_bonus_bounds(rng):
    bounds = {9: 1, 8: 3, 7: 8, 6: 10, 5: 10}
    seen_main: set[int] = set()
    policy = SizingPolicy.random()
    for _ in range(3000):
        main_count, bonus_count = policy.resolve(rng)
        seen_main.add(main_count)
        assert 1 <= bonus_count <= bounds[main_count]
    assert seen_main == {5, 6, 7, 8, 9}


def test_fixed_policy_resolves_to_its_sizes(rng):
    assert SizingPolicy.fixed(7, 3).resolve(rng) == (7, 3)
    assert not SizingPolicy.fixed().is_random
    assert SizingPolicy.random().is_random


def test_scoring_counts_matches():
    winning = Grid([1, 2, 3, 4, 5], [7])
    grid = Grid([1, 2, 3, 40, 41, 42], [7, 8])

    assert grid.attach_winning(winning) == 10
    assert grid.matched_main == 3
    assert grid.matched_bonus == 1
    assert grid.is_winner
    assert grid.is_complementary


def test_scoring_is_order_independent():
    winning = Grid([5, 4, 3, 2, 1], [7])
    grid = Grid([1, 2, 3, 4, 5], [6])
    grid.attach_winning(winning)
    assert grid.rank == 2


def test_attaching_twice_does_not_accumulate(rng):
    winning = Grid.draw(rng=rng)
    grid = Grid(winning.main_numbers, winning.bonus_numbers)

    grid.attach_winning(winning)
    first = (grid.matched_main, grid.matched_bonus, grid.rank)
    grid.attach_winning(winning)
    assert (grid.matched_main, grid.matched_bonus, grid.rank) == first == (5, 1, 1)
    assert grid.rescore() == 1


def test_attach_none_raises(rng):
    grid = Grid.draw(rng=rng)
    with pytest.raises(MissingReferenceError):
        grid.attach_winning(None)


def test_rescore_without_winning_raises(rng):
    with pytest.raises(MissingReferenceError):
        Grid.draw(rng=rng).rescore()


def test_scoring_never_touches_the_winning_grid():
    winning = Grid([1, 2, 3, 4, 5], [1])
    before = (winning.main_numbers, winning.bonus_numbers, winning.rank, winning.winning)
    Grid([1, 2, 3, 4, 6], [1]).attach_winning(winning)
    assert (winning.main_numbers, winning.bonus_numbers, winning.rank, winning.winning) == before


def test_display_sort_does_not_reorder_storage():
    grid = Grid([9, 3, 7, 1, 5], [4, 2])
    assert grid.sorted_main == [1, 3, 5, 7, 9]
    assert grid.sorted_bonus == [2, 4]
    assert grid.main_numbers == (9, 3, 7, 1, 5)


def test_same_seed_draws_same_grid():
    a = Grid.random(rng=random.Random(99))
    b = Grid.random(rng=random.Random(99))
    assert a.main_numbers == b.main_numbers
    assert a.bonus_numbers == b.bonus_numbers
