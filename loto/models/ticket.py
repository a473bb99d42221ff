"""A ticket: a bundle of 1 to 6 grids played against the same winning grid."""

from __future__ import annotations

import random

from loto.errors import RangeError, ValidationError
from loto.models.grid import Grid, SizingPolicy

GRID_COUNT_MIN = 1
GRID_COUNT_MAX = 6

# Requested grid count meaning "pick a random count and random grid sizes".
RANDOM_GRID_COUNT = 0


def check_ticket_id(ticket_id: int | None) -> int:
    """Ids are positive; 0 means "unassigned"."""

    if ticket_id is None or int(ticket_id) < 0:
        raise ValidationError(
            message="Invalid ticket id",
            details={"ticket_id": ["Must be a positive integer (0 = unassigned)"]},
        )
    return int(ticket_id)


class Ticket:
    """Immutable once built: grids are drawn and scored in the constructor."""

    def __init__(
        self,
        ticket_id: int,
        grid_count: int | None,
        winning: Grid | None,
        *,
        sizing: SizingPolicy | None = None,
        rng: random.Random | None = None,
    ) -> None:
        ticket_id = check_ticket_id(ticket_id)

        random_mode = grid_count is None or int(grid_count) == RANDOM_GRID_COUNT
        if random_mode:
            count = (rng or random).randint(GRID_COUNT_MIN, GRID_COUNT_MAX)
        else:
            count = int(grid_count)

        if not GRID_COUNT_MIN <= count <= GRID_COUNT_MAX:
            raise RangeError(
                message=(
                    f"Requested grid count ({count}) is out of range "
                    f"({GRID_COUNT_MIN} to {GRID_COUNT_MAX})"
                ),
                details={"grid_count": count},
            )

        if sizing is None:
            sizing = SizingPolicy.random() if random_mode else SizingPolicy.fixed()

        grids: list[Grid] = []
        for _ in range(count):
            grid = Grid.from_policy(sizing, rng=rng)
            if winning is not None:
                grid.attach_winning(winning)
            grids.append(grid)

        self._id = ticket_id
        self._winning = winning
        self._grids = tuple(grids)
        self._total_stake = sum(g.stake for g in grids)

    @classmethod
    def from_grids(cls, ticket_id: int, grids: list[Grid], winning: Grid | None = None) -> Ticket:
        """Bundle pre-built grids (e.g. forced combinations) into a ticket."""

        ticket_id = check_ticket_id(ticket_id)

        if not GRID_COUNT_MIN <= len(grids) <= GRID_COUNT_MAX:
            raise RangeError(
                message=(
                    f"Requested grid count ({len(grids)}) is out of range "
                    f"({GRID_COUNT_MIN} to {GRID_COUNT_MAX})"
                ),
                details={"grid_count": len(grids)},
            )

        ticket = cls.__new__(cls)
        for grid in grids:
            if winning is not None:
                grid.attach_winning(winning)
        ticket._id = ticket_id
        ticket._winning = winning
        ticket._grids = tuple(grids)
        ticket._total_stake = sum(g.stake for g in grids)
        return ticket

    @property
    def id(self) -> int:
        return self._id

    @property
    def grids(self) -> tuple[Grid, ...]:
        return self._grids

    @property
    def grid_count(self) -> int:
        return len(self._grids)

    @property
    def total_stake(self) -> int:
        return self._total_stake

    @property
    def winning(self) -> Grid | None:
        return self._winning

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self._id,
            "total_stake": self._total_stake,
            "grids": [g.to_dict() for g in self._grids],
        }

    def __repr__(self) -> str:
        return f"Ticket(id={self._id}, grids={len(self._grids)}, total_stake={self._total_stake})"
