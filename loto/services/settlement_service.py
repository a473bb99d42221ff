"""Draw simulation and settlement.

Generates tickets against one winning grid, folds every grid's rank into
per-tier winner counts and splits the collected stakes into prize pools.
"""

from __future__ import annotations

import logging
import random
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from decimal import Decimal
from threading import Lock
from typing import Callable, Iterable

from loto.errors import ValidationError
from loto.models.grid import CHANCE_RANK, COMPLEMENTARY_RANKS, Grid
from loto.models.ticket import RANDOM_GRID_COUNT, Ticket
from loto.utils.money import round2

logger = logging.getLogger(__name__)

TIERS = (1, 2, 3, 4, 5, 6)

# Share of the total stake paid into each tier's pool.
# These do not add up to 100%; the remainder is never paid out.
POOL_SHARES: dict[int, Decimal] = {
    1: Decimal("0.1953"),
    2: Decimal("0.0506"),
    3: Decimal("0.1089"),
    4: Decimal("0.0472"),
    5: Decimal("0.3372"),
    6: Decimal("0.1887"),
}

TICKET_COUNT_MIN = 1
TICKET_COUNT_MAX = 1_000_000


class TicketSequence:
    """Hands out strictly increasing ticket ids for one run."""

    def __init__(self, start: int = 1) -> None:
        if int(start) < 1:
            raise ValueError("start must be >= 1")
        self._lock = Lock()
        self._next = int(start)

    def next(self) -> int:
        with self._lock:
            value = self._next
            self._next += 1
            return value

    def reserve(self, count: int) -> range:
        """Reserve ``count`` consecutive ids at once."""

        if int(count) < 0:
            raise ValueError("count must be >= 0")
        with self._lock:
            first = self._next
            self._next += int(count)
            return range(first, first + int(count))

    @property
    def peek(self) -> int:
        return self._next


@dataclass
class TierTally:
    """Winner counts per tier plus run totals.

    Ranks 9, 10 and 11 count for their simple tier (rank - 6) and for the
    chance tier as well.
    """

    winners: dict[int, int] = field(default_factory=lambda: {t: 0 for t in TIERS})
    tickets: int = 0
    grids: int = 0
    total_stake: int = 0

    def add_grid(self, rank: int) -> None:
        self.grids += 1
        if rank in COMPLEMENTARY_RANKS:
            self.winners[rank - CHANCE_RANK] += 1
            self.winners[CHANCE_RANK] += 1
        elif 1 <= rank <= CHANCE_RANK:
            self.winners[rank] += 1

    def add_ticket(self, ticket: Ticket) -> None:
        self.tickets += 1
        self.total_stake += ticket.total_stake
        for grid in ticket.grids:
            self.add_grid(grid.rank)

    def merge(self, other: TierTally) -> TierTally:
        for tier in TIERS:
            self.winners[tier] += other.winners[tier]
        self.tickets += other.tickets
        self.grids += other.grids
        self.total_stake += other.total_stake
        return self

    @classmethod
    def from_tickets(cls, tickets: Iterable[Ticket]) -> TierTally:
        tally = cls()
        for ticket in tickets:
            tally.add_ticket(ticket)
        return tally


def split_pool(total_stake: int | Decimal) -> dict[int, Decimal]:
    total = Decimal(total_stake)
    return {tier: round2(POOL_SHARES[tier] * total) for tier in TIERS}


@dataclass(frozen=True)
class TierResult:
    tier: int
    pool: Decimal
    winners: int
    payout_per_grid: Decimal | None


@dataclass(frozen=True)
class SettlementResult:
    total_stake: int
    tiers: list[TierResult]
    unclaimed_stake: Decimal

    def tier(self, tier: int) -> TierResult:
        return self.tiers[tier - 1]

    @property
    def pools(self) -> dict[int, Decimal]:
        return {t.tier: t.pool for t in self.tiers}

    @property
    def winners(self) -> dict[int, int]:
        return {t.tier: t.winners for t in self.tiers}


class DrawSettlement:
    """Turn a tally into pools, per-grid payouts and the unclaimed remainder."""

    def settle(self, tally: TierTally) -> SettlementResult:
        pools = split_pool(tally.total_stake)

        tiers: list[TierResult] = []
        paid_out = Decimal(0)
        for tier in TIERS:
            count = int(tally.winners[tier])
            payout: Decimal | None = None
            if count > 0:
                payout = round2(pools[tier] / count)
                paid_out += pools[tier]
            tiers.append(TierResult(tier=tier, pool=pools[tier], winners=count, payout_per_grid=payout))

        return SettlementResult(
            total_stake=int(tally.total_stake),
            tiers=tiers,
            unclaimed_stake=round2(Decimal(tally.total_stake) - paid_out),
        )


@dataclass(frozen=True)
class SimulationResult:
    draw_date: str
    winning: Grid
    tally: TierTally
    settlement: SettlementResult
    tickets: list[Ticket]
    elapsed_seconds: float


@dataclass
class _ShardResult:
    tally: TierTally
    tickets: list[Ticket]


class SimulationService:
    """Run one simulated draw."""

    def __init__(self, settlement: DrawSettlement | None = None, max_tickets: int = TICKET_COUNT_MAX) -> None:
        self._settlement = settlement or DrawSettlement()
        self._max_tickets = int(max_tickets)

    def _check_ticket_count(self, ticket_count: int) -> int:
        try:
            count = int(ticket_count)
        except (TypeError, ValueError) as exc:
            raise ValidationError(
                message="Invalid ticket_count",
                details={"ticket_count": ["Must be an integer"]},
            ) from exc
        if count < TICKET_COUNT_MIN or count > self._max_tickets:
            raise ValidationError(
                message="Invalid ticket_count",
                details={"ticket_count": [f"Must be within {TICKET_COUNT_MIN}..{self._max_tickets}"]},
            )
        return count

    @staticmethod
    def score(
        main_numbers: Iterable[int],
        bonus_numbers: Iterable[int],
        winning_main: Iterable[int],
        winning_bonus: Iterable[int],
    ) -> Grid:
        """Score an explicit grid against an explicit winning grid."""

        winning = Grid(winning_main, winning_bonus)
        grid = Grid(main_numbers, bonus_numbers)
        grid.attach_winning(winning)
        return grid

    @staticmethod
    def _run_shard(
        ids: range,
        winning: Grid,
        rng: random.Random,
        keep_tickets: bool,
        on_ticket: Callable[[Ticket], None] | None = None,
    ) -> _ShardResult:
        tally = TierTally()
        kept: list[Ticket] = []
        for ticket_id in ids:
            ticket = Ticket(ticket_id, RANDOM_GRID_COUNT, winning, rng=rng)
            tally.add_ticket(ticket)
            if keep_tickets:
                kept.append(ticket)
            if on_ticket is not None:
                on_ticket(ticket)
        return _ShardResult(tally=tally, tickets=kept)

    def run(
        self,
        ticket_count: int,
        *,
        draw_date: str = "",
        verbose: bool = False,
        workers: int = 1,
        seed: int | None = None,
        winning: Grid | None = None,
        sequence: TicketSequence | None = None,
        on_ticket: Callable[[Ticket], None] | None = None,
    ) -> SimulationResult:
        """Draw the winning grid, generate ``ticket_count`` random tickets and settle.

        ``on_ticket`` is called once per generated ticket, from the worker
        that built it.
        """

        count = self._check_ticket_count(ticket_count)
        workers = max(1, int(workers or 1))
        rng = random.Random(seed)
        sequence = sequence or TicketSequence()

        if winning is None:
            winning = Grid.draw(rng=rng)

        logger.info("Simulating draw %s: %d tickets, %d worker(s)", draw_date or "-", count, workers)
        started = time.perf_counter()

        if workers == 1:
            shard = self._run_shard(sequence.reserve(count), winning, rng, verbose, on_ticket)
            tally, tickets = shard.tally, shard.tickets
        else:
            tally, tickets = self._run_sharded(count, workers, winning, rng, sequence, verbose, on_ticket)

        settlement = self._settlement.settle(tally)
        elapsed = time.perf_counter() - started
        logger.info(
            "Draw settled: %d tickets, %d grids, total stake %d, unclaimed %s (%.3fs)",
            tally.tickets,
            tally.grids,
            tally.total_stake,
            settlement.unclaimed_stake,
            elapsed,
        )

        return SimulationResult(
            draw_date=draw_date,
            winning=winning,
            tally=tally,
            settlement=settlement,
            tickets=tickets,
            elapsed_seconds=elapsed,
        )

    def _run_sharded(
        self,
        count: int,
        workers: int,
        winning: Grid,
        rng: random.Random,
        sequence: TicketSequence,
        keep_tickets: bool,
        on_ticket: Callable[[Ticket], None] | None,
    ) -> tuple[TierTally, list[Ticket]]:
        # Ids and per-shard random streams are fixed before dispatch.
        size, extra = divmod(count, workers)
        jobs: list[tuple[range, random.Random]] = []
        for i in range(workers):
            shard_size = size + (1 if i < extra else 0)
            if shard_size == 0:
                continue
            jobs.append((sequence.reserve(shard_size), random.Random(rng.getrandbits(64))))

        logger.debug("Dispatching %d shard(s)", len(jobs))
        with ThreadPoolExecutor(max_workers=len(jobs)) as pool:
            futures = [
                pool.submit(self._run_shard, ids, winning, shard_rng, keep_tickets, on_ticket)
                for ids, shard_rng in jobs
            ]
            results = [f.result() for f in futures]

        tally = TierTally()
        tickets: list[Ticket] = []
        for shard in results:
            tally.merge(shard.tally)
            tickets.extend(shard.tickets)
        return tally, tickets
