"""Plain-text console report for a simulated draw."""

from __future__ import annotations

from loto.models.grid import Grid
from loto.models.ticket import Ticket
from loto.services.settlement_service import SimulationResult
from loto.utils.money import format_euros, round2


def format_grid(grid: Grid) -> str:
    main = "\t".join(str(n) for n in grid.sorted_main)
    bonus = "\t".join(str(n) for n in grid.sorted_bonus)
    return f"\t{main} ||\t{bonus}\t({grid.stake} €)\t"


def format_ticket(ticket: Ticket) -> str:
    lines = [f"======================= Ticket #{ticket.id} ======================="]
    for i, grid in enumerate(ticket.grids, start=1):
        line = f"Grid #{i}: {format_grid(grid)}"
        if grid.matched_main > 0:
            line += f"-> {grid.matched_main} n°"
        if grid.matched_bonus > 0:
            if grid.matched_main > 0:
                line += " & "
            line += f"{grid.matched_bonus} chance n°"
        if grid.rank > 0:
            line += f" -> rank {grid.rank} prize"
        lines.append(line)
    lines.append(f"-----------------------Total: {ticket.total_stake} €-------------------------")
    return "\n".join(lines) + "\n\n"


def format_winning(grid: Grid) -> str:
    return "\n******************** Winning grid ********************\n\t" + format_grid(grid) + "\n"


def format_elapsed(seconds: float) -> str:
    total = int(seconds)
    return f"{total // 60} min., {total % 60} sec."


class ReportService:
    """Build the end-of-draw summary."""

    def render(self, result: SimulationResult) -> str:
        settlement = result.settlement
        tally = result.tally

        lines = [
            f"Draw date: {result.draw_date}",
            f"Total tickets played: {tally.tickets}",
            f"Total grids played: {tally.grids}",
            f"Total stake: {tally.total_stake} €.",
            "Prize pool by rank:",
        ]
        for tier in settlement.tiers:
            lines.append(f"Rank {tier.tier}: {format_euros(tier.pool)}")

        lines.append("Payout per winning grid by rank:")
        for tier in settlement.tiers:
            line = f"Rank {tier.tier}: {tier.winners}"
            if tier.payout_per_grid is not None:
                line += f"\t-> {format_euros(tier.payout_per_grid)}\tper grid"
            lines.append(line)

        lines.append("")
        lines.append(f"Unclaimed stake: {format_euros(round2(settlement.unclaimed_stake))}")
        lines.append("**********")
        lines.append(f"Elapsed time: {format_elapsed(result.elapsed_seconds)}")
        return "\n".join(lines) + "\n"

    def render_tickets(self, result: SimulationResult) -> str:
        return "".join(format_ticket(t) for t in result.tickets)
