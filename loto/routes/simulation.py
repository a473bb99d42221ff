"""Simulation routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from loto.schemas.simulation import (
    GridSchema,
    ScoreRequestSchema,
    SimulationRequestSchema,
    SimulationResponseSchema,
)
from loto.services.settlement_service import SimulationService
from loto.utils.responses import ok


simulation_bp = Blueprint("simulation", __name__)

_request_schema = SimulationRequestSchema()
_response_schema = SimulationResponseSchema()
_score_schema = ScoreRequestSchema()
_grid_schema = GridSchema()


@simulation_bp.post("/simulate")
def simulate_draw():
    payload = request.get_json(silent=True) or {}
    data = _request_schema.load(payload)

    service = SimulationService(max_tickets=int(current_app.config.get("MAX_TICKETS", 1_000_000)))
    seed = data.get("seed")
    if seed is None:
        seed = current_app.config.get("SIM_SEED")

    verbose = bool(data.get("verbose"))
    result = service.run(
        int(data["ticket_count"]),
        draw_date=str(data["draw_date"]),
        verbose=verbose,
        workers=int(data.get("workers") or current_app.config.get("SIM_WORKERS", 1)),
        seed=seed,
    )

    body = {
        "draw_date": result.draw_date,
        "winning_grid": result.winning.to_dict(),
        "total_tickets": result.tally.tickets,
        "total_grids": result.tally.grids,
        "total_stake": result.tally.total_stake,
        "tiers": [
            {
                "tier": t.tier,
                "pool": t.pool,
                "winners": t.winners,
                "payout_per_grid": t.payout_per_grid,
            }
            for t in result.settlement.tiers
        ],
        "unclaimed_stake": result.settlement.unclaimed_stake,
        "elapsed_seconds": round(result.elapsed_seconds, 3),
    }
    if verbose:
        body["tickets"] = [t.to_dict() for t in result.tickets]

    return ok(_response_schema.dump(body))


@simulation_bp.post("/grids/score")
def score_grid():
    payload = request.get_json(silent=True) or {}
    data = _score_schema.load(payload)

    grid = SimulationService.score(
        data["main_numbers"],
        data["bonus_numbers"],
        data["winning_main"],
        data["winning_bonus"],
    )
    return ok(_grid_schema.dump(grid.to_dict()))
