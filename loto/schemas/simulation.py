"""Schemas for the draw simulation API."""

from __future__ import annotations

from marshmallow import Schema, ValidationError, fields, validate, validates, validates_schema

from loto.models.grid import (
    BONUS_COUNT_MAX,
    BONUS_COUNT_MIN,
    BONUS_NUMBER_MAX,
    BONUS_NUMBER_MIN,
    MAIN_COUNT_MAX,
    MAIN_COUNT_MIN,
    NUMBER_MAX,
    NUMBER_MIN,
)
from loto.services.settlement_service import TICKET_COUNT_MAX, TICKET_COUNT_MIN
from loto.utils.dates import is_valid_draw_date


def _main_numbers_field(required: bool = True) -> fields.List:
    return fields.List(
        fields.Integer(validate=validate.Range(min=NUMBER_MIN, max=NUMBER_MAX)),
        required=required,
        validate=validate.Length(min=MAIN_COUNT_MIN, max=MAIN_COUNT_MAX),
    )


def _bonus_numbers_field(required: bool = True) -> fields.List:
    return fields.List(
        fields.Integer(validate=validate.Range(min=BONUS_NUMBER_MIN, max=BONUS_NUMBER_MAX)),
        required=required,
        validate=validate.Length(min=BONUS_COUNT_MIN, max=BONUS_COUNT_MAX),
    )


class SimulationRequestSchema(Schema):
    ticket_count = fields.Integer(
        required=True,
        validate=validate.Range(min=TICKET_COUNT_MIN, max=TICKET_COUNT_MAX),
    )

    draw_date = fields.String(required=True)

    verbose = fields.Boolean(required=False, load_default=False)

    # None falls back to the SIM_WORKERS setting.
    workers = fields.Integer(
        required=False,
        load_default=None,
        allow_none=True,
        validate=validate.Range(min=1, max=32),
    )

    seed = fields.Integer(required=False, load_default=None, allow_none=True)

    @validates("draw_date")
    def _validate_draw_date(self, value, **kwargs):  # type: ignore[no-untyped-def]
        if not is_valid_draw_date(value):
            raise ValidationError("Must be a valid date formatted dd-mm-yyyy or dd-mm-yy")


class ScoreRequestSchema(Schema):
    main_numbers = _main_numbers_field()
    bonus_numbers = _bonus_numbers_field()
    winning_main = _main_numbers_field()
    winning_bonus = _bonus_numbers_field()

    @validates_schema
    def _validate_unique(self, data, **kwargs):  # type: ignore[no-untyped-def]
        errors: dict[str, list[str]] = {}
        for key in ("main_numbers", "bonus_numbers", "winning_main", "winning_bonus"):
            nums = data.get(key)
            if nums is not None and len(nums) != len(set(nums)):
                errors[key] = ["Numbers must be unique"]
        if errors:
            raise ValidationError(errors)


class GridSchema(Schema):
    main_numbers = fields.List(fields.Integer(), required=True)
    bonus_numbers = fields.List(fields.Integer(), required=True)
    stake = fields.Integer(required=True)
    matched_main = fields.Integer(required=True)
    matched_bonus = fields.Integer(required=True)
    rank = fields.Integer(required=True)


class TicketSchema(Schema):
    id = fields.Integer(required=True)
    total_stake = fields.Integer(required=True)
    grids = fields.List(fields.Nested(GridSchema), required=True)


class TierSchema(Schema):
    tier = fields.Integer(required=True)
    pool = fields.Decimal(required=True, as_string=True)
    winners = fields.Integer(required=True)
    payout_per_grid = fields.Decimal(required=False, allow_none=True, as_string=True)


class SimulationResponseSchema(Schema):
    draw_date = fields.String(required=True)
    winning_grid = fields.Nested(GridSchema, required=True)
    total_tickets = fields.Integer(required=True)
    total_grids = fields.Integer(required=True)
    total_stake = fields.Integer(required=True)
    tiers = fields.List(fields.Nested(TierSchema), required=True)
    unclaimed_stake = fields.Decimal(required=True, as_string=True)
    elapsed_seconds = fields.Float(required=True)

    # Only present for verbose runs.
    tickets = fields.List(fields.Nested(TicketSchema), required=False)
