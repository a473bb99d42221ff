"""Domain models."""

from loto.models.grid import Grid, SizingPolicy
from loto.models.ticket import Ticket

__all__ = ["Grid", "SizingPolicy", "Ticket"]
