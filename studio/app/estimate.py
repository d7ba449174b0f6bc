"""
Conversion Estimates
====================
Time and cost estimates for the documents waiting in the studio.

The default model is linear in page count. Documents with no page count
contribute nothing.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Protocol

from config.settings import Settings
from studio.models import SourceDocument

CENTS = Decimal("0.01")


@dataclass(frozen=True)
class Estimate:
    """Aggregate narration minutes and price."""
    minutes: int
    cost: Decimal

    @property
    def time_text(self) -> str:
        return f"{self.minutes}m"

    @property
    def cost_text(self) -> str:
        return f"${self.cost:.2f}"


class Estimator(Protocol):
    """Strategy that prices a set of documents."""

    def estimate(self, documents: Iterable[SourceDocument], settings: Settings) -> Estimate:
        ...


class LinearEstimator:
    """Flat per-page narration time and price."""

    def __init__(self, minutes_per_page: int = 2, cost_per_page: Decimal = Decimal("0.05")):
        self.minutes_per_page = minutes_per_page
        self.cost_per_page = Decimal(str(cost_per_page))

    def estimate(self, documents: Iterable[SourceDocument], settings: Settings) -> Estimate:  # noqa: ARG002
        total_pages = sum(doc.pages or 0 for doc in documents)
        cost = (self.cost_per_page * total_pages).quantize(CENTS, rounding=ROUND_HALF_UP)
        return Estimate(minutes=total_pages * self.minutes_per_page, cost=cost)
