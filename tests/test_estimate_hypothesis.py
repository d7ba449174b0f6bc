"""
Property-Based Tests for Estimates and Stage Arithmetic
=======================================================
Uses Hypothesis to check the linear estimate model and the progress/ETA
formulas over arbitrary inputs.
"""

import pytest
from decimal import Decimal
from hypothesis import given, strategies as st

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import Settings
from studio.app.estimate import LinearEstimator
from studio.models import SourceDocument
from studio.pipeline.stages import stage_eta, stage_progress, sub_progress


page_counts = st.lists(st.one_of(st.none(), st.integers(min_value=0, max_value=5000)), max_size=20)


def make_documents(pages):
    return [
        SourceDocument(id=str(i), name=f"{i}.pdf", size=1, mime_type="application/pdf", pages=p)
        for i, p in enumerate(pages)
    ]


@pytest.mark.property
class TestEstimateProperties:
    """Linear estimate model."""

    @given(page_counts)
    def test_minutes_are_two_per_page(self, pages):
        estimate = LinearEstimator().estimate(make_documents(pages), Settings())
        assert estimate.minutes == 2 * sum(p or 0 for p in pages)

    @given(page_counts)
    def test_cost_is_exact_cents(self, pages):
        estimate = LinearEstimator().estimate(make_documents(pages), Settings())
        assert estimate.cost == Decimal("0.05") * sum(p or 0 for p in pages)
        assert estimate.cost_text.startswith("$")
        assert len(estimate.cost_text.split(".")[1]) == 2

    @given(page_counts, page_counts)
    def test_additive(self, first, second):
        estimator = LinearEstimator()
        combined = estimator.estimate(make_documents(first + second), Settings())
        a = estimator.estimate(make_documents(first), Settings())
        b = estimator.estimate(make_documents(second), Settings())
        assert combined.minutes == a.minutes + b.minutes
        assert combined.cost == a.cost + b.cost


@pytest.mark.property
class TestStageArithmeticProperties:
    """Progress and ETA formulas for any table size."""

    @given(st.integers(min_value=1, max_value=20), st.integers(min_value=1, max_value=20))
    def test_progress_is_monotonic_and_bounded(self, total, intervals):
        values = []
        for index in range(total):
            values.append(stage_progress(index, total))
            values.extend(sub_progress(index, d, intervals, total) for d in range(1, intervals + 1))
        held = []
        current = 0
        for value in values:
            current = max(current, value)
            held.append(current)
        assert all(0 <= v <= 100 for v in held)
        assert held == sorted(held)
        assert stage_progress(total - 1, total) == 100

    @given(st.integers(min_value=1, max_value=20))
    def test_eta_shrinks_and_ends_empty(self, total):
        etas = [stage_eta(index, total) for index in range(total)]
        assert etas[-1] is None
        minutes = [int(eta[:-1]) for eta in etas[:-1]]
        assert minutes == sorted(minutes, reverse=True)
        assert all(m > 0 for m in minutes)
