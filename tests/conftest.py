"""Shared fixtures: a small rate policy and child builders."""

from __future__ import annotations

from decimal import Decimal

import pytest

from foster_allowance.core.models import ChildRecord, ExperienceAdjustment, RateTable, WeekInterval

BRACKETS = {
    "0-4": {"standard": 100, "special_care": 150},
    "5-10": {"standard": "120.50", "special_care": "180.75"},
    "11-15": {"standard": 200, "special_care": 300},
}


def make_child(child_id="1", age_group="0-4", special=False, *intervals):
    return ChildRecord(
        id=child_id,
        age_group=age_group,
        is_special_care=special,
        week_intervals=tuple(WeekInterval(s, e) for s, e in intervals),
    )


@pytest.fixture
def rates() -> RateTable:
    """No experience uplift: experienced and new carers get the same rate."""
    return RateTable.from_brackets(BRACKETS)


@pytest.fixture
def multiplier_rates() -> RateTable:
    return RateTable.from_brackets(
        BRACKETS, ExperienceAdjustment(kind="multiplier", value=Decimal("1.10"))
    )


@pytest.fixture
def additive_rates() -> RateTable:
    return RateTable.from_brackets(
        BRACKETS, ExperienceAdjustment(kind="additive", value=Decimal("25"))
    )


@pytest.fixture
def child():
    return make_child
