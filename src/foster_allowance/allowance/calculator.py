from __future__ import annotations
from decimal import Decimal
from typing import Iterable, List

from foster_allowance.core.models import (
    MONTHS_PER_YEAR,
    WEEKS_PER_YEAR,
    ZERO,
    AllowanceResult,
    ChildAllowance,
    ChildRecord,
    HouseholdContext,
    RateTable,
    WeekAllowance,
)
from foster_allowance.core.weeks import active_week_count, is_active, normalize_intervals

_MONTHS = Decimal(MONTHS_PER_YEAR)

def _child_allowance(child: ChildRecord, experienced: bool, rates: RateTable) -> ChildAllowance:
    intervals = normalize_intervals(child.week_intervals)
    weeks = active_week_count(intervals)

    # looked up even for children with no weeks
    base = rates.lookup(child.age_group, child.is_special_care)
    rate = rates.experience.apply(base, experienced)

    yearly = rate * weeks
    return ChildAllowance(
        child_id=child.id,
        age_group=child.age_group,
        is_special_care=bool(child.is_special_care),
        intervals=intervals,
        active_weeks=weeks,
        base_weekly_rate=base,
        weekly_rate=rate,
        weekly_amount=rate if weeks > 0 else ZERO,
        yearly_amount=yearly,
        monthly_amount=yearly / _MONTHS,
    )

def compute(
    children: Iterable[ChildRecord],
    context: HouseholdContext,
    rates: RateTable,
) -> AllowanceResult:
    """
    Household allowance totals:
      - weekly: sum of each active child's adjusted weekly rate ("while in care")
      - yearly: sum of adjusted weekly rate x active weeks, per child
      - monthly: yearly / 12
    No rounding happens here; see reports.quantize_money.
    """
    per_child = tuple(
        _child_allowance(c, context.is_experienced_carer, rates) for c in children
    )
    weekly = sum((c.weekly_amount for c in per_child), ZERO)
    yearly = sum((c.yearly_amount for c in per_child), ZERO)
    return AllowanceResult(
        weekly_total=weekly,
        monthly_total=yearly / _MONTHS,
        yearly_total=yearly,
        children=per_child,
    )

def calculate_total_allowance(
    children: Iterable[ChildRecord],
    is_experienced_carer: bool,
    rates: RateTable,
) -> AllowanceResult:
    return compute(children, HouseholdContext(is_experienced_carer=bool(is_experienced_carer)), rates)

def weekly_schedule(result: AllowanceResult) -> List[WeekAllowance]:
    """Household amount for each week of the year; amounts sum to result.yearly_total."""
    schedule: List[WeekAllowance] = []
    for week in range(1, WEEKS_PER_YEAR + 1):
        active = [c for c in result.children if is_active(c.intervals, week)]
        amount = sum((c.weekly_rate for c in active), ZERO)
        schedule.append(WeekAllowance(week, amount, tuple(c.child_id for c in active)))
    return schedule
