from __future__ import annotations
from decimal import Decimal, ROUND_HALF_UP
from pathlib import Path
from typing import Iterable, List

from foster_allowance.core.models import WEEKS_PER_YEAR, AllowanceResult, HouseholdInfo, WeekAllowance
from foster_allowance.core.weeks import covered_weeks

REPORT_NAME = "foster-care-allowance.md"

def ensure_dir(p: Path):
  p.mkdir(parents=True, exist_ok=True)

def quantize_money(amount: Decimal, places: int = 2) -> Decimal:
  """Round for display only. The engine never rounds."""
  return amount.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)

def format_money(amount: Decimal, symbol: str = "£", places: int = 2) -> str:
  return f"{symbol}{quantize_money(amount, places):,f}"

def experience_label(household: HouseholdInfo) -> str:
  return f"{'Experienced' if household.is_experienced_carer else 'New'} Carer"

def timeline_bar(intervals: Iterable, width: int = WEEKS_PER_YEAR) -> str:
  weeks = covered_weeks(intervals)
  return "".join("#" if w in weeks else "." for w in range(1, width + 1))

def write_allowance_md(
  reports_dir: Path,
  household: HouseholdInfo,
  result: AllowanceResult,
  *,
  currency_symbol: str = "£",
  places: int = 2,
) -> Path:
  ensure_dir(reports_dir)
  path = reports_dir / REPORT_NAME
  money = lambda d: format_money(d, currency_symbol, places)

  lines = []
  lines.append("# Foster Care Allowance Report\n")
  lines.append(f"- **Name:** {household.name}")
  if household.email:
    lines.append(f"- **Email:** {household.email}")
  lines.append(f"- **Experience:** {experience_label(household)}")
  lines.append("")
  lines.append(f"- **Weekly Total:** {money(result.weekly_total)}")
  lines.append(f"- **Monthly Total:** {money(result.monthly_total)}")
  lines.append(f"- **Yearly Total:** {money(result.yearly_total)}")
  lines.append("")
  lines.append("> Weekly is the household rate summed over each child with care weeks. "
               "Yearly counts each child's care weeks only; monthly is yearly / 12.\n")

  if result.children:
    lines.append("## Breakdown by child\n")
    lines.append("| Child | Age group | Special care | Weeks | Weekly rate | Yearly |")
    lines.append("|---|---|---|---:|---:|---:|")
    for c in result.children:
      lines.append(
        f"| {c.child_id} | {c.age_group} | {'yes' if c.is_special_care else 'no'} "
        f"| {c.active_weeks} | {money(c.weekly_rate)} | {money(c.yearly_amount)} |"
      )
    lines.append("")

  path.write_text("\n".join(lines), encoding="utf-8")
  return path

# --- Extra section writers ---

def write_timeline_section(
  reports_dir: Path,
  result: AllowanceResult,
  schedule: List[WeekAllowance],
  *,
  currency_symbol: str = "£",
  places: int = 2,
) -> None:
  """
  Appends a 'Care timeline' section to the allowance report:
  one 52-week bar per child ('#' = in care) and the weeks where the
  household amount changes.
  """
  ensure_dir(reports_dir)
  path = reports_dir / REPORT_NAME

  lines = []
  lines.append("")  # spacer
  lines.append("## Care timeline\n")
  lines.append("```")
  pad = max([len(c.child_id) for c in result.children] + [5])
  lines.append(f"{'weeks'.ljust(pad)} 1{' ' * (WEEKS_PER_YEAR - 3)}52")
  for c in result.children:
    lines.append(f"{c.child_id.ljust(pad)} {timeline_bar(c.intervals)}")
  lines.append("```\n")

  # collapse runs of equal weekly amounts into ranges
  lines.append("| Weeks | Children in care | Household weekly amount |")
  lines.append("|---|---:|---:|")
  run_start = None
  for i, w in enumerate(schedule):
    if run_start is None:
      run_start = w
    nxt = schedule[i + 1] if i + 1 < len(schedule) else None
    if nxt is None or nxt.active_children != w.active_children:
      span = f"{run_start.week}" if run_start.week == w.week else f"{run_start.week}-{w.week}"
      lines.append(f"| {span} | {len(w.active_children)} | {format_money(w.amount, currency_symbol, places)} |")
      run_start = None
  lines.append("")

  with path.open("a", encoding="utf-8") as f:
    f.write("\n".join(lines))
