from __future__ import annotations
import re
from typing import Dict, Any, List

from foster_allowance.core.models import ChildRecord, WeekInterval

_TRUE = {"yes", "y", "true", "t", "1", "x"}
_FALSE = {"no", "n", "false", "f", "0", ""}
_WHOLE = re.compile(r"^[+-]?\d+(?:\.0+)?$")

def parse_bool(s: str, where: str = "") -> bool:
  v = (s or "").strip().lower()
  if v in _TRUE: return True
  if v in _FALSE: return False
  raise ValueError(f"{where}expected yes/no, got '{s}'")

def parse_week(s: str, where: str = "") -> int:
  # spreadsheets hand back 12.0 for 12
  v = (s or "").strip()
  if not _WHOLE.match(v):
    raise ValueError(f"{where}expected a whole week number, got '{s}'")
  return int(float(v))

def clean_id(s: str) -> str:
  v = (s or "").strip()
  return v[:-2] if v.endswith(".0") and v[:-2].isdigit() else v

def build_child_records(raw_rows: List[Dict[str, Any]]) -> List[ChildRecord]:
  """Group interval rows by child id, keeping first-seen order."""
  order: List[str] = []
  profile: Dict[str, tuple] = {}
  intervals: Dict[str, List[WeekInterval]] = {}

  for r in raw_rows:
    where = f"line {r['line']}: " if r.get("line") else ""
    cid = clean_id(r.get("child_id", ""))
    if not cid:
      raise ValueError(f"{where}missing child id")
    age_group = (r.get("age_group") or "").strip()
    special = parse_bool(r.get("special_care", ""), where)

    if cid not in profile:
      order.append(cid)
      profile[cid] = (age_group, special)
      intervals[cid] = []
    elif profile[cid] != (age_group, special):
      raise ValueError(
        f"{where}child '{cid}' has conflicting age group / special care values "
        f"({profile[cid][0]}/{profile[cid][1]} vs {age_group}/{special})"
      )

    start_raw = (r.get("start_week") or "").strip()
    end_raw = (r.get("end_week") or "").strip()
    if not start_raw and not end_raw:
      continue
    # a single bound means a one-week stay
    start = parse_week(start_raw or end_raw, where)
    end = parse_week(end_raw or start_raw, where)
    intervals[cid].append(WeekInterval(start, end))

  return [
    ChildRecord(
      id=cid,
      age_group=profile[cid][0],
      is_special_care=profile[cid][1],
      week_intervals=tuple(intervals[cid]),
    )
    for cid in order
  ]
