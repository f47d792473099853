from __future__ import annotations
from typing import Iterable, List, Set, Tuple

from foster_allowance.core.errors import InvalidIntervalError
from foster_allowance.core.models import WEEKS_PER_YEAR, WeekInterval

def _is_whole(x) -> bool:
  # bool is an int subclass; True/False are never week numbers
  return isinstance(x, int) and not isinstance(x, bool)

def validate_interval(interval: WeekInterval) -> WeekInterval:
  start, end = interval.start, interval.end
  if not _is_whole(start) or not _is_whole(end):
    raise InvalidIntervalError(start, end, "week bounds must be whole numbers")
  if start < 1 or end > WEEKS_PER_YEAR:
    raise InvalidIntervalError(start, end, f"weeks must lie within 1..{WEEKS_PER_YEAR}")
  if start > end:
    raise InvalidIntervalError(start, end, "start is after end")
  return interval

def normalize_intervals(intervals: Iterable[WeekInterval]) -> Tuple[WeekInterval, ...]:
  """Merge overlapping or touching intervals into a sorted, disjoint set."""
  ordered = sorted((validate_interval(w) for w in intervals), key=lambda w: (w.start, w.end))
  merged: List[WeekInterval] = []
  for w in ordered:
    if merged and w.start <= merged[-1].end + 1:
      last = merged[-1]
      if w.end > last.end:
        merged[-1] = WeekInterval(last.start, w.end)
    else:
      merged.append(w)
  return tuple(merged)

def active_week_count(normalized: Iterable[WeekInterval]) -> int:
  return sum(w.weeks for w in normalized)

def covered_weeks(normalized: Iterable[WeekInterval]) -> Set[int]:
  out: Set[int] = set()
  for w in normalized:
    out.update(range(w.start, w.end + 1))
  return out

def is_active(normalized: Iterable[WeekInterval], week: int) -> bool:
  return any(w.start <= week <= w.end for w in normalized)
