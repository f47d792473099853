from __future__ import annotations
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple

from foster_allowance.core.errors import ConfigurationError

WEEKS_PER_YEAR = 52
MONTHS_PER_YEAR = 12

AGE_GROUPS: List[str] = ["0-4", "5-10", "11-15", "16-17"]

RateKey = Tuple[str, bool]  # (age_group, is_special_care)

ZERO = Decimal("0")

EXPERIENCE_KINDS = ("multiplier", "additive")

@dataclass(frozen=True)
class WeekInterval:
  start: int   # 1..52, inclusive
  end: int     # 1..52, inclusive

  @property
  def weeks(self) -> int:
    return self.end - self.start + 1

@dataclass(frozen=True)
class ChildRecord:
  id: str
  age_group: str
  is_special_care: bool = False
  week_intervals: Tuple[WeekInterval, ...] = ()

  def to_dict(self) -> dict:
    return {
      "id": self.id,
      "age_group": self.age_group,
      "is_special_care": self.is_special_care,
      "week_intervals": [{"start": w.start, "end": w.end} for w in self.week_intervals],
    }

@dataclass(frozen=True)
class HouseholdContext:
  is_experienced_carer: bool = False

@dataclass(frozen=True)
class HouseholdInfo:
  name: str
  email: str = ""
  phone: str = ""
  is_experienced_carer: bool = False

  def context(self) -> HouseholdContext:
    return HouseholdContext(is_experienced_carer=self.is_experienced_carer)

  def to_dict(self) -> dict:
    return {
      "name": self.name,
      "email": self.email,
      "phone": self.phone,
      "is_experienced_carer": self.is_experienced_carer,
    }

@dataclass(frozen=True)
class ExperienceAdjustment:
  kind: str = "multiplier"     # "multiplier" | "additive"
  value: Decimal = Decimal("1")

  def __post_init__(self):
    if self.kind not in EXPERIENCE_KINDS:
      raise ConfigurationError(
        f"experience.kind must be one of {', '.join(EXPERIENCE_KINDS)}, got '{self.kind}'"
      )
    if self.kind == "multiplier" and self.value <= 0:
      raise ConfigurationError(f"experience.value must be a positive multiplier, got {self.value}")
    if self.kind == "additive" and self.value < 0:
      raise ConfigurationError(f"experience.value must not be negative, got {self.value}")

  def apply(self, weekly_rate: Decimal, experienced: bool) -> Decimal:
    if not experienced:
      return weekly_rate
    if self.kind == "additive":
      return weekly_rate + self.value
    return weekly_rate * self.value

@dataclass(frozen=True)
class RateTable:
  """Weekly base rates keyed by (age_group, is_special_care).

  Built once from settings and shared read-only; lookups never fall back.
  """
  rates: Mapping[RateKey, Decimal]
  experience: ExperienceAdjustment = field(default_factory=ExperienceAdjustment)

  def __post_init__(self):
    # read-only copy
    object.__setattr__(self, "rates", MappingProxyType(dict(self.rates)))
    for (age_group, special), amount in self.rates.items():
      if amount <= 0:
        raise ConfigurationError(
          f"rates.{age_group}.{'special_care' if special else 'standard'} must be positive, got {amount}",
          age_group=age_group,
          is_special_care=special,
        )

  @classmethod
  def from_brackets(
      cls,
      brackets: Mapping[str, Mapping[str, object]],
      experience: ExperienceAdjustment | None = None,
  ) -> "RateTable":
    """{"0-4": {"standard": 175, "special_care": 262.5}, ...} -> RateTable"""
    rates: Dict[RateKey, Decimal] = {}
    for age_group, entry in brackets.items():
      for name, special in (("standard", False), ("special_care", True)):
        if name in entry and entry[name] is not None:
          rates[(str(age_group), special)] = to_decimal(entry[name], f"rates.{age_group}.{name}")
    return cls(rates=rates, experience=experience or ExperienceAdjustment())

  def lookup(self, age_group: str, is_special_care: bool) -> Decimal:
    try:
      return self.rates[(age_group, bool(is_special_care))]
    except KeyError:
      raise ConfigurationError(
        f"No weekly rate configured for age group '{age_group}' "
        f"({'special care' if is_special_care else 'standard'})",
        age_group=age_group,
        is_special_care=bool(is_special_care),
      ) from None

@dataclass(frozen=True)
class ChildAllowance:
  child_id: str
  age_group: str
  is_special_care: bool
  intervals: Tuple[WeekInterval, ...]   # normalized
  active_weeks: int
  base_weekly_rate: Decimal
  weekly_rate: Decimal                  # after experience adjustment
  weekly_amount: Decimal                # weekly_rate while active, else 0
  yearly_amount: Decimal
  monthly_amount: Decimal

  def to_dict(self) -> dict:
    return {
      "child_id": self.child_id,
      "age_group": self.age_group,
      "is_special_care": self.is_special_care,
      "intervals": [{"start": w.start, "end": w.end} for w in self.intervals],
      "active_weeks": self.active_weeks,
      "base_weekly_rate": str(self.base_weekly_rate),
      "weekly_rate": str(self.weekly_rate),
      "weekly_amount": str(self.weekly_amount),
      "yearly_amount": str(self.yearly_amount),
      "monthly_amount": str(self.monthly_amount),
    }

@dataclass(frozen=True)
class AllowanceResult:
  weekly_total: Decimal
  monthly_total: Decimal
  yearly_total: Decimal
  children: Tuple[ChildAllowance, ...] = ()

  def to_dict(self) -> dict:
    return {
      "weekly_total": str(self.weekly_total),
      "monthly_total": str(self.monthly_total),
      "yearly_total": str(self.yearly_total),
      "children": [c.to_dict() for c in self.children],
    }

@dataclass(frozen=True)
class WeekAllowance:
  week: int
  amount: Decimal
  active_children: Tuple[str, ...] = ()

def to_decimal(value: object, where: str = "value") -> Decimal:
  # str() first so YAML floats like 262.5 don't carry binary noise
  if isinstance(value, bool):
    raise ConfigurationError(f"{where}: expected a number, got {value!r}")
  if isinstance(value, Decimal):
    return value
  try:
    d = Decimal(str(value).strip())
  except ArithmeticError:
    raise ConfigurationError(f"{where}: expected a number, got {value!r}") from None
  if not d.is_finite():
    raise ConfigurationError(f"{where}: expected a finite number, got {value!r}")
  return d
