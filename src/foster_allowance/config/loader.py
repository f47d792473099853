from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from foster_allowance.core.errors import ConfigurationError
from foster_allowance.core.models import ExperienceAdjustment, HouseholdInfo, RateTable, to_decimal
from foster_allowance.normalize import parse_bool

@dataclass
class OptionsCfg:
  submission_status: str

@dataclass
class ReportCfg:
  currency_symbol: str
  decimal_places: int

@dataclass
class PathsCfg:
  inputs_dir: Path
  data_dir: Path
  reports_dir: Path
  config_dir: Path

@dataclass
class UnifiedConfig:
  household: HouseholdInfo
  paths: PathsCfg
  rates: RateTable
  options: OptionsCfg
  report: ReportCfg

def parse_experience(section: Dict[str, Any] | None) -> ExperienceAdjustment:
  if not section:
    return ExperienceAdjustment()
  kind = str(section.get("kind", "multiplier")).strip().lower()
  default = "0" if kind == "additive" else "1"
  return ExperienceAdjustment(kind=kind, value=to_decimal(section.get("value", default), "experience.value"))

def parse_flag(value: Any, where: str) -> bool:
  """YAML booleans, or yes/no style strings; anything else is a settings error."""
  if isinstance(value, bool):
    return value
  if isinstance(value, str):
    try:
      return parse_bool(value)
    except ValueError:
      pass
  raise ConfigurationError(f"{where} must be true or false, got {value!r}")

def parse_rate_table(rates: Dict[str, Any], experience: Dict[str, Any] | None = None) -> RateTable:
  if not isinstance(rates, dict) or not rates:
    raise ConfigurationError("settings.yaml 'rates' must map age groups to weekly rates")
  for age_group, entry in rates.items():
    if not isinstance(entry, dict):
      raise ConfigurationError(
        f"rates.{age_group} must have 'standard' and/or 'special_care' amounts"
      )
  return RateTable.from_brackets(rates, parse_experience(experience))

def load_unified_config(repo_root: Path) -> UnifiedConfig:
    """Load config/settings.yaml only. No JSON fallbacks."""
    cfg_dir = repo_root / "config"
    yaml_cfg = cfg_dir / "settings.yaml"

    # Require PyYAML
    try:
        import yaml  # type: ignore
    except ImportError as e:
        raise ImportError(
            "PyYAML is required to read config/settings.yaml. Install with: pip install pyyaml"
        ) from e

    if not yaml_cfg.exists():
        raise FileNotFoundError(
            f"Missing {yaml_cfg}. Create it from the settings.yaml template."
        )

    y: Dict[str, Any] = yaml.safe_load(yaml_cfg.read_text(encoding="utf-8")) or {}

    # minimal structure checks (fail fast with clear messages)
    for section in ["household", "paths", "rates"]:
        if section not in y:
            raise KeyError(f"settings.yaml is missing the '{section}' section")

    household = y["household"]
    paths = y["paths"]
    options = y.get("options", {}) or {}
    report = y.get("report", {}) or {}

    return UnifiedConfig(
        household=HouseholdInfo(
            name=str(household["name"]),
            email=str(household.get("email", "")),
            phone=str(household.get("phone", "")),
            is_experienced_carer=parse_flag(household.get("experienced_carer", False), "household.experienced_carer"),
        ),
        paths=PathsCfg(
            inputs_dir=(repo_root / paths["inputs_dir"]).resolve(),
            data_dir=(repo_root / paths["data_dir"]).resolve(),
            reports_dir=(repo_root / paths["reports_dir"]).resolve(),
            config_dir=cfg_dir.resolve(),
        ),
        rates=parse_rate_table(y["rates"], y.get("experience")),
        options=OptionsCfg(
            submission_status=str(options.get("submission_status", "submitted")),
        ),
        report=ReportCfg(
            currency_symbol=str(report.get("currency_symbol", "£")),
            decimal_places=int(report.get("decimal_places", 2)),
        ),
    )
