from __future__ import annotations
from foster_allowance.allowance.calculator import compute, weekly_schedule
from foster_allowance.config.loader import UnifiedConfig
from foster_allowance.core.models import AGE_GROUPS, AllowanceResult
from foster_allowance.ingest.children import find_latest_children_sheet, parse_children_sheet
from foster_allowance.normalize import build_child_records
from foster_allowance.reports import format_money, write_allowance_md, write_timeline_section
from foster_allowance.store import build_submission, write_submission

def run_pipeline(cfg: UnifiedConfig) -> AllowanceResult:
  inputs_dir  = cfg.paths.inputs_dir
  data_dir    = cfg.paths.data_dir
  reports_dir = cfg.paths.reports_dir
  symbol      = cfg.report.currency_symbol
  places      = cfg.report.decimal_places

  # 1) Read the latest children sheet
  sheet = find_latest_children_sheet(inputs_dir / "children")
  print(f"Reading {sheet.name}")
  raw_rows = parse_children_sheet(sheet)
  children = build_child_records(raw_rows)

  if not children:
    print(f"[WARN] {sheet.name} lists no children; totals will be zero.")
  for c in children:
    if c.age_group not in AGE_GROUPS:
      print(f"[WARN] Child {c.id} has unrecognised age group '{c.age_group}'.")
    if not c.week_intervals:
      print(f"[WARN] Child {c.id} has no care weeks and contributes nothing.")

  # 2) Calculate
  result = compute(children, cfg.household.context(), cfg.rates)

  # 3) Save submission
  record = build_submission(cfg.household, children, result, status=cfg.options.submission_status)
  saved = write_submission(data_dir, record)

  # 4) Report
  report = write_allowance_md(reports_dir, cfg.household, result, currency_symbol=symbol, places=places)
  write_timeline_section(reports_dir, result, weekly_schedule(result), currency_symbol=symbol, places=places)

  print(
    f"Weekly {format_money(result.weekly_total, symbol, places)}, "
    f"monthly {format_money(result.monthly_total, symbol, places)}, "
    f"yearly {format_money(result.yearly_total, symbol, places)} "
    f"for {len(children)} child(ren)"
  )
  print(f"Saved submission {saved.stem}; report at {report}")
  return result
