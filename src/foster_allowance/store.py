from __future__ import annotations
import csv
import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List

from foster_allowance.core.models import AllowanceResult, ChildRecord, HouseholdInfo

SUMMARY_FIELDS = [
  "id", "created_at", "status", "name", "email", "experienced_carer",
  "children", "weekly_total", "monthly_total", "yearly_total", "synced",
]

def ensure_dir(p: Path):
  p.mkdir(parents=True, exist_ok=True)

def build_submission(
  household: HouseholdInfo,
  children: Iterable[ChildRecord],
  result: AllowanceResult,
  status: str = "submitted",
) -> Dict[str, Any]:
  """Opaque submission record: original inputs plus the computed result."""
  return {
    "id": str(uuid.uuid4()),
    "created_at": datetime.now(timezone.utc).isoformat(),
    "user_info": household.to_dict(),
    "children_data": [c.to_dict() for c in children],
    "calculations": result.to_dict(),
    "status": status,
    "synced": False,
  }

def write_submission(data_dir: Path, record: Dict[str, Any]) -> Path:
  """Write submissions/<id>.json and upsert its row in submissions.csv."""
  sub_dir = data_dir / "submissions"
  ensure_dir(sub_dir)
  path = sub_dir / f"{record['id']}.json"
  path.write_text(json.dumps(record, indent=2, ensure_ascii=False), encoding="utf-8")
  _upsert_summary(data_dir, record)
  return path

def load_submission(data_dir: Path, submission_id: str) -> Dict[str, Any]:
  path = data_dir / "submissions" / f"{submission_id}.json"
  if not path.exists():
    raise FileNotFoundError(f"No stored submission {submission_id} in {path.parent}")
  return json.loads(path.read_text(encoding="utf-8"))

def read_summary(data_dir: Path) -> List[dict]:
  path = data_dir / "submissions.csv"
  if not path.exists():
    return []
  with path.open("r", newline="", encoding="utf-8") as f:
    return list(csv.DictReader(f))

def _upsert_summary(data_dir: Path, record: Dict[str, Any]):
  calc = record["calculations"]
  info = record["user_info"]
  out = {
    "id": record["id"],
    "created_at": record["created_at"],
    "status": record["status"],
    "name": info.get("name", ""),
    "email": info.get("email", ""),
    "experienced_carer": str(bool(info.get("is_experienced_carer"))).lower(),
    "children": str(len(record["children_data"])),
    "weekly_total": calc["weekly_total"],
    "monthly_total": calc["monthly_total"],
    "yearly_total": calc["yearly_total"],
    "synced": str(bool(record.get("synced"))).lower(),
  }

  # upsert by id
  rows = [r for r in read_summary(data_dir) if r.get("id") != record["id"]]
  rows.append(out)
  rows.sort(key=lambda r: r["created_at"])

  with (data_dir / "submissions.csv").open("w", newline="", encoding="utf-8") as f:
    w = csv.DictWriter(f, fieldnames=SUMMARY_FIELDS)
    w.writeheader()
    for r in rows:
      w.writerow({k: r.get(k, "") for k in SUMMARY_FIELDS})
