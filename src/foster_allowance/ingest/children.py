from __future__ import annotations
import csv
from pathlib import Path
from typing import List, Dict, Any
import pandas as pd

_SUFFIXES = {".csv", ".xls"}

_ALIASES = {
    "child_id": ["child_id", "child id", "child", "id"],
    "age_group": ["age_group", "age group", "age bracket", "age"],
    "special_care": ["special_care", "special care", "is_special_care", "special"],
    "start_week": ["start_week", "start week", "start"],
    "end_week": ["end_week", "end week", "end"],
}
_REQ = ("child_id", "age_group")

def _to_str(x) -> str:
    if pd.isna(x):
        return ""
    return str(x)

def _is_csv(path: Path) -> bool:
    return path.suffix.lower() == ".csv"

def _read_raw(path: Path) -> pd.DataFrame:
    if _is_csv(path):
        # title lines above the header may be narrower than the table
        with path.open("r", newline="", encoding="utf-8-sig") as f:
            rows = list(csv.reader(f))
        return pd.DataFrame(rows, dtype=object)
    return pd.read_excel(path, header=None, dtype=object, engine="xlrd")

def _read_table(path: Path, header_idx: int) -> pd.DataFrame:
    if _is_csv(path):
        return pd.read_csv(path, skiprows=header_idx, header=0, dtype=object,
                           skip_blank_lines=False, encoding="utf-8-sig")
    return pd.read_excel(path, header=header_idx, dtype=object, engine="xlrd")

def _find_header_idx(df_raw: pd.DataFrame) -> int:
    scan = min(10, len(df_raw))
    for i in range(scan):
        cells = {c for c in df_raw.iloc[i].map(_to_str).str.strip().str.lower().tolist() if c}
        if all(any(a in cells for a in _ALIASES[k]) for k in _REQ):
            return i
    return 0

def _find_col(df: pd.DataFrame, names: list[str]) -> str | None:
    low = {c.strip().lower(): c for c in df.columns if isinstance(c, str)}
    for n in names:
        if n in low:
            return low[n]
    return None

def find_latest_children_sheet(children_dir: Path) -> Path:
    candidates = sorted([p for p in children_dir.glob("*") if p.is_file() and p.suffix.lower() in _SUFFIXES],
                        key=lambda p: p.stat().st_mtime, reverse=True)
    if not candidates:
        raise FileNotFoundError(f"No children sheets (.csv/.xls) found in {children_dir}")
    return candidates[0]

def parse_children_sheet(path: Path) -> List[Dict[str, Any]]:
    """
    One row per care interval. Rows for the same child share a child id;
    a row with blank start/end declares a child with no care weeks.
    Values are returned as raw strings; normalize.build_child_records parses them.
    """
    # pass 1: sniff header row
    df_raw = _read_raw(path)
    header_idx = _find_header_idx(df_raw)

    # pass 2: proper headered frame
    df = _read_table(path, header_idx)

    cols = {k: _find_col(df, names) for k, names in _ALIASES.items()}
    missing = [k for k in _REQ if not cols[k]]
    if missing:
        raise ValueError(f"Missing expected columns {missing}. Found: {list(df.columns)}")

    out: List[Dict[str, Any]] = []
    for i, row in df.iterrows():
        rec = {k: (_to_str(row.get(c)).strip() if c else "") for k, c in cols.items()}
        # skip truly empty rows
        if not any(rec.values()):
            continue
        rec["line"] = header_idx + int(i) + 2  # 1-based sheet line, for error messages
        out.append(rec)
    return out
