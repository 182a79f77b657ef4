# grouping_core/io.py
from __future__ import annotations
import io
import hashlib
import logging
import re
from typing import Dict, Iterable, List

import pandas as pd

from .constants import import_gender_token
from .errors import RosterFileError
from .models import GroupingResult, StudentRecord

logger = logging.getLogger(__name__)

CSV_HEADERS = ["id", "name", "gender", "needs_help", "is_support_partner", "separations"]
REQUIRED_COLUMNS = ["name"]

HEADER_ALIASES = {
    # canonical -> set of aliases
    "id": {"student_id", "student id", "uuid"},
    "name": {"student", "student name", "full name"},
    "gender": {"sex"},
    "needs_help": {"needs help", "needshelp", "support needed"},
    "is_support_partner": {"support partner", "support_partner", "supportpartner", "helper"},
    "separations": {"separation", "separation_list", "separate from", "keep apart"},
}

TRUE_TOKENS = {"1", "true", "yes", "y", "x", "t"}
TOKEN_SPLIT = re.compile(r"[,;]")


def _header_map(cols: Iterable[str]) -> Dict[str, str]:
    """
    Build a mapping from provided column -> canonical header.
    Case-insensitive, uses HEADER_ALIASES, leaves unknown columns untouched.
    """
    out = {}
    for c in cols:
        lc = str(c).strip().lower()
        mapped = None
        for k, aliases in HEADER_ALIASES.items():
            if lc == k or lc in aliases:
                mapped = k
                break
        out[c] = mapped if mapped else c
    return out


def _flag(v) -> bool:
    return str(v).strip().lower() in TRUE_TOKENS


def _tokens(v) -> List[str]:
    return [t.strip() for t in TOKEN_SPLIT.split(str(v or "")) if t.strip()]


def _derive_id(name: str, id_counts: Dict[str, int]) -> str:
    # deterministic short id from the name; suffix counter on collisions
    base = hashlib.md5(name.lower().encode()).hexdigest()[:8]
    n = id_counts.get(base, 0)
    id_counts[base] = n + 1
    return base if n == 0 else f"{base}-{n}"


def _resolve_separations(tokens: List[str], ids: set, id_by_name: Dict[str, str], owner: str) -> List[str]:
    resolved: List[str] = []
    for t in tokens:
        sid = t if t in ids else id_by_name.get(t.lower())
        if sid is None:
            logger.debug("Dropping unknown separation token %r for %s", t, owner)
            continue
        if sid not in resolved:
            resolved.append(sid)
    return resolved


def dataframe_to_students(df: pd.DataFrame) -> List[StudentRecord]:
    hmap = _header_map(df.columns)
    df = df.rename(columns=hmap)
    clashes = sorted(set(df.columns[df.columns.duplicated()]))
    if clashes:
        sources = {k: [c for c, v in hmap.items() if v == k] for k in clashes}
        raise RosterFileError(f"Several columns map to the same field: {sources}")
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise RosterFileError(f"Missing required columns: {missing}")
    for k in CSV_HEADERS:
        if k not in df.columns:
            df[k] = ""
    df = df[CSV_HEADERS].fillna("").astype(str)
    df = df[df["name"].str.strip() != ""]

    id_counts: Dict[str, int] = {}
    rows = []
    for _, r in df.iterrows():
        name = r["name"].strip()
        sid = r["id"].strip() or _derive_id(name, id_counts)
        rows.append((sid, name, r))

    ids = {sid for sid, _, _ in rows}
    id_by_name: Dict[str, str] = {}
    for sid, name, _ in rows:
        id_by_name.setdefault(name.lower(), sid)

    students: List[StudentRecord] = []
    for sid, name, r in rows:
        students.append(StudentRecord(
            id=sid,
            name=name,
            gender=import_gender_token(r["gender"]),
            needs_help=_flag(r["needs_help"]),
            is_support_partner=_flag(r["is_support_partner"]),
            separation_ids=_resolve_separations(_tokens(r["separations"]), ids, id_by_name, name),
        ))
    return students


def load_roster_csv(file_like) -> List[StudentRecord]:
    """Parse a roster CSV (path, bytes or file-like) into StudentRecords."""
    if isinstance(file_like, (bytes, bytearray)):
        file_like = io.BytesIO(file_like)
    try:
        df = pd.read_csv(file_like, dtype=str, keep_default_na=False)
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise RosterFileError(f"Could not read roster CSV: {e}") from e
    return dataframe_to_students(df)


def students_to_dataframe(students: List[StudentRecord]) -> pd.DataFrame:
    rows = []
    for s in students:
        rows.append({
            "id": s.id,
            "name": s.name,
            "gender": s.gender,
            "needs_help": s.needs_help,
            "is_support_partner": s.is_support_partner,
            "separations": ",".join(s.separation_ids),
        })
    return pd.DataFrame(rows, columns=CSV_HEADERS)


def groups_to_dataframe(result: GroupingResult) -> pd.DataFrame:
    rows = []
    for g_idx, group in enumerate(result.groups, start=1):
        for s in group:
            rows.append({
                "group": g_idx,
                "id": s.id,
                "name": s.name,
                "gender": s.gender,
                "needs_help": s.needs_help,
                "is_support_partner": s.is_support_partner,
            })
    return pd.DataFrame(rows, columns=["group", "id", "name", "gender", "needs_help", "is_support_partner"])


def save_groups_csv_bytes(result: GroupingResult) -> bytes:
    buf = io.StringIO()
    groups_to_dataframe(result).to_csv(buf, index=False)
    return buf.getvalue().encode("utf-8")


def generate_template_csv_bytes() -> bytes:
    example = (
        "id,name,gender,needs_help,is_support_partner,separations\n"
        "s1,Alex Quinn,Female,no,yes,\n"
        "s2,Blake Diaz,Male,yes,no,s1\n"
    )
    return example.encode("utf-8")
