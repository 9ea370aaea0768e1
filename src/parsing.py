"""Dataset loading and date handling utilities."""

import json
import logging
from pathlib import Path
import re

from models import Member

logger = logging.getLogger(__name__)


# Month name mappings (handle abbreviations and full names)
MONTH_MAP = {
    "JAN": 1,
    "JANUARY": 1,
    "FEB": 2,
    "FEBRUARY": 2,
    "MAR": 3,
    "MARCH": 3,
    "APR": 4,
    "APRIL": 4,
    "MAY": 5,
    "JUN": 6,
    "JUNE": 6,
    "JUL": 7,
    "JULY": 7,
    "AUG": 8,
    "AUGUST": 8,
    "SEP": 9,
    "SEPT": 9,
    "SEPTEMBER": 9,
    "OCT": 10,
    "OCTOBER": 10,
    "NOV": 11,
    "NOVEMBER": 11,
    "DEC": 12,
    "DECEMBER": 12,
}


def parse_date_string(date_str: str | None) -> str | None:
    """
    Normalize a death date into ISO format (YYYY-MM-DD).
    Returns None if the date cannot be parsed.

    Handles formats like:
    - "2019-03-14"
    - "14 MAR 2019" / "14 March 2019"
    - "March 14, 2019"
    - "14/03/2019" (day first, as the family records are written)
    - "2019" (year only)
    """
    if not date_str:
        return None

    s = date_str.strip()
    if not s:
        return None

    # ISO format, possibly with 00 month/day
    match = re.match(r"^(\d{4})-(\d{1,2})-(\d{1,2})$", s)
    if match:
        year, month, day = (int(g) for g in match.groups())
        month = month or 1
        day = day or 1
        if 1 <= month <= 12 and 1 <= day <= 31:
            return f"{year:04d}-{month:02d}-{day:02d}"
        return None

    # "14 MAR 2019" or "14 March 2019"
    match = re.match(r"^(\d{1,2})\s+([A-Za-z]+)\.?\s*(\d{4})$", s)
    if match:
        day = int(match.group(1))
        month = MONTH_MAP.get(match.group(2).upper())
        year = int(match.group(3))
        if month and 1 <= day <= 31:
            return f"{year:04d}-{month:02d}-{day:02d}"

    # "March 14, 2019"
    match = re.match(r"^([A-Za-z]+)\.?\s*(\d{1,2}),?\s*(\d{4})$", s)
    if match:
        month = MONTH_MAP.get(match.group(1).upper())
        day = int(match.group(2))
        year = int(match.group(3))
        if month and 1 <= day <= 31:
            return f"{year:04d}-{month:02d}-{day:02d}"

    # "14/03/2019" or "14-03-2019" (DD/MM/YYYY)
    match = re.match(r"^(\d{1,2})[-/.](\d{1,2})[-/.](\d{4})$", s)
    if match:
        day = int(match.group(1))
        month = int(match.group(2))
        year = int(match.group(3))
        if 1 <= month <= 12 and 1 <= day <= 31:
            return f"{year:04d}-{month:02d}-{day:02d}"

    # Year only
    match = re.match(r"^(\d{4})$", s)
    if match:
        return f"{int(match.group(1)):04d}-01-01"

    return None


def _optional_str(value) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _flag(record: dict, key: str, index: int) -> bool:
    value = record.get(key, False)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValueError(f"Record {index} has non-boolean {key}: {value!r}")
    return value


def parse_member(record: dict, index: int = 0) -> Member:
    """
    Build a Member from one authored record.

    Keys follow the camelCase names used by the family data file
    (fatherId, isDeceased, deathDate, fatherName, isOutsider).
    """
    if not isinstance(record, dict):
        raise ValueError(f"Record {index} is not an object: {record!r}")

    member_id = _optional_str(record.get("id"))
    name = _optional_str(record.get("name"))
    if member_id is None:
        raise ValueError(f"Record {index} has no id")
    if name is None:
        raise ValueError(f"Record {index} ({member_id}) has no name")

    raw_death_date = record.get("deathDate")
    death_date = parse_date_string(raw_death_date)
    if raw_death_date and death_date is None:
        logger.warning("Could not parse death date %r for member %s", raw_death_date, member_id)

    # Outsider ancestors are authored as [{"name": ...}, ...], nearest first
    ancestors = []
    for entry in record.get("ancestors") or ():
        ancestor = _optional_str(entry.get("name") if isinstance(entry, dict) else entry)
        if ancestor is None:
            raise ValueError(f"Record {index} ({member_id}) has an ancestor without a name")
        ancestors.append(ancestor)

    generation = record.get("generation")

    return Member(
        id=member_id,
        name=name,
        father_id=_optional_str(record.get("fatherId")),
        is_deceased=_flag(record, "isDeceased", index),
        death_date=death_date,
        father_name=_optional_str(record.get("fatherName")),
        is_outsider=_flag(record, "isOutsider", index),
        generation=int(generation) if generation is not None else None,
        ancestors=tuple(ancestors),
    )


def parse_members(records: list) -> list[Member]:
    if not isinstance(records, list):
        raise ValueError(f"Expected a list of member records, got {type(records).__name__}")
    return [parse_member(record, index) for index, record in enumerate(records)]


def load_members(filepath: Path) -> list[Member]:
    """Read a JSON array of member records from `filepath`."""
    with open(filepath, encoding="utf-8") as f:
        records = json.load(f)
    members = parse_members(records)
    logger.debug("Read %d member records from %s", len(members), filepath)
    return members
