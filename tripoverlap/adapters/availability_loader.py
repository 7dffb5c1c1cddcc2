"""
Load participant availability from files.

Two formats are supported:

- YAML or JSON documents listing participants and their free days
- CSV exports of scheduling polls, one column per date
"""

from __future__ import annotations

import csv
import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from dateutil import parser as dparse

from ..domain.exceptions import AvailabilityImportError
from ..domain.models import ParticipantAvailability

logger = logging.getLogger(__name__)

# Poll answers that count as "free"
POLL_AVAILABLE_ANSWERS = frozenset({"yes", "if need be"})

POLL_NAME_COLUMN = "Name"
POLL_EMAIL_COLUMN = "Email"


def load_availability(path: Path) -> List[ParticipantAvailability]:
    """
    Load participants from a file, choosing the parser by suffix.

    Raises:
        FileNotFoundError: If the file doesn't exist
        AvailabilityImportError: If the file cannot be parsed
    """
    suffix = path.suffix.lower()

    if suffix == ".csv":
        return load_poll_csv(path)

    if suffix in (".yaml", ".yml", ".json"):
        return load_participants_file(path)

    raise AvailabilityImportError(
        f"Unsupported availability file type '{path.suffix}'. "
        "Use .yaml, .yml, .json or .csv."
    )


def load_participants_file(path: Path) -> List[ParticipantAvailability]:
    """
    Load participants from a YAML or JSON document.

    Expected shape (either a top-level list or a ``participants`` key):

        participants:
          - name: Alice
            email: alice@example.com
            available_days: [2024-06-01, 2024-06-02]
    """
    _ensure_exists(path)

    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as exc:
        raise AvailabilityImportError(f"Could not read {path}: {exc}") from exc

    if data is None:
        return []

    if isinstance(data, dict):
        entries = data.get("participants") or []
    else:
        entries = data

    if not isinstance(entries, list):
        raise AvailabilityImportError(
            f"{path} must contain a list of participants."
        )

    participants: List[ParticipantAvailability] = []

    for index, entry in enumerate(entries, 1):
        if not isinstance(entry, dict):
            raise AvailabilityImportError(
                f"Participant #{index} in {path} must be a mapping, got {type(entry).__name__}"
            )
        try:
            participants.append(ParticipantAvailability.from_mapping(_check_day_lists(entry)))
        except (TypeError, ValueError) as exc:
            raise AvailabilityImportError(
                f"Participant #{index} in {path} is invalid: {exc}"
            ) from exc

    logger.info("Loaded %d participant(s) from %s", len(participants), path)
    return participants


def load_poll_csv(path: Path) -> List[ParticipantAvailability]:
    """
    Load participants from a poll export.

    CSV format (first row = headers):
        Name,Email,Mon 1 Jun 2026,Tue 2 Jun 2026,...

    Each date cell is "Yes", "If need be" or "No". "Yes" and "If need be"
    both count as available. Header columns that are not dates are ignored.
    """
    _ensure_exists(path)

    try:
        with open(path, "r", encoding="utf-8-sig", newline="") as f:
            reader = csv.DictReader(f)
            headers = [header.strip() for header in (reader.fieldnames or [])]
            rows = [
                {(key or "").strip(): (value or "") for key, value in row.items()}
                for row in reader
            ]
    except (OSError, csv.Error) as exc:
        raise AvailabilityImportError(f"Could not read {path}: {exc}") from exc

    if POLL_NAME_COLUMN not in headers:
        raise AvailabilityImportError(
            f"{path} has no '{POLL_NAME_COLUMN}' column."
        )

    date_columns: Dict[str, date] = {}
    for header in headers:
        if header in (POLL_NAME_COLUMN, POLL_EMAIL_COLUMN):
            continue
        day = parse_poll_header(header)
        if day is None:
            logger.debug("Ignoring non-date column %r in %s", header, path)
            continue
        date_columns[header] = day

    participants: List[ParticipantAvailability] = []

    for line_number, row in enumerate(rows, 2):
        name = row.get(POLL_NAME_COLUMN, "").strip()
        if not name:
            logger.warning("Skipping row %d in %s: empty name", line_number, path)
            continue

        available_days = [
            day for header, day in date_columns.items()
            if row.get(header, "").strip().lower() in POLL_AVAILABLE_ANSWERS
        ]

        participants.append(
            ParticipantAvailability(
                name=name,
                available_days=tuple(available_days),
                email=row.get(POLL_EMAIL_COLUMN, "").strip()
            )
        )

    logger.info(
        "Imported %d participant(s) across %d date column(s) from %s",
        len(participants),
        len(date_columns),
        path,
    )
    return participants


def parse_poll_header(header: str) -> Optional[date]:
    """
    Convert a poll column header like "Mon 1 Jun 2026" to a date.

    Returns None if the header doesn't look like a date.
    """
    parts = header.split()
    if len(parts) != 4:
        return None

    _, day, month, year = parts
    if not (day.isdigit() and year.isdigit() and month.isalpha()):
        return None

    try:
        return dparse.parse(f"{day} {month} {year}").date()
    except (ValueError, OverflowError):
        return None


class FileAvailabilitySource:
    """
    Availability source backed by a file on disk.

    The file is read on every call so edits show up without restarting.
    """

    def __init__(self, path: Path):
        self.path = path

    def load_participants(self) -> List[ParticipantAvailability]:
        return load_availability(self.path)


def _ensure_exists(path: Path) -> None:
    if not path.exists():
        raise FileNotFoundError(f"Availability file not found: {path}")


def _check_day_lists(entry: Dict[str, Any]) -> Dict[str, Any]:
    """Reject a single string where a list of days is expected."""
    normalized = dict(entry)
    for key in ("available_days", "availableDays"):
        days = normalized.get(key)
        if isinstance(days, (str, bytes)):
            raise ValueError(f"'{key}' must be a list of dates")
    return normalized
