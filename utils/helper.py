import csv
import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from models.calendar import Date, HolidayCalendar
from models.classification import Classification
from models.errors import UnknownMemberError
from models.schema import Member


def field_at(fields: Sequence[str], index: int) -> str:
    if index < len(fields):
        return fields[index].strip()
    return ""


def parse_int(text: str) -> Optional[int]:
    try:
        return int(text.strip())
    except ValueError:
        return None


def find_member(roster: Mapping[int, Member], member_id: str) -> Member:
    parsed = parse_int(member_id)
    if parsed is None or parsed not in roster:
        raise UnknownMemberError(member_id)
    return roster[parsed]


def read_rows(path: str | Path, encoding: str) -> Iterator[Tuple[int, List[str]]]:
    """Yield ``(line number, fields)`` for every non-empty row of a CSV file."""
    with Path(path).open(newline="", encoding=encoding, errors="replace") as handle:
        for line_no, row in enumerate(csv.reader(handle), start=1):
            if not row or not any(cell.strip() for cell in row):
                continue
            yield line_no, row


def build_roster(rows: Iterable[Sequence[str]]) -> Dict[int, Member]:
    roster: Dict[int, Member] = {}
    for row in rows:
        if len(row) < 3:
            continue
        member_id = parse_int(row[0])
        if member_id is None:
            continue
        roster[member_id] = Member(
            id=member_id,
            name=row[1].strip(),
            classification=Classification.from_tag(row[2]),
            dispatched_from=field_at(row, 3),
        )
    return roster


def load_roster(path: str | Path, encoding: str) -> Dict[int, Member]:
    roster = build_roster(row for _, row in read_rows(path, encoding))
    logging.info(f"Loaded {len(roster)} members from {path}")
    return roster


def build_holidays(cells: Iterable[str]) -> HolidayCalendar:
    days = []
    for cell in cells:
        date = Date.parse(cell)
        if date is not None:
            days.append(date.key)
    return HolidayCalendar(days)


def load_holidays(path: str | Path, encoding: str) -> HolidayCalendar:
    holidays = build_holidays(cell for _, row in read_rows(path, encoding) for cell in row)
    logging.info(f"Loaded {len(holidays)} holidays from {path}")
    return holidays


def write_rows(path: str | Path, header: str, rows: Iterable[Sequence[str]], encoding: str) -> int:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with target.open("w", newline="", encoding=encoding, errors="replace") as handle:
        handle.write(header + "\n")
        writer = csv.writer(handle, lineterminator="\n")
        for row in rows:
            writer.writerow(row)
            count += 1
    return count
