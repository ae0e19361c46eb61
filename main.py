import argparse
import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from config import BatchSettings, UnknownMemberPolicy
from models.calendar import Date, HolidayCalendar
from models.errors import TimecardError, UnknownMemberError
from models.record import DAILY_HEADER, LEDGER_HEADER, Record
from models.schema import BatchResult, Member, SkippedRow
from models.total import TOTALS_HEADER, Total
from utils.helper import field_at, load_holidays, load_roster, read_rows, write_rows


def collect_records(
    rows: Iterable[Tuple[int, Sequence[str]]],
    roster: Mapping[int, Member],
    holidays: HolidayCalendar,
    policy: UnknownMemberPolicy = UnknownMemberPolicy.DROP,
) -> Tuple[List[Record], List[SkippedRow]]:
    records: List[Record] = []
    skipped: List[SkippedRow] = []
    for line_no, fields in rows:
        try:
            records.append(Record.from_fields(fields, roster, holidays))
        except UnknownMemberError as exc:
            skipped.append(SkippedRow(line=line_no, member_id=exc.member_id, reason=str(exc)))
            if policy is UnknownMemberPolicy.REPORT:
                logging.warning(f"Dropped attendance row {line_no}: unknown member id {exc.member_id!r}")
            else:
                logging.debug(f"Dropped attendance row {line_no}: unknown member id {exc.member_id!r}")
    return records, skipped


def collect_totals(rows: Iterable[Tuple[int, Sequence[str]]], roster: Mapping[int, Member]) -> List[Total]:
    totals: List[Total] = []
    for line_no, fields in rows:
        try:
            totals.append(Total.from_fields(fields, roster))
        except UnknownMemberError:
            logging.warning(f"Payroll row {line_no} has unknown member id {field_at(fields, 0)!r}; writing an empty row")
            totals.append(Total.empty())
    return totals


def round_totals(totals: Iterable[Total], records: Sequence[Record]) -> List[Total]:
    by_member: Dict[int, List[Record]] = {}
    for record in records:
        by_member.setdefault(record.member.id, []).append(record)

    rounded: List[Total] = []
    for total in totals:
        if total.member is None:
            rounded.append(Total.empty())
            continue
        try:
            rounded.append(total.accumulate(by_member.get(total.member.id, [])))
        except TimecardError as exc:
            logging.warning(f"Could not total member {total.member.id}: {exc}; writing an empty row")
            rounded.append(Total.empty())
    return rounded


def daily_rows(records: Iterable[Record], mark_date_starts: bool = False) -> List[List[str]]:
    rows: List[List[str]] = []
    previous: Optional[Date] = None
    first = True
    for record in records:
        is_start = mark_date_starts and (first or record.date != previous)
        rows.append(record.to_daily_row(is_start=is_start))
        previous = record.date
        first = False
    return rows


def run_batch(settings: BatchSettings) -> BatchResult:
    encoding = settings.encoding
    logging.info(f"Working directory: {settings.directory}")

    roster = load_roster(settings.path(settings.roster_file), encoding)
    holidays = load_holidays(settings.path(settings.holidays_file), encoding)

    records, skipped = collect_records(
        read_rows(settings.path(settings.records_file), encoding),
        roster,
        holidays,
        settings.unknown_member_policy,
    )
    logging.info(f"Read {len(records)} attendance rows ({len(skipped)} dropped)")

    totals = collect_totals(read_rows(settings.path(settings.totals_file), encoding), roster)
    logging.info(f"Read {len(totals)} payroll rows")

    rounded = round_totals(totals, records)

    ledger_path = settings.path(settings.rounded_records_file)
    daily_path = settings.path(settings.daily_file)
    totals_path = settings.path(settings.rounded_totals_file)
    write_rows(ledger_path, LEDGER_HEADER, (record.to_ledger_row() for record in records), encoding)
    write_rows(daily_path, DAILY_HEADER, daily_rows(records, settings.mark_date_starts), encoding)
    write_rows(totals_path, TOTALS_HEADER, (total.to_row() for total in rounded), encoding)
    logging.info(f"Wrote {ledger_path}, {daily_path} and {totals_path}")

    return BatchResult(
        records=len(records),
        totals=len(rounded),
        skipped=skipped,
        ledger_path=str(ledger_path),
        daily_path=str(daily_path),
        totals_path=str(totals_path),
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Round attendance punches and fold them into payroll totals.")
    parser.add_argument("--dir", help="Directory holding the input CSV files; outputs are written there too.")
    parser.add_argument("--encoding", help="Text encoding of the input and output files.")
    parser.add_argument(
        "--unknown-member",
        choices=[policy.value for policy in UnknownMemberPolicy],
        help="What to do with attendance rows whose member id is not in the roster.",
    )
    parser.add_argument("--mark-date-starts", action="store_true", default=None, help="Mark the first row of each date in the daily summary.")
    parser.add_argument("--log-level", help="Logging level.")
    args = parser.parse_args(argv)

    settings = BatchSettings.from_env(
        directory=args.dir,
        encoding=args.encoding,
        unknown_member_policy=args.unknown_member,
        mark_date_starts=args.mark_date_starts,
        log_level=args.log_level,
    )
    logging.basicConfig(level=settings.log_level.upper(), format="%(asctime)s %(levelname)s %(message)s")

    result = run_batch(settings)
    logging.info(f"Done: {result.records} records, {result.totals} totals, {len(result.skipped)} dropped rows")


if __name__ == "__main__":
    main()
