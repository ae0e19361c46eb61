from typing import Callable, List, Mapping, Optional, Sequence

from pydantic import BaseModel

from models.calendar import Date, DayOfWeek, HolidayCalendar, Month
from models.clock import Clock, Range, Time
from models.errors import TimecardError, require
from models.schema import Member
from utils.helper import field_at, find_member, parse_int

LUNCH_START = Clock(12, 10)
LUNCH_END = Clock(13, 0)

LEDGER_HEADER = (
    "年月,社員番号,氏名,日付,日付区分,曜日,規定出勤時刻,出勤時刻,退勤時刻,休憩時間,"
    "労働時間,労働時間（HH:mm）,補正労働時間,法定外労働時間,備考,出勤日数"
)
DAILY_HEADER = (
    "レコードの開始行,生産日,管理番号,作業者,派遣元,出勤,出勤[出勤],出勤[欠勤],開始_time1,"
    "休憩15:00[有り],休憩15:00[無し],休憩17:00[有り],休憩17:00[無し],退勤,勤務時間,備考"
)


def _text(value: object) -> str:
    return "" if value is None else str(value)


def or_zero(compute: Callable[[], Time]) -> Time:
    try:
        return compute()
    except TimecardError:
        return Time(0, 0)


class Record(BaseModel):
    """One member's attendance for one day, as read from the attendance ledger."""

    member: Member
    period: Optional[Month] = None
    date: Optional[Date] = None
    day_of_week: DayOfWeek = DayOfWeek.UNKNOWN
    came_at: Optional[Clock] = None
    left_at: Optional[Clock] = None
    declared_break: Time = Time(0, 0)
    declared_work_time: Optional[Time] = None
    remarks: Optional[str] = None
    worked_days: Optional[int] = None

    @classmethod
    def from_fields(
        cls,
        fields: Sequence[str],
        roster: Mapping[int, Member],
        holidays: Optional[HolidayCalendar] = None,
    ) -> "Record":
        """Build a record from a split ledger row.

        Columns: period, member id, name (unused), date, day of week,
        came at, left at, break, work time, remarks, worked days.
        Malformed fields become None; only the member lookup can fail.
        """
        member = find_member(roster, field_at(fields, 1))
        return cls(
            member=member,
            period=Month.parse(field_at(fields, 0)),
            date=Date.parse(field_at(fields, 3), holidays),
            day_of_week=DayOfWeek.parse(field_at(fields, 4)),
            came_at=Clock.parse(field_at(fields, 5)),
            left_at=Clock.parse(field_at(fields, 6)),
            declared_break=Time.parse(field_at(fields, 7)) or Time(0, 0),
            declared_work_time=Time.parse(field_at(fields, 8)),
            remarks=field_at(fields, 9),
            worked_days=parse_int(field_at(fields, 10)),
        )

    def break_time(self) -> Time:
        """Declared break plus every mandatory break the attendance span does not contain."""
        attendance = Range(start=require(self.came_at, "came_at"), end=require(self.left_at, "left_at"))
        result = self.declared_break
        for window in self.member.rule.breaks:
            if not attendance.includes(window):
                result = result.merge(window.duration())
        return result

    def rounded_work_time(self) -> Time:
        came_at = require(self.came_at, "came_at")
        left_at = require(self.left_at, "left_at")

        start_at = self.member.start_at
        if came_at.is_after(start_at):
            start_at = came_at.round_up()
        end_at = left_at.round_down()

        work_time = Time(0, 0)
        if not start_at.is_after(LUNCH_START):
            # a departure inside the lunch window still counts the whole morning
            morning_end = LUNCH_START if left_at.is_at_or_after(LUNCH_START) else end_at
            if morning_end.is_after(start_at):
                work_time = work_time.merge(morning_end.diff(start_at))

        afternoon_start = start_at if start_at.is_after(LUNCH_END) else LUNCH_END
        if end_at.is_after(afternoon_start):
            work_time = work_time.merge(end_at.diff(afternoon_start))

        return work_time.sub(self.break_time()).round_down()

    def over_work_time(self) -> Time:
        nominal = require(self.date, "date").kind.nominal_work_time
        return self.rounded_work_time().sub(nominal)

    def to_ledger_row(self) -> List[str]:
        return [
            _text(self.period),
            str(self.member.id),
            self.member.name,
            _text(self.date),
            _text(self.date.kind if self.date else None),
            _text(self.day_of_week),
            str(self.member.start_at),
            _text(self.came_at),
            _text(self.left_at),
            str(self.declared_break),
            _text(self.declared_work_time),
            self.declared_work_time.hhmm() if self.declared_work_time else "",
            str(or_zero(self.rounded_work_time)),
            str(or_zero(self.over_work_time)),
            _text(self.remarks),
            _text(self.worked_days),
        ]

    def to_daily_row(self, is_start: bool = False) -> List[str]:
        present = ["1", ""] if self.came_at is not None else ["", "1"]
        return [
            "*" if is_start else "",
            _text(self.date),
            str(self.member.id),
            self.member.name,
            self.member.dispatched_from,
            "出勤",
            *present,
            str(self.member.start_at),
            *self.member.rule.break_flags(),
            _text(self.left_at),
            self.declared_work_time.hhmm() if self.declared_work_time else "",
            _text(self.remarks),
        ]
