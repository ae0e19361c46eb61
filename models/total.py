from typing import Iterable, List, Mapping, Optional, Sequence

from pydantic import BaseModel

from models.clock import Time
from models.errors import TimecardError
from models.record import Record, or_zero
from models.schema import Member
from utils.helper import field_at, find_member, parse_int

TOTALS_HEADER = ",".join(
    [
        "社員コード", "氏名", "要勤務日数", "要勤務時間", "出勤日数", "出勤時間", "補正出勤時間", "法定外労働時間",
        "事故欠勤日数", "病気欠勤日数", "代休特休日数", "休日出勤日数", "有休消化日数", "有休残日数",
        "残業平日普通", "残業平日深夜", "残業休日普通", "残業休日深夜", "残業法定普通", "残業法定深夜",
        "遅刻早退回数", "遅刻早退時間", "有休日数消化", "有休時間消化", "有休日数残", "有休時間残", "有休可能時間",
    ]
    + [f"残業{day}{shift}{band}" for day in ("平日", "休日") for shift in ("普通", "深夜")
       for band in ("45下", "45超", "60超", "代休")]
    + [f"勤怠自由時間{i}" for i in range(1, 11)]
    + [f"勤怠自由数値{i}" for i in range(1, 11)]
    + [f"回数{i}" for i in range(1, 31)]
)


def _text(value: object) -> str:
    return "" if value is None else str(value)


class Total(BaseModel):
    """One member's monthly row from the payroll export, with rounded figures folded in."""

    member: Optional[Member] = None
    nominal_work_days: Optional[int] = None
    nominal_work_time: Optional[Time] = None
    work_days: Optional[int] = None
    total_work_time: Optional[Time] = None
    others: List[str] = []
    rounded_work_time: Optional[Time] = None
    rounded_over_work_time: Optional[Time] = None

    @classmethod
    def from_fields(cls, fields: Sequence[str], roster: Mapping[int, Member]) -> "Total":
        return cls(
            member=find_member(roster, field_at(fields, 0)),
            nominal_work_days=parse_int(field_at(fields, 1)),
            nominal_work_time=Time.parse(field_at(fields, 2)),
            work_days=parse_int(field_at(fields, 3)),
            total_work_time=Time.parse(field_at(fields, 4)),
            others=list(fields[5:]),
            rounded_work_time=Time(0, 0),
            rounded_over_work_time=Time(0, 0),
        )

    @classmethod
    def empty(cls) -> "Total":
        return cls()

    def accumulate(self, records: Iterable[Record]) -> "Total":
        if self.rounded_work_time is None or self.rounded_over_work_time is None:
            raise TimecardError("Total has no accumulator")
        rounded = self.rounded_work_time
        over = self.rounded_over_work_time
        for record in records:
            rounded = rounded.merge(or_zero(record.rounded_work_time))
            over = over.merge(or_zero(record.over_work_time))
        return self.model_copy(update={"rounded_work_time": rounded, "rounded_over_work_time": over})

    def to_row(self) -> List[str]:
        return [
            _text(self.member.id if self.member else None),
            self.member.name if self.member else "",
            _text(self.nominal_work_days),
            _text(self.nominal_work_time),
            _text(self.work_days),
            _text(self.total_work_time),
            _text(self.rounded_work_time),
            _text(self.rounded_over_work_time),
            *self.others,
        ]
