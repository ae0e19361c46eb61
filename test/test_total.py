import pytest

from models.calendar import Date, DateKind
from models.classification import Classification
from models.clock import Clock, Time
from models.errors import UnknownMemberError
from models.record import Record
from models.schema import Member
from models.total import TOTALS_HEADER, Total

member = Member(id=7, name="鈴木一郎", classification=Classification.FULL_TIME)
roster = {member.id: member}


def workday(came_at, left_at, declared_break=Time(0, 45), kind=DateKind.WORKDAY, day=1):
    return Record(
        member=member,
        date=Date(month=6, day=day, kind=kind),
        came_at=came_at,
        left_at=left_at,
        declared_break=declared_break,
    )


def test_fold_sums_rounded_times():
    records = [
        workday(Clock(8, 40), Clock(17, 20)),
        workday(Clock(8, 30), Clock(17, 55), day=2),
    ]
    assert records[0].rounded_work_time() == Time(6, 45)
    assert records[1].rounded_work_time() == Time(7, 30)

    total = Total.from_fields(["7", "20", "160:00", "2", "15:40"], roster).accumulate(records)

    assert total.rounded_work_time == Time(14, 15)
    assert total.rounded_over_work_time == Time(0, 0)


def test_fold_is_order_independent():
    records = [
        workday(Clock(8, 40), Clock(17, 20)),
        workday(Clock(9, 0), Clock(20, 0), kind=DateKind.HOLIDAY, day=2),
        workday(Clock(8, 0), Clock(19, 30), day=3),
    ]
    total = Total.from_fields(["7"], roster)

    forward = total.accumulate(records)
    backward = total.accumulate(reversed(records))

    assert forward.rounded_work_time == backward.rounded_work_time
    assert forward.rounded_over_work_time == backward.rounded_over_work_time


def test_fold_counts_failures_as_zero():
    records = [
        workday(Clock(8, 40), Clock(17, 20), kind=DateKind.UNANNOTATED),
        workday(None, Clock(17, 20), day=2),
    ]

    total = Total.from_fields(["7"], roster).accumulate(records)

    assert total.rounded_work_time == Time(6, 45)
    assert total.rounded_over_work_time == Time(0, 0)


def test_accumulate_returns_new_total():
    total = Total.from_fields(["7"], roster)

    folded = total.accumulate([workday(Clock(8, 40), Clock(17, 20))])

    assert total.rounded_work_time == Time(0, 0)
    assert folded.rounded_work_time == Time(6, 45)


def test_unknown_member():
    with pytest.raises(UnknownMemberError):
        Total.from_fields(["8", "20"], roster)
    with pytest.raises(UnknownMemberError):
        Total.from_fields(["", "20"], roster)


def test_row_keeps_passthrough_fields():
    fields = ["7", "20", "160:00", "19", "152:30", "0", "1", "3:30"]

    row = Total.from_fields(fields, roster).accumulate([workday(Clock(8, 40), Clock(17, 20))]).to_row()

    assert row == ["7", "鈴木一郎", "20", "160.00", "19", "152.50", "6.75", "0.00", "0", "1", "3:30"]


def test_empty_row():
    assert Total.empty().to_row() == ["", "", "", "", "", "", "", ""]


def test_header_columns():
    columns = TOTALS_HEADER.split(",")

    assert columns[:8] == ["社員コード", "氏名", "要勤務日数", "要勤務時間", "出勤日数", "出勤時間", "補正出勤時間", "法定外労働時間"]
    assert columns[27] == "残業平日普通45下"
    assert columns[-1] == "回数30"
