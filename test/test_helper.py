import pytest

from models.calendar import Date, DateKind
from models.classification import Classification
from models.errors import UnknownMemberError
from utils.helper import build_roster, find_member, load_holidays, load_roster, read_rows, write_rows


def test_read_rows_skips_blank_lines_and_unquotes(tmp_path):
    path = tmp_path / "rows.csv"
    path.write_text('"1","山田, 太郎","A"\n\n,,\n2,佐藤,B\n', encoding="cp932")

    rows = list(read_rows(path, "cp932"))

    assert rows == [(1, ["1", "山田, 太郎", "A"]), (4, ["2", "佐藤", "B"])]


def test_build_roster():
    roster = build_roster(
        [
            ["101", "山田太郎", "LUC社員", "本社"],
            ["102", "佐藤花子", "役員"],
            ["103", "田中", "アルバイト"],
            ["abc", "不正", "A"],
            ["104", "短い"],
        ]
    )

    assert sorted(roster) == [101, 102, 103]
    assert roster[101].classification is Classification.FULL_TIME
    assert roster[101].dispatched_from == "本社"
    assert roster[102].classification is Classification.FULL_TIME
    assert roster[103].classification is Classification.UNKNOWN
    assert roster[103].dispatched_from == ""


def test_find_member():
    roster = build_roster([["101", "山田太郎", "A"]])

    assert find_member(roster, " 101 ").name == "山田太郎"
    with pytest.raises(UnknownMemberError):
        find_member(roster, "102")
    with pytest.raises(UnknownMemberError):
        find_member(roster, "")


def test_load_roster(tmp_path):
    path = tmp_path / "名簿.csv"
    path.write_text("101,山田太郎,LUC準社員\n", encoding="cp932")

    roster = load_roster(path, "cp932")

    assert roster[101].classification is Classification.ASSOCIATE


def test_load_holidays(tmp_path):
    path = tmp_path / "休日.csv"
    path.write_text("5/3,5/4,5/5\n8/13,,x\n", encoding="cp932")

    holidays = load_holidays(path, "cp932")

    assert len(holidays) == 4
    assert holidays.kind_of(Date(month=8, day=13)) is DateKind.HOLIDAY
    assert holidays.kind_of(Date(month=8, day=14)) is DateKind.WORKDAY


def test_write_rows(tmp_path):
    path = tmp_path / "out" / "report.csv"

    count = write_rows(path, "社員コード,氏名", [["1", "山田"], ["2", "佐藤, 花子"]], "cp932")

    assert count == 2
    assert path.read_text(encoding="cp932") == '社員コード,氏名\n1,山田\n2,"佐藤, 花子"\n'
