from enum import Enum
from typing import FrozenSet, Iterable, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from models.clock import Time
from models.errors import UnannotatedDateError


class Month(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    month: int

    @classmethod
    def parse(cls, text: str) -> Optional["Month"]:
        parts = text.strip().split("/")
        if len(parts) < 2:
            return None
        try:
            return cls(year=int(parts[0]), month=int(parts[1]))
        except ValueError:
            return None

    def __str__(self) -> str:
        return f"{self.year:04d}/{self.month:02d}"


class DayOfWeek(Enum):
    SUN = "日"
    MON = "月"
    TUE = "火"
    WED = "水"
    THU = "木"
    FRI = "金"
    SAT = "土"
    UNKNOWN = ""

    @classmethod
    def parse(cls, text: str) -> "DayOfWeek":
        try:
            return cls(text.strip())
        except ValueError:
            return cls.UNKNOWN

    def __str__(self) -> str:
        return self.value


class DateKind(Enum):
    UNANNOTATED = "不明"
    WORKDAY = "平日"
    HOLIDAY = "休日"

    @property
    def nominal_work_time(self) -> Time:
        if self is DateKind.WORKDAY:
            return Time(8, 0)
        if self is DateKind.HOLIDAY:
            return Time(0, 0)
        raise UnannotatedDateError("Date kind is not annotated")

    def __str__(self) -> str:
        return self.value


class Date(BaseModel):
    """A month/day pair. Identity ignores ``kind``."""

    model_config = ConfigDict(frozen=True)

    month: int
    day: int
    kind: DateKind = DateKind.UNANNOTATED

    @classmethod
    def parse(cls, text: str, holidays: Optional["HolidayCalendar"] = None) -> Optional["Date"]:
        parts = text.strip().split("/")
        if len(parts) < 2:
            return None
        try:
            parsed = cls(month=int(parts[0]), day=int(parts[1]))
        except ValueError:
            return None
        if holidays is not None:
            return holidays.annotate(parsed)
        return parsed

    @property
    def key(self) -> Tuple[int, int]:
        return (self.month, self.day)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __str__(self) -> str:
        return f"{self.month:02d}/{self.day:02d}"


class HolidayCalendar:
    def __init__(self, days: Iterable[Tuple[int, int]] = ()):
        self._days: FrozenSet[Tuple[int, int]] = frozenset(days)

    def __contains__(self, date: Date) -> bool:
        return date.key in self._days

    def __len__(self) -> int:
        return len(self._days)

    def kind_of(self, date: Date) -> DateKind:
        return DateKind.HOLIDAY if date in self else DateKind.WORKDAY

    def annotate(self, date: Date) -> Date:
        return Date(month=date.month, day=date.day, kind=self.kind_of(date))
