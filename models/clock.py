from typing import Any, ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

ROUNDING_MINUTES = 15
MINUTES_PER_DAY = 24 * 60


class _HoursMinutes(BaseModel):
    model_config = ConfigDict(frozen=True)

    WRAP_HOURS: ClassVar[Optional[int]] = None

    hours: int = Field(default=0, ge=0)
    minutes: int = Field(default=0, ge=0)

    def __init__(self, hours: int = 0, minutes: int = 0, **data: Any):
        super().__init__(hours=hours, minutes=minutes, **data)

    @model_validator(mode="before")
    @classmethod
    def carry(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        try:
            hours = int(data.get("hours", 0))
            minutes = int(data.get("minutes", 0))
        except (TypeError, ValueError):
            return data
        if hours < 0 or minutes < 0:
            # left for field validation to reject
            return data
        hours += minutes // 60
        minutes %= 60
        if cls.WRAP_HOURS is not None:
            hours %= cls.WRAP_HOURS
        return {**data, "hours": hours, "minutes": minutes}

    @classmethod
    def parse(cls, text: str):
        """Parse ``H:MM`` text; returns None when the text is malformed."""
        parts = text.strip().split(":")
        if len(parts) < 2:
            return None
        try:
            return cls(int(parts[0]), int(parts[1]))
        except ValueError:
            return None

    @property
    def total_minutes(self) -> int:
        return self.hours * 60 + self.minutes

    def round_up(self):
        return type(self)(self.hours, -(-self.minutes // ROUNDING_MINUTES) * ROUNDING_MINUTES)

    def round_down(self):
        return type(self)(self.hours, self.minutes // ROUNDING_MINUTES * ROUNDING_MINUTES)


class Time(_HoursMinutes):
    """Elapsed duration. Hours accumulate without wrapping."""

    def merge(self, other: "Time") -> "Time":
        return Time(self.hours + other.hours, self.minutes + other.minutes)

    def sub(self, other: "Time") -> "Time":
        if self.total_minutes < other.total_minutes:
            return Time(0, 0)
        return Time(0, self.total_minutes - other.total_minutes)

    def hhmm(self) -> str:
        return f"{self.hours}:{self.minutes:02d}"

    def __str__(self) -> str:
        return f"{self.hours + self.minutes / 60:.2f}"


class Clock(_HoursMinutes):
    """Wall-clock time of day, wrapping at 24:00."""

    WRAP_HOURS: ClassVar[Optional[int]] = 24

    def diff(self, other: "Clock") -> Time:
        """Duration from ``other`` forward to this clock, crossing midnight if needed."""
        self_minutes = self.total_minutes
        if self_minutes < other.total_minutes:
            self_minutes += MINUTES_PER_DAY
        return Time(0, self_minutes - other.total_minutes)

    def is_after(self, other: "Clock") -> bool:
        return self.total_minutes > other.total_minutes

    def is_at_or_after(self, other: "Clock") -> bool:
        return self.total_minutes >= other.total_minutes

    def __str__(self) -> str:
        return f"{self.hours:02d}:{self.minutes:02d}"


class Range(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: Clock
    end: Clock

    def includes(self, other: "Range") -> bool:
        return other.start.is_at_or_after(self.start) and self.end.is_at_or_after(other.end)

    def duration(self) -> Time:
        return self.end.diff(self.start)

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"
