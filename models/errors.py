from typing import Optional, TypeVar

T = TypeVar("T")


class TimecardError(Exception):
    """Base exception for values that cannot be derived from a timecard row."""


class MissingValueError(TimecardError):
    """Raised when a value is required but absent."""

    def __init__(self, field: str):
        super().__init__(f"Missing value: {field}")
        self.field = field


class UnannotatedDateError(TimecardError):
    """Raised when a date has not been classified as workday or holiday."""


class UnknownMemberError(TimecardError):
    """Raised when a member id cannot be resolved against the roster."""

    def __init__(self, member_id: str):
        super().__init__(f"No member has been found: {member_id}")
        self.member_id = member_id


def require(value: Optional[T], field: str) -> T:
    if value is None:
        raise MissingValueError(field)
    return value
