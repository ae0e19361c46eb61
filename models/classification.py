from enum import Enum
from typing import Dict, List, Tuple

from pydantic import BaseModel, ConfigDict

from models.clock import Clock, Range

MID_MORNING_BREAK = Range(start=Clock(10, 30), end=Clock(10, 40))
MID_AFTERNOON_BREAK = Range(start=Clock(15, 0), end=Clock(15, 15))
EARLY_EVENING_BREAK = Range(start=Clock(17, 15), end=Clock(17, 30))
LATE_EVENING_BREAK = Range(start=Clock(19, 30), end=Clock(19, 45))

# Windows reported as has/has-not columns in the daily summary.
REPORTED_BREAKS = (MID_AFTERNOON_BREAK, EARLY_EVENING_BREAK)


class Classification(Enum):
    FULL_TIME = "full_time"
    ASSOCIATE = "associate"
    PART_TIME_A = "part_time_a"
    PART_TIME_B = "part_time_b"
    PART_TIME_C = "part_time_c"
    PART_TIME_D = "part_time_d"
    UNKNOWN = "unknown"

    @classmethod
    def from_tag(cls, tag: str) -> "Classification":
        return ROSTER_TAGS.get(tag.strip(), cls.UNKNOWN)

    @property
    def rule(self) -> "ClassificationRule":
        return RULES[self]


class ClassificationRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    start_at: Clock
    breaks: Tuple[Range, ...] = ()

    def break_flags(self) -> List[str]:
        flags: List[str] = []
        for window in REPORTED_BREAKS:
            flags.extend(["1", ""] if window in self.breaks else ["", "1"])
        return flags


ROSTER_TAGS: Dict[str, Classification] = {
    "LUC社員": Classification.FULL_TIME,
    "役員": Classification.FULL_TIME,
    "LUC準社員": Classification.ASSOCIATE,
    "A": Classification.PART_TIME_A,
    "B": Classification.PART_TIME_B,
    "C": Classification.PART_TIME_C,
    "D": Classification.PART_TIME_D,
}

RULES: Dict[Classification, ClassificationRule] = {
    Classification.FULL_TIME: ClassificationRule(start_at=Clock(8, 30), breaks=(MID_MORNING_BREAK,)),
    Classification.ASSOCIATE: ClassificationRule(start_at=Clock(8, 30), breaks=(MID_MORNING_BREAK,)),
    Classification.PART_TIME_A: ClassificationRule(start_at=Clock(9, 0), breaks=(MID_MORNING_BREAK,)),
    Classification.PART_TIME_B: ClassificationRule(start_at=Clock(9, 0), breaks=(MID_MORNING_BREAK,)),
    Classification.PART_TIME_C: ClassificationRule(start_at=Clock(9, 0), breaks=(MID_MORNING_BREAK,)),
    Classification.PART_TIME_D: ClassificationRule(
        start_at=Clock(9, 0),
        breaks=(MID_MORNING_BREAK, MID_AFTERNOON_BREAK, EARLY_EVENING_BREAK),
    ),
    Classification.UNKNOWN: ClassificationRule(start_at=Clock(9, 0)),
}
