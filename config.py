import os
from enum import Enum
from pathlib import Path

from pydantic import BaseModel

ROSTER_FILE = "名簿.csv"
RECORDS_FILE = "出勤簿.csv"
TOTALS_FILE = "PCA給与X.csv"
HOLIDAYS_FILE = "休日.csv"
ROUNDED_RECORDS_FILE = "出勤簿_補正版.csv"
DAILY_FILE = "派遣日報.csv"
ROUNDED_TOTALS_FILE = "PCA給与X_補正版.csv"

# Windows Shift_JIS, as written by the payroll software
DEFAULT_ENCODING = "cp932"


class UnknownMemberPolicy(str, Enum):
    DROP = "drop"
    REPORT = "report"


class BatchSettings(BaseModel):
    directory: Path = Path(".")
    encoding: str = DEFAULT_ENCODING
    unknown_member_policy: UnknownMemberPolicy = UnknownMemberPolicy.DROP
    mark_date_starts: bool = False
    log_level: str = "INFO"

    roster_file: str = ROSTER_FILE
    records_file: str = RECORDS_FILE
    totals_file: str = TOTALS_FILE
    holidays_file: str = HOLIDAYS_FILE
    rounded_records_file: str = ROUNDED_RECORDS_FILE
    daily_file: str = DAILY_FILE
    rounded_totals_file: str = ROUNDED_TOTALS_FILE

    @classmethod
    def from_env(cls, **overrides) -> "BatchSettings":
        values = {
            "directory": os.getenv("PUNCH_ROUNDING_DIR", "."),
            "encoding": os.getenv("PUNCH_ROUNDING_ENCODING", DEFAULT_ENCODING),
            "unknown_member_policy": os.getenv("PUNCH_ROUNDING_UNKNOWN_MEMBER", UnknownMemberPolicy.DROP.value),
            "mark_date_starts": bool(int(os.getenv("PUNCH_ROUNDING_MARK_DATE_STARTS", "0"))),
            "log_level": os.getenv("PUNCH_ROUNDING_LOG_LEVEL", "INFO"),
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)

    def path(self, name: str) -> Path:
        return self.directory / name
