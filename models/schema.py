from typing import List, Tuple

from pydantic import BaseModel, ConfigDict

from models.classification import Classification, ClassificationRule
from models.clock import Clock


class Member(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    classification: Classification = Classification.UNKNOWN
    dispatched_from: str = ""

    @property
    def rule(self) -> ClassificationRule:
        return self.classification.rule

    @property
    def start_at(self) -> Clock:
        return self.rule.start_at


class SkippedRow(BaseModel):
    line: int
    member_id: str
    reason: str


class BatchResult(BaseModel):
    records: int
    totals: int
    skipped: List[SkippedRow] = []
    ledger_path: str
    daily_path: str
    totals_path: str


class RosterEntry(BaseModel):
    id: int
    name: str
    tag: str = ""
    dispatched_from: str = ""

    def to_member(self) -> Member:
        return Member(
            id=self.id,
            name=self.name,
            classification=Classification.from_tag(self.tag),
            dispatched_from=self.dispatched_from,
        )


class RoundingRequest(BaseModel):
    roster: List[RosterEntry]
    holidays: List[Tuple[int, int]] = []
    records: List[List[str]]
    totals: List[List[str]] = []


class RoundedRecordsResponse(BaseModel):
    ledger: List[List[str]]
    daily: List[List[str]]
    skipped: List[SkippedRow]


class RoundedTotalsResponse(BaseModel):
    totals: List[List[str]]


class BatchRequest(BaseModel):
    directory: str
