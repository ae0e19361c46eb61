import logging

from fastapi import BackgroundTasks, FastAPI

from config import BatchSettings
from main import collect_records, collect_totals, daily_rows, round_totals, run_batch
from models.calendar import HolidayCalendar
from models.schema import BatchRequest, RoundedRecordsResponse, RoundedTotalsResponse, RoundingRequest

app = FastAPI()


def _prepare(request: RoundingRequest):
    roster = {entry.id: entry.to_member() for entry in request.roster}
    holidays = HolidayCalendar(request.holidays)
    rows = list(enumerate(request.records, start=1))
    return roster, holidays, rows


def run_batch_in_background(settings: BatchSettings) -> None:
    logging.info(f"Running rounding batch in {settings.directory}")
    try:
        result = run_batch(settings)
    except OSError as exc:
        logging.error(f"Rounding batch in {settings.directory} failed: {exc}")
        return
    logging.info(f"Rounding batch completed: {result.records} records, {result.totals} totals.")


@app.post("/batch")
def receive_batch(request: BatchRequest, background_tasks: BackgroundTasks):
    settings = BatchSettings.from_env(directory=request.directory)
    background_tasks.add_task(run_batch_in_background, settings)
    return {"status": "Batch received, processing in background."}


@app.post("/records/rounded", response_model=RoundedRecordsResponse)
def round_records(request: RoundingRequest):
    roster, holidays, rows = _prepare(request)
    records, skipped = collect_records(rows, roster, holidays)
    return RoundedRecordsResponse(
        ledger=[record.to_ledger_row() for record in records],
        daily=daily_rows(records),
        skipped=skipped,
    )


@app.post("/totals/rounded", response_model=RoundedTotalsResponse)
def round_payroll_totals(request: RoundingRequest):
    roster, holidays, rows = _prepare(request)
    records, _ = collect_records(rows, roster, holidays)
    totals = collect_totals(enumerate(request.totals, start=1), roster)
    return RoundedTotalsResponse(totals=[total.to_row() for total in round_totals(totals, records)])
