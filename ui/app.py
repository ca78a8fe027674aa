from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from fastapi import Body, FastAPI, HTTPException
from fastapi.responses import PlainTextResponse

from habitledger import (
    DayRecordStore,
    Definitions,
    LedgerError,
    compute_analytics,
    compute_badge_map,
    compute_habit_history,
    find_open_day_in_progress,
    generate_csv,
    load_definitions,
    now_local,
    today_str,
)
from habitledger.models import is_iso_date
from habitledger.workspace import (
    data_root as _data_root,
    definitions_path as _definitions_path_fn,
    get_export_label,
    ledger_path as _ledger_path_fn,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Habit Ledger", version="0.1.0")


# ── Helpers ───────────────────────────────────────────────────


def _store(root: Path) -> DayRecordStore:
    return DayRecordStore(
        _ledger_path_fn(root),
        today=lambda: today_str(root),
        now=lambda: now_local(root),
    )


def _definitions(root: Path) -> Definitions:
    return load_definitions(_definitions_path_fn(root))


def _bad_request(message: str, e: Exception) -> HTTPException:
    logger.info("%s %s", message, e)
    return HTTPException(status_code=400, detail={"message": message, "details": str(e)})


def _requested_date(value: str | None, root: Path) -> str:
    return value if is_iso_date(value) else today_str(root)


def _day_payload(day: str, record: Any, ok: bool = True) -> dict[str, Any]:
    payload = {"date": day, **record.to_dict()}
    if ok:
        payload["ok"] = True
    return payload


# ── Endpoints ─────────────────────────────────────────────────

@app.get("/healthz")
def healthz() -> dict[str, bool]:
    return {"ok": True}


@app.get("/api/data")
def api_get_data() -> dict[str, Any]:
    """Habit, group and badge definitions."""
    root = _data_root()
    data = _definitions(root).to_dict()
    data["ledgerPath"] = str(_ledger_path_fn(root))
    return data


@app.get("/api/day/{day}")
def api_get_day(day: str) -> dict[str, Any]:
    root = _data_root()
    try:
        record = _store(root).get_record(day)
    except LedgerError as e:
        raise _bad_request("Unable to load day log.", e)
    return _day_payload(day, record, ok=False)


@app.put("/api/day/{day}")
def api_save_day(day: str, payload: dict[str, Any] = Body(default={})) -> dict[str, Any]:
    root = _data_root()
    try:
        record = _store(root).save_record(day, payload.get("counts") or {})
    except LedgerError as e:
        raise _bad_request("Unable to save day log.", e)
    return _day_payload(day, record)


@app.post("/api/day/{day}/complete")
def api_complete_day(day: str, payload: dict[str, Any] = Body(default={})) -> dict[str, Any]:
    root = _data_root()
    try:
        record = _store(root).complete_record(day, payload.get("counts"))
    except LedgerError as e:
        raise _bad_request("Unable to complete day.", e)
    return _day_payload(day, record)


@app.post("/api/day/{day}/unlock")
def api_unlock_day(day: str) -> dict[str, Any]:
    root = _data_root()
    try:
        record = _store(root).unlock_record(day)
    except LedgerError as e:
        raise _bad_request("Unable to unlock day.", e)
    return _day_payload(day, record)


@app.get("/api/day-open")
def api_open_day(date: str | None = None) -> dict[str, Any]:
    """Most recent unlocked day with progress, if any."""
    root = _data_root()
    open_day = find_open_day_in_progress(_store(root).list_records(), _requested_date(date, root))
    return {"openDay": open_day.to_dict() if open_day else None}


@app.get("/api/analytics")
def api_get_analytics(date: str | None = None) -> dict[str, Any]:
    root = _data_root()
    definitions = _definitions(root)
    entries = _store(root).list_records()
    summary = compute_analytics(entries, definitions.habits, _requested_date(date, root), definitions.badges)
    return summary.to_dict()


@app.get("/api/analytics/history")
def api_get_history() -> dict[str, Any]:
    root = _data_root()
    history = compute_habit_history(_store(root).list_records(), _definitions(root).habits)
    return {"habits": [h.to_dict() for h in history]}


@app.get("/api/analytics/badges")
def api_get_badge_map(start: str, end: str) -> dict[str, Any]:
    if not (is_iso_date(start) and is_iso_date(end)):
        raise HTTPException(status_code=400, detail=f"Invalid date range: {start}..{end}")
    root = _data_root()
    definitions = _definitions(root)
    badge_map = compute_badge_map(_store(root).list_records(), definitions.habits, start, end, definitions.badges)
    return {"days": {day: entry.to_dict() for day, entry in badge_map.items()}}


@app.get("/api/export/csv")
def api_export_csv() -> PlainTextResponse:
    root = _data_root()
    history = compute_habit_history(_store(root).list_records(), _definitions(root).habits)
    csv_text = generate_csv(history, today=today_str(root), label=get_export_label(root))
    return PlainTextResponse(
        csv_text,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": "attachment; filename=habit-ledger-export.csv"},
    )
