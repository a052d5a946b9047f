import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Mapping, Optional, Tuple

import pydantic

from timecards.core.authorization import Principal, ensure_can_modify, ensure_manager
from timecards.core.config import UpdateMode
from timecards.core.errors import NotFoundError, ValidationError
from timecards.models.timecard import Timecard
from timecards.repositories.timecard_store import TimecardStore
from timecards.schemas.timecard import TimecardCreate, TimecardUpdate, TimeEntry

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _format_errors(exc: pydantic.ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'body'}: {err['msg']}"
        for err in exc.errors()
    )


def _parse(model, payload: Any):
    if payload is None:
        payload = {}
    if not isinstance(payload, Mapping):
        raise ValidationError(detail="body: must be a JSON object")
    try:
        return model.model_validate(dict(payload))
    except pydantic.ValidationError as exc:
        raise ValidationError(detail=_format_errors(exc)) from exc


def _dump_entries(entries: List[TimeEntry]) -> List[Dict[str, Any]]:
    return [e.model_dump(by_alias=True, exclude_none=True) for e in entries]


def _get_for_change(principal: Principal, timecard_id: str, store: TimecardStore) -> Timecard:
    timecard = store.find_by_id(timecard_id)
    if timecard is None:
        raise NotFoundError()
    ensure_can_modify(principal, timecard)
    return timecard


def current_week_window(today: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """
    Monday 00:00:00.000 through Sunday 23:59:59.999 of the week containing today.

    Sunday belongs to the week that started six days earlier.
    """
    today = today or _utc_now()
    start = (today - timedelta(days=today.isoweekday() - 1)).replace(
        hour=0, minute=0, second=0, microsecond=0
    )
    end = (start + timedelta(days=6)).replace(hour=23, minute=59, second=59, microsecond=999000)
    return start, end


def list_own_timecards(principal: Principal, *, store: TimecardStore) -> List[Timecard]:
    return store.find_by_owner(principal.id)


def create_timecard(principal: Principal, payload: Any, *, store: TimecardStore) -> Timecard:
    data = _parse(TimecardCreate, payload)

    timecard = Timecard(
        owner_id=str(principal.id),
        week_start_date=data.week_start_date,
        entries=_dump_entries(data.entries),
        total_hours=float(data.total_hours),
        completed=False,
    )
    timecard = store.insert(timecard)

    logger.info(
        "Timecard created",
        extra={"timecard_id": timecard.id, "owner_id": timecard.owner_id},
    )
    return timecard


def update_timecard(
    principal: Principal,
    timecard_id: str,
    payload: Any,
    *,
    store: TimecardStore,
    mode: UpdateMode = UpdateMode.STRICT,
) -> Timecard:
    """
    Apply entries/totalHours/completed from payload.

    STRICT applies every key present in the payload, falsy values included.
    PERMISSIVE drops falsy entries/totalHours before applying, so 0 and []
    leave the stored values alone; completed is applied whenever present.
    """
    timecard = _get_for_change(principal, timecard_id, store)

    if mode is UpdateMode.PERMISSIVE and isinstance(payload, Mapping):
        payload = {k: v for k, v in payload.items() if k == "completed" or v}

    data = _parse(TimecardUpdate, payload)
    provided = data.model_fields_set

    if "entries" in provided:
        timecard.entries = _dump_entries(data.entries)
    if "total_hours" in provided:
        timecard.total_hours = float(data.total_hours)
    if "completed" in provided:
        timecard.completed = data.completed

    timecard = store.save(timecard)

    logger.info(
        "Timecard updated",
        extra={
            "timecard_id": timecard.id,
            "principal_id": principal.id,
            "fields": sorted(provided),
            "mode": mode.value,
        },
    )
    return timecard


def complete_timecard(principal: Principal, timecard_id: str, *, store: TimecardStore) -> Timecard:
    timecard = _get_for_change(principal, timecard_id, store)

    timecard.completed = True
    timecard = store.save(timecard)

    logger.info(
        "Timecard completed",
        extra={"timecard_id": timecard.id, "principal_id": principal.id},
    )
    return timecard


def delete_timecard(principal: Principal, timecard_id: str, *, store: TimecardStore) -> None:
    timecard = _get_for_change(principal, timecard_id, store)

    store.delete_by_id(timecard.id)

    logger.info(
        "Timecard deleted",
        extra={"timecard_id": timecard_id, "principal_id": principal.id},
    )


def list_all_grouped(principal: Principal, *, store: TimecardStore) -> List[Dict[str, Any]]:
    """Manager view: one bucket per owner, owners in the order the sorted rows first show them."""
    ensure_manager(principal)

    groups: Dict[str, Dict[str, Any]] = {}
    for timecard, name, email in store.find_all_with_owner():
        owner_id = str(timecard.owner_id)
        group = groups.get(owner_id)
        if group is None:
            group = groups[owner_id] = {
                "owner_id": owner_id,
                "name": name,
                "email": email,
                "timecards": [],
            }
        group["timecards"].append(timecard)

    return list(groups.values())


def check_current_week(
    principal: Principal,
    *,
    store: TimecardStore,
    today: Optional[datetime] = None,
) -> bool:
    # Advisory only: nothing stops a create racing in right after this returns.
    start, end = current_week_window(today)
    return store.find_one_in_window(principal.id, start, end) is not None
