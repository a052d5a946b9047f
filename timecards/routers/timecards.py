from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends

from timecards.core.authorization import Principal
from timecards.core.config import get_settings
from timecards.deps.auth import require_auth
from timecards.deps.store import get_store
from timecards.models.timecard import Timecard
from timecards.repositories.timecard_store import TimecardStore
from timecards.schemas.timecard import (
    CurrentWeekResponse,
    MessageResponse,
    TimecardGroupResponse,
    TimecardResponse,
)
from timecards.services import timecard_service

router = APIRouter(
    prefix="/timecards",
    tags=["Timecards"],
)


def _to_response(timecard: Timecard) -> TimecardResponse:
    return TimecardResponse.model_validate(timecard)


@router.get("", response_model=List[TimecardResponse])
def list_own_timecards(
    principal: Principal = Depends(require_auth),
    store: TimecardStore = Depends(get_store),
):
    rows = timecard_service.list_own_timecards(principal, store=store)
    return [_to_response(r) for r in rows]


@router.post("", response_model=TimecardResponse)
def create_timecard(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    principal: Principal = Depends(require_auth),
    store: TimecardStore = Depends(get_store),
):
    row = timecard_service.create_timecard(principal, payload, store=store)
    return _to_response(row)


@router.get("/all", response_model=List[TimecardGroupResponse])
def list_all_timecards(
    principal: Principal = Depends(require_auth),
    store: TimecardStore = Depends(get_store),
):
    groups = timecard_service.list_all_grouped(principal, store=store)
    return [
        TimecardGroupResponse(
            owner_id=g["owner_id"],
            name=g["name"],
            email=g["email"],
            timecards=[_to_response(t) for t in g["timecards"]],
        )
        for g in groups
    ]


@router.get("/check-current-week", response_model=CurrentWeekResponse)
def check_current_week(
    principal: Principal = Depends(require_auth),
    store: TimecardStore = Depends(get_store),
):
    return {"exists": timecard_service.check_current_week(principal, store=store)}


@router.put("/{timecard_id}", response_model=TimecardResponse)
def update_timecard(
    timecard_id: str,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    principal: Principal = Depends(require_auth),
    store: TimecardStore = Depends(get_store),
):
    row = timecard_service.update_timecard(
        principal,
        timecard_id,
        payload,
        store=store,
        mode=get_settings().update_mode,
    )
    return _to_response(row)


@router.put("/{timecard_id}/complete", response_model=TimecardResponse)
def complete_timecard(
    timecard_id: str,
    principal: Principal = Depends(require_auth),
    store: TimecardStore = Depends(get_store),
):
    row = timecard_service.complete_timecard(principal, timecard_id, store=store)
    return _to_response(row)


@router.delete("/{timecard_id}", response_model=MessageResponse)
def delete_timecard(
    timecard_id: str,
    principal: Principal = Depends(require_auth),
    store: TimecardStore = Depends(get_store),
):
    timecard_service.delete_timecard(principal, timecard_id, store=store)
    return {"msg": "Timecard removed"}
