from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request, status

from squadform.core.rate_limit import rate_limit
from squadform.formation import (
    FormationError,
    FormationRequest,
    FormationResult,
    form_eligible_participants,
    squad_categories,
    squad_cohesion,
)
from squadform.schemas import (
    FormedSquad,
    ManualSquadRequest,
    SquadFormationRequest,
    SquadFormationResponse,
    SquadUpdateRequest,
)
from squadform.storage import db as squad_db

logger = logging.getLogger(__name__)

router = APIRouter()


def _raise_formation_error(exc: FormationError) -> None:
    raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc


def _raise_validation_error(exc: squad_db.SquadValidationError) -> None:
    raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc


def _describe(created: list[dict], result: FormationResult) -> list[FormedSquad]:
    squads: list[FormedSquad] = []
    for record in created:
        categories: list[str] = []
        cohesion: float | None = None
        if result.profiles is not None:
            members = [result.profiles[pid] for pid in record["members"]]
            categories = squad_categories(members)
            cohesion = squad_cohesion(members)
        squads.append(FormedSquad(**record, categories=categories, cohesion=cohesion))
    return squads


@router.post("/squads/form", response_model=SquadFormationResponse)
@rate_limit()
async def form_squads(request: Request, payload: SquadFormationRequest):
    _ = request
    participants = squad_db.get_eligible_participants()
    try:
        result = form_eligible_participants(
            participants,
            FormationRequest(squad_size=payload.squad_size, formation_type=payload.formation_type),
        )
    except FormationError as exc:
        logger.info("squad_formation_rejected code=%s detail=%s", exc.code, exc)
        _raise_formation_error(exc)

    created = squad_db.save_squads(result.squads)
    return SquadFormationResponse(
        message="Squads created successfully",
        squads=_describe(created, result),
        formation_type=result.formation_type,
        squad_size=result.squad_size,
        used_fallback=result.used_fallback,
    )


@router.post("/squads")
def create_manual_squad(payload: ManualSquadRequest):
    try:
        squad = squad_db.create_squad(payload.name, payload.member_ids)
    except squad_db.SquadValidationError as exc:
        _raise_validation_error(exc)
    return {"message": "Squad created successfully", "squad": squad}


@router.get("/squads/available-candidates")
def available_candidates():
    return squad_db.get_available_candidates()


@router.get("/squads")
def list_squads():
    return squad_db.list_squads()


@router.delete("/squads/clear-all")
def clear_all_squads():
    deleted = squad_db.clear_squads()
    return {"message": "All squads cleared successfully", "deletedSquads": deleted}


@router.get("/squads/{squad_id}")
def get_squad(squad_id: int):
    squad = squad_db.get_squad(squad_id)
    if not squad:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Squad not found")
    return squad


@router.put("/squads/{squad_id}")
def update_squad(squad_id: int, payload: SquadUpdateRequest):
    try:
        updated = squad_db.update_squad(squad_id, payload.name, payload.member_ids)
    except squad_db.SquadValidationError as exc:
        _raise_validation_error(exc)
    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Squad not found")
    return {"message": "Squad updated successfully"}


@router.delete("/squads/{squad_id}")
def delete_squad(squad_id: int):
    if not squad_db.delete_squad(squad_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Squad not found")
    return {"message": "Squad deleted successfully"}
