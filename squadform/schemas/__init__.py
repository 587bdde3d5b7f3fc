from .squads import (
    FormedSquad,
    ManualSquadRequest,
    SquadFormationRequest,
    SquadFormationResponse,
    SquadUpdateRequest,
)

__all__ = [
    "FormedSquad",
    "ManualSquadRequest",
    "SquadFormationRequest",
    "SquadFormationResponse",
    "SquadUpdateRequest",
]
