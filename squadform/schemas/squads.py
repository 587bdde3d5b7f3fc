from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from squadform.core.formation_config import get_formation_value


def _default_squad_size() -> int:
    return int(get_formation_value("formation.default_squad_size", 4))


def _default_formation_type() -> str:
    return str(get_formation_value("formation.default_formation_type", "diverse"))


class SquadFormationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Range and enum checks happen in the engine (InvalidRequest).
    squad_size: int = Field(default_factory=_default_squad_size, alias="squadSize")
    formation_type: str = Field(default_factory=_default_formation_type, alias="formationType")


class FormedSquad(BaseModel):
    id: int
    name: str
    members: list[int]
    categories: list[str] = Field(default_factory=list)
    cohesion: float | None = None


class SquadFormationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    squads: list[FormedSquad]
    formation_type: str = Field(alias="formationType")
    squad_size: int = Field(alias="squadSize")
    used_fallback: bool = Field(alias="usedFallback")


class ManualSquadRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1, max_length=120)
    member_ids: list[int] = Field(alias="memberIds", min_length=1)


class SquadUpdateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1, max_length=120)
    member_ids: list[int] | None = Field(default=None, alias="memberIds")
