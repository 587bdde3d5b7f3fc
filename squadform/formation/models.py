from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

ParticipantId = Hashable
Partition = list[list[ParticipantId]]
FormationType = Literal["similar", "diverse"]
FORMATION_TYPES: tuple[str, ...] = ("similar", "diverse")


class FormationStage(str, Enum):
    VALIDATING = "validating"
    PROFILING = "profiling"
    STRATEGIZING = "strategizing"
    REPAIRING = "repairing"
    FALLBACK_RANDOM = "fallback_random"
    DONE = "done"


@dataclass(frozen=True, slots=True)
class Participant:
    id: ParticipantId
    skills_raw: str | None = None


@dataclass(frozen=True, slots=True)
class SkillProfile:
    participant_id: ParticipantId
    tokens: frozenset[str] = frozenset()
    categories: frozenset[str] = frozenset()


@dataclass(frozen=True, slots=True)
class FormationRequest:
    squad_size: int
    formation_type: str


@dataclass(slots=True)
class FormationResult:
    squads: Partition
    squad_size: int
    formation_type: str
    used_fallback: bool = False
    failed_stage: FormationStage | None = None
    profiles: dict[ParticipantId, SkillProfile] | None = None
    stages: list[FormationStage] = field(default_factory=list)
