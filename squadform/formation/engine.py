from __future__ import annotations

import logging
import random
from collections.abc import Callable, Sequence

from squadform.core.config import settings
from squadform.core.formation_config import get_formation_value
from squadform.taxonomy import TaxonomyProvider, get_default_taxonomy_provider

from .errors import InvalidRequest, NoEligibleParticipants, ProcessingFailure, ResourceLimitExceeded
from .fallback import random_partition
from .models import (
    FORMATION_TYPES,
    FormationRequest,
    FormationResult,
    FormationStage,
    Participant,
    ParticipantId,
)
from .profiles import build_skill_profiles
from .repair import is_valid_partition, validate_and_repair
from .strategies import get_strategy

logger = logging.getLogger(__name__)


class FormationEngine:
    """Partition an eligible pool into squads by skill similarity or diversity.

    A run moves through validating -> profiling -> strategizing -> repairing.
    Validation errors are raised to the caller. Any other failure after
    validation drops to a seeded random partition so the caller still gets a
    complete, duplicate-free result.
    """

    def __init__(
        self,
        taxonomy: TaxonomyProvider | None = None,
        *,
        max_participants: int | None = None,
        breadth_weight: float | None = None,
        seed: int | None = None,
        taxonomy_loader: Callable[[], TaxonomyProvider] = get_default_taxonomy_provider,
    ) -> None:
        self._taxonomy = taxonomy
        self._taxonomy_loader = taxonomy_loader
        self._max_participants = int(
            max_participants
            if max_participants is not None
            else get_formation_value("formation.max_participants", 5000)
        )
        self._breadth_weight = float(
            breadth_weight
            if breadth_weight is not None
            else get_formation_value("scoring.diversity.breadth_weight", 0.5)
        )
        self._seed = seed

    @property
    def max_participants(self) -> int:
        return self._max_participants

    def _validate(self, participants: Sequence[Participant], request: FormationRequest) -> list[ParticipantId]:
        if request.formation_type not in FORMATION_TYPES:
            raise InvalidRequest(
                f"Unknown formation type '{request.formation_type}'. Expected 'similar' or 'diverse'."
            )
        squad_size = request.squad_size
        if isinstance(squad_size, bool) or not isinstance(squad_size, int) or squad_size <= 0:
            raise InvalidRequest("Squad size must be a positive integer.")
        if not participants:
            raise NoEligibleParticipants(
                "No participants with present attendance status are available. "
                "Please mark some participants as present first."
            )
        if len(participants) > self._max_participants:
            raise ResourceLimitExceeded(
                f"Cannot form squads for {len(participants)} participants; "
                f"the limit is {self._max_participants}."
            )

        participant_ids = [participant.id for participant in participants]
        if len(set(participant_ids)) != len(participant_ids):
            raise InvalidRequest("Participant ids must be unique.")
        return participant_ids

    def _resolve_taxonomy(self) -> TaxonomyProvider:
        if self._taxonomy is None:
            self._taxonomy = self._taxonomy_loader()
        return self._taxonomy

    def form(
        self,
        participants: Sequence[Participant],
        request: FormationRequest,
        *,
        rng: random.Random | None = None,
    ) -> FormationResult:
        stages = [FormationStage.VALIDATING]
        participant_ids = self._validate(participants, request)
        rng = rng or random.Random(self._seed)
        squad_size = request.squad_size

        stage = FormationStage.PROFILING
        try:
            stages.append(stage)
            taxonomy = self._resolve_taxonomy()
            profiles = build_skill_profiles(participants, taxonomy)

            stage = FormationStage.STRATEGIZING
            stages.append(stage)
            strategy = get_strategy(request.formation_type, taxonomy, breadth_weight=self._breadth_weight)
            candidate = strategy.build(profiles, squad_size)

            stage = FormationStage.REPAIRING
            stages.append(stage)
            squads = validate_and_repair(candidate, participant_ids, squad_size, rng)
            if not is_valid_partition(squads, participant_ids, squad_size):
                raise ProcessingFailure("Repaired partition failed validation.")
        except Exception as exc:
            logger.warning(
                "squad_formation_fallback stage=%s formation_type=%s participants=%s error=%s",
                stage.value,
                request.formation_type,
                len(participant_ids),
                exc,
                exc_info=True,
            )
            stages.append(FormationStage.FALLBACK_RANDOM)
            try:
                squads = random_partition(participant_ids, squad_size, rng)
            except Exception as fallback_exc:
                raise ProcessingFailure("Squad formation failed and the random fallback failed too.") from fallback_exc
            stages.append(FormationStage.DONE)
            return FormationResult(
                squads=squads,
                squad_size=squad_size,
                formation_type=request.formation_type,
                used_fallback=True,
                failed_stage=stage,
                stages=stages,
            )

        stages.append(FormationStage.DONE)
        logger.info(
            "squad_formation_done formation_type=%s participants=%s squads=%s",
            request.formation_type,
            len(participant_ids),
            len(squads),
        )
        return FormationResult(
            squads=squads,
            squad_size=squad_size,
            formation_type=request.formation_type,
            profiles={profile.participant_id: profile for profile in profiles},
            stages=stages,
        )


def form_eligible_participants(
    participants: Sequence[Participant],
    request: FormationRequest,
    *,
    taxonomy: TaxonomyProvider | None = None,
    rng: random.Random | None = None,
) -> FormationResult:
    engine = FormationEngine(taxonomy, seed=settings.formation_random_seed)
    return engine.form(participants, request, rng=rng)
