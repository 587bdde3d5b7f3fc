from __future__ import annotations

import random
from collections.abc import Sequence

from .errors import NoEligibleParticipants
from .models import Partition, ParticipantId


def chunk(participant_ids: Sequence[ParticipantId], squad_size: int) -> Partition:
    return [list(participant_ids[idx : idx + squad_size]) for idx in range(0, len(participant_ids), squad_size)]


def random_partition(
    participant_ids: Sequence[ParticipantId],
    squad_size: int,
    rng: random.Random,
) -> Partition:
    """Shuffle ids with ``rng`` and cut them into squads of ``squad_size``."""
    if not participant_ids:
        raise NoEligibleParticipants("No eligible participants to partition.")
    shuffled = list(participant_ids)
    rng.shuffle(shuffled)
    return chunk(shuffled, squad_size)
