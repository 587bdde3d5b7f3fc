from __future__ import annotations

import logging
import random
from collections.abc import Iterable, Sequence
from typing import Any

from .fallback import chunk
from .models import Partition, ParticipantId

logger = logging.getLogger(__name__)

_SQUAD_TYPES = (list, tuple, set, frozenset)


def validate_and_repair(
    partition: Iterable[Any],
    participant_ids: Sequence[ParticipantId],
    squad_size: int,
    rng: random.Random,
) -> Partition:
    """Force a raw partition to cover every participant exactly once.

    Unknown ids and repeats are dropped (first occurrence wins), squads larger
    than ``squad_size`` are cut back, and empty squads disappear. Every id left
    unassigned is shuffled with ``rng`` and appended as new squads of
    ``squad_size``; the last of those may be smaller.
    """
    known = set(participant_ids)
    claimed: set[ParticipantId] = set()
    squads: Partition = []
    dropped = 0

    for squad in partition or ():
        if not isinstance(squad, _SQUAD_TYPES):
            continue
        valid: list[ParticipantId] = []
        for pid in squad:
            try:
                acceptable = pid in known and pid not in claimed
            except TypeError:
                acceptable = False
            if not acceptable or len(valid) >= squad_size:
                dropped += 1
                continue
            claimed.add(pid)
            valid.append(pid)
        if valid:
            squads.append(valid)

    remainder = [pid for pid in participant_ids if pid not in claimed]
    if remainder:
        rng.shuffle(remainder)
        squads.extend(chunk(remainder, squad_size))
    if dropped or remainder:
        logger.info("squad_partition_repaired dropped=%s reassigned=%s", dropped, len(remainder))
    return squads


def is_valid_partition(
    partition: Sequence[Sequence[ParticipantId]],
    participant_ids: Sequence[ParticipantId],
    squad_size: int,
) -> bool:
    seen: set[ParticipantId] = set()
    for squad in partition:
        if not squad or len(squad) > squad_size:
            return False
        for pid in squad:
            if pid in seen:
                return False
            seen.add(pid)
    return seen == set(participant_ids)
