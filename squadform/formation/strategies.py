from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import ClassVar, Protocol

from squadform.taxonomy import TaxonomyProvider

from .errors import InvalidRequest
from .models import Partition, ParticipantId, SkillProfile
from .scoring import DEFAULT_BREADTH_WEIGHT, diversity_scores


class PartitionStrategy(Protocol):
    name: ClassVar[str]

    def build(self, profiles: Sequence[SkillProfile], squad_size: int) -> Partition:
        """Return a candidate partition of the profiles' participant ids."""


def _place(squads: Partition, participant_id: ParticipantId, squad_size: int) -> None:
    for squad in squads:
        if len(squad) < squad_size:
            squad.append(participant_id)
            return
    squads.append([participant_id])


@dataclass(frozen=True)
class SimilarClusterStrategy:
    """Group participants that share a skill category.

    Categories are visited largest first; each one yields as many full squads
    as its unused members allow, and its leftovers fill the first squad with
    spare room. A participant listed under several categories is consumed by
    whichever of them is visited first.
    """

    category_order: tuple[str, ...] = ()
    name: ClassVar[str] = "similar"

    def _ordered(self, categories: frozenset[str]) -> list[str]:
        known = [name for name in self.category_order if name in categories]
        extra = sorted(categories.difference(self.category_order))
        return known + extra

    def build(self, profiles: Sequence[SkillProfile], squad_size: int) -> Partition:
        index: dict[str, list[ParticipantId]] = {}
        for profile in profiles:
            for category in self._ordered(profile.categories):
                index.setdefault(category, []).append(profile.participant_id)

        squads: Partition = []
        used: set[ParticipantId] = set()
        # sorted() is stable, so equal-sized categories keep first-seen order.
        for _, members in sorted(index.items(), key=lambda item: len(item[1]), reverse=True):
            remaining = [pid for pid in members if pid not in used]
            while len(remaining) >= squad_size:
                squad, remaining = remaining[:squad_size], remaining[squad_size:]
                squads.append(squad)
                used.update(squad)
            for pid in remaining:
                _place(squads, pid, squad_size)
                used.add(pid)

        for profile in profiles:
            if profile.participant_id not in used:
                _place(squads, profile.participant_id, squad_size)
                used.add(profile.participant_id)
        return squads


@dataclass(frozen=True)
class DiverseMaximizeStrategy:
    """Spread skill categories across squads.

    Participants are ranked by diversity score and cut into windows of
    ``squad_size``. Inside a window a participant joins the window's squad only
    when it is empty or they bring a category it lacks; the rest are deferred
    and later placed where they add the most new categories.
    """

    breadth_weight: float = DEFAULT_BREADTH_WEIGHT
    name: ClassVar[str] = "diverse"

    def build(self, profiles: Sequence[SkillProfile], squad_size: int) -> Partition:
        scores = diversity_scores(profiles, self.breadth_weight)
        ranked = sorted(range(len(profiles)), key=lambda idx: scores[idx], reverse=True)

        squads: Partition = []
        covered: list[set[str]] = []
        deferred: list[SkillProfile] = []
        for start in range(0, len(ranked), squad_size):
            squad: list[ParticipantId] = []
            categories: set[str] = set()
            for idx in ranked[start : start + squad_size]:
                profile = profiles[idx]
                if not squad or profile.categories - categories:
                    squad.append(profile.participant_id)
                    categories |= profile.categories
                else:
                    deferred.append(profile)
            squads.append(squad)
            covered.append(categories)

        for profile in deferred:
            target = self._pick_squad(profile, squads, covered, squad_size)
            if target is None:
                squads.append([])
                covered.append(set())
                target = len(squads) - 1
            squads[target].append(profile.participant_id)
            covered[target] |= profile.categories
        return squads

    @staticmethod
    def _pick_squad(
        profile: SkillProfile,
        squads: Partition,
        covered: list[set[str]],
        squad_size: int,
    ) -> int | None:
        first_open: int | None = None
        best: int | None = None
        best_gain = 0
        for idx, squad in enumerate(squads):
            if len(squad) >= squad_size:
                continue
            if first_open is None:
                first_open = idx
            gain = len(profile.categories - covered[idx])
            if gain > best_gain:
                best, best_gain = idx, gain
        return best if best is not None else first_open


def get_strategy(
    formation_type: str,
    taxonomy: TaxonomyProvider,
    *,
    breadth_weight: float = DEFAULT_BREADTH_WEIGHT,
) -> PartitionStrategy:
    if formation_type == SimilarClusterStrategy.name:
        return SimilarClusterStrategy(category_order=tuple(taxonomy.category_names()))
    if formation_type == DiverseMaximizeStrategy.name:
        return DiverseMaximizeStrategy(breadth_weight=breadth_weight)
    raise InvalidRequest(f"Unknown formation type '{formation_type}'. Expected 'similar' or 'diverse'.")
