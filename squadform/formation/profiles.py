from __future__ import annotations

from collections.abc import Iterable

from squadform.skills import categorize_skills, normalize_skills
from squadform.taxonomy import TaxonomyProvider

from .models import Participant, SkillProfile


def build_skill_profile(participant: Participant, taxonomy: TaxonomyProvider) -> SkillProfile:
    tokens = normalize_skills(participant.skills_raw, taxonomy)
    return SkillProfile(
        participant_id=participant.id,
        tokens=tokens,
        categories=categorize_skills(tokens, taxonomy),
    )


def build_skill_profiles(participants: Iterable[Participant], taxonomy: TaxonomyProvider) -> list[SkillProfile]:
    return [build_skill_profile(participant, taxonomy) for participant in participants]
