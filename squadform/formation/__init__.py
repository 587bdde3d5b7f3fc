from .engine import FormationEngine, form_eligible_participants
from .errors import (
    FormationError,
    InvalidRequest,
    NoEligibleParticipants,
    ProcessingFailure,
    ResourceLimitExceeded,
)
from .fallback import random_partition
from .models import (
    FORMATION_TYPES,
    FormationRequest,
    FormationResult,
    FormationStage,
    Participant,
    SkillProfile,
)
from .profiles import build_skill_profile, build_skill_profiles
from .repair import is_valid_partition, validate_and_repair
from .scoring import diversity_scores, similarity, squad_categories, squad_cohesion
from .strategies import DiverseMaximizeStrategy, PartitionStrategy, SimilarClusterStrategy, get_strategy

__all__ = [
    "FormationEngine",
    "form_eligible_participants",
    "FormationError",
    "InvalidRequest",
    "NoEligibleParticipants",
    "ProcessingFailure",
    "ResourceLimitExceeded",
    "random_partition",
    "FORMATION_TYPES",
    "FormationRequest",
    "FormationResult",
    "FormationStage",
    "Participant",
    "SkillProfile",
    "build_skill_profile",
    "build_skill_profiles",
    "is_valid_partition",
    "validate_and_repair",
    "diversity_scores",
    "similarity",
    "squad_categories",
    "squad_cohesion",
    "DiverseMaximizeStrategy",
    "PartitionStrategy",
    "SimilarClusterStrategy",
    "get_strategy",
]
