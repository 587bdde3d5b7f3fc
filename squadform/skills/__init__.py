from .categorizer import categorize_skills
from .normalizer import normalize_skills, tokenize_skills

__all__ = ["tokenize_skills", "normalize_skills", "categorize_skills"]
