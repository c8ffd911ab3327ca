"""Design-pattern skills for AI coding assistants.

This package ships Markdown guidance for applying the Factory and Value Object
patterns in Domain-Driven Design codebases, together with a catalog that
decides which guidance applies to a request.
"""

from pattern_skills._version import __version__
from pattern_skills.config import BUNDLED_SKILLS_DIR, Settings
from pattern_skills.skills import (
    DuplicateSkillError,
    SkillCatalog,
    SkillDocument,
    TriggerMatch,
    list_skills,
)

__all__ = [
    "__version__",
    "BUNDLED_SKILLS_DIR",
    "DuplicateSkillError",
    "Settings",
    "SkillCatalog",
    "SkillDocument",
    "TriggerMatch",
    "list_skills",
]
