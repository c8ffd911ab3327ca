"""Skills module for pattern_skills.

Skills follow a progressive disclosure pattern:
1. Parse YAML frontmatter (name, description, triggers) from SKILL.md files
2. Match a request against each skill's triggers
3. Hand the full SKILL.md body to the consumer only for matching skills

Public API:
- SkillCatalog: Read-only catalog with name lookup and trigger matching
- SkillDocument: Parsed, immutable skill
- TriggerMatch: A skill matched against a request
- list_skills: Load skill documents from directories
- execute_skills_command / setup_skills_parser: CLI wiring
"""

from pattern_skills.skills.catalog import SkillCatalog
from pattern_skills.skills.commands import execute_skills_command, setup_skills_parser
from pattern_skills.skills.load import DuplicateSkillError, SkillDocument, list_skills
from pattern_skills.skills.matching import TriggerMatch

__all__ = [
    "DuplicateSkillError",
    "SkillCatalog",
    "SkillDocument",
    "TriggerMatch",
    "execute_skills_command",
    "list_skills",
    "setup_skills_parser",
]
