"""Skill catalog for looking up design-pattern skills.

The catalog holds every loaded SkillDocument and answers which of them apply
to a free-text request. Lookups never change the catalog or its documents.

The catalog supports:
- Name-based lookup
- Trigger-based matching (keyword / phrase heuristic)
- An index of names and descriptions for a consumer to choose from

Example:
    catalog = SkillCatalog.from_directories(bundled_skills_dir=BUNDLED_SKILLS_DIR)

    # Get specific skill
    factory = catalog.get("factory-pattern")

    # Skills that apply to a request
    skills = catalog.find_matching_skills("primitive obsession with ISBN strings")
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import TYPE_CHECKING

from pattern_skills.skills.load import DuplicateSkillError, SkillDocument, list_skills
from pattern_skills.skills.matching import TriggerMatch, match_skill

if TYPE_CHECKING:
    from pattern_skills.config import Settings

SKILLS_INDEX_TEMPLATE = """\
## Design Pattern Skills

{skills_list}

Read a skill's full guidance from the path shown when the request matches its description.
"""


class SkillCatalog:
    """Catalog of skill documents keyed by name.

    Names are unique: registering a second document with a known name raises
    DuplicateSkillError. There is no way to remove or replace a document.

    Example:
        catalog = SkillCatalog()
        catalog.register(document)

        "value-object" in catalog
        matches = catalog.rank_matching_skills("wrap this email string")
    """

    def __init__(self, documents: Iterable[SkillDocument] = ()) -> None:
        """Initialize the catalog, registering the given documents in order."""
        self._skills: dict[str, SkillDocument] = {}
        for document in documents:
            self.register(document)

    @classmethod
    def from_directories(
        cls,
        *,
        bundled_skills_dir: Path | None = None,
        user_skills_dir: Path | None = None,
        project_skills_dir: Path | None = None,
    ) -> SkillCatalog:
        """Build a catalog from skill directories.

        Project skills override user skills, which override bundled skills.

        Raises:
            DuplicateSkillError: Two skills in one directory share a name.
        """
        return cls(
            list_skills(
                bundled_skills_dir=bundled_skills_dir,
                user_skills_dir=user_skills_dir,
                project_skills_dir=project_skills_dir,
            )
        )

    @classmethod
    def from_settings(cls, settings: Settings, *, project_only: bool = False) -> SkillCatalog:
        """Build a catalog from the directories configured in settings.

        Args:
            settings: Environment settings.
            project_only: Only load project-level skills.
        """
        if project_only:
            return cls.from_directories(project_skills_dir=settings.get_project_skills_dir())
        return cls.from_directories(
            bundled_skills_dir=settings.bundled_skills_dir if settings.include_bundled else None,
            user_skills_dir=settings.get_user_skills_dir(),
            project_skills_dir=settings.get_project_skills_dir(),
        )

    def register(self, document: SkillDocument) -> None:
        """Register a skill document.

        Args:
            document: Skill document to add.

        Raises:
            DuplicateSkillError: If a skill with the same name is registered.
        """
        existing = self._skills.get(document.name)
        if existing is not None:
            raise DuplicateSkillError(document.name, existing.path, document.path)
        self._skills[document.name] = document

    def get(self, name: str) -> SkillDocument | None:
        """Get a skill document by name.

        Returns:
            The document if found, None otherwise.
        """
        return self._skills.get(name)

    def list_all(self) -> list[SkillDocument]:
        """List all skill documents sorted by name."""
        return [self._skills[name] for name in self.list_names()]

    def list_names(self) -> list[str]:
        """List all skill names in sorted order."""
        return sorted(self._skills)

    def rank_matching_skills(self, utterance: str) -> list[TriggerMatch]:
        """Match every skill against an utterance.

        Args:
            utterance: Free-text user request.

        Returns:
            Matches ordered by descending score, then by skill name. Empty
            when nothing applies.
        """
        matches = [
            match
            for match in (match_skill(utterance, skill) for skill in self._skills.values())
            if match is not None
        ]
        return sorted(matches, key=lambda m: (-m.score, m.skill.name))

    def find_matching_skills(self, utterance: str) -> frozenset[SkillDocument]:
        """Get the skills whose triggers indicate they apply to an utterance.

        Args:
            utterance: Free-text user request. Empty input matches nothing.

        Returns:
            Set of matching skill documents, possibly empty.
        """
        return frozenset(match.skill for match in self.rank_matching_skills(utterance))

    def get_descriptions(self) -> dict[str, str]:
        """Get a mapping of skill names to descriptions."""
        return {name: self._skills[name].description for name in self.list_names()}

    def format_skills_index(self) -> str:
        """Format the skill index a consumer reads before fetching a body.

        Returns:
            Markdown listing each skill's name, description and SKILL.md path.
        """
        if not self._skills:
            return SKILLS_INDEX_TEMPLATE.format(skills_list="(No skills available.)")

        lines = []
        for skill in self.list_all():
            lines.append(f"- **{skill.name}**: {skill.description}")
            lines.append(f"  → Full guidance: `{skill.path}`")
        return SKILLS_INDEX_TEMPLATE.format(skills_list="\n".join(lines))

    def __contains__(self, name: object) -> bool:
        """Check if a skill is registered."""
        return name in self._skills

    def __len__(self) -> int:
        """Get number of registered skills."""
        return len(self._skills)

    def __iter__(self) -> Iterator[SkillDocument]:
        return iter(self.list_all())
