"""Skill loader for parsing design-pattern skills from SKILL.md files.

Each skill is a directory containing a SKILL.md file with:
- YAML frontmatter (name, description required; triggers optional)
- Markdown guidance for the coding assistant
- Optional supporting files (checklists, templates, etc.)

Example SKILL.md structure:
```markdown
---
name: value-object
description: Replace primitive obsession with immutable value objects
triggers:
  - primitive obsession
  - value object
---

# Value Object

## When to Use
- When a String or int carries domain rules
...
```
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

import yaml

logger = logging.getLogger(__name__)

# Maximum file size for SKILL.md files (10MB) - DoS protection
MAX_SKILL_FILE_SIZE = 10 * 1024 * 1024

# Agent Skills specification constraints (https://agentskills.io/specification)
MAX_SKILL_NAME_LENGTH = 64
MAX_SKILL_DESCRIPTION_LENGTH = 1024

SKILL_FILE_NAME = "SKILL.md"

_FRONTMATTER_PATTERN = re.compile(r"^---\s*\n(.*?)\n---\s*(?:\n|$)", re.DOTALL)


class DuplicateSkillError(ValueError):
    """Raised when two skills share a name within one catalog or source."""

    def __init__(self, name: str, *paths: str) -> None:
        self.name = name
        self.paths = paths
        msg = f"Skill '{name}' is already registered"
        if paths:
            msg += f" ({', '.join(paths)})"
        super().__init__(msg)


@dataclass(frozen=True)
class SkillDocument:
    """A parsed skill document.

    Instances are immutable once loaded. `metadata` is left out of equality
    and hashing so documents can be collected in sets.
    """

    name: str
    """Skill name (max 64 chars, lowercase alphanumeric and hyphens)."""

    description: str
    """Trigger description used to decide when the skill applies."""

    body: str
    """Markdown guidance following the frontmatter."""

    path: str
    """Path to the SKILL.md file."""

    source: str
    """Source of the skill ('bundled', 'user' or 'project')."""

    triggers: tuple[str, ...] = ()
    """Explicit trigger phrases from the frontmatter."""

    license: str | None = None
    compatibility: str | None = None
    allowed_tools: str | None = None

    metadata: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({}), compare=False
    )
    """Arbitrary key-value mapping for additional metadata (read-only)."""

    @property
    def directory(self) -> Path:
        """Directory holding the SKILL.md file and its supporting files."""
        return Path(self.path).parent


def _is_safe_path(path: Path, base_dir: Path) -> bool:
    """Check if path is safely contained within base_dir.

    Resolves both paths (following symlinks) so that a skill directory
    symlinked to somewhere outside the skills directory is rejected.

    Args:
        path: Path to validate
        base_dir: Base directory that should contain the path

    Returns:
        True if path is safely within base_dir, False otherwise
    """
    try:
        resolved_path = path.resolve()
        resolved_base = base_dir.resolve()
        resolved_path.relative_to(resolved_base)
        return True
    except ValueError:
        return False
    except (OSError, RuntimeError):
        # Error resolving path (e.g., circular symlinks)
        return False


def _validate_skill_name(name: str, directory_name: str) -> tuple[bool, str]:
    """Validate skill name format.

    Requirements:
    - Max 64 characters
    - Lowercase alphanumeric and hyphens only (a-z, 0-9, -)
    - Cannot start or end with hyphen
    - No consecutive hyphens
    - Must match parent directory name

    Returns:
        (is_valid, error_message) tuple. Error message is empty if valid.
    """
    if not name:
        return False, "Name is required"
    if len(name) > MAX_SKILL_NAME_LENGTH:
        return False, "Name exceeds 64 characters"
    if not re.match(r"^[a-z0-9]+(-[a-z0-9]+)*$", name):
        return False, "Name must use only lowercase alphanumeric and single hyphens"
    if name != directory_name:
        return False, f"Name '{name}' must match directory name '{directory_name}'"
    return True, ""


def _coerce_triggers(raw: object, skill_md_path: Path) -> tuple[str, ...]:
    if raw is None:
        return ()
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, list):
        logger.warning(
            "Ignoring 'triggers' in %s: expected a string or a list", skill_md_path
        )
        return ()
    triggers = []
    for item in raw:
        if not isinstance(item, (str, int, float)):
            logger.warning(
                "Ignoring trigger %r in %s: expected a non-empty scalar", item, skill_md_path
            )
            continue
        term = str(item).strip()
        if term:
            triggers.append(term)
    return tuple(triggers)


def _coerce_metadata(raw: object, skill_md_path: Path) -> Mapping[str, str]:
    if raw is None:
        return MappingProxyType({})
    if not isinstance(raw, dict):
        logger.warning("Ignoring 'metadata' in %s: not a mapping", skill_md_path)
        return MappingProxyType({})
    return MappingProxyType({str(k): str(v) for k, v in raw.items()})


def _optional_str(value: object) -> str | None:
    return None if value is None else str(value)


def parse_skill_document(skill_md_path: Path, source: str) -> SkillDocument | None:
    """Parse a SKILL.md file into a SkillDocument.

    Problems with a single file are logged and the file is skipped.

    Args:
        skill_md_path: Path to SKILL.md file
        source: Skill source ('bundled', 'user' or 'project')

    Returns:
        The parsed SkillDocument, or None if parsing fails
    """
    try:
        file_size = skill_md_path.stat().st_size
        if file_size > MAX_SKILL_FILE_SIZE:
            logger.warning(
                "Skipping %s: file too large (%d bytes)", skill_md_path, file_size
            )
            return None

        content = skill_md_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Error reading %s: %s", skill_md_path, e)
        return None

    match = _FRONTMATTER_PATTERN.match(content)
    if not match:
        logger.warning("Skipping %s: no valid YAML frontmatter found", skill_md_path)
        return None

    try:
        frontmatter_data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as e:
        logger.warning("Invalid YAML in %s: %s", skill_md_path, e)
        return None

    if not isinstance(frontmatter_data, dict):
        logger.warning("Skipping %s: frontmatter is not a mapping", skill_md_path)
        return None

    name = frontmatter_data.get("name")
    description = frontmatter_data.get("description")

    if not name or not description:
        logger.warning(
            "Skipping %s: missing required 'name' or 'description'", skill_md_path
        )
        return None

    # Warn but load, so hand-written skills with odd names still show up
    directory_name = skill_md_path.parent.name
    is_valid, error = _validate_skill_name(str(name), directory_name)
    if not is_valid:
        logger.warning(
            "Skill '%s' in %s has a non-conforming name: %s",
            name,
            skill_md_path,
            error,
        )

    description_str = str(description).strip()
    if len(description_str) > MAX_SKILL_DESCRIPTION_LENGTH:
        logger.warning(
            "Description in %s exceeds %d chars, truncating",
            skill_md_path,
            MAX_SKILL_DESCRIPTION_LENGTH,
        )
        description_str = description_str[:MAX_SKILL_DESCRIPTION_LENGTH]

    return SkillDocument(
        name=str(name),
        description=description_str,
        body=content[match.end() :].lstrip("\n"),
        path=str(skill_md_path),
        source=source,
        triggers=_coerce_triggers(frontmatter_data.get("triggers"), skill_md_path),
        license=_optional_str(frontmatter_data.get("license")),
        compatibility=_optional_str(frontmatter_data.get("compatibility")),
        allowed_tools=_optional_str(frontmatter_data.get("allowed-tools")),
        metadata=_coerce_metadata(frontmatter_data.get("metadata"), skill_md_path),
    )


def load_skills_from_dir(skills_dir: Path, source: str) -> list[SkillDocument]:
    """Load all skills from a single skills directory.

    Skills organization:
    skills/
    ├── skill-name/
    │   ├── SKILL.md        # Required: guidance with YAML frontmatter
    │   └── checklist.md    # Optional: supporting files

    Subdirectories are visited in sorted order so the result is stable.

    Args:
        skills_dir: Path to skills directory
        source: Skill source ('bundled', 'user' or 'project')

    Returns:
        Skill documents found in the directory, in directory order

    Raises:
        DuplicateSkillError: Two skill directories declare the same name
    """
    skills_dir = skills_dir.expanduser()
    if not skills_dir.is_dir():
        return []

    try:
        resolved_base = skills_dir.resolve()
    except (OSError, RuntimeError):
        return []

    skills: dict[str, SkillDocument] = {}

    for skill_dir in sorted(skills_dir.iterdir()):
        if not _is_safe_path(skill_dir, resolved_base):
            logger.warning("Skipping %s: resolves outside %s", skill_dir, skills_dir)
            continue

        if not skill_dir.is_dir():
            continue

        skill_md_path = skill_dir / SKILL_FILE_NAME
        if not skill_md_path.exists():
            continue

        if not _is_safe_path(skill_md_path, resolved_base):
            logger.warning(
                "Skipping %s: resolves outside %s", skill_md_path, skills_dir
            )
            continue

        document = parse_skill_document(skill_md_path, source=source)
        if document is None:
            continue

        existing = skills.get(document.name)
        if existing is not None:
            raise DuplicateSkillError(document.name, existing.path, document.path)

        skills[document.name] = document
        logger.debug("Loaded %s skill '%s' from %s", source, document.name, skill_md_path)

    return list(skills.values())


def list_skills(
    *,
    bundled_skills_dir: Path | None = None,
    user_skills_dir: Path | None = None,
    project_skills_dir: Path | None = None,
) -> list[SkillDocument]:
    """List skills from the bundled, user and project directories.

    Sources are merged in the order bundled, user, project. A skill from a
    later source replaces an earlier one with the same name.

    Args:
        bundled_skills_dir: Path to the skills shipped with the package
        user_skills_dir: Path to user-level skills directory
        project_skills_dir: Path to project-level skills directory

    Returns:
        Merged list of skill documents, later sources taking precedence
    """
    all_skills: dict[str, SkillDocument] = {}

    sources = (
        ("bundled", bundled_skills_dir),
        ("user", user_skills_dir),
        ("project", project_skills_dir),
    )
    for source, skills_dir in sources:
        if not skills_dir:
            continue
        for skill in load_skills_from_dir(skills_dir, source=source):
            previous = all_skills.get(skill.name)
            if previous is not None:
                logger.info(
                    "%s skill '%s' overrides %s skill at %s",
                    source.capitalize(),
                    skill.name,
                    previous.source,
                    previous.path,
                )
            all_skills[skill.name] = skill

    return list(all_skills.values())
