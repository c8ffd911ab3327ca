"""CLI commands for browsing and authoring design-pattern skills.

These commands are registered with the CLI via main.py:
- pattern-skills skills list [--project]
- pattern-skills skills info <name>
- pattern-skills skills match <request...>
- pattern-skills skills index
- pattern-skills skills create <name> [--project]
"""

import argparse
import logging
import re
import sys
from pathlib import Path
from typing import Any

from pattern_skills.config import COLORS, Settings, console
from pattern_skills.skills.catalog import SkillCatalog
from pattern_skills.skills.load import MAX_SKILL_NAME_LENGTH, SKILL_FILE_NAME, DuplicateSkillError

logger = logging.getLogger(__name__)

SOURCE_LABELS = {
    "bundled": ("Bundled Skills", "magenta"),
    "user": ("User Skills", "cyan"),
    "project": ("Project Skills", "green"),
}

SKILL_TEMPLATE = """---
name: {name}
description: Brief description of the design problem this skill solves and when to apply it.
triggers:
  - {trigger}
# Optional fields:
# license: MIT
# metadata:
#   language: java
#   version: "1.0"
---

# {title}

## When to Use

- [Symptom 1: the code shows ...]
- [Symptom 2: the user asks for ...]

## How to Apply

### Step 1: [Identify the candidate]
[Describe what to look for in the existing code]

### Step 2: [Introduce the pattern]
[Describe the refactoring and show a short example]

### Step 3: [Verify]
[Describe how to confirm behavior is unchanged]

## Checklist

- [ ] [Check 1]
- [ ] [Check 2]

## Anti-Patterns

- [Common mistake and why it hurts]

## Explaining the Change

> [Template sentence the assistant can paraphrase to the user]
"""


def _validate_name(name: str) -> tuple[bool, str]:
    """Validate a new skill name.

    Requirements:
    - Max 64 characters
    - Lowercase alphanumeric and hyphens only (a-z, 0-9, -)
    - Cannot start or end with hyphen
    - No consecutive hyphens
    - No path traversal sequences

    Returns:
        (is_valid, error_message) tuple. Error message is empty if valid.
    """
    if not name or not name.strip():
        return False, "cannot be empty"

    if len(name) > MAX_SKILL_NAME_LENGTH:
        return False, "cannot exceed 64 characters"

    if ".." in name or "/" in name or "\\" in name:
        return False, "cannot contain path components"

    if not re.match(r"^[a-z0-9]+(-[a-z0-9]+)*$", name):
        return (
            False,
            "must use only lowercase letters, digits and single hyphens "
            "(no uppercase, no underscores, no leading or trailing hyphen)",
        )

    return True, ""


def _validate_skill_path(skill_dir: Path, base_dir: Path) -> tuple[bool, str]:
    """Check that the resolved skill directory stays inside the base directory.

    Returns:
        (is_valid, error_message) tuple. Error message is empty if valid.
    """
    try:
        resolved_skill = skill_dir.resolve()
        resolved_base = base_dir.resolve()
    except (OSError, RuntimeError) as e:
        return False, f"invalid path: {e}"

    if not resolved_skill.is_relative_to(resolved_base):
        return False, f"skill directory must be inside {base_dir}"
    return True, ""


def _load_catalog(settings: Settings, *, project: bool = False) -> SkillCatalog:
    """Load the catalog, exiting with status 1 on duplicate skill names."""
    try:
        return SkillCatalog.from_settings(settings, project_only=project)
    except DuplicateSkillError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        console.print(
            "[dim]Rename one of the skills so every name is unique within its directory.[/dim]",
            style=COLORS["dim"],
        )
        sys.exit(1)


def _list(*, project: bool = False) -> None:
    """List all available skills.

    Args:
        project: If True, only show project skills.
    """
    settings = Settings.from_environment()
    project_skills_dir = settings.get_project_skills_dir()

    if project:
        if not project_skills_dir:
            console.print("[yellow]Not in a project directory.[/yellow]")
            console.print(
                "[dim]Project skills require a .git directory in the project root.[/dim]",
                style=COLORS["dim"],
            )
            return

    catalog = _load_catalog(settings, project=project)

    if project and not catalog:
        console.print("[yellow]No project skills found.[/yellow]")
        console.print(
            f"[dim]Project skills will be created in {project_skills_dir}/ when you add them.[/dim]",
            style=COLORS["dim"],
        )
        console.print(
            "\n[dim]Create a project skill:\n  pattern-skills skills create my-skill --project[/dim]",
            style=COLORS["dim"],
        )
        return

    if not catalog:
        console.print("[yellow]No skills found.[/yellow]")
        console.print(
            f"[dim]Skills will be created in {settings.get_user_skills_dir()}/ when you add them.[/dim]",
            style=COLORS["dim"],
        )
        console.print(
            "\n[dim]Create your first skill:\n  pattern-skills skills create my-skill[/dim]",
            style=COLORS["dim"],
        )
        return

    console.print("\n[bold]Available Skills:[/bold]\n", style=COLORS["primary"])

    for source, (label, color) in SOURCE_LABELS.items():
        skills = [s for s in catalog if s.source == source]
        if not skills:
            continue
        console.print(f"[bold {color}]{label}:[/bold {color}]", style=COLORS["primary"])
        for skill in skills:
            console.print(f"  • [bold]{skill.name}[/bold]", style=COLORS["primary"])
            console.print(f"    {skill.description}", style=COLORS["dim"])
            console.print(f"    Location: {skill.directory}/", style=COLORS["dim"])
            console.print()


def _info(skill_name: str, *, project: bool = False) -> None:
    """Show detailed information about a skill, including its full body.

    Args:
        skill_name: Name of the skill to show.
        project: If True, only search project skills.
    """
    settings = Settings.from_environment()
    if project and not settings.has_project:
        console.print("[bold red]Error:[/bold red] Not in a project directory.")
        return

    catalog = _load_catalog(settings, project=project)
    skill = catalog.get(skill_name)

    if not skill:
        console.print(f"[bold red]Error:[/bold red] Skill '{skill_name}' not found.")
        console.print("\n[dim]Available skills:[/dim]", style=COLORS["dim"])
        for name in catalog.list_names():
            console.print(f"  - {name}", style=COLORS["dim"])
        return

    label, color = SOURCE_LABELS.get(skill.source, (skill.source, "white"))
    console.print(
        f"\n[bold]Skill: {skill.name}[/bold] [bold {color}]({label})[/bold {color}]\n",
        style=COLORS["primary"],
    )
    console.print(f"[bold]Description:[/bold] {skill.description}\n", style=COLORS["dim"])
    if skill.triggers:
        console.print(f"[bold]Triggers:[/bold] {', '.join(skill.triggers)}\n", style=COLORS["dim"])
    console.print(f"[bold]Location:[/bold] {skill.directory}/\n", style=COLORS["dim"])

    supporting_files = sorted(f for f in skill.directory.iterdir() if f.name != SKILL_FILE_NAME)
    if supporting_files:
        console.print("[bold]Supporting Files:[/bold]", style=COLORS["dim"])
        for file in supporting_files:
            console.print(f"  - {file.name}", style=COLORS["dim"])
        console.print()

    console.print("[bold]Guidance:[/bold]\n", style=COLORS["primary"])
    # Body is printed verbatim, markup in the Markdown must not be interpreted
    console.print(skill.body, style=COLORS["dim"], markup=False)
    console.print()


def _match(request: str, *, project: bool = False) -> None:
    """Show which skills apply to a free-text request.

    Args:
        request: The user's request.
        project: If True, only consider project skills.
    """
    settings = Settings.from_environment()
    catalog = _load_catalog(settings, project=project)
    matches = catalog.rank_matching_skills(request)
    logger.debug("Request %r matched %d skill(s)", request, len(matches))

    if not matches:
        console.print("[yellow]No matching skills.[/yellow]")
        console.print(
            "[dim]Try naming the pattern or the smell, e.g. 'value object' or 'primitive obsession'.[/dim]",
            style=COLORS["dim"],
        )
        return

    console.print("\n[bold]Matching Skills:[/bold]\n", style=COLORS["primary"])
    for match in matches:
        console.print(f"  • [bold]{match.skill.name}[/bold]", style=COLORS["primary"])
        console.print(f"    {match.skill.description}", style=COLORS["dim"])
        console.print(f"    Matched: {', '.join(match.matched)}", style=COLORS["match"])
        console.print(f"    Guidance: {match.skill.path}", style=COLORS["dim"])
        console.print()


def _index(*, project: bool = False) -> None:
    """Print the skill index as Markdown."""
    settings = Settings.from_environment()
    catalog = _load_catalog(settings, project=project)
    console.print(catalog.format_skills_index(), markup=False)


def _create(skill_name: str, *, project: bool = False) -> None:
    """Create a new skill from the SKILL.md template.

    Args:
        skill_name: Name of the skill to create.
        project: If True, create in the project skills directory.
            If False, create in the user skills directory.
    """
    is_valid, error_msg = _validate_name(skill_name)
    if not is_valid:
        console.print(f"[bold red]Error:[/bold red] Invalid skill name: {error_msg}")
        console.print(
            "[dim]Examples: factory-pattern, value-object, specification-pattern[/dim]",
            style=COLORS["dim"],
        )
        return

    settings = Settings.from_environment()
    if project:
        if not settings.project_root:
            console.print("[bold red]Error:[/bold red] Not in a project directory.")
            console.print(
                "[dim]Project skills require a .git directory in the project root.[/dim]",
                style=COLORS["dim"],
            )
            return
        skills_dir = settings.ensure_project_skills_dir()
    else:
        skills_dir = settings.ensure_user_skills_dir()

    skill_dir = skills_dir / skill_name

    is_valid_path, path_error = _validate_skill_path(skill_dir, skills_dir)
    if not is_valid_path:
        console.print(f"[bold red]Error:[/bold red] {path_error}")
        return

    if skill_dir.exists():
        console.print(
            f"[bold red]Error:[/bold red] Skill '{skill_name}' already exists at {skill_dir}"
        )
        return

    skill_dir.mkdir(parents=True)
    skill_md = skill_dir / SKILL_FILE_NAME
    skill_md.write_text(
        SKILL_TEMPLATE.format(
            name=skill_name,
            trigger=skill_name.replace("-", " "),
            title=skill_name.replace("-", " ").title(),
        ),
        encoding="utf-8",
    )
    logger.info("Created skill '%s' at %s", skill_name, skill_md)

    console.print(f"✓ Skill '{skill_name}' created successfully!", style=COLORS["primary"])
    console.print(f"Location: {skill_dir}\n", style=COLORS["dim"])
    console.print(
        "[dim]Edit the SKILL.md file to customize it:\n"
        "  1. Update the description and triggers in the YAML frontmatter\n"
        "  2. Fill in the guidance, checklist and examples\n"
        "  3. Add supporting files if the guidance refers to them\n"
        "\n"
        f"  nano {skill_md}\n[/dim]",
        style=COLORS["dim"],
    )


def setup_skills_parser(
    subparsers: Any,
) -> argparse.ArgumentParser:
    """Set up the skills subcommand parser with all of its subcommands."""
    skills_parser = subparsers.add_parser(
        "skills",
        help="Browse and author design-pattern skills",
        description="Browse and author design-pattern skills - list, inspect, match and create",
    )
    skills_subparsers = skills_parser.add_subparsers(dest="skills_command", help="Skills command")

    list_parser = skills_subparsers.add_parser(
        "list", help="List all available skills", description="List all available skills"
    )
    list_parser.add_argument(
        "--project",
        action="store_true",
        help="Show only project-level skills",
    )

    info_parser = skills_subparsers.add_parser(
        "info",
        help="Show detailed information about a skill",
        description="Show detailed information about a specific skill",
    )
    info_parser.add_argument("name", help="Name of the skill to show")
    info_parser.add_argument(
        "--project",
        action="store_true",
        help="Search only project skills",
    )

    match_parser = skills_subparsers.add_parser(
        "match",
        help="Find skills that apply to a request",
        description="Find skills whose triggers match a free-text request",
    )
    match_parser.add_argument("request", nargs="+", help="The request, e.g. 'fat constructor'")
    match_parser.add_argument(
        "--project",
        action="store_true",
        help="Match only project skills",
    )

    index_parser = skills_subparsers.add_parser(
        "index",
        help="Print the skill index as Markdown",
        description="Print skill names, descriptions and paths as Markdown",
    )
    index_parser.add_argument(
        "--project",
        action="store_true",
        help="Index only project skills",
    )

    create_parser = skills_subparsers.add_parser(
        "create",
        help="Create a new skill",
        description="Create a new skill from the SKILL.md template",
    )
    create_parser.add_argument("name", help="Name of the skill to create (e.g. value-object)")
    create_parser.add_argument(
        "--project",
        action="store_true",
        help="Create the skill in the project directory instead of the user directory",
    )
    return skills_parser


def execute_skills_command(args: argparse.Namespace) -> None:
    """Execute a skills subcommand from parsed arguments.

    Args:
        args: Parsed command line arguments with a skills_command attribute
    """
    if args.skills_command == "list":
        _list(project=args.project)
    elif args.skills_command == "info":
        _info(args.name, project=args.project)
    elif args.skills_command == "match":
        _match(" ".join(args.request), project=args.project)
    elif args.skills_command == "index":
        _index(project=args.project)
    elif args.skills_command == "create":
        _create(args.name, project=args.project)
    else:
        console.print(
            "[yellow]Please specify a skills subcommand: list, info, match, index or create[/yellow]"
        )
        console.print("\n[bold]Usage:[/bold]", style=COLORS["primary"])
        console.print("  pattern-skills skills <command> [options]\n")
        console.print("[bold]Available commands:[/bold]", style=COLORS["primary"])
        console.print("  list              List all available skills")
        console.print("  info <name>       Show detailed information about a skill")
        console.print("  match <request>   Find skills that apply to a request")
        console.print("  index             Print the skill index as Markdown")
        console.print("  create <name>     Create a new skill")
        console.print("\n[bold]Examples:[/bold]", style=COLORS["primary"])
        console.print("  pattern-skills skills list")
        console.print("  pattern-skills skills match 'primitive obsession with ISBN strings'")
        console.print("  pattern-skills skills info value-object")
        console.print("\n[dim]For help on a specific command:[/dim]", style=COLORS["dim"])
        console.print("  pattern-skills skills <command> --help", style=COLORS["dim"])


__all__ = [
    "execute_skills_command",
    "setup_skills_parser",
]
