"""Configuration, constants and environment detection for pattern-skills."""

import os
from dataclasses import dataclass
from pathlib import Path

import dotenv
from rich.console import Console

dotenv.load_dotenv()

# Color scheme
COLORS = {
    "primary": "#10b981",
    "dim": "#6b7280",
    "match": "#fbbf24",
}

# Skills shipped inside the package
BUNDLED_SKILLS_DIR = Path(__file__).parent / "library"

# Directory name used both under $HOME and under a project root
CONFIG_DIR_NAME = ".pattern-skills"

HOME_ENV_VAR = "PATTERN_SKILLS_HOME"
DISABLE_BUNDLED_ENV_VAR = "PATTERN_SKILLS_DISABLE_BUNDLED"

# Rich console instance
console = Console(highlight=False)


def _find_project_root(start_path: Path | None = None) -> Path | None:
    """Find the project root by looking for a git directory.

    Walks up from start_path (or cwd) until a directory containing `.git`
    is found.

    Args:
        start_path: Directory to start searching from. Defaults to cwd.

    Returns:
        Path to the project root if found, None otherwise.
    """
    current = Path(start_path or Path.cwd()).resolve()

    for parent in [current, *list(current.parents)]:
        if (parent / ".git").exists():
            return parent

    return None


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    """Settings detected from the environment at startup.

    Attributes:
        home_dir: User-level configuration directory (holds `skills/`)
        include_bundled: Whether skills shipped with the package are loaded
        bundled_skills_dir: Directory of the skills shipped with the package
        project_root: Current project root directory (if inside a git project)
    """

    home_dir: Path
    include_bundled: bool = True
    bundled_skills_dir: Path = BUNDLED_SKILLS_DIR
    project_root: Path | None = None

    @classmethod
    def from_environment(cls, *, start_path: Path | None = None) -> "Settings":
        """Create settings by detecting the current environment.

        Args:
            start_path: Directory to start project detection from (default cwd)

        Returns:
            Settings instance with detected configuration
        """
        home_override = os.environ.get(HOME_ENV_VAR)
        home_dir = (
            Path(home_override).expanduser() if home_override else Path.home() / CONFIG_DIR_NAME
        )

        return cls(
            home_dir=home_dir,
            include_bundled=not _env_flag(DISABLE_BUNDLED_ENV_VAR),
            project_root=_find_project_root(start_path),
        )

    @property
    def has_project(self) -> bool:
        """Check if currently inside a git project."""
        return self.project_root is not None

    def get_user_skills_dir(self) -> Path:
        """Get the user-level skills directory path.

        Returns:
            {home_dir}/skills/ path, whether or not it exists
        """
        return self.home_dir / "skills"

    def ensure_user_skills_dir(self) -> Path:
        """Ensure the user-level skills directory exists and return its path."""
        skills_dir = self.get_user_skills_dir()
        skills_dir.mkdir(parents=True, exist_ok=True)
        return skills_dir

    def get_project_skills_dir(self) -> Path | None:
        """Get the project-level skills directory path.

        Returns:
            {project_root}/.pattern-skills/skills/ path, or None if not in a project
        """
        if not self.project_root:
            return None
        return self.project_root / CONFIG_DIR_NAME / "skills"

    def ensure_project_skills_dir(self) -> Path | None:
        """Ensure the project-level skills directory exists and return its path.

        Returns:
            {project_root}/.pattern-skills/skills/ path, or None if not in a project
        """
        skills_dir = self.get_project_skills_dir()
        if skills_dir is None:
            return None
        skills_dir.mkdir(parents=True, exist_ok=True)
        return skills_dir
