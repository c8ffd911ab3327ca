from pathlib import Path

import pytest


def write_skill(
    skills_dir: Path,
    name: str,
    description: str = "A skill used in tests",
    *,
    triggers: list[str] | None = None,
    body: str = "# Guidance\n\nDo the thing.\n",
    directory: str | None = None,
    extra_frontmatter: str = "",
) -> Path:
    """Write <skills_dir>/<directory or name>/SKILL.md and return its path."""
    skill_dir = skills_dir / (directory or name)
    skill_dir.mkdir(parents=True, exist_ok=True)
    lines = ["---", f"name: {name}", f"description: {description}"]
    if triggers:
        lines.append("triggers:")
        lines.extend(f"  - {t}" for t in triggers)
    if extra_frontmatter:
        lines.append(extra_frontmatter.rstrip("\n"))
    lines.append("---")
    skill_md = skill_dir / "SKILL.md"
    skill_md.write_text("\n".join(lines) + "\n" + body, encoding="utf-8")
    return skill_md


@pytest.fixture
def skills_dir(tmp_path: Path) -> Path:
    path = tmp_path / "skills"
    path.mkdir()
    return path


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point user config at tmp_path/home and run outside any git project."""
    home = tmp_path / "home"
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.setenv("PATTERN_SKILLS_HOME", str(home))
    monkeypatch.delenv("PATTERN_SKILLS_DISABLE_BUNDLED", raising=False)
    monkeypatch.chdir(workdir)
    monkeypatch.setattr(
        "pattern_skills.config._find_project_root", lambda start_path=None: None
    )
    return home


@pytest.fixture
def project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run inside a git project rooted at tmp_path/project."""
    root = tmp_path / "project"
    (root / ".git").mkdir(parents=True)
    monkeypatch.setenv("PATTERN_SKILLS_HOME", str(tmp_path / "home"))
    monkeypatch.chdir(root)
    return root
