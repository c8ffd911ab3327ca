from pathlib import Path

import pytest

from pattern_skills.config import BUNDLED_SKILLS_DIR, Settings
from pattern_skills.skills.catalog import SkillCatalog
from pattern_skills.skills.load import DuplicateSkillError, SkillDocument, load_skills_from_dir
from tests.conftest import write_skill


@pytest.fixture
def bundled_catalog() -> SkillCatalog:
    return SkillCatalog.from_directories(bundled_skills_dir=BUNDLED_SKILLS_DIR)


@pytest.fixture
def factory(bundled_catalog: SkillCatalog) -> SkillDocument:
    skill = bundled_catalog.get("factory-pattern")
    assert skill is not None
    return skill


@pytest.fixture
def value_object(bundled_catalog: SkillCatalog) -> SkillDocument:
    skill = bundled_catalog.get("value-object")
    assert skill is not None
    return skill


class TestBundledSkills:
    def test_both_patterns_ship(self, bundled_catalog: SkillCatalog):
        assert bundled_catalog.list_names() == ["factory-pattern", "value-object"]

    def test_names_are_unique(self):
        documents = load_skills_from_dir(BUNDLED_SKILLS_DIR, source="bundled")
        names = [d.name for d in documents]

        assert len(names) == len(set(names))

    def test_bundled_documents_have_bodies(self, bundled_catalog: SkillCatalog):
        for skill in bundled_catalog:
            assert skill.source == "bundled"
            assert skill.body.startswith("# ")
            assert "## Checklist" in skill.body

    def test_fat_constructor_matches_factory_only(
        self,
        bundled_catalog: SkillCatalog,
        factory: SkillDocument,
        value_object: SkillDocument,
    ):
        result = bundled_catalog.find_matching_skills(
            "I have a fat constructor with validation logic"
        )

        assert factory in result
        assert value_object not in result

    def test_primitive_obsession_matches_value_object_only(
        self,
        bundled_catalog: SkillCatalog,
        factory: SkillDocument,
        value_object: SkillDocument,
    ):
        result = bundled_catalog.find_matching_skills(
            "I have primitive obsession with ISBN strings"
        )

        assert value_object in result
        assert factory not in result

    def test_plural_email_addresses_match_value_object(
        self, bundled_catalog: SkillCatalog, value_object: SkillDocument
    ):
        result = bundled_catalog.find_matching_skills(
            "we pass email addresses around as strings"
        )

        assert result == frozenset({value_object})

    def test_plural_factories_match_factory(
        self, bundled_catalog: SkillCatalog, factory: SkillDocument
    ):
        result = bundled_catalog.find_matching_skills("should I use factories here")

        assert result == frozenset({factory})

    @pytest.mark.parametrize("utterance", ["", "   ", "\n\t"])
    def test_empty_input_matches_nothing(self, bundled_catalog: SkillCatalog, utterance: str):
        assert bundled_catalog.find_matching_skills(utterance) == frozenset()

    def test_unrelated_request_matches_nothing(self, bundled_catalog: SkillCatalog):
        assert bundled_catalog.find_matching_skills("please rename this variable") == frozenset()

    def test_both_patterns_can_match(self, bundled_catalog: SkillCatalog):
        result = bundled_catalog.find_matching_skills(
            "Should the factory return a value object?"
        )

        assert {s.name for s in result} == {"factory-pattern", "value-object"}

    def test_lookups_do_not_mutate(self, bundled_catalog: SkillCatalog):
        before = [(s.name, s.description, s.triggers, s.body) for s in bundled_catalog]

        bundled_catalog.find_matching_skills("fat constructor and primitive obsession")
        bundled_catalog.rank_matching_skills("value object factory")
        bundled_catalog.format_skills_index()

        after = [(s.name, s.description, s.triggers, s.body) for s in bundled_catalog]
        assert before == after
        assert len(bundled_catalog) == 2


class TestSkillCatalog:
    def test_register_and_get(self, skills_dir: Path):
        write_skill(skills_dir, "aggregate-root")
        (document,) = load_skills_from_dir(skills_dir, source="user")

        catalog = SkillCatalog()
        catalog.register(document)

        assert catalog.get("aggregate-root") is document
        assert "aggregate-root" in catalog
        assert "missing" not in catalog
        assert catalog.get("missing") is None
        assert len(catalog) == 1

    def test_duplicate_registration_is_rejected(self, skills_dir: Path):
        write_skill(skills_dir, "aggregate-root")
        (document,) = load_skills_from_dir(skills_dir, source="user")
        catalog = SkillCatalog([document])

        with pytest.raises(DuplicateSkillError):
            catalog.register(document)
        assert len(catalog) == 1

    def test_duplicate_error_is_value_error(self):
        assert issubclass(DuplicateSkillError, ValueError)

    def test_from_directories_rejects_duplicates_within_a_source(self, skills_dir: Path):
        write_skill(skills_dir, "value-object", directory="vo-one")
        write_skill(skills_dir, "value-object", directory="vo-two")

        with pytest.raises(DuplicateSkillError):
            SkillCatalog.from_directories(user_skills_dir=skills_dir)

    def test_rank_orders_by_score_then_name(self, skills_dir: Path):
        write_skill(skills_dir, "beta", triggers=["money"])
        write_skill(skills_dir, "alpha", triggers=["money"])
        write_skill(skills_dir, "gamma", triggers=["money", "currency"])
        catalog = SkillCatalog.from_directories(user_skills_dir=skills_dir)

        ranked = catalog.rank_matching_skills("money in the wrong currency")

        assert [m.skill.name for m in ranked] == ["gamma", "alpha", "beta"]

    def test_descriptions_and_index(self, skills_dir: Path):
        write_skill(skills_dir, "aggregate-root", "Guard invariants at the root")
        catalog = SkillCatalog.from_directories(user_skills_dir=skills_dir)

        assert catalog.get_descriptions() == {"aggregate-root": "Guard invariants at the root"}
        index = catalog.format_skills_index()
        assert "- **aggregate-root**: Guard invariants at the root" in index
        assert str(skills_dir / "aggregate-root" / "SKILL.md") in index

    def test_empty_index(self):
        assert "(No skills available.)" in SkillCatalog().format_skills_index()

    def test_iterates_in_name_order(self, skills_dir: Path):
        write_skill(skills_dir, "zeta")
        write_skill(skills_dir, "alpha")
        catalog = SkillCatalog.from_directories(user_skills_dir=skills_dir)

        assert [s.name for s in catalog] == ["alpha", "zeta"]
        assert [s.name for s in catalog.list_all()] == ["alpha", "zeta"]


class TestFromSettings:
    def test_includes_bundled_and_user(self, tmp_path: Path):
        user_home = tmp_path / "home"
        write_skill(user_home / "skills", "aggregate-root")
        settings = Settings(home_dir=user_home)

        catalog = SkillCatalog.from_settings(settings)

        assert catalog.list_names() == ["aggregate-root", "factory-pattern", "value-object"]

    def test_bundled_can_be_disabled(self, tmp_path: Path):
        settings = Settings(home_dir=tmp_path / "home", include_bundled=False)

        assert len(SkillCatalog.from_settings(settings)) == 0

    def test_project_only(self, tmp_path: Path):
        project = tmp_path / "project"
        write_skill(project / ".pattern-skills" / "skills", "team-factory")
        settings = Settings(home_dir=tmp_path / "home", project_root=project)

        catalog = SkillCatalog.from_settings(settings, project_only=True)

        assert catalog.list_names() == ["team-factory"]
        assert catalog.get("team-factory").source == "project"
