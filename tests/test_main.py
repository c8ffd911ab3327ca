import logging
from pathlib import Path

import pytest

from pattern_skills._version import __version__
from pattern_skills.main import cli_main, parse_args


class TestParseArgs:
    def test_skills_match_joins_words(self):
        args = parse_args(["skills", "match", "primitive", "obsession"])

        assert args.command == "skills"
        assert args.skills_command == "match"
        assert args.request == ["primitive", "obsession"]
        assert args.project is False

    def test_verbose_flag(self):
        assert parse_args(["--verbose", "version"]).verbose is True

    def test_no_command(self):
        assert parse_args([]).command is None


class TestCliMain:
    def test_version(self, capsys: pytest.CaptureFixture):
        cli_main(["version"])

        assert f"pattern-skills {__version__}" in capsys.readouterr().out

    def test_help_is_default(self, capsys: pytest.CaptureFixture):
        cli_main([])

        out = capsys.readouterr().out
        assert "Usage:" in out
        assert "pattern-skills skills match REQUEST" in out

    def test_skills_match(self, isolated_env: Path, capsys: pytest.CaptureFixture):
        cli_main(["skills", "match", "I have primitive obsession with ISBN strings"])

        out = capsys.readouterr().out
        assert "value-object" in out
        assert "factory-pattern" not in out

    def test_skills_without_subcommand_shows_usage(self, capsys: pytest.CaptureFixture):
        cli_main(["skills"])

        assert "Please specify a skills subcommand" in capsys.readouterr().out

    def test_verbose_enables_debug_logging(
        self, isolated_env: Path, monkeypatch: pytest.MonkeyPatch
    ):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

        cli_main(["--verbose", "skills", "index"])

        assert calls[0]["level"] == logging.DEBUG
