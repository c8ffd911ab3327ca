"""Allow running the CLI as: python -m pattern_skills."""

from pattern_skills.main import cli_main

if __name__ == "__main__":
    cli_main()
