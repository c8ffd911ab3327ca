"""Main entry point for the pattern-skills CLI."""

import argparse
import logging
import sys

from pattern_skills._version import __version__
from pattern_skills.config import COLORS, console
from pattern_skills.skills import execute_skills_command, setup_skills_parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="pattern-skills",
        description="pattern-skills - design-pattern guidance for AI coding assistants",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    subparsers.add_parser("help", help="Show help information")
    subparsers.add_parser("version", help="Show the installed version")

    # Skills command - setup delegated to skills module
    setup_skills_parser(subparsers)

    return parser.parse_args(argv)


def show_help() -> None:
    """Show help information."""
    console.print()
    console.print(f"[bold]pattern-skills[/bold] v{__version__}", style=COLORS["primary"])
    console.print()

    console.print("[bold]Usage:[/bold]", style=COLORS["primary"])
    console.print("  pattern-skills skills list                 List all available skills")
    console.print("  pattern-skills skills info NAME            Show a skill and its full guidance")
    console.print("  pattern-skills skills match REQUEST        Find skills that apply to a request")
    console.print("  pattern-skills skills index                Print the skill index as Markdown")
    console.print("  pattern-skills skills create NAME          Create a new skill from the template")
    console.print("  pattern-skills version                     Show the installed version")
    console.print("  pattern-skills help                        Show this help message")
    console.print()

    console.print("[bold]Options:[/bold]", style=COLORS["primary"])
    console.print("  --verbose                     Enable debug logging")
    console.print("  --project                     Limit skills commands to project skills")
    console.print()

    console.print("[bold]Examples:[/bold]", style=COLORS["primary"])
    console.print(
        "  pattern-skills skills match 'fat constructor with validation logic'",
        style=COLORS["dim"],
    )
    console.print("  pattern-skills skills info value-object", style=COLORS["dim"])
    console.print("  pattern-skills skills create aggregate-root --project", style=COLORS["dim"])
    console.print()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def cli_main(argv: list[str] | None = None) -> None:
    """Console script entry point."""
    try:
        args = parse_args(argv)
        _configure_logging(args.verbose)

        if args.command == "skills":
            execute_skills_command(args)
        elif args.command == "version":
            console.print(f"pattern-skills {__version__}")
        else:
            show_help()
    except KeyboardInterrupt:
        console.print("\n\n[yellow]Interrupted[/yellow]")
        sys.exit(0)


if __name__ == "__main__":
    cli_main()
