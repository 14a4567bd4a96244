"""CLI for mdstyle.

Lints Markdown files from the terminal and starts the LSP / MCP servers.
"""
import argparse
import json
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from mdstyle import __version__
from mdstyle.config import Config, ConfigError
from mdstyle.core.linter import engine
from mdstyle.core.linter.models import LintReport, Severity
from mdstyle.core.linter.rules import build_rules

console = Console()
err_console = Console(stderr=True)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        prog="mdstyle",
        description="Check and fix Markdown style"
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (("check", "Report style issues"), ("fix", "Fix style issues in place")):
        p = subparsers.add_parser(name, help=help_text)
        p.add_argument("paths", nargs="+", type=Path, help="Markdown files or directories")
        p.add_argument("-c", "--config", type=Path, help="Rule config file (default: .mdstyle.yaml)")
        p.add_argument(
            "--disable", default="",
            help="Comma-separated rule ids to skip"
        )
        p.add_argument(
            "--rules", default="",
            help="Comma-separated rule ids to run (default: all)"
        )
        p.add_argument("--json", action="store_true", help="Print JSON instead of a table")
        p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers.add_parser("rules", help="List available rules")
    subparsers.add_parser("lsp", help="Run the language server on stdio")
    subparsers.add_parser("mcp", help="Run the MCP server on stdio")

    args = parser.parse_args(argv)

    if args.command in ("check", "fix"):
        return lint_command(args, fix=args.command == "fix")
    elif args.command == "rules":
        return rules_command()
    elif args.command == "lsp":
        from mdstyle.lsp.server import main as lsp_main
        lsp_main()
    elif args.command == "mcp":
        from mdstyle.server import main as mcp_main
        mcp_main()
    return 0


def _split(value: str) -> list[str]:
    return [v.strip().upper() for v in value.split(",") if v.strip()]


def collect_files(paths: list[Path]) -> list[Path]:
    """Expand directories to the Markdown files under them."""
    files = []
    for path in paths:
        if path.is_dir():
            files.extend(sorted(p for p in path.rglob("*.md") if p.is_file()))
        else:
            files.append(path)
    return files


def lint_command(args, fix: bool) -> int:
    """Execute the check / fix commands."""
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr
    )

    try:
        config = Config.load(args.config)
    except ConfigError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        return 2

    rules = build_rules(
        config.rules,
        disabled=config.disable_rules + _split(args.disable),
        only=_split(args.rules) or None
    )

    reports = []
    for path in collect_files(args.paths):
        if not path.exists():
            err_console.print(f"[red]Error:[/red] File not found: {path}")
            return 2
        reports.append(engine.lint_file(path, fix=fix, rules=rules))

    if args.json:
        print(json.dumps([r.to_dict() for r in reports], indent=2))
    else:
        print_reports(reports, fixed=fix)

    if fix:
        return 0
    return 1 if any(r.total_issues for r in reports) else 0


def print_reports(reports: list[LintReport], fixed: bool = False) -> None:
    table = Table(show_header=True, header_style="bold")
    table.add_column("Location", style="cyan", no_wrap=True)
    table.add_column("Rule", style="magenta")
    table.add_column("Severity")
    table.add_column("Message")

    total = 0
    for report in reports:
        for w in report.warnings:
            severity_style = "red" if w.severity == Severity.ERROR else "yellow"
            table.add_row(
                f"{report.path}:{w.line}:{w.column}",
                w.rule_name,
                f"[{severity_style}]{w.severity.value}[/{severity_style}]",
                w.message
            )
            total += 1
        for problem in report.problems:
            err_console.print(f"[yellow]{report.path}[/yellow] {problem.rule_name}: {problem.message}")

    if total:
        console.print(table)

    verb = "Fixed" if fixed else "Found"
    console.print(f"{verb} {total} issue(s) in {len(reports)} file(s)")


def rules_command() -> int:
    table = Table(show_header=True, header_style="bold")
    table.add_column("Rule", style="magenta")
    table.add_column("Description")
    for name, description in engine.get_available_rules().items():
        table.add_row(name, description)
    console.print(table)
    return 0


if __name__ == "__main__":
    sys.exit(main())
