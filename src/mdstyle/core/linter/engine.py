"""Lint engine - runs rules and applies fixes."""
import logging
from pathlib import Path
from typing import Iterable, Optional

from .context import LintContext
from .models import FixResult, LintProblem, LintReport, LintWarning
from .rules import RULES, Rule, apply_edits, build_rules

logger = logging.getLogger(__name__)


def lint_file(
    path: Path,
    fix: bool = False,
    rules: Optional[list[Rule]] = None
) -> LintReport:
    """
    Lint a markdown file.

    Args:
        path: Path to the .md file
        fix: If True, apply fixes and write back
        rules: Rule instances to run (default: every rule with default config)

    Returns:
        LintReport with all warnings found (before fixing)
    """
    content = path.read_text(encoding='utf-8')
    rules = rules if rules is not None else build_rules()

    report = lint_content(content, str(path), rules=rules)

    if fix and report.fixable > 0:
        result = fix_content(content, rules)
        report.problems.extend(result.problems)
        report.fixed = sorted({w.rule_name for w in report.warnings if w.fix is not None})

        if result.content != content:
            path.write_text(result.content, encoding='utf-8')
            logger.info(f"Wrote {result.applied} fixes to {path}")

    return report


def lint_content(
    content: str,
    source_path: str = "<string>",
    rules: Optional[list[Rule]] = None
) -> LintReport:
    """
    Lint markdown content.

    Args:
        content: The markdown content to lint
        source_path: Path for reporting (doesn't need to exist)
        rules: Rule instances to run (default: every rule with default config)

    Returns:
        LintReport with warnings sorted by line and column
    """
    report = LintReport(path=source_path)
    rules = rules if rules is not None else build_rules()

    ctx = LintContext(content)

    for rule in rules:
        report.problems.extend(rule.problems)

        try:
            for warning in rule.check(ctx):
                report.add_warning(warning)
        except Exception as e:
            logger.error(f"Rule {rule.name} failed: {e}")
            report.problems.append(LintProblem(rule.name, f"Rule failed: {e}"))

    report.warnings.sort(key=lambda w: (w.line, w.column))

    return report


def fix_content(content: str, rules: Optional[list[Rule]] = None) -> FixResult:
    """
    Apply every rule's fixes, one rule at a time.

    Each rule sees the output of the previous one, with a fresh context, so
    byte ranges are always computed against the text being rewritten.

    Returns:
        FixResult; ``content`` is the input object when nothing changed
    """
    rules = rules if rules is not None else build_rules()
    result = FixResult(content=content)

    for rule in rules:
        try:
            outcome = rule.fix_report(LintContext(result.content))
        except Exception as e:
            logger.error(f"Rule {rule.name} fix failed: {e}")
            result.problems.append(LintProblem(rule.name, f"Fix failed: {e}"))
            continue

        result.applied += outcome.applied
        result.problems.extend(outcome.problems)
        if outcome.content != result.content:
            result.content = outcome.content

    return result


def apply_fixes(content: str, warnings: Iterable[LintWarning]) -> FixResult:
    """
    Apply fixes from an existing list of warnings.

    The warnings must have been computed against ``content``; stale warnings
    produce skipped fixes rather than corrupted text.
    """
    return apply_edits(content, warnings)


def get_available_rules() -> dict[str, str]:
    """
    Get list of available rules with descriptions.

    Returns:
        Dict mapping rule identifier to description
    """
    return {name: rule_cls.description for name, rule_cls in RULES.items()}
