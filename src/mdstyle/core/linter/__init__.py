"""Markdown style linter."""
from .context import CodeRegions, LintContext
from .engine import apply_fixes, fix_content, lint_content, lint_file
from .models import Fix, FixResult, LintProblem, LintReport, LintWarning, Severity
from .position import LineIndex, Position

__all__ = [
    "lint_file",
    "lint_content",
    "fix_content",
    "apply_fixes",
    "LintContext",
    "CodeRegions",
    "LineIndex",
    "Position",
    "LintWarning",
    "LintProblem",
    "LintReport",
    "FixResult",
    "Severity",
    "Fix",
]
