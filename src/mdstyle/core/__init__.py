"""Core modules for Markdown linting."""
from .linter import (
    LintContext,
    LintReport,
    LintWarning,
    fix_content,
    lint_content,
    lint_file,
)

__all__ = [
    "LintContext",
    "LintReport",
    "LintWarning",
    "fix_content",
    "lint_content",
    "lint_file",
]
