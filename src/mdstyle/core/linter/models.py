"""Data models for the linter."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Severity(Enum):
    """Severity levels for lint warnings."""
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Fix:
    """
    A single edit resolving one warning.

    ``range`` holds UTF-8 byte offsets (half-open) into the document the
    warning was computed against.
    """
    range: range
    replacement: str


@dataclass(frozen=True)
class LintWarning:
    """A located rule failure. Lines and columns are 1-based characters."""
    rule_name: str
    line: int
    column: int
    end_line: int
    end_column: int
    message: str
    severity: Severity = Severity.WARNING
    fix: Optional[Fix] = None

    def to_dict(self) -> dict:
        return {
            "rule": self.rule_name,
            "severity": self.severity.value,
            "line": self.line,
            "column": self.column,
            "end_line": self.end_line,
            "end_column": self.end_column,
            "message": self.message,
            "has_fix": self.fix is not None
        }


@dataclass(frozen=True)
class LintProblem:
    """A non-fatal issue hit while checking or fixing (skipped fix, bad pattern)."""
    rule_name: str
    message: str

    def to_dict(self) -> dict:
        return {"rule": self.rule_name, "message": self.message}


@dataclass
class FixResult:
    """Outcome of one fix pass."""
    content: str
    applied: int = 0
    problems: list[LintProblem] = field(default_factory=list)


@dataclass
class LintReport:
    """Complete lint report for a document."""
    path: str
    total_issues: int = 0
    fixable: int = 0
    errors: int = 0
    warning_count: int = 0
    warnings: list[LintWarning] = field(default_factory=list)
    problems: list[LintProblem] = field(default_factory=list)
    fixed: list[str] = field(default_factory=list)

    def add_warning(self, warning: LintWarning) -> None:
        """Add a warning to the report and update counts."""
        self.warnings.append(warning)
        self.total_issues += 1

        if warning.fix is not None:
            self.fixable += 1
        if warning.severity == Severity.ERROR:
            self.errors += 1
        elif warning.severity == Severity.WARNING:
            self.warning_count += 1

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "total_issues": self.total_issues,
            "fixable": self.fixable,
            "errors": self.errors,
            "warnings": self.warning_count,
            "issues": [w.to_dict() for w in self.warnings],
            "problems": [p.to_dict() for p in self.problems],
            "fixed": self.fixed
        }
