"""LSP types and conversions for mdstyle.

Warnings use 1-based line/column counted in characters; LSP positions are
0-based. Fix ranges are byte offsets and go through ``LineIndex``.
"""
from dataclasses import dataclass, field
from typing import Optional

from lsprotocol.types import (
    CodeAction,
    CodeActionKind,
    CodeDescription,
    Diagnostic,
    DiagnosticSeverity,
    Position,
    Range,
    TextEdit,
    WorkspaceEdit,
)

from mdstyle.core.linter.models import LintWarning, Severity
from mdstyle.core.linter.position import LineIndex

SOURCE = "mdstyle"
DOCS_URL = "https://github.com/mdstyle/mdstyle/blob/main/docs/{rule}.md"


@dataclass
class LspConfig:
    """Settings for the language server, read from initializationOptions."""
    config_path: Optional[str] = None
    enable_linting: bool = True
    enable_auto_fix: bool = False
    disable_rules: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "LspConfig":
        data = data or {}
        return cls(
            config_path=data.get("config_path") or data.get("configPath"),
            enable_linting=bool(data.get("enable_linting", data.get("enableLinting", True))),
            enable_auto_fix=bool(data.get("enable_auto_fix", data.get("enableAutoFix", False))),
            disable_rules=[str(r).upper() for r in data.get("disable_rules", data.get("disableRules", [])) or []],
        )


def rule_docs_url(rule_name: str) -> str:
    return DOCS_URL.format(rule=rule_name.lower())


def warning_to_diagnostic(warning: LintWarning) -> Diagnostic:
    """Convert a lint warning to an LSP diagnostic."""
    start = Position(
        line=max(warning.line - 1, 0),
        character=max(warning.column - 1, 0),
    )
    end = Position(
        line=max(warning.end_line - 1, 0),
        character=max(warning.end_column - 1, 0),
    )

    if warning.severity == Severity.ERROR:
        severity = DiagnosticSeverity.Error
    else:
        severity = DiagnosticSeverity.Warning

    code_description = None
    if warning.rule_name:
        code_description = CodeDescription(href=rule_docs_url(warning.rule_name))

    return Diagnostic(
        range=Range(start=start, end=end),
        severity=severity,
        code=warning.rule_name or None,
        code_description=code_description,
        source=SOURCE,
        message=warning.message,
    )


def byte_range_to_lsp_range(text: str, byte_range: range) -> Optional[Range]:
    """Convert a byte range to an LSP range, or None if it is unmappable."""
    positions = LineIndex(text).to_range(byte_range.start, byte_range.stop)
    if positions is None:
        return None

    start, end = positions
    return Range(
        start=Position(line=start.line, character=start.character),
        end=Position(line=end.line, character=end.character),
    )


def warning_to_code_action(
    warning: LintWarning,
    uri: str,
    document_text: str
) -> Optional[CodeAction]:
    """Quick-fix code action for a warning that carries a fix."""
    if warning.fix is None:
        return None

    lsp_range = byte_range_to_lsp_range(document_text, warning.fix.range)
    if lsp_range is None:
        return None

    edit = TextEdit(range=lsp_range, new_text=warning.fix.replacement)

    return CodeAction(
        title=f"Fix: {warning.message}",
        kind=CodeActionKind.QuickFix,
        diagnostics=[warning_to_diagnostic(warning)],
        edit=WorkspaceEdit(changes={uri: [edit]}),
        is_preferred=True,
    )
