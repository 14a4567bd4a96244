"""mdstyle language server.

Publishes diagnostics for open Markdown documents and offers quick fixes.
Analysis runs on pygls worker threads; rules are safe to share across them.
"""
import logging
import sys
from pathlib import Path
from typing import Optional

from lsprotocol.types import (
    INITIALIZE,
    TEXT_DOCUMENT_CODE_ACTION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DID_SAVE,
    TEXT_DOCUMENT_FORMATTING,
    TEXT_DOCUMENT_WILL_SAVE_WAIT_UNTIL,
    CodeAction,
    CodeActionParams,
    Diagnostic,
    DocumentFormattingParams,
    InitializeParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextEdit,
    WillSaveTextDocumentParams,
)
from pygls.lsp.server import LanguageServer

from mdstyle import __version__
from mdstyle.config import Config, ConfigError
from mdstyle.core.linter.engine import fix_content, lint_content
from mdstyle.core.linter.models import LintWarning
from mdstyle.core.linter.rules import Rule, build_rules
from mdstyle.lsp.types import LspConfig, warning_to_code_action, warning_to_diagnostic

logger = logging.getLogger(__name__)


class MdstyleLanguageServer(LanguageServer):
    """Language server holding the rule set built from the client's settings."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.lsp_config = LspConfig()
        self.rules: list[Rule] = build_rules()

    def configure(self, lsp_config: LspConfig) -> None:
        """Rebuild the rules from new settings."""
        self.lsp_config = lsp_config
        config_path = Path(lsp_config.config_path) if lsp_config.config_path else None

        try:
            config = Config.load(config_path)
        except ConfigError as e:
            logger.error(f"Ignoring config: {e}")
            config = Config()

        disabled = set(config.disable_rules) | set(lsp_config.disable_rules)
        self.rules = build_rules(config.rules, disabled=disabled)
        logger.info(f"Rules enabled: {', '.join(r.name for r in self.rules) or 'none'}")


def analyze_text(text: str, rules: list[Rule]) -> list[LintWarning]:
    return lint_content(text, rules=rules).warnings


def diagnostics_for_text(text: str, rules: list[Rule]) -> list[Diagnostic]:
    return [warning_to_diagnostic(w) for w in analyze_text(text, rules)]


def _overlaps(a: Range, b: Range) -> bool:
    a_start = (a.start.line, a.start.character)
    a_end = (a.end.line, a.end.character)
    b_start = (b.start.line, b.start.character)
    b_end = (b.end.line, b.end.character)
    return a_start <= b_end and b_start <= a_end


def code_actions_for_text(
    uri: str,
    text: str,
    rules: list[Rule],
    requested: Optional[Range] = None
) -> list[CodeAction]:
    """Quick fixes for warnings whose range touches ``requested`` (all if None)."""
    actions = []
    for warning in analyze_text(text, rules):
        action = warning_to_code_action(warning, uri, text)
        if action is None:
            continue
        if requested is not None and not _overlaps(action.diagnostics[0].range, requested):
            continue
        actions.append(action)
    return actions


def full_document_edits(text: str, rules: list[Rule]) -> list[TextEdit]:
    """One edit replacing the whole document with its fixed form, or none."""
    result = fix_content(text, rules)
    for problem in result.problems:
        logger.warning(f"{problem.rule_name}: {problem.message}")

    if result.content == text:
        return []

    lines = text.split("\n")
    end = Position(line=len(lines) - 1, character=len(lines[-1]))
    return [TextEdit(range=Range(start=Position(line=0, character=0), end=end), new_text=result.content)]


server = MdstyleLanguageServer("mdstyle", __version__)


def _publish(ls: MdstyleLanguageServer, uri: str) -> None:
    document = ls.workspace.get_text_document(uri)
    diagnostics = []
    if ls.lsp_config.enable_linting:
        diagnostics = diagnostics_for_text(document.source, ls.rules)
    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics, version=document.version)
    )


@server.feature(INITIALIZE)
def initialize(ls: MdstyleLanguageServer, params: InitializeParams) -> None:
    ls.configure(LspConfig.from_dict(params.initialization_options))


@server.feature(TEXT_DOCUMENT_DID_OPEN)
@server.thread()
def did_open(ls: MdstyleLanguageServer, params) -> None:
    _publish(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
@server.thread()
def did_change(ls: MdstyleLanguageServer, params) -> None:
    _publish(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_SAVE)
@server.thread()
def did_save(ls: MdstyleLanguageServer, params) -> None:
    _publish(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(ls: MdstyleLanguageServer, params) -> None:
    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=params.text_document.uri, diagnostics=[])
    )


@server.feature(TEXT_DOCUMENT_CODE_ACTION)
@server.thread()
def code_action(ls: MdstyleLanguageServer, params: CodeActionParams) -> list[CodeAction]:
    uri = params.text_document.uri
    document = ls.workspace.get_text_document(uri)
    return code_actions_for_text(uri, document.source, ls.rules, params.range)


@server.feature(TEXT_DOCUMENT_FORMATTING)
@server.thread()
def formatting(ls: MdstyleLanguageServer, params: DocumentFormattingParams) -> list[TextEdit]:
    document = ls.workspace.get_text_document(params.text_document.uri)
    return full_document_edits(document.source, ls.rules)


@server.feature(TEXT_DOCUMENT_WILL_SAVE_WAIT_UNTIL)
def will_save_wait_until(ls: MdstyleLanguageServer, params: WillSaveTextDocumentParams) -> list[TextEdit]:
    if not ls.lsp_config.enable_auto_fix:
        return []
    document = ls.workspace.get_text_document(params.text_document.uri)
    return full_document_edits(document.source, ls.rules)


def main():
    """Main entry point for the language server."""
    # stdout carries JSON-RPC, so logs go to stderr
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)]
    )
    logger.info(f"mdstyle language server v{__version__} starting on stdio...")
    server.start_io()


if __name__ == "__main__":
    main()
