"""lint_markdown / fix_markdown tool implementations."""
import logging
from pathlib import Path

from mdstyle.config import Config
from mdstyle.core.linter import engine
from mdstyle.core.linter.rules import build_rules

logger = logging.getLogger(__name__)


def _resolve(config: Config, path_str: str) -> Path | dict:
    path = Path(path_str)
    if not path.is_absolute():
        path = config.workspace_dir / path_str

    if not path.exists():
        return {"error": f"File not found: {path}"}

    if path.suffix not in ('.md', '.markdown'):
        return {"error": f"Expected .md file, got: {path.suffix}"}

    return path


def register(mcp, config: Config):
    """Register lint tools with MCP server."""

    @mcp.tool()
    async def lint_markdown(
        path: str,
        fix: bool = False,
        rules: list[str] | None = None
    ) -> dict:
        """
        Lint a Markdown file for style issues.

        Rules:
        - MD044: proper names should have the correct capitalization (fixable)
        - MD050: strong emphasis style should be consistent (fixable)

        Args:
            path: Path to the .md file (absolute or relative to the workspace dir)
            fix: Apply fixes and write back to file (default: False)
            rules: List of specific rule ids to run (default: all enabled rules)

        Returns:
            Dictionary with:
            - path (str): Path that was linted
            - total_issues (int): Total issues found
            - fixable (int): Issues with an automatic fix
            - errors / warnings (int): Counts by severity
            - issues (list): Individual issues with line and column
            - problems (list): Non-fatal problems (skipped fixes, bad config)
            - fixed (list): Rules whose fixes were applied (if fix=True)
        """
        resolved = _resolve(config, path)
        if isinstance(resolved, dict):
            return resolved

        logger.info(f"Linting {resolved} (fix={fix}, rules={rules})")

        try:
            rule_set = build_rules(config.rules, disabled=config.disable_rules, only=rules)
            report = engine.lint_file(resolved, fix=fix, rules=rule_set)

            logger.info(
                f"Lint complete: {report.total_issues} issues "
                f"({report.fixable} fixable)"
            )

            if fix and report.fixed:
                logger.info(f"Fixed: {', '.join(report.fixed)}")

            return report.to_dict()

        except Exception as e:
            logger.error(f"Lint failed: {e}", exc_info=True)
            return {"error": str(e)}

    @mcp.tool()
    async def fix_markdown(content: str, rules: list[str] | None = None) -> dict:
        """
        Fix Markdown text passed inline and return the result.

        Args:
            content: Markdown text
            rules: List of specific rule ids to run (default: all enabled rules)

        Returns:
            Dictionary with:
            - content (str): Fixed text
            - applied (int): Number of edits applied
            - problems (list): Fixes that were skipped
        """
        rule_set = build_rules(config.rules, disabled=config.disable_rules, only=rules)
        result = engine.fix_content(content, rule_set)
        return {
            "content": result.content,
            "applied": result.applied,
            "problems": [p.to_dict() for p in result.problems]
        }

    @mcp.tool()
    async def get_lint_rules() -> dict:
        """
        Get list of available lint rules with descriptions.

        Example response:
            {
                "rules": {
                    "MD044": "Proper names should have the correct capitalization",
                    "MD050": "Strong emphasis style should be consistent"
                }
            }
        """
        return {"rules": engine.get_available_rules()}
