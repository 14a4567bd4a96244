"""Rule contract and the shared fix-application pass."""
import logging
from abc import ABC, abstractmethod
from typing import Any, Iterable

from ..context import LintContext
from ..models import FixResult, LintProblem, LintWarning
from ..position import is_char_boundary

logger = logging.getLogger(__name__)


class Rule(ABC):
    """
    A single style rule.

    ``check`` and ``fix`` are deterministic for a given content, config and
    code-region oracle. Instances may be shared across threads.
    """

    name: str = ""
    description: str = ""

    def __init__(self):
        # Problems found while building the rule (e.g. a pattern that failed to compile)
        self.problems: list[LintProblem] = []

    @abstractmethod
    def check(self, ctx: LintContext) -> list[LintWarning]:
        """Return warnings sorted by line, then column."""

    def fix_report(self, ctx: LintContext) -> FixResult:
        """Recompute warnings and apply their fixes, reporting skipped ones."""
        return apply_edits(ctx.content, self.check(ctx), self.name)

    def fix(self, ctx: LintContext) -> str:
        return self.fix_report(ctx).content

    @classmethod
    @abstractmethod
    def default_config(cls) -> dict[str, Any]:
        """Default configuration section for this rule."""

    @classmethod
    @abstractmethod
    def from_config(cls, config: dict[str, Any]) -> "Rule":
        """Build the rule from its configuration section."""


def apply_edits(
    content: str,
    warnings: Iterable[LintWarning],
    rule_name: str = "<fix>"
) -> FixResult:
    """
    Apply the fixes carried by ``warnings`` to ``content``.

    Edits are applied from the highest byte offset to the lowest so that no
    pending edit needs its offsets adjusted. An edit that is out of bounds,
    splits a multi-byte character, or overlaps an edit already applied is
    skipped and reported; the rest still go through.

    Returns:
        FixResult whose ``content`` is the original object when nothing applied
    """
    fixes = [w for w in warnings if w.fix is not None]
    result = FixResult(content=content)
    if not fixes:
        return result

    data = content.encode("utf-8")
    buffer = bytearray(data)
    limit = len(data)

    fixes.sort(key=lambda w: (w.fix.range.start, w.fix.range.stop), reverse=True)

    for warning in fixes:
        start = warning.fix.range.start
        end = warning.fix.range.stop

        if (
            start > end
            or end > limit
            or not is_char_boundary(data, start)
            or not is_char_boundary(data, end)
        ):
            message = (
                f"Skipping fix at {warning.line}:{warning.column} due to invalid "
                f"byte range [{start}..{end}], content length {len(data)}"
            )
            logger.warning(f"{warning.rule_name or rule_name}: {message}")
            result.problems.append(LintProblem(warning.rule_name or rule_name, message))
            continue

        buffer[start:end] = warning.fix.replacement.encode("utf-8")
        limit = start
        result.applied += 1

    if result.applied:
        result.content = buffer.decode("utf-8")
    return result
