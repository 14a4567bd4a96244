"""MD050: strong emphasis style should be consistent."""
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from ..context import LintContext
from ..models import Fix, FixResult, LintWarning, Severity
from .base import Rule

logger = logging.getLogger(__name__)

# A strong span never crosses a line break
ASTERISK_PATTERN = re.compile(r'\*\*[^*\\\n]+\*\*')
UNDERSCORE_PATTERN = re.compile(r'__[^_\\\n]+__')


class StrongStyle(Enum):
    ASTERISK = "asterisk"
    UNDERSCORE = "underscore"
    CONSISTENT = "consistent"

    @property
    def marker(self) -> str:
        if self is StrongStyle.ASTERISK:
            return "**"
        if self is StrongStyle.UNDERSCORE:
            return "__"
        raise AssertionError("consistent style has no marker until it is resolved")


@dataclass(frozen=True)
class MD050Config:
    style: StrongStyle = StrongStyle.CONSISTENT

    @classmethod
    def from_dict(cls, data: dict) -> "MD050Config":
        style = data.get("style", StrongStyle.CONSISTENT.value)
        if isinstance(style, StrongStyle):
            return cls(style=style)
        try:
            return cls(style=StrongStyle(str(style).lower()))
        except ValueError:
            logger.warning(f"MD050: unknown style '{style}', using consistent")
            return cls()


def is_escaped(text: str, pos: int) -> bool:
    """True if ``text[pos]`` is preceded by an odd number of backslashes."""
    backslash_count = 0
    i = pos
    while i > 0 and text[i - 1] == '\\':
        backslash_count += 1
        i -= 1
    return backslash_count % 2 == 1


class StrongStyleRule(Rule):
    """
    Flag strong emphasis that does not use the configured marker.

    ``style: consistent`` picks whichever of ``**`` and ``__`` appears first
    outside code; with neither present, ``default_style`` is used.
    """

    name = "MD050"
    description = "Strong emphasis style should be consistent"

    def __init__(
        self,
        style: StrongStyle = StrongStyle.CONSISTENT,
        default_style: StrongStyle = StrongStyle.ASTERISK
    ):
        super().__init__()
        if default_style is StrongStyle.CONSISTENT:
            raise ValueError("default_style must be asterisk or underscore")
        self.config = MD050Config(style=style)
        self.default_style = default_style

    @classmethod
    def default_config(cls) -> dict[str, Any]:
        return {"style": StrongStyle.CONSISTENT.value}

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "StrongStyleRule":
        return cls(style=MD050Config.from_dict(config).style)

    def detect_style(self, ctx: LintContext) -> Optional[StrongStyle]:
        """Style of the first strong span outside code, or None if there is none."""
        content = ctx.content
        index = ctx.line_index

        def first_outside_code(pattern: re.Pattern) -> Optional[int]:
            for m in pattern.finditer(content):
                start_byte = index.char_to_byte(m.start())
                if not ctx.is_in_code_block_or_span(start_byte):
                    return start_byte
            return None

        first_asterisk = first_outside_code(ASTERISK_PATTERN)
        first_underscore = first_outside_code(UNDERSCORE_PATTERN)

        if first_asterisk is not None and first_underscore is not None:
            if first_asterisk < first_underscore:
                return StrongStyle.ASTERISK
            return StrongStyle.UNDERSCORE
        if first_asterisk is not None:
            return StrongStyle.ASTERISK
        if first_underscore is not None:
            return StrongStyle.UNDERSCORE
        return None

    def target_style(self, ctx: LintContext) -> StrongStyle:
        if self.config.style is StrongStyle.CONSISTENT:
            return self.detect_style(ctx) or self.default_style
        return self.config.style

    def _pattern_for(self, target: StrongStyle) -> re.Pattern:
        """Pattern of the marker that violates ``target``."""
        if target is StrongStyle.ASTERISK:
            return UNDERSCORE_PATTERN
        if target is StrongStyle.UNDERSCORE:
            return ASTERISK_PATTERN
        raise AssertionError("strong style must be resolved before matching")

    def _find_matches(self, ctx: LintContext, target: StrongStyle) -> list[re.Match]:
        content = ctx.content
        matches = []
        for m in self._pattern_for(target).finditer(content):
            if ctx.is_in_code_block_or_span(ctx.line_index.char_to_byte(m.start())):
                continue
            if is_escaped(content, m.start()):
                continue
            matches.append(m)
        return matches

    def check(self, ctx: LintContext) -> list[LintWarning]:
        target = self.target_style(ctx)
        index = ctx.line_index
        other = StrongStyle.UNDERSCORE if target is StrongStyle.ASTERISK else StrongStyle.ASTERISK
        message = f"Strong emphasis should use {target.marker} instead of {other.marker}"

        warnings = []
        for m in self._find_matches(ctx, target):
            start_byte = index.char_to_byte(m.start())
            end_byte = start_byte + len(m.group().encode("utf-8"))
            start, end = index.to_range(start_byte, end_byte)
            inner = m.group()[2:-2]

            warnings.append(LintWarning(
                rule_name=self.name,
                line=start.line + 1,
                column=start.character + 1,
                end_line=end.line + 1,
                end_column=end.character + 1,
                message=message,
                severity=Severity.WARNING,
                fix=Fix(
                    range=range(start_byte, end_byte),
                    replacement=f"{target.marker}{inner}{target.marker}"
                )
            ))

        return warnings

    def fix_report(self, ctx: LintContext) -> FixResult:
        target = self.target_style(ctx)
        content = ctx.content
        matches = self._find_matches(ctx, target)
        if not matches:
            return FixResult(content=content)

        # Rewrap from the last match back to the first so earlier offsets hold
        parts = []
        cursor = len(content)
        for m in reversed(matches):
            inner = content[m.start() + 2:m.end() - 2]
            parts.append(content[m.end():cursor])
            parts.append(f"{target.marker}{inner}{target.marker}")
            cursor = m.start()
        parts.append(content[:cursor])

        return FixResult(content="".join(reversed(parts)), applied=len(matches))
