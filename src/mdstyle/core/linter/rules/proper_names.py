"""MD044: proper names should have the correct capitalization."""
import logging
import re
import threading
from dataclasses import dataclass
from typing import Any, Optional

from ..cache import ViolationCache, content_hash
from ..context import LintContext
from ..models import Fix, FixResult, LintProblem, LintWarning, Severity
from .base import Rule, apply_edits

logger = logging.getLogger(__name__)

# A name only matches as a whole word
WORD_BEFORE = r'(?<![a-zA-Z0-9])'
WORD_AFTER = r'(?![a-zA-Z0-9])'


@dataclass(frozen=True)
class MD044Config:
    names: tuple[str, ...] = ()
    code_blocks: bool = True  # True: skip code blocks and spans

    @classmethod
    def from_dict(cls, data: dict) -> "MD044Config":
        names = data.get("names") or ()
        if isinstance(names, str):
            names = (names,)
        return cls(
            names=tuple(str(n) for n in names),
            code_blocks=bool(data.get("code_blocks", True))
        )


class ProperNames(Rule):
    """
    Flag proper names written with the wrong capitalization.

    With ``names: ["JavaScript", "Node.js"]``, "javascript", "Javascript" and
    "nodejs" are flagged and fixed to the configured spelling. Matches are
    whole words only ("javascripter" is left alone).
    """

    name = "MD044"
    description = "Proper names should have the correct capitalization"

    def __init__(self, names: Optional[list[str]] = None, code_blocks: bool = True):
        super().__init__()
        self.config = MD044Config(names=tuple(names or ()), code_blocks=code_blocks)
        self._regex_lock = threading.Lock()
        self._combined_regex: Optional[re.Pattern] = None
        self.cache = ViolationCache()
        self.compile_combined_regex()

    @classmethod
    def default_config(cls) -> dict[str, Any]:
        return {"names": [], "code_blocks": True}

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "ProperNames":
        parsed = MD044Config.from_dict(config)
        return cls(names=list(parsed.names), code_blocks=parsed.code_blocks)

    def compile_combined_regex(self) -> None:
        """Compile the combined pattern and swap it in."""
        pattern = self.create_combined_pattern()
        if pattern is None:
            return

        try:
            regex = re.compile(pattern, re.IGNORECASE)
        except re.error as e:
            message = f"Failed to compile combined name pattern: {e}"
            logger.error(f"{self.name}: {message}")
            self.problems.append(LintProblem(self.name, message))
            return

        with self._regex_lock:
            self._combined_regex = regex

    def create_combined_pattern(self) -> Optional[str]:
        """One alternation covering every name and its dot-stripped form."""
        if not self.config.names:
            return None

        patterns = []
        for name in self.config.names:
            lower_name = name.lower()
            lower_no_dots = lower_name.replace('.', '')
            if lower_name == lower_no_dots:
                patterns.append(re.escape(lower_name))
            else:
                patterns.append(
                    f"(?:{re.escape(lower_name)}|{re.escape(lower_no_dots)})"
                )

        return f"{WORD_BEFORE}({'|'.join(patterns)}){WORD_AFTER}"

    def get_proper_name_for(self, found_name: str) -> Optional[str]:
        """Configured spelling for a case-insensitive match, first name wins."""
        found_lower = found_name.lower()
        for name in self.config.names:
            lower_name = name.lower()
            if found_lower == lower_name or found_lower == lower_name.replace('.', ''):
                return name
        return None

    def _might_contain_names(self, text_lower: str) -> bool:
        for name in self.config.names:
            lower_name = name.lower()
            if lower_name in text_lower or lower_name.replace('.', '') in text_lower:
                return True
        return False

    def find_name_violations(self, ctx: LintContext) -> tuple[LintWarning, ...]:
        content = ctx.content
        if not self.config.names or not content:
            return ()

        # Cheap probe before hashing or scanning
        if not self._might_contain_names(content.lower()):
            return ()

        key = content_hash(content)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        with self._regex_lock:
            combined_regex = self._combined_regex
        if combined_regex is None:
            return ()

        index = ctx.line_index
        violations: list[LintWarning] = []

        for line_num, line in enumerate(index.lines):
            stripped = line.lstrip()
            if stripped.startswith("```") or stripped.startswith("~~~"):
                continue

            if not self._might_contain_names(line.lower()):
                continue

            # Code is excluded per match: a line may open with a span and
            # continue as prose
            for match in combined_regex.finditer(line):
                found_name = match.group()
                proper_name = self.get_proper_name_for(found_name)
                if proper_name is None or found_name == proper_name:
                    continue

                fix_range = index.line_col_to_byte_range(
                    line_num + 1, match.start() + 1, len(found_name)
                )
                if fix_range is None:
                    continue
                if self.config.code_blocks and ctx.is_in_code_block_or_span(fix_range.start):
                    continue

                violations.append(LintWarning(
                    rule_name=self.name,
                    line=line_num + 1,
                    column=match.start() + 1,
                    end_line=line_num + 1,
                    end_column=match.end() + 1,
                    message=f"Proper name '{found_name}' should be '{proper_name}'",
                    severity=Severity.WARNING,
                    fix=Fix(range=fix_range, replacement=proper_name)
                ))

        return self.cache.store(key, violations)

    def check(self, ctx: LintContext) -> list[LintWarning]:
        return list(self.find_name_violations(ctx))

    def fix_report(self, ctx: LintContext) -> FixResult:
        # Last line and column first, so earlier edits never shift later ones
        violations = sorted(
            self.find_name_violations(ctx),
            key=lambda w: (w.line, w.column),
            reverse=True
        )
        return apply_edits(ctx.content, violations, self.name)
