"""Per-document lint context: content, line index and code-region lookup."""
import re
from bisect import bisect_right
from typing import Optional, Protocol

from .position import LineIndex

FENCE_PATTERN = re.compile(r'^ {0,3}(`{3,}|~{3,})')
CODE_SPAN_PATTERN = re.compile(r'(?<!`)(`+)(?!`)(.+?)(?<!`)\1(?!`)')


class CodeRegionOracle(Protocol):
    """Answers whether a byte offset falls inside fenced or inline code."""

    def is_in_code_block_or_span(self, byte_offset: int) -> bool:
        ...


class CodeRegions:
    """
    Sorted, non-overlapping byte ranges of code blocks and code spans.

    A lightweight classifier: fenced blocks (``` and ~~~, closed by a fence of
    the same character that is at least as long) and single-line code spans.
    Indented code blocks and HTML blocks are not recognised.
    """

    def __init__(self, regions: list[tuple[int, int]]):
        self.regions = sorted(regions)
        self._starts = [start for start, _ in self.regions]

    @classmethod
    def from_content(cls, content: str, index: Optional[LineIndex] = None) -> "CodeRegions":
        index = index or LineIndex(content)
        regions: list[tuple[int, int]] = []

        fence: Optional[str] = None
        fence_start = 0

        for line_num, line in enumerate(index.lines):
            line_start = index.byte_starts[line_num]
            line_end = line_start + len(line.encode("utf-8"))
            match = FENCE_PATTERN.match(line)

            if fence is None:
                if match:
                    fence = match.group(1)
                    fence_start = line_start
                    continue

                for span in CODE_SPAN_PATTERN.finditer(line):
                    regions.append((
                        line_start + len(line[:span.start()].encode("utf-8")),
                        line_start + len(line[:span.end()].encode("utf-8"))
                    ))
            elif (
                match
                and match.group(1)[0] == fence[0]
                and len(match.group(1)) >= len(fence)
                and not line[match.end():].strip()
            ):
                regions.append((fence_start, line_end))
                fence = None

        # Unclosed fence runs to the end of the document
        if fence is not None:
            regions.append((fence_start, index.byte_length))

        return cls(regions)

    def is_in_code_block_or_span(self, byte_offset: int) -> bool:
        i = bisect_right(self._starts, byte_offset) - 1
        if i < 0:
            return False
        start, end = self.regions[i]
        return start <= byte_offset < end


class LintContext:
    """
    Everything a rule needs to inspect one document.

    Built once per document before any rule runs. ``code_regions`` may be
    supplied by the caller; otherwise it is derived from the content.
    """

    def __init__(
        self,
        content: str,
        code_regions: Optional[CodeRegionOracle] = None
    ):
        self.content = content
        self.line_index = LineIndex(content)
        if code_regions is None:
            code_regions = CodeRegions.from_content(content, self.line_index)
        self.code_regions = code_regions

    def is_in_code_block_or_span(self, byte_offset: int) -> bool:
        return self.code_regions.is_in_code_block_or_span(byte_offset)
