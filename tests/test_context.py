"""Tests for code-region detection."""
from mdstyle.core.linter.context import CodeRegions, LintContext


def _offset(text: str, needle: str) -> int:
    return len(text[:text.index(needle)].encode("utf-8"))


def test_fenced_block_is_code():
    text = "intro\n```js\nconst x = 1;\n```\nafter"
    ctx = LintContext(text)
    assert ctx.is_in_code_block_or_span(_offset(text, "const"))
    assert ctx.is_in_code_block_or_span(_offset(text, "```js"))
    assert not ctx.is_in_code_block_or_span(_offset(text, "intro"))
    assert not ctx.is_in_code_block_or_span(_offset(text, "after"))


def test_tilde_fence_needs_matching_close():
    text = "~~~\n```\nstill code\n~~~\nprose"
    ctx = LintContext(text)
    assert ctx.is_in_code_block_or_span(_offset(text, "still"))
    assert not ctx.is_in_code_block_or_span(_offset(text, "prose"))


def test_unclosed_fence_runs_to_end():
    text = "text\n```\ncode forever"
    ctx = LintContext(text)
    assert ctx.is_in_code_block_or_span(_offset(text, "forever"))


def test_inline_code_span():
    text = "use `javascript` and javascript"
    ctx = LintContext(text)
    assert ctx.is_in_code_block_or_span(text.index("`javascript`") + 1)
    assert not ctx.is_in_code_block_or_span(text.rindex("javascript"))


def test_double_backtick_span_with_multibyte_prefix():
    text = "café ``a ` b`` end"
    ctx = LintContext(text)
    assert ctx.is_in_code_block_or_span(_offset(text, "a `"))
    assert not ctx.is_in_code_block_or_span(_offset(text, "end"))


def test_custom_oracle_is_used():
    class Everything:
        def is_in_code_block_or_span(self, byte_offset: int) -> bool:
            return True

    ctx = LintContext("plain", code_regions=Everything())
    assert ctx.is_in_code_block_or_span(0)


def test_empty_regions():
    regions = CodeRegions([])
    assert not regions.is_in_code_block_or_span(0)
