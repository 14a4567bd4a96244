"""Tests for the lint engine and the shared fix pass."""
from pathlib import Path

from mdstyle.core.linter import engine
from mdstyle.core.linter.context import LintContext
from mdstyle.core.linter.models import Fix, LintWarning, Severity
from mdstyle.core.linter.rules import (
    RULES,
    ProperNames,
    StrongStyle,
    StrongStyleRule,
    apply_edits,
    build_rules,
)
from mdstyle.core.linter.rules.base import Rule


def _warning(start: int, end: int, replacement: str, line: int = 1, column: int = 1) -> LintWarning:
    return LintWarning(
        rule_name="TEST",
        line=line,
        column=column,
        end_line=line,
        end_column=column + 1,
        message="test",
        fix=Fix(range=range(start, end), replacement=replacement)
    )


class ExplodingRule(Rule):
    name = "BOOM"
    description = "Always fails"

    def check(self, ctx):
        raise RuntimeError("kaboom")

    @classmethod
    def default_config(cls):
        return {}

    @classmethod
    def from_config(cls, config):
        return cls()


# ---------------------------------------------------------------------------
# apply_edits
# ---------------------------------------------------------------------------


def test_apply_edits_in_any_input_order():
    text = "aaa bbb ccc"
    warnings = [_warning(0, 3, "A"), _warning(8, 11, "CCCCC"), _warning(4, 7, "")]
    result = apply_edits(text, warnings)

    assert result.content == "A  CCCCC"
    assert result.applied == 3


def test_apply_edits_skips_split_character_and_continues():
    text = "é and x"
    warnings = [_warning(1, 2, "?"), _warning(7, 8, "y")]
    result = apply_edits(text, warnings)

    assert result.content == "é and y"
    assert result.applied == 1
    assert len(result.problems) == 1
    assert "invalid byte range [1..2]" in result.problems[0].message


def test_apply_edits_skips_out_of_bounds_and_overlap():
    text = "abcdef"
    warnings = [_warning(2, 5, "X"), _warning(4, 6, "Y"), _warning(3, 99, "Z")]
    result = apply_edits(text, warnings)

    assert result.content == "abcdY"
    assert result.applied == 1
    assert len(result.problems) == 2


def test_apply_edits_no_fixes_returns_same_object():
    text = "unchanged"
    plain = LintWarning("TEST", 1, 1, 1, 2, "no fix", Severity.WARNING, None)
    assert apply_edits(text, [plain]).content is text


def test_apply_fixes_on_stale_warnings_does_not_corrupt():
    text = "javascript"
    warnings = ProperNames(names=["JavaScript"]).check(LintContext(text))
    result = engine.apply_fixes("js", warnings)

    assert result.content == "js"
    assert result.applied == 0
    assert result.problems


# ---------------------------------------------------------------------------
# lint_content / fix_content
# ---------------------------------------------------------------------------


def test_lint_content_runs_all_rules_sorted():
    rules = [StrongStyleRule(), ProperNames(names=["GitHub"])]
    text = "**a** __b__ github\ngithub"
    report = engine.lint_content(text, "doc.md", rules=rules)

    assert report.path == "doc.md"
    assert report.total_issues == 3
    assert report.fixable == 3
    assert report.warning_count == 3
    assert [(w.line, w.column, w.rule_name) for w in report.warnings] == [
        (1, 7, "MD050"),
        (1, 13, "MD044"),
        (2, 1, "MD044"),
    ]


def test_lint_content_survives_failing_rule():
    rules = [ExplodingRule(), ProperNames(names=["GitHub"])]
    report = engine.lint_content("github", rules=rules)

    assert report.total_issues == 1
    assert report.problems[0].rule_name == "BOOM"


def test_fix_content_chains_rules():
    rules = [StrongStyleRule(style=StrongStyle.UNDERSCORE), ProperNames(names=["GitHub"])]
    result = engine.fix_content("**github** and github", rules)

    assert result.content == "__GitHub__ and GitHub"
    assert result.applied == 3


def test_fix_content_identity():
    text = "Nothing **here** to fix.\n"
    assert engine.fix_content(text, build_rules()).content is text


def test_lint_file_fix_writes_back(tmp_path: Path):
    path = tmp_path / "doc.md"
    path.write_text("use javascript and __bold__\n", encoding="utf-8")
    rules = build_rules({"MD044": {"names": ["JavaScript"]}, "MD050": {"style": "asterisk"}})

    report = engine.lint_file(path, fix=True, rules=rules)

    assert report.total_issues == 2
    assert report.fixed == ["MD044", "MD050"]
    assert path.read_text(encoding="utf-8") == "use JavaScript and **bold**\n"


def test_lint_file_without_fix_leaves_file(tmp_path: Path):
    path = tmp_path / "doc.md"
    path.write_text("__a__ **b**", encoding="utf-8")

    report = engine.lint_file(path)

    assert report.total_issues == 1
    assert report.fixed == []
    assert path.read_text(encoding="utf-8") == "__a__ **b**"


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


def test_build_rules_defaults_and_filters():
    assert [r.name for r in build_rules()] == ["MD044", "MD050"]
    assert [r.name for r in build_rules(disabled=["md044"])] == ["MD050"]
    assert [r.name for r in build_rules(only=["MD044", "MD999"])] == ["MD044"]


def test_build_rules_empty_selection_means_all():
    assert [r.name for r in build_rules(only=[])] == ["MD044", "MD050"]
    assert [r.name for r in build_rules(only=[], disabled=["MD050"])] == ["MD044"]


def test_build_rules_applies_config():
    rules = build_rules({"md044": {"names": ["Rust"]}})
    assert rules[0].config.names == ("Rust",)


def test_available_rules():
    assert engine.get_available_rules() == {
        name: cls.description for name, cls in RULES.items()
    }
    assert set(engine.get_available_rules()) == {"MD044", "MD050"}
