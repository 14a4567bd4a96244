"""Lint rules for Markdown style."""
import logging
from typing import Iterable, Optional

from .base import Rule, apply_edits
from .proper_names import MD044Config, ProperNames
from .strong_style import MD050Config, StrongStyle, StrongStyleRule

logger = logging.getLogger(__name__)

# Registry of all available rules, keyed by rule identifier
RULES: dict[str, type[Rule]] = {
    "MD044": ProperNames,
    "MD050": StrongStyleRule,
}


def build_rules(
    rule_configs: Optional[dict[str, dict]] = None,
    disabled: Iterable[str] = (),
    only: Optional[Iterable[str]] = None
) -> list[Rule]:
    """
    Instantiate rules from their configuration sections.

    Args:
        rule_configs: Rule identifier -> config dict (missing sections use defaults)
        disabled: Rule identifiers to leave out
        only: If non-empty, build just these rules

    Returns:
        Rules in registry order
    """
    rule_configs = {k.upper(): v for k, v in (rule_configs or {}).items()}
    disabled_set = {name.upper() for name in disabled}
    # An empty selection means all rules
    wanted = {name.upper() for name in only or ()}

    if wanted:
        for name in sorted(wanted - RULES.keys()):
            logger.warning(f"Unknown rule: {name}")

    rules = []
    for name, rule_cls in RULES.items():
        if name in disabled_set:
            continue
        if wanted and name not in wanted:
            continue

        config = dict(rule_cls.default_config())
        config.update(rule_configs.get(name) or {})
        rules.append(rule_cls.from_config(config))

    return rules


__all__ = [
    "RULES",
    "Rule",
    "apply_edits",
    "build_rules",
    "ProperNames",
    "MD044Config",
    "StrongStyleRule",
    "StrongStyle",
    "MD050Config",
]
