"""
Rules

- no-signal-value-outside-hooks: `.value` read outside tracked contexts (fixable)
- no-signal-value-in-jsx: `.value` read inside JSX
- no-implicit-boolean-signal: signal container used as a boolean / nullish operand
"""

from signal_patterns.errors import ConfigurationError
from signal_patterns.rules.base import NoOptions, Rule, RuleContext, RuleMeta
from signal_patterns.rules.no_implicit_boolean_signal import (
    NoImplicitBooleanSignal,
    NoImplicitBooleanSignalOptions,
)
from signal_patterns.rules.no_signal_value_in_jsx import NoSignalValueInJSX
from signal_patterns.rules.no_signal_value_outside_hooks import NoSignalValueOutsideHooks

PLUGIN_NAME = "preact-signal-patterns"

RULES: dict[str, type[Rule]] = {
    rule.meta.rule_id: rule
    for rule in (
        NoSignalValueOutsideHooks,
        NoSignalValueInJSX,
        NoImplicitBooleanSignal,
    )
}


def normalize_rule_id(rule_id: str) -> str:
    """Accept both `rule-id` and the plugin-qualified `preact-signal-patterns/rule-id`"""
    prefix = f"{PLUGIN_NAME}/"
    return rule_id[len(prefix) :] if rule_id.startswith(prefix) else rule_id


def get_rule(rule_id: str) -> type[Rule]:
    """
    Look up a rule class by id.

    Raises:
        ConfigurationError: If no rule has that id
    """
    rule = RULES.get(normalize_rule_id(rule_id))
    if rule is None:
        raise ConfigurationError(f"Unknown rule: {rule_id}", known=sorted(RULES))
    return rule


__all__ = [
    "PLUGIN_NAME",
    "RULES",
    "get_rule",
    "normalize_rule_id",
    "Rule",
    "RuleContext",
    "RuleMeta",
    "NoOptions",
    "NoSignalValueOutsideHooks",
    "NoSignalValueInJSX",
    "NoImplicitBooleanSignal",
    "NoImplicitBooleanSignalOptions",
]
