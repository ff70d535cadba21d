"""
Packaged presets: named {rule → severity} bundles.

Pure data; selecting a preset is a configuration concern.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from signal_patterns.errors import ConfigurationError
from signal_patterns.models import Severity
from signal_patterns.rules import PLUGIN_NAME


@dataclass(frozen=True)
class Preset:
    name: str
    description: str
    rules: Mapping[str, Severity]

    def as_eslint_config(self) -> dict[str, Any]:
        """Plugin-qualified form, as an ESLint-style host configuration expects"""
        return {
            "plugins": [PLUGIN_NAME],
            "rules": {f"{PLUGIN_NAME}/{rule_id}": severity.value for rule_id, severity in self.rules.items()},
        }


PRESETS: dict[str, Preset] = {
    "recommended": Preset(
        name="recommended",
        description="Errors for subscribing reads and boolean coercion, warnings in JSX",
        rules={
            "no-signal-value-outside-hooks": Severity.ERROR,
            "no-signal-value-in-jsx": Severity.WARN,
            "no-implicit-boolean-signal": Severity.ERROR,
        },
    ),
    "strict": Preset(
        name="strict",
        description="Every rule is an error",
        rules={
            "no-signal-value-outside-hooks": Severity.ERROR,
            "no-signal-value-in-jsx": Severity.ERROR,
            "no-implicit-boolean-signal": Severity.ERROR,
        },
    ),
    "jsx-warnings-only": Preset(
        name="jsx-warnings-only",
        description="Only warn about .value reads in JSX",
        rules={
            "no-signal-value-outside-hooks": Severity.OFF,
            "no-signal-value-in-jsx": Severity.WARN,
            "no-implicit-boolean-signal": Severity.OFF,
        },
    ),
    "type-safety": Preset(
        name="type-safety",
        description="Only report boolean coercion of signals",
        rules={
            "no-signal-value-outside-hooks": Severity.OFF,
            "no-signal-value-in-jsx": Severity.OFF,
            "no-implicit-boolean-signal": Severity.ERROR,
        },
    ),
}

DEFAULT_PRESET = "recommended"


def get_preset(name: str) -> Preset:
    """
    Raises:
        ConfigurationError: If no preset has that name
    """
    preset = PRESETS.get(name)
    if preset is None:
        raise ConfigurationError(f"Unknown preset: {name}", known=sorted(PRESETS))
    return preset
