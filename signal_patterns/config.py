"""
Configuration

- LintConfig: which rules run, at which severity, with which options
- load_config / discover_config: YAML config files (.signal-patterns.yaml)
- Settings: process-level settings from SIGNAL_PATTERNS_* environment variables

Example (.signal-patterns.yaml):

    extends: recommended
    namingConvention: true
    rules:
      no-signal-value-in-jsx: off
      no-implicit-boolean-signal: [error, {allowNullishCoalesce: false}]

Every problem is reported as ConfigurationError before any file is analysed.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from signal_patterns.errors import ConfigurationError
from signal_patterns.models import Severity
from signal_patterns.presets import DEFAULT_PRESET, PRESETS
from signal_patterns.rules import RULES, Rule, get_rule, normalize_rule_id

CONFIG_FILENAMES = (".signal-patterns.yaml", ".signal-patterns.yml")

# ESLint numeric severities
SEVERITY_ALIASES: dict[Any, str] = {0: "off", 1: "warn", 2: "error", "warning": "warn"}


class RuleSetting(BaseModel):
    """
    Severity plus options for one rule.

    Accepted input shapes:
        "error" | 2 | ["error"] | ["error", {...options}] | {"severity": ..., "options": {...}}
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    severity: Severity
    options: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _coerce_shorthand(cls, value: Any) -> Any:
        if isinstance(value, (str, int)):
            return {"severity": value}
        if isinstance(value, (list, tuple)):
            if not 1 <= len(value) <= 2:
                raise ValueError("expected [severity] or [severity, options]")
            return {"severity": value[0], "options": value[1] if len(value) == 2 else {}}
        return value

    @field_validator("severity", mode="before")
    @classmethod
    def _severity_alias(cls, value: Any) -> Any:
        # YAML reads a bare `off` as False
        if value is False:
            return "off"
        if isinstance(value, bool):
            raise ValueError(f"invalid severity: {value!r}")
        if isinstance(value, str):
            value = value.lower()
        return SEVERITY_ALIASES.get(value, value)


class LintConfig(BaseModel):
    """
    Attributes:
        extends: Preset supplying default severities (None = start with every rule off)
        rules: Per-rule overrides, keyed by rule id (plugin prefix allowed)
        naming_convention: Treat names ending in "$" as signals when origin is unknown
        max_fix_passes: Upper bound on lint → fix → lint iterations
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    extends: str | None = DEFAULT_PRESET
    rules: dict[str, RuleSetting] = Field(default_factory=dict)
    naming_convention: bool = Field(default=True, alias="namingConvention")
    max_fix_passes: int = Field(default=10, ge=1, le=100, alias="maxFixPasses")

    @field_validator("extends")
    @classmethod
    def _known_preset(cls, value: str | None) -> str | None:
        if value is not None and value not in PRESETS:
            raise ValueError(f"unknown preset {value!r} (known: {', '.join(sorted(PRESETS))})")
        return value

    @field_validator("rules")
    @classmethod
    def _known_rules(cls, value: dict[str, RuleSetting]) -> dict[str, RuleSetting]:
        normalized: dict[str, RuleSetting] = {}
        for rule_id, setting in value.items():
            try:
                rule = get_rule(rule_id)
                rule.parse_options(setting.options)
            except ConfigurationError as e:
                raise ValueError(e.message) from e
            normalized[rule.meta.rule_id] = setting
        return normalized

    @classmethod
    def from_mapping(cls, data: dict[str, Any] | None) -> "LintConfig":
        """
        Validate a raw mapping (parsed YAML, CLI overrides, ...).

        Raises:
            ConfigurationError: If the mapping does not match the schema
        """
        try:
            return cls.model_validate(data or {})
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid configuration: {_format_errors(e)}",
                errors=e.errors(include_url=False),
            ) from e

    @classmethod
    def from_preset(cls, name: str) -> "LintConfig":
        return cls.from_mapping({"extends": name})

    def effective_rules(self) -> dict[str, RuleSetting]:
        """Preset severities overlaid with explicit rule settings, in rule registry order"""
        base = PRESETS[self.extends].rules if self.extends is not None else {}
        result: dict[str, RuleSetting] = {}
        for rule_id in RULES:
            if rule_id in self.rules:
                result[rule_id] = self.rules[rule_id]
            else:
                result[rule_id] = RuleSetting(severity=base.get(rule_id, Severity.OFF))
        return result

    def build_rules(self) -> list[tuple[Rule, Severity]]:
        """Instantiate every enabled rule with its validated options"""
        enabled: list[tuple[Rule, Severity]] = []
        for rule_id, setting in self.effective_rules().items():
            if setting.severity == Severity.OFF:
                continue
            enabled.append((RULES[rule_id](setting.options), setting.severity))
        return enabled

    def with_rule(self, rule_id: str, severity: Severity | str, options: dict[str, Any] | None = None) -> "LintConfig":
        """Copy of this config with one rule overridden (validated)"""
        rules: dict[str, Any] = {key: setting.model_dump() for key, setting in self.rules.items()}
        rules[normalize_rule_id(rule_id)] = {"severity": severity, "options": options or {}}
        data = self.model_dump(by_alias=True)
        data["rules"] = rules
        return LintConfig.from_mapping(data)


def _format_errors(error: ValidationError) -> str:
    parts = []
    for item in error.errors(include_url=False):
        location = ".".join(str(p) for p in item["loc"]) or "<root>"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


def load_config(path: str | Path) -> LintConfig:
    """
    Load a YAML configuration file.

    Args:
        path: Path to the config file

    Returns:
        Validated LintConfig

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigurationError(f"Config file not found: {path}", path=str(path))

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}", path=str(path)) from e

    if data is not None and not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping", path=str(path))

    return LintConfig.from_mapping(data)


def discover_config(start: str | Path) -> Path | None:
    """Nearest config file in `start` or one of its parents"""
    directory = Path(start).resolve()
    if directory.is_file():
        directory = directory.parent

    for candidate_dir in (directory, *directory.parents):
        for name in CONFIG_FILENAMES:
            candidate = candidate_dir / name
            if candidate.is_file():
                return candidate
    return None


class Settings(BaseSettings):
    """
    Process-level settings.

    Environment variables use the SIGNAL_PATTERNS_ prefix.
    Example: SIGNAL_PATTERNS_LOG_LEVEL=DEBUG, SIGNAL_PATTERNS_JOBS=4
    """

    model_config = SettingsConfigDict(
        env_prefix="SIGNAL_PATTERNS_",
        extra="ignore",
    )

    log_level: str = "WARNING"
    log_json: bool = False
    jobs: int = Field(default=1, ge=1)
    config: Path | None = None
