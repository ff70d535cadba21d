"""
Rule contracts.

A rule is a stateless evaluator: the engine hands it classified reads and
a RuleContext, and the rule reports through that context. Rules never see
each other's findings.
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, ValidationError

from signal_patterns.analysis.context import ContainerRead, ValueRead
from signal_patterns.analysis.engine import RuleContext
from signal_patterns.errors import ConfigurationError


@dataclass(frozen=True)
class RuleMeta:
    """
    Static rule description.

    Attributes:
        rule_id: Stable identifier used in configuration and reports
        type: "problem" (likely bug) or "suggestion" (style / performance)
        description: One-line summary
        recommended: Enabled by the recommended preset
        fixable: Reports may carry an automated rewrite
        messages: message_id → message text
    """

    rule_id: str
    type: Literal["problem", "suggestion"]
    description: str
    recommended: bool
    fixable: bool
    messages: dict[str, str] = field(default_factory=dict)


class NoOptions(BaseModel):
    """Option schema for rules without options"""

    model_config = ConfigDict(extra="forbid", frozen=True)


class Rule:
    """
    Base class for rule evaluators.

    Subclasses set `meta`, optionally `options_model`, and override the
    read hooks they care about.
    """

    meta: ClassVar[RuleMeta]
    options_model: ClassVar[type[BaseModel]] = NoOptions

    def __init__(self, options: dict[str, Any] | BaseModel | None = None):
        self.options = self.parse_options(options)

    @classmethod
    def parse_options(cls, options: dict[str, Any] | BaseModel | None) -> BaseModel:
        """
        Validate raw options against the rule's schema.

        Raises:
            ConfigurationError: If options do not match the schema
        """
        if isinstance(options, cls.options_model):
            return options
        try:
            return cls.options_model.model_validate(options or {})
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid options for rule {cls.meta.rule_id}: {e.errors(include_url=False)}",
                rule_id=cls.meta.rule_id,
            ) from e

    def check_value_read(self, read: ValueRead, context: RuleContext) -> None:
        """Called for every `name.value` read"""

    def check_container_read(self, read: ContainerRead, context: RuleContext) -> None:
        """Called for every bare identifier reference"""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.meta.rule_id!r})"
