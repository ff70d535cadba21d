"""
no-implicit-boolean-signal

A signal object is always truthy, so `if (count)` / `!count` / `count && x`
test the container instead of its value and are always wrong.

`count ?? fallback` is only reported when allowNullishCoalesce is false:
without type information the analyzer cannot tell whether the signal
itself may be null or undefined.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from signal_patterns.analysis.context import ContainerRead, ReadContext
from signal_patterns.rules.base import Rule, RuleContext, RuleMeta


class NoImplicitBooleanSignalOptions(BaseModel):
    """
    Attributes:
        allow_nullish_coalesce: "always" and "nullish" (default) never report `??`,
            false always reports it
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    allow_nullish_coalesce: Literal["always", "nullish", False] = Field(
        default="nullish",
        alias="allowNullishCoalesce",
    )


class NoImplicitBooleanSignal(Rule):
    meta = RuleMeta(
        rule_id="no-implicit-boolean-signal",
        type="problem",
        description="Disallow implicit boolean coercion of signal variables",
        recommended=True,
        fixable=False,
        messages={
            "implicitBooleanSignal": (
                "Signal is implicitly converted to boolean, which will always be true. "
                "Use .value or .peek() instead."
            ),
            "implicitNullishCheck": (
                "Signal is implicitly checked for nullishness. Consider explicit null check instead."
            ),
        },
    )
    options_model = NoImplicitBooleanSignalOptions

    def check_container_read(self, read: ContainerRead, context: RuleContext) -> None:
        if read.coercion == ReadContext.NONE:
            return

        if read.coercion == ReadContext.NULLISH and self.options.allow_nullish_coalesce is not False:
            return

        detection = context.detect_signal(read.node)
        if detection is None:
            return

        message_id = "implicitBooleanSignal" if read.coercion == ReadContext.BOOLEAN else "implicitNullishCheck"
        context.report(read.node, message_id, data={"signal": read.name, "detectedBy": detection.value})
