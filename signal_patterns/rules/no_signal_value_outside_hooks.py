"""
no-signal-value-outside-hooks

Reading `signal.value` subscribes the surrounding computation. Outside a
tracked computation (useComputed / useSignalEffect) and outside JSX there
is nothing to subscribe, so the read should be a non-subscribing
`signal.peek()`.

    const count = signal(0);
    if (count.value > 0) { ... }      // reported, fixed to count.peek()
    count.value = 1;                  // writes are fine
    useComputed(() => count.value);   // tracked, fine
"""

from signal_patterns.analysis.context import ReadContext, ValueRead
from signal_patterns.rules.base import Rule, RuleContext, RuleMeta

PEEK_CALL = "peek()"


class NoSignalValueOutsideHooks(Rule):
    meta = RuleMeta(
        rule_id="no-signal-value-outside-hooks",
        type="problem",
        description="Disallow reading signal.value outside of useComputed, useSignalEffect, or JSX",
        recommended=True,
        fixable=True,
        messages={
            "noSignalValueOutsideHooks": (
                "Reading signal.value outside of useComputed, useSignalEffect, or JSX is not allowed. "
                "Use .peek() instead."
            ),
        },
    )

    def check_value_read(self, read: ValueRead, context: RuleContext) -> None:
        if read.region != ReadContext.NONE:
            return

        detection = context.detect_signal(read.object_node)
        if detection is None:
            return

        context.report(
            read.node,
            "noSignalValueOutsideHooks",
            fix=context.replace_text(read.property_node, PEEK_CALL),
            data={"signal": read.name, "detectedBy": detection.value},
        )
