"""
no-signal-value-in-jsx

Inside JSX, pass the signal itself (`{count}`) so Preact can bind it to the
text node directly instead of re-rendering the component on every change.

Any `x.value` read in a render region is reported, also when `x` cannot
be confirmed as a signal; `data["confirmed"]` tells the two cases apart.
No fix: passing the container instead of its value is a structural change.
"""

from signal_patterns.analysis.context import ReadContext, ValueRead
from signal_patterns.rules.base import Rule, RuleContext, RuleMeta


class NoSignalValueInJSX(Rule):
    meta = RuleMeta(
        rule_id="no-signal-value-in-jsx",
        type="suggestion",
        description="Warn when reading signal.value in JSX",
        recommended=False,
        fixable=False,
        messages={
            "noSignalValueInJSX": (
                "Reading signal.value in JSX is discouraged. "
                "Consider passing the signal directly to the component prop."
            ),
        },
    )

    def check_value_read(self, read: ValueRead, context: RuleContext) -> None:
        if read.region != ReadContext.RENDER:
            return

        detection = context.detect_signal(read.object_node)
        data = {"signal": read.name, "confirmed": detection is not None}
        if detection is not None:
            data["detectedBy"] = detection.value

        context.report(read.node, "noSignalValueInJSX", data=data)
