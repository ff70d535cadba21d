"""
Region Tracker

Render regions (JSX) nest structurally, so a depth counter is enough.

Tracked computations (useComputed / useSignalEffect calls) are kept on a
stack: a nested tracked call ending must not end the outer one.

    useComputed(() => {
        useSignalEffect(() => a.value);   // push, pop
        return b.value;                   // still inside useComputed
    });
"""

from signal_patterns.errors import AnalysisError

TRACKED_CALLEES = frozenset(["useComputed", "useSignalEffect"])


class RegionTracker:
    """Render depth + stack of active tracked-computation names"""

    def __init__(self, tracked_callees: frozenset[str] = TRACKED_CALLEES):
        self.tracked_callees = tracked_callees
        self.render_depth = 0
        self._tracked: list[str] = []

    # ============================================================
    # Render regions
    # ============================================================

    def enter_render(self) -> None:
        self.render_depth += 1

    def exit_render(self) -> None:
        if self.render_depth == 0:
            raise AnalysisError("Render region exited more often than entered")
        self.render_depth -= 1

    @property
    def in_render(self) -> bool:
        return self.render_depth > 0

    # ============================================================
    # Tracked computations
    # ============================================================

    def is_tracked_callee(self, name: str | None) -> bool:
        return name is not None and name in self.tracked_callees

    def enter_tracked(self, name: str) -> None:
        self._tracked.append(name)

    def exit_tracked(self, name: str) -> None:
        if not self._tracked:
            raise AnalysisError(f"Tracked computation {name!r} exited while none is active")
        top = self._tracked.pop()
        if top != name:
            raise AnalysisError(f"Tracked computation exit mismatch: expected {top!r}, got {name!r}")

    @property
    def in_tracked(self) -> bool:
        return bool(self._tracked)

    def assert_balanced(self) -> None:
        """Called after the traversal; anything left open is an engine fault"""
        if self.render_depth != 0 or self._tracked:
            raise AnalysisError(
                "Unbalanced regions after traversal",
                render_depth=self.render_depth,
                tracked=list(self._tracked),
            )
