"""
Fix applier

Applies the textual patches carried by diagnostics. Patches are byte
ranges over the encoded source; overlapping patches are skipped (the
next lint pass reports them again), like ESLint's fixer.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from signal_patterns.models import Diagnostic
from signal_patterns.observability import get_logger

logger = get_logger(__name__)


@dataclass
class FixOutcome:
    """
    Attributes:
        output: Source text after applying patches
        applied: Diagnostics whose patch was applied
        skipped: Fixable diagnostics whose patch overlapped an applied one
    """

    output: str
    applied: list[Diagnostic] = field(default_factory=list)
    skipped: list[Diagnostic] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.applied)


def apply_fixes(source: str, diagnostics: Iterable[Diagnostic], encoding: str = "utf-8") -> FixOutcome:
    """
    Apply all non-overlapping fixes.

    Args:
        source: Original source text
        diagnostics: Diagnostics (any order); those without a fix are ignored
        encoding: Encoding the byte offsets refer to

    Returns:
        FixOutcome
    """
    fixable = sorted(
        (d for d in diagnostics if d.fix is not None),
        key=lambda d: (d.fix.start_byte, d.fix.end_byte),
    )
    if not fixable:
        return FixOutcome(output=source)

    data = source.encode(encoding)
    pieces: list[bytes] = []
    applied: list[Diagnostic] = []
    skipped: list[Diagnostic] = []
    cursor = 0

    for diagnostic in fixable:
        fix = diagnostic.fix
        if fix.start_byte < cursor or fix.end_byte > len(data):
            skipped.append(diagnostic)
            continue
        pieces.append(data[cursor : fix.start_byte])
        pieces.append(fix.text.encode(encoding))
        cursor = fix.end_byte
        applied.append(diagnostic)

    pieces.append(data[cursor:])

    if skipped:
        logger.debug("fixes_skipped", count=len(skipped))

    return FixOutcome(output=b"".join(pieces).decode(encoding), applied=applied, skipped=skipped)
