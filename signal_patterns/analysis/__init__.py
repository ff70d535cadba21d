"""
Analysis Layer

- scope: lexical scope tree and shadowing lookup
- registry: signal (reactive container) detection chain
- regions: render-region depth and tracked-computation stack
- context: parent-shape classification of reads
- engine: the single-pass traversal driving all of the above
"""

from signal_patterns.analysis.context import ContainerRead, ContextClassifier, ReadContext, ValueRead
from signal_patterns.analysis.regions import TRACKED_CALLEES, RegionTracker
from signal_patterns.analysis.registry import (
    NAMING_SUFFIX,
    SIGNAL_CONSTRUCTORS,
    SIGNAL_MODULE_MARKER,
    Detection,
    SignalRegistry,
)
from signal_patterns.analysis.scope import Binding, BindingKind, Scope, ScopeAnalyzer, ScopeKind, ScopeTree
from signal_patterns.analysis.engine import Engine, RuleContext

__all__ = [
    "Binding",
    "BindingKind",
    "Scope",
    "ScopeKind",
    "ScopeTree",
    "ScopeAnalyzer",
    "Detection",
    "SignalRegistry",
    "SIGNAL_MODULE_MARKER",
    "SIGNAL_CONSTRUCTORS",
    "NAMING_SUFFIX",
    "RegionTracker",
    "TRACKED_CALLEES",
    "ReadContext",
    "ValueRead",
    "ContainerRead",
    "ContextClassifier",
    "Engine",
    "RuleContext",
]
