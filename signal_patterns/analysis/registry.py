"""
Signal Registry

Per-run set of bindings confirmed to hold a signal (reactive container).

Detection chain, first positive wins:
    1. registry hit      - the resolved binding was confirmed earlier
    2. import origin     - imported from a module containing "@preact/signals"
    3. constructor call  - initialised by signal() / useSignal() / computed() / useComputed()
    4. naming fallback   - name ends with "$" (count$, user$); classification-time only

The naming fallback is deliberately kept apart from the origin rules: it
over-approximates (the declaration may live in another file) and can be
switched off on its own.
"""

from enum import Enum

from signal_patterns.analysis.scope import Binding, BindingKind, Scope
from signal_patterns.observability import get_logger

logger = get_logger(__name__)

SIGNAL_MODULE_MARKER = "@preact/signals"

SIGNAL_CONSTRUCTORS = frozenset(["signal", "useSignal", "computed", "useComputed"])

NAMING_SUFFIX = "$"


class Detection(str, Enum):
    """Why an identifier was classified as a signal"""

    REGISTRY = "registry"
    IMPORT = "import"
    CONSTRUCTOR = "constructor"
    NAMING = "naming"


def detect_origin(binding: Binding) -> Detection | None:
    """Import-origin and constructor-call rules for one binding"""
    if binding.kind == BindingKind.IMPORT:
        if binding.import_source is not None and SIGNAL_MODULE_MARKER in binding.import_source:
            return Detection.IMPORT
        return None

    if binding.kind == BindingKind.VARIABLE and binding.callee in SIGNAL_CONSTRUCTORS:
        return Detection.CONSTRUCTOR

    return None


class SignalRegistry:
    """
    Bindings confirmed as signals during one analysis run.

    Keyed by binding identity, so an inner binding that shadows an outer
    signal of the same name is never mistaken for it. Entries are only
    ever added.

    Thread-Safety: not shared; one registry per analysed file.
    """

    def __init__(self, naming_convention: bool = True):
        self.naming_convention = naming_convention
        self._bindings: set[Binding] = set()

    def __contains__(self, binding: Binding) -> bool:
        return binding in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)

    @property
    def names(self) -> frozenset[str]:
        """Names of all confirmed bindings"""
        return frozenset(b.name for b in self._bindings)

    def observe(self, binding: Binding) -> Detection | None:
        """
        Apply the origin rules to a freshly visited declaration.

        Returns:
            Detection reason if the binding was added, None otherwise
        """
        if binding in self._bindings:
            return Detection.REGISTRY

        origin = detect_origin(binding)
        if origin is not None:
            self._add(binding, origin)
        return origin

    def classify(self, name: str, scope: Scope | None) -> Detection | None:
        """
        Decide whether a reference to `name` seen in `scope` denotes a signal.

        Never raises: an unresolvable name is simply not a signal (unless the
        naming fallback applies).

        Args:
            name: Referenced identifier
            scope: Scope the reference appears in (None = no scope information)

        Returns:
            Detection reason, or None when not a signal
        """
        binding = scope.resolve(name) if scope is not None else None

        if binding is not None:
            if binding in self._bindings:
                return Detection.REGISTRY

            # Parameters hide outer signals and never count as signals themselves
            if binding.kind == BindingKind.PARAMETER:
                return None

            origin = detect_origin(binding)
            if origin is not None:
                self._add(binding, origin)
                return origin

        if self.naming_convention and name.endswith(NAMING_SUFFIX):
            return Detection.NAMING

        return None

    def _add(self, binding: Binding, reason: Detection) -> None:
        self._bindings.add(binding)
        logger.debug(
            "signal_registered",
            name=binding.name,
            reason=reason.value,
            line=binding.node.start_point[0] + 1,
        )
