"""
Linter facade

Glues the parser front end, the scope analyzer, the engine and the fixer:

    linter = Linter(LintConfig.from_preset("strict"))
    result = linter.lint_source(code, "Counter.tsx")
    results = linter.lint_paths(["src/"], jobs=4, fix=True)

Configuration is validated when the Linter is built, before any file is
analysed.
"""

from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from signal_patterns.analysis import Engine
from signal_patterns.config import LintConfig
from signal_patterns.errors import SignalPatternsError
from signal_patterns.fixer import apply_fixes
from signal_patterns.models import Diagnostic, LintResult, Severity
from signal_patterns.observability import get_logger
from signal_patterns.parsing import AstTree, SourceFile, get_registry
from signal_patterns.rules import Rule

logger = get_logger(__name__)

IGNORED_DIRECTORIES = frozenset(["node_modules", ".git", "dist", "build", "coverage", ".next"])


class Linter:
    """
    Runs the configured rules over sources.

    Thread-Safety: Safe. Every file gets its own parse tree, scope tree and
    engine; rule instances are stateless.
    """

    def __init__(self, config: LintConfig | None = None):
        """
        Args:
            config: Lint configuration (defaults to the recommended preset)

        Raises:
            ConfigurationError: If rule options are invalid
        """
        self.config = config or LintConfig()
        self._rules: list[tuple[Rule, Severity]] = self.config.build_rules()

    @property
    def enabled_rules(self) -> list[str]:
        return [rule.meta.rule_id for rule, _ in self._rules]

    # ============================================================
    # Single source
    # ============================================================

    def analyze(self, source: SourceFile) -> tuple[list[Diagnostic], int]:
        """
        Parse and analyse one source.

        Returns:
            (diagnostics in document order, number of syntax error nodes)

        Raises:
            ParsingError: If the source cannot be parsed at all
            AnalysisError: On an internal engine fault
        """
        tree = AstTree.parse(source)

        error_count = len(tree.get_errors()) if tree.has_error() else 0
        if error_count:
            logger.warning(
                "partial_parse",
                file_path=source.file_path,
                error_nodes=error_count,
            )

        engine = Engine(
            tree,
            self._rules,
            naming_convention=self.config.naming_convention,
        )
        return engine.run(), error_count

    def lint_source(
        self,
        content: str,
        file_path: str = "<input>.tsx",
        language: str | None = None,
        fix: bool = False,
    ) -> LintResult:
        """
        Lint source text.

        Args:
            content: Source code
            file_path: Used for language detection and in reports
            language: Grammar override (javascript, typescript, tsx)
            fix: Apply fixes (repeatedly, up to max_fix_passes) and report
                the remaining problems of the fixed text

        Returns:
            LintResult (fixed_source is set when fixes changed the text)
        """
        source = SourceFile.from_content(file_path, content, language)
        diagnostics, error_count = self.analyze(source)

        if not fix:
            return LintResult(file_path=file_path, diagnostics=diagnostics, parse_error_count=error_count)

        current = content
        for attempt in range(self.config.max_fix_passes):
            outcome = apply_fixes(current, diagnostics, encoding=source.encoding)
            if not outcome.changed:
                break
            logger.debug("fix_pass", file_path=file_path, attempt=attempt + 1, applied=len(outcome.applied))
            current = outcome.output
            source = SourceFile.from_content(file_path, current, source.language, source.encoding)
            diagnostics, error_count = self.analyze(source)

        return LintResult(
            file_path=file_path,
            diagnostics=diagnostics,
            parse_error_count=error_count,
            fixed_source=current if current != content else None,
        )

    def lint_file(self, path: str | Path, fix: bool = False) -> LintResult:
        """
        Lint one file from disk (the file itself is never written).

        Raises:
            ParsingError: If the file cannot be read or has no grammar
            AnalysisError: On an internal engine fault
        """
        source = SourceFile.from_file(path)
        return self.lint_source(source.content, str(path), source.language, fix=fix)

    # ============================================================
    # Many files
    # ============================================================

    def lint_paths(self, paths: Iterable[str | Path], jobs: int = 1, fix: bool = False) -> list[LintResult]:
        """
        Lint files and directories, optionally in parallel.

        Per-file failures (unreadable file, engine fault) are recorded on that
        file's result and do not stop the run.

        Returns:
            One LintResult per file, in discovery order
        """
        files = discover_files(paths)
        if not files:
            return []

        if jobs <= 1 or len(files) == 1:
            return [self._lint_file_safely(path, fix) for path in files]

        results: dict[int, LintResult] = {}
        with ThreadPoolExecutor(max_workers=jobs) as executor:
            futures = {executor.submit(self._lint_file_safely, path, fix): index for index, path in enumerate(files)}
            for future in as_completed(futures):
                results[futures[future]] = future.result()

        logger.info("lint_paths_done", files=len(files), workers=jobs)
        return [results[index] for index in range(len(files))]

    def _lint_file_safely(self, path: Path, fix: bool) -> LintResult:
        try:
            return self.lint_file(path, fix=fix)
        except SignalPatternsError as e:
            logger.error("file_failed", file_path=str(path), error=str(e))
            return LintResult(file_path=str(path), error=e)


def discover_files(paths: Iterable[str | Path]) -> list[Path]:
    """
    Expand directories into supported source files.

    Explicitly named files are kept even with an unknown extension (the
    linter reports them as unsupported); directories are filtered by
    extension and skip dependency/build folders.
    """
    extensions = set(get_registry().supported_extensions)
    found: list[Path] = []
    seen: set[Path] = set()

    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            candidates = sorted(
                p
                for p in path.rglob("*")
                if p.is_file()
                and p.suffix.lower() in extensions
                and not IGNORED_DIRECTORIES.intersection(p.relative_to(path).parts[:-1])
            )
        else:
            candidates = [path]

        for candidate in candidates:
            if candidate not in seen:
                seen.add(candidate)
                found.append(candidate)

    return found
