"""
Global test configuration and fixtures
"""

import pytest

from signal_patterns import LintConfig, Linter
from signal_patterns.parsing import AstTree, SourceFile


@pytest.fixture
def strict_linter() -> Linter:
    """Every rule enabled at error severity"""
    return Linter(LintConfig.from_preset("strict"))


@pytest.fixture
def lint(strict_linter):
    """lint(code, file_path="App.tsx", **kwargs) → LintResult with the strict preset"""

    def _lint(code: str, file_path: str = "App.tsx", **kwargs):
        return strict_linter.lint_source(code, file_path, **kwargs)

    return _lint


@pytest.fixture
def parse():
    """parse(code, file_path="App.tsx") → AstTree"""

    def _parse(code: str, file_path: str = "App.tsx") -> AstTree:
        return AstTree.parse(SourceFile.from_content(file_path, code))

    return _parse


# Pytest hooks
def pytest_collection_modifyitems(config, items):
    """경로 기반 자동 마커 추가"""
    for item in items:
        path = str(item.fspath)
        if "/unit/" in path:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in path:
            item.add_marker(pytest.mark.integration)
