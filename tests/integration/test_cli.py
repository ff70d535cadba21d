"""
CLI tests (typer CliRunner)
"""

import json

import pytest
from typer.testing import CliRunner

from signal_patterns.cli import app

runner = CliRunner()

PROBLEM = "const count = signal(0);\nif (count) {}\nlog(count.value);\n"
WARNING_ONLY = "const count = signal(0);\nexport const View = () => <p>{count.value}</p>;\n"
CLEAN = "const count = signal(0);\nconst doubled = useComputed(() => count.value * 2);\n"


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """Run every command from an empty directory with no SIGNAL_PATTERNS_* overrides"""
    for name in ("LOG_LEVEL", "LOG_JSON", "JOBS", "CONFIG"):
        monkeypatch.delenv(f"SIGNAL_PATTERNS_{name}", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestLintCommand:
    def test_clean_file(self, isolated):
        path = isolated / "clean.ts"
        path.write_text(CLEAN)

        result = runner.invoke(app, ["lint", str(path)])

        assert result.exit_code == 0
        assert "problem" not in result.stdout

    def test_errors_exit_one(self, isolated):
        path = isolated / "bad.ts"
        path.write_text(PROBLEM)

        result = runner.invoke(app, ["lint", str(path)])

        assert result.exit_code == 1
        assert "no-implicit-boolean-signal" in result.stdout
        assert "no-signal-value-outside-hooks" in result.stdout
        assert "2 problems (2 errors, 0 warnings)" in result.stdout
        assert "1 potentially fixable" in result.stdout

    def test_warnings_exit_zero(self, isolated):
        path = isolated / "View.tsx"
        path.write_text(WARNING_ONLY)

        result = runner.invoke(app, ["lint", str(path)])

        assert result.exit_code == 0
        assert "1 problem (0 errors, 1 warnings)" in result.stdout

    def test_preset_option(self, isolated):
        path = isolated / "View.tsx"
        path.write_text(WARNING_ONLY)

        result = runner.invoke(app, ["lint", str(path), "--preset", "strict"])

        assert result.exit_code == 1

    def test_json_format(self, isolated):
        path = isolated / "bad.ts"
        path.write_text(PROBLEM)

        result = runner.invoke(app, ["lint", str(path), "--format", "json"])
        data = json.loads(result.stdout)

        assert result.exit_code == 1
        assert data[0]["filePath"] == str(path)
        assert [m["ruleId"] for m in data[0]["messages"]] == [
            "no-implicit-boolean-signal",
            "no-signal-value-outside-hooks",
        ]

    def test_fix_writes_file(self, isolated):
        path = isolated / "bad.ts"
        path.write_text(PROBLEM)

        result = runner.invoke(app, ["lint", str(path), "--fix"])

        assert result.exit_code == 1
        assert path.read_text() == "const count = signal(0);\nif (count) {}\nlog(count.peek());\n"

    def test_fix_keeps_crlf_line_endings(self, isolated):
        path = isolated / "bad.ts"
        path.write_bytes(b"const count = signal(0);\r\nlog(count.value);\r\n")

        result = runner.invoke(app, ["lint", str(path), "--fix"])

        assert result.exit_code == 0
        assert path.read_bytes() == b"const count = signal(0);\r\nlog(count.peek());\r\n"

    def test_directory_and_jobs(self, isolated):
        (isolated / "src").mkdir()
        (isolated / "src" / "a.ts").write_text(CLEAN)
        (isolated / "src" / "b.ts").write_text(CLEAN)

        result = runner.invoke(app, ["lint", "src", "--jobs", "2", "--format", "json"])

        assert result.exit_code == 0
        assert len(json.loads(result.stdout)) == 2

    def test_naming_convention_flag(self, isolated):
        path = isolated / "store.ts"
        path.write_text("if (user$) {}\n")

        assert runner.invoke(app, ["lint", str(path)]).exit_code == 1
        assert runner.invoke(app, ["lint", str(path), "--no-naming-convention"]).exit_code == 0

    def test_discovered_config(self, isolated):
        (isolated / ".signal-patterns.yaml").write_text("extends: jsx-warnings-only\n")
        path = isolated / "bad.ts"
        path.write_text(PROBLEM)

        result = runner.invoke(app, ["lint", str(path)])

        assert result.exit_code == 0

    def test_explicit_config(self, isolated):
        config = isolated / "custom.yaml"
        config.write_text("rules:\n  no-implicit-boolean-signal: off\n  no-signal-value-outside-hooks: warn\n")
        path = isolated / "bad.ts"
        path.write_text(PROBLEM)

        result = runner.invoke(app, ["lint", str(path), "--config", str(config)])

        assert result.exit_code == 0
        assert "1 problem (0 errors, 1 warnings)" in result.stdout

    def test_invalid_config_exit_two(self, isolated):
        config = isolated / "custom.yaml"
        config.write_text("rules:\n  no-such-rule: error\n")
        path = isolated / "bad.ts"
        path.write_text(PROBLEM)

        result = runner.invoke(app, ["lint", str(path), "--config", str(config)])

        assert result.exit_code == 2

    def test_unknown_preset_exit_two(self, isolated):
        path = isolated / "bad.ts"
        path.write_text(PROBLEM)

        assert runner.invoke(app, ["lint", str(path), "--preset", "loose"]).exit_code == 2

    def test_unreadable_file_exit_one(self, isolated):
        result = runner.invoke(app, ["lint", str(isolated / "missing.ts")])

        assert result.exit_code == 1
        assert "fatal" in result.stdout


class TestListingCommands:
    def test_rules(self):
        result = runner.invoke(app, ["rules"])

        assert result.exit_code == 0
        for rule_id in (
            "no-signal-value-outside-hooks",
            "no-signal-value-in-jsx",
            "no-implicit-boolean-signal",
        ):
            assert rule_id in result.stdout

    def test_presets(self):
        result = runner.invoke(app, ["presets"])

        assert result.exit_code == 0
        for name in ("recommended", "strict", "jsx-warnings-only", "type-safety"):
            assert name in result.stdout
