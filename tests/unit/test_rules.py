"""
Rule tests, run through the linter with every rule at error severity
"""

import pytest

from signal_patterns import ConfigurationError, LintConfig, Linter, Severity
from tests.helpers.lint_helpers import IMPLICIT_BOOLEAN, IN_JSX, OUTSIDE_HOOKS, by_rule, lines

SIGNAL_IMPORT = 'import { signal, useComputed, useSignalEffect } from "@preact/signals";\n'


# ============================================================
# no-signal-value-outside-hooks
# ============================================================
class TestNoSignalValueOutsideHooks:
    def test_reads_outside_tracked_context(self, lint):
        code = SIGNAL_IMPORT + "const count = signal(0);\nif (count.value > 0) {\n  log(count.value);\n}\n"
        result = lint(code, "a.ts")

        found = by_rule(result, OUTSIDE_HOOKS)
        assert lines(found) == [3, 4]
        assert by_rule(result, IMPLICIT_BOOLEAN) == []
        assert len(result.diagnostics) == 2

        for diagnostic in found:
            assert diagnostic.severity == Severity.ERROR
            assert diagnostic.message_id == "noSignalValueOutsideHooks"
            assert diagnostic.fix is not None
            assert diagnostic.fix.text == "peek()"
            assert code.encode()[diagnostic.fix.start_byte : diagnostic.fix.end_byte] == b"value"
            assert diagnostic.data["signal"] == "count"

    def test_detected_by_registry_after_declaration(self, lint):
        result = lint("const count = signal(0);\nlog(count.value);\n", "a.ts")

        assert by_rule(result, OUTSIDE_HOOKS)[0].data["detectedBy"] == "registry"

    def test_detected_by_constructor_before_declaration(self, lint):
        result = lint("function read() {\n  return count.value;\n}\nconst count = signal(0);\n", "a.ts")

        found = by_rule(result, OUTSIDE_HOOKS)
        assert len(found) == 1
        assert found[0].data["detectedBy"] == "constructor"

    def test_imported_signal(self, lint):
        result = lint('import { theme } from "@preact/signals-core";\nlog(theme.value);\n', "a.ts")

        assert by_rule(result, OUTSIDE_HOOKS)[0].data["detectedBy"] == "registry"

    @pytest.mark.parametrize("hook", ["useComputed", "useSignalEffect"])
    def test_tracked_computation(self, lint, hook):
        code = SIGNAL_IMPORT + f"const count = signal(0);\nconst doubled = {hook}(() => count.value * 2);\n"

        assert lint(code, "a.ts").diagnostics == []

    def test_nested_tracked_computations(self, lint):
        code = (
            "const a = signal(1);\n"
            "const b = signal(2);\n"
            "const total = useComputed(() => {\n"
            "  useSignalEffect(() => {\n"
            "    console.log(a.value);\n"
            "  });\n"
            "  return b.value;\n"
            "});\n"
            "const after = b.value;\n"
        )
        result = lint(code, "a.ts")

        assert lines(by_rule(result, OUTSIDE_HOOKS)) == [9]

    @pytest.mark.parametrize(
        "statement",
        [
            "count.value = 1;",
            "count.value += 2;",
            "count.value++;",
            "--count.value;",
            "(count.value) = 3;",
            "[count.value] = [1];",
            "[first, ...count.value] = [1, 2];",
            "[count.value = 5] = [];",
            "({ a: count.value } = { a: 1 });",
            "({ a: count.value = 5 } = {});",
            "for (count.value of [1, 2]) {}",
            "for (count.value in { a: 1 }) {}",
        ],
    )
    def test_writes_are_exempt(self, lint, statement):
        result = lint(f"const count = signal(0);\n{statement}\n", "a.ts")

        assert result.diagnostics == []

    @pytest.mark.parametrize(
        "statement",
        [
            "[first = count.value] = [];",
            "({ a: first = count.value } = {});",
            "({ [count.value]: first } = {});",
            "for (const item of count.value) {}",
            "for (first of [count.value]) {}",
        ],
    )
    def test_reads_inside_destructuring_are_reported(self, lint, statement):
        result = lint(f"const count = signal(0);\n{statement}\n", "a.ts")

        assert lines(by_rule(result, OUTSIDE_HOOKS)) == [2]

    def test_parenthesized_object(self, lint):
        result = lint("const count = signal(0);\nlog((count).value);\n", "a.ts")

        found = by_rule(result, OUTSIDE_HOOKS)
        assert len(found) == 1
        assert found[0].data["signal"] == "count"
        assert found[0].data["detectedBy"] == "registry"

    def test_unconfirmed_object_is_ignored(self, lint):
        code = 'const input = document.querySelector("input");\nlog(input.value);\nlog(event.target.value);\n'

        assert lint(code, "a.ts").diagnostics == []

    def test_naming_convention(self, lint):
        result = lint("log(store$.value);\n", "a.ts")

        found = by_rule(result, OUTSIDE_HOOKS)
        assert len(found) == 1
        assert found[0].data["detectedBy"] == "naming"

    def test_naming_convention_disabled(self):
        config = LintConfig.from_mapping({"extends": "strict", "namingConvention": False})

        assert Linter(config).lint_source("log(store$.value);\n", "a.ts").diagnostics == []

    def test_parameter_named_like_signal(self, lint):
        code = "const count = signal(0);\nfunction show(count) {\n  return count.value;\n}\n"

        assert lint(code, "a.ts").diagnostics == []

    def test_shadowed_signal(self, lint):
        code = (
            "const count = signal(0);\n"
            "function f() {\n"
            "  const count = { value: 1 };\n"
            "  return count.value;\n"
            "}\n"
        )

        assert lint(code, "a.ts").diagnostics == []


# ============================================================
# no-signal-value-in-jsx
# ============================================================
class TestNoSignalValueInJSX:
    def test_value_in_jsx_child(self, lint):
        code = "const count = signal(0);\nexport function Counter() {\n  return <div>{count.value}</div>;\n}\n"
        result = lint(code)

        found = by_rule(result, IN_JSX)
        assert lines(found) == [3]
        assert by_rule(result, OUTSIDE_HOOKS) == []
        assert found[0].fix is None
        assert found[0].data == {"signal": "count", "confirmed": True, "detectedBy": "registry"}

    def test_value_in_jsx_attribute(self, lint):
        code = 'const text = signal("");\nconst field = <input value={text.value} />;\n'

        assert lines(by_rule(lint(code), IN_JSX)) == [2]

    def test_value_in_fragment(self, lint):
        code = "const count = signal(0);\nconst view = <>{count.value}</>;\n"

        assert lines(by_rule(lint(code), IN_JSX)) == [2]

    def test_unconfirmed_object_still_reported(self, lint):
        code = "function Field(props) {\n  return <span>{props.value}</span>;\n}\n"

        found = by_rule(lint(code), IN_JSX)
        assert len(found) == 1
        assert found[0].data == {"signal": "props", "confirmed": False}

    def test_signal_passed_directly(self, lint):
        code = "const count = signal(0);\nconst view = <div>{count}</div>;\n"

        assert lint(code).diagnostics == []

    def test_write_in_event_handler(self, lint):
        code = "const count = signal(0);\nconst view = <button onClick={() => count.value++}>+</button>;\n"

        assert lint(code).diagnostics == []

    def test_js_file_with_jsx(self, lint):
        code = "const count = signal(0);\nconst view = <p>{count.value}</p>;\n"

        assert lines(by_rule(lint(code, "view.jsx"), IN_JSX)) == [2]


# ============================================================
# no-implicit-boolean-signal
# ============================================================
class TestNoImplicitBooleanSignal:
    def test_if_on_signal(self, lint):
        result = lint("const count = signal(0);\nif (count) {\n  run();\n}\n", "a.ts")

        found = by_rule(result, IMPLICIT_BOOLEAN)
        assert lines(found) == [2]
        assert found[0].message_id == "implicitBooleanSignal"
        assert found[0].fix is None
        assert len(result.diagnostics) == 1

    @pytest.mark.parametrize(
        "expression",
        [
            "const a = !count;",
            "const b = count && other;",
            "const c = other || count;",
            "const d = count ? 1 : 2;",
            "while (count) { break; }",
        ],
    )
    def test_boolean_shapes(self, lint, expression):
        result = lint(f"const count = signal(0);\n{expression}\n", "a.ts")

        assert lines(by_rule(result, IMPLICIT_BOOLEAN)) == [2]

    def test_value_is_not_coercion_of_container(self, lint):
        result = lint("const count = signal(0);\nif (count.value) {}\n", "a.ts")

        assert by_rule(result, IMPLICIT_BOOLEAN) == []
        assert lines(by_rule(result, OUTSIDE_HOOKS)) == [2]

    def test_conditional_rendering(self, lint):
        code = "const visible = signal(false);\nconst view = <div>{visible && <Modal />}</div>;\n"

        assert lines(by_rule(lint(code), IMPLICIT_BOOLEAN)) == [2]

    def test_plain_value(self, lint):
        assert lint("const ready = true;\nif (ready) {}\n", "a.ts").diagnostics == []

    def test_naming_convention(self, lint):
        found = by_rule(lint("if (!user$) {}\n", "a.ts"), IMPLICIT_BOOLEAN)

        assert found[0].data == {"signal": "user$", "detectedBy": "naming"}


class TestNullishOption:
    @staticmethod
    def _linter(option):
        options = {} if option is None else {"allowNullishCoalesce": option}
        config = LintConfig.from_preset("strict").with_rule(IMPLICIT_BOOLEAN, "error", options)
        return Linter(config)

    @pytest.mark.parametrize(
        "option, expected",
        [
            (None, []),
            ("always", []),
            ("nullish", []),
            (False, ["implicitNullishCheck"]),
        ],
    )
    def test_nullish_coalesce(self, option, expected):
        code = 'const count = signal(0);\nconst label = count ?? "none";\n'
        result = self._linter(option).lint_source(code, "a.ts")

        assert [d.message_id for d in by_rule(result, IMPLICIT_BOOLEAN)] == expected

    @pytest.mark.parametrize("option", [None, "always", "nullish", False])
    def test_boolean_always_reported(self, option):
        result = self._linter(option).lint_source("const count = signal(0);\nif (count) {}\n", "a.ts")

        assert [d.message_id for d in by_rule(result, IMPLICIT_BOOLEAN)] == ["implicitBooleanSignal"]

    def test_stable_across_runs(self):
        linter = self._linter(False)
        code = "const count = signal(0);\nconst label = count ?? 0;\n"

        first = linter.lint_source(code, "a.ts").diagnostics
        second = linter.lint_source(code, "a.ts").diagnostics

        assert [d.to_dict() for d in first] == [d.to_dict() for d in second]

    @pytest.mark.parametrize("value", ["sometimes", True, 1, 0, "false"])
    def test_invalid_option(self, value):
        with pytest.raises(ConfigurationError):
            self._linter(value)
