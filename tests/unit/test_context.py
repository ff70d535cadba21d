"""
Context classifier tests: parent-shape table and read construction
"""

import pytest

from signal_patterns.analysis import ContextClassifier, ReadContext, RegionTracker
from tests.helpers.lint_helpers import identifiers


@pytest.fixture
def classifier():
    return ContextClassifier(RegionTracker())


class TestCoercion:
    @pytest.mark.parametrize(
        "code, expected",
        [
            ("if (x) {}", ReadContext.BOOLEAN),
            ("if ((x)) {}", ReadContext.BOOLEAN),
            ("!x;", ReadContext.BOOLEAN),
            ("!(x);", ReadContext.BOOLEAN),
            ("x && y;", ReadContext.BOOLEAN),
            ("y || x;", ReadContext.BOOLEAN),
            ("x ? 1 : 2;", ReadContext.BOOLEAN),
            ("while (x) {}", ReadContext.BOOLEAN),
            ("do {} while (x);", ReadContext.BOOLEAN),
            ("for (; x; ) {}", ReadContext.BOOLEAN),
            ("x ?? y;", ReadContext.NULLISH),
            ("f(x);", ReadContext.NONE),
            ("-x;", ReadContext.NONE),
            ("x + 1;", ReadContext.NONE),
            ("x;", ReadContext.NONE),
            ("const y = x;", ReadContext.NONE),
            ("y ? x : 2;", ReadContext.NONE),
        ],
    )
    def test_parent_shapes(self, parse, classifier, code, expected):
        tree = parse(code, "c.js")
        node = identifiers(tree, "x")[0]

        assert classifier.coercion(node) == expected

    def test_coercion_wins_over_region(self, parse):
        tracker = RegionTracker()
        tracker.enter_render()
        classifier = ContextClassifier(tracker)
        tree = parse("!x;", "c.js")
        node = identifiers(tree, "x")[0]

        assert classifier.classify(node) == ReadContext.BOOLEAN

    def test_region_when_no_coercion(self, parse):
        tracker = RegionTracker()
        tracker.enter_tracked("useComputed")
        classifier = ContextClassifier(tracker)
        tree = parse("f(x);", "c.js")
        node = identifiers(tree, "x")[0]

        assert classifier.classify(node) == ReadContext.TRACKED

    def test_render_wins_over_tracked(self):
        tracker = RegionTracker()
        tracker.enter_tracked("useComputed")
        tracker.enter_render()

        assert ContextClassifier(tracker).region() == ReadContext.RENDER


class TestValueReads:
    def test_plain_read(self, parse, classifier):
        tree = parse("log(count.value);", "v.js")
        member = tree.find_by_type("member_expression")[0]

        read = classifier.value_read(member)

        assert read is not None
        assert read.name == "count"
        assert tree.get_text(read.property_node) == "value"
        assert read.context == ReadContext.NONE
        assert read.region == ReadContext.NONE

    def test_boolean_shape_keeps_region_apart(self, parse, classifier):
        tree = parse("if (count.value) {}", "v.js")
        member = tree.find_by_type("member_expression")[0]

        read = classifier.value_read(member)

        assert read.context == ReadContext.BOOLEAN
        assert read.region == ReadContext.NONE

    @pytest.mark.parametrize(
        "code",
        [
            "count.value = 1;",
            "count.value += 1;",
            "count.value ||= 1;",
            "count.value++;",
            "--count.value;",
            "[count.value] = xs;",
            "[...count.value] = xs;",
            "[count.value = 1] = xs;",
            "({ a: count.value } = o);",
            "for (count.value of xs) {}",
        ],
    )
    def test_write_targets_are_not_reads(self, parse, classifier, code):
        tree = parse(code, "v.js")
        member = tree.find_by_type("member_expression")[0]

        assert classifier.value_read(member) is None

    @pytest.mark.parametrize(
        "code",
        [
            "[a = count.value] = xs;",
            "({ k: a = count.value } = o);",
            "for (a of count.value) {}",
        ],
    )
    def test_pattern_defaults_are_reads(self, parse, classifier, code):
        tree = parse(code, "v.js")
        member = tree.find_by_type("member_expression")[0]

        assert classifier.value_read(member) is not None

    def test_parenthesized_object(self, parse, classifier):
        tree = parse("log(((count)).value);", "v.js")
        member = tree.find_by_type("member_expression")[0]

        read = classifier.value_read(member)

        assert read is not None
        assert read.name == "count"
        assert read.object_node.type == "identifier"

    @pytest.mark.parametrize("code", ["log(a.b.value);", "log(count.peek);", "log(count.val);"])
    def test_other_member_access(self, parse, classifier, code):
        tree = parse(code, "v.js")
        member = tree.find_by_type("member_expression")[0]

        assert classifier.value_read(member) is None

    def test_computed_access_is_not_value_read(self, parse):
        tree = parse('log(count["value"]);', "v.js")

        assert tree.find_by_type("member_expression") == []
        assert len(tree.find_by_type("subscript_expression")) == 1

    def test_container_read(self, parse, classifier):
        tree = parse("if (!count) {}", "v.js")
        node = identifiers(tree, "count")[0]

        read = classifier.container_read(node)

        assert read.name == "count"
        assert read.coercion == ReadContext.BOOLEAN
        assert read.context == ReadContext.BOOLEAN
