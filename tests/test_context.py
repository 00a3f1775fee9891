"""
Tests for formschema.context.
"""

import re

import pytest

from formschema import UNSET, Condition, SchemaDefinitionError, ValidationContext, ValidationError
from formschema.context import stringify_condition_value

ROOT = {"a": {"b": [10, 20], "c": "x"}, "flag": True, "name": None}


class TestPaths:
    def test_root_context(self):
        ctx = ValidationContext(ROOT)
        assert ctx.path == ()
        assert ctx.root is ROOT
        assert ctx.current_value is ROOT

    def test_child_extends_path(self):
        ctx = ValidationContext(ROOT).child("a").child("b").child(1)
        assert ctx.path == ("a", "b", 1)
        assert ctx.current_value == 20
        assert ctx.root is ROOT

    def test_child_does_not_touch_parent(self):
        parent = ValidationContext(ROOT)
        parent.child("a")
        assert parent.path == ()

    def test_value_at_unresolved(self):
        ctx = ValidationContext(ROOT)
        assert ctx.value_at(("a", "missing")) is UNSET
        assert ctx.value_at(("a", "b", 5)) is UNSET
        assert ctx.value_at(("name", "deeper")) is UNSET
        assert ctx.value_at(("a", "c", 0)) is UNSET

    def test_sibling_value(self):
        ctx = ValidationContext(ROOT).child("a").child("c")
        assert ctx.sibling_value("b") == [10, 20]

    def test_parent_value(self):
        ctx = ValidationContext(ROOT).child("a").child("b")
        assert ctx.parent_value() == ROOT["a"]
        assert ctx.parent_value(2) is ROOT


class TestErrors:
    def test_errors_append_in_order(self):
        ctx = ValidationContext(None)
        ctx.add_error(ValidationError(("a",), "first"))
        ctx.add_errors([ValidationError(("b",), "second"), ValidationError(("c",), "third")])
        assert [e.message for e in ctx.errors] == ["first", "second", "third"]
        assert ctx.has_errors()

    def test_child_has_own_errors(self):
        parent = ValidationContext(ROOT)
        child = parent.child("a")
        parent.add_error(ValidationError((), "parent"))
        assert not child.has_errors()

    def test_clear_errors(self):
        ctx = ValidationContext(None)
        ctx.add_error(ValidationError((), "x"))
        ctx.clear_errors()
        assert ctx.errors == ()

    def test_snapshot_restore(self):
        ctx = ValidationContext(ROOT)
        ctx.add_error(ValidationError((), "kept"))
        snapshot = ctx.snapshot()
        ctx.add_error(ValidationError((), "dropped"))
        ctx.is_dependency_satisfied(Condition("flag", "false"))
        ctx.restore(snapshot)
        assert [e.message for e in ctx.errors] == ["kept"]
        assert ctx.failed_dependencies == ()


class TestConditions:
    def test_pattern_matches_stringified_sibling(self):
        ctx = ValidationContext(ROOT).child("value")
        assert ctx.is_dependency_satisfied(Condition("flag", r"true"))
        assert not ctx.is_dependency_satisfied(Condition("flag", r"^false$"))

    def test_compiled_pattern(self):
        ctx = ValidationContext({"kind": "Business"}).child("vat")
        assert ctx.is_dependency_satisfied(Condition("kind", re.compile("business", re.I)))

    def test_predicate_condition(self):
        ctx = ValidationContext({"age": 21}).child("licence")
        assert ctx.is_dependency_satisfied(Condition("age", lambda s: int(s) >= 18))

    def test_coerce_from_mapping(self):
        cond = Condition.coerce({"field": "flag", "condition": "true"})
        assert cond.field == "flag"
        assert cond.source == "true"

    def test_invalid_condition(self):
        with pytest.raises(SchemaDefinitionError):
            Condition("flag", 5)  # type: ignore[arg-type]

    def test_missing_or_null_sibling_never_satisfies(self):
        ctx = ValidationContext(ROOT).child("value")
        assert not ctx.is_dependency_satisfied(Condition("absent", r".*"))
        assert not ctx.is_dependency_satisfied(Condition("name", r".*"))

    def test_failed_dependencies_recorded(self):
        ctx = ValidationContext({"flag": False}).child("value")
        assert not ctx.is_dependency_satisfied(Condition("flag", "true"))
        failed = ctx.failed_dependencies
        assert len(failed) == 1
        assert failed[0].actual_value is False
        assert failed[0].condition.field == "flag"
        ctx.clear_failed_dependencies()
        assert ctx.failed_dependencies == ()

    def test_merge_dependencies_from_child(self):
        parent = ValidationContext({"flag": False})
        child = parent.child("value")
        child.is_dependency_satisfied(Condition("flag", "true"))
        assert parent.failed_dependencies == ()
        parent.merge_dependencies(child)
        assert [d.condition.field for d in parent.failed_dependencies] == ["flag"]

    def test_is_field_required_any_of(self):
        ctx = ValidationContext({"kind": "personal", "country": "US"}).child("tax_id")
        conditions = [Condition("kind", "business"), Condition("country", "^US$")]
        assert ctx.is_field_required(conditions)
        assert not ctx.is_field_required([Condition("kind", "business")])


class TestStringify:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (True, "true"),
            (False, "false"),
            (None, "null"),
            (3, "3"),
            (1.0, "1"),
            (2.5, "2.5"),
            ("text", "text"),
            ([1, "a"], '[1,"a"]'),
            ({"k": True}, '{"k":true}'),
        ],
    )
    def test_coercion(self, value, expected):
        assert stringify_condition_value(value) == expected
