"""
Tests for the parse/safe_parse contract and the refinement pipeline.
"""

import pytest

from formschema import (
    UNSET,
    Err,
    Ok,
    ValidationAggregateError,
    ValidationContext,
    array,
    number,
    object_,
    string,
)


class TestParse:
    def test_parse_returns_value(self):
        assert string().parse("hi") == "hi"

    def test_parse_raises_aggregate(self):
        with pytest.raises(ValidationAggregateError) as exc_info:
            number().parse("x")
        assert exc_info.value.errors[0].code == "invalid_type"
        assert "- (root): Invalid number" in str(exc_info.value)

    def test_safe_parse_never_raises(self):
        result = number().safe_parse("x")
        assert isinstance(result, Err)
        assert result.errors[0].path == ()
        assert result.errors[0].received == "string"

    def test_missing_value_is_required(self):
        result = string().safe_parse()
        assert isinstance(result, Err)
        assert len(result.errors) == 1
        err = result.errors[0]
        assert err.code == "required"
        assert err.message == "This field is required"
        assert err.path == ()
        assert err.expected == "text"

    def test_none_is_not_missing(self):
        result = string().safe_parse(None)
        assert isinstance(result, Err)
        assert result.errors[0].code == "invalid_type"
        assert result.errors[0].received == "null"

    def test_required_false_admits_absent_values(self):
        schema = string().required(False)
        assert schema.safe_parse().data is UNSET
        assert schema.safe_parse(None).data is None
        assert not schema.is_required

    def test_required_custom_message(self):
        result = string().required(True, "Name please").safe_parse()
        assert result.errors[0].message == "Name please"

    def test_explicit_context(self):
        ctx = ValidationContext({"x": 1}, path=("x",))
        result = number().safe_parse(1, ctx)
        assert isinstance(result, Ok)
        assert result.data == 1


class TestRefine:
    def test_refine_passes(self):
        assert number().refine(lambda n: n > 0).parse(3) == 3

    def test_refine_default_error(self):
        result = number().refine(lambda n: n > 0).safe_parse(-1)
        assert isinstance(result, Err)
        err = result.errors[0]
        assert err.message == "Invalid value"
        assert err.code == "custom_validation"
        assert err.value == -1
        assert err.path == ()

    def test_refine_custom_fields(self):
        result = number().refine(
            lambda n: n % 2 == 0, "Must be even", code="not_even", expected="even", received="odd"
        ).safe_parse(3)
        err = result.errors[0]
        assert (err.message, err.code, err.expected, err.received) == (
            "Must be even",
            "not_even",
            "even",
            "odd",
        )

    def test_message_callable(self):
        result = string().refine(lambda s: s.islower(), lambda s: f"{s} is not lowercase").safe_parse("AB")
        assert result.errors[0].message == "AB is not lowercase"

    def test_not_run_when_base_validation_fails(self):
        calls = []

        def check(value):
            calls.append(value)
            return True

        result = string().refine(check).safe_parse(5)
        assert calls == []
        assert [e.code for e in result.errors] == ["invalid_type"]

    def test_not_run_when_constraints_fail(self):
        calls = []
        string().min_length(5).refine(lambda s: calls.append(s) or True).safe_parse("ab")
        assert calls == []

    def test_all_refinements_reported(self):
        schema = (
            number()
            .refine(lambda n: n > 10, "too low")
            .refine(lambda n: n % 2 == 0, "not even")
        )
        result = schema.safe_parse(3)
        assert [e.message for e in result.errors] == ["too low", "not even"]

    def test_immediate_stops_chain(self):
        schema = (
            number()
            .refine(lambda n: n > 10, "too low", immediate=True)
            .refine(lambda n: n % 2 == 0, "not even")
        )
        result = schema.safe_parse(3)
        assert [e.message for e in result.errors] == ["too low"]

    def test_passing_immediate_continues(self):
        schema = (
            number()
            .refine(lambda n: n > 0, "negative", immediate=True)
            .refine(lambda n: n % 2 == 0, "not even")
        )
        result = schema.safe_parse(3)
        assert [e.message for e in result.errors] == ["not even"]

    def test_refine_path(self):
        schema = object_({"password": string(), "confirm": string()}).refine(
            lambda v: v["password"] == v["confirm"], "Passwords do not match", path=["confirm"]
        )
        result = schema.safe_parse({"password": "a", "confirm": "b"})
        assert len(result.errors) == 1
        assert result.errors[0].path == ("confirm",)

    def test_predicate_exception_propagates(self):
        with pytest.raises(ZeroDivisionError):
            number().refine(lambda n: 1 / n > 0).safe_parse(0)


class TestSuperRefine:
    def test_reports_multiple_issues(self):
        def no_blank_items(items, ctx):
            for i, item in enumerate(items):
                if not item.strip():
                    ctx.add_issue(message="Blank item", path=[i])

        result = array(string()).super_refine(no_blank_items).safe_parse(["a", " ", ""])
        assert isinstance(result, Err)
        assert [e.path for e in result.errors] == [(1,), (2,)]
        assert result.errors[0].value == ["a", " ", ""]
        assert result.errors[0].code == "custom_validation"

    def test_issue_paths_nest_under_parent(self):
        def check(value, ctx):
            ctx.add_issue(message="nope", path=["x"])

        schema = object_({"inner": object_({"x": number()}).super_refine(check)})
        result = schema.safe_parse({"inner": {"x": 1}})
        assert result.errors[0].path == ("inner", "x")

    def test_sees_absolute_path_and_root(self):
        seen = []
        schema = object_(
            {"inner": string().super_refine(lambda v, ctx: seen.append((ctx.path, ctx.root)))}
        )
        data = {"inner": "x"}
        schema.parse(data)
        assert seen == [(("inner",), data)]

    def test_runs_in_declaration_order_with_refine(self):
        order = []
        schema = (
            number()
            .refine(lambda n: order.append("refine") or True)
            .super_refine(lambda n, ctx: order.append("super"))
        )
        schema.parse(1)
        assert order == ["refine", "super"]

    def test_after_immediate_failure_is_skipped(self):
        calls = []
        schema = (
            number()
            .refine(lambda n: False, immediate=True)
            .super_refine(lambda n, ctx: calls.append(n))
        )
        schema.safe_parse(1)
        assert calls == []

    def test_exception_propagates(self):
        def explode(value, ctx):
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            string().super_refine(explode).parse("x")

    def test_custom_issue_fields(self):
        def check(value, ctx):
            ctx.add_issue(message="bad", code="custom", expected=1, received=2, value="v")

        err = number().super_refine(check).safe_parse(0).errors[0]
        assert (err.code, err.expected, err.received, err.value) == ("custom", 1, 2, "v")


class TestChaining:
    def test_configuration_returns_same_schema(self):
        schema = string()
        assert schema.min_length(1) is schema
        assert schema.refine(bool) is schema
        assert schema.super_refine(lambda v, ctx: None) is schema
        assert schema.metadata(title="x") is schema
        assert schema.required() is schema

    def test_or_builds_union(self):
        schema = string() | number()
        assert schema.parse(5) == 5
        assert schema.parse("a") == "a"


class TestDescriptor:
    def test_string_descriptor(self):
        out = string().min_length(3).max_length(5).to_json()
        assert out == {
            "type": "text",
            "required": True,
            "minLength": 3,
            "maxLength": 5,
            "description": "A string field",
        }

    def test_metadata_and_describe(self):
        schema = number().describe("Age").metadata(placeholder="42")
        assert schema.description == "Age"
        out = schema.to_json()
        assert out["description"] == "Age"
        assert out["placeholder"] == "42"

    def test_number_bounds(self):
        assert number().min(1).max(9).to_json() == {
            "type": "number",
            "required": True,
            "min": 1,
            "max": 9,
        }

    def test_not_required(self):
        assert string().required(False).to_json()["required"] is False
