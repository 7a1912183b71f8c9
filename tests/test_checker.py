"""Tests for Checker composition and invocation."""

from types import SimpleNamespace

import pytest

from veto import (
    CheckContext,
    Checker,
    ConfigurationError,
    Errors,
    MethodRule,
    OptionNotFoundError,
    Rule,
)
from veto.check import get_check


def run(checker, entity, validator=None):
    errors = Errors()
    checker(CheckContext(entity=entity, validator=validator, errors=errors))
    return errors


class TestValidates:
    def test_one_rule_per_check_kind(self):
        checker = Checker()
        rules = checker.validates("name", presence=True, max_length={"with": 5})
        assert [r.check.kind for r in rules] == ["presence", "max_length"]
        assert checker.children == tuple(rules)

    def test_true_means_default_options(self):
        checker = Checker()
        (rule,) = checker.validates("name", presence=True)
        assert rule.options.message is None
        assert rule.options.on is None

    def test_false_and_none_skip(self):
        checker = Checker()
        assert checker.validates("name", presence=False, max_length=None) == []
        assert len(checker) == 0

    def test_scalar_is_with_shorthand(self):
        checker = Checker()
        (rule,) = checker.validates("name", max_length=7)
        assert rule.options.with_ == 7

    def test_common_options_apply_to_every_check(self):
        checker = Checker()
        rules = checker.validates("nick", on="name", presence=True, max_length=3)
        assert [r.options.on for r in rules] == ["name", "name"]

    def test_per_check_options_win_over_common(self):
        checker = Checker()
        presence, length = checker.validates(
            "nick", message="bad", presence=True, max_length={"with": 3, "message": "long"}
        )
        assert presence.options.message == "bad"
        assert length.options.message == "long"

    def test_unknown_check_kind(self):
        checker = Checker()
        with pytest.raises(ConfigurationError):
            checker.validates("name", telepathy=True)
        assert len(checker) == 0

    def test_missing_required_option_fails_at_registration(self):
        checker = Checker()
        with pytest.raises(KeyError):
            checker.validates("name", max_length=True)
        with pytest.raises(OptionNotFoundError):
            checker.validates("age", greater_than_or_equal_to={})
        assert len(checker) == 0

    def test_rules_are_immutable(self):
        checker = Checker()
        (rule,) = checker.validates("name", presence=True)
        with pytest.raises(AttributeError):
            rule.attribute = "other"


class TestWithOptions:
    def test_overlay_applies_inside_block_only(self):
        checker = Checker()
        with checker.with_options(on="public"):
            (inside,) = checker.validates("internal", presence=True)
        (outside,) = checker.validates("internal", presence=True)
        assert inside.options.on == "public"
        assert outside.options.on is None

    def test_explicit_options_override_shared(self):
        checker = Checker()
        with checker.with_options(on="public", message="shared"):
            (rule,) = checker.validates(
                "internal", presence={"message": "own"}
            )
        assert rule.options.on == "public"
        assert rule.options.message == "own"

    def test_nested_blocks(self):
        checker = Checker()
        with checker.with_options(on="outer", message="m"):
            with checker.with_options(on="inner"):
                (rule,) = checker.validates("x", presence=True)
            (after,) = checker.validates("x", presence=True)
        assert (rule.options.on, rule.options.message) == ("inner", "m")
        assert after.options.on == "outer"

    def test_overlay_popped_when_block_raises(self):
        checker = Checker()
        with pytest.raises(ConfigurationError):
            with checker.with_options(on="public"):
                checker.validates("x", telepathy=True)
        (rule,) = checker.validates("x", presence=True)
        assert rule.options.on is None

    def test_shared_with_value(self):
        checker = Checker()
        with checker.with_options(**{"with": 3}):
            (rule,) = checker.validates("code", max_length=True)
        assert rule.options.with_ == 3


class TestCall:
    def test_runs_every_rule_without_short_circuit(self):
        checker = Checker()
        checker.validates("name", presence=True, max_length=2)
        checker.validates("title", presence=True)
        checker.validates("age", greater_than_or_equal_to=18)

        errors = run(checker, {"name": None, "title": "", "age": "x"})
        assert errors.keys() == ["name", "title", "age"]
        assert [e.message for e in errors["name"]] == ["presence", "max_length"]

    def test_same_error_key_keeps_every_entry(self):
        checker = Checker()
        checker.validates("first", on="full_name", presence=True)
        checker.validates("last", on="full_name", presence=True)

        errors = run(checker, {"first": "", "last": ""})
        assert errors.keys() == ["full_name"]
        assert errors.count() == 2

    def test_reads_object_attributes(self):
        checker = Checker()
        checker.validates("name", presence=True)
        assert run(checker, SimpleNamespace(name="Ada")).empty
        assert not run(checker, SimpleNamespace(name="")).empty

    def test_missing_mapping_key_reads_as_none(self):
        checker = Checker()
        checker.validates("name", presence=True)
        assert "name" in run(checker, {})

    def test_missing_object_attribute_raises(self):
        checker = Checker()
        checker.validates("name", presence=True)
        with pytest.raises(AttributeError):
            run(checker, SimpleNamespace())

    def test_nested_checker(self):
        inner = Checker()
        inner.validates("street", presence=True)
        outer = Checker()
        outer.validates("city", presence=True)
        outer.validate(inner)

        errors = run(outer, {"city": "", "street": ""})
        assert errors.keys() == ["city", "street"]


class TestValidate:
    def test_method_rule_by_name(self):
        class Owner:
            def __init__(self):
                self.errors = Errors()

            def names_differ(self, entity):
                if entity["first"] == entity["last"]:
                    self.errors.add("last", "same_as_first")

        owner = Owner()
        checker = Checker()
        rule = checker.validate("names_differ")
        assert isinstance(rule, MethodRule)

        checker(CheckContext(entity={"first": "a", "last": "a"}, validator=owner, errors=owner.errors))
        assert owner.errors["last"][0].message == "same_as_first"

    def test_callable_receives_validator_entity_and_options(self):
        seen = []
        checker = Checker()
        with checker.with_options(on="total"):
            checker.validate(lambda v, e, **kw: seen.append((v, e, kw)), limit=3)

        run(checker, {"x": 1}, validator="owner")
        assert seen == [("owner", {"x": 1}, {"on": "total", "limit": 3})]

    def test_prebuilt_rule(self):
        checker = Checker()
        rule = Rule.build("name", get_check("presence"))
        assert checker.validate(rule) is rule
        assert checker.children == (rule,)

    def test_rejects_other_targets(self):
        with pytest.raises(ConfigurationError):
            Checker().validate(42)


class TestFromChildren:
    def test_copies_children(self):
        source = [Rule.build("name", get_check("presence"))]
        checker = Checker.from_children(source)
        checker.validates("title", presence=True)
        assert len(source) == 1
        assert len(checker) == 2

    def test_children_snapshot_is_read_only(self):
        checker = Checker()
        checker.validates("name", presence=True)
        assert isinstance(checker.children, tuple)
