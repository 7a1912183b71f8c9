"""Tests for the Errors accumulator."""

from veto import ErrorEntry, Errors


class TestErrorsAdd:
    def test_new_collection_is_empty(self):
        errors = Errors()
        assert errors.empty
        assert len(errors) == 0
        assert errors.keys() == []

    def test_add_returns_self(self):
        errors = Errors()
        assert errors.add("name", "presence") is errors

    def test_add_records_entry(self):
        errors = Errors().add("name", "max_length", 10)
        assert not errors.empty
        assert errors["name"] == [ErrorEntry("max_length", (10,))]

    def test_entries_accumulate_under_same_key(self):
        """Adding to a key twice keeps both entries in order."""
        errors = Errors()
        errors.add("name", "presence")
        errors.add("name", "presence")
        errors.add("name", "max_length", 5)
        assert [e.message for e in errors["name"]] == [
            "presence",
            "presence",
            "max_length",
        ]
        assert errors.count() == 3
        assert len(errors) == 1

    def test_keys_keep_insertion_order(self):
        errors = Errors().add("b", "x").add("a", "y").add("b", "z")
        assert errors.keys() == ["b", "a"]
        assert list(errors) == ["b", "a"]


class TestErrorsRead:
    def test_missing_key_reads_empty(self):
        errors = Errors()
        assert errors["nope"] == []
        assert "nope" not in errors
        assert errors.empty

    def test_returned_lists_are_copies(self):
        errors = Errors().add("name", "presence")
        errors["name"].append(ErrorEntry("bogus"))
        assert errors.count() == 1

    def test_to_dict(self):
        errors = Errors().add("age", "greater_than_or_equal_to", 18)
        assert errors.to_dict() == {
            "age": [{"message": "greater_than_or_equal_to", "args": [18]}]
        }

    def test_items(self):
        errors = Errors().add("name", "presence")
        assert errors.items() == [("name", [ErrorEntry("presence")])]

    def test_equality(self):
        a = Errors().add("name", "presence").add("age", "x", 1)
        b = Errors().add("name", "presence").add("age", "x", 1)
        assert a == b
        assert a != Errors().add("name", "presence")


class TestFullMessages:
    def test_default_render(self):
        errors = Errors().add("name", "presence").add("age", "greater_than_or_equal_to", 18)
        assert errors.full_messages() == [
            "name presence",
            "age greater_than_or_equal_to",
        ]

    def test_custom_render(self):
        templates = {
            "presence": "is not present",
            "max_length": "is too long (maximum is {} characters)",
        }

        def render(key, message, args):
            return f"{key} {templates[message].format(*args)}"

        errors = Errors().add("name", "presence").add("title", "max_length", 5)
        assert errors.full_messages(render) == [
            "name is not present",
            "title is too long (maximum is 5 characters)",
        ]
