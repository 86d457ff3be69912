from dataclasses import dataclass, field
from typing import Optional

from encoder.fields import FieldInfo, Member, field_info, find_field, form_field, parse_tag, struct_members
from encoder.options import Options


@dataclass
class Inner:
    Foo: str = "inner"
    Bar: str = "bar"


@dataclass
class Outer:
    Foo: str = "outer"
    Inner: Optional[Inner] = form_field(embedded=True, default_factory=Inner)


@dataclass
class Person:
    Name: str = "Ada"


@dataclass
class Account:
    user_id: int = form_field("id", default=7)
    secret: str = form_field("-", default="hidden")
    nickname: str = form_field(",omitempty", default="")
    _token: str = "t"


class TestFieldInfo:

    def test_untagged_field_uses_declared_name(self):
        assert field_info(Options(), Member("Name")) == FieldInfo("Name", False)

    def test_tag_overrides_name(self):
        assert field_info(Options(), Member("user_id", "id")) == FieldInfo("id", False)

    def test_omitempty_keeps_declared_name(self):
        assert field_info(Options(), Member("nickname", ",omitempty")) == FieldInfo("nickname", True)

    def test_private_fields_are_omitted(self):
        assert field_info(Options(), Member("_token", "token")) == FieldInfo("-", False)
        assert field_info(Options(omitted_key="skip"), Member("_token")) == FieldInfo("skip", False)

    def test_parse_tag(self):
        assert parse_tag("name") == ("name", False)
        assert parse_tag("name,omitempty") == ("name", True)
        assert parse_tag(",omitempty") == ("", True)
        assert parse_tag("-") == ("-", False)


def test_struct_members_follow_declaration_order():
    members = struct_members(Account())

    assert [m.attr for m in members] == ["user_id", "secret", "nickname", "_token"]
    assert members[0].tag == "id"


def test_form_field_keeps_other_metadata():
    @dataclass
    class Tagged:
        value: int = form_field("v", default=0, metadata={"unit": "cm"})

    members = struct_members(Tagged())

    assert members[0].tag == "v"


class TestFindField:

    def test_exact_match(self):
        found = find_field(Options(), Person(), "Name")

        assert found.attr == "Name"
        assert found.value == "Ada"

    def test_outer_field_wins_over_embedded(self):
        outer = Outer()
        found = find_field(Options(), outer, "Foo")

        assert found.owner is outer
        assert found.value == "outer"

    def test_embedded_fields_are_searched(self):
        outer = Outer()
        found = find_field(Options(), outer, "Bar")

        assert found.owner is outer.Inner
        assert found.value == "bar"

    def test_missing_embedded_struct_is_skipped(self):
        assert find_field(Options(), Outer(Inner=None), "Bar") is None

    def test_case_sensitive_by_default(self):
        assert find_field(Options(), Person(), "name") is None

    def test_caseless_fallback(self):
        found = find_field(Options(caseless=True), Person(), "name")

        assert found.attr == "Name"

    def test_first_caseless_match_wins(self):
        @dataclass
        class Shouting:
            NAME: str = "upper"
            Name: str = "title"

        found = find_field(Options(caseless=True), Shouting(), "name")

        assert found.attr == "NAME"

    def test_exact_match_beats_earlier_caseless_match(self):
        @dataclass
        class Mixed:
            NAME: str = "upper"
            name: str = "lower"

        found = find_field(Options(caseless=True), Mixed(), "name")

        assert found.attr == "name"

    def test_tagged_name_is_used(self):
        account = Account()

        assert find_field(Options(), account, "id").attr == "user_id"
        assert find_field(Options(), account, "user_id") is None

    def test_omitted_and_private_fields_are_invisible(self):
        account = Account()

        assert find_field(Options(), account, "secret") is None
        assert find_field(Options(), account, "-") is None
        assert find_field(Options(), account, "_token") is None

    def test_named_tuple_fields(self):
        from typing import NamedTuple

        class Point(NamedTuple):
            x: int
            y: int

        assert find_field(Options(), Point(1, 2), "y").value == 2
