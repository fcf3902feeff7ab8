"""
Tests for the jsonschema integration.
"""

import jsonschema
import pytest

from schema_formats import ErrorCode, PatternChecker
from schema_formats.engine import FormatIssue, build_format_checker, iter_format_messages


SCHEMA = {
    "type": "object",
    "properties": {
        "email": {"type": "string", "format": "email"},
        "created": {"type": "string", "format": "date-time"},
        "tags": {"type": "array", "items": {"type": "string", "format": "hostname"}},
        "a/b": {"format": "uuid"},
        "extension": {"format": "x-not-registered"},
    },
}


class TestBuildFormatChecker:

    def test_exposes_registry_formats(self, registry):
        checker = build_format_checker(registry)
        assert set(checker.checkers) == set(registry.names())

    def test_selected_formats(self, registry):
        checker = build_format_checker(registry, formats=["email"])
        assert set(checker.checkers) == {"email"}

    def test_custom_format_with_jsonschema_validate(self, registry):
        registry.add("sku", PatternChecker(r"[A-Z]{3}-[0-9]{4}"))
        schema = {"type": "string", "format": "sku"}
        checker = build_format_checker(registry)

        jsonschema.validate("ABC-1234", schema, format_checker=checker)
        with pytest.raises(jsonschema.ValidationError):
            jsonschema.validate("abc", schema, format_checker=checker)

    def test_follows_later_registry_changes(self, registry):
        checker = build_format_checker(registry)
        assert not checker.conforms("nope", "email")
        registry.add("email", PatternChecker(".*"))
        assert checker.conforms("nope", "email")
        registry.remove("email")
        assert checker.conforms("nope", "email")

    def test_non_strings_pass(self, registry):
        checker = build_format_checker(registry)
        assert checker.conforms(42, "email")
        assert checker.conforms(None, "uuid")


class TestIterFormatMessages:

    def test_valid_instance(self, registry):
        instance = {
            "email": "a@b.com",
            "created": "2023-05-01T12:00:00Z",
            "tags": ["example.com"],
            "a/b": "123e4567-e89b-12d3-a456-426614174000",
            "extension": "anything",
        }
        assert list(iter_format_messages(instance, SCHEMA, registry)) == []

    def test_reports_format_failures(self, registry):
        instance = {
            "email": "not-an-email",
            "created": "yesterday",
            "tags": ["ok.example", "-bad-"],
            "a/b": "NOT-A-UUID",
            "extension": "anything",
        }
        issues = list(iter_format_messages(instance, SCHEMA, registry))

        by_path = {issue.path: issue for issue in issues}
        assert set(by_path) == {"/email", "/created", "/tags/1", "/a~1b"}
        assert all(issue.message.code is ErrorCode.DOES_NOT_MATCH_FORMAT for issue in issues)
        assert by_path["/email"].message.description == "does not match format 'email'"
        assert by_path["/tags/1"].value == "-bad-"

    def test_ignores_other_keywords(self, registry):
        instance = {"email": 5, "created": "2023-05-01"}
        assert list(iter_format_messages(instance, SCHEMA, registry)) == []

    def test_root_instance(self, registry):
        issues = list(iter_format_messages("nope", {"format": "ipv4"}, registry))
        assert len(issues) == 1
        assert issues[0].path == ""
        assert issues[0].describe() == "(root) : does not match format 'ipv4', given \"nope\""

    def test_default_registry(self):
        issues = list(iter_format_messages("nope", {"format": "email"}))
        assert [issue.message.code for issue in issues] == [ErrorCode.DOES_NOT_MATCH_FORMAT]

    def test_nested_under_any_of(self, registry):
        schema = {"anyOf": [{"properties": {"a": {"format": "email"}}}]}
        issues = list(iter_format_messages({"a": "x"}, schema, registry))
        assert [(issue.path, issue.value) for issue in issues] == [("/a", "x")]
        assert issues[0].message.description == "does not match format 'email'"

    def test_nested_under_one_of_and_items(self, registry):
        schema = {
            "type": "array",
            "items": {"oneOf": [{"format": "ipv4"}, {"format": "ipv6"}]},
        }
        issues = list(iter_format_messages(["10.0.0.1", "nope"], schema, registry))
        assert sorted(issue.message.description for issue in issues) == [
            "does not match format 'ipv4'",
            "does not match format 'ipv6'",
        ]
        assert {issue.path for issue in issues} == {"/1"}

    def test_issue_describe_with_path(self, registry):
        issue = next(iter_format_messages({"email": "x"}, SCHEMA, registry))
        assert isinstance(issue, FormatIssue)
        assert issue.describe() == "/email : does not match format 'email', given \"x\""
