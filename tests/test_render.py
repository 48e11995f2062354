"""Tests for response template rendering."""

import pytest

from dispatch.render import render_response


class TestNodeName:
    """Test ${nodeName} substitution."""

    def test_replaces_every_occurrence(self):
        """Test that all ${nodeName} occurrences are replaced."""
        result = render_response("${nodeName} and ${nodeName}", "imsi-1", [])

        assert result == "imsi-1 and imsi-1"
        assert "${nodeName}" not in result

    @pytest.mark.parametrize("identity", ["imsi-1", "MSSIM-gnb-001-01-1", "", "${nodeName}"])
    def test_no_placeholder_left(self, identity):
        """Test that the placeholder never survives rendering."""
        result = render_response("x ${nodeName} y", identity, ["sub"])

        assert result == f"x {identity} y"

    def test_template_without_placeholders(self):
        """Test that plain text is returned unchanged."""
        assert render_response("plain text", "imsi-1", ["a", "b"]) == "plain text"


class TestArgs:
    """Test ${argN} substitution."""

    def test_arg_index_matches_list_index(self):
        """Test that ${argN} renders args[N]."""
        args = ["sub", "first", "second"]

        assert render_response("${arg1}", "n", args) == "first"
        assert render_response("${arg2}", "n", args) == "second"

    def test_index_zero_is_never_substituted(self):
        """Test that ${arg0} is left literally."""
        assert render_response("${arg0}", "n", ["sub", "x"]) == "${arg0}"

    def test_out_of_range_is_preserved(self):
        """Test that out-of-range placeholders pass through unchanged."""
        template = "a=${arg1} b=${arg3}"

        assert render_response(template, "n", ["sub", "one"]) == "a=one b=${arg3}"

    def test_empty_args(self):
        """Test rendering with no arguments at all."""
        assert render_response("${arg1}", "n", []) == "${arg1}"

    def test_multi_digit_index(self):
        """Test that two-digit indexes are supported."""
        args = [str(i) for i in range(12)]

        assert render_response("${arg11}", "n", args) == "11"

    def test_substituted_values_are_not_rescanned(self):
        """Test that an argument containing a placeholder stays literal."""
        result = render_response("${arg1} ${arg2}", "imsi-1", ["sub", "${arg2}", "x"])

        assert result == "${arg2} x"

    def test_malformed_placeholders_pass_through(self):
        """Test that near-miss placeholders are not touched."""
        template = "$arg1 ${arg} ${ARG1} ${arg01} ${nodename}"

        assert render_response(template, "n", ["s", "v"]) == template

    def test_mixed(self):
        """Test the canonical registration response."""
        result = render_response("Registered ${nodeName} with args ${arg1}", "imsi-1", ["default", "foo"])

        assert result == "Registered imsi-1 with args foo"
