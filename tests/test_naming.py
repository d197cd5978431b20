"""Tests for the naming module."""

from gqlcli.naming import command_name, comment_text, is_positional, positional_key


class TestIsPositional:
    """Variables named _ or _<digits> bind positional arguments."""

    def test_bare_underscore(self):
        assert is_positional("_")

    def test_numbered(self):
        assert is_positional("_1")
        assert is_positional("_2")
        assert is_positional("_10")

    def test_named_variables(self):
        assert not is_positional("id")
        assert not is_positional("_id")
        assert not is_positional("_1a")
        assert not is_positional("a_1")
        assert not is_positional("")

    def test_positional_key_is_one_based(self):
        assert positional_key(0) == "_1"
        assert positional_key(4) == "_5"


class TestCommentText:
    """Comment lines concatenate without separators."""

    def test_absent(self):
        assert comment_text(None) == ""
        assert comment_text(()) == ""

    def test_order_preserved(self):
        assert comment_text([" first", " second"]) == " first second"

    def test_no_separator_added(self):
        assert comment_text(["a", "b", "c"]) == "abc"


class TestCommandName:
    """Root command name derived from the document path."""

    def test_default_document(self):
        assert command_name(".gql") == "gqlcli"

    def test_gql_suffix(self):
        assert command_name("users.gql") == "users"

    def test_graphql_suffix_in_directory(self):
        assert command_name("conf/api.graphql") == "api"

    def test_hidden_file(self):
        assert command_name("/home/me/.github.gql") == "github"

    def test_empty(self):
        assert command_name("") == "gqlcli"
