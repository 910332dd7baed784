"""Tests for Discord mention rendering."""

from hookcord.identity import IdentityDirectory
from hookcord.mentions import MentionFormatter, render_one
from tests.conftest import CHAAD_ID, FROSTER_ID


def test_render_one():
    assert render_one("335363734446931968") == "<@335363734446931968>"


def test_render_many_drops_unmapped_users():
    formatter = MentionFormatter(IdentityDirectory({"x": "1"}))
    assert formatter.render_many(["x", "y"]) == ["<@1>"]


def test_render_many_preserves_input_order(formatter):
    assert formatter.render_many(["chaad98", "froster01"]) == [
        f"<@{CHAAD_ID}>",
        f"<@{FROSTER_ID}>",
    ]
    assert formatter.render_many(["froster01", "chaad98"]) == [
        f"<@{FROSTER_ID}>",
        f"<@{CHAAD_ID}>",
    ]


def test_render_many_resolves_case_insensitively(formatter):
    assert formatter.render_many(["Chaad98"]) == [f"<@{CHAAD_ID}>"]


def test_render_many_all_unmapped_is_empty_list(formatter):
    assert formatter.render_many(["nobody", "ghost"]) == []
    assert formatter.render_many([]) == []


def test_mention_returns_none_for_unmapped(formatter):
    assert formatter.mention("nobody") is None
    assert formatter.mention(None) is None


def test_render_joins_with_single_space(formatter):
    assert formatter.render(["froster01", "nobody", "chaad98"]) == (
        f"<@{FROSTER_ID}> <@{CHAAD_ID}>"
    )


def test_render_returns_none_without_tokens(formatter):
    assert formatter.render(["nobody"]) is None
