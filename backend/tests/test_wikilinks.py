"""Tests for [[wikilink]] splitting and normalization."""

from skillgraph.services.wikilinks import (
    TextSegment,
    WikilinkSegment,
    normalize_wikilinks,
    split_wikilinks,
)


def test_split_wikilinks_mixed_with_unmatched_brackets():
    segments = split_wikilinks("Use [[concept-a]] but [[ stays literal")
    assert segments == [
        TextSegment(text="Use "),
        WikilinkSegment(target="concept-a"),
        TextSegment(text=" but [[ stays literal"),
    ]


def test_split_wikilinks_plain_text():
    assert split_wikilinks("no links [here] at all") == [TextSegment(text="no links [here] at all")]


def test_split_wikilinks_empty_string():
    assert split_wikilinks("") == []


def test_split_wikilinks_malformed_never_raises():
    for text in ["[[", "]]", "[[]]", "[[a", "a]]", "[[[[x]]]]", "[[a\nb]]", "[[ [x] ]]"]:
        segments = split_wikilinks(text)
        rebuilt = "".join(
            s.text if isinstance(s, TextSegment) else f"[[{s.target}]]" for s in segments
        )
        assert rebuilt == text


def test_split_wikilinks_nested_brackets_take_innermost():
    segments = split_wikilinks("[[[[x]]]]")
    assert [s.target for s in segments if isinstance(s, WikilinkSegment)] == ["x"]


def test_normalize_wikilinks_slugifies_targets():
    text = "See [[Retry Policy]] and [[key-expiry]], not [[ alone."
    assert normalize_wikilinks(text) == "See [[retry-policy]] and [[key-expiry]], not [[ alone."


def test_normalize_wikilinks_skips_code():
    text = "Use `x[[Foo Bar]]` then [[Foo Bar]]\n\n```\ny = m[[Foo Bar]]\n```\nAfter [[Foo Bar]]"
    assert normalize_wikilinks(text) == (
        "Use `x[[Foo Bar]]` then [[foo-bar]]\n\n```\ny = m[[Foo Bar]]\n```\nAfter [[foo-bar]]"
    )
