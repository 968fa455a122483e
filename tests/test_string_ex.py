from __future__ import annotations

import pytest

from typeex import CannotDecodeBase64StringError, StringEx


def test_is_null_or_empty() -> None:
    assert StringEx.is_null_or_empty(None)
    assert StringEx.is_null_or_empty("")
    assert not StringEx.is_null_or_empty(" ")


def test_stringify_helper_delegates() -> None:
    assert StringEx.stringify([1, True]) == "1,true"
    assert StringEx.stringify(["a"], lambda value: "x") == "x"


@pytest.mark.parametrize(
    "needle, expected",
    [
        ("bar", True),
        ("plugh", False),
        (["plugh", "baz"], True),
        (["plugh", "xyzzy"], False),
        (True, False),
        (12, True),
    ],
)
def test_contains(needle, expected: bool) -> None:
    assert StringEx("foo bar baz 123").contains(needle) is expected


@pytest.mark.parametrize(
    "string, max_length, expected",
    [
        ("short", 10, "short"),
        ("abcdefghij", 5, "abcde…"),
        ("the quick brown fox", 12, "the quick …"),
        ("the quick brown fox", 10, "the quick …"),
        ("exactly", 7, "exactly"),
    ],
)
def test_ellipsis(string: str, max_length: int, expected: str) -> None:
    assert StringEx(string).ellipsis(max_length).to_string() == expected


def test_ellipsis_uses_configured_defaults(config_file) -> None:
    config_file("strings:\n  ellipsis:\n    max_length: 3\n    marker: '...'\n")

    assert StringEx("abcdef").ellipsis().to_string() == "abc..."


def test_base64_round_trip() -> None:
    encoded = StringEx("héllo wörld").encode_base64()

    assert encoded.to_string() == "aMOpbGxvIHfDtnJsZA=="
    assert encoded.decode_base64().to_string() == "héllo wörld"


def test_decode_base64_non_strict_ignores_foreign_characters() -> None:
    assert StringEx("Zm9v!").decode_base64().to_string() == "foo"


def test_decode_base64_strict_rejects_foreign_characters() -> None:
    with pytest.raises(CannotDecodeBase64StringError) as excinfo:
        StringEx("Zm9v!").decode_base64(strict=True)

    assert excinfo.value.string == "Zm9v!"
    assert excinfo.value.context["strict"] is True


@pytest.mark.parametrize(
    "encoded, expected",
    [
        ("Zm9", "fo"),
        ("Zg", "f"),
        ("Zm9vY", "foo"),
        ("Zm 9v\nYmFy", "foobar"),
    ],
)
def test_decode_base64_non_strict_restores_missing_padding(encoded: str, expected: str) -> None:
    assert StringEx(encoded).decode_base64().to_string() == expected


def test_decode_base64_strict_rejects_missing_padding() -> None:
    with pytest.raises(CannotDecodeBase64StringError):
        StringEx("Zm9").decode_base64(strict=True)


def test_decode_base64_rejects_non_utf8_bytes() -> None:
    with pytest.raises(CannotDecodeBase64StringError):
        StringEx("/w==").decode_base64()


def test_prefix_and_suffix() -> None:
    string = StringEx("FooBar")

    assert string.starts_with("Foo")
    assert not string.starts_with("foo")
    assert string.starts_with_invariant_case("foo")
    assert string.ends_with("Bar")
    assert not string.ends_with("bar")
    assert string.ends_with_invariant_case("BAR")


def test_equals() -> None:
    string = StringEx("FooBar")

    assert string.equals("FooBar")
    assert not string.equals("foobar")
    assert string.equals_invariant_case("foobar")
    assert string == StringEx("FooBar")
    assert hash(string) == hash(StringEx("FooBar"))


def test_remove_prefix() -> None:
    assert StringEx("prefix-body").remove_prefix("prefix-").to_string() == "body"
    assert StringEx("body").remove_prefix("prefix-").to_string() == "body"


def test_trim() -> None:
    assert StringEx(" \t foo \n\x0b").trim().to_string() == "foo"
    assert str(StringEx("  x ").trim()) == "x"
