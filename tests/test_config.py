from __future__ import annotations

import pytest

from typeex.config import (
    apply_env_overrides,
    clear_caches,
    coerce_env_value,
    get_setting,
    load_config,
)
from typeex.exceptions import ConfigError
from typeex.schemas import SchemaValidationError, validate_payload_safe
from typeex.utils import deep_merge, merge_arrays


def test_bundled_defaults() -> None:
    cfg = load_config()

    assert cfg["stringify"]["sequence_separator"] == ","
    assert cfg["strings"]["ellipsis"] == {"max_length": 100, "marker": "…"}
    assert get_setting("strings.base64.strict") is False


def test_get_setting_missing_key_raises() -> None:
    with pytest.raises(KeyError):
        get_setting("strings.nope")


def test_config_file_layer_overrides_defaults(config_file) -> None:
    config_file("stringify:\n  sequence_separator: '; '\n")

    assert get_setting("stringify.sequence_separator") == "; "
    assert get_setting("strings.ellipsis.max_length") == 100


def test_env_overrides_win_over_config_file(config_file, monkeypatch: pytest.MonkeyPatch) -> None:
    config_file("strings:\n  ellipsis:\n    max_length: 5\n")
    monkeypatch.setenv("TYPEEX_STRINGS__ELLIPSIS__MAX_LENGTH", "7")
    clear_caches()

    assert get_setting("strings.ellipsis.max_length") == 7


def test_missing_config_file_raises(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TYPEEX_CONFIG", str(tmp_path / "absent.yaml"))
    clear_caches()

    with pytest.raises(ConfigError):
        load_config()


def test_non_mapping_config_file_raises(config_file) -> None:
    config_file("- just\n- a list\n")

    with pytest.raises(ConfigError):
        load_config()


def test_invalid_values_fail_schema_validation(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TYPEEX_STRINGS__ELLIPSIS__MAX_LENGTH", "-1")
    clear_caches()

    with pytest.raises(SchemaValidationError):
        load_config()


def test_malformed_env_key_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TYPEEX_STRINGS____MARKER", "x")

    with pytest.raises(ConfigError):
        apply_env_overrides({})


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("true", True),
        ("False", False),
        ("12", 12),
        ("-1.5", -1.5),
        ('{"a": 1}', {"a": 1}),
        ("[1, 2]", [1, 2]),
        (" , ", " , "),
        ("plain", "plain"),
    ],
)
def test_coerce_env_value(raw: str, expected) -> None:
    assert coerce_env_value(raw) == expected


def test_validate_payload_safe_collects_errors() -> None:
    errors = validate_payload_safe(
        {"stringify": {"sequence_separator": 1}, "strings": {}},
        "config",
    )

    assert len(errors) >= 2
    assert any(e.startswith("stringify.sequence_separator") for e in errors)


def test_deep_merge_and_arrays() -> None:
    base = {"a": {"b": 1, "c": [1]}, "d": 1}

    merged = deep_merge(base, {"a": {"c": ["+", 2]}, "d": 2})

    assert merged == {"a": {"b": 1, "c": [1, 2]}, "d": 2}
    assert base == {"a": {"b": 1, "c": [1]}, "d": 1}
    assert merge_arrays([1], ["=", 3]) == [3]
    assert merge_arrays([1], []) == [1]


def test_string_settings_from_env_are_not_coerced(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TYPEEX_STRINGIFY__SEQUENCE_SEPARATOR", "1")
    monkeypatch.setenv("TYPEEX_STRINGS__ELLIPSIS__MARKER", "true")
    clear_caches()

    assert get_setting("stringify.sequence_separator") == "1"
    assert get_setting("strings.ellipsis.marker") == "true"


def test_numeric_separator_from_env_joins_sequences(monkeypatch: pytest.MonkeyPatch) -> None:
    from typeex.stringify import stringify

    monkeypatch.setenv("TYPEEX_STRINGIFY__SEQUENCE_SEPARATOR", "0")
    clear_caches()

    assert stringify(["a", "b"]) == "a0b"


def test_undeclared_env_settings_are_still_coerced(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TYPEEX_EXTRA__LIMIT", "5")

    assert apply_env_overrides({})["extra"]["limit"] == 5
