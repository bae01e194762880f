from __future__ import annotations

import pytest

from modal_engine.config import EngineConfig
from modal_engine.keys import (
    ARROW_LEFT,
    ARROW_UP,
    BACKSPACE,
    ENTER,
    ESCAPE,
    KEY_BACKSPACE,
    KEY_DELETE,
    KEY_ENTER,
    KEY_ESCAPE,
    KEY_LEFT,
    KEY_RETURN,
    KEY_UP,
    Key,
    KeyDecoder,
    KeyKind,
    encode,
    function_key_code,
)


def test_decoder_maps_special_codes() -> None:
    decoder = KeyDecoder()

    assert decoder.decode(KEY_UP) == ARROW_UP
    assert decoder.decode(KEY_LEFT) == ARROW_LEFT
    assert decoder.decode(KEY_ENTER) == ENTER
    assert decoder.decode(KEY_RETURN) == ENTER
    assert decoder.decode(KEY_ESCAPE) == ESCAPE
    assert decoder.decode(KEY_BACKSPACE) == BACKSPACE
    assert decoder.decode(KEY_DELETE) == BACKSPACE


def test_decoder_maps_printable_and_function_keys() -> None:
    decoder = KeyDecoder()

    assert decoder.decode(ord("a")) == Key.printable("a")
    assert decoder.decode(ord("é")) == Key.printable("é")
    assert decoder.decode(function_key_code(1)) == Key.function(1)
    assert decoder.decode(function_key_code(12)).number == 12  # type: ignore[union-attr]


def test_decoder_ignores_meaningless_codes() -> None:
    decoder = KeyDecoder()

    assert decoder.decode(1) is None
    assert decoder.decode(-5) is None
    assert decoder.decode(0x110000) is None


def test_decoder_accepts_host_codes() -> None:
    decoder = KeyDecoder({8: BACKSPACE})

    assert decoder.decode(8) == BACKSPACE


def test_encode_matches_default_decoding() -> None:
    decoder = KeyDecoder()

    for key in (Key.printable("x"), ARROW_UP, ESCAPE, Key.function(3)):
        assert decoder.decode(encode(key)) == key


def test_key_helpers() -> None:
    assert Key.printable("7").is_digit
    assert not Key.printable("a").is_digit
    assert not ENTER.is_digit
    assert Key.printable("q").is_char("q")
    assert Key.function(2).kind is KeyKind.FUNCTION
    with pytest.raises(ValueError):
        Key.printable("ab")
    with pytest.raises(ValueError):
        function_key_code(99)


def test_config_defaults() -> None:
    config = EngineConfig()

    assert config.help_text == "   Press F1 to quit"
    assert config.status_separator == "  |  "
    assert config.quit_function_key == 1


def test_config_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MODAL_ENGINE_HELP_TEXT", "F10 quits")
    monkeypatch.setenv("MODAL_ENGINE_STATUS_SEPARATOR", " / ")
    monkeypatch.setenv("MODAL_ENGINE_QUIT_KEY", "10")

    config = EngineConfig.from_env()

    assert config.help_text == "F10 quits"
    assert config.status_separator == " / "
    assert config.quit_function_key == 10


def test_config_from_explicit_mapping_ignores_process_env(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("MODAL_ENGINE_HELP_TEXT", "ignored")

    config = EngineConfig.from_env({})

    assert config == EngineConfig()


def test_config_rejects_invalid_quit_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MODAL_ENGINE_QUIT_KEY", "F1")
    with pytest.raises(ValueError):
        EngineConfig.from_env()

    with pytest.raises(ValueError):
        EngineConfig(quit_function_key=-1)
