"""Neutral key model shared by the engine and whatever input layer feeds it.

The input layer hands the engine raw integer codes. Printable characters are
their code point; special keys use the sentinel values below. The values only
need to agree between the host and :class:`KeyDecoder`; nothing in the core
depends on a terminal library.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Mapping, Optional

KEY_ENTER = 10
KEY_RETURN = 13
KEY_ESCAPE = 27
KEY_DELETE = 127
KEY_DOWN = 258
KEY_UP = 259
KEY_LEFT = 260
KEY_RIGHT = 261
KEY_BACKSPACE = 263
KEY_F0 = 264
MAX_FUNCTION_KEY = 63


class KeyKind(str, Enum):
    PRINTABLE = "printable"
    ARROW_UP = "arrow_up"
    ARROW_DOWN = "arrow_down"
    ARROW_LEFT = "arrow_left"
    ARROW_RIGHT = "arrow_right"
    ENTER = "enter"
    ESCAPE = "escape"
    BACKSPACE = "backspace"
    FUNCTION = "function"


@dataclass(frozen=True, slots=True)
class Key:
    """Decoded key press."""

    kind: KeyKind
    char: Optional[str] = None
    number: Optional[int] = None

    @classmethod
    def printable(cls, char: str) -> "Key":
        if len(char) != 1:
            raise ValueError("printable keys carry exactly one character")
        return cls(KeyKind.PRINTABLE, char=char)

    @classmethod
    def function(cls, number: int) -> "Key":
        return cls(KeyKind.FUNCTION, number=number)

    @property
    def is_digit(self) -> bool:
        return self.kind is KeyKind.PRINTABLE and self.char is not None and (
            "0" <= self.char <= "9"
        )

    def is_char(self, char: str) -> bool:
        return self.kind is KeyKind.PRINTABLE and self.char == char


ARROW_UP = Key(KeyKind.ARROW_UP)
ARROW_DOWN = Key(KeyKind.ARROW_DOWN)
ARROW_LEFT = Key(KeyKind.ARROW_LEFT)
ARROW_RIGHT = Key(KeyKind.ARROW_RIGHT)
ENTER = Key(KeyKind.ENTER)
ESCAPE = Key(KeyKind.ESCAPE)
BACKSPACE = Key(KeyKind.BACKSPACE)

_DEFAULT_CODES: Dict[int, Key] = {
    KEY_ENTER: ENTER,
    KEY_RETURN: ENTER,
    KEY_ESCAPE: ESCAPE,
    KEY_DELETE: BACKSPACE,
    KEY_BACKSPACE: BACKSPACE,
    KEY_DOWN: ARROW_DOWN,
    KEY_UP: ARROW_UP,
    KEY_LEFT: ARROW_LEFT,
    KEY_RIGHT: ARROW_RIGHT,
}


def function_key_code(number: int) -> int:
    if not 0 <= number <= MAX_FUNCTION_KEY:
        raise ValueError(f"function key F{number} is out of range")
    return KEY_F0 + number


def encode(key: Key) -> int:
    """Inverse of the default decoding, for hosts and tests."""

    if key.kind is KeyKind.PRINTABLE and key.char is not None:
        return ord(key.char)
    if key.kind is KeyKind.FUNCTION and key.number is not None:
        return function_key_code(key.number)
    for code, candidate in _DEFAULT_CODES.items():
        if candidate == key:
            return code
    raise ValueError(f"cannot encode {key!r}")


class KeyDecoder:
    """Maps raw integer codes to :class:`Key` values.

    ``extra_codes`` lets a host register its own sentinels (e.g. a second
    backspace code) on top of the defaults.
    """

    def __init__(self, extra_codes: Mapping[int, Key] | None = None) -> None:
        self._codes: Dict[int, Key] = dict(_DEFAULT_CODES)
        self._codes.update(extra_codes or {})

    def decode(self, code: int) -> Optional[Key]:
        """Return the key for ``code`` or ``None`` when it means nothing."""

        known = self._codes.get(code)
        if known is not None:
            return known
        if KEY_F0 <= code <= KEY_F0 + MAX_FUNCTION_KEY:
            return Key.function(code - KEY_F0)
        if code < 0 or code > 0x10FFFF:
            return None
        char = chr(code)
        if not char.isprintable() and char != "\t":
            return None
        return Key.printable(char)


__all__ = [
    "ARROW_DOWN",
    "ARROW_LEFT",
    "ARROW_RIGHT",
    "ARROW_UP",
    "BACKSPACE",
    "ENTER",
    "ESCAPE",
    "KEY_BACKSPACE",
    "KEY_DELETE",
    "KEY_DOWN",
    "KEY_ENTER",
    "KEY_ESCAPE",
    "KEY_F0",
    "KEY_LEFT",
    "KEY_RETURN",
    "KEY_RIGHT",
    "KEY_UP",
    "Key",
    "KeyDecoder",
    "KeyKind",
    "encode",
    "function_key_code",
]
