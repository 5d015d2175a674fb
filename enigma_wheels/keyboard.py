# keyboard.py
from __future__ import annotations

import string

from .debug import debug

ALPHABET: str = string.ascii_uppercase
SIZE: int = len(ALPHABET)

_alpha_to_index: dict[str, int] = {ch: i for i, ch in enumerate(ALPHABET)}


def is_key(ch: str) -> bool:
    """True for the 26 uppercase letters; everything else bypasses the wheels."""
    return ch in _alpha_to_index


# letter → integer signal
def to_position(letter: str) -> int:
    try:
        pos = _alpha_to_index[letter]
    except KeyError:
        raise ValueError(f"Invalid character {letter!r} for the A-Z alphabet.")
    debug.log("keyboard", "%s->%d", letter, pos)
    return pos


# integer signal → letter
def to_letter(position: int) -> str:
    if not (0 <= position < SIZE):
        raise ValueError(f"Signal {position} out of range 0–{SIZE - 1}")
    return ALPHABET[position]
