# wheel.py
from __future__ import annotations

from collections.abc import Iterable

from .debug import debug
from .keyboard import ALPHABET, SIZE


class WiringError(ValueError):
    """A wiring string that is not a permutation of A-Z."""


class WheelStateError(RuntimeError):
    """A letter went missing from a wheel's tables; the wiring is corrupt."""


def validate_wiring(wiring: str) -> str:
    if len(wiring) != SIZE:
        raise WiringError(f"wiring must have {SIZE} letters, got {len(wiring)}")
    if sorted(wiring) != sorted(ALPHABET):
        missing = "".join(sorted(set(ALPHABET) - set(wiring)))
        raise WiringError(f"wiring must be a permutation of the alphabet (missing {missing!r})")
    return wiring


def is_reflector(wiring: str) -> bool:
    """Involution (w[i] = j ⇒ w[j] = i) with no letter mapped to itself."""
    if len(wiring) != SIZE or sorted(wiring) != sorted(ALPHABET):
        return False
    for i, c in enumerate(wiring):
        j = ALPHABET.index(c)
        if i == j or wiring[j] != ALPHABET[i]:
            return False
    return True


class Wheel:
    """
    A substitution wheel. Positions are zero-based (A=0 … Z=25).

    Built with ``stationary=True`` it is a plain substitution table (plugboard,
    reflector): it ignores rotate requests and keeps position and ring at 0.
    Otherwise it is a rotor: ``rotor_position`` shifts the input side,
    ``ring_setting`` shifts the output side, and stepping onto one of the
    ``triggers`` signals the next wheel to step.
    """

    def __init__(
        self,
        wiring: str,
        rotor_position: int = 0,
        ring_setting: int = 0,
        *,
        triggers: Iterable[int] = (),
        stationary: bool = False,
        name: str | None = None,
    ) -> None:
        self._wiring = validate_wiring(wiring)
        self.name = name
        self.stationary = stationary

        # integer lookup tables
        self._fwd = [ALPHABET.index(c) for c in wiring]
        self._rev = {c: i for i, c in enumerate(wiring)}

        if stationary and (rotor_position % SIZE or ring_setting % SIZE):
            raise ValueError("a stationary wheel has no rotor position or ring setting")
        self._position = rotor_position % SIZE
        self._ring = ring_setting % SIZE
        self._triggers: frozenset[int] = frozenset()
        self.set_triggers(triggers)

    # ── read-only state ──────────────────────────────────────────
    @property
    def wiring(self) -> str:
        return self._wiring

    @property
    def ring_setting(self) -> int:
        return self._ring

    @property
    def rotor_position(self) -> int:
        return self._position

    @property
    def triggers(self) -> frozenset[int]:
        return self._triggers

    # ── setters ──────────────────────────────────────────────────
    def set_rotor_position(self, position: int) -> "Wheel":
        if self.stationary:
            raise ValueError("a stationary wheel cannot be repositioned")
        self._position = position % SIZE
        return self

    def set_triggers(self, positions: Iterable[int]) -> "Wheel":
        self._triggers = frozenset(p % SIZE for p in positions)
        return self

    # ── stepping ─────────────────────────────────────────────────
    def rotate(self) -> bool:
        """Advance one and return True when the new position is a trigger."""
        if self.stationary:
            return False
        self._position = (self._position + 1) % SIZE
        hit = self._position in self._triggers
        debug.log("stepping", "%s pos %d, turnover=%s", self, self._position, hit)
        return hit

    # ── letter cipher ────────────────────────────────────────────
    def _index_in_wiring(self, letter: str) -> int:
        try:
            return self._rev[letter]
        except KeyError:
            raise WheelStateError(f"{letter!r} not found in wiring {self._wiring!r}") from None

    def encipher(self, text: str) -> str:
        out = []
        for ch in text:
            if ch not in ALPHABET:
                out.append(ch)
                continue
            shifted = (ALPHABET.index(ch) + SIZE - self._position) % SIZE
            code = ALPHABET.index(self._wiring[shifted])
            out.append(ALPHABET[(code + self._ring) % SIZE])
        return "".join(out)

    def decipher(self, text: str) -> str:
        out = []
        for ch in text:
            if ch not in ALPHABET:
                out.append(ch)
                continue
            # undo the ring shift before looking the letter up
            unringed = ALPHABET[(ALPHABET.index(ch) - self._ring) % SIZE]
            decoded = (self._index_in_wiring(unringed) + self._position) % SIZE
            out.append(ALPHABET[decoded])
        return "".join(out)

    # ── signal paths ─────────────────────────────────────────────
    def right_to_left(self, position: int) -> int:
        shift = (position + self._position - self._ring) % SIZE
        mapped = self._fwd[shift]
        out = (mapped - self._position + self._ring) % SIZE
        debug.log("wheel", "%s %d->%d", self, position, out)
        return out

    def left_to_right(self, position: int) -> int:
        shift = (position + self._position - self._ring) % SIZE
        mapped = self._index_in_wiring(ALPHABET[shift])
        out = (mapped - self._position + self._ring) % SIZE
        debug.log("wheel", "%s %d<-%d", self, out, position)
        return out

    def __repr__(self) -> str:
        label = f" {self.name}" if self.name else ""
        if self.stationary:
            return f"<Wheel{label} stationary>"
        return f"<Wheel{label} pos={self._position} ring={self._ring}>"
