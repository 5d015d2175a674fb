# machine.py  ─────────────────────────────────────────────────────
from __future__ import annotations

from collections.abc import Iterable

from .debug import debug
from .keyboard import is_key, to_letter, to_position
from .wheel import Wheel


class Machine:
    """
    Plugboard, three rotors and a reflector on one signal path.

    The reflector wiring is expected to be a fixed-point-free involution;
    that is what makes :meth:`transform_message` its own inverse. It is not
    checked here (see :func:`enigma_wheels.wheel.is_reflector`).
    """

    def __init__(
        self,
        plugboard_wiring: str,
        right_wiring: str, right_offset: int, right_ring: int,
        middle_wiring: str, middle_offset: int, middle_ring: int,
        left_wiring: str, left_offset: int, left_ring: int,
        reflector_wiring: str,
    ) -> None:
        self.plugboard = Wheel(plugboard_wiring, stationary=True, name="plugboard")
        self.right     = Wheel(right_wiring, right_offset, right_ring, name="right")
        self.middle    = Wheel(middle_wiring, middle_offset, middle_ring, name="middle")
        self.left      = Wheel(left_wiring, left_offset, left_ring, name="left")
        self.reflector = Wheel(reflector_wiring, stationary=True, name="reflector")

    # ── key & trigger helpers ───────────────────────────────────

    @property
    def rotors(self) -> tuple[Wheel, Wheel, Wheel]:
        """Rotating wheels in stepping order (right first)."""
        return self.right, self.middle, self.left

    @property
    def rotor_positions(self) -> tuple[int, int, int]:
        return self.right.rotor_position, self.middle.rotor_position, self.left.rotor_position

    def set_triggers(
        self,
        right: Iterable[int],
        middle: Iterable[int],
        left: Iterable[int],
    ) -> None:
        for rotor, triggers in zip(self.rotors, (right, middle, left)):
            rotor.set_triggers(triggers)

    def set_rotor_positions(self, right: int, middle: int, left: int) -> None:
        """Rewind for a new message; wiring, rings and triggers stay put."""
        for rotor, pos in zip(self.rotors, (right, middle, left)):
            rotor.set_rotor_position(pos)

    # ── stepping logic  ─────────────────────────────────────────

    def step(self) -> None:
        """Advance rotors one key-press: right always, carry leftwards on turnover."""
        carry = True
        for rotor in self.rotors:
            if not carry:
                break
            carry = rotor.rotate()

    # ── encipher one symbol  ────────────────────────────────────

    def transform_char(self, ch: str) -> str:
        if not is_key(ch):
            return ch

        self.step()
        debug.log("stepping", "Rotor pos %s", self.rotor_positions)

        signal = to_position(ch)
        signal = self.plugboard.right_to_left(signal)

        for rotor in self.rotors:
            signal = rotor.right_to_left(signal)

        signal = self.reflector.right_to_left(signal)
        debug.log("reflector", "reflected to %d", signal)

        for rotor in reversed(self.rotors):
            signal = rotor.left_to_right(signal)

        signal = self.plugboard.left_to_right(signal)
        out_ch = to_letter(signal)
        debug.log("transform", "%s->%s", ch, out_ch)
        return out_ch

    def transform_message(self, text: str) -> str:
        return "".join(self.transform_char(ch) for ch in text)

    def __repr__(self) -> str:
        return f"<Machine positions={self.rotor_positions}>"
