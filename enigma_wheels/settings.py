# settings.py
from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple

from .debug import debug
from .keyboard import ALPHABET, SIZE, to_position
from .machine import Machine
from .wheel import is_reflector, validate_wiring

# ────────────────────────────────────────────────────────────────────────
#  0. Wheel database
# ────────────────────────────────────────────────────────────────────────

# Trigger positions are where a rotor lands right after passing its notch
# (I notches at Q, so stepping onto R=17 carries).
ROTORS: Dict[str, Tuple[str, Tuple[int, ...]]] = {
    "I":   ("EKMFLGDQVZNTOWYHXUSPAIBRCJ", (17,)),
    "II":  ("AJDKSIRUXBLHWTMCQGZNPYFVOE", (5,)),
    "III": ("BDFHJLCPRTXVZNYEIWGAKMUSQO", (22,)),
    "IV":  ("ESOVPZJAYQUIRHXLNFTGKDCMWB", (10,)),
    "V":   ("VZBRGITYUPSDNHLXAWMJQOFECK", (0,)),
    "VI":  ("JPGVOUMFYQBENHZRDKASXLICTW", (0, 13)),
    "VII": ("NZJHGRCXMYSWBOUFAIVLPEKQDT", (0, 13)),
}

REFLECTORS: Dict[str, str] = {
    "A": "EJMZALYXVBWFCRQUONTSPIKHGD",
    "B": "YRUHQSLDPXNGOKMIEBFZCWVJAT",
    "C": "FVPJIAOYEDRZXWGCTKUQSBNMHL",
}

IDENTITY = ALPHABET

REQUIRED_KEYS = {"rotors", "reflector", "positions"}


# ────────────────────────────────────────────────────────────────────────
#  1. Small parsers
# ────────────────────────────────────────────────────────────────────────


def as_position(value: int | str) -> int:
    """Accept a window letter ("M") or an integer; return 0‥25."""
    if isinstance(value, str):
        if value.isdigit():
            return int(value) % SIZE
        return to_position(value.upper())
    return int(value) % SIZE


def rotor_spec(name_or_wiring: str) -> Tuple[str, Tuple[int, ...]]:
    """Catalogue lookup (case-insensitive) or a raw 26-letter wiring without triggers."""
    key = name_or_wiring.upper()
    if key in ROTORS:
        return ROTORS[key]
    if len(name_or_wiring) == SIZE:
        return validate_wiring(name_or_wiring), ()
    raise ValueError(f"Unknown rotor {name_or_wiring!r}. Expected one of {list(ROTORS)}")


def reflector_wiring(name_or_wiring: str) -> str:
    wiring = REFLECTORS.get(name_or_wiring.upper(), name_or_wiring)
    if len(wiring) != SIZE:
        raise ValueError(f"Unknown reflector {name_or_wiring!r}. Expected one of {list(REFLECTORS)}")
    if not is_reflector(wiring):
        raise ValueError("Reflector wiring must be an involution with no fixed points")
    return wiring


def plugboard_wiring(pairs: Sequence[str | tuple[str, str]]) -> str:
    """Swap each pair into an identity wiring (e.g. ["AB", "CD"])."""
    mapping: dict[str, str] = {ch: ch for ch in ALPHABET}
    used: set[str] = set()

    for raw in pairs:
        # normalise to (a, b)
        if isinstance(raw, str):
            if len(raw) != 2:
                raise ValueError(f"Pair {raw!r} must be exactly 2 letters")
            a, b = raw
        else:
            a, b = raw

        if a == b:
            raise ValueError(f"Plugboard cannot map a letter to itself: {a}")
        if a not in mapping or b not in mapping:
            bad = a if a not in mapping else b
            raise ValueError(f"Symbol {bad!r} not in alphabet")
        if a in used or b in used:
            dup = a if a in used else b
            raise ValueError(f"Letter {dup!r} already used in plugboard")

        # passed validation → commit swap
        mapping[a], mapping[b] = b, a
        used.update((a, b))

    wiring = "".join(mapping[ch] for ch in ALPHABET)
    debug.log("plugboard", "pairs %s -> %s", list(pairs), wiring)
    return wiring


def _triple(values: Sequence, what: str) -> List:
    if len(values) != 3:
        raise ValueError(f"{what} needs exactly 3 entries (left, middle, right), got {len(values)}")
    return list(values)


# ────────────────────────────────────────────────────────────────────────
#  2. MachineSettings – everything needed to rebuild a machine
# ────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class MachineSettings:
    """Machine setup; wheel-ordered lists run left, middle, right like the window."""

    rotors: List[str]
    reflector: str = "B"
    positions: List[int] = field(default_factory=lambda: [0, 0, 0])
    rings: List[int] = field(default_factory=lambda: [0, 0, 0])
    plugs: List[str] = field(default_factory=list)
    triggers: List[List[int]] | None = None     # overrides catalogue triggers

    def __post_init__(self) -> None:
        self.rotors = _triple(self.rotors, "rotors")
        self.positions = [as_position(p) for p in _triple(self.positions, "positions")]
        self.rings = [as_position(r) for r in _triple(self.rings, "rings")]
        if self.triggers is not None:
            self.triggers = [
                [as_position(t) for t in group]
                for group in _triple(self.triggers, "triggers")
            ]

    @classmethod
    def from_dict(cls, cfg: dict) -> "MachineSettings":
        missing = REQUIRED_KEYS - cfg.keys()
        if missing:
            raise ValueError(f"Missing keys in config: {', '.join(sorted(missing))}")
        return cls(
            rotors=cfg["rotors"],
            reflector=cfg["reflector"],
            positions=cfg["positions"],
            rings=cfg.get("rings", cfg.get("ring_settings", [0, 0, 0])),
            plugs=cfg.get("plugs", cfg.get("plugboard", [])),
            triggers=cfg.get("triggers"),
        )

    def to_dict(self) -> dict:
        data = {
            "rotors": self.rotors,
            "reflector": self.reflector,
            "positions": self.positions,
            "rings": self.rings,
            "plugs": self.plugs,
        }
        if self.triggers is not None:
            data["triggers"] = self.triggers
        return data

    # ––– machine helpers ––––––––––––––––––––––––––––––––––––––––

    def build(self) -> Machine:
        (l_wiring, l_trig), (m_wiring, m_trig), (r_wiring, r_trig) = (
            rotor_spec(name) for name in self.rotors
        )
        l_pos, m_pos, r_pos = self.positions
        l_ring, m_ring, r_ring = self.rings

        machine = Machine(
            plugboard_wiring(self.plugs),
            r_wiring, r_pos, r_ring,
            m_wiring, m_pos, m_ring,
            l_wiring, l_pos, l_ring,
            reflector_wiring(self.reflector),
        )
        if self.triggers is not None:
            l_trig, m_trig, r_trig = self.triggers
        machine.set_triggers(r_trig, m_trig, l_trig)
        return machine

    def reset(self, machine: Machine) -> None:
        """Rewind *machine* to the starting positions."""
        l_pos, m_pos, r_pos = self.positions
        machine.set_rotor_positions(r_pos, m_pos, l_pos)


def load_settings(path: str | Path) -> MachineSettings:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object")
    return MachineSettings.from_dict(data)


def save_settings(settings: MachineSettings, path: str | Path) -> None:
    Path(path).write_text(json.dumps(settings.to_dict(), indent=2), encoding="utf-8")
