from .keyboard import ALPHABET, SIZE
from .machine import Machine
from .settings import MachineSettings, load_settings, plugboard_wiring
from .wheel import Wheel, WheelStateError, WiringError, is_reflector

__all__ = [
    "ALPHABET",
    "SIZE",
    "Machine",
    "MachineSettings",
    "Wheel",
    "WheelStateError",
    "WiringError",
    "is_reflector",
    "load_settings",
    "plugboard_wiring",
]
