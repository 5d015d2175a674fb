# main.py
from __future__ import annotations

import argparse
from pathlib import Path
from typing import List

from .debug import COMPONENTS, Debug, debug
from .settings import MachineSettings, load_settings
from .wheel import Wheel, WiringError

# ────────────────────────────────────────────────────────────────────────
#  0. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="enigma-wheels", description="Encipher or decipher with a three-rotor wheel machine")
    p.add_argument("-m", "--message", metavar="TEXT", help="Text to transform. If omitted, an interactive REPL starts.")
    p.add_argument("--config", metavar="FILE", help="Load machine settings from JSON instead of the flags below.")
    p.add_argument("--rotors", nargs=3, metavar=("LEFT", "MIDDLE", "RIGHT"), default=["I", "II", "III"], help="Rotor names or wirings. Default: I II III")
    p.add_argument("--reflector", default="B", help="Reflector name or wiring. Default: B")
    p.add_argument("--positions", nargs=3, metavar=("L", "M", "R"), default=["12", "2", "10"], help="Starting positions, numbers 0-25 or letters. Default: 12 2 10")
    p.add_argument("--rings", nargs=3, metavar=("L", "M", "R"), default=["0", "0", "0"], help="Ring settings, numbers 0-25 or letters. Default: 0 0 0")
    p.add_argument("--plugs", nargs="*", default=[], metavar="PAIR", help="Plugboard pairs, e.g. AB CD EF")
    p.add_argument("--wheel", metavar="WIRING", help="Run TEXT through one stationary wheel instead of the machine.")
    p.add_argument("--reverse", action="store_true", help="With --wheel: decipher instead of encipher.")
    p.add_argument("--debug", nargs="*", choices=COMPONENTS, metavar="COMPONENT", help=f"Enable debug logging for components: {', '.join(COMPONENTS)}")
    return p.parse_args(argv)


def settings_from_args(args: argparse.Namespace) -> MachineSettings:
    if args.config:
        return load_settings(Path(args.config))
    return MachineSettings(
        rotors=args.rotors,
        reflector=args.reflector,
        positions=args.positions,
        rings=args.rings,
        plugs=[p.upper() for p in args.plugs],
    )


def run_wheel(wiring: str, text: str, reverse: bool) -> str:
    wheel = Wheel(wiring, stationary=True)
    return wheel.decipher(text) if reverse else wheel.encipher(text)


# ────────────────────────────────────────────────────────────────────────
#  1. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: List[str] | None = None) -> None:
    args = parse_args(argv)

    if args.debug is not None:
        Debug.configure()
        debug.enable(*(args.debug or COMPONENTS))

    if args.wheel:
        if args.message is None:
            raise SystemExit("--wheel needs --message")
        try:
            print(run_wheel(args.wheel, args.message, args.reverse))
        except WiringError as e:
            raise SystemExit(f"Bad wheel wiring: {e}")
        return

    try:
        settings = settings_from_args(args)
        machine = settings.build()
    except (OSError, ValueError) as e:
        raise SystemExit(f"Failed to load settings: {e}")

    # one‑shot mode ------------------------------------------------------
    if args.message is not None:
        print(machine.transform_message(args.message))
        return

    # interactive REPL ---------------------------------------------------
    print("Type blank line to quit.\n")
    while True:
        try:
            txt = input("Message > ")
        except EOFError:
            break
        if not txt.strip():
            break
        settings.reset(machine)
        print(machine.transform_message(txt))


if __name__ == "__main__":
    main()
