# debug.py
from __future__ import annotations

import logging
from typing import Dict

COMPONENTS = ("keyboard", "plugboard", "wheel", "reflector", "stepping", "transform")


class Debug:
    _root_configured: bool = False          # class-level guard

    def __init__(self, name: str = "enigma_wheels") -> None:
        self.logger = logging.getLogger(name)
        self.enabled = True        # global switch

        # every component starts silent
        self.components: Dict[str, bool] = {c: False for c in COMPONENTS}

    @classmethod
    def configure(cls, *, level: int = logging.DEBUG, log_to: str | None = None) -> bool:
        """
        Install the root handlers once. If `log_to` is given, messages also
        stream to that file. Returns False when already configured.
        """
        if cls._root_configured:
            return False

        handlers: list[logging.Handler] = [logging.StreamHandler()]
        if log_to:
            handlers.append(logging.FileHandler(log_to, encoding="utf-8"))

        logging.basicConfig(
            level=level,
            format="[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            handlers=handlers,
        )
        cls._root_configured = True
        return True

    # ── logging API ──────────────────────────────────────────────
    def log(self, component: str, message: str, *args: object) -> None:
        if self.enabled and self.components.get(component, False):
            self.logger.debug("[%s] " + message, component.upper(), *args)

    # ── component toggles ────────────────────────────────────────
    def enable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            self.components[c] = True

    def disable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            self.components[c] = False

    def toggle(self, component: str) -> None:
        self._require(component)
        self.components[component] = not self.components[component]

    def toggle_global(self, state: bool) -> None:
        """Switch every component on/off at once."""
        self.enabled = state

    def status(self) -> Dict[str, bool]:
        """Return a *copy* of the current component map."""
        return self.components.copy()

    # ── helpers ──────────────────────────────────────────────────
    def _require(self, component: str) -> None:
        if component not in self.components:
            raise ValueError(f"No such component: {component!r}")

    def __repr__(self) -> str:
        active = [k for k, v in self.components.items() if v]
        return f"<Debug enabled={self.enabled} active={active}>"


# shared instance; modules log through it so the CLI can flip components
debug = Debug()
