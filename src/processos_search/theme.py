"""Light/dark theme selection for the terminal front-end.

The mode follows the system preference until the user picks one explicitly;
only an explicit choice is persisted.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Callable, Mapping

from rich.theme import Theme

from .config import THEME_FILE, THEME_STORAGE_KEY

logger = logging.getLogger(__name__)

LIGHT = "light"
DARK = "dark"
MODES = (LIGHT, DARK)

THEMES = {
    LIGHT: Theme({
        "processo.numero": "bold blue",
        "processo.label": "bold",
        "processo.ativo": "green",
        "processo.passivo": "red",
        "processo.muted": "grey37",
        "processo.border": "blue",
    }),
    DARK: Theme({
        "processo.numero": "bold cyan",
        "processo.label": "bold white",
        "processo.ativo": "bright_green",
        "processo.passivo": "bright_red",
        "processo.muted": "grey62",
        "processo.border": "cyan",
    }),
}

SYSTEM_THEME_ENV = "PROCESSOS_THEME_SYSTEM"

# COLORFGBG background indices that are dark in the standard 16-colour palette
_DARK_BACKGROUNDS = {0, 1, 2, 3, 4, 5, 6, 8}


class ThemePreferenceStore:
    """JSON file holding the user's explicit theme choice."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = Path(path) if path else THEME_FILE

    def _read(self) -> dict:
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning("ignoring unreadable preferences file %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def load(self) -> str | None:
        mode = self._read().get(THEME_STORAGE_KEY)
        return mode if mode in MODES else None

    def save(self, mode: str) -> None:
        data = self._read()
        data[THEME_STORAGE_KEY] = mode
        self._write(data)

    def clear(self) -> None:
        data = self._read()
        if data.pop(THEME_STORAGE_KEY, None) is not None:
            self._write(data)


class SystemThemePreference:
    """System colour-scheme preference with change listeners."""

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        self._env = os.environ if env is None else env
        self._listeners: list[Callable[[str], None]] = []

    def current(self) -> str:
        explicit = self._env.get(SYSTEM_THEME_ENV, "").lower()
        if explicit in MODES:
            return explicit
        colorfgbg = self._env.get("COLORFGBG", "")
        if colorfgbg:
            try:
                background = int(colorfgbg.split(";")[-1])
            except ValueError:
                return LIGHT
            return DARK if background in _DARK_BACKGROUNDS else LIGHT
        return LIGHT

    def add_listener(self, listener: Callable[[str], None]) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Callable[[str], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def notify(self, mode: str) -> None:
        for listener in list(self._listeners):
            listener(mode)


class ThemeContext:
    """Current theme mode. Must be opened before use and closed afterwards."""

    def __init__(
        self,
        store: ThemePreferenceStore | None = None,
        system: SystemThemePreference | None = None,
    ) -> None:
        self.store = store or ThemePreferenceStore()
        self.system = system or SystemThemePreference()
        self.mode = LIGHT
        self.is_user_preference = False
        self._opened = False

    def open(self) -> ThemeContext:
        if self._opened:
            return self
        saved = self.store.load()
        if saved:
            self.mode = saved
            self.is_user_preference = True
        else:
            self.mode = self.system.current()
            self.is_user_preference = False
        self.system.add_listener(self._on_system_change)
        self._opened = True
        logger.debug("theme opened: mode=%s saved=%s", self.mode, saved)
        return self

    def close(self) -> None:
        if not self._opened:
            return
        self.system.remove_listener(self._on_system_change)
        self._opened = False

    def __enter__(self) -> ThemeContext:
        return self.open()

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _on_system_change(self, mode: str) -> None:
        if not self.is_user_preference and mode in MODES:
            self.mode = mode

    @property
    def theme(self) -> Theme:
        return THEMES[self.mode]

    def set_mode(self, mode: str) -> None:
        if mode not in MODES:
            raise ValueError(f"Unknown theme mode: {mode!r}")
        self.is_user_preference = True
        self.mode = mode
        self.store.save(mode)

    def toggle(self) -> str:
        self.set_mode(DARK if self.mode == LIGHT else LIGHT)
        return self.mode

    def use_system(self) -> None:
        """Forget the explicit choice and follow the system again."""
        self.is_user_preference = False
        self.store.clear()
        self.mode = self.system.current()
