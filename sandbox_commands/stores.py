"""
In-memory application stores.

The interpreter only talks to these through their accessors, so a host
application can swap in its own persistent versions.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en_US"


class LocaleStore:
    """Holds the active and default locale."""

    def __init__(self, default_locale: str = DEFAULT_LOCALE, locale: Optional[str] = None):
        self._default_locale = default_locale
        self._locale = locale or default_locale

    def get_default_locale(self) -> str:
        return self._default_locale

    def get_locale(self) -> str:
        return self._locale

    def set_locale(self, locale: str) -> None:
        # No validation here: unknown locales fall back in Intl.translate
        logger.info(f"Locale changed: {self._locale} -> {locale}")
        self._locale = locale


class GlobalStateStore:
    """UI-wide flags."""

    def __init__(self):
        self._flip_tree_y = False
        self._level_instructions_disabled = False

    def get_flip_tree_y(self) -> bool:
        return self._flip_tree_y

    def set_flip_tree_y(self, value: bool) -> None:
        self._flip_tree_y = bool(value)

    def disable_level_instructions(self) -> None:
        self._level_instructions_disabled = True

    def get_level_instructions_disabled(self) -> bool:
        return self._level_instructions_disabled


class LevelStore:
    """Level-session state. Here: only the alias map."""

    def __init__(self):
        self._alias_map: Dict[str, str] = {}

    def add_alias(self, name: str, expansion: str) -> None:
        self._alias_map[name] = expansion

    def remove_alias(self, name: str) -> None:
        self._alias_map.pop(name, None)

    def get_alias_map(self) -> Dict[str, str]:
        return dict(self._alias_map)
