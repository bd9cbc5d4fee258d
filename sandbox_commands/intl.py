"""
Localized string lookup.

Strings live in a YAML table keyed by message key, then locale:

    locale-command:
      en_US: "locale set to {locale}"
      de_DE: "Locale auf {locale} gesetzt"

Lookup order for a key: active locale, store default locale, en_US,
and finally the key itself so a missing string never breaks output.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

import yaml

logger = logging.getLogger(__name__)

FALLBACK_LOCALE = "en_US"
STRINGS_FILE = Path(__file__).resolve().parent / "strings.yaml"

_PLACEHOLDER = re.compile(r'\{(\w+)\}')


def load_strings(path: Union[str, Path] = STRINGS_FILE) -> Dict[str, Dict[str, str]]:
    """Read a string table from YAML. An empty file gives an empty table."""
    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"String table {path} must be a mapping, got {type(data).__name__}")
    return data


class Intl:
    """Translator bound to a locale store.

    Instances are callable, so ``intl("ls-command")`` and
    ``intl.translate("ls-command")`` are the same thing.
    """

    def __init__(self, locale_store, strings: Optional[Mapping[str, Mapping[str, str]]] = None):
        self.locale_store = locale_store
        self.strings = dict(strings) if strings is not None else load_strings()

    @classmethod
    def from_yaml(cls, path: Union[str, Path], locale_store) -> 'Intl':
        return cls(locale_store, load_strings(path))

    def translate(self, key: str, substitutions: Optional[Mapping[str, str]] = None) -> str:
        entry = self.strings.get(key)
        if not entry:
            logger.warning(f"No translation table entry for key {key!r}")
            return key

        candidates = (
            self.locale_store.get_locale(),
            self.locale_store.get_default_locale(),
            FALLBACK_LOCALE,
        )
        for locale in candidates:
            if locale in entry:
                text = entry[locale]
                break
        else:
            logger.warning(f"Key {key!r} has no text for {candidates[0]}")
            return key

        if substitutions:
            text = _PLACEHOLDER.sub(
                lambda m: str(substitutions.get(m.group(1), m.group(0))),
                text,
            )
        return text

    __call__ = translate

    def todo(self, text: str) -> str:
        """Untranslated text. Rendered as-is."""
        logger.debug(f"Untranslated string: {text!r}")
        return text
