"""
Locale picker for the helper bar.

A row of buttons, one per supported language, plus an exit icon. This
module only models the items; any UI can draw them. Picking a language
submits ``locale <code>; levels`` like typed input and closes the bar.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

LOCALE_CHOICES = (
    ('English', 'english', 'en_US'),
    ('Deutsch', 'german', 'de_DE'),
    ('Русский', 'russian', 'ru_RU'),
)

EXIT_ICON = 'fa-solid fa-right-from-bracket'


@dataclass
class HelperBarItem:
    on_click: Callable[[], None]
    text: Optional[str] = None
    test_id: Optional[str] = None
    icon: Optional[str] = None


class IntlHelperBar:

    def __init__(self, events, on_exit: Callable[[], None], shown: bool = False):
        self.events = events
        self.on_exit = on_exit
        self.shown = shown

    def fire_command(self, command: str) -> None:
        logger.info("Helper bar interaction: intlSelect")
        self.events.notify('commandSubmitted', command)
        self.on_exit()

    def get_items(self) -> List[HelperBarItem]:
        items = [
            HelperBarItem(
                text=text,
                test_id=test_id,
                on_click=lambda locale=locale: self.fire_command(f'locale {locale}; levels'),
            )
            for text, test_id, locale in LOCALE_CHOICES
        ]
        items.append(HelperBarItem(icon=EXIT_ICON, on_click=lambda: self.on_exit()))
        return items
