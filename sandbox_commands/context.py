"""
Everything a command handler may touch, in one object.

Handlers never reach for module-level singletons. A test builds its own
SandboxContext and gets a fully isolated interpreter.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence

from sandbox_commands.aliases import AliasExpander
from sandbox_commands.engine import EngineTables, default_engine_tables
from sandbox_commands.events import EventChannel
from sandbox_commands.intl import Intl
from sandbox_commands.registries import (
    DENY_LIST,
    LEVEL_BUILDER_REGEX_MAP,
    LEVEL_REGEX_MAP,
    SANDBOX_REGEX_MAP,
)
from sandbox_commands.stores import GlobalStateStore, LevelStore, LocaleStore


@dataclass
class SandboxContext:
    locale_store: LocaleStore = field(default_factory=LocaleStore)
    global_state: GlobalStateStore = field(default_factory=GlobalStateStore)
    level_store: LevelStore = field(default_factory=LevelStore)
    events: EventChannel = field(default_factory=EventChannel)
    engine: EngineTables = field(default_factory=default_engine_tables)
    sandbox_regex_map: Dict[str, Any] = field(default_factory=lambda: dict(SANDBOX_REGEX_MAP))
    level_regex_map: Dict[str, Any] = field(default_factory=lambda: dict(LEVEL_REGEX_MAP))
    level_builder_regex_map: Dict[str, Any] = field(default_factory=lambda: dict(LEVEL_BUILDER_REGEX_MAP))
    deny_list: Sequence[str] = DENY_LIST
    intl: Optional[Intl] = None
    aliases: Optional[AliasExpander] = None

    def __post_init__(self):
        if self.intl is None:
            self.intl = Intl(self.locale_store)
        if self.aliases is None:
            self.aliases = AliasExpander(self.level_store)

    def translate(self, key: str, substitutions: Optional[Dict[str, str]] = None) -> str:
        return self.intl.translate(key, substitutions)
