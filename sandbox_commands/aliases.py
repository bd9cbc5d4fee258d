"""
Alias Expander
==============

User-defined shortcuts for the sandbox console:

    alias gco="git checkout"
    gco main              →  git checkout main
    unalias gco

Expansion is a single pass over the leading token only. An alias that
expands to another alias is not expanded again, and an alias name
appearing later in the line is left alone.

The alias map itself lives in the level store; this class only
validates names and rewrites input.
"""

from __future__ import annotations

import logging
import re
from typing import Dict

logger = logging.getLogger(__name__)

ALIAS_TOKEN = re.compile(r'^\w+$')
LEADING_TOKEN = re.compile(r'^(\S+)(.*)$', re.DOTALL)


class AliasExpander:

    def __init__(self, store):
        self.store = store

    def define(self, name: str, expansion: str) -> None:
        """Map ``name`` to ``expansion``. Redefining overwrites silently."""
        if not ALIAS_TOKEN.match(name):
            raise ValueError(f"Invalid alias name: {name!r}")
        self.store.add_alias(name, expansion)
        logger.debug(f"Alias {name!r} -> {expansion!r}")

    def remove(self, name: str) -> None:
        """Forget ``name``. Removing an unknown alias is not an error."""
        self.store.remove_alias(name)
        logger.debug(f"Alias {name!r} removed")

    def aliases(self) -> Dict[str, str]:
        return self.store.get_alias_map()

    def expand(self, text: str) -> str:
        match = LEADING_TOKEN.match(text)
        if not match:
            return text

        head, rest = match.groups()
        expansion = self.store.get_alias_map().get(head)
        if expansion is None:
            return text

        expanded = expansion + rest
        logger.debug(f"Expanded alias {head!r}: {text!r} -> {expanded!r}")
        return expanded
