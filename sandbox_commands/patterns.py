"""
Pattern Matcher / Dispatcher
============================

The routing layer of the sandbox console. A PatternTable is an ordered
list of regex entries; dispatch() walks it top to bottom and hands the
capture groups of the first match to that entry's handler.

    User types: "rollup 3"
                  ↓
    dispatch() tries each entry in order
                  ↓
    r"^rollup (\\d+)$" matches → captures ("3",)
                  ↓
    handler(("3",)) → CommandResult("Commands combined!")

    User types: "bogus command"
                  ↓
    no entry matches → CommandProcessError(command="bogus command")
                  ↓
    caller tries the next table in the fallback chain

Design Decisions
----------------
- Order is significant. The first matching entry wins, so a specific
  pattern must sit above a general one it would otherwise be hidden by.
- Every matcher is applied with re.match, i.e. anchored at position 0.
  Patterns that must not accept a longer word (``ls`` vs ``lsfoo``)
  also anchor the end or require a following space.
- The table checks itself at construction: a duplicate name is a
  collision, and a named entry whose own probe string is already
  claimed by an earlier entry is shadowed. Both raise ValueError so the
  mistake surfaces at start-up instead of as a dead command.
- A miss is a CommandProcessError, never an exception. That keeps the
  "not mine" signal separate from anything a handler itself reports.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from re import Pattern
from typing import Callable, Iterable, List, Mapping, Optional, Tuple, Union

from sandbox_commands.outcomes import CommandProcessError, CommandRoute, Outcome

logger = logging.getLogger(__name__)

Captures = Tuple[Optional[str], ...]
Handler = Callable[[Captures], Outcome]


@dataclass
class CommandPattern:
    """One entry in a pattern table.

    Attributes
    ----------
    matcher : Pattern
        Compiled regex. A plain string is compiled on construction.
    handler : callable
        Receives the positional capture groups and returns an Outcome.
    name : str or None
        Public name. Only named entries appear in ``show commands``.
    help_text : str or None
        One-line description for the help catalogue.
    example : str or None
        Input used to prove the entry is reachable. Defaults to ``name``.
    """
    matcher: Pattern
    handler: Handler
    name: Optional[str] = None
    help_text: Optional[str] = None
    example: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.matcher, str):
            self.matcher = re.compile(self.matcher)

    @property
    def probe(self) -> Optional[str]:
        return self.example if self.example is not None else self.name


class PatternTable:
    """Ordered, validated sequence of CommandPattern entries."""

    def __init__(self, entries: Iterable[CommandPattern], check_shadowing: bool = True):
        self._entries: List[CommandPattern] = list(entries)
        self._validate(check_shadowing)

    def _validate(self, check_shadowing: bool) -> None:
        seen = {}
        for index, entry in enumerate(self._entries):
            if entry.name is not None:
                if entry.name in seen:
                    raise ValueError(
                        f"Command name collision: '{entry.name}' is registered "
                        f"at positions {seen[entry.name]} and {index}"
                    )
                seen[entry.name] = index

            if not check_shadowing:
                continue
            probe = entry.probe
            if probe is None or not entry.matcher.match(probe):
                continue
            for earlier in self._entries[:index]:
                if earlier.matcher.match(probe):
                    raise ValueError(
                        f"Command '{probe}' is shadowed by earlier pattern "
                        f"{earlier.matcher.pattern!r}"
                    )

    def __iter__(self):
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def named(self) -> List[CommandPattern]:
        """Entries that should be surfaced in the help catalogue."""
        return [entry for entry in self._entries if entry.name]

    def find(self, text: str) -> Optional[Tuple[CommandPattern, Captures]]:
        for entry in self._entries:
            match = entry.matcher.match(text)
            if match:
                return entry, match.groups()
        return None


def dispatch(text: str, table: PatternTable) -> Outcome:
    """Run the handler of the first entry in ``table`` matching ``text``.

    ``text`` must already be alias-expanded and trimmed; no trimming is
    done here. Returns whatever the handler returns, or a
    CommandProcessError carrying ``text`` when nothing matches.
    """
    found = table.find(text)
    if found is None:
        logger.debug(f"No pattern matched {text!r}")
        return CommandProcessError(message=text, command=text)

    entry, captures = found
    logger.debug(f"Matched {entry.matcher.pattern!r} with captures {captures}")
    return entry.handler(captures)


def table_from_regex_map(
    regex_map: Mapping[str, Union[str, Pattern]],
    event_name: str,
) -> PatternTable:
    """Build a routing table from a ``{name: regex}`` map.

    Each entry's handler returns a CommandRoute naming ``event_name``
    and the matched key, so the owning subsystem can pick it up.
    External maps are taken as supplied: no shadow check.
    """
    def make_handler(method: str) -> Handler:
        def handler(captures: Captures) -> Outcome:
            return CommandRoute(event_name=event_name, method=method, captures=captures)
        return handler

    entries = [
        CommandPattern(matcher=regex, handler=make_handler(method), name=method)
        for method, regex in regex_map.items()
    ]
    return PatternTable(entries, check_shadowing=False)
