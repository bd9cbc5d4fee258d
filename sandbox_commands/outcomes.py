"""
Command Outcomes
================

Every handler in the interpreter finishes by producing exactly one
Outcome. Outcomes are returned, never raised: the caller switches on
``outcome.kind`` to decide what to do next.

    ┌───────────────────┐
    │  handler(captures) │──► Outcome
    └───────────────────┘        │
                                 ├── RESULT         show message, done
                                 ├── WARNING        show message, nothing changed
                                 ├── PROCESS_ERROR  "not mine" → try next table
                                 ├── ENGINE_ERROR   subsystem said no, show it
                                 └── ROUTED         recognized, hand to subsystem

PROCESS_ERROR is the only kind a caller treats as control flow. It is
the router's own signal that a table did not recognize the input, and
it is what drives the fallback chain in waterfall.py. Every other kind
is terminal for a dispatch attempt.

Classes
-------
CommandResult
    Success. ``message`` is user-visible, already localized.
    ``renderer`` is an optional hint for the UI (e.g. "html").

CommandWarning
    Soft failure. User can correct it; no state was changed.

CommandProcessError
    Routing miss. ``command`` carries the text that was not understood.

EngineError (alias GitError)
    The version-control engine understood the command but rejected
    its arguments (e.g. an unknown branch name).

CommandRoute
    A pattern table recognized the command but does not handle it
    itself. ``event_name`` says which subsystem should, ``method``
    names the matched pattern and ``captures`` holds the regex groups.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional, Tuple


class OutcomeKind(Enum):
    RESULT = "result"
    WARNING = "warning"
    PROCESS_ERROR = "process_error"
    ENGINE_ERROR = "engine_error"
    ROUTED = "routed"


@dataclass
class Outcome:
    """Base for all outcome variants. Do not instantiate directly."""
    kind: ClassVar[OutcomeKind]
    message: str = ""

    @property
    def is_error(self) -> bool:
        """Warnings, routing misses and engine errors are errors."""
        return self.kind in (
            OutcomeKind.WARNING,
            OutcomeKind.PROCESS_ERROR,
            OutcomeKind.ENGINE_ERROR,
        )

    @property
    def is_routing_miss(self) -> bool:
        return self.kind is OutcomeKind.PROCESS_ERROR


@dataclass
class CommandResult(Outcome):
    kind: ClassVar[OutcomeKind] = OutcomeKind.RESULT
    renderer: Optional[str] = None


@dataclass
class CommandWarning(Outcome):
    kind: ClassVar[OutcomeKind] = OutcomeKind.WARNING


@dataclass
class CommandProcessError(Outcome):
    kind: ClassVar[OutcomeKind] = OutcomeKind.PROCESS_ERROR
    command: str = ""


@dataclass
class EngineError(Outcome):
    kind: ClassVar[OutcomeKind] = OutcomeKind.ENGINE_ERROR


# The sandbox engine simulates git; older call sites use this name.
GitError = EngineError


@dataclass
class CommandRoute(Outcome):
    """A recognized command that belongs to an external subsystem."""
    kind: ClassVar[OutcomeKind] = OutcomeKind.ROUTED
    event_name: str = ""
    method: str = ""
    captures: Tuple[Optional[str], ...] = field(default_factory=tuple)
    command: str = ""
