"""
Sandbox Command Interpreter
===========================

Text-command interpreter for the interactive version-control teaching
sandbox. Every line the learner types in the console goes through
here and ends up as exactly one Outcome: a local result, a warning, an
error, or a route telling the host application which subsystem should
act on it.

Architecture Overview
---------------------

    ┌──────────────┐   ┌───────────────────────────────────────────┐
    │ Console line │──►│ ParseWaterfall                            │
    │ "a; b; c"    │   │  aliases → shortcuts → instant commands   │
    └──────┬───────┘   │  → engine → sandbox → level → builder     │
           │ split     └──────────────────┬────────────────────────┘
           ▼                              │
      one command                         ▼
                                     ┌─────────┐
                                     │ Outcome │──► RESULT / WARNING /
                                     └─────────┘    ENGINE_ERROR: show it
                                                    ROUTED: hand to listener
                                                    PROCESS_ERROR: "not supported"

Instant commands (ls, locale, alias, flip, echo, show commands, ...)
are handled entirely inside this package. Everything else is only
recognized: the version-control engine, level navigation and the
level builder each get a CommandRoute naming the matched pattern and
its capture groups.

Integration
-----------

    from sandbox_commands import build_interpreter

    interpreter = build_interpreter()
    outcome = interpreter.process("locale de_DE")
    if outcome.kind is OutcomeKind.ROUTED:
        engine.handle(outcome.method, outcome.captures)
    else:
        show(outcome.message)

console.SandboxConsole wraps this with chain splitting, listener lookup
and plain-text rendering.

State
-----
All mutable state (locale, UI flags, alias map, event listeners) hangs
off a SandboxContext. Nothing is module-global, so two interpreters
built from two contexts never see each other's aliases.

Module Structure
----------------
    sandbox_commands/
    ├── __init__.py      ← This file. build_context(), build_interpreter().
    ├── outcomes.py      ← Outcome variants.
    ├── patterns.py      ← CommandPattern, PatternTable, dispatch().
    ├── aliases.py       ← AliasExpander.
    ├── instant.py       ← Instant command table.
    ├── catalogue.py     ← `show commands` help lines.
    ├── waterfall.py     ← ParseWaterfall: the fallback chain.
    ├── registries.py    ← Sandbox / level / level-builder regex maps.
    ├── engine.py        ← Engine introspection tables.
    ├── context.py       ← SandboxContext.
    ├── stores.py        ← Locale, global-state and level stores.
    ├── events.py        ← EventChannel.
    ├── intl.py          ← Localized strings (strings.yaml).
    ├── helper_bar.py    ← Locale picker items.
    ├── config.py        ← YAML configuration and CLI arguments.
    └── console.py       ← Interactive console.

Dependencies
------------
PyYAML for configuration and string tables. pytest for the tests.
"""

from typing import Optional

from sandbox_commands.config import SandboxConfig
from sandbox_commands.context import SandboxContext
from sandbox_commands.helper_bar import IntlHelperBar
from sandbox_commands.intl import Intl
from sandbox_commands.outcomes import (
    CommandProcessError,
    CommandResult,
    CommandRoute,
    CommandWarning,
    EngineError,
    GitError,
    Outcome,
    OutcomeKind,
)
from sandbox_commands.stores import LocaleStore
from sandbox_commands.waterfall import ParseWaterfall


def build_context(config: Optional[SandboxConfig] = None, **overrides) -> SandboxContext:
    """Create a SandboxContext from configuration.

    Keyword overrides are passed straight to SandboxContext and win over
    anything derived from ``config``.
    """
    config = config or SandboxConfig()
    locale_store = overrides.pop('locale_store', None) or LocaleStore(config.interpreter.default_locale)
    if 'intl' not in overrides:
        if config.interpreter.strings_file:
            overrides['intl'] = Intl.from_yaml(config.interpreter.strings_file, locale_store)
        else:
            overrides['intl'] = Intl(locale_store)
    overrides.setdefault('deny_list', tuple(config.interpreter.deny_list))
    return SandboxContext(locale_store=locale_store, **overrides)


def build_interpreter(config: Optional[SandboxConfig] = None,
                      ctx: Optional[SandboxContext] = None) -> ParseWaterfall:
    return ParseWaterfall(ctx if ctx is not None else build_context(config))


__all__ = [
    'build_context',
    'build_interpreter',
    'ParseWaterfall',
    'SandboxContext',
    'IntlHelperBar',
    'Outcome',
    'OutcomeKind',
    'CommandResult',
    'CommandWarning',
    'CommandProcessError',
    'CommandRoute',
    'EngineError',
    'GitError',
]
