"""
Parse Waterfall
===============

The full path a console line takes through the interpreter:

    "gco main"
        ↓  alias expansion        (leading token only, one pass)
    "git checkout main"
        ↓  engine shortcuts       ("gc" → "git commit", ...)
        ↓  instant commands       hit → final Outcome
        ↓  parse chain, in order:
    ┌──────────────────────────────────────────────────┐
    │ engine         processGitCommand                 │
    │ sandbox        processSandboxCommand             │
    │ level          processLevelCommand               │
    │ level builder  processLevelBuilderCommand        │
    └──────────────────────────────────────────────────┘
        ↓  every stage missed
    CommandProcessError("The command ... is not supported, sorry!")

Each stage gets the same expanded text. A CommandProcessError from a
stage means "not mine, try the next one"; any other Outcome ends the
walk. The level stages are tried optimistically so chains like
``level intro1; show goal`` work without the caller knowing which
table owns which fragment.

A level in progress can push its own stage in front with add_first()
or behind with add_last(). clone() gives an independent copy to
modify.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import List, Optional

from sandbox_commands.instant import build_instant_commands
from sandbox_commands.outcomes import CommandProcessError, CommandResult, Outcome, OutcomeKind
from sandbox_commands.patterns import PatternTable, dispatch, table_from_regex_map
from sandbox_commands.registries import LEVEL_BUILDER_EVENT, LEVEL_EVENT, SANDBOX_EVENT

logger = logging.getLogger(__name__)

ENGINE_EVENT = 'processGitCommand'


@dataclass
class ParseStage:
    name: str
    table: PatternTable


def engine_table(ctx) -> PatternTable:
    """Routing table for every ``"<vcs> <method>"`` the engine knows."""
    regex_map = {}
    for vcs, methods in ctx.engine.get_regex_map().items():
        for method, regex in methods.items():
            regex_map[f'{vcs} {method}'] = regex
    return table_from_regex_map(regex_map, ENGINE_EVENT)


def default_stages(ctx) -> List[ParseStage]:
    return [
        ParseStage('engine', engine_table(ctx)),
        ParseStage('sandbox', table_from_regex_map(ctx.sandbox_regex_map, SANDBOX_EVENT)),
        ParseStage('level', table_from_regex_map(ctx.level_regex_map, LEVEL_EVENT)),
        ParseStage('level builder', table_from_regex_map(ctx.level_builder_regex_map, LEVEL_BUILDER_EVENT)),
    ]


class ParseWaterfall:

    def __init__(self, ctx, instant_table: Optional[PatternTable] = None,
                 stages: Optional[List[ParseStage]] = None):
        self.ctx = ctx
        self.instant_table = instant_table if instant_table is not None else build_instant_commands(ctx)
        self.stages: List[ParseStage] = list(stages) if stages is not None else default_stages(ctx)

    def clone(self) -> 'ParseWaterfall':
        return ParseWaterfall(self.ctx, self.instant_table, self.stages)

    def add_first(self, stage: ParseStage) -> None:
        self.stages.insert(0, stage)

    def add_last(self, stage: ParseStage) -> None:
        self.stages.append(stage)

    def expand_shortcuts(self, text: str) -> str:
        for vcs, methods in self.ctx.engine.get_shortcut_map().items():
            for method, regex in methods.items():
                match = regex.match(text)
                if match:
                    expanded = f'{vcs} {method} {text[match.end():]}'.strip()
                    logger.debug(f"Expanded shortcut: {text!r} -> {expanded!r}")
                    return expanded
        return text

    def process_instants(self, text: str) -> Outcome:
        return dispatch(text, self.instant_table)

    def parse_all(self, text: str) -> Outcome:
        """Walk the parse chain. Returns the first non-miss Outcome."""
        for stage in self.stages:
            outcome = dispatch(text, stage.table)
            if outcome.is_routing_miss:
                continue
            logger.debug(f"Stage {stage.name!r} recognized {text!r}")
            if outcome.kind is OutcomeKind.ROUTED:
                outcome = dataclasses.replace(outcome, command=text)
            return outcome
        return CommandProcessError(message=text, command=text)

    def process(self, raw: str) -> Outcome:
        """Interpret one console command (no chain delimiters)."""
        raw = raw.strip()
        text = self.expand_shortcuts(self.ctx.aliases.expand(raw).strip())

        if not text:
            return CommandResult(message='')

        outcome = self.process_instants(text)
        if not outcome.is_routing_miss:
            return outcome

        outcome = self.parse_all(text)
        if not outcome.is_routing_miss:
            return outcome

        logger.debug(f"Command not recognized: {raw!r}")
        return CommandProcessError(
            message=self.ctx.translate('git-error-command-not-found', {'command': raw}),
            command=raw,
        )
