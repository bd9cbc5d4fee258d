#!/usr/bin/env python3
"""
Sandbox Console
===============

The top-level loop around the interpreter. It owns what the
interpreter deliberately does not:

- splitting ``a; b; c`` chains into single commands
- handing routed commands to the subsystem listening for them
- turning Outcome messages into plain terminal text

Try:

    ls
    locale de_DE
    alias gco="git checkout"
    gco main
    echo "hello"; rollup 2
    show commands
    exit
"""

from __future__ import annotations

import logging
import sys
from typing import Callable, Dict, List, Optional

from sandbox_commands import build_interpreter
from sandbox_commands.catalogue import BREAK
from sandbox_commands.config import (
    ConfigurationManager,
    create_argument_parser,
    setup_logging,
)
from sandbox_commands.helper_bar import IntlHelperBar
from sandbox_commands.outcomes import CommandRoute, CommandWarning, Outcome, OutcomeKind
from sandbox_commands.waterfall import ParseWaterfall

logger = logging.getLogger(__name__)

RouteListener = Callable[[CommandRoute], Outcome]

EXIT_COMMANDS = ('exit', 'quit')


class SandboxConsole:
    """Runs console lines through a ParseWaterfall.

    Listeners are keyed by route event name (``processGitCommand``,
    ``processLevelCommand``, ...) and turn a CommandRoute into an
    Outcome. A route with no listener becomes a warning.
    """

    def __init__(self, interpreter: ParseWaterfall,
                 listeners: Optional[Dict[str, RouteListener]] = None,
                 delimiter: str = ';',
                 output: Callable[[str], None] = print):
        self.interpreter = interpreter
        self.ctx = interpreter.ctx
        self.listeners: Dict[str, RouteListener] = dict(listeners or {})
        self.delimiter = delimiter
        self.output = output
        self.ctx.events.on('commandSubmitted', self.submit)

    def listen(self, event_name: str, listener: RouteListener) -> None:
        self.listeners[event_name] = listener

    def helper_bar(self, on_exit: Callable[[], None], shown: bool = False) -> IntlHelperBar:
        """Locale picker whose clicks are submitted to this console."""
        return IntlHelperBar(self.ctx.events, on_exit, shown=shown)

    def split_chain(self, line: str) -> List[str]:
        commands = [part.strip() for part in line.split(self.delimiter)]
        commands = [command for command in commands if command]
        # A blank line is still one (empty) command
        return commands or ['']

    def execute(self, command: str) -> Outcome:
        outcome = self.interpreter.process(command)
        if outcome.kind is not OutcomeKind.ROUTED:
            return outcome

        listener = self.listeners.get(outcome.event_name)
        if listener is None:
            logger.warning(f"No listener for {outcome.event_name} ({outcome.method})")
            return CommandWarning(
                message=self.ctx.translate('command-no-listener', {'command': outcome.command})
            )
        return listener(outcome)

    def run_line(self, line: str) -> List[Outcome]:
        return [self.execute(command) for command in self.split_chain(line)]

    def render(self, outcome: Outcome) -> str:
        lines = []
        for line in outcome.message.split('\n'):
            if line == BREAK:
                lines.append('')
            else:
                lines.append(line.replace('&nbsp;', ' '))
        return '\n'.join(lines)

    def submit(self, line: str) -> List[Outcome]:
        """Run a line and write every outcome to the output."""
        outcomes = self.run_line(line)
        for outcome in outcomes:
            self.output(self.render(outcome))
        return outcomes

    def loop(self, prompt: str = '$ ', read: Callable[[str], str] = input) -> None:
        while True:
            try:
                line = read(prompt)
            except (EOFError, KeyboardInterrupt):
                self.output('')
                break

            if line.strip().lower() in EXIT_COMMANDS:
                break
            self.submit(line)


def main(argv=None) -> int:
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    manager = ConfigurationManager()
    manager.load_config(args.config)
    config = manager.merge_cli_args(args)

    is_valid, errors = manager.validate_config()
    if not is_valid:
        for error in errors:
            print(f"Configuration error: {error}", file=sys.stderr)
        return 1

    setup_logging(config)

    if args.save_config:
        return 0 if manager.save_config(args.save_config) else 1

    console = SandboxConsole(
        build_interpreter(config),
        delimiter=config.console.chain_delimiter,
    )
    console.loop(config.console.prompt)
    return 0


if __name__ == "__main__":
    sys.exit(main())
