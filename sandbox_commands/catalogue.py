"""
Help / introspection: the data behind ``show commands``.

Output is a flat list of lines. Rendering is left to the caller, apart
from two markers the console and the browser both understand:

    BREAK    '<br/>'                  blank separator line
    INDENT   '&nbsp;' * 4             prefix of an option sub-line

Named instant commands get a BREAK before and after them so they stand
apart from the engine-derived entries around them.
"""

from __future__ import annotations

from typing import Dict, List

from sandbox_commands.patterns import PatternTable

BREAK = '<br/>'
INDENT = '&nbsp;' * 4


def get_all_commands(ctx) -> Dict[str, object]:
    """Every routable command name mapped to its regex, deny list removed.

    Engine commands are qualified as ``"<vcs> <method>"``.
    """
    all_commands: Dict[str, object] = {}
    all_commands.update(ctx.level_regex_map)
    all_commands.update(ctx.level_builder_regex_map)
    all_commands.update(ctx.sandbox_regex_map)

    for vcs, methods in ctx.engine.get_regex_map().items():
        for method, regex in methods.items():
            all_commands[f'{vcs} {method}'] = regex

    for name in ctx.deny_list:
        all_commands.pop(name, None)
    return all_commands


def get_command_options(ctx) -> Dict[str, List[str]]:
    """Option flags per engine command, minus one-character ones like ``-``."""
    command_to_options: Dict[str, List[str]] = {}
    for vcs, methods in ctx.engine.get_option_map().items():
        for method, options in methods.items():
            if options:
                command_to_options[f'{vcs} {method}'] = [
                    option for option in options if len(option) > 1
                ]
    return command_to_options


def build_catalogue(ctx, instant_table: PatternTable) -> List[str]:
    all_commands = get_all_commands(ctx)
    command_to_options = get_command_options(ctx)

    instant_names = set()
    for entry in instant_table.named():
        all_commands[entry.name] = entry.matcher
        command_to_options[entry.name] = [entry.help_text] if entry.help_text else []
        instant_names.add(entry.name)

    for name in ctx.deny_list:
        all_commands.pop(name, None)

    lines = [ctx.translate('show-all-commands'), BREAK]
    for command in all_commands:
        is_instant = command in instant_names
        if is_instant:
            lines.append(BREAK)
        lines.append(command)
        for option in command_to_options.get(command, []):
            lines.append(INDENT + option)
        if is_instant:
            lines.append(BREAK)
    return lines
