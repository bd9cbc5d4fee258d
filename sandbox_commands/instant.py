"""
Instant Commands
================

Commands the interpreter resolves by itself, without routing to the
version-control engine or the level subsystems. They are checked
before any other table and a hit is always final.

    ls, cd                     canned message, no filesystem
    locale [reset]             back to the default locale
    locale <name>              switch locale (not validated here)
    show                       list the show sub-topics
    alias <n>="<expansion>"    define an alias
    unalias <n>                remove an alias
    flip                       flip the tree, then refresh it
    disableLevelInstructions   hide level instructions
    refresh                    redraw the tree
    rollup <N>                 combine the last N commands
    echo "<text>" | echo <t>   print text back
    show commands              the full help catalogue

Entries with a name (and help text) are listed by ``show commands``;
anonymous entries still match but stay hidden.

Each entry also carries an ``example`` input. PatternTable uses it at
construction to prove the entry is reachable, which is what keeps
``show commands`` from being swallowed by ``show``.
"""

from __future__ import annotations

from sandbox_commands.catalogue import BREAK, build_catalogue
from sandbox_commands.outcomes import CommandResult
from sandbox_commands.patterns import CommandPattern, PatternTable


def build_instant_commands(ctx) -> PatternTable:
    """Build the instant command table bound to ``ctx``."""

    def ls(captures):
        return CommandResult(message=ctx.translate('ls-command'))

    def cd(captures):
        return CommandResult(message=ctx.translate('cd-command'))

    def locale_reset(captures):
        default_locale = ctx.locale_store.get_default_locale()
        ctx.locale_store.set_locale(default_locale)
        return CommandResult(
            message=ctx.translate('locale-reset-command', {'locale': default_locale})
        )

    def show(captures):
        lines = [
            ctx.translate('show-command'),
            BREAK,
            'show commands',
            'show solution',
            'show goal',
        ]
        return CommandResult(message='\n'.join(lines))

    def alias(captures):
        name, expansion = captures
        ctx.aliases.define(name, expansion)
        return CommandResult(message=f'Set alias "{name}" to "{expansion}"')

    def unalias(captures):
        name = captures[0]
        ctx.aliases.remove(name)
        return CommandResult(message=f'Removed alias "{name}"')

    def locale_set(captures):
        locale = captures[0]
        ctx.locale_store.set_locale(locale)
        return CommandResult(message=ctx.translate('locale-command', {'locale': locale}))

    def flip(captures):
        # Commit the new orientation before listeners redraw
        ctx.global_state.set_flip_tree_y(not ctx.global_state.get_flip_tree_y())
        ctx.events.notify('refreshTree')
        return CommandResult(message=ctx.translate('flip-tree-command'))

    def disable_level_instructions(captures):
        ctx.global_state.disable_level_instructions()
        return CommandResult(message=ctx.intl.todo('Level instructions disabled'))

    def refresh(captures):
        ctx.events.notify('refreshTree')
        return CommandResult(message=ctx.translate('refresh-tree-command'))

    def rollup(captures):
        # Count stays a string; the listener parses it
        ctx.events.notify('rollupCommands', captures[0])
        return CommandResult(message='Commands combined!')

    def echo(captures):
        quoted, bare = captures
        return CommandResult(message=quoted if quoted is not None else bare)

    def show_commands(captures):
        return CommandResult(message='\n'.join(build_catalogue(ctx, table)))

    table = PatternTable([
        CommandPattern(r'^ls( |$)', ls, example='ls'),
        CommandPattern(r'^cd( |$)', cd, example='cd'),
        CommandPattern(
            r'^(locale|locale reset)$', locale_reset, 'locale',
            'change locale from the command line, or reset with `locale reset`',
        ),
        CommandPattern(
            r'^show$', show, 'show',
            'Run `show commands|solution|goal` to see the available commands '
            'or aspects of the current level',
        ),
        CommandPattern(
            r'^alias (\w+)="(.+)"$', alias, 'alias',
            'Run `alias` to map a certain shortcut to an expansion',
            example='alias gco="git checkout"',
        ),
        CommandPattern(
            r'^unalias (\w+)$', unalias, 'unalias', 'Opposite of `alias`',
            example='unalias gco',
        ),
        CommandPattern(r'^locale (\w+)$', locale_set, example='locale de_DE'),
        CommandPattern(
            r'^flip$', flip, 'flip',
            'flip the direction of the tree (and commit arrows)',
        ),
        CommandPattern(
            r'^disableLevelInstructions$', disable_level_instructions,
            'disableLevelInstructions', 'Disable the level instructions',
        ),
        CommandPattern(r'^refresh$', refresh, example='refresh'),
        CommandPattern(r'^rollup (\d+)$', rollup, example='rollup 3'),
        CommandPattern(
            r'^echo "(.*?)"$|^echo (.*?)$', echo, 'echo',
            'echo out a string to the terminal output',
            example='echo "hello"',
        ),
        CommandPattern(r'^show +commands$', show_commands, example='show commands'),
    ])
    return table
