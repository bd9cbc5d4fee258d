"""
Routing tables for the sandbox, level and level-builder subsystems.

Each map is ``{command name: regex}``. The interpreter never runs these
commands; it turns a match into a CommandRoute for the owning
subsystem (see patterns.table_from_regex_map).

Order matters: the first match wins, so ``levels`` sits above the
more permissive ``level`` pattern.
"""

SANDBOX_EVENT = 'processSandboxCommand'
LEVEL_EVENT = 'processLevelCommand'
LEVEL_BUILDER_EVENT = 'processLevelBuilderCommand'

SANDBOX_REGEX_MAP = {
    'reset solved': r'^reset solved($|\s)',
    'help': r'^help( +general)?$|^\?$',
    'reset': r'^reset( +--forSolution)?$',
    'delay': r'^delay (\d+)$',
    'clear': r'^clear($|\s)',
    'exit level': r'^exit level($|\s)',
    'sandbox': r'^sandbox($|\s)',
    'levels': r'^levels($|\s)',
    'level': r'^level\s?([a-zA-Z0-9]*)',
    'build level': r'^build +level\s?([a-zA-Z0-9]*)( +--skipIntro)?$',
    'export tree': r'^export +tree$',
    'importTreeNow': r'^importTreeNow($|\s)',
    'importLevelNow': r'^importLevelNow($|\s)',
    'import tree': r'^import +tree$',
    'import level': r'^import +level$',
    'undo': r'^undo($|\s)',
    'share permalink': r'^share( +permalink)?$',
}

LEVEL_REGEX_MAP = {
    'help level': r'^help level$',
    'start dialog': r'^start dialog$',
    'show goal': r'^(show goal|goal|help goal)$',
    'hide goal': r'^hide goal$',
    'show solution': r'^show solution($|\s)',
    'objective': r'^(objective|assignment)$',
    'mobileAlert': r'^mobile alert($|\s)',
}

LEVEL_BUILDER_REGEX_MAP = {
    'define goal': r'^define goal$',
    'define name': r'^define name$',
    'help builder': r'^help builder$',
    'define hint': r'^define hint$',
    'define start': r'^define start$',
    'edit dialog': r'^edit dialog$',
    'show start': r'^show start$',
    'hide start': r'^hide start$',
    'define solution': r'^define solution$',
    'finish': r'^finish$',
}

# Internal-only names kept out of `show commands`
DENY_LIST = ('mobileAlert',)
