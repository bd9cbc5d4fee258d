"""
Tests for the sandbox command interpreter.

Run with:  python -m pytest sandbox_commands -v
"""

import re

import pytest

from sandbox_commands import build_interpreter
from sandbox_commands.context import SandboxContext
from sandbox_commands.outcomes import (
    CommandProcessError,
    CommandResult,
    CommandRoute,
    CommandWarning,
    EngineError,
    GitError,
    OutcomeKind,
)
from sandbox_commands.patterns import (
    CommandPattern,
    PatternTable,
    dispatch,
    table_from_regex_map,
)
from sandbox_commands.waterfall import ParseStage


@pytest.fixture
def ctx():
    return SandboxContext()


@pytest.fixture
def interpreter(ctx):
    return build_interpreter(ctx=ctx)


def ok(captures):
    return CommandResult(message="ok")


# ============================================================
# Outcomes
# ============================================================

class TestOutcomes:
    """Tests for the outcome variants."""

    def test_result_is_not_error(self):
        assert not CommandResult(message="done").is_error

    def test_warning_is_error(self):
        assert CommandWarning(message="careful").is_error

    def test_process_error_is_routing_miss(self):
        outcome = CommandProcessError(message="x", command="x")
        assert outcome.is_error
        assert outcome.is_routing_miss

    def test_engine_error_is_not_routing_miss(self):
        outcome = EngineError(message="no such branch")
        assert outcome.is_error
        assert not outcome.is_routing_miss

    def test_git_error_alias(self):
        assert GitError is EngineError
        assert GitError(message="bad ref").kind is OutcomeKind.ENGINE_ERROR

    def test_route_kind(self):
        route = CommandRoute(event_name="processGitCommand", method="git commit")
        assert route.kind is OutcomeKind.ROUTED
        assert not route.is_error


# ============================================================
# Pattern tables and dispatch
# ============================================================

class TestPatternTable:
    """Tests for table validation and first-match dispatch."""

    def test_string_matcher_is_compiled(self):
        entry = CommandPattern(r'^ping$', ok)
        assert entry.matcher.match("ping")

    def test_first_match_wins(self):
        table = PatternTable([
            CommandPattern(r'^go (\w+)$', lambda c: CommandResult(message="first " + c[0]), example="go a"),
            CommandPattern(r'^go', lambda c: CommandResult(message="second"), example="gone"),
        ])
        assert dispatch("go north", table).message == "first north"

    def test_captures_are_positional(self):
        table = PatternTable([
            CommandPattern(r'^move (\w+) (\w+)$', lambda c: CommandResult(message="|".join(c))),
        ])
        assert dispatch("move a b", table).message == "a|b"

    def test_unmatched_group_is_none(self):
        seen = []
        table = PatternTable([
            CommandPattern(r'^x(y)?$', lambda c: seen.append(c) or CommandResult()),
        ])
        dispatch("x", table)
        assert seen == [(None,)]

    def test_no_match_is_process_error(self):
        table = PatternTable([CommandPattern(r'^ping$', ok, 'ping')])
        outcome = dispatch("pong", table)
        assert isinstance(outcome, CommandProcessError)
        assert outcome.command == "pong"

    def test_empty_table_is_process_error(self):
        assert dispatch("anything", PatternTable([])).is_routing_miss

    def test_matcher_is_anchored_at_start(self):
        table = PatternTable([CommandPattern(r'ls', ok)])
        assert dispatch("xls", table).is_routing_miss

    def test_name_collision_raises(self):
        with pytest.raises(ValueError, match="collision"):
            PatternTable([
                CommandPattern(r'^a$', ok, 'a'),
                CommandPattern(r'^aa$', ok, 'a'),
            ])

    def test_shadowed_entry_raises(self):
        with pytest.raises(ValueError, match="shadowed"):
            PatternTable([
                CommandPattern(r'^show', ok, 'show'),
                CommandPattern(r'^show +commands$', ok, example='show commands'),
            ])

    def test_specific_before_general_is_fine(self):
        table = PatternTable([
            CommandPattern(r'^show +commands$', ok, example='show commands'),
            CommandPattern(r'^show', ok, 'show'),
        ])
        assert len(table) == 2

    def test_named_entries(self):
        table = PatternTable([
            CommandPattern(r'^a$', ok, 'a', 'help a'),
            CommandPattern(r'^b$', ok),
        ])
        assert [entry.name for entry in table.named()] == ['a']

    def test_regex_map_table_routes(self):
        table = table_from_regex_map({'level': r'^level\s?(\w*)'}, 'processSandboxCommand')
        outcome = dispatch("level intro1", table)
        assert outcome.kind is OutcomeKind.ROUTED
        assert outcome.event_name == 'processSandboxCommand'
        assert outcome.method == 'level'
        assert outcome.captures == ('intro1',)


# ============================================================
# Instant commands
# ============================================================

class TestInstantCommands:
    """Tests for the locally handled commands."""

    def test_ls(self, ctx, interpreter):
        outcome = interpreter.process("ls")
        assert outcome.kind is OutcomeKind.RESULT
        assert outcome.message == ctx.translate('ls-command')

    def test_ls_with_argument(self, ctx, interpreter):
        assert interpreter.process("ls -la").message == ctx.translate('ls-command')

    def test_ls_is_not_a_prefix_match(self, interpreter):
        assert interpreter.process("lsfoo").is_routing_miss

    def test_cd(self, ctx, interpreter):
        assert interpreter.process("cd /tmp").message == ctx.translate('cd-command')

    def test_locale_set(self, ctx, interpreter):
        outcome = interpreter.process("locale de_DE")
        assert ctx.locale_store.get_locale() == "de_DE"
        assert outcome.message == ctx.translate('locale-command', {'locale': 'de_DE'})
        assert "de_DE" in outcome.message

    def test_locale_not_validated(self, ctx, interpreter):
        interpreter.process("locale xx_YY")
        assert ctx.locale_store.get_locale() == "xx_YY"

    def test_locale_reset(self, ctx, interpreter):
        interpreter.process("locale de_DE")
        outcome = interpreter.process("locale reset")
        assert ctx.locale_store.get_locale() == "en_US"
        assert outcome.message == "locale reset to default, which is en_US"

    def test_bare_locale_equals_reset(self, ctx, interpreter):
        interpreter.process("locale ru_RU")
        bare = interpreter.process("locale")
        assert ctx.locale_store.get_locale() == "en_US"
        assert bare.message == interpreter.process("locale reset").message

    def test_show(self, ctx, interpreter):
        lines = interpreter.process("show").message.split('\n')
        assert lines == [
            ctx.translate('show-command'),
            '<br/>',
            'show commands',
            'show solution',
            'show goal',
        ]

    def test_alias(self, ctx, interpreter):
        outcome = interpreter.process('alias gco="git checkout"')
        assert outcome.message == 'Set alias "gco" to "git checkout"'
        assert ctx.level_store.get_alias_map() == {'gco': 'git checkout'}

    def test_alias_overwrites(self, ctx, interpreter):
        interpreter.process('alias g="git"')
        interpreter.process('alias g="git status"')
        assert ctx.level_store.get_alias_map()['g'] == 'git status'

    def test_alias_unquoted_is_not_recognized(self, interpreter):
        assert interpreter.process('alias g=git').is_routing_miss

    def test_unalias(self, ctx, interpreter):
        interpreter.process('alias gco="git checkout"')
        outcome = interpreter.process('unalias gco')
        assert outcome.message == 'Removed alias "gco"'
        assert ctx.level_store.get_alias_map() == {}

    def test_unalias_unknown_is_success(self, interpreter):
        outcome = interpreter.process('unalias never_defined')
        assert outcome.kind is OutcomeKind.RESULT
        assert outcome.message == 'Removed alias "never_defined"'

    def test_flip_toggles(self, ctx, interpreter):
        outcome = interpreter.process("flip")
        assert ctx.global_state.get_flip_tree_y() is True
        assert outcome.message == ctx.translate('flip-tree-command')

    def test_flip_twice_restores(self, ctx, interpreter):
        interpreter.process("flip")
        interpreter.process("flip")
        assert ctx.global_state.get_flip_tree_y() is False

    def test_flip_commits_before_refresh(self, ctx, interpreter):
        observed = []
        ctx.events.on('refreshTree', lambda: observed.append(ctx.global_state.get_flip_tree_y()))
        interpreter.process("flip")
        assert observed == [True]

    def test_disable_level_instructions(self, ctx, interpreter):
        outcome = interpreter.process("disableLevelInstructions")
        assert ctx.global_state.get_level_instructions_disabled()
        assert outcome.kind is OutcomeKind.RESULT
        assert outcome.message == 'Level instructions disabled'

    def test_refresh(self, ctx, interpreter):
        fired = []
        ctx.events.on('refreshTree', lambda: fired.append(True))
        outcome = interpreter.process("refresh")
        assert fired == [True]
        assert outcome.message == ctx.translate('refresh-tree-command')

    def test_rollup_payload_is_string(self, ctx, interpreter):
        payloads = []
        ctx.events.on('rollupCommands', payloads.append)
        outcome = interpreter.process("rollup 3")
        assert payloads == ["3"]
        assert outcome.message == "Commands combined!"

    def test_rollup_needs_number(self, interpreter):
        assert interpreter.process("rollup three").is_routing_miss

    def test_echo_quoted(self, interpreter):
        assert interpreter.process('echo "hello  world"').message == "hello  world"

    def test_echo_unquoted(self, interpreter):
        assert interpreter.process('echo hello world').message == "hello world"

    def test_echo_keeps_inner_quotes(self, interpreter):
        assert interpreter.process('echo "say "hi""').message == 'say "hi"'

    def test_echo_empty_quotes(self, interpreter):
        assert interpreter.process('echo ""').message == ""

    def test_show_commands_not_swallowed_by_show(self, ctx, interpreter):
        message = interpreter.process("show   commands").message
        assert message.split('\n')[0] == ctx.translate('show-all-commands')


# ============================================================
# Aliases
# ============================================================

class TestAliases:
    """Tests for leading-token alias expansion."""

    def test_expand_leading_token(self, ctx):
        ctx.aliases.define("gco", "git checkout")
        assert ctx.aliases.expand("gco main") == "git checkout main"

    def test_expand_whole_input(self, ctx):
        ctx.aliases.define("st", "git status")
        assert ctx.aliases.expand("st") == "git status"

    def test_no_partial_token_match(self, ctx):
        ctx.aliases.define("g", "git")
        assert ctx.aliases.expand("go main") == "go main"

    def test_only_leading_token(self, ctx):
        ctx.aliases.define("main", "master")
        assert ctx.aliases.expand("git checkout main") == "git checkout main"

    def test_single_pass(self, ctx):
        ctx.aliases.define("a", "b")
        ctx.aliases.define("b", "echo nested")
        assert ctx.aliases.expand("a") == "b"

    def test_invalid_name_raises(self, ctx):
        with pytest.raises(ValueError, match="alias"):
            ctx.aliases.define("not-a-word", "x")

    def test_alias_equivalent_to_expansion(self, interpreter):
        interpreter.process('alias hi="echo hello there"')
        assert interpreter.process("hi").message == interpreter.process("echo hello there").message

    def test_alias_then_route(self, interpreter):
        interpreter.process('alias gco="git checkout"')
        outcome = interpreter.process("gco main")
        assert outcome.kind is OutcomeKind.ROUTED
        assert outcome.method == "git checkout"
        assert outcome.command == "git checkout main"

    def test_alias_with_padded_expansion(self, interpreter):
        interpreter.process('alias x=" ls "')
        outcome = interpreter.process("x")
        assert outcome.kind is OutcomeKind.RESULT
        assert outcome.message == interpreter.process(" ls ").message

    def test_contexts_are_isolated(self):
        first = build_interpreter(ctx=SandboxContext())
        second = build_interpreter(ctx=SandboxContext())
        first.process('alias x="echo one"')
        assert second.process("x").is_routing_miss


# ============================================================
# Parse waterfall: shortcuts, routing and fallback
# ============================================================

class TestWaterfall:
    """Tests for the fallback chain."""

    def test_empty_input_is_blank_result(self, interpreter):
        outcome = interpreter.process("   ")
        assert outcome.kind is OutcomeKind.RESULT
        assert outcome.message == ""

    def test_engine_command_routes(self, interpreter):
        outcome = interpreter.process("git commit -m 'first'")
        assert outcome.event_name == "processGitCommand"
        assert outcome.method == "git commit"

    def test_shortcut_expansion(self, interpreter):
        outcome = interpreter.process('gc -m "x"')
        assert outcome.method == "git commit"
        assert outcome.command == 'git commit -m "x"'

    def test_shortcut_alone(self, interpreter):
        assert interpreter.expand_shortcuts("gs") == "git status"

    def test_shortcut_needs_word_boundary(self, interpreter):
        assert interpreter.expand_shortcuts("gcx") == "gcx"

    def test_sandbox_command_routes(self, interpreter):
        outcome = interpreter.process("levels")
        assert outcome.event_name == "processSandboxCommand"
        assert outcome.method == "levels"

    def test_level_name_captured(self, interpreter):
        outcome = interpreter.process("level intro1")
        assert outcome.method == "level"
        assert outcome.captures == ("intro1",)

    def test_level_command_routes(self, interpreter):
        outcome = interpreter.process("show goal")
        assert outcome.event_name == "processLevelCommand"
        assert outcome.method == "show goal"

    def test_level_builder_command_routes(self, interpreter):
        outcome = interpreter.process("define goal")
        assert outcome.event_name == "processLevelBuilderCommand"

    def test_level_tried_before_builder(self):
        ctx = SandboxContext(
            level_regex_map={'thing': r'^thing$'},
            level_builder_regex_map={'thing': r'^thing$'},
        )
        outcome = build_interpreter(ctx=ctx).process("thing")
        assert outcome.event_name == "processLevelCommand"

    def test_instant_wins_over_tables(self):
        ctx = SandboxContext(sandbox_regex_map={'flip': r'^flip$'})
        outcome = build_interpreter(ctx=ctx).process("flip")
        assert outcome.kind is OutcomeKind.RESULT

    def test_unrecognized_command(self):
        ctx = SandboxContext(level_regex_map={}, level_builder_regex_map={})
        outcome = build_interpreter(ctx=ctx).process("bogus command xyz")
        assert outcome.is_routing_miss
        assert outcome.message == 'The command "bogus command xyz" is not supported, sorry!'

    def test_unrecognized_message_is_localized(self, interpreter):
        interpreter.process("locale de_DE")
        outcome = interpreter.process("bogus")
        assert outcome.message == 'Der Befehl "bogus" wird nicht unterstützt, tut mir leid!'

    def test_add_first(self, interpreter):
        interpreter.add_first(ParseStage(
            'custom', table_from_regex_map({'git commit': r'^git commit'}, 'customEvent'),
        ))
        assert interpreter.process("git commit").event_name == "customEvent"

    def test_add_last(self, interpreter):
        interpreter.add_last(ParseStage(
            'custom', table_from_regex_map({'dance': r'^dance$'}, 'customEvent'),
        ))
        assert interpreter.process("dance").event_name == "customEvent"

    def test_clone_is_independent(self, interpreter):
        copy = interpreter.clone()
        copy.add_last(ParseStage('custom', table_from_regex_map({'dance': r'^dance$'}, 'e')))
        assert len(copy.stages) == len(interpreter.stages) + 1
        assert interpreter.process("dance").is_routing_miss

    def test_engine_tables_are_per_context(self):
        first = SandboxContext()
        second = SandboxContext()
        first.engine.get_regex_map()['git']['dance'] = re.compile(r'^git +dance$')
        assert first.engine is not second.engine
        assert 'dance' not in second.engine.get_regex_map()['git']
        assert build_interpreter(ctx=second).process("git dance").is_routing_miss
