"""
Version-control engine introspection.

The interpreter only reads three tables from the engine:

    get_regex_map()     {vcs: {method: regex}}          routing
    get_option_map()    {vcs: {method: {flag: meta} | None}}   help output
    get_shortcut_map()  {vcs: {method: regex}}          "gc" → "git commit"

EngineTables is a plain holder for those tables. default_engine_tables()
builds a fresh set describing the git/hg command surface of the
sandbox so the console can run on its own.
"""

from __future__ import annotations

import re
from re import Pattern
from typing import Dict, Mapping, Optional, Union

RegexLike = Union[str, Pattern]


def _compile_nested(table: Mapping[str, Mapping[str, RegexLike]]) -> Dict[str, Dict[str, Pattern]]:
    return {
        vcs: {method: re.compile(regex) if isinstance(regex, str) else regex
              for method, regex in methods.items()}
        for vcs, methods in table.items()
    }


class EngineTables:

    def __init__(self, regex_map=None, option_map=None, shortcut_map=None):
        self._regex_map = _compile_nested(regex_map or {})
        self._option_map = {
            vcs: dict(methods) for vcs, methods in (option_map or {}).items()
        }
        self._shortcut_map = _compile_nested(shortcut_map or {})

    def get_regex_map(self) -> Dict[str, Dict[str, Pattern]]:
        return self._regex_map

    def get_option_map(self) -> Dict[str, Dict[str, Optional[Dict[str, str]]]]:
        return self._option_map

    def get_shortcut_map(self) -> Dict[str, Dict[str, Pattern]]:
        return self._shortcut_map


GIT_REGEX_MAP = {
    'commit': r'^git +commit($|\s)',
    'add': r'^git +add($|\s)',
    'tag': r'^git +tag($|\s)',
    'status': r'^git +status($|\s)',
    'checkout': r'^git +checkout($|\s)',
    'switch': r'^git +switch($|\s)',
    'rebase': r'^git +rebase($|\s)',
    'reset': r'^git +reset($|\s)',
    'branch': r'^git +branch($|\s)',
    'revert': r'^git +revert($|\s)',
    'log': r'^git +log($|\s)',
    'merge': r'^git +merge($|\s)',
    'show': r'^git +show($|\s)',
    'describe': r'^git +describe($|\s)',
    'cherry-pick': r'^git +cherry-pick($|\s)',
    'fetch': r'^git +fetch($|\s)',
    'pull': r'^git +pull($|\s)',
    'push': r'^git +push($|\s)',
    'clone': r'^git +clone *?$',
    'fakeTeamwork': r'^git +fakeTeamwork($|\s)',
}

GIT_OPTION_MAP = {
    'commit': {'--amend': 'amend the last commit', '-a': None, '-am': None, '-m': 'message'},
    'add': None,
    'tag': {'-d': None},
    'status': None,
    'checkout': {'-b': None, '-B': None, '-': None},
    'switch': {'-c': None, '--create': 'create a new branch', '-C': None, '-': None},
    'rebase': {'-i': None, '--solution-ordering': None, '--interactive-test': None,
               '--aboveAll': None, '-p': None, '--preserve-merges': None},
    'reset': {'--hard': None, '--soft': None},
    'branch': {'-d': None, '-D': None, '-f': None, '--force': None, '-a': None,
               '-r': None, '-u': None},
    'revert': None,
    'log': None,
    'merge': {'--no-ff': None, '--squash': None},
    'show': None,
    'describe': None,
    'cherry-pick': None,
    'fetch': None,
    'pull': {'--rebase': None, '--force': None},
    'push': {'--force': None},
    'clone': None,
    'fakeTeamwork': None,
}

HG_REGEX_MAP = {
    'commit': r'^hg +(commit|ci)($|\s)',
    'status': r'^hg +(status|st) *$',
    'log': r'^hg +log($|\s)',
    'bookmark': r'^hg +(bookmarks|bookmark|book)($|\s)',
    'rebase': r'^hg +rebase($|\s)',
    'update': r'^hg +(update|up)($|\s)',
}

HG_OPTION_MAP = {
    'commit': {'--amend': None, '-A': None, '-m': None},
    'status': None,
    'log': None,
    'bookmark': {'-r': None, '-f': None, '-d': None},
    'rebase': {'-d': None, '-s': None, '-b': None},
    'update': {'-r': None},
}

GIT_SHORTCUT_MAP = {
    'commit': r'^(gc|git ci)($|\s)',
    'add': r'^ga($|\s)',
    'checkout': r'^(go|git co)($|\s)',
    'rebase': r'^gr($|\s)',
    'branch': r'^(gb|git br)($|\s)',
    'status': r'^(gst|gs|git st)($|\s)',
}


def default_engine_tables() -> EngineTables:
    """Fresh tables for the sandbox git/hg command surface."""
    return EngineTables(
        regex_map={'git': GIT_REGEX_MAP, 'hg': HG_REGEX_MAP},
        option_map={'git': GIT_OPTION_MAP, 'hg': HG_OPTION_MAP},
        shortcut_map={'git': GIT_SHORTCUT_MAP},
    )
