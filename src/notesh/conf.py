from __future__ import annotations
from dataclasses import dataclass, field, fields, replace
import os
import os.path
import shlex
from typing import FrozenSet, Mapping, Optional, Tuple
from notesh.models import Error


PROGRAM_SETTINGS = frozenset({'editor', 'editor2', 'pager', 'launch_cmd'})
"""Settings naming a program to run, which therefore cannot be empty."""

POSITIONING_PROGRAMS = frozenset({'vi', 'vim', 'nvim', 'view', 'less', 'more'})
"""Programs known to accept a ``+/pattern`` argument that opens the file at the first match."""

ENV_VARS = {
    'root': ('NOTES_DIR',),
    'search_cmd': ('NOTES_SEARCH_CMD',),
    'find_cmd': ('NOTES_FIND_CMD',),
    'search_args': ('NOTES_SEARCH_ARGS',),
    'editor': ('NOTES_EDITOR', 'EDITOR'),
    'editor2': ('NOTES_EDITOR2',),
    'pager': ('NOTES_PAGER', 'PAGER'),
    'pager_options': ('NOTES_PAGER_OPTS',),
    'launch_cmd': ('NOTES_LAUNCH_CMD',),
    'editor_positions': ('NOTES_EDITOR_POSITIONS',),
    'pager_positions': ('NOTES_PAGER_POSITIONS',),
}
"""Environment variables that override each setting. For settings with several variables, the first one set wins."""

_TRUE = {'1', 'true', 'yes', 'on'}
_FALSE = {'0', 'false', 'no', 'off'}


def parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise Error(f'Invalid value for {name}: {value!r} (expected yes or no)')


def split_setting(name: str, value: str) -> Tuple[str, ...]:
    """Splits a command or argument setting into words the way a shell would."""
    try:
        return tuple(shlex.split(value))
    except ValueError as e:
        raise Error(f'Invalid value for {name}: {value!r} ({e})')


def supports_positioning(command: str, name: str = 'command') -> bool:
    """Returns True if the program that command runs is one of :data:`POSITIONING_PROGRAMS`."""
    words = split_setting(name, command)
    return bool(words) and os.path.basename(words[0]) in POSITIONING_PROGRAMS


@dataclass(frozen=True)
class NoteshConf:
    """All the settings for one run of the tool.

    Build it with :meth:`for_user`; the result is never modified, only copied with changes.
    """

    root: str = os.path.join('~', 'notes')
    """The directory holding your notes. External commands run with this as their working directory."""

    search_cmd: str = ''
    """Text search command, e.g. ``rg`` or ``ag --smart-case``. Detected if empty."""

    find_cmd: str = ''
    """Filename search command, e.g. ``fd``. Detected if empty, falling back to the search command."""

    search_args: str = ''
    """Extra arguments passed to every text search, before any given on the command line."""

    editor: str = 'vim'
    editor2: str = 'typora'
    """A secondary editor, used by ``--edit2``. It is assumed to handle only a single file."""

    pager: str = 'less'
    pager_options: str = '-R'
    launch_cmd: str = 'grip -b'
    """Command that renders markdown files and opens them in a browser."""

    default_subdir: str = 'capture'
    """Subdirectory of the root where new notes go when no path is given."""

    default_extension: str = '.md'
    note_extensions: FrozenSet[str] = field(default_factory=lambda: frozenset({'.md', '.markdown', '.txt', '.text'}))
    vcs_dirs: FrozenSet[str] = field(default_factory=lambda: frozenset({'.git', '.hg', '.svn'}))

    editor_positions: Optional[bool] = None
    """Whether the editor accepts ``+/pattern``. If None, :meth:`standardize` decides based on the editor's name."""

    pager_positions: Optional[bool] = None
    """Whether the pager accepts ``+/pattern``. If None, :meth:`standardize` decides based on the pager's name."""

    @classmethod
    def user_config_path(cls) -> str:
        return os.path.expanduser(os.path.join('~', '.notesh.conf.py'))

    @classmethod
    def from_file(cls, path: str) -> NoteshConf:
        """Runs the Python config script at path and returns the value it assigns to ``conf``."""
        with open(path, 'r') as file:
            conf_script = file.read()
        context = {}
        exec(conf_script, context)
        if 'conf' not in context or not isinstance(context['conf'], cls):
            raise Error('You need to assign an instance of NoteshConf to the variable `conf` '
                        f'in your config file: {path}')
        return context['conf']

    @classmethod
    def for_user(cls, environ: Mapping[str, str] = None) -> NoteshConf:
        """Creates the configuration from ``~/.notesh.conf.py`` (if present) and environment variables.

        Environment variables take precedence over the config file. See :data:`ENV_VARS`.
        """
        if environ is None:
            environ = os.environ
        path = cls.user_config_path()
        conf = cls.from_file(path) if os.path.exists(path) else cls()
        return conf.with_environ(environ).standardize()

    def with_environ(self, environ: Mapping[str, str]) -> NoteshConf:
        changes = {}
        bools = {f.name for f in fields(self) if f.name.endswith('_positions')}
        for name, variables in ENV_VARS.items():
            for var in variables:
                value = environ.get(var)
                if value is None or (not value.strip() and name not in ('search_args', 'pager_options')):
                    continue
                changes[name] = parse_bool(var, value) if name in bools else value
                break
        return replace(self, **changes)

    def with_editor(self, editor: str) -> NoteshConf:
        """Returns a copy using the given primary editor, with its capabilities detected afresh."""
        return replace(self, editor=editor, editor_positions=None).standardize()

    def standardize(self) -> NoteshConf:
        editor_positions = self.editor_positions
        if editor_positions is None:
            editor_positions = supports_positioning(self.editor, 'editor')
        pager_positions = self.pager_positions
        if pager_positions is None:
            pager_positions = supports_positioning(self.pager, 'pager')
        return replace(
            self,
            root=os.path.abspath(os.path.expanduser(self.root)),
            editor_positions=editor_positions,
            pager_positions=pager_positions
        )

    def command(self, name: str) -> Tuple[str, ...]:
        """Splits the named setting (e.g. ``'pager'``) into an argument list."""
        words = split_setting(name, getattr(self, name))
        if not words and name in PROGRAM_SETTINGS:
            raise Error(f'No program configured for {name}')
        return words
