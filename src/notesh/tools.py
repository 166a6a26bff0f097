"""Finds the external search programs and builds their command lines.

Use :func:`locate_tools` once per run; it returns a :class:`Tools` holding one backend for text search and one for
filename search.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
import os.path
import shlex
import shutil
from typing import List, Optional, Sequence, Tuple
from notesh.conf import NoteshConf
from notesh.models import Error, SearchQuery


log = logging.getLogger(__name__)

SEARCH_PROGRAMS = ('rg', 'ag')
"""Text search programs, most preferred first."""

FIND_PROGRAMS = ('fd', 'fdfind')
"""Filename search programs, most preferred first. ``fdfind`` is what Debian calls ``fd``."""


class Backend:
    """Builds argument lists for one family of search tools.

    .. attribute:: command
       :type: Tuple[str, ...]

       The program and any options that were configured along with it.
    """

    def __init__(self, command: Tuple[str, ...]):
        self.command = tuple(command)

    @property
    def name(self) -> str:
        return os.path.basename(self.command[0])

    def grep(self, query: SearchQuery) -> List[str]:
        """Command that prints matching lines."""
        raise NotImplementedError(f'{self.name} cannot search file contents')

    def files_with_matches(self, query: SearchQuery) -> List[str]:
        """Command that prints the path of each file containing a match, one per line."""
        raise NotImplementedError(f'{self.name} cannot search file contents')

    def list_paths(self, expression: Optional[str], options: Sequence[str] = ()) -> List[str]:
        """Command that prints every file whose path matches expression, or every file if it is None.

        options are extra arguments for the program, placed before the expression.
        """
        raise NotImplementedError()

    def titles(self, expression: Optional[str], options: Sequence[str] = ()) -> List[str]:
        """Like :meth:`list_paths` but only the filename is matched."""
        raise NotImplementedError()

    def __eq__(self, other):
        return type(self) == type(other) and self.command == other.command

    def __repr__(self):
        return f'{type(self).__name__}({shlex.join(self.command)!r})'


class RipgrepBackend(Backend):
    def grep(self, query: SearchQuery) -> List[str]:
        return [*self.command, *query.options, '-e', query.expression, '--', *query.paths]

    def files_with_matches(self, query: SearchQuery) -> List[str]:
        return [*self.command, *query.options, '--files-with-matches', '-e', query.expression, '--', *query.paths]

    def list_paths(self, expression: Optional[str], options: Sequence[str] = ()) -> List[str]:
        args = [*self.command, *options, '--files']
        if expression:
            # the second glob catches files inside a matching directory
            args.extend(['--iglob', f'*{expression}*', '--iglob', f'*{expression}*/**'])
        return args

    def titles(self, expression: Optional[str], options: Sequence[str] = ()) -> List[str]:
        args = [*self.command, *options, '--files']
        if expression:
            args.extend(['--iglob', f'*{expression}*'])
        return args


class SilverSearcherBackend(Backend):
    def grep(self, query: SearchQuery) -> List[str]:
        return [*self.command, *query.options, '--', query.expression, *query.paths]

    def files_with_matches(self, query: SearchQuery) -> List[str]:
        return [*self.command, *query.options, '--files-with-matches', '--', query.expression, *query.paths]

    def list_paths(self, expression: Optional[str], options: Sequence[str] = ()) -> List[str]:
        return [*self.command, *options, '-g', expression or '']

    def titles(self, expression: Optional[str], options: Sequence[str] = ()) -> List[str]:
        # ag has no way to match the filename alone
        return self.list_paths(expression, options)


class FdBackend(Backend):
    def list_paths(self, expression: Optional[str], options: Sequence[str] = ()) -> List[str]:
        args = [*self.command, *options, '--type', 'f', '--full-path']
        if expression:
            args.extend(['--', expression])
        return args

    def titles(self, expression: Optional[str], options: Sequence[str] = ()) -> List[str]:
        args = [*self.command, *options, '--type', 'f']
        if expression:
            args.extend(['--', expression])
        return args


BACKENDS = {
    'rg': RipgrepBackend,
    'ag': SilverSearcherBackend,
    'fd': FdBackend,
    'fdfind': FdBackend,
}


def backend_for(command: Tuple[str, ...]) -> Backend:
    """Wraps command in the backend matching its program name. Unknown programs are assumed to behave like rg."""
    cls = BACKENDS.get(os.path.basename(command[0]), RipgrepBackend)
    return cls(command)


def which_first(names: Tuple[str, ...]) -> Optional[str]:
    return next(filter(None, (shutil.which(name) for name in names)), None)


@dataclass(frozen=True)
class Tools:
    """The search programs chosen for this run."""

    search: Backend
    find: Backend


def locate_tools(conf: NoteshConf) -> Tools:
    """Chooses the search and filename search programs.

    A configured command is used as is. Otherwise the first program from :data:`SEARCH_PROGRAMS` found on the
    ``PATH`` is used for text search, and the first from :data:`FIND_PROGRAMS` for filename search. If no filename
    search program is found, the text search program is used for that too.

    Raises :exc:`notesh.models.Error` if no text search program can be found.
    """
    search_cmd = conf.command('search_cmd')
    if not search_cmd:
        found = which_first(SEARCH_PROGRAMS)
        if not found:
            raise Error(f'required tool not found: {" or ".join(SEARCH_PROGRAMS)}')
        search_cmd = (found,)
    search = backend_for(search_cmd)

    find_cmd = conf.command('find_cmd')
    if not find_cmd:
        found = which_first(FIND_PROGRAMS)
        find_cmd = (found,) if found else None
    find = backend_for(find_cmd) if find_cmd else search

    log.debug('using %r for search and %r for filename search', search, find)
    return Tools(search=search, find=find)
