"""Runs the external command that carries out an :class:`notesh.models.Invocation`.

Every function here returns the exit status to use for the whole program, which is normally the exit status of
the command it ran.
"""

from __future__ import annotations
import logging
import shlex
import subprocess
from typing import List, Optional, Sequence
from terminaltables import AsciiTable
from notesh.conf import NoteshConf
from notesh.models import Action, Error, Invocation, Mode, SearchQuery
from notesh.notes import check_parent, new_note_path, prompt_path, recent_notes
from notesh.resolver import recent_count
from notesh.tools import Tools


log = logging.getLogger(__name__)


def run(conf: NoteshConf, args: Sequence[str], **kwargs) -> subprocess.CompletedProcess:
    """Runs args in the notes root and waits for it to finish."""
    args = list(args)
    log.debug('running: %s', shlex.join(args))
    try:
        return subprocess.run(args, cwd=conf.root, **kwargs)
    except FileNotFoundError:
        raise Error(f'command not found: {args[0]}')
    except OSError as e:
        raise Error(f'cannot run {args[0]}: {e.strerror}')


def call(conf: NoteshConf, args: Sequence[str]) -> int:
    return run(conf, args).returncode


def position_args(expression: str, supported: bool) -> List[str]:
    # an unescaped slash would end the pattern and start a search offset
    escaped = expression.replace('/', '\\/')
    return [f'+/{escaped}'] if supported else []


def view_files(conf: NoteshConf, paths: Sequence[str]) -> int:
    return call(conf, [*conf.command('pager'), *conf.command('pager_options'), *paths])


def edit_files(conf: NoteshConf, paths: Sequence[str], editor: str = 'editor') -> int:
    return call(conf, [*conf.command(editor), *paths])


def launch_files(conf: NoteshConf, paths: Sequence[str]) -> int:
    return call(conf, [*conf.command('launch_cmd'), *paths])


def matching_files(conf: NoteshConf, tools: Tools, query: SearchQuery) -> (List[str], int):
    """Returns the sorted paths of files containing a match, and the search tool's exit status.

    The search tools exit with status 1 when nothing matches; that is reported as an empty list with status 0.
    """
    proc = run(conf, tools.search.files_with_matches(query), stdout=subprocess.PIPE, universal_newlines=True)
    paths = sorted({line for line in proc.stdout.splitlines() if line})
    if proc.returncode == 1 and not paths:
        return [], 0
    return paths, proc.returncode


def search_and_open(conf: NoteshConf, tools: Tools, query: SearchQuery, action: Action) -> int:
    """Finds files matching the query, then opens them all in the editor or pager."""
    paths, status = matching_files(conf, tools, query)
    if status:
        return status
    if not paths:
        print(f'No notes match: {query.expression}')
        return 0
    if action == Action.EDIT:
        args = [*conf.command('editor'), *position_args(query.expression, conf.editor_positions)]
    else:
        args = [*conf.command('pager'), *conf.command('pager_options'),
                *position_args(query.expression, conf.pager_positions)]
    return call(conf, [*args, *paths])


def recent(conf: NoteshConf, count: Optional[int] = None) -> int:
    """Prints the count most recently modified notes, or pages through all of them if count is None."""
    data = [('Modified', 'Note')]
    data.extend((mtime.strftime('%Y-%m-%d %H:%M'), path) for path, mtime in recent_notes(conf, count))
    table = AsciiTable(data).table
    if count is not None:
        print(table)
        return 0
    return run(conf, [*conf.command('pager'), *conf.command('pager_options')],
               input=table + '\n', universal_newlines=True).returncode


def new_note(conf: NoteshConf, arg: Optional[str] = None) -> int:
    path = prompt_path(conf, new_note_path(conf, arg))
    check_parent(path)
    return edit_files(conf, [path])


def dispatch(inv: Invocation, conf: NoteshConf, tools: Tools) -> int:
    """Carries out a validated invocation. See :func:`notesh.resolver.resolve`."""
    action = inv.effective_action
    tail = list(inv.tail)

    if inv.mode == Mode.NEW:
        return new_note(conf, tail[0] if tail else None)
    if inv.wants_recent:
        return recent(conf, recent_count(inv))

    if inv.mode == Mode.FILE_VIEW:
        if action == Action.EDIT:
            return edit_files(conf, tail)
        if action == Action.EDIT2:
            return edit_files(conf, tail, editor='editor2')
        if action == Action.LAUNCH:
            return launch_files(conf, tail)
        return view_files(conf, tail)

    query = inv.query(conf.command('search_args'))
    if action == Action.LIST:
        return call(conf, tools.find.list_paths(query.expression, inv.search_args))
    if action == Action.TITLES:
        return call(conf, tools.find.titles(query.expression, inv.search_args))
    if action in (Action.EDIT, Action.VIEW):
        return search_and_open(conf, tools, query, action)
    return call(conf, tools.search.grep(query))
